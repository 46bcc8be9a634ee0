"""
Caller identity.

Authentication happens at the gateway, which forwards the authenticated user id in the
``X-User-Id`` header. Ownership checks in the use cases compare against this value.
"""

from typing import Annotated

from fastapi import Header


async def get_current_user_id(
    x_user_id: Annotated[int, Header(alias='X-User-Id', gt=0)],
) -> int:
    return x_user_id
