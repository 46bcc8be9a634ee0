from typing import Optional

import attrs


@attrs.define
class Theatre:
    """A cinema venue."""

    id: int
    name: str
    city: str
    country: str  # ISO 3166-1 alpha-2
    timezone: str  # IANA name, e.g. 'Europe/London'
    street: Optional[str] = None
    state: Optional[str] = None
    postcode: Optional[str] = None
