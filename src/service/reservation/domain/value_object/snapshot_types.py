"""Constrained field types shared by the snapshot value objects."""

from decimal import Decimal
from typing import Annotated

from pydantic import ConfigDict, Field, StringConstraints


SNAPSHOT_MODEL_CONFIG = ConfigDict(frozen=True, extra='forbid', str_strip_whitespace=True)

CountryCode = Annotated[str, StringConstraints(pattern=r'^[A-Z]{2}$')]
PositiveMoney = Annotated[Decimal, Field(gt=0, decimal_places=2)]
