from typing import Annotated, Optional
import zoneinfo

from pydantic import BaseModel, StringConstraints, field_validator

from src.service.reservation.domain.value_object.snapshot_types import (
    SNAPSHOT_MODEL_CONFIG,
    CountryCode,
)


class VenueSnapshot(BaseModel):
    """Frozen copy of the theatre a showing plays at."""

    model_config = SNAPSHOT_MODEL_CONFIG

    theatre_id: int
    name: Annotated[str, StringConstraints(min_length=1, max_length=255)]
    street: Optional[Annotated[str, StringConstraints(max_length=2000)]] = None
    city: Annotated[str, StringConstraints(min_length=1, max_length=500)]
    state: Optional[Annotated[str, StringConstraints(max_length=500)]] = None
    country: CountryCode
    postcode: Optional[Annotated[str, StringConstraints(max_length=20)]] = None
    timezone: str

    @field_validator('timezone')
    @classmethod
    def timezone_must_resolve(cls, v: str) -> str:
        try:
            zoneinfo.ZoneInfo(v)
        except (zoneinfo.ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f'Unknown IANA timezone: {v}') from e
        return v
