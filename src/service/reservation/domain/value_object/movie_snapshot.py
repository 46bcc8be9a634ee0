from datetime import date
from typing import Annotated, List, Optional

from pydantic import BaseModel, Field, StringConstraints

from src.service.reservation.domain.value_object.snapshot_types import (
    SNAPSHOT_MODEL_CONFIG,
    CountryCode,
)


class MovieSnapshot(BaseModel):
    model_config = SNAPSHOT_MODEL_CONFIG

    movie_id: int
    title: Annotated[str, StringConstraints(min_length=1, max_length=250)]
    original_title: Optional[Annotated[str, StringConstraints(max_length=250)]] = None
    tagline: Optional[Annotated[str, StringConstraints(max_length=100)]] = None
    poster_url: Optional[str] = None
    release_date: Optional[date] = None
    genres: List[Annotated[str, StringConstraints(min_length=1, max_length=150)]] = []
    runtime: int = Field(gt=0, le=500)  # minutes
    country: CountryCode
