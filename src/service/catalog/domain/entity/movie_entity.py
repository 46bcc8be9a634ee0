from datetime import date
from typing import List, Optional

import attrs


@attrs.define
class Movie:
    id: int
    title: str
    runtime: int  # minutes
    country: str  # ISO 3166-1 alpha-2
    genres: List[str] = attrs.field(factory=list)
    original_title: Optional[str] = None
    tagline: Optional[str] = None
    poster_url: Optional[str] = None
    release_date: Optional[date] = None
