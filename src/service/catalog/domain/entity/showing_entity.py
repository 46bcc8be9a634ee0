from datetime import datetime
from decimal import Decimal
from typing import List, Optional

import attrs

from src.service.catalog.domain.enum.showing_status import ShowingStatus


@attrs.define
class Showing:
    """A scheduled screening of a movie on one screen."""

    id: int
    movie_id: int
    theatre_id: int
    screen_id: int
    start_time: datetime
    ticket_price: Decimal
    language: str
    subtitle_languages: List[str] = attrs.field(factory=list)
    end_time: Optional[datetime] = None
    is_special_event: bool = False
    status: ShowingStatus = ShowingStatus.SCHEDULED
