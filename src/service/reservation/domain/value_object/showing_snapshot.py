"""
Point-in-time copy of everything a reservation refers to.

Embedded into the reservation once, at creation, and never written again: later edits
to the live movie/venue/screen/seat records do not reach it.
"""

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, Field, StringConstraints, model_validator

from src.service.reservation.domain.enum import ReservationType
from src.service.reservation.domain.value_object.movie_snapshot import MovieSnapshot
from src.service.reservation.domain.value_object.screen_snapshot import ScreenSnapshot
from src.service.reservation.domain.value_object.seat_snapshot import SeatSnapshot
from src.service.reservation.domain.value_object.snapshot_types import (
    SNAPSHOT_MODEL_CONFIG,
    PositiveMoney,
)
from src.service.reservation.domain.value_object.venue_snapshot import VenueSnapshot


class ShowingSnapshot(BaseModel):
    model_config = SNAPSHOT_MODEL_CONFIG

    showing_id: int
    movie: MovieSnapshot
    venue: VenueSnapshot
    screen: ScreenSnapshot
    selected_seats: Optional[List[SeatSnapshot]] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    language: Annotated[str, StringConstraints(min_length=1, max_length=10)]
    subtitle_languages: List[Annotated[str, StringConstraints(min_length=1)]] = Field(
        min_length=1
    )
    is_special_event: bool = False
    reservation_type: ReservationType
    ticket_count: int = Field(ge=1)
    price_paid: PositiveMoney

    @model_validator(mode='after')
    def check_shape(self) -> 'ShowingSnapshot':
        if self.end_time is not None and self.end_time <= self.start_time:
            raise ValueError('end_time must be later than start_time')

        if self.reservation_type == ReservationType.GENERAL_ADMISSION:
            if self.selected_seats is not None:
                raise ValueError('selected_seats must be absent for general admission')
        elif not self.selected_seats:
            raise ValueError('selected_seats is required for reserved seating')
        elif len(self.selected_seats) != self.ticket_count:
            raise ValueError('ticket_count must match the number of selected seats')
        return self
