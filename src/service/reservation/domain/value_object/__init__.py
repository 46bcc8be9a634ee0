"""Reservation Domain Value Objects"""

from src.service.reservation.domain.value_object.movie_snapshot import MovieSnapshot
from src.service.reservation.domain.value_object.screen_snapshot import ScreenSnapshot
from src.service.reservation.domain.value_object.seat_snapshot import SeatSnapshot
from src.service.reservation.domain.value_object.showing_snapshot import ShowingSnapshot
from src.service.reservation.domain.value_object.venue_snapshot import VenueSnapshot

__all__ = [
    'MovieSnapshot',
    'ScreenSnapshot',
    'SeatSnapshot',
    'ShowingSnapshot',
    'VenueSnapshot',
]
