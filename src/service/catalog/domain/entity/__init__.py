"""Catalog read models consumed by the reservation engine."""

from src.service.catalog.domain.entity.movie_entity import Movie
from src.service.catalog.domain.entity.screen_entity import Screen
from src.service.catalog.domain.entity.seat_entity import Seat
from src.service.catalog.domain.entity.showing_entity import Showing
from src.service.catalog.domain.entity.theatre_entity import Theatre

__all__ = ['Movie', 'Screen', 'Seat', 'Showing', 'Theatre']
