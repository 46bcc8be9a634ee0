"""
Catalog Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.catalog.driven_adapter.model.movie_model import MovieModel
from src.service.catalog.driven_adapter.model.screen_model import ScreenModel
from src.service.catalog.driven_adapter.model.seat_model import SeatModel
from src.service.catalog.driven_adapter.model.showing_model import ShowingModel
from src.service.catalog.driven_adapter.model.theatre_model import TheatreModel

__all__ = [
    'MovieModel',
    'ScreenModel',
    'SeatModel',
    'ShowingModel',
    'TheatreModel',
]
