"""Catalog Domain Enums"""

from src.service.catalog.domain.enum.screen_type import ScreenType
from src.service.catalog.domain.enum.seat_type import SeatLayoutType, SeatType
from src.service.catalog.domain.enum.showing_status import ShowingStatus

__all__ = ['ScreenType', 'SeatLayoutType', 'SeatType', 'ShowingStatus']
