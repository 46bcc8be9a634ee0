"""
Reservation Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.reservation.driven_adapter.model.reservation_model import ReservationModel
from src.service.reservation.driven_adapter.model.seat_ledger_model import SeatLedgerModel

__all__ = ['ReservationModel', 'SeatLedgerModel']
