"""Reservation Domain Entities"""

from src.service.reservation.domain.entity.reservation_entity import Reservation
from src.service.reservation.domain.entity.seat_ledger_entry_entity import SeatLedgerEntry

__all__ = ['Reservation', 'SeatLedgerEntry']
