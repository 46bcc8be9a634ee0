"""Reservation Service Interfaces"""

from src.service.reservation.app.interface.i_reservation_repo import IReservationRepo
from src.service.reservation.app.interface.i_seat_ledger_repo import ISeatLedgerRepo

__all__ = ['IReservationRepo', 'ISeatLedgerRepo']
