"""Reservation Domain Enums"""

from src.service.reservation.domain.enum.reservation_error_code import ReservationErrorCode
from src.service.reservation.domain.enum.reservation_status import ReservationStatus
from src.service.reservation.domain.enum.reservation_type import ReservationType
from src.service.reservation.domain.enum.seat_ledger_status import SeatLedgerStatus

__all__ = ['ReservationErrorCode', 'ReservationStatus', 'ReservationType', 'SeatLedgerStatus']
