"""
Stable error codes surfaced to checkout/cancel callers alongside the HTTP status.
"""

from enum import StrEnum


class ReservationErrorCode(StrEnum):
    SEAT_RESERVED = 'SEAT_RESERVED'
    SCREEN_FULL = 'SCREEN_FULL'
    INVALID_RESERVATION_TYPE = 'INVALID_RESERVATION_TYPE'
    INVALID_RESERVATION_STATUS = 'INVALID_RESERVATION_STATUS'
    RESERVATION_EXPIRED = 'RESERVATION_EXPIRED'
    RESERVATION_NOT_FOUND = 'RESERVATION_NOT_FOUND'
    RESERVATION_INVALID = 'RESERVATION_INVALID'
    SHOWING_NOT_FOUND = 'SHOWING_NOT_FOUND'
    UNAUTHORIZED = 'UNAUTHORIZED'
