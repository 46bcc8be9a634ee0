from enum import StrEnum


class SeatLedgerStatus(StrEnum):
    AVAILABLE = 'AVAILABLE'
    PENDING = 'PENDING'  # temporary checkout hold
    RESERVED = 'RESERVED'  # bound to a reservation
    UNAVAILABLE = 'UNAVAILABLE'
