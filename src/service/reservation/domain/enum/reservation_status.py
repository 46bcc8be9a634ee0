from enum import StrEnum


class ReservationStatus(StrEnum):
    RESERVED = 'RESERVED'
    PAID = 'PAID'
    CANCELLED = 'CANCELLED'
    REFUNDED = 'REFUNDED'
    EXPIRED = 'EXPIRED'
    INVALID = 'INVALID'  # seat finalization lost a race; terminal
