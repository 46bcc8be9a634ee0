from enum import StrEnum


class ReservationType(StrEnum):
    GENERAL_ADMISSION = 'GENERAL_ADMISSION'
    RESERVED_SEATS = 'RESERVED_SEATS'
