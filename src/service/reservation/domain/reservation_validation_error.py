from src.platform.exception.exceptions import DomainError
from src.service.reservation.domain.enum import ReservationErrorCode


class ReservationValidationError(DomainError):
    """A reservation write broke a lifecycle invariant; ``errors`` maps field -> reason."""

    def __init__(self, errors: dict[str, str]) -> None:
        fields = ', '.join(sorted(errors))
        super().__init__(
            f'Reservation failed validation: {fields}',
            422,
            error_code=ReservationErrorCode.RESERVATION_INVALID,
        )
        self.errors = errors
        self.details = errors
