"""Reservation Application DTOs"""

from src.service.reservation.app.dto.checkout_input import (
    CheckoutInput,
    GeneralAdmissionCheckout,
    ReservedSeatsCheckout,
    checkout_input_adapter,
)

__all__ = [
    'CheckoutInput',
    'GeneralAdmissionCheckout',
    'ReservedSeatsCheckout',
    'checkout_input_adapter',
]
