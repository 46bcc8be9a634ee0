"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.reservation.app.command import (
    cancel_reservation_use_case,
    complete_checkout_use_case,
    expire_reservation_use_case,
    mark_reservation_paid_use_case,
    reserve_tickets_use_case,
    showing_seat_ledger_use_case,
)
from src.service.reservation.app.query import get_reservation_use_case


WIRE_MODULES: list[ModuleType] = [
    reserve_tickets_use_case,
    complete_checkout_use_case,
    cancel_reservation_use_case,
    expire_reservation_use_case,
    mark_reservation_paid_use_case,
    showing_seat_ledger_use_case,
    get_reservation_use_case,
]
