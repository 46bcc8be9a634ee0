"""
Seat pricing at booking time.

Prices are read from the seat ledger as they stand when the checkout runs; pricing
rules themselves are configured elsewhere.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from src.service.reservation.domain.entity import SeatLedgerEntry


CENT = Decimal('0.01')


def to_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def resolve_seat_price(entry: SeatLedgerEntry) -> Decimal:
    """Override price if set, otherwise base price x multiplier."""
    if entry.override_price is not None:
        return to_money(entry.override_price)
    return to_money(entry.base_price * entry.price_multiplier)


def total_seating_cost(entries: Iterable[SeatLedgerEntry]) -> Decimal:
    return to_money(sum((resolve_seat_price(entry) for entry in entries), Decimal('0')))
