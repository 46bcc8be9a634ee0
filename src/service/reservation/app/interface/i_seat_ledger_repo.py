"""
Seat Ledger Repository Interface

Every status mutation is a conditional bulk update (compare-and-swap on ``status``)
that returns the ids it actually changed. Callers compare that against what they asked
for to detect lost races.

A PENDING hold is stamped with the id of the reservation it is taken for, so only that
reservation can finalize or hand it back.
"""

from abc import ABC, abstractmethod
from typing import List

from uuid_utils import UUID

from src.service.reservation.domain.entity import SeatLedgerEntry


class ISeatLedgerRepo(ABC):
    @abstractmethod
    async def lock_available(
        self, *, showing_id: int, seat_ids: List[int], reservation_id: UUID
    ) -> List[int]:
        """AVAILABLE -> PENDING for the showing's entries among ``seat_ids``."""
        pass

    @abstractmethod
    async def unlock_pending(self, *, seat_ids: List[int], reservation_id: UUID) -> List[int]:
        """PENDING -> AVAILABLE for entries among ``seat_ids`` held for ``reservation_id``."""
        pass

    @abstractmethod
    async def reserve_pending(self, *, seat_ids: List[int], reservation_id: UUID) -> List[int]:
        """
        PENDING -> RESERVED for entries among ``seat_ids`` held for ``reservation_id``.

        Entries the reservation already owns as RESERVED are reported too, so repeating
        the call returns the same ids.
        """
        pass

    @abstractmethod
    async def release_by_reservation(self, *, reservation_id: UUID) -> List[int]:
        """PENDING or RESERVED -> AVAILABLE for entries stamped with ``reservation_id``."""
        pass

    @abstractmethod
    async def find_with_seats(self, *, seat_ids: List[int]) -> List[SeatLedgerEntry]:
        """Entries among ``seat_ids`` with their catalog seat populated."""
        pass

    @abstractmethod
    async def list_by_showing(self, *, showing_id: int) -> List[SeatLedgerEntry]:
        pass

    @abstractmethod
    async def bulk_create(self, *, entries: List[SeatLedgerEntry]) -> int:
        """Insert entries whose (showing, seat) pair is new; returns the inserted count."""
        pass

    @abstractmethod
    async def delete_by_showing(self, *, showing_id: int) -> int:
        pass
