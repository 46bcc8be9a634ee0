from abc import ABC, abstractmethod
from datetime import datetime

from uuid_utils import UUID

from src.service.reservation.domain.entity import Reservation


class IReservationRepo(ABC):
    """
    Reservation persistence.

    Only ReservationLifecycleService calls ``create``/``update``; everything else reads.
    """

    @abstractmethod
    async def get_by_id(self, *, reservation_id: UUID) -> Reservation | None:
        pass

    @abstractmethod
    async def create(self, *, reservation: Reservation) -> Reservation:
        pass

    @abstractmethod
    async def update(self, *, reservation: Reservation) -> Reservation:
        pass

    @abstractmethod
    async def sum_committed_tickets(self, *, showing_id: int, now: datetime) -> int:
        """Tickets held by PAID reservations plus RESERVED ones that have not expired."""
        pass
