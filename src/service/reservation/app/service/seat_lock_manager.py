"""
Seat Lock Manager

Gives a checkout request a temporary, exclusive claim on seat ledger entries and later
finalizes or releases it. There is no in-process lock: the conditional bulk updates of
ISeatLedgerRepo are the compare-and-swap, and the store decides who saw AVAILABLE first.

Every hold is stamped with the reservation it is taken for, and every release is
conditioned on that stamp, so one reservation can never hand back another one's seats.
The flip and its compensation are two separate statements. A crash between them leaves
PENDING holds behind; they are not reclaimed by a timer.
"""

from typing import List

from uuid_utils import UUID

from src.platform.exception.exceptions import ConflictError, DocumentNotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.reservation.app.interface.i_reservation_repo import IReservationRepo
from src.service.reservation.app.interface.i_seat_ledger_repo import ISeatLedgerRepo
from src.service.reservation.app.service.reservation_guard import fetch_reservation_or_throw
from src.service.reservation.app.service.reservation_lifecycle_service import (
    ReservationLifecycleService,
)
from src.service.reservation.domain.entity import Reservation, SeatLedgerEntry
from src.service.reservation.domain.enum import ReservationErrorCode, ReservationStatus


SEAT_RESERVED_MESSAGE = 'Seat(s) already reserved.'


def seat_reserved_error() -> ConflictError:
    return ConflictError(SEAT_RESERVED_MESSAGE, error_code=ReservationErrorCode.SEAT_RESERVED)


class SeatLockManager:
    def __init__(
        self,
        *,
        seat_ledger_repo: ISeatLedgerRepo,
        reservation_repo: IReservationRepo,
        catalog_query_repo: ICatalogQueryRepo,
        lifecycle_service: ReservationLifecycleService,
    ) -> None:
        self.seat_ledger_repo = seat_ledger_repo
        self.reservation_repo = reservation_repo
        self.catalog_query_repo = catalog_query_repo
        self.lifecycle_service = lifecycle_service

    @Logger.io
    async def acquire(
        self, *, showing_id: int, seat_ids: List[int], reservation_id: UUID
    ) -> List[SeatLedgerEntry]:
        """
        AVAILABLE -> PENDING for every requested entry, all or nothing, held for
        ``reservation_id``.

        On a short count only the entries this call flipped are reverted, so a
        concurrent winner's holds are never touched.

        Raises:
            ConflictError: SEAT_RESERVED when any requested entry was not AVAILABLE
        """
        requested = list(dict.fromkeys(seat_ids))
        locked_ids = await self.seat_ledger_repo.lock_available(
            showing_id=showing_id, seat_ids=requested, reservation_id=reservation_id
        )

        if len(locked_ids) < len(requested):
            if locked_ids:
                await self.seat_ledger_repo.unlock_pending(
                    seat_ids=locked_ids, reservation_id=reservation_id
                )
            Logger.base.info(
                f'🔒 [SEAT-LOCK] Lost race on showing {showing_id}: '
                f'locked {len(locked_ids)}/{len(requested)}, rolled back {locked_ids}'
            )
            raise seat_reserved_error()

        entries = await self.seat_ledger_repo.find_with_seats(seat_ids=requested)
        Logger.base.info(f'🔒 [SEAT-LOCK] Showing {showing_id}: held {requested}')
        return entries

    @Logger.io
    async def abandon(self, *, reservation_id: UUID, seat_ids: List[int]) -> None:
        """Hand back ``acquire`` holds when checkout fails before a reservation exists."""
        if not seat_ids:
            return
        released = await self.seat_ledger_repo.unlock_pending(
            seat_ids=seat_ids, reservation_id=reservation_id
        )
        Logger.base.info(f'↩️ [SEAT-LOCK] Abandoned holds {released}')

    @Logger.io
    async def finalize(self, *, reservation: Reservation) -> None:
        """
        PENDING -> RESERVED for the reservation's held seats. Idempotent: seats the
        reservation already holds as RESERVED count as finalized.

        If any seat is no longer PENDING the reservation is marked INVALID and every
        entry already stamped with it goes back to AVAILABLE.

        Raises:
            ConflictError: SEAT_RESERVED on a short count
        """
        if not reservation.is_reserved_seating:
            return

        seat_ids = reservation.selected_seating or []
        reserved_ids = await self.seat_ledger_repo.reserve_pending(
            seat_ids=seat_ids, reservation_id=reservation.id
        )
        if len(reserved_ids) == len(seat_ids):
            Logger.base.info(
                f'✅ [SEAT-LOCK] Reservation {reservation.id}: seats {seat_ids} reserved'
            )
            return

        released = await self.seat_ledger_repo.release_by_reservation(reservation_id=reservation.id)
        await self.lifecycle_service.persist_transition(
            reservation=reservation.mark_as_invalid(note=SEAT_RESERVED_MESSAGE)
        )
        Logger.base.warning(
            f'⚠️ [SEAT-LOCK] Reservation {reservation.id} invalidated: '
            f'finalized {len(reserved_ids)}/{len(seat_ids)}, released {released}'
        )
        raise seat_reserved_error()

    @Logger.io
    async def release(self, *, reservation_id: UUID) -> None:
        """
        Return a reservation's seats to AVAILABLE. Idempotent.

        No-op for general admission, for reservations outside RESERVED/PAID and for
        showings that can no longer sell the seats (sold out, completed, cancelled).

        Raises:
            NotFoundError: RESERVATION_NOT_FOUND
            DocumentNotFoundError: the reservation's showing is gone
        """
        reservation = await fetch_reservation_or_throw(
            reservation_repo=self.reservation_repo, reservation_id=reservation_id
        )
        if not reservation.is_reserved_seating:
            return
        if reservation.status not in (ReservationStatus.RESERVED, ReservationStatus.PAID):
            return

        showing = await self.catalog_query_repo.get_showing(showing_id=reservation.showing_id)
        if showing is None:
            raise DocumentNotFoundError(f'Showing {reservation.showing_id} not found.')
        if not showing.status.is_releasable:
            Logger.base.info(
                f'⏭️ [SEAT-LOCK] Showing {showing.id} is {showing.status}; '
                f'seats of {reservation_id} stay reserved'
            )
            return

        # Finalized seats and holds never finalized are both stamped with the reservation
        released = await self.seat_ledger_repo.release_by_reservation(reservation_id=reservation_id)
        Logger.base.info(f'🔓 [SEAT-LOCK] Reservation {reservation_id}: released {released}')
