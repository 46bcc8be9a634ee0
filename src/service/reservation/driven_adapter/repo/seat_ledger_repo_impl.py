"""
Seat Ledger Repository Implementation

Status changes are single ``UPDATE ... WHERE status = <expected> RETURNING id`` statements.
Concurrent callers racing for the same row are serialized by the database: only the
first sees the expected status, the rest get the row left out of RETURNING. Holds and
reservations share the ``reservation_id`` stamp, and every release is conditioned on it.
"""

from contextlib import asynccontextmanager
import uuid
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional

from opentelemetry import trace
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.catalog.driven_adapter.model import SeatModel
from src.service.catalog.driven_adapter.repo.catalog_query_repo_impl import CatalogQueryRepoImpl
from src.service.reservation.app.interface.i_seat_ledger_repo import ISeatLedgerRepo
from src.service.reservation.domain.entity import SeatLedgerEntry
from src.service.reservation.domain.enum import SeatLedgerStatus
from src.service.reservation.driven_adapter.model import SeatLedgerModel


_HELD = (SeatLedgerStatus.PENDING.value, SeatLedgerStatus.RESERVED.value)


def _to_db_id(reservation_id: UUID) -> uuid.UUID:
    return uuid.UUID(str(reservation_id))


class SeatLedgerRepoImpl(ISeatLedgerRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory
        self.tracer = trace.get_tracer(__name__)

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    @staticmethod
    def _to_entity(model: SeatLedgerModel, seat: Optional[SeatModel] = None) -> SeatLedgerEntry:
        return SeatLedgerEntry(
            id=model.id,
            showing_id=model.showing_id,
            seat_id=model.seat_id,
            base_price=model.base_price,
            price_multiplier=model.price_multiplier,
            override_price=model.override_price,
            status=SeatLedgerStatus(model.status),
            reservation_id=UUID(str(model.reservation_id)) if model.reservation_id else None,
            seat=CatalogQueryRepoImpl.to_seat(seat) if seat is not None else None,
        )

    async def _compare_and_swap(self, *conditions, **values) -> List[int]:
        stmt = (
            update(SeatLedgerModel)
            .where(*conditions)
            .values(**values)
            .returning(SeatLedgerModel.id)
            .execution_options(synchronize_session=False)
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            changed = sorted(result.scalars().all())
            await session.commit()
            return changed

    @Logger.io
    async def lock_available(
        self, *, showing_id: int, seat_ids: List[int], reservation_id: UUID
    ) -> List[int]:
        if not seat_ids:
            return []
        with self.tracer.start_as_current_span(
            'repo.seat_ledger.lock_available',
            attributes={'showing.id': showing_id, 'seat.count': len(seat_ids)},
        ):
            return await self._compare_and_swap(
                SeatLedgerModel.showing_id == showing_id,
                SeatLedgerModel.id.in_(seat_ids),
                SeatLedgerModel.status == SeatLedgerStatus.AVAILABLE.value,
                status=SeatLedgerStatus.PENDING.value,
                reservation_id=_to_db_id(reservation_id),
            )

    @Logger.io
    async def unlock_pending(self, *, seat_ids: List[int], reservation_id: UUID) -> List[int]:
        if not seat_ids:
            return []
        return await self._compare_and_swap(
            SeatLedgerModel.id.in_(seat_ids),
            SeatLedgerModel.reservation_id == _to_db_id(reservation_id),
            SeatLedgerModel.status == SeatLedgerStatus.PENDING.value,
            status=SeatLedgerStatus.AVAILABLE.value,
            reservation_id=None,
        )

    @Logger.io
    async def reserve_pending(self, *, seat_ids: List[int], reservation_id: UUID) -> List[int]:
        if not seat_ids:
            return []
        with self.tracer.start_as_current_span(
            'repo.seat_ledger.reserve_pending',
            attributes={'reservation.id': str(reservation_id), 'seat.count': len(seat_ids)},
        ):
            # RESERVED rows already owned by this reservation match too: a retry is a no-op
            return await self._compare_and_swap(
                SeatLedgerModel.id.in_(seat_ids),
                SeatLedgerModel.reservation_id == _to_db_id(reservation_id),
                SeatLedgerModel.status.in_(_HELD),
                status=SeatLedgerStatus.RESERVED.value,
            )

    @Logger.io
    async def release_by_reservation(self, *, reservation_id: UUID) -> List[int]:
        return await self._compare_and_swap(
            SeatLedgerModel.reservation_id == _to_db_id(reservation_id),
            SeatLedgerModel.status.in_(_HELD),
            status=SeatLedgerStatus.AVAILABLE.value,
            reservation_id=None,
        )

    @Logger.io
    async def find_with_seats(self, *, seat_ids: List[int]) -> List[SeatLedgerEntry]:
        if not seat_ids:
            return []
        async with self._get_session() as session:
            stmt = (
                select(SeatLedgerModel, SeatModel)
                .join(SeatModel, SeatModel.id == SeatLedgerModel.seat_id)
                .where(SeatLedgerModel.id.in_(seat_ids))
                .order_by(SeatLedgerModel.id)
            )
            result = await session.execute(stmt)
            return [self._to_entity(entry, seat) for entry, seat in result.all()]

    @Logger.io
    async def list_by_showing(self, *, showing_id: int) -> List[SeatLedgerEntry]:
        async with self._get_session() as session:
            stmt = (
                select(SeatLedgerModel)
                .where(SeatLedgerModel.showing_id == showing_id)
                .order_by(SeatLedgerModel.id)
            )
            result = await session.execute(stmt)
            return [self._to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def bulk_create(self, *, entries: List[SeatLedgerEntry]) -> int:
        if not entries:
            return 0
        showing_ids = {entry.showing_id for entry in entries}
        async with self._get_session() as session:
            existing_stmt = select(SeatLedgerModel.showing_id, SeatLedgerModel.seat_id).where(
                SeatLedgerModel.showing_id.in_(showing_ids)
            )
            existing = {tuple(row) for row in (await session.execute(existing_stmt)).all()}

            new_models = []
            for entry in entries:
                key = (entry.showing_id, entry.seat_id)
                if key in existing:
                    continue
                existing.add(key)
                new_models.append(
                    SeatLedgerModel(
                        showing_id=entry.showing_id,
                        seat_id=entry.seat_id,
                        base_price=entry.base_price,
                        price_multiplier=entry.price_multiplier,
                        override_price=entry.override_price,
                        status=entry.status.value,
                    )
                )

            session.add_all(new_models)
            await session.commit()
            return len(new_models)

    @Logger.io
    async def delete_by_showing(self, *, showing_id: int) -> int:
        async with self._get_session() as session:
            result = await session.execute(
                delete(SeatLedgerModel)
                .where(SeatLedgerModel.showing_id == showing_id)
                .returning(SeatLedgerModel.id)
                .execution_options(synchronize_session=False)
            )
            deleted = len(result.scalars().all())
            await session.commit()
            return deleted
