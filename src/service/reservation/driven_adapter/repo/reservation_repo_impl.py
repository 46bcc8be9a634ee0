"""
Reservation Repository Implementation

The snapshot is stored as a JSON document and re-validated into ShowingSnapshot on read.
"""

from contextlib import asynccontextmanager
from datetime import datetime
import uuid
from typing import AsyncContextManager, AsyncIterator, Callable

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.clock.utc_clock import as_utc
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.interface.i_reservation_repo import IReservationRepo
from src.service.reservation.domain.entity import Reservation
from src.service.reservation.domain.enum import (
    ReservationErrorCode,
    ReservationStatus,
    ReservationType,
)
from src.service.reservation.domain.value_object import ShowingSnapshot
from src.service.reservation.driven_adapter.model import ReservationModel


def _to_db_id(reservation_id: UUID) -> uuid.UUID:
    return uuid.UUID(str(reservation_id))


class ReservationRepoImpl(IReservationRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    @staticmethod
    def _to_entity(model: ReservationModel) -> Reservation:
        return Reservation(
            id=UUID(str(model.id)),
            user_id=model.user_id,
            showing_id=model.showing_id,
            ticket_count=model.ticket_count,
            price_paid=model.price_paid,
            currency=model.currency,
            reservation_type=ReservationType(model.reservation_type),
            date_reserved=as_utc(model.date_reserved),  # type: ignore[arg-type]
            expires_at=as_utc(model.expires_at),  # type: ignore[arg-type]
            snapshot=ShowingSnapshot.model_validate(model.snapshot) if model.snapshot else None,
            selected_seating=(
                list(model.selected_seating) if model.selected_seating is not None else None
            ),
            status=ReservationStatus(model.status),
            date_paid=as_utc(model.date_paid),
            date_cancelled=as_utc(model.date_cancelled),
            date_refunded=as_utc(model.date_refunded),
            date_expired=as_utc(model.date_expired),
            notes=model.notes,
        )

    @staticmethod
    def _apply(model: ReservationModel, reservation: Reservation) -> None:
        model.user_id = reservation.user_id
        model.showing_id = reservation.showing_id
        model.ticket_count = reservation.ticket_count
        model.price_paid = reservation.price_paid
        model.currency = reservation.currency
        model.status = reservation.status.value
        model.reservation_type = reservation.reservation_type.value
        model.selected_seating = reservation.selected_seating
        model.snapshot = reservation.snapshot.model_dump(mode='json')  # type: ignore[union-attr]
        model.date_reserved = reservation.date_reserved
        model.expires_at = reservation.expires_at
        model.date_paid = reservation.date_paid
        model.date_cancelled = reservation.date_cancelled
        model.date_refunded = reservation.date_refunded
        model.date_expired = reservation.date_expired
        model.notes = reservation.notes

    @Logger.io
    async def get_by_id(self, *, reservation_id: UUID) -> Reservation | None:
        async with self._get_session() as session:
            model = await session.get(ReservationModel, _to_db_id(reservation_id))
            return self._to_entity(model) if model else None

    @Logger.io
    async def create(self, *, reservation: Reservation) -> Reservation:
        async with self._get_session() as session:
            model = ReservationModel(id=_to_db_id(reservation.id))
            self._apply(model, reservation)
            session.add(model)
            await session.commit()
            return self._to_entity(model)

    @Logger.io
    async def update(self, *, reservation: Reservation) -> Reservation:
        async with self._get_session() as session:
            model = await session.get(ReservationModel, _to_db_id(reservation.id))
            if model is None:
                raise NotFoundError(
                    'Reservation not found.',
                    error_code=ReservationErrorCode.RESERVATION_NOT_FOUND,
                )
            self._apply(model, reservation)
            await session.commit()
            return self._to_entity(model)

    @Logger.io
    async def sum_committed_tickets(self, *, showing_id: int, now: datetime) -> int:
        async with self._get_session() as session:
            stmt = select(func.coalesce(func.sum(ReservationModel.ticket_count), 0)).where(
                ReservationModel.showing_id == showing_id,
                or_(
                    ReservationModel.status == ReservationStatus.PAID.value,
                    and_(
                        ReservationModel.status == ReservationStatus.RESERVED.value,
                        ReservationModel.expires_at > now,
                    ),
                ),
            )
            return int((await session.execute(stmt)).scalar_one())
