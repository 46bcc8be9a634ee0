from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import uuid_utils
from uuid_utils import UUID

from src.platform.clock.utc_clock import future_utc, utc_now
from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.catalog.domain.entity import Showing
from src.service.reservation.app.dto.checkout_input import (
    CheckoutInput,
    GeneralAdmissionCheckout,
    ReservedSeatsCheckout,
)
from src.service.reservation.app.service.reservation_lifecycle_service import (
    ReservationLifecycleService,
)
from src.service.reservation.app.service.seat_availability_checker import (
    SeatAvailabilityChecker,
)
from src.service.reservation.app.service.seat_lock_manager import SeatLockManager
from src.service.reservation.app.service.snapshot_builder import SnapshotBuilder
from src.service.reservation.domain.entity import Reservation
from src.service.reservation.domain.enum import ReservationErrorCode, ReservationType
from src.service.reservation.domain.seat_pricing import to_money, total_seating_cost


class ReserveTicketsUseCase:
    """
    Checkout entry point: turns a checkout request into a RESERVED reservation.

    Flow:
    1. Resolve the showing (ticket price, screen)
    2. General admission: capacity check. Reserved seating: CAS-lock the seats
    3. Price the tickets
    4. Freeze the snapshot
    5. Persist through ReservationLifecycleService

    Seats stay PENDING afterwards; CompleteCheckoutUseCase finalizes them. If anything
    fails after the seats were locked, the holds are handed back before re-raising.
    """

    def __init__(
        self,
        *,
        catalog_query_repo: ICatalogQueryRepo,
        availability_checker: SeatAvailabilityChecker,
        lock_manager: SeatLockManager,
        snapshot_builder: SnapshotBuilder,
        lifecycle_service: ReservationLifecycleService,
    ) -> None:
        self.catalog_query_repo = catalog_query_repo
        self.availability_checker = availability_checker
        self.lock_manager = lock_manager
        self.snapshot_builder = snapshot_builder
        self.lifecycle_service = lifecycle_service
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        catalog_query_repo: ICatalogQueryRepo = Depends(Provide[Container.catalog_query_repo]),
        availability_checker: SeatAvailabilityChecker = Depends(
            Provide[Container.seat_availability_checker]
        ),
        lock_manager: SeatLockManager = Depends(Provide[Container.seat_lock_manager]),
        snapshot_builder: SnapshotBuilder = Depends(Provide[Container.snapshot_builder]),
        lifecycle_service: ReservationLifecycleService = Depends(
            Provide[Container.reservation_lifecycle_service]
        ),
    ) -> Self:
        return cls(
            catalog_query_repo=catalog_query_repo,
            availability_checker=availability_checker,
            lock_manager=lock_manager,
            snapshot_builder=snapshot_builder,
            lifecycle_service=lifecycle_service,
        )

    @Logger.io
    async def reserve_tickets(self, *, user_id: int, checkout: CheckoutInput) -> Reservation:
        """
        Raises:
            NotFoundError: showing missing
            ConflictError: SCREEN_FULL, SEAT_RESERVED or INVALID_RESERVATION_TYPE
            ReservationValidationError: the assembled reservation breaks a lifecycle rule
        """
        now = utc_now()
        reservation_id = uuid_utils.uuid7()
        with self.tracer.start_as_current_span(
            'use_case.reserve_tickets',
            attributes={
                'user.id': user_id,
                'showing.id': checkout.showing_id,
                'reservation.type': str(checkout.reservation_type),
            },
        ):
            showing = await self.catalog_query_repo.get_showing(showing_id=checkout.showing_id)
            if showing is None:
                raise NotFoundError(
                    'Showing not found.', error_code=ReservationErrorCode.SHOWING_NOT_FOUND
                )

            if isinstance(checkout, GeneralAdmissionCheckout):
                price_paid = await self._price_general_admission(showing, checkout)
                return await self._create(
                    reservation_id=reservation_id,
                    user_id=user_id,
                    checkout=checkout,
                    price_paid=price_paid,
                    now=now,
                )

            if isinstance(checkout, ReservedSeatsCheckout):
                entries = await self.lock_manager.acquire(
                    showing_id=showing.id,
                    seat_ids=checkout.selected_seating,
                    reservation_id=reservation_id,
                )
                try:
                    return await self._create(
                        reservation_id=reservation_id,
                        user_id=user_id,
                        checkout=checkout,
                        price_paid=total_seating_cost(entries),
                        selected_seating=checkout.selected_seating,
                        now=now,
                    )
                except Exception:
                    await self.lock_manager.abandon(
                        reservation_id=reservation_id, seat_ids=checkout.selected_seating
                    )
                    raise

            raise ConflictError(
                'Invalid reservation type.',
                error_code=ReservationErrorCode.INVALID_RESERVATION_TYPE,
            )

    async def _price_general_admission(
        self, showing: Showing, checkout: GeneralAdmissionCheckout
    ) -> Decimal:
        has_capacity = await self.availability_checker.check_capacity(
            showing_id=showing.id,
            screen_id=showing.screen_id,
            requested_count=checkout.ticket_count,
        )
        if not has_capacity:
            raise ConflictError(
                'Not enough seats left for this showing.',
                error_code=ReservationErrorCode.SCREEN_FULL,
            )
        return to_money(showing.ticket_price * checkout.ticket_count)

    async def _create(
        self,
        *,
        reservation_id: UUID,
        user_id: int,
        checkout: CheckoutInput,
        price_paid: Decimal,
        now: datetime,
        selected_seating: Optional[List[int]] = None,
    ) -> Reservation:
        snapshot = await self.snapshot_builder.build_showing(
            showing_id=checkout.showing_id,
            reservation_type=ReservationType(checkout.reservation_type),
            ticket_count=checkout.ticket_count,
            price_paid=price_paid,
            selected_seating=selected_seating,
        )
        reservation = Reservation.create(
            id=reservation_id,
            user_id=user_id,
            showing_id=checkout.showing_id,
            ticket_count=checkout.ticket_count,
            price_paid=price_paid,
            currency=checkout.currency,
            reservation_type=ReservationType(checkout.reservation_type),
            selected_seating=selected_seating,
            snapshot=snapshot,
            date_reserved=now,
            expires_at=future_utc(minutes=settings.RESERVATION_HOLD_MINUTES, now=now),
        )
        created = await self.lifecycle_service.persist_new(reservation=reservation, now=now)
        Logger.base.info(
            f'🎟️ [RESERVE] {created.id} for user {user_id}: {created.ticket_count} x '
            f'showing {created.showing_id}, {created.price_paid} {created.currency}'
        )
        return created
