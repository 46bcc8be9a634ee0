"""
Unit tests for the post-checkout flows

Reserve, complete, pay, cancel and expire run against the same in-memory ledger, so each
test follows one reservation through its lifecycle and checks the seats alongside it.
"""

from datetime import timedelta
from unittest.mock import AsyncMock

import attrs
import pytest
from uuid_utils import UUID

from src.platform.clock.utc_clock import utc_now
from src.platform.exception.exceptions import ConflictError, ForbiddenError, NotFoundError
from src.service.reservation.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from src.service.reservation.app.command.complete_checkout_use_case import (
    CompleteCheckoutUseCase,
)
from src.service.reservation.app.command.expire_reservation_use_case import (
    ExpireReservationUseCase,
)
from src.service.reservation.app.command.mark_reservation_paid_use_case import (
    MarkReservationPaidUseCase,
)
from src.service.reservation.app.command.reserve_tickets_use_case import ReserveTicketsUseCase
from src.service.reservation.app.dto.checkout_input import ReservedSeatsCheckout
from src.service.reservation.app.query.get_reservation_use_case import GetReservationUseCase
from src.service.reservation.app.service.reservation_lifecycle_service import (
    ReservationLifecycleService,
)
from src.service.reservation.app.service.seat_availability_checker import (
    SeatAvailabilityChecker,
)
from src.service.reservation.app.service.seat_lock_manager import (
    SEAT_RESERVED_MESSAGE,
    SeatLockManager,
)
from src.service.reservation.app.service.snapshot_builder import SnapshotBuilder
from src.service.reservation.domain.entity import Reservation
from src.service.reservation.domain.enum import (
    ReservationErrorCode,
    ReservationStatus,
    ReservationType,
    SeatLedgerStatus,
)
from src.service.reservation.domain.reservation_validation_error import ReservationValidationError
from test.service.reservation.factories import (
    OTHER_USER_ID,
    OWNER_ID,
    SHOWING_ID,
    make_reservation,
)
from test.service.reservation.fakes import InMemoryReservationRepo, InMemorySeatLedgerRepo


AVAILABLE = SeatLedgerStatus.AVAILABLE
PENDING = SeatLedgerStatus.PENDING
RESERVED = SeatLedgerStatus.RESERVED


@pytest.fixture
def reserve(
    catalog_query_repo: AsyncMock,
    availability_checker: SeatAvailabilityChecker,
    lock_manager: SeatLockManager,
    snapshot_builder: SnapshotBuilder,
    lifecycle_service: ReservationLifecycleService,
):
    use_case = ReserveTicketsUseCase(
        catalog_query_repo=catalog_query_repo,
        availability_checker=availability_checker,
        lock_manager=lock_manager,
        snapshot_builder=snapshot_builder,
        lifecycle_service=lifecycle_service,
    )

    async def _reserve(seat_ids: list[int], user_id: int = OWNER_ID) -> Reservation:
        return await use_case.reserve_tickets(
            user_id=user_id,
            checkout=ReservedSeatsCheckout(
                showing_id=SHOWING_ID,
                reservation_type=ReservationType.RESERVED_SEATS,
                ticket_count=len(seat_ids),
                selected_seating=seat_ids,
            ),
        )

    return _reserve


@pytest.fixture
def complete_checkout(
    reservation_repo: InMemoryReservationRepo, lock_manager: SeatLockManager
) -> CompleteCheckoutUseCase:
    return CompleteCheckoutUseCase(reservation_repo=reservation_repo, lock_manager=lock_manager)


@pytest.fixture
def cancel_reservation(
    reservation_repo: InMemoryReservationRepo,
    lock_manager: SeatLockManager,
    lifecycle_service: ReservationLifecycleService,
) -> CancelReservationUseCase:
    return CancelReservationUseCase(
        reservation_repo=reservation_repo,
        lock_manager=lock_manager,
        lifecycle_service=lifecycle_service,
    )


@pytest.fixture
def expire_reservation(
    reservation_repo: InMemoryReservationRepo,
    lock_manager: SeatLockManager,
    lifecycle_service: ReservationLifecycleService,
) -> ExpireReservationUseCase:
    return ExpireReservationUseCase(
        reservation_repo=reservation_repo,
        lock_manager=lock_manager,
        lifecycle_service=lifecycle_service,
    )


@pytest.fixture
def mark_paid(
    reservation_repo: InMemoryReservationRepo, lifecycle_service: ReservationLifecycleService
) -> MarkReservationPaidUseCase:
    return MarkReservationPaidUseCase(
        reservation_repo=reservation_repo, lifecycle_service=lifecycle_service
    )


@pytest.fixture
def get_reservation(reservation_repo: InMemoryReservationRepo) -> GetReservationUseCase:
    return GetReservationUseCase(reservation_repo=reservation_repo)


@pytest.mark.unit
class TestCheckoutThenCancel:
    @pytest.mark.asyncio
    async def test_seats_follow_the_reservation(
        self,
        reserve,
        complete_checkout: CompleteCheckoutUseCase,
        cancel_reservation: CancelReservationUseCase,
        seat_ledger_repo: InMemorySeatLedgerRepo,
    ) -> None:
        # Act / Assert: reserve holds
        reservation = await reserve([1, 2])
        assert seat_ledger_repo.status_of(1) == PENDING

        # Act / Assert: checkout binds the seats to the reservation
        await complete_checkout.complete_checkout(reservation_id=reservation.id, user_id=OWNER_ID)
        for seat_id in (1, 2):
            assert seat_ledger_repo.status_of(seat_id) == RESERVED
            assert seat_ledger_repo.entries[seat_id].reservation_id == reservation.id

        # Act / Assert: cancel frees them
        cancelled = await cancel_reservation.cancel(
            reservation_id=reservation.id, user_id=OWNER_ID
        )
        assert cancelled.status == ReservationStatus.CANCELLED
        assert cancelled.date_cancelled is not None
        for seat_id in (1, 2):
            assert seat_ledger_repo.status_of(seat_id) == AVAILABLE
            assert seat_ledger_repo.entries[seat_id].reservation_id is None

    @pytest.mark.asyncio
    async def test_cancel_twice_returns_cancelled(
        self,
        reserve,
        complete_checkout: CompleteCheckoutUseCase,
        cancel_reservation: CancelReservationUseCase,
    ) -> None:
        reservation = await reserve([3])
        await complete_checkout.complete_checkout(reservation_id=reservation.id, user_id=OWNER_ID)
        first = await cancel_reservation.cancel(reservation_id=reservation.id, user_id=OWNER_ID)

        second = await cancel_reservation.cancel(reservation_id=reservation.id, user_id=OWNER_ID)

        assert second.status == ReservationStatus.CANCELLED
        assert second.date_cancelled == first.date_cancelled

    @pytest.mark.asyncio
    async def test_released_seats_can_be_booked_again(
        self,
        reserve,
        complete_checkout: CompleteCheckoutUseCase,
        cancel_reservation: CancelReservationUseCase,
    ) -> None:
        reservation = await reserve([4])
        await complete_checkout.complete_checkout(reservation_id=reservation.id, user_id=OWNER_ID)
        await cancel_reservation.cancel(reservation_id=reservation.id, user_id=OWNER_ID)

        again = await reserve([4], user_id=OTHER_USER_ID)

        assert again.selected_seating == [4]

    @pytest.mark.asyncio
    async def test_completing_twice_keeps_the_booking(
        self,
        reserve,
        complete_checkout: CompleteCheckoutUseCase,
        get_reservation: GetReservationUseCase,
        seat_ledger_repo: InMemorySeatLedgerRepo,
    ) -> None:
        reservation = await reserve([1, 2])
        await complete_checkout.complete_checkout(reservation_id=reservation.id, user_id=OWNER_ID)

        again = await complete_checkout.complete_checkout(
            reservation_id=reservation.id, user_id=OWNER_ID
        )

        assert again.status == ReservationStatus.RESERVED
        stored = await get_reservation.get(reservation_id=reservation.id, user_id=OWNER_ID)
        assert stored.status == ReservationStatus.RESERVED
        for seat_id in (1, 2):
            assert seat_ledger_repo.status_of(seat_id) == RESERVED
            assert seat_ledger_repo.entries[seat_id].reservation_id == reservation.id

    @pytest.mark.asyncio
    async def test_rejected_cancel_keeps_seats(
        self,
        reserve,
        complete_checkout: CompleteCheckoutUseCase,
        cancel_reservation: CancelReservationUseCase,
        reservation_repo: InMemoryReservationRepo,
        seat_ledger_repo: InMemorySeatLedgerRepo,
    ) -> None:
        # Arrange: the stored row no longer passes the lifecycle rules
        reservation = await reserve([1, 2])
        await complete_checkout.complete_checkout(reservation_id=reservation.id, user_id=OWNER_ID)
        reservation_repo.put(attrs.evolve(reservation, ticket_count=3))

        # Act
        with pytest.raises(ReservationValidationError):
            await cancel_reservation.cancel(reservation_id=reservation.id, user_id=OWNER_ID)

        # Assert
        stored = await reservation_repo.get_by_id(reservation_id=reservation.id)
        assert stored is not None
        assert stored.status == ReservationStatus.RESERVED
        for seat_id in (1, 2):
            assert seat_ledger_repo.status_of(seat_id) == RESERVED

    @pytest.mark.asyncio
    async def test_seat_booked_during_cancel_stays_booked(
        self,
        reserve,
        complete_checkout: CompleteCheckoutUseCase,
        cancel_reservation: CancelReservationUseCase,
        seat_ledger_repo: InMemorySeatLedgerRepo,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        # Arrange: another user books seat 1 the moment it is handed back
        reservation = await reserve([1, 2])
        await complete_checkout.complete_checkout(reservation_id=reservation.id, user_id=OWNER_ID)
        release_by_reservation = seat_ledger_repo.release_by_reservation
        competitors: list[Reservation] = []

        async def release_then_compete(*, reservation_id):
            released = await release_by_reservation(reservation_id=reservation_id)
            competitors.append(await reserve([1], user_id=OTHER_USER_ID))
            return released

        monkeypatch.setattr(seat_ledger_repo, 'release_by_reservation', release_then_compete)

        # Act
        await cancel_reservation.cancel(reservation_id=reservation.id, user_id=OWNER_ID)

        # Assert
        [competitor] = competitors
        assert seat_ledger_repo.status_of(1) == PENDING
        assert seat_ledger_repo.entries[1].reservation_id == competitor.id
        assert seat_ledger_repo.status_of(2) == AVAILABLE

    @pytest.mark.asyncio
    async def test_cancel_before_checkout_drops_holds(
        self,
        reserve,
        cancel_reservation: CancelReservationUseCase,
        seat_ledger_repo: InMemorySeatLedgerRepo,
    ) -> None:
        reservation = await reserve([5])

        await cancel_reservation.cancel(reservation_id=reservation.id, user_id=OWNER_ID)

        assert seat_ledger_repo.status_of(5) == AVAILABLE

    @pytest.mark.asyncio
    async def test_only_owner_may_cancel(
        self,
        reserve,
        cancel_reservation: CancelReservationUseCase,
        seat_ledger_repo: InMemorySeatLedgerRepo,
    ) -> None:
        reservation = await reserve([1])

        with pytest.raises(ForbiddenError) as exc_info:
            await cancel_reservation.cancel(reservation_id=reservation.id, user_id=OTHER_USER_ID)

        assert exc_info.value.error_code == ReservationErrorCode.UNAUTHORIZED
        assert seat_ledger_repo.status_of(1) == PENDING


@pytest.mark.unit
class TestLostSeatAtCheckout:
    @pytest.mark.asyncio
    async def test_loser_is_invalidated(
        self,
        reserve,
        complete_checkout: CompleteCheckoutUseCase,
        get_reservation: GetReservationUseCase,
        seat_ledger_repo: InMemorySeatLedgerRepo,
    ) -> None:
        # Arrange: A holds {1, 2}; its hold on 2 drops and B books {2, 3} to completion
        first = await reserve([1, 2])
        await seat_ledger_repo.unlock_pending(seat_ids=[2], reservation_id=first.id)
        second = await reserve([2, 3], user_id=OTHER_USER_ID)
        await complete_checkout.complete_checkout(
            reservation_id=second.id, user_id=OTHER_USER_ID
        )

        # Act
        with pytest.raises(ConflictError) as exc_info:
            await complete_checkout.complete_checkout(reservation_id=first.id, user_id=OWNER_ID)

        # Assert
        assert exc_info.value.error_code == ReservationErrorCode.SEAT_RESERVED
        stored = await get_reservation.get(reservation_id=first.id, user_id=OWNER_ID)
        assert stored.status == ReservationStatus.INVALID
        assert stored.notes == SEAT_RESERVED_MESSAGE
        assert seat_ledger_repo.status_of(1) == AVAILABLE
        assert seat_ledger_repo.entries[2].reservation_id == second.id
        assert seat_ledger_repo.entries[3].reservation_id == second.id

    @pytest.mark.asyncio
    async def test_invalid_reservation_cannot_be_completed_again(
        self,
        reserve,
        complete_checkout: CompleteCheckoutUseCase,
        seat_ledger_repo: InMemorySeatLedgerRepo,
    ) -> None:
        reservation = await reserve([1])
        await seat_ledger_repo.unlock_pending(seat_ids=[1], reservation_id=reservation.id)
        with pytest.raises(ConflictError):
            await complete_checkout.complete_checkout(
                reservation_id=reservation.id, user_id=OWNER_ID
            )

        with pytest.raises(ConflictError) as exc_info:
            await complete_checkout.complete_checkout(
                reservation_id=reservation.id, user_id=OWNER_ID
            )

        assert exc_info.value.error_code == ReservationErrorCode.INVALID_RESERVATION_STATUS


@pytest.mark.unit
class TestCompleteCheckoutGuards:
    @pytest.mark.asyncio
    async def test_expired_hold(
        self,
        complete_checkout: CompleteCheckoutUseCase,
        reservation_repo: InMemoryReservationRepo,
    ) -> None:
        reservation = reservation_repo.put(
            make_reservation(date_reserved=utc_now() - timedelta(hours=1))
        )

        with pytest.raises(ConflictError) as exc_info:
            await complete_checkout.complete_checkout(
                reservation_id=reservation.id, user_id=OWNER_ID
            )

        assert exc_info.value.error_code == ReservationErrorCode.RESERVATION_EXPIRED

    @pytest.mark.asyncio
    async def test_other_users_reservation(
        self,
        complete_checkout: CompleteCheckoutUseCase,
        reservation_repo: InMemoryReservationRepo,
    ) -> None:
        reservation = reservation_repo.put(make_reservation())

        with pytest.raises(ForbiddenError):
            await complete_checkout.complete_checkout(
                reservation_id=reservation.id, user_id=OTHER_USER_ID
            )

    @pytest.mark.asyncio
    async def test_unknown_reservation(self, complete_checkout: CompleteCheckoutUseCase) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            await complete_checkout.complete_checkout(
                reservation_id=make_reservation().id, user_id=OWNER_ID
            )

        assert exc_info.value.error_code == ReservationErrorCode.RESERVATION_NOT_FOUND

    @pytest.mark.asyncio
    async def test_general_admission_completes_without_seats(
        self,
        complete_checkout: CompleteCheckoutUseCase,
        reservation_repo: InMemoryReservationRepo,
    ) -> None:
        reservation = reservation_repo.put(make_reservation())

        completed = await complete_checkout.complete_checkout(
            reservation_id=reservation.id, user_id=OWNER_ID
        )

        assert completed.status == ReservationStatus.RESERVED


@pytest.mark.unit
class TestMarkPaid:
    @pytest.mark.asyncio
    async def test_reserved_becomes_paid(
        self,
        reserve,
        complete_checkout: CompleteCheckoutUseCase,
        mark_paid: MarkReservationPaidUseCase,
        seat_ledger_repo: InMemorySeatLedgerRepo,
    ) -> None:
        reservation = await reserve([2])
        await complete_checkout.complete_checkout(reservation_id=reservation.id, user_id=OWNER_ID)

        paid = await mark_paid.mark_paid(reservation_id=reservation.id, user_id=OWNER_ID)

        assert paid.status == ReservationStatus.PAID
        assert paid.date_paid is not None
        assert paid.snapshot == reservation.snapshot
        assert seat_ledger_repo.status_of(2) == RESERVED

    @pytest.mark.asyncio
    async def test_paid_reservation_can_be_cancelled(
        self,
        reserve,
        complete_checkout: CompleteCheckoutUseCase,
        mark_paid: MarkReservationPaidUseCase,
        cancel_reservation: CancelReservationUseCase,
        seat_ledger_repo: InMemorySeatLedgerRepo,
    ) -> None:
        reservation = await reserve([3])
        await complete_checkout.complete_checkout(reservation_id=reservation.id, user_id=OWNER_ID)
        await mark_paid.mark_paid(reservation_id=reservation.id, user_id=OWNER_ID)

        cancelled = await cancel_reservation.cancel(
            reservation_id=reservation.id, user_id=OWNER_ID
        )

        assert cancelled.status == ReservationStatus.CANCELLED
        assert cancelled.date_paid is None
        assert seat_ledger_repo.status_of(3) == AVAILABLE

    @pytest.mark.asyncio
    async def test_cannot_pay_twice(
        self, mark_paid: MarkReservationPaidUseCase, reservation_repo: InMemoryReservationRepo
    ) -> None:
        reservation = reservation_repo.put(make_reservation())
        await mark_paid.mark_paid(reservation_id=reservation.id, user_id=OWNER_ID)

        with pytest.raises(ConflictError) as exc_info:
            await mark_paid.mark_paid(reservation_id=reservation.id, user_id=OWNER_ID)

        assert exc_info.value.error_code == ReservationErrorCode.INVALID_RESERVATION_STATUS

    @pytest.mark.asyncio
    async def test_cannot_pay_lapsed_hold(
        self, mark_paid: MarkReservationPaidUseCase, reservation_repo: InMemoryReservationRepo
    ) -> None:
        reservation = reservation_repo.put(
            make_reservation(date_reserved=utc_now() - timedelta(hours=1))
        )

        with pytest.raises(ConflictError) as exc_info:
            await mark_paid.mark_paid(reservation_id=reservation.id, user_id=OWNER_ID)

        assert exc_info.value.error_code == ReservationErrorCode.RESERVATION_EXPIRED


@pytest.mark.unit
class TestExpire:
    @pytest.mark.asyncio
    async def test_lapsed_hold_expires_and_frees_seats(
        self,
        reserve,
        complete_checkout: CompleteCheckoutUseCase,
        expire_reservation: ExpireReservationUseCase,
        seat_ledger_repo: InMemorySeatLedgerRepo,
    ) -> None:
        reservation = await reserve([1, 2])
        await complete_checkout.complete_checkout(reservation_id=reservation.id, user_id=OWNER_ID)
        later = reservation.expires_at + timedelta(minutes=1)

        expired = await expire_reservation.expire(reservation_id=reservation.id, now=later)

        assert expired.status == ReservationStatus.EXPIRED
        assert expired.date_expired == later
        assert seat_ledger_repo.status_of(1) == AVAILABLE
        assert seat_ledger_repo.status_of(2) == AVAILABLE

    @pytest.mark.asyncio
    async def test_rejected_expiry_keeps_seats(
        self,
        reserve,
        complete_checkout: CompleteCheckoutUseCase,
        expire_reservation: ExpireReservationUseCase,
        reservation_repo: InMemoryReservationRepo,
        seat_ledger_repo: InMemorySeatLedgerRepo,
    ) -> None:
        reservation = await reserve([1, 2])
        await complete_checkout.complete_checkout(reservation_id=reservation.id, user_id=OWNER_ID)
        reservation_repo.put(attrs.evolve(reservation, ticket_count=3))
        later = reservation.expires_at + timedelta(minutes=1)

        with pytest.raises(ReservationValidationError):
            await expire_reservation.expire(reservation_id=reservation.id, now=later)

        assert seat_ledger_repo.status_of(1) == RESERVED
        assert seat_ledger_repo.status_of(2) == RESERVED

    @pytest.mark.asyncio
    async def test_live_hold_is_left_alone(
        self,
        reserve,
        expire_reservation: ExpireReservationUseCase,
        seat_ledger_repo: InMemorySeatLedgerRepo,
    ) -> None:
        reservation = await reserve([3])

        result = await expire_reservation.expire(reservation_id=reservation.id)

        assert result.status == ReservationStatus.RESERVED
        assert seat_ledger_repo.status_of(3) == PENDING

    @pytest.mark.asyncio
    async def test_paid_reservation_never_expires(
        self,
        expire_reservation: ExpireReservationUseCase,
        reservation_repo: InMemoryReservationRepo,
    ) -> None:
        reservation = reservation_repo.put(make_reservation().mark_as_paid(now=utc_now()))

        result = await expire_reservation.expire(
            reservation_id=reservation.id, now=reservation.expires_at + timedelta(days=1)
        )

        assert result.status == ReservationStatus.PAID


@pytest.mark.unit
class TestGetReservation:
    @pytest.mark.asyncio
    async def test_owner_reads_reservation(
        self, get_reservation: GetReservationUseCase, reservation_repo: InMemoryReservationRepo
    ) -> None:
        reservation = reservation_repo.put(make_reservation())

        found = await get_reservation.get(reservation_id=reservation.id, user_id=OWNER_ID)

        assert found == reservation

    @pytest.mark.asyncio
    async def test_other_user_is_forbidden(
        self, get_reservation: GetReservationUseCase, reservation_repo: InMemoryReservationRepo
    ) -> None:
        reservation = reservation_repo.put(make_reservation())

        with pytest.raises(ForbiddenError):
            await get_reservation.get(reservation_id=reservation.id, user_id=OTHER_USER_ID)

    @pytest.mark.asyncio
    async def test_unknown_id(self, get_reservation: GetReservationUseCase) -> None:
        with pytest.raises(NotFoundError):
            await get_reservation.get(
                reservation_id=UUID('01890a5d-ac96-774b-bcce-b302099a8057'), user_id=OWNER_ID
            )
