from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
import uuid_utils

from src.platform.exception.exceptions import ConflictError, ForbiddenError, NotFoundError
from src.service.reservation.app.service.reservation_guard import (
    assert_not_expired,
    assert_owned_by,
    assert_status,
    fetch_reservation_or_throw,
    is_expired,
)
from src.service.reservation.domain.enum import ReservationErrorCode, ReservationStatus
from test.service.reservation.factories import OTHER_USER_ID, OWNER_ID, make_reservation


@pytest.mark.unit
class TestFetchReservationOrThrow:
    @pytest.mark.asyncio
    async def test_returns_stored_reservation(self) -> None:
        reservation = make_reservation()
        repo = AsyncMock()
        repo.get_by_id = AsyncMock(return_value=reservation)

        found = await fetch_reservation_or_throw(
            reservation_repo=repo, reservation_id=reservation.id
        )

        assert found is reservation

    @pytest.mark.asyncio
    async def test_missing_reservation(self) -> None:
        repo = AsyncMock()
        repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError) as exc_info:
            await fetch_reservation_or_throw(
                reservation_repo=repo, reservation_id=uuid_utils.uuid7()
            )

        assert exc_info.value.status_code == 404
        assert exc_info.value.error_code == ReservationErrorCode.RESERVATION_NOT_FOUND


@pytest.mark.unit
class TestExpiry:
    def test_not_expired_before_deadline(self) -> None:
        reservation = make_reservation()

        assert_not_expired(reservation, now=reservation.expires_at - timedelta(seconds=1))

    def test_expired_at_deadline(self) -> None:
        reservation = make_reservation()

        assert is_expired(reservation, now=reservation.expires_at)
        with pytest.raises(ConflictError) as exc_info:
            assert_not_expired(reservation, now=reservation.expires_at)

        assert exc_info.value.status_code == 409
        assert exc_info.value.error_code == ReservationErrorCode.RESERVATION_EXPIRED


@pytest.mark.unit
class TestOwnershipAndStatus:
    def test_owner_passes(self) -> None:
        assert_owned_by(OWNER_ID, make_reservation(user_id=OWNER_ID))

    def test_other_user_is_forbidden(self) -> None:
        with pytest.raises(ForbiddenError) as exc_info:
            assert_owned_by(OTHER_USER_ID, make_reservation(user_id=OWNER_ID))

        assert exc_info.value.status_code == 403
        assert exc_info.value.error_code == ReservationErrorCode.UNAUTHORIZED

    def test_status_outside_allowed_set(self) -> None:
        with pytest.raises(ConflictError) as exc_info:
            assert_status(make_reservation(), ReservationStatus.PAID, ReservationStatus.CANCELLED)

        assert exc_info.value.error_code == ReservationErrorCode.INVALID_RESERVATION_STATUS
