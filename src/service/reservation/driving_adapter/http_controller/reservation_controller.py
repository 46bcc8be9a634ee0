from typing import Annotated, Union

from fastapi import APIRouter, Body, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.reservation.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from src.service.reservation.app.command.complete_checkout_use_case import (
    CompleteCheckoutUseCase,
)
from src.service.reservation.app.command.mark_reservation_paid_use_case import (
    MarkReservationPaidUseCase,
)
from src.service.reservation.app.command.reserve_tickets_use_case import ReserveTicketsUseCase
from src.service.reservation.app.dto.checkout_input import (
    GeneralAdmissionCheckout,
    ReservedSeatsCheckout,
)
from src.service.reservation.app.query.get_reservation_use_case import GetReservationUseCase
from src.service.reservation.driving_adapter.http_controller.auth.current_user import (
    get_current_user_id,
)
from src.service.reservation.driving_adapter.http_controller.schema.reservation_schema import (
    ReservationResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def reserve_tickets(
    checkout: Annotated[
        Union[GeneralAdmissionCheckout, ReservedSeatsCheckout],
        Body(discriminator='reservation_type'),
    ],
    user_id: int = Depends(get_current_user_id),
    use_case: ReserveTicketsUseCase = Depends(ReserveTicketsUseCase.depends),
) -> ReservationResponse:
    with tracer.start_as_current_span('controller.reserve_tickets') as span:
        span.set_attribute('user.id', user_id)
        span.set_attribute('showing.id', checkout.showing_id)

        reservation = await use_case.reserve_tickets(user_id=user_id, checkout=checkout)

        span.set_attribute('reservation.id', str(reservation.id))
        return ReservationResponse.from_entity(reservation)


@router.get('/{reservation_id}')
@Logger.io
async def get_reservation(
    reservation_id: UtilsUUID7,
    user_id: int = Depends(get_current_user_id),
    use_case: GetReservationUseCase = Depends(GetReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.get(reservation_id=reservation_id, user_id=user_id)
    return ReservationResponse.from_entity(reservation)


@router.post('/{reservation_id}/checkout')
@Logger.io
async def complete_checkout(
    reservation_id: UtilsUUID7,
    user_id: int = Depends(get_current_user_id),
    use_case: CompleteCheckoutUseCase = Depends(CompleteCheckoutUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.complete_checkout(reservation_id=reservation_id, user_id=user_id)
    return ReservationResponse.from_entity(reservation)


@router.post('/{reservation_id}/pay')
@Logger.io
async def mark_paid(
    reservation_id: UtilsUUID7,
    user_id: int = Depends(get_current_user_id),
    use_case: MarkReservationPaidUseCase = Depends(MarkReservationPaidUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.mark_paid(reservation_id=reservation_id, user_id=user_id)
    return ReservationResponse.from_entity(reservation)


@router.patch('/{reservation_id}/cancel', status_code=status.HTTP_200_OK)
@Logger.io
async def cancel_reservation(
    reservation_id: UtilsUUID7,
    user_id: int = Depends(get_current_user_id),
    use_case: CancelReservationUseCase = Depends(CancelReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.cancel(reservation_id=reservation_id, user_id=user_id)
    return ReservationResponse.from_entity(reservation)
