"""
Checkout request variants.

``reservation_type`` is the tag: only the reserved-seating variant carries
``selected_seating``, so a general-admission request with seats cannot be expressed.
"""

from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from src.platform.config.core_setting import settings
from src.service.reservation.domain.enum import ReservationType


MAX_TICKETS_PER_CHECKOUT = 20


class _CheckoutBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra='forbid')

    showing_id: int = Field(gt=0)
    ticket_count: int = Field(ge=1, le=MAX_TICKETS_PER_CHECKOUT)
    currency: str = Field(
        default_factory=lambda: settings.DEFAULT_CURRENCY, pattern=r'^[A-Z]{3}$'
    )


class GeneralAdmissionCheckout(_CheckoutBase):
    reservation_type: Literal[ReservationType.GENERAL_ADMISSION]


class ReservedSeatsCheckout(_CheckoutBase):
    reservation_type: Literal[ReservationType.RESERVED_SEATS]
    selected_seating: List[int] = Field(min_length=1, max_length=MAX_TICKETS_PER_CHECKOUT)

    @model_validator(mode='after')
    def seats_match_ticket_count(self) -> 'ReservedSeatsCheckout':
        if len(set(self.selected_seating)) != len(self.selected_seating):
            raise ValueError('selected_seating must not contain duplicates')
        if self.ticket_count != len(self.selected_seating):
            raise ValueError('ticket_count must equal the number of selected seats')
        return self


CheckoutInput = Annotated[
    Union[GeneralAdmissionCheckout, ReservedSeatsCheckout],
    Field(discriminator='reservation_type'),
]

checkout_input_adapter: TypeAdapter[CheckoutInput] = TypeAdapter(CheckoutInput)
