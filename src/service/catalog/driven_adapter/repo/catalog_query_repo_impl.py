"""
Catalog Query Repository Implementation - read side only
"""

from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.clock.utc_clock import as_utc
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.catalog.domain.entity import Movie, Screen, Seat, Showing, Theatre
from src.service.catalog.domain.enum import ScreenType, SeatLayoutType, SeatType, ShowingStatus
from src.service.catalog.driven_adapter.model import (
    MovieModel,
    ScreenModel,
    SeatModel,
    ShowingModel,
    TheatreModel,
)


class CatalogQueryRepoImpl(ICatalogQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    @staticmethod
    def _to_showing(model: ShowingModel) -> Showing:
        return Showing(
            id=model.id,
            movie_id=model.movie_id,
            theatre_id=model.theatre_id,
            screen_id=model.screen_id,
            start_time=as_utc(model.start_time),  # type: ignore[arg-type]
            end_time=as_utc(model.end_time),
            ticket_price=model.ticket_price,
            language=model.language,
            subtitle_languages=list(model.subtitle_languages or []),
            is_special_event=model.is_special_event,
            status=ShowingStatus(model.status),
        )

    @staticmethod
    def to_seat(model: SeatModel) -> Seat:
        return Seat(
            id=model.id,
            screen_id=model.screen_id,
            row=model.row,
            number=model.number,
            seat_label=model.seat_label,
            seat_type=SeatType(model.seat_type),
            layout_type=SeatLayoutType(model.layout_type),
            is_available=model.is_available,
            price_multiplier=model.price_multiplier,
        )

    @Logger.io
    async def get_showing(self, *, showing_id: int) -> Showing | None:
        async with self._get_session() as session:
            model = await session.get(ShowingModel, showing_id)
            return self._to_showing(model) if model else None

    @Logger.io
    async def get_movie(self, *, movie_id: int) -> Movie | None:
        async with self._get_session() as session:
            model = await session.get(MovieModel, movie_id)
            if model is None:
                return None
            return Movie(
                id=model.id,
                title=model.title,
                original_title=model.original_title,
                tagline=model.tagline,
                poster_url=model.poster_url,
                release_date=model.release_date,
                genres=list(model.genres or []),
                runtime=model.runtime,
                country=model.country,
            )

    @Logger.io
    async def get_theatre(self, *, theatre_id: int) -> Theatre | None:
        async with self._get_session() as session:
            model = await session.get(TheatreModel, theatre_id)
            if model is None:
                return None
            return Theatre(
                id=model.id,
                name=model.name,
                street=model.street,
                city=model.city,
                state=model.state,
                country=model.country,
                postcode=model.postcode,
                timezone=model.timezone,
            )

    @Logger.io
    async def get_screen(self, *, screen_id: int) -> Screen | None:
        async with self._get_session() as session:
            model = await session.get(ScreenModel, screen_id)
            if model is None:
                return None
            return Screen(
                id=model.id,
                theatre_id=model.theatre_id,
                name=model.name,
                screen_type=ScreenType(model.screen_type),
            )

    @Logger.io
    async def count_seat_slots(self, *, screen_id: int) -> int:
        async with self._get_session() as session:
            stmt = select(func.count(SeatModel.id)).where(
                SeatModel.screen_id == screen_id,
                SeatModel.layout_type == SeatLayoutType.SEAT.value,
            )
            return int((await session.execute(stmt)).scalar_one())

    @Logger.io
    async def list_bookable_seats(self, *, screen_id: int) -> List[Seat]:
        async with self._get_session() as session:
            stmt = (
                select(SeatModel)
                .where(
                    SeatModel.screen_id == screen_id,
                    SeatModel.layout_type == SeatLayoutType.SEAT.value,
                    SeatModel.is_available.is_(True),
                )
                .order_by(SeatModel.row, SeatModel.number)
            )
            result = await session.execute(stmt)
            return [self.to_seat(model) for model in result.scalars().all()]
