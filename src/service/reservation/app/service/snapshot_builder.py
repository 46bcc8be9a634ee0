"""
Snapshot Builder

Freezes the movie, venue, screen and seats a reservation refers to. Each sub-builder
reads its live source record, fails with DocumentNotFoundError if it is missing, then
maps and validates it. A validation failure on data that is already persisted is an
internal invariant violation, raised as InconsistentDataError rather than a user error.

Nothing here writes: either every sub-snapshot succeeds or the whole build fails.
"""

from decimal import Decimal
from typing import Any, List, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from src.platform.exception.exceptions import DocumentNotFoundError, InconsistentDataError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.reservation.app.interface.i_seat_ledger_repo import ISeatLedgerRepo
from src.service.reservation.domain.enum import ReservationType
from src.service.reservation.domain.seat_pricing import resolve_seat_price
from src.service.reservation.domain.value_object import (
    MovieSnapshot,
    ScreenSnapshot,
    SeatSnapshot,
    ShowingSnapshot,
    VenueSnapshot,
)


_M = TypeVar('_M', bound=BaseModel)


def _validated(model: type[_M], source: str, data: dict[str, Any]) -> _M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        Logger.base.error(
            f'🚨 [SNAPSHOT] {source} failed {model.__name__} validation: {e.errors()}'
        )
        raise InconsistentDataError(
            f'{source} does not satisfy {model.__name__}.',
            details={'source': source, 'error_count': e.error_count()},
        ) from e


class SnapshotBuilder:
    def __init__(
        self, *, catalog_query_repo: ICatalogQueryRepo, seat_ledger_repo: ISeatLedgerRepo
    ) -> None:
        self.catalog_query_repo = catalog_query_repo
        self.seat_ledger_repo = seat_ledger_repo

    @Logger.io
    async def build_movie(self, *, movie_id: int) -> MovieSnapshot:
        movie = await self.catalog_query_repo.get_movie(movie_id=movie_id)
        if movie is None:
            raise DocumentNotFoundError(f'Movie {movie_id} not found.')

        return _validated(
            MovieSnapshot,
            f'Movie {movie_id}',
            {
                'movie_id': movie.id,
                'title': movie.title,
                'original_title': movie.original_title,
                'tagline': movie.tagline,
                'poster_url': movie.poster_url,
                'release_date': movie.release_date,
                'genres': list(movie.genres),
                'runtime': movie.runtime,
                'country': movie.country,
            },
        )

    @Logger.io
    async def build_venue(self, *, theatre_id: int) -> VenueSnapshot:
        theatre = await self.catalog_query_repo.get_theatre(theatre_id=theatre_id)
        if theatre is None:
            raise DocumentNotFoundError(f'Theatre {theatre_id} not found.')

        return _validated(
            VenueSnapshot,
            f'Theatre {theatre_id}',
            {
                'theatre_id': theatre.id,
                'name': theatre.name,
                'street': theatre.street,
                'city': theatre.city,
                'state': theatre.state,
                'country': theatre.country,
                'postcode': theatre.postcode,
                'timezone': theatre.timezone,
            },
        )

    @Logger.io
    async def build_screen(self, *, screen_id: int) -> ScreenSnapshot:
        screen = await self.catalog_query_repo.get_screen(screen_id=screen_id)
        if screen is None:
            raise DocumentNotFoundError(f'Screen {screen_id} not found.')

        return _validated(
            ScreenSnapshot,
            f'Screen {screen_id}',
            {
                'screen_id': screen.id,
                'theatre_id': screen.theatre_id,
                'name': screen.name,
                'screen_type': screen.screen_type,
            },
        )

    @Logger.io
    async def build_seats(
        self, *, seat_ids: Optional[List[int]]
    ) -> Optional[List[SeatSnapshot]]:
        """
        ``None`` in, ``None`` out (no seating requested); an empty list stays empty.
        """
        if seat_ids is None:
            return None
        if not seat_ids:
            return []

        entries = {
            entry.id: entry
            for entry in await self.seat_ledger_repo.find_with_seats(seat_ids=seat_ids)
        }
        missing = [seat_id for seat_id in seat_ids if seat_id not in entries]
        if missing:
            raise DocumentNotFoundError(f'Seat ledger entries {missing} not found.')

        snapshots = []
        for seat_id in seat_ids:
            entry = entries[seat_id]
            seat = entry.seat
            if seat is None:
                raise DocumentNotFoundError(f'Seat {entry.seat_id} not found.')
            snapshots.append(
                _validated(
                    SeatSnapshot,
                    f'Seat ledger entry {entry.id}',
                    {
                        'seat_ledger_id': entry.id,
                        'seat_id': seat.id,
                        'seat_identifier': seat.identifier,
                        'seat_type': seat.seat_type,
                        'seat_label': seat.seat_label,
                        'price_paid': resolve_seat_price(entry),
                    },
                )
            )
        return snapshots

    @Logger.io
    async def build_showing(
        self,
        *,
        showing_id: int,
        reservation_type: ReservationType,
        ticket_count: int,
        price_paid: Decimal,
        selected_seating: Optional[List[int]] = None,
    ) -> ShowingSnapshot:
        showing = await self.catalog_query_repo.get_showing(showing_id=showing_id)
        if showing is None:
            raise DocumentNotFoundError(f'Showing {showing_id} not found.')

        movie = await self.build_movie(movie_id=showing.movie_id)
        venue = await self.build_venue(theatre_id=showing.theatre_id)
        screen = await self.build_screen(screen_id=showing.screen_id)
        seats = await self.build_seats(seat_ids=selected_seating)

        return _validated(
            ShowingSnapshot,
            f'Showing {showing_id}',
            {
                'showing_id': showing.id,
                'movie': movie,
                'venue': venue,
                'screen': screen,
                'selected_seats': seats,
                'start_time': showing.start_time,
                'end_time': showing.end_time,
                'language': showing.language,
                'subtitle_languages': list(showing.subtitle_languages),
                'is_special_event': showing.is_special_event,
                'reservation_type': reservation_type,
                'ticket_count': ticket_count,
                'price_paid': price_paid,
            },
        )
