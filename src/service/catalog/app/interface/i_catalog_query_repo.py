"""
Catalog Query Repository Interface

Read-only projections of the catalog (movie, theatre, screen, seat, showing) that the
reservation engine needs. Catalog writes belong to the admin surface and are not part
of this interface.
"""

from abc import ABC, abstractmethod
from typing import List

from src.service.catalog.domain.entity import Movie, Screen, Seat, Showing, Theatre


class ICatalogQueryRepo(ABC):
    @abstractmethod
    async def get_showing(self, *, showing_id: int) -> Showing | None:
        pass

    @abstractmethod
    async def get_movie(self, *, movie_id: int) -> Movie | None:
        pass

    @abstractmethod
    async def get_theatre(self, *, theatre_id: int) -> Theatre | None:
        pass

    @abstractmethod
    async def get_screen(self, *, screen_id: int) -> Screen | None:
        pass

    @abstractmethod
    async def count_seat_slots(self, *, screen_id: int) -> int:
        """Number of SEAT-type layout slots configured for the screen."""
        pass

    @abstractmethod
    async def list_bookable_seats(self, *, screen_id: int) -> List[Seat]:
        """SEAT-type, available seats of the screen, ordered by row and number."""
        pass
