import attrs

from src.service.catalog.domain.enum.screen_type import ScreenType


@attrs.define
class Screen:
    id: int
    theatre_id: int
    name: str
    screen_type: ScreenType
