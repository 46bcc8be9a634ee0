from typing import Annotated

from pydantic import BaseModel, StringConstraints

from src.service.catalog.domain.enum import ScreenType
from src.service.reservation.domain.value_object.snapshot_types import SNAPSHOT_MODEL_CONFIG


class ScreenSnapshot(BaseModel):
    model_config = SNAPSHOT_MODEL_CONFIG

    screen_id: int
    theatre_id: int
    name: Annotated[str, StringConstraints(min_length=1, max_length=255)]
    screen_type: ScreenType
