"""Calendar metadata model."""

from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

DEFAULT_CALENDAR_COLOR = "#4285f4"


class Calendar(BaseModel):
    """Calendar metadata."""

    id: str
    name: str = ""
    background_color: str = DEFAULT_CALENDAR_COLOR
    is_primary: bool = False

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }
