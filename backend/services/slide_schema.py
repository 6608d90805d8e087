from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

DEFAULT_DECK_TITLE = "Presentation"
DEFAULT_SLIDE_TITLE = "Untitled slide"

class SlideKind(str, Enum):
    TITLE = "title"
    SECTION = "section"
    CONTENT = "content"
    BULLETS = "bullets"
    IMAGE = "image"

    @classmethod
    def from_heading_level(cls, level: int) -> "SlideKind":
        """Initial kind of a slide opened by a heading with `level` leading '#'"""
        if level == 1:
            return cls.TITLE
        if level == 2:
            return cls.SECTION
        return cls.CONTENT

class Slide(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: SlideKind = SlideKind.CONTENT
    title: str = DEFAULT_SLIDE_TITLE
    body: str = ""
    bullets: List[str] = []
    subtitle: Optional[str] = None  # title/section slides only
    description: Optional[str] = None

    @field_validator("kind", mode="before")
    @classmethod
    def _unknown_kind_is_content(cls, value):
        if isinstance(value, SlideKind):
            return value
        try:
            return SlideKind(str(value).strip().lower())
        except ValueError:
            return SlideKind.CONTENT

    @model_validator(mode="before")
    @classmethod
    def _bullets_imply_bullets_kind(cls, data):
        if isinstance(data, dict) and data.get("bullets"):
            data = {**data, "kind": SlideKind.BULLETS}
        return data

    @field_validator("bullets", mode="before")
    @classmethod
    def _bullets_never_null(cls, value):
        return [] if value is None else value

class Deck(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = DEFAULT_DECK_TITLE
    slides: List[Slide] = []
    original_prompt: Optional[str] = None

    @property
    def slide_count(self) -> int:
        return len(self.slides)
