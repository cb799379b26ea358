"""Pydantic schemas for draw data."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

Position = Literal["hundred", "ten", "one"]
POSITIONS: tuple[Position, ...] = ("hundred", "ten", "one")


class Draw(BaseModel):
    """One three-digit draw. Immutable once stored; replaced by period on upsert."""

    model_config = {"frozen": True}

    id: str
    period: str
    hundred: int = Field(ge=0, le=9)
    ten: int = Field(ge=0, le=9)
    one: int = Field(ge=0, le=9)
    draw_date: date | None = None

    @property
    def digits(self) -> tuple[int, int, int]:
        return self.hundred, self.ten, self.one

    def digit(self, position: Position) -> int:
        return getattr(self, position)

    def contains(self, digit: int) -> bool:
        return digit in self.digits


# --- API payloads ---

class DrawIn(BaseModel):
    period: str = Field(min_length=1)
    hundred: int = Field(ge=0, le=9)
    ten: int = Field(ge=0, le=9)
    one: int = Field(ge=0, le=9)
    draw_date: date | None = None


class ImportRequest(BaseModel):
    text: str


class ImportResult(BaseModel):
    success: bool
    message: str
    imported: int = 0


class WindowUpdate(BaseModel):
    window_size: int
