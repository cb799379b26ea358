"""In-memory draw store: ordered by period, deduplicated by period."""

import re
import uuid
from collections.abc import Iterable

from loguru import logger
from pydantic import ValidationError

from pick3_lottery.schemas.lottery import Draw, ImportResult

_FIELD_SEPARATOR = re.compile(r"[\s,]+")


def new_draw_id(period: str) -> str:
    return f"{period}_{uuid.uuid4().hex[:12]}"


def parse_draw_line(line: str) -> Draw | None:
    """Parse `period hundred ten one` (whitespace, comma or tab separated).

    Returns None for lines that do not describe a valid draw.
    """
    parts = [p for p in _FIELD_SEPARATOR.split(line.strip()) if p]
    if len(parts) < 4:
        return None

    period = parts[0]
    try:
        hundred, ten, one = (int(p) for p in parts[1:4])
    except ValueError:
        return None

    try:
        return Draw(id=new_draw_id(period), period=period, hundred=hundred, ten=ten, one=one)
    except ValidationError:
        return None


class DrawStore:
    """Draw history kept sorted ascending by period string.

    A draw whose period already exists replaces the stored one and keeps its id.
    """

    def __init__(self, draws: Iterable[Draw] = ()):
        self._by_period: dict[str, Draw] = {}
        self._ordered: tuple[Draw, ...] = ()
        self.merge(draws)

    def __len__(self) -> int:
        return len(self._ordered)

    def __iter__(self):
        return iter(self._ordered)

    @property
    def draws(self) -> tuple[Draw, ...]:
        return self._ordered

    @property
    def latest(self) -> Draw | None:
        return self._ordered[-1] if self._ordered else None

    def get_by_period(self, period: str) -> Draw | None:
        return self._by_period.get(period)

    def _resort(self) -> None:
        self._ordered = tuple(sorted(self._by_period.values(), key=lambda d: d.period))

    # ── mutation ──────────────────────────────────────────────────────

    def _upsert(self, draw: Draw) -> bool:
        """Store `draw` under its period, keeping an existing id. True if anything changed."""
        existing = self._by_period.get(draw.period)
        if existing is not None:
            draw = draw.model_copy(update={"id": existing.id})
            if draw == existing:
                return False
        self._by_period[draw.period] = draw
        return True

    def add(self, draw: Draw) -> Draw:
        if self._upsert(draw):
            self._resort()
        return self._by_period[draw.period]

    def add_draw(self, period: str, hundred: int, ten: int, one: int, **extra) -> Draw:
        draw = Draw(id=new_draw_id(period), period=period,
                    hundred=hundred, ten=ten, one=one, **extra)
        return self.add(draw)

    def merge(self, draws: Iterable[Draw]) -> int:
        """Upsert many draws at once. Returns how many were new or changed."""
        count = 0
        for draw in draws:
            count += self._upsert(draw)
        if count:
            self._resort()
        return count

    def import_text(self, text: str) -> ImportResult:
        parsed = []
        skipped = 0
        for line in text.strip().splitlines():
            if not line.strip():
                continue
            draw = parse_draw_line(line)
            if draw is None:
                skipped += 1
                continue
            parsed.append(draw)

        if not parsed:
            return ImportResult(success=False, message="No valid draw lines found", imported=0)

        imported = self.merge(parsed)
        if skipped:
            logger.info("Import skipped {} malformed lines", skipped)
        return ImportResult(
            success=True,
            message=f"Imported {imported} draws",
            imported=imported,
        )

    def remove(self, draw_id: str) -> bool:
        for period, draw in self._by_period.items():
            if draw.id == draw_id:
                del self._by_period[period]
                self._resort()
                return True
        return False

    def clear(self) -> None:
        self._by_period.clear()
        self._ordered = ()

    def export_text(self) -> str:
        return "\n".join(
            f"{d.period}\t{d.hundred}\t{d.ten}\t{d.one}" for d in self._ordered
        )
