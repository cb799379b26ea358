"""Statistics service: hit rates and streaks over validation history."""

from collections.abc import Sequence

from pick3_lottery.config import settings
from pick3_lottery.schemas.ml import ValidationRecord
from pick3_lottery.schemas.statistics import StatisticsSummary


def _percent(hits: int, total: int) -> int:
    return round(hits / total * 100) if total > 0 else 0


def longest_streak(flags: Sequence[bool]) -> int:
    """Longest run of consecutive True values."""
    best = 0
    current = 0
    for flag in flags:
        if flag:
            current += 1
            best = max(best, current)
        else:
            current = 0
    return best


def current_streak(flags: Sequence[bool]) -> int:
    """Run of True values ending at the latest entry."""
    count = 0
    for flag in reversed(flags):
        if not flag:
            break
        count += 1
    return count


def recent_accuracy(flags: Sequence[bool], span: int | None = None) -> list[int]:
    """Cumulative any-hit percentage across the last `span` validations."""
    span = span if span is not None else settings.RECENT_ACCURACY_SPAN
    recent = list(flags)[-span:] if span > 0 else []
    series = []
    hits = 0
    for i, flag in enumerate(recent, start=1):
        hits += int(flag)
        series.append(_percent(hits, i))
    return series


def get_statistics(
    validations: Sequence[ValidationRecord],
    total_draws: int = 0,
    total_predictions: int = 0,
) -> StatisticsSummary:
    """Aggregate validation history; every rate and streak is 0 without records."""
    records = sorted(validations, key=lambda v: v.period)
    total = len(records)
    any_hits = [v.any_hit for v in records]

    return StatisticsSummary(
        total_draws=total_draws,
        total_predictions=total_predictions,
        overall_accuracy=_percent(sum(any_hits), total),
        hundred_accuracy=_percent(sum(v.hundred_hit for v in records), total),
        ten_accuracy=_percent(sum(v.ten_hit for v in records), total),
        one_accuracy=_percent(sum(v.one_hit for v in records), total),
        current_streak=current_streak(any_hits),
        max_streak=longest_streak(any_hits),
        recent_accuracy=recent_accuracy(any_hits),
    )
