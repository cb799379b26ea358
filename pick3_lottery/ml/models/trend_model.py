"""Trend and amplitude heuristics per position."""

from collections.abc import Sequence

import numpy as np

from pick3_lottery.ml.models.base_model import N_DIGITS, BaseSignal, SignalResult, empty_scores
from pick3_lottery.schemas.lottery import POSITIONS, Draw, Position

TREND_BONUS = 3.0
LARGE_AMPLITUDE = 5
LARGE_JUMP_OFFSETS = (0, 1, 9)  # stay, or step one either way
LARGE_JUMP_BONUS = 2.0
SMALL_JUMP_OFFSETS = (4, 6)
SMALL_JUMP_BONUS = 1.5


def detect_trend(values: Sequence[int]) -> int | None:
    """+1 / -1 when the last three values step by one each time (cyclic mod 10)."""
    if len(values) < 3:
        return None
    a, b, c = values[-3:]
    steps = {(b - a) % 10, (c - b) % 10}
    if steps == {1}:
        return 1
    if steps == {9}:
        return -1
    return None


def trend_scores(draws: Sequence[Draw], position: Position) -> np.ndarray:
    """Bonus for the extrapolated next value of a running +1/-1 sequence."""
    scores = np.zeros(N_DIGITS, dtype=np.float64)
    values = [d.digit(position) for d in draws[-3:]]
    direction = detect_trend(values)
    if direction is not None:
        scores[(values[-1] + direction) % 10] += TREND_BONUS
    return scores


def amplitude_scores(draws: Sequence[Draw], position: Position) -> np.ndarray:
    """Offsets from the current value, chosen by the size of the last jump."""
    scores = np.zeros(N_DIGITS, dtype=np.float64)
    if not draws:
        return scores
    current = draws[-1].digit(position)
    previous = draws[-2].digit(position) if len(draws) > 1 else current
    if abs(current - previous) >= LARGE_AMPLITUDE:
        for offset in LARGE_JUMP_OFFSETS:
            scores[(current + offset) % 10] += LARGE_JUMP_BONUS
    else:
        for offset in SMALL_JUMP_OFFSETS:
            scores[(current + offset) % 10] += SMALL_JUMP_BONUS
    return scores


class TrendSignal(BaseSignal):
    """Follows a running trend when there is one, otherwise the amplitude offsets."""

    name = "trend"

    def evaluate(self, draws: Sequence[Draw], window: int) -> SignalResult:
        scores = empty_scores()
        for p, position in enumerate(POSITIONS):
            trend = trend_scores(draws, position)
            scores[p] = trend if trend.any() else amplitude_scores(draws, position)
        return SignalResult(scores=scores * self.weight)
