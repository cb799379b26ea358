"""Missing-value ("due number") and periodicity signals."""

from collections.abc import Sequence

import numpy as np

from pick3_lottery.ml.models.base_model import BaseSignal, SignalResult, empty_scores
from pick3_lottery.schemas.lottery import POSITIONS, Draw, Position


def appearances(draws: Sequence[Draw], position: Position, digit: int) -> list[int]:
    return [i for i, d in enumerate(draws) if d.digit(position) == digit]


def missing_count(draws: Sequence[Draw], position: Position, digit: int) -> int:
    """Draws since `digit` last appeared at `position`; 0 when it is the latest digit."""
    count = 0
    for draw in reversed(draws):
        if draw.digit(position) == digit:
            return count
        count += 1
    return count


class MissingSignal(BaseSignal):
    """Bonus growing with the current miss streak, capped."""

    name = "missing_value"

    def __init__(self, weight: float = 1.0, per_draw: float = 0.3, cap: float = 3.0):
        super().__init__(weight)
        self.per_draw = per_draw
        self.cap = cap

    def bonus(self, missing: int) -> float:
        return min(missing * self.per_draw, self.cap)

    def evaluate(self, draws: Sequence[Draw], window: int) -> SignalResult:
        scores = empty_scores()
        if draws:
            for p, position in enumerate(POSITIONS):
                for digit in range(10):
                    scores[p, digit] = self.bonus(missing_count(draws, position, digit))
        return SignalResult(scores=scores * self.weight)


class PeriodicSignal(BaseSignal):
    """Bonus for digits with a stable return interval that are due about now."""

    name = "periodic_pattern"

    def __init__(self, weight: float = 1.0, min_appearances: int = 3,
                 max_std: float = 5.0, min_stability: float = 2.0,
                 tolerance: float = 2.0, factor: float = 0.6):
        super().__init__(weight)
        self.min_appearances = min_appearances
        self.max_std = max_std
        self.min_stability = min_stability
        self.tolerance = tolerance
        self.factor = factor

    def cycle_bonus(self, draws: Sequence[Draw], position: Position, digit: int) -> float:
        seen = appearances(draws, position, digit)
        if len(seen) < self.min_appearances:
            return 0.0

        intervals = np.diff(seen)
        mean_interval = float(intervals.mean())
        stability = max(0.0, self.max_std - float(intervals.std()))
        current_missing = len(draws) - 1 - seen[-1]

        if abs(current_missing - mean_interval) <= self.tolerance and stability > self.min_stability:
            return stability * self.factor
        return 0.0

    def evaluate(self, draws: Sequence[Draw], window: int) -> SignalResult:
        scores = empty_scores()
        for p, position in enumerate(POSITIONS):
            for digit in range(10):
                scores[p, digit] = self.cycle_bonus(draws, position, digit)
        return SignalResult(scores=scores * self.weight)
