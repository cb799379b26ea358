"""First-order Markov transition signal per position."""

from collections.abc import Sequence

import numpy as np

from pick3_lottery.config import settings
from pick3_lottery.ml.models.base_model import N_DIGITS, BaseSignal, SignalResult, empty_scores
from pick3_lottery.schemas.lottery import POSITIONS, Draw, Position
from pick3_lottery.schemas.ml import PatternMatch

MARKOV_SCALE = 10.0


class MarkovSignal(BaseSignal):
    """Digit-to-digit transition probabilities within a lookback window.

    Rows are Laplace smoothed as (count + epsilon) / (total + 1); with
    epsilon = 0.1 over ten digits every row sums to exactly 1.
    """

    name = "markov_transition"

    def __init__(self, weight: float = 2.0, lookback: int | None = None, epsilon: float = 0.1):
        super().__init__(weight)
        self.lookback = lookback if lookback is not None else settings.MARKOV_LOOKBACK
        self.epsilon = epsilon

    def transition_counts(self, draws: Sequence[Draw], position: Position) -> np.ndarray:
        counts = np.zeros((N_DIGITS, N_DIGITS), dtype=np.float64)
        recent = draws[-self.lookback:] if self.lookback > 0 else draws[:0]
        for current, following in zip(recent, recent[1:]):
            counts[current.digit(position), following.digit(position)] += 1
        return counts

    def smooth(self, counts: np.ndarray) -> np.ndarray:
        totals = counts.sum(axis=-1, keepdims=True)
        return (counts + self.epsilon) / (totals + 1)

    def transition_matrix(self, draws: Sequence[Draw], position: Position) -> np.ndarray:
        return self.smooth(self.transition_counts(draws, position))

    def evaluate(self, draws: Sequence[Draw], window: int) -> SignalResult:
        scores = empty_scores()
        observed = 0
        if draws:
            last = draws[-1]
            for p, position in enumerate(POSITIONS):
                row = self.transition_counts(draws, position)[last.digit(position)]
                observed += int(row.sum())
                scores[p] = self.smooth(row)

        match = PatternMatch(feature_name=self.name, matched_count=observed, confidence=self.weight)
        return SignalResult(scores=scores * MARKOV_SCALE * self.weight, matches=[match])
