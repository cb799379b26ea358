"""Ensemble of scoring signals: combines every signal into raw digit scores."""

from collections.abc import Sequence

import numpy as np
from loguru import logger

from pick3_lottery.ml.models.base_model import BaseSignal, empty_scores
from pick3_lottery.ml.models.cycle_model import MissingSignal, PeriodicSignal
from pick3_lottery.ml.models.follow_model import FollowSignal
from pick3_lottery.ml.models.markov_model import MarkovSignal
from pick3_lottery.ml.models.pattern_model import PatternSignal
from pick3_lottery.ml.models.trend_model import TrendSignal
from pick3_lottery.schemas.lottery import Draw
from pick3_lottery.schemas.ml import PatternMatch

# Follow relations and Markov transitions carry the most weight, alone and
# together against all pattern matchers combined (see PATTERN_SCALE). Missing,
# periodic and trend are additive bonuses of at most 3 per digit.
SIGNAL_WEIGHTS = {
    "follow_relations": 2.2,
    "markov_transition": 2.0,
    "pattern": 1.0,
    "missing_value": 1.0,
    "periodic_pattern": 1.0,
    "trend": 1.0,
}


def default_signals(weights: dict[str, float] | None = None) -> list[BaseSignal]:
    w = {**SIGNAL_WEIGHTS, **(weights or {})}
    return [
        PatternSignal(w["pattern"]),
        FollowSignal(w["follow_relations"]),
        MarkovSignal(w["markov_transition"]),
        MissingSignal(w["missing_value"]),
        PeriodicSignal(w["periodic_pattern"]),
        TrendSignal(w["trend"]),
    ]


class EnsembleScorer:
    """Sum of weighted signal scores, shape (3, 10): hundred, ten, one."""

    def __init__(self, signals: Sequence[BaseSignal] | None = None):
        self.signals = list(signals) if signals is not None else default_signals()

    def score(
        self, draws: Sequence[Draw], window: int
    ) -> tuple[np.ndarray, list[PatternMatch], dict[str, np.ndarray]]:
        """Combined raw scores, matcher diagnostics and the per-signal breakdown."""
        total = empty_scores()
        matches: list[PatternMatch] = []
        breakdown: dict[str, np.ndarray] = {}

        for signal in self.signals:
            result = signal.evaluate(draws, window)
            total += result.scores
            matches.extend(result.matches)
            breakdown[signal.name] = result.scores

        logger.debug(
            "Signal mass: {}",
            {name: round(float(s.sum()), 2) for name, s in breakdown.items()},
        )
        return total, matches, breakdown
