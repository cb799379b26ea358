"""Historical pattern similarity matching.

For each descriptive feature the current window is compared with every
earlier window of the same size; when they match, the draw that followed the
earlier window votes for its digits at each position.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np
from loguru import logger

from pick3_lottery.config import settings
from pick3_lottery.ml.features.feature_engineer import (
    calculate_hot_warm_cold_zone,
    calculate_missing_layers,
    calculate_odd_even_ratio,
    calculate_position_stats,
    calculate_road012_ratio,
    calculate_size_ratio,
    calculate_span,
    calculate_sum_value,
    jaccard,
)
from pick3_lottery.ml.models.base_model import (
    BaseSignal,
    SignalResult,
    empty_scores,
    normalize_rows,
)
from pick3_lottery.schemas.lottery import POSITIONS, Draw
from pick3_lottery.schemas.ml import PatternMatch

# nine matchers with confidences summing to 7.8; at 4.0 their combined mass
# per position (31.2) stays below follow + Markov (22 + 20)
PATTERN_SCALE = 4.0
SET_SIMILARITY_MIN = 0.5


def _exact(a, b) -> float:
    return 1.0 if a == b else 0.0


def _within(tolerance: int) -> Callable[[int, int], float]:
    def similarity(a: int, b: int) -> float:
        return 1.0 if abs(a - b) <= tolerance else 0.0
    return similarity


def _set_similarity(a, b) -> float:
    s = jaccard(a, b)
    return s if s >= SET_SIMILARITY_MIN else 0.0


def _groups_similarity(a: tuple, b: tuple) -> float:
    s = float(np.mean([jaccard(x, y) for x, y in zip(a, b)]))
    return s if s >= SET_SIMILARITY_MIN else 0.0


def _missing_proximity(a: tuple, b: tuple) -> float:
    return 1.0 if sum(abs(x - y) for x, y in zip(a, b)) <= 2 else 0.0


def _window_signature(window: Sequence[Draw]) -> dict[str, Any]:
    """Every matcher's feature value for one window."""
    last = window[-1]
    size = len(window)
    zones = calculate_hot_warm_cold_zone(window, size)
    layers = calculate_missing_layers(window)
    road = calculate_road012_ratio(last)
    return {
        "hot_cold": tuple(zones.hot),
        "sum_value": calculate_sum_value(last),
        "span_value": calculate_span(last),
        "size_ratio": calculate_size_ratio(last).big,
        "odd_even_ratio": calculate_odd_even_ratio(last).odd,
        "road012_ratio": (road.road0, road.road1, road.road2),
        "position_missing": tuple(
            calculate_position_stats(window, p, size).current_missing for p in POSITIONS
        ),
        "digit_zones": (tuple(zones.hot), tuple(zones.warm), tuple(zones.cold)),
        "missing_layers": (tuple(layers.layer1), tuple(layers.layer2), tuple(layers.layer3)),
    }


@dataclass(frozen=True)
class Matcher:
    name: str
    confidence: float
    similarity: Callable[[Any, Any], float]


MATCHERS: tuple[Matcher, ...] = (
    Matcher("hot_cold", 1.2, _set_similarity),
    Matcher("sum_value", 0.8, _within(1)),
    Matcher("span_value", 0.8, _within(1)),
    Matcher("size_ratio", 0.7, _exact),
    Matcher("odd_even_ratio", 0.7, _exact),
    Matcher("road012_ratio", 0.6, _exact),
    Matcher("position_missing", 1.0, _missing_proximity),
    Matcher("digit_zones", 1.0, _groups_similarity),
    Matcher("missing_layers", 1.0, _groups_similarity),
)


class PatternSignal(BaseSignal):
    """Votes from draws that followed historically similar windows."""

    name = "pattern"

    def __init__(self, weight: float = 1.0, lookback: int | None = None,
                 matchers: Sequence[Matcher] = MATCHERS):
        super().__init__(weight)
        self.lookback = lookback if lookback is not None else settings.PATTERN_LOOKBACK
        self.matchers = tuple(matchers)

    def collect_votes(
        self, draws: Sequence[Draw], window: int
    ) -> tuple[dict[str, np.ndarray], dict[str, int]]:
        """Raw vote arrays (3, 10) and match counts per matcher."""
        votes = {m.name: empty_scores() for m in self.matchers}
        counts = {m.name: 0 for m in self.matchers}

        n = len(draws)
        size = min(window, n)
        if size <= 0:
            return votes, counts

        current = _window_signature(draws[n - size:])
        first_end = max(size, n - self.lookback)

        for end in range(first_end, n):
            signature = _window_signature(draws[end - size:end])
            following = draws[end]
            for matcher in self.matchers:
                s = matcher.similarity(current[matcher.name], signature[matcher.name])
                if s <= 0:
                    continue
                counts[matcher.name] += 1
                for p, digit in enumerate(following.digits):
                    votes[matcher.name][p, digit] += s

        return votes, counts

    def evaluate(self, draws: Sequence[Draw], window: int) -> SignalResult:
        votes, counts = self.collect_votes(draws, window)
        scores = empty_scores()
        matches = []
        for matcher in self.matchers:
            scores += normalize_rows(votes[matcher.name]) * matcher.confidence
            matches.append(PatternMatch(
                feature_name=matcher.name,
                matched_count=counts[matcher.name],
                confidence=matcher.confidence,
            ))
        logger.debug("Pattern matches: {}", counts)
        return SignalResult(scores=scores * PATTERN_SCALE * self.weight, matches=matches)
