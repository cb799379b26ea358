"""Predictor: turns ensemble scores into a ranked next-draw prediction."""

from collections.abc import Sequence
from datetime import datetime
from itertools import product

import numpy as np
from loguru import logger

from pick3_lottery.config import settings
from pick3_lottery.ml.models.ensemble import EnsembleScorer
from pick3_lottery.schemas.lottery import POSITIONS, Draw
from pick3_lottery.schemas.ml import CombinedPick, DigitScore, PatternMatch, Prediction
from pick3_lottery.utils.period import next_period

SMOOTHING = 1.0
SMOOTHING_RATIO = 0.1  # of the mean score; keeps every digit >= ~0.9 %
MAX_CONFIDENCE = 95
CONFIDENCE_SCALE = 35
CONFIDENCE_PER_MATCHER = 2


def smooth_normalize(scores: Sequence[float], smoothing: float = SMOOTHING) -> list[DigitScore]:
    """Rank ten raw scores and attach integer percent probabilities.

    Every (non-negative) score gets the same additive constant, a base plus a
    share of the mean score, so no digit rounds down to 0 %. Ordering uses the
    raw score, ties go to the smaller digit.
    """
    raw = np.asarray(scores, dtype=np.float64)
    shifted = raw - min(float(raw.min()), 0.0)
    smoothed = shifted + smoothing + SMOOTHING_RATIO * float(shifted.mean())
    total = float(smoothed.sum())

    order = sorted(range(len(raw)), key=lambda d: (-raw[d], d))
    return [
        DigitScore(
            digit=d,
            score=round(float(raw[d]), 2),
            probability=int(round(smoothed[d] / total * 100)),
        )
        for d in order
    ]


def overall_confidence(matches: Sequence[PatternMatch]) -> int:
    """Grows with the number of matchers that found support and their weights."""
    valid = [m for m in matches if m.matched_count > 0]
    if not valid:
        return 0
    avg_conf = sum(m.confidence for m in valid) / len(valid)
    value = round(avg_conf * CONFIDENCE_SCALE + CONFIDENCE_PER_MATCHER * len(valid))
    return min(int(value), MAX_CONFIDENCE)


def combine_top_picks(
    hundred: list[DigitScore],
    ten: list[DigitScore],
    one: list[DigitScore],
    top_k: int = 3,
    top_n: int = 10,
) -> list[CombinedPick]:
    """Digit triples from the top-k of each position, scored by mean probability."""
    picks = []
    for h, t, o in product(hundred[:top_k], ten[:top_k], one[:top_k]):
        score = round((h.probability + t.probability + o.probability) / 3, 2)
        picks.append(CombinedPick(digits=[h.digit, t.digit, o.digit], score=score))
    picks.sort(key=lambda c: (-c.score, c.digits))
    return picks[:top_n]


class PredictionEngine:
    """Pure function of (draws, window) -> Prediction | None."""

    def __init__(self, scorer: EnsembleScorer | None = None, min_draws: int | None = None):
        self.scorer = scorer or EnsembleScorer()
        self.min_draws = min_draws if min_draws is not None else settings.MIN_DRAWS

    def generate(
        self,
        draws: Sequence[Draw],
        window_size: int | None = None,
        now: datetime | None = None,
    ) -> Prediction | None:
        if len(draws) < self.min_draws:
            logger.debug("Not enough draws to predict: {} < {}", len(draws), self.min_draws)
            return None

        window = max(1, window_size if window_size is not None else settings.DEFAULT_WINDOW)
        draws = tuple(draws)
        scores, matches, _ = self.scorer.score(draws, window)

        ranked = {position: smooth_normalize(scores[p]) for p, position in enumerate(POSITIONS)}
        return Prediction(
            period=next_period(draws[-1].period),
            window_size=window,
            hundred=ranked["hundred"],
            ten=ranked["ten"],
            one=ranked["one"],
            combined=combine_top_picks(
                ranked["hundred"], ranked["ten"], ranked["one"],
                top_n=settings.COMBINED_TOP_N,
            ),
            overall_confidence=overall_confidence(matches),
            pattern_matches=matches,
            generated_at=now or datetime.now(),
        )


def generate_prediction(
    draws: Sequence[Draw],
    window_size: int | None = None,
    now: datetime | None = None,
) -> Prediction | None:
    """Predict the draw after `draws` (oldest first); None with fewer than 5 draws."""
    return PredictionEngine().generate(draws, window_size, now=now)
