"""Follow-relation signal: which digits tend to come right after the latest ones."""

from collections.abc import Sequence

import numpy as np

from pick3_lottery.config import settings
from pick3_lottery.ml.features.feature_engineer import calculate_follow_relations
from pick3_lottery.ml.models.base_model import N_DIGITS, N_POSITIONS, BaseSignal, SignalResult
from pick3_lottery.schemas.lottery import Draw
from pick3_lottery.schemas.ml import PatternMatch

FOLLOW_SCALE = 10.0
RANK_WEIGHTS = (3.0, 2.0, 1.0)


class FollowSignal(BaseSignal):
    """Top successors of each digit in the latest draw, applied to every position."""

    name = "follow_relations"

    def __init__(self, weight: float = 2.2, lookback: int | None = None):
        super().__init__(weight)
        self.lookback = lookback if lookback is not None else settings.FOLLOW_LOOKBACK

    def evaluate(self, draws: Sequence[Draw], window: int) -> SignalResult:
        votes = np.zeros(N_DIGITS, dtype=np.float64)
        if draws:
            relations = calculate_follow_relations(draws, min(self.lookback, len(draws)))
            for leader in draws[-1].digits:
                for rank, follower in enumerate(relations[leader]):
                    votes[follower] += RANK_WEIGHTS[rank]

        total = votes.sum()
        dist = votes / total if total > 0 else votes
        scores = np.tile(dist, (N_POSITIONS, 1)) * FOLLOW_SCALE * self.weight
        match = PatternMatch(
            feature_name=self.name,
            matched_count=int(np.count_nonzero(votes)),
            confidence=self.weight,
        )
        return SignalResult(scores=scores, matches=[match])
