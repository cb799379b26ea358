"""Compare a prediction with the draw that arrived for its period."""

from collections.abc import Sequence
from datetime import datetime

from pick3_lottery.config import settings
from pick3_lottery.schemas.lottery import Draw
from pick3_lottery.schemas.ml import Prediction, PredictionSnapshot, ValidationRecord


def rank_of(ranking: Sequence[int], digit: int) -> int:
    """1-based rank of `digit`; len(ranking) + 1 when it is missing."""
    try:
        return list(ranking).index(digit) + 1
    except ValueError:
        return len(ranking) + 1


def is_hit(rank: int, threshold: int | None = None) -> bool:
    limit = threshold if threshold is not None else settings.HIT_THRESHOLD
    return rank <= limit


def snapshot(prediction: Prediction) -> PredictionSnapshot:
    return PredictionSnapshot(
        period=prediction.period,
        predicted_at=prediction.generated_at,
        window_size=prediction.window_size,
        hundred_ranking=prediction.ranking("hundred"),
        ten_ranking=prediction.ranking("ten"),
        one_ranking=prediction.ranking("one"),
        confidence=prediction.overall_confidence,
    )


def validate_prediction(
    prediction: Prediction,
    actual: Draw,
    threshold: int | None = None,
    now: datetime | None = None,
) -> ValidationRecord:
    """Rank of each actual digit in the predicted ranking, and whether it made the top `threshold`."""
    h_rank = rank_of(prediction.ranking("hundred"), actual.hundred)
    t_rank = rank_of(prediction.ranking("ten"), actual.ten)
    o_rank = rank_of(prediction.ranking("one"), actual.one)

    return ValidationRecord(
        period=actual.period,
        prediction=snapshot(prediction),
        actual_hundred=actual.hundred,
        actual_ten=actual.ten,
        actual_one=actual.one,
        hundred_hit=is_hit(h_rank, threshold),
        ten_hit=is_hit(t_rank, threshold),
        one_hit=is_hit(o_rank, threshold),
        hundred_rank=h_rank,
        ten_rank=t_rank,
        one_rank=o_rank,
        validated_at=now or datetime.now(),
    )
