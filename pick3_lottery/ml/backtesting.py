"""Walk-forward backtesting of the prediction engine.

Each of the most recent `test_size` draws is predicted from every draw before
it, then validated against the real outcome. The resulting validation records
are aggregated the same way live validations are.
"""

from collections.abc import Sequence

import numpy as np
from loguru import logger
from scipy import stats as sp_stats

from pick3_lottery.config import settings
from pick3_lottery.ml.inference.predictor import PredictionEngine
from pick3_lottery.ml.validation import validate_prediction
from pick3_lottery.schemas.lottery import Draw
from pick3_lottery.schemas.ml import ValidationRecord
from pick3_lottery.schemas.statistics import BacktestSummary
from pick3_lottery.services.statistics_service import get_statistics

SIGNIFICANCE_LEVEL = 0.05


def walk_forward(
    draws: Sequence[Draw],
    window_size: int,
    test_size: int,
    engine: PredictionEngine | None = None,
    threshold: int | None = None,
) -> list[ValidationRecord]:
    """Validation records for the last `test_size` draws, predicted one step ahead."""
    engine = engine or PredictionEngine()
    draws = tuple(draws)
    split = len(draws) - test_size

    records = []
    for i in range(split, len(draws)):
        prediction = engine.generate(draws[:i], window_size)
        if prediction is None:
            continue
        records.append(validate_prediction(prediction, draws[i], threshold=threshold))
    return records


def _binomial_p(hits: int, total: int, expected: float) -> float:
    if total == 0:
        return 1.0
    return float(sp_stats.binomtest(hits, total, expected, alternative="greater").pvalue)


def run_backtest(
    draws: Sequence[Draw],
    window_size: int | None = None,
    test_size: int | None = None,
    threshold: int | None = None,
) -> BacktestSummary:
    """Run a walk-forward backtest and test the hit counts against random ranking.

    Raises:
        ValueError: when the history cannot cover the test range.
    """
    window = window_size if window_size is not None else settings.DEFAULT_WINDOW
    size = test_size if test_size is not None else settings.BACKTEST_TEST_SIZE
    limit = threshold if threshold is not None else settings.HIT_THRESHOLD

    if size <= 0:
        raise ValueError("test_size must be positive")
    if len(draws) < size + settings.MIN_DRAWS:
        raise ValueError(
            f"Not enough data: {len(draws)} draws, need at least {size + settings.MIN_DRAWS}"
        )

    logger.info("[backtest] window={}, train={}, test={}", window, len(draws) - size, size)
    records = walk_forward(draws, window, size, threshold=limit)
    summary = get_statistics(records, total_draws=len(draws), total_predictions=len(records))

    n = len(records)
    expected_position = limit / 10
    expected_any = 1 - (1 - expected_position) ** 3

    p_values = {
        "hundred": _binomial_p(sum(r.hundred_hit for r in records), n, expected_position),
        "ten": _binomial_p(sum(r.ten_hit for r in records), n, expected_position),
        "one": _binomial_p(sum(r.one_hit for r in records), n, expected_position),
        "any": _binomial_p(sum(r.any_hit for r in records), n, expected_any),
    }
    average_rank = {
        "hundred": round(float(np.mean([r.hundred_rank for r in records])), 2) if n else 0.0,
        "ten": round(float(np.mean([r.ten_rank for r in records])), 2) if n else 0.0,
        "one": round(float(np.mean([r.one_rank for r in records])), 2) if n else 0.0,
    }

    return BacktestSummary(
        window_size=window,
        test_size=size,
        train_size=len(draws) - size,
        hit_threshold=limit,
        summary=summary,
        expected_position_rate=round(expected_position, 4),
        expected_any_rate=round(expected_any, 4),
        average_rank=average_rank,
        p_values={k: round(v, 6) for k, v in p_values.items()},
        is_significant=p_values["any"] < SIGNIFICANCE_LEVEL,
    )
