from datetime import datetime

from pick3_lottery.schemas.ml import PredictionSnapshot, ValidationRecord
from pick3_lottery.services.statistics_service import (
    current_streak,
    get_statistics,
    longest_streak,
    recent_accuracy,
)

_NOW = datetime(2024, 1, 1)


def _record(period, hundred=False, ten=False, one=False):
    snapshot = PredictionSnapshot(
        period=period, predicted_at=_NOW, window_size=30,
        hundred_ranking=list(range(10)), ten_ranking=list(range(10)),
        one_ranking=list(range(10)), confidence=40,
    )
    return ValidationRecord(
        period=period, prediction=snapshot,
        actual_hundred=0, actual_ten=0, actual_one=0,
        hundred_hit=hundred, ten_hit=ten, one_hit=one,
        hundred_rank=1 if hundred else 5, ten_rank=1 if ten else 5, one_rank=1 if one else 5,
        validated_at=_NOW,
    )


def test_empty_history_is_all_zero():
    summary = get_statistics([])
    assert summary.overall_accuracy == 0
    assert summary.hundred_accuracy == summary.ten_accuracy == summary.one_accuracy == 0
    assert summary.current_streak == summary.max_streak == 0
    assert summary.recent_accuracy == []


def test_rates_and_streaks():
    records = [
        _record("0004", ten=True),
        _record("0001", hundred=True),
        _record("0002", hundred=True, one=True),
        _record("0003"),
        _record("0005", one=True),
    ]
    summary = get_statistics(records, total_draws=10, total_predictions=5)

    assert summary.total_draws == 10
    assert summary.overall_accuracy == 80
    assert summary.hundred_accuracy == 40
    assert summary.ten_accuracy == 20
    assert summary.one_accuracy == 40
    # sorted by period: hit, hit, miss, hit, hit
    assert summary.max_streak == 2
    assert summary.current_streak == 2
    assert summary.recent_accuracy == [100, 100, 67, 75, 80]


def test_streak_helpers():
    assert longest_streak([True, True, False, True, True, True]) == 3
    assert current_streak([True, False]) == 0
    assert recent_accuracy([True] * 30, span=20) == [100] * 20
