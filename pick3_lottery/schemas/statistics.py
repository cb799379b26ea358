"""Pydantic schemas for statistics."""

from pydantic import BaseModel


class StatisticsSummary(BaseModel):
    total_draws: int
    total_predictions: int
    overall_accuracy: int
    hundred_accuracy: int
    ten_accuracy: int
    one_accuracy: int
    current_streak: int
    max_streak: int
    recent_accuracy: list[int]


class BacktestSummary(BaseModel):
    window_size: int
    test_size: int
    train_size: int
    hit_threshold: int
    summary: StatisticsSummary
    expected_position_rate: float  # random baseline per position
    expected_any_rate: float       # random baseline for any of three
    average_rank: dict[str, float]
    p_values: dict[str, float]     # one-sided binomial test vs baseline
    is_significant: bool
