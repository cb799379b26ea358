"""Pydantic schemas for derived feature records."""

from typing import Literal

from pydantic import BaseModel

HeatCategory = Literal["hot", "warm", "cold"]
StreakState = Literal["hit", "miss", "none"]


class HotColdStats(BaseModel):
    digit: int
    frequency: int
    category: HeatCategory


class StreakStats(BaseModel):
    digit: int
    consecutive_hits: int
    consecutive_misses: int
    current_streak: StreakState


class SizeRatio(BaseModel):
    big: int
    small: int


class OddEvenRatio(BaseModel):
    odd: int
    even: int


class PrimeCompositeRatio(BaseModel):
    prime: int
    composite: int


class Road012Ratio(BaseModel):
    road0: int
    road1: int
    road2: int


class PositionStats(BaseModel):
    digit: int
    frequency: int
    current_missing: int
    max_missing: int
    avg_missing: float
    amplitude: int


class PositionDiff(BaseModel):
    ht: int  # |hundred - ten|
    to: int  # |ten - one|
    ho: int  # |hundred - one|


class DigitZones(BaseModel):
    hot: list[int]
    warm: list[int]
    cold: list[int]


class MissingLayers(BaseModel):
    layer1: list[int]  # missed 1-3 draws
    layer2: list[int]  # missed 4-7 draws
    layer3: list[int]  # missed 8+ draws


class BasicFeatures(BaseModel):
    hot_cold: list[HotColdStats]
    streaks: list[StreakStats]
    sum_value: int
    span_value: int
    size_ratio: SizeRatio
    odd_even_ratio: OddEvenRatio
    prime_composite_ratio: PrimeCompositeRatio
    road012_ratio: Road012Ratio
    ac_value: int
    odd_even_pattern: str


class PositionFeatures(BaseModel):
    hundred: PositionStats
    ten: PositionStats
    one: PositionStats
    position_sum: int
    position_diff: PositionDiff
    repeat_position: list[bool]
    neighbor_position: list[bool]
    diagonal_pattern: str
    symmetry_pattern: str


class CompositeFeatures(BaseModel):
    sum_tail: int
    span_tail: int
    sum_span_combo: str
    size_odd_even_combo: str
    prime_road_combo: str
    hot_warm_cold_zone: DigitZones
    missing_layers: MissingLayers
    follow_relations: list[list[int]]  # index = leading digit
    product_tail: int


class FullFeatures(BaseModel):
    window_size: int
    basic: BasicFeatures
    position: PositionFeatures
    composite: CompositeFeatures
