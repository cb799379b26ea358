"""Pydantic schemas for predictions and their validation."""

from datetime import datetime

from pydantic import BaseModel, Field


class DigitScore(BaseModel):
    digit: int
    score: float
    probability: int  # percent, 0-100


class PatternMatch(BaseModel):
    feature_name: str
    matched_count: int  # supporting historical cases
    confidence: float   # fixed weight of the matcher


class CombinedPick(BaseModel):
    digits: list[int]
    score: float


class Prediction(BaseModel):
    model_config = {"frozen": True}

    period: str
    window_size: int
    hundred: list[DigitScore]
    ten: list[DigitScore]
    one: list[DigitScore]
    combined: list[CombinedPick] = Field(default_factory=list)
    overall_confidence: int
    pattern_matches: list[PatternMatch]
    generated_at: datetime

    def ranking(self, position: str) -> list[int]:
        return [item.digit for item in getattr(self, position)]


class PredictionSnapshot(BaseModel):
    """Ranking snapshot kept inside a validation record."""

    period: str
    predicted_at: datetime
    window_size: int
    hundred_ranking: list[int]
    ten_ranking: list[int]
    one_ranking: list[int]
    confidence: int


class ValidationRecord(BaseModel):
    model_config = {"frozen": True}

    period: str
    prediction: PredictionSnapshot
    actual_hundred: int
    actual_ten: int
    actual_one: int
    hundred_hit: bool
    ten_hit: bool
    one_hit: bool
    hundred_rank: int
    ten_rank: int
    one_rank: int
    validated_at: datetime

    @property
    def any_hit(self) -> bool:
        return self.hundred_hit or self.ten_hit or self.one_hit


class PredictRequest(BaseModel):
    window_size: int | None = None


class ValidateRequest(BaseModel):
    period: str
    hundred: int = Field(ge=0, le=9)
    ten: int = Field(ge=0, le=9)
    one: int = Field(ge=0, le=9)


class BacktestRequest(BaseModel):
    window_size: int | None = None
    test_size: int = 50
