"""Lottery service: the host-owned store of draws, predictions and validations.

The engine itself is pure; this service is where state lives. It keeps the
draw store, the prediction history keyed by target period, and the rolling
validation log, and validates pending predictions as their draws arrive.
"""

from collections.abc import Iterable
from pathlib import Path

from loguru import logger
from pydantic import BaseModel

from pick3_lottery.config import settings
from pick3_lottery.ml.backtesting import run_backtest
from pick3_lottery.ml.features.feature_engineer import calculate_all_features
from pick3_lottery.ml.inference.predictor import PredictionEngine
from pick3_lottery.ml.validation import validate_prediction
from pick3_lottery.schemas.features import FullFeatures
from pick3_lottery.schemas.lottery import Draw, ImportResult
from pick3_lottery.schemas.ml import Prediction, ValidationRecord
from pick3_lottery.schemas.statistics import BacktestSummary, StatisticsSummary
from pick3_lottery.services.statistics_service import get_statistics
from pick3_lottery.store.draw_store import DrawStore


class AppState(BaseModel):
    """Serializable snapshot of the service."""

    draws: list[Draw] = []
    predictions: list[Prediction] = []
    validations: list[ValidationRecord] = []
    validated_periods: list[str] = []
    window_size: int = settings.DEFAULT_WINDOW


class LotteryService:

    def __init__(
        self,
        store: DrawStore | None = None,
        engine: PredictionEngine | None = None,
        window_size: int | None = None,
        history_limit: int | None = None,
    ):
        self.store = store or DrawStore()
        self.engine = engine or PredictionEngine()
        self.window_size = window_size if window_size is not None else settings.DEFAULT_WINDOW
        self.history_limit = (
            history_limit if history_limit is not None else settings.VALIDATION_HISTORY_LIMIT
        )
        self._predictions: dict[str, Prediction] = {}
        self._validations: list[ValidationRecord] = []
        # survives eviction from the capped log, so evicted records are not redone
        self._validated_periods: set[str] = set()
        self.current_prediction: Prediction | None = None

    # ── read side ────────────────────────────────────────────────────

    @property
    def draws(self) -> tuple[Draw, ...]:
        return self.store.draws

    @property
    def predictions(self) -> list[Prediction]:
        return list(self._predictions.values())

    @property
    def validations(self) -> list[ValidationRecord]:
        return list(self._validations)

    def pending_predictions(self) -> list[Prediction]:
        return [p for p in self._predictions.values() if p.period not in self._validated_periods]

    def get_features(self, window: int | None = None) -> FullFeatures | None:
        """Feature set for the latest draw, or None when the window is not yet filled."""
        window = window or self.window_size
        if len(self.store) < window:
            return None
        return calculate_all_features(self.store.draws, window)

    def statistics(self) -> StatisticsSummary:
        return get_statistics(
            self._validations,
            total_draws=len(self.store),
            total_predictions=len(self._predictions),
        )

    def backtest(self, window: int | None = None, test_size: int | None = None) -> BacktestSummary:
        return run_backtest(self.store.draws, window or self.window_size, test_size)

    # ── write side ───────────────────────────────────────────────────

    def set_window_size(self, window_size: int) -> int:
        if not settings.MIN_WINDOW <= window_size <= settings.MAX_WINDOW:
            raise ValueError(
                f"window_size must be between {settings.MIN_WINDOW} and {settings.MAX_WINDOW}"
            )
        self.window_size = window_size
        return window_size

    def add_draw(self, period: str, hundred: int, ten: int, one: int, **extra) -> Draw:
        draw = self.store.add_draw(period, hundred, ten, one, **extra)
        self.validate_pending()
        return draw

    def import_text(self, text: str) -> ImportResult:
        result = self.store.import_text(text)
        if result.success:
            logger.info("Imported {} draws ({} stored)", result.imported, len(self.store))
            self.validate_pending()
        return result

    def merge(self, draws: Iterable[Draw]) -> int:
        merged = self.store.merge(draws)
        if merged:
            self.validate_pending()
        return merged

    def remove_draw(self, draw_id: str) -> bool:
        return self.store.remove(draw_id)

    def clear(self) -> None:
        self.store.clear()
        self._predictions.clear()
        self._validations.clear()
        self._validated_periods.clear()
        self.current_prediction = None
        logger.info("All data cleared")

    def generate_prediction(self, window: int | None = None) -> Prediction | None:
        prediction = self.engine.generate(self.store.draws, window or self.window_size)
        if prediction is None:
            return None
        # a newer prediction for the same period replaces the older one
        self._predictions.pop(prediction.period, None)
        self._predictions[prediction.period] = prediction
        self.current_prediction = prediction
        logger.info(
            "Prediction for {}: top {} / {} / {} (confidence {})",
            prediction.period,
            prediction.ranking("hundred")[:3],
            prediction.ranking("ten")[:3],
            prediction.ranking("one")[:3],
            prediction.overall_confidence,
        )
        self.validate_pending()
        return prediction

    def validate(self, actual: Draw, prediction: Prediction | None = None) -> ValidationRecord | None:
        """Validate `prediction` (default: the current one) against `actual`."""
        prediction = prediction or self.current_prediction
        if prediction is None:
            return None
        record = validate_prediction(prediction, actual)
        self._validated_periods.add(prediction.period)
        self._append_validation(record)
        return record

    def validate_pending(self) -> list[ValidationRecord]:
        """Validate every prediction whose target period now has a draw."""
        records = []
        for prediction in self.pending_predictions():
            actual = self.store.get_by_period(prediction.period)
            if actual is None:
                continue
            record = validate_prediction(prediction, actual)
            self._append_validation(record)
            records.append(record)
            logger.info(
                "Validated {}: ranks {}/{}/{}",
                record.period, record.hundred_rank, record.ten_rank, record.one_rank,
            )
        return records

    def _append_validation(self, record: ValidationRecord) -> None:
        self._validated_periods.add(record.period)
        self._validations.append(record)
        if len(self._validations) > self.history_limit:
            self._validations = self._validations[-self.history_limit:]

    # ── persistence ──────────────────────────────────────────────────

    def to_state(self) -> AppState:
        return AppState(
            draws=list(self.store.draws),
            predictions=self.predictions,
            validations=self.validations,
            validated_periods=sorted(self._validated_periods),
            window_size=self.window_size,
        )

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_state().model_dump_json(), encoding="utf-8")
        logger.info("Saved state to {}", path)

    def load(self, path: Path) -> None:
        state = AppState.model_validate_json(path.read_text(encoding="utf-8"))
        self.store = DrawStore(state.draws)
        self._predictions = {p.period: p for p in state.predictions}
        self._validations = state.validations[-self.history_limit:]
        self._validated_periods = set(state.validated_periods) | {v.period for v in state.validations}
        self.window_size = state.window_size
        self.current_prediction = state.predictions[-1] if state.predictions else None
        logger.info("Loaded {} draws from {}", len(self.store), path)
