"""Base class for the scoring signals combined by the prediction engine."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from pick3_lottery.schemas.lottery import Draw
from pick3_lottery.schemas.ml import PatternMatch

N_POSITIONS = 3
N_DIGITS = 10


def empty_scores() -> np.ndarray:
    return np.zeros((N_POSITIONS, N_DIGITS), dtype=np.float64)


def normalize_rows(votes: np.ndarray) -> np.ndarray:
    """Scale each non-empty row to sum to 1; empty rows stay zero."""
    totals = votes.sum(axis=1, keepdims=True)
    return np.divide(votes, totals, out=np.zeros_like(votes), where=totals > 0)


@dataclass
class SignalResult:
    """Per-position digit scores of one signal, shape (3, 10), plus diagnostics."""

    scores: np.ndarray
    matches: list[PatternMatch] = field(default_factory=list)


class BaseSignal(ABC):
    """Abstract base for all scoring signals.

    A signal turns the draw history into additive scores for every digit at
    every position (hundred, ten, one). Signals hold no state between calls.
    """

    name: str = ""

    def __init__(self, weight: float = 1.0):
        self.weight = weight

    @abstractmethod
    def evaluate(self, draws: Sequence[Draw], window: int) -> SignalResult:
        """Score the next draw.

        Args:
            draws: Full history, oldest first.
            window: Window size requested by the caller.

        Returns:
            SignalResult with already weighted scores.
        """
        ...
