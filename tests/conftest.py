import random
from datetime import datetime

import pytest

from pick3_lottery.schemas.lottery import Draw

FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0)


def build_draws(triples, start=1):
    return [
        Draw(id=f"d{i}", period=f"{i:04d}", hundred=h, ten=t, one=o)
        for i, (h, t, o) in enumerate(triples, start=start)
    ]


@pytest.fixture
def make_draws():
    return build_draws


@pytest.fixture
def random_draws():
    rng = random.Random(42)
    triples = [(rng.randint(0, 9), rng.randint(0, 9), rng.randint(0, 9)) for _ in range(80)]
    return build_draws(triples)


@pytest.fixture
def cyclic_draws():
    """Hundreds run 1..9,0 over periods 0001..0010."""
    return build_draws([((i % 10), (i * 3) % 10, (i * 7) % 10) for i in range(1, 11)])


@pytest.fixture
def fixed_now():
    return FIXED_NOW
