"""Feature calculator for three-digit draws.

Every function here is pure: it takes an ordered draw sequence (oldest first)
and returns a derived value. Empty or short sequences produce neutral results
rather than errors; callers that need a "not enough data" signal check
`len(draws) >= window` themselves.
"""

from collections import Counter
from collections.abc import Sequence

import numpy as np

from pick3_lottery.schemas.features import (
    BasicFeatures,
    CompositeFeatures,
    DigitZones,
    FullFeatures,
    HotColdStats,
    MissingLayers,
    OddEvenRatio,
    PositionDiff,
    PositionFeatures,
    PositionStats,
    PrimeCompositeRatio,
    Road012Ratio,
    SizeRatio,
    StreakStats,
)
from pick3_lottery.schemas.lottery import Draw, Position

DIGITS = range(10)
PRIMES = frozenset({2, 3, 5, 7})
BIG_MIN = 5
HOT_RATIO = 0.7

# (low, high) inclusive miss-streak bounds; None = open ended
MISSING_LAYER_BOUNDS = ((1, 3), (4, 7), (8, None))


def _window(draws: Sequence[Draw], window: int) -> Sequence[Draw]:
    if window <= 0:
        return draws[:0]
    return draws[-window:]


def digit_counts(draws: Sequence[Draw]) -> np.ndarray:
    """Occurrences of each digit over all three positions. Shape (10,)."""
    counts = np.zeros(10, dtype=np.int64)
    for draw in draws:
        for d in draw.digits:
            counts[d] += 1
    return counts


def jaccard(a, b) -> float:
    """Set similarity; two empty sets are identical."""
    s1, s2 = set(a), set(b)
    if not s1 and not s2:
        return 1.0
    return len(s1 & s2) / len(s1 | s2)


# ── hot / cold ────────────────────────────────────────────────────────

def calculate_hot_cold(draws: Sequence[Draw], window: int = 30) -> list[HotColdStats]:
    """Frequency tier of each digit over the last `window` draws.

    Midpoint variant: a digit is hot when its count reaches 0.7x the maximum
    and sits above the max/min midpoint, warm when it reaches the midpoint,
    cold below it. With no spread between max and min every digit is warm.
    """
    counts = digit_counts(_window(draws, window))
    max_freq = int(counts.max())
    min_freq = int(counts.min())
    midpoint = (max_freq + min_freq) / 2

    result = []
    for digit in DIGITS:
        freq = int(counts[digit])
        if max_freq == min_freq:
            category = "warm"
        elif freq >= max_freq * HOT_RATIO and freq > midpoint:
            category = "hot"
        elif freq >= midpoint:
            category = "warm"
        else:
            category = "cold"
        result.append(HotColdStats(digit=digit, frequency=freq, category=category))
    return result


# ── hit / miss streaks ────────────────────────────────────────────────

def calculate_streaks(draws: Sequence[Draw]) -> list[StreakStats]:
    """Walk back from the latest draw while each digit keeps (not) appearing."""
    stats = []
    for digit in DIGITS:
        hits = 0
        misses = 0
        state = "none"
        for draw in reversed(draws):
            appeared = draw.contains(digit)
            if appeared and state != "miss":
                hits += 1
                state = "hit"
            elif not appeared and state != "hit":
                misses += 1
                state = "miss"
            else:
                break
        stats.append(StreakStats(
            digit=digit,
            consecutive_hits=hits,
            consecutive_misses=misses,
            current_streak=state,
        ))
    return stats


# ── single draw descriptors ──────────────────────────────────────────

def calculate_sum_value(draw: Draw) -> int:
    return sum(draw.digits)


def calculate_span(draw: Draw) -> int:
    return max(draw.digits) - min(draw.digits)


def calculate_size_ratio(draw: Draw) -> SizeRatio:
    big = sum(1 for d in draw.digits if d >= BIG_MIN)
    return SizeRatio(big=big, small=3 - big)


def calculate_odd_even_ratio(draw: Draw) -> OddEvenRatio:
    odd = sum(1 for d in draw.digits if d % 2 == 1)
    return OddEvenRatio(odd=odd, even=3 - odd)


def calculate_prime_composite_ratio(draw: Draw) -> PrimeCompositeRatio:
    """Primes are {2, 3, 5, 7}; every other digit (0 and 1 included) counts as composite."""
    prime = sum(1 for d in draw.digits if d in PRIMES)
    return PrimeCompositeRatio(prime=prime, composite=3 - prime)


def calculate_road012_ratio(draw: Draw) -> Road012Ratio:
    roads = Counter(d % 3 for d in draw.digits)
    return Road012Ratio(road0=roads[0], road1=roads[1], road2=roads[2])


def calculate_ac_value(draw: Draw) -> int:
    """Distinct non-zero pairwise differences among the three digits (0-3)."""
    h, t, o = draw.digits
    diffs = {abs(h - t), abs(t - o), abs(h - o)}
    diffs.discard(0)
    return len(diffs)


def calculate_odd_even_pattern(draw: Draw) -> str:
    return "".join("O" if d % 2 else "E" for d in draw.digits)


# ── position features ────────────────────────────────────────────────

def calculate_position_stats(
    draws: Sequence[Draw], position: Position, window: int = 30
) -> PositionStats:
    """Statistics of the latest digit at `position`.

    Frequency, max and average gap are measured inside the window; the current
    missing count scans the full history before the latest draw.
    """
    if not draws:
        return PositionStats(digit=0, frequency=0, current_missing=0,
                             max_missing=0, avg_missing=0.0, amplitude=0)

    digit = draws[-1].digit(position)
    recent = _window(draws, window)

    frequency = sum(1 for d in recent if d.digit(position) == digit)

    current_missing = 0
    for draw in reversed(draws[:-1]):
        if draw.digit(position) == digit:
            break
        current_missing += 1

    max_missing = 0
    run = 0
    gaps = []
    last_seen = -1
    for i, draw in enumerate(recent):
        if draw.digit(position) == digit:
            max_missing = max(max_missing, run)
            if last_seen >= 0:
                gaps.append(i - last_seen - 1)
            last_seen = i
            run = 0
        else:
            run += 1
    max_missing = max(max_missing, run)
    avg_missing = round(sum(gaps) / len(gaps), 1) if gaps else 0.0

    prev_digit = draws[-2].digit(position) if len(draws) > 1 else digit

    return PositionStats(
        digit=digit,
        frequency=frequency,
        current_missing=current_missing,
        max_missing=max_missing,
        avg_missing=avg_missing,
        amplitude=abs(digit - prev_digit),
    )


def calculate_position_diff(draw: Draw) -> PositionDiff:
    return PositionDiff(
        ht=abs(draw.hundred - draw.ten),
        to=abs(draw.ten - draw.one),
        ho=abs(draw.hundred - draw.one),
    )


def calculate_repeat_position(current: Draw, previous: Draw) -> list[bool]:
    return [a == b for a, b in zip(current.digits, previous.digits)]


def calculate_neighbor_position(current: Draw, previous: Draw) -> list[bool]:
    return [abs(a - b) == 1 for a, b in zip(current.digits, previous.digits)]


def calculate_diagonal_pattern(draws: Sequence[Draw]) -> str:
    """Staggered steps (hundred now, ten one draw back, one two draws back) moving together."""
    if len(draws) < 4:
        return "none"
    d0, d1, d2, d3 = draws[-4:]
    h_step = d3.hundred - d2.hundred
    t_step = d2.ten - d1.ten
    o_step = d1.one - d0.one
    if h_step == t_step == o_step and h_step != 0:
        return "rising" if h_step > 0 else "falling"
    return "none"


def calculate_symmetry_pattern(draw: Draw) -> str:
    if draw.hundred == draw.one:
        return "hundred-one"
    if draw.hundred == draw.ten:
        return "hundred-ten"
    if draw.ten == draw.one:
        return "ten-one"
    return "none"


# ── composite features ───────────────────────────────────────────────

def calculate_sum_tail(draw: Draw) -> int:
    return calculate_sum_value(draw) % 10


def calculate_span_tail(draw: Draw) -> int:
    return calculate_span(draw) % 10


def calculate_sum_span_combo(draw: Draw) -> str:
    return f"{calculate_sum_value(draw)}-{calculate_span(draw)}"


def calculate_size_odd_even_combo(draw: Draw) -> str:
    size = calculate_size_ratio(draw)
    odd_even = calculate_odd_even_ratio(draw)
    return f"B{size.big}S{size.small}O{odd_even.odd}E{odd_even.even}"


def calculate_prime_road_combo(draw: Draw) -> str:
    prime = calculate_prime_composite_ratio(draw)
    road = calculate_road012_ratio(draw)
    return f"P{prime.prime}C{prime.composite}_0{road.road0}1{road.road1}2{road.road2}"


def calculate_hot_warm_cold_zone(draws: Sequence[Draw], window: int = 30) -> DigitZones:
    hot_cold = calculate_hot_cold(draws, window)
    return DigitZones(
        hot=[h.digit for h in hot_cold if h.category == "hot"],
        warm=[h.digit for h in hot_cold if h.category == "warm"],
        cold=[h.digit for h in hot_cold if h.category == "cold"],
    )


def calculate_missing_layers(draws: Sequence[Draw]) -> MissingLayers:
    """Bucket digits by their current miss streak: 1-3, 4-7 and 8+ draws."""
    streaks = calculate_streaks(draws)
    layers = []
    for low, high in MISSING_LAYER_BOUNDS:
        layers.append([
            s.digit for s in streaks
            if s.consecutive_misses >= low and (high is None or s.consecutive_misses <= high)
        ])
    return MissingLayers(layer1=layers[0], layer2=layers[1], layer3=layers[2])


def follower_counts(draws: Sequence[Draw], window: int = 30) -> list[Counter]:
    """Per leading digit, how often each digit showed up in the following draw."""
    recent = _window(draws, window + 1)
    tallies = [Counter() for _ in DIGITS]
    for current, following in zip(recent, recent[1:]):
        for leader in set(current.digits):
            tallies[leader].update(following.digits)
    return tallies


def calculate_follow_relations(draws: Sequence[Draw], window: int = 30) -> list[list[int]]:
    """Top-3 successors per digit, most frequent first, ties to the smaller digit."""
    relations = []
    for tally in follower_counts(draws, window):
        ranked = sorted(tally.items(), key=lambda kv: (-kv[1], kv[0]))
        relations.append([digit for digit, _ in ranked[:3]])
    return relations


def calculate_product_tail(draw: Draw) -> int:
    h, t, o = draw.digits
    return (h * t * o) % 10


# ── full feature set ─────────────────────────────────────────────────

def calculate_basic_features(draws: Sequence[Draw], window: int = 30) -> BasicFeatures:
    current = draws[-1]
    return BasicFeatures(
        hot_cold=calculate_hot_cold(draws, window),
        streaks=calculate_streaks(draws),
        sum_value=calculate_sum_value(current),
        span_value=calculate_span(current),
        size_ratio=calculate_size_ratio(current),
        odd_even_ratio=calculate_odd_even_ratio(current),
        prime_composite_ratio=calculate_prime_composite_ratio(current),
        road012_ratio=calculate_road012_ratio(current),
        ac_value=calculate_ac_value(current),
        odd_even_pattern=calculate_odd_even_pattern(current),
    )


def calculate_position_features(draws: Sequence[Draw], window: int = 30) -> PositionFeatures:
    current = draws[-1]
    previous = draws[-2] if len(draws) > 1 else current
    return PositionFeatures(
        hundred=calculate_position_stats(draws, "hundred", window),
        ten=calculate_position_stats(draws, "ten", window),
        one=calculate_position_stats(draws, "one", window),
        position_sum=calculate_sum_value(current),
        position_diff=calculate_position_diff(current),
        repeat_position=calculate_repeat_position(current, previous),
        neighbor_position=calculate_neighbor_position(current, previous),
        diagonal_pattern=calculate_diagonal_pattern(draws),
        symmetry_pattern=calculate_symmetry_pattern(current),
    )


def calculate_composite_features(draws: Sequence[Draw], window: int = 30) -> CompositeFeatures:
    current = draws[-1]
    return CompositeFeatures(
        sum_tail=calculate_sum_tail(current),
        span_tail=calculate_span_tail(current),
        sum_span_combo=calculate_sum_span_combo(current),
        size_odd_even_combo=calculate_size_odd_even_combo(current),
        prime_road_combo=calculate_prime_road_combo(current),
        hot_warm_cold_zone=calculate_hot_warm_cold_zone(draws, window),
        missing_layers=calculate_missing_layers(draws),
        follow_relations=calculate_follow_relations(draws, window),
        product_tail=calculate_product_tail(current),
    )


def calculate_all_features(draws: Sequence[Draw], window: int = 30) -> FullFeatures | None:
    """Basic, position and composite features for the latest draw, or None without data."""
    if not draws:
        return None
    return FullFeatures(
        window_size=window,
        basic=calculate_basic_features(draws, window),
        position=calculate_position_features(draws, window),
        composite=calculate_composite_features(draws, window),
    )
