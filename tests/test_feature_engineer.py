import pytest

from pick3_lottery.ml.features.feature_engineer import (
    calculate_ac_value,
    calculate_all_features,
    calculate_diagonal_pattern,
    calculate_follow_relations,
    calculate_hot_cold,
    calculate_missing_layers,
    calculate_odd_even_pattern,
    calculate_odd_even_ratio,
    calculate_position_stats,
    calculate_prime_composite_ratio,
    calculate_road012_ratio,
    calculate_size_ratio,
    calculate_span,
    calculate_streaks,
    calculate_sum_value,
    calculate_symmetry_pattern,
    jaccard,
)
from pick3_lottery.schemas.lottery import Draw


def _draw(h, t, o, period="0001"):
    return Draw(id=period, period=period, hundred=h, ten=t, one=o)


def test_ratios_always_total_three(random_draws):
    for draw in random_draws:
        size = calculate_size_ratio(draw)
        odd_even = calculate_odd_even_ratio(draw)
        prime = calculate_prime_composite_ratio(draw)
        road = calculate_road012_ratio(draw)
        assert size.big + size.small == 3
        assert odd_even.odd + odd_even.even == 3
        assert prime.prime + prime.composite == 3
        assert road.road0 + road.road1 + road.road2 == 3
        assert 0 <= calculate_ac_value(draw) <= 3
        assert 0 <= calculate_sum_value(draw) <= 27
        assert 0 <= calculate_span(draw) <= 9


def test_single_draw_descriptors():
    draw = _draw(0, 1, 7)
    assert calculate_sum_value(draw) == 8
    assert calculate_span(draw) == 7
    assert calculate_size_ratio(draw).big == 1
    assert calculate_prime_composite_ratio(draw).prime == 1
    assert calculate_prime_composite_ratio(draw).composite == 2
    assert calculate_odd_even_pattern(draw) == "EOO"
    assert calculate_ac_value(_draw(5, 5, 5)) == 0
    assert calculate_ac_value(_draw(1, 3, 5)) == 2


def test_hot_cold_single_repeated_digit(make_draws):
    draws = make_draws([(5, 5, 5)] * 12)
    stats = {s.digit: s for s in calculate_hot_cold(draws, 30)}
    assert stats[5].category == "hot"
    assert stats[5].frequency == 36
    assert all(stats[d].category == "cold" for d in range(10) if d != 5)


def test_hot_cold_covers_every_digit_once(random_draws):
    stats = calculate_hot_cold(random_draws, 30)
    assert sorted(s.digit for s in stats) == list(range(10))
    assert sum(s.frequency for s in stats) == 90


def test_hot_cold_flat_distribution_is_warm(make_draws):
    draws = make_draws([(0, 1, 2), (3, 4, 5), (6, 7, 8), (9, 9, 9), (0, 1, 2)])
    # counts: 0,1,2 twice; 9 three times; others once -> spread exists
    assert any(s.category != "warm" for s in calculate_hot_cold(draws, 30))
    assert all(s.category == "warm" for s in calculate_hot_cold([], 30))


def test_streaks_are_exclusive(make_draws):
    draws = make_draws([(1, 2, 3), (4, 5, 6), (1, 7, 8)])
    stats = {s.digit: s for s in calculate_streaks(draws)}

    assert (stats[1].consecutive_hits, stats[1].consecutive_misses) == (1, 0)
    assert stats[1].current_streak == "hit"
    assert (stats[4].consecutive_hits, stats[4].consecutive_misses) == (0, 1)
    assert stats[9].consecutive_misses == 3
    assert stats[9].current_streak == "miss"
    for s in stats.values():
        assert s.consecutive_hits == 0 or s.consecutive_misses == 0


def test_position_stats(make_draws):
    draws = make_draws([(3, 0, 0), (1, 0, 0), (3, 0, 0), (2, 0, 0), (2, 0, 0), (3, 0, 0)])
    stats = calculate_position_stats(draws, "hundred", 30)
    assert stats.digit == 3
    assert stats.frequency == 3
    assert stats.current_missing == 2
    assert stats.max_missing == 2
    assert stats.avg_missing == pytest.approx(1.5)
    assert stats.amplitude == 1


def test_position_stats_empty():
    stats = calculate_position_stats([], "ten", 30)
    assert stats.frequency == 0
    assert stats.current_missing == 0


def test_follow_relations(make_draws):
    draws = make_draws([(1, 1, 1), (2, 3, 4), (1, 1, 1), (2, 3, 4), (1, 5, 5)])
    relations = calculate_follow_relations(draws, 30)
    assert relations[1] == [2, 3, 4]
    assert relations[2] == [1, 5]
    assert relations[5] == []
    assert len(relations) == 10


def test_missing_layers(make_draws):
    draws = make_draws([(1, 2, 3), (4, 5, 6), (1, 7, 8)])
    layers = calculate_missing_layers(draws)
    assert 9 in layers.layer1
    assert 1 not in layers.layer1 + layers.layer2 + layers.layer3


def test_diagonal_and_symmetry_patterns(make_draws):
    draws = make_draws([(0, 0, 1), (0, 4, 2), (6, 5, 0), (7, 0, 0)])
    assert calculate_diagonal_pattern(draws) == "rising"
    assert calculate_diagonal_pattern(draws[:3]) == "none"
    assert calculate_symmetry_pattern(_draw(4, 1, 4)) == "hundred-one"
    assert calculate_symmetry_pattern(_draw(4, 4, 1)) == "hundred-ten"
    assert calculate_symmetry_pattern(_draw(1, 4, 4)) == "ten-one"
    assert calculate_symmetry_pattern(_draw(1, 2, 3)) == "none"


def test_jaccard():
    assert jaccard([], []) == 1.0
    assert jaccard([1, 2], [2, 3]) == pytest.approx(1 / 3)


def test_all_features(random_draws):
    assert calculate_all_features([], 30) is None

    features = calculate_all_features(random_draws, 30)
    latest = random_draws[-1]
    assert features.window_size == 30
    assert features.basic.sum_value == sum(latest.digits)
    assert features.position.hundred.digit == latest.hundred
    assert features.composite.sum_tail == sum(latest.digits) % 10
    zones = features.composite.hot_warm_cold_zone
    assert sorted(zones.hot + zones.warm + zones.cold) == list(range(10))


def test_composite_features_have_no_duplicate_sum(random_draws):
    composite = calculate_all_features(random_draws, 30).composite
    latest = random_draws[-1]
    assert "digit_sum" not in type(composite).model_fields
    assert composite.product_tail == (latest.hundred * latest.ten * latest.one) % 10
