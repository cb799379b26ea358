import pytest

from pick3_lottery.services.lottery_service import LotteryService


def _lines(triples, start=1):
    return "\n".join(f"{i:04d} {h} {t} {o}" for i, (h, t, o) in enumerate(triples, start=start))


@pytest.fixture
def service():
    svc = LotteryService(window_size=10)
    svc.import_text(_lines([(i % 10, (i * 3) % 10, (i * 7) % 10) for i in range(1, 13)]))
    return svc


def test_features_need_a_full_window():
    svc = LotteryService()
    svc.import_text(_lines([(1, 2, 3)] * 4))
    assert svc.get_features(5) is None
    assert svc.get_features(4) is not None


def test_prediction_is_validated_when_its_draw_arrives(service):
    prediction = service.generate_prediction()
    assert prediction.period == "0013"
    assert [p.period for p in service.pending_predictions()] == ["0013"]

    service.add_draw("0013", 1, 2, 3)
    assert service.pending_predictions() == []
    record = service.validations[-1]
    assert record.period == "0013"
    assert record.actual_hundred == 1


def test_new_prediction_replaces_same_period(service):
    service.generate_prediction()
    service.generate_prediction(window=5)
    assert len(service.predictions) == 1
    assert service.current_prediction.window_size == 5


def test_validation_history_is_capped():
    svc = LotteryService(history_limit=3)
    svc.import_text(_lines([(i % 10, 0, 0) for i in range(6)]))
    for i in range(6, 11):
        svc.generate_prediction()
        svc.add_draw(f"{i + 1:04d}", i % 10, 0, 0)
    assert [v.period for v in svc.validations] == ["0009", "0010", "0011"]
    assert svc.statistics().total_predictions == 5

    # evicted records stay validated; unrelated draws leave the log alone
    svc.add_draw("0099", 1, 2, 3)
    svc.import_text("0007 9 9 9")
    assert [v.period for v in svc.validations] == ["0009", "0010", "0011"]
    assert svc.pending_predictions() == []


def test_window_bounds(service):
    assert service.set_window_size(50) == 50
    with pytest.raises(ValueError):
        service.set_window_size(1)


def test_snapshot_round_trip(service, tmp_path):
    service.generate_prediction()
    service.add_draw("0013", 4, 5, 6)
    path = tmp_path / "state.json"
    service.save(path)

    restored = LotteryService()
    restored.load(path)
    assert [d.period for d in restored.draws] == [d.period for d in service.draws]
    assert restored.validations == service.validations
    assert restored.window_size == 10
    assert restored.current_prediction.period == "0013"


def test_clear(service):
    service.generate_prediction()
    service.clear()
    assert len(service.store) == 0
    assert service.current_prediction is None
    assert service.statistics().total_predictions == 0


def test_snapshot_keeps_evicted_periods_validated(tmp_path):
    svc = LotteryService(history_limit=2)
    svc.import_text(_lines([(i % 10, 0, 0) for i in range(6)]))
    for i in range(6, 10):
        svc.generate_prediction()
        svc.add_draw(f"{i + 1:04d}", i % 10, 0, 0)
    path = tmp_path / "state.json"
    svc.save(path)

    restored = LotteryService(history_limit=2)
    restored.load(path)
    restored.add_draw("0099", 1, 2, 3)
    assert [v.period for v in restored.validations] == ["0009", "0010"]
