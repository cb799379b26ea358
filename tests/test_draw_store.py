from pick3_lottery.store.draw_store import DrawStore, parse_draw_line


def test_parse_draw_line_separators():
    for line in ("2024001 1 2 3", "2024001,1,2,3", "2024001\t1\t2\t3", "  2024001 , 1  2 3 "):
        draw = parse_draw_line(line)
        assert draw is not None
        assert draw.period == "2024001"
        assert draw.digits == (1, 2, 3)


def test_parse_draw_line_rejects_bad_lines():
    assert parse_draw_line("2024001 1 2") is None
    assert parse_draw_line("2024001 1 x 3") is None
    assert parse_draw_line("2024001 1 12 3") is None
    assert parse_draw_line("2024001 -1 2 3") is None


def test_import_skips_malformed_lines():
    store = DrawStore()
    result = store.import_text("0001 1 2 3\nbad line\n0002 4 5 10\n\n0003 7 8 9\n")
    assert result.success
    assert result.imported == 2
    assert [d.period for d in store] == ["0001", "0003"]


def test_import_without_valid_lines_fails():
    store = DrawStore()
    result = store.import_text("nothing here\n")
    assert not result.success
    assert result.imported == 0
    assert len(store) == 0


def test_duplicate_period_replaces_existing():
    store = DrawStore()
    store.import_text("0001 1 2 3")
    store.import_text("0001 4 5 6")
    assert len(store) == 1
    assert store.get_by_period("0001").digits == (4, 5, 6)


def test_store_stays_sorted_by_period():
    store = DrawStore()
    store.add_draw("0003", 3, 3, 3)
    store.add_draw("0001", 1, 1, 1)
    store.import_text("0002 2 2 2")
    assert [d.period for d in store.draws] == ["0001", "0002", "0003"]
    assert store.latest.period == "0003"


def test_remove_and_clear():
    store = DrawStore()
    draw = store.add_draw("0001", 1, 2, 3)
    store.add_draw("0002", 4, 5, 6)
    assert store.remove(draw.id)
    assert not store.remove(draw.id)
    assert [d.period for d in store] == ["0002"]
    store.clear()
    assert len(store) == 0
    assert store.latest is None


def test_export_round_trips_through_import():
    store = DrawStore()
    store.import_text("0001 1 2 3\n0002 4 5 6")
    copy = DrawStore()
    copy.import_text(store.export_text())
    assert [d.digits for d in copy] == [(1, 2, 3), (4, 5, 6)]


def test_reimport_keeps_id_and_counts_only_changes():
    store = DrawStore()
    store.import_text("0001 1 2 3\n0002 4 5 6")
    first_id = store.get_by_period("0001").id

    result = store.import_text("0001 1 2 3\n0002 4 5 6")
    assert result.success
    assert result.imported == 0
    assert store.get_by_period("0001").id == first_id

    result = store.import_text("0001 7 8 9\n0002 4 5 6")
    assert result.imported == 1
    assert store.get_by_period("0001").id == first_id
    assert store.get_by_period("0001").digits == (7, 8, 9)


def test_add_existing_period_keeps_id():
    store = DrawStore()
    first = store.add_draw("0001", 1, 2, 3)
    second = store.add_draw("0001", 3, 2, 1)
    assert second.id == first.id
    assert store.remove(first.id)
    assert len(store) == 0
