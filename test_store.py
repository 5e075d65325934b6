"""
Test PolygonStore (working set CRUD)
====================================

Usage:
    source .venv/bin/activate && pytest test_store.py
"""

import pytest

from yardmap_zone import (
    Coordinate,
    DegenerateGeometryError,
    PolygonRecord,
    PolygonStore,
    UnknownPolygonIdError,
    polygon_area,
)

SQUARE = [Coordinate(0, 0), Coordinate(0, 1), Coordinate(1, 1), Coordinate(1, 0)]
TRIANGLE = [Coordinate(0, 0), Coordinate(0, 1), Coordinate(1, 0)]
LAWN = [
    Coordinate(39.744031, -105.1014172),
    Coordinate(39.744231, -105.1014172),
    Coordinate(39.744231, -105.1011172),
]


def assert_areas_fresh(store: PolygonStore) -> None:
    for record in store:
        assert record.area == polygon_area(record.path)


def test_add_creates_record_with_derived_area_and_id():
    store = PolygonStore()

    record = store.add(LAWN)

    assert record.id == "39.744031_-105.1014172-0"
    assert record.path == tuple(LAWN)
    assert record.area == polygon_area(LAWN)
    assert len(store) == 1
    assert record.id in store
    print(f"✓ Added {record}")


def test_add_same_start_vertex_gets_next_suffix():
    store = PolygonStore()

    first = store.add(SQUARE)
    second = store.add(TRIANGLE)

    assert first.id == "0_0-0"
    assert second.id == "0_0-1"
    assert store.ids() == (first.id, second.id)


def test_add_with_anchor_and_anchor_index():
    store = PolygonStore(anchor_index=2)
    record = store.add(SQUARE)
    assert record.id == "1_1-0"

    record = store.add(SQUARE, anchor=Coordinate(5.5, 6.5))
    assert record.id == "5.5_6.5-0"

    # anchor index past the end clamps to the last vertex
    store = PolygonStore(anchor_index=10)
    assert store.add(TRIANGLE).id == "1_0-0"


def test_add_empty_path_is_rejected():
    store = PolygonStore()

    with pytest.raises(DegenerateGeometryError):
        store.add([])

    assert len(store) == 0


def test_add_short_path_has_zero_area():
    store = PolygonStore()

    record = store.add([Coordinate(1, 1), Coordinate(2, 2)])

    assert record.area == 0.0


def test_replace_updates_area_and_keeps_id():
    store = PolygonStore()
    record = store.add(SQUARE)

    edited = store.replace(record.id, TRIANGLE)

    assert edited.id == record.id
    assert edited.path == tuple(TRIANGLE)
    assert edited.area == polygon_area(TRIANGLE)
    assert edited.area < record.area
    assert store.get(record.id) == edited
    assert len(store) == 1
    print(f"✓ Replaced: {record.area} -> {edited.area}")


def test_replace_leaves_other_records_untouched_and_moves_to_end():
    store = PolygonStore()
    a = store.add(SQUARE)
    b = store.add(LAWN)

    edited = store.replace(a.id, TRIANGLE)

    assert store.get(b.id) is b
    assert store.snapshot() == (b, edited)
    assert_areas_fresh(store)


def test_replace_unknown_id_raises_without_mutation():
    store = PolygonStore()
    record = store.add(SQUARE)
    before = store.snapshot()

    with pytest.raises(UnknownPolygonIdError) as exc_info:
        store.replace("nope-0", TRIANGLE)

    assert exc_info.value.polygon_id == "nope-0"
    assert store.snapshot() == before
    assert store.get(record.id) is record


def test_replace_after_clear_does_not_resurrect():
    store = PolygonStore()
    record = store.add(SQUARE)
    store.clear()

    with pytest.raises(UnknownPolygonIdError):
        store.replace(record.id, TRIANGLE)

    assert len(store) == 0


def test_ids_are_not_reissued_after_clear():
    store = PolygonStore()
    old = store.add(SQUARE)
    store.clear()

    new = store.add(SQUARE)

    assert old.id == "0_0-0"
    assert new.id == "0_0-1"


def test_clear_always_succeeds():
    store = PolygonStore()
    store.clear()
    store.add(SQUARE)
    store.add(TRIANGLE)

    store.clear()

    assert len(store) == 0
    assert store.snapshot() == ()
    assert store.total_area() == 0.0


def test_ids_stay_unique_across_repeated_edits():
    store = PolygonStore()
    records = [store.add(SQUARE) for _ in range(5)]
    for record in records:
        store.replace(record.id, TRIANGLE)
    records.append(store.add(SQUARE))

    ids = store.ids()
    assert len(ids) == len(set(ids)) == 6
    assert_areas_fresh(store)


def test_total_area_sums_records():
    store = PolygonStore()
    a = store.add(SQUARE)
    b = store.add(LAWN)

    assert store.total_area() == a.area + b.area


def test_record_dict_round_trip():
    store = PolygonStore()
    record = store.add(LAWN)

    data = record.to_dict()

    assert data["id"] == record.id
    assert data["path"][0] == {"lat": 39.744031, "lng": -105.1014172}
    assert PolygonRecord.from_dict(data) == record

    with pytest.raises(ValueError):
        PolygonRecord.from_dict({"id": "x"})


def main():
    """Run all tests."""
    print("\n🌱 yardmap_zone.store - PolygonStore Tests")
    print("=" * 60)
    raise SystemExit(pytest.main([__file__, "-v"]))


if __name__ == "__main__":
    main()
