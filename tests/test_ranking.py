import pytest

from cemco2.design import compute_rows
from cemco2.ranking import (
    SortDir,
    SortKey,
    filter_scope,
    filter_search,
    limit_rows,
    next_sort,
    rank_rows,
    sort_rows,
)
from cemco2.models import DesignInputs

from conftest import make_material


@pytest.fixture
def rows(catalog, inputs):
    return compute_rows(catalog, inputs)


def ids(rows):
    return [r.id for r in rows]


def test_scope_filters(rows):
    assert ids(filter_scope(rows, "all")) == ["a", "b", "opc-low", "fly"]
    assert ids(filter_scope(rows, "common")) == ["a", "opc-low"]


def test_compatible_scope_drops_declared_mismatch(catalog):
    rows = compute_rows(catalog, DesignInputs(exposure_class="XS3"))
    assert ids(filter_scope(rows, "compatible")) == ["b", "opc-low", "fly"]


def test_search_matches_name_notes_and_tags(rows):
    assert ids(filter_search(rows, "42.5N")) == ["a", "opc-low"]
    assert ids(filter_search(rows, "SLOWER")) == ["fly"]
    assert ids(filter_search(rows, "opc")) == ["b", "opc-low"]
    assert ids(filter_search(rows, "   ")) == ids(rows)
    assert ids(filter_search(rows, None)) == ids(rows)
    assert filter_search(rows, "no such cement") == ()


def test_sort_numeric_and_string_keys(rows):
    assert ids(sort_rows(rows, "ef", "asc")) == ["a", "fly", "opc-low", "b"]
    assert ids(sort_rows(rows, SortKey.EF, SortDir.DESC)) == ["b", "opc-low", "fly", "a"]
    assert ids(sort_rows(rows, "name", "asc")) == ["opc-low", "b", "fly", "a"]
    assert ids(sort_rows(rows, "cement", "asc")) == ids(sort_rows(rows, "name", "asc"))


def test_sort_is_stable_for_equal_keys(inputs):
    same = [make_material(id=f"m{i}", ef=0.5) for i in range(5)]
    rows = compute_rows(same, inputs)
    assert ids(sort_rows(rows, "total", "asc")) == ["m0", "m1", "m2", "m3", "m4"]
    assert ids(sort_rows(rows, "total", "desc")) == ["m0", "m1", "m2", "m3", "m4"]


def test_sort_round_trip_restores_order(rows):
    asc = sort_rows(rows, "total", "asc")
    again = sort_rows(sort_rows(asc, "total", "desc"), "total", "asc")
    assert ids(again) == ids(asc)
    assert ids(sort_rows(asc, "total", "asc")) == ids(asc)


def test_unknown_sort_key_is_rejected(rows):
    with pytest.raises(ValueError):
        sort_rows(rows, "colour")


def test_limit_keeps_full_set_for_export(rows):
    view = rank_rows(rows, sort_key="ef", page_size=2)
    assert ids(view.visible) == ["a", "fly"]
    assert len(view.rows) == 4
    assert view.best_id == "a"
    assert limit_rows(rows, None) == tuple(rows)
    assert limit_rows(rows, 0) == tuple(rows)


def test_pipeline_order_scope_then_search_then_sort(rows):
    view = rank_rows(rows, scope="common", query="cem", sort_key="reduction", sort_dir="desc")
    assert ids(view.rows) == ["a", "opc-low"]


def test_empty_view_has_no_best():
    view = rank_rows((), page_size=10)
    assert view.rows == () and view.visible == ()
    assert view.best_id is None


def test_next_sort_toggles():
    assert next_sort("total", "asc", "total") == (SortKey.TOTAL, SortDir.DESC)
    assert next_sort("total", "desc", "total") == (SortKey.TOTAL, SortDir.ASC)
    assert next_sort("total", "desc", "ef") == (SortKey.EF, SortDir.ASC)
