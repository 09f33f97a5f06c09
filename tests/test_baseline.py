from math import isclose

from cemco2.baseline import is_ordinary, select_baseline
from cemco2.models import ScmEntry, ScmType

from conftest import make_material


def test_worst_ordinary_cement_is_baseline(catalog):
    b = select_baseline(catalog)
    assert b.material_id == "b"
    assert isclose(b.ef, 0.90)
    assert b.label == "CEM I 52.5R"


def test_ordinary_by_name_even_with_minor_constituents():
    m = make_material(name="CEM I 42.5N", scms=(ScmEntry(ScmType.LIMESTONE, 0.05),))
    assert is_ordinary(m)
    assert not is_ordinary(make_material(name="CEM II/A-S 42.5N"))


def test_ordinary_subset_wins_over_higher_ef_blend():
    blend = make_material(id="blend", name="CEM II/A-S", ef=0.95)
    opc = make_material(id="opc", name="CEM I", ef=0.85, scms=())
    assert select_baseline([blend, opc]).material_id == "opc"


def test_fallback_to_highest_ef_when_no_ordinary():
    lo = make_material(id="lo", name="CEM III/B", ef=0.25)
    hi = make_material(id="hi", name="CEM II/B-S", ef=0.62)
    assert select_baseline([lo, hi]).material_id == "hi"


def test_tie_keeps_first_in_catalog_order():
    first = make_material(id="first", name="CEM I 42.5N", ef=0.9, scms=())
    second = make_material(id="second", name="CEM I 52.5N", ef=0.9, scms=())
    assert select_baseline([first, second]).material_id == "first"
    assert select_baseline([second, first]).material_id == "second"


def test_empty_catalog_has_no_baseline():
    assert select_baseline([]) is None


def test_label_includes_strength_when_not_in_name():
    m = make_material(id="x", name="Portland", scms=(), strength_class="42.5N")
    assert select_baseline([m]).label == "Portland (42.5N)"
