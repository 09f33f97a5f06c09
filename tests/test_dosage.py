import math

import pytest

from cemco2.config import FALLBACK_DOSAGE, STRENGTH_TO_DOSAGE
from cemco2.dosage import dosage_for_strength, resolve_dosage, suggested_dosage
from cemco2.models import DesignInputs

from conftest import make_material


def test_per_cement_without_override_uses_catalog_default():
    m = make_material(id="m1", dosage=355.0)
    inputs = DesignInputs(dosage_policy="perCement", global_dosage=300.0)
    assert resolve_dosage(m, inputs) == 355.0


def test_per_cement_override_wins_and_zero_is_allowed():
    m = make_material(id="m1", dosage=355.0)
    inputs = DesignInputs(dosage_policy="perCement").with_override("m1", 410)
    assert resolve_dosage(m, inputs) == 410.0
    assert resolve_dosage(m, inputs.with_override("m1", 0)) == 0.0


def test_per_cement_ignores_invalid_override():
    m = make_material(id="m1", dosage=355.0)
    for bad in (-5, float("nan"), float("inf"), "abc", None):
        inputs = DesignInputs(dosage_policy="perCement", overrides={"m1": bad})
        assert resolve_dosage(m, inputs) == 355.0


def test_per_cement_missing_default_falls_back_to_strength():
    m = make_material(id="m1", dosage=None)
    inputs = DesignInputs(dosage_policy="perCement", concrete_strength="C40/50")
    assert resolve_dosage(m, inputs) == STRENGTH_TO_DOSAGE["C40/50"]


def test_global_policy_ignores_overrides():
    m = make_material(id="m1", dosage=355.0)
    inputs = DesignInputs(dosage_policy="global", global_dosage=300.0, overrides={"m1": 999.0})
    assert resolve_dosage(m, inputs) == 300.0


def test_global_zero_uses_strength_then_default():
    m = make_material(id="m1", dosage=355.0)
    inputs = DesignInputs(dosage_policy="global", global_dosage=0, concrete_strength="C30/37")
    assert resolve_dosage(m, inputs) == STRENGTH_TO_DOSAGE["C30/37"]

    unknown = DesignInputs(dosage_policy="global", global_dosage=0, concrete_strength="C99/105")
    assert resolve_dosage(m, unknown) == 355.0


def test_strength_lookup_is_case_insensitive():
    assert dosage_for_strength(" c25/30 ") == STRENGTH_TO_DOSAGE["C25/30"]
    assert dosage_for_strength(None) is None


@pytest.mark.parametrize("policy", ["global", "perCement"])
@pytest.mark.parametrize("override", [None, -1.0, float("nan"), 250.0])
@pytest.mark.parametrize("default", [None, 330.0])
@pytest.mark.parametrize("global_dosage", [float("nan"), -10.0, 0.0, 310.0])
@pytest.mark.parametrize("strength", ["", "C25/30", "bogus"])
def test_resolver_is_total(policy, override, default, global_dosage, strength):
    m = make_material(id="m1", dosage=default)
    overrides = {} if override is None else {"m1": override}
    inputs = DesignInputs(
        dosage_policy=policy,
        global_dosage=global_dosage,
        concrete_strength=strength,
        overrides=overrides,
    )
    d = resolve_dosage(m, inputs)
    assert math.isfinite(d)
    assert d >= 0


def test_everything_missing_hits_fallback():
    m = make_material(id="m1", dosage=None)
    inputs = DesignInputs(dosage_policy="global", global_dosage=float("nan"), concrete_strength="")
    assert resolve_dosage(m, inputs) == FALLBACK_DOSAGE


def test_suggested_dosage_follows_per_cement_chain_without_overrides():
    with_default = make_material(id="m1", dosage=355.0)
    no_default = make_material(id="m2", dosage=None)
    inputs = DesignInputs(dosage_policy="global", global_dosage=250.0, concrete_strength="C40/50")
    inputs = inputs.with_override("m1", 0).with_override("m2", 0)
    assert suggested_dosage(with_default, inputs) == 355.0
    assert suggested_dosage(no_default, inputs) == STRENGTH_TO_DOSAGE["C40/50"]
    assert suggested_dosage(no_default, DesignInputs(concrete_strength="C99/99")) == FALLBACK_DOSAGE
