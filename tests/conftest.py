import pytest

from cemco2.models import (
    DesignInputs,
    Material,
    ScmEntry,
    ScmType,
    TransportBasis,
    TransportFactor,
)


def make_material(
    id="m",
    name="CEM II/B-S 42.5N",
    ef=0.5,
    dosage=300.0,
    scms=(ScmEntry(ScmType.SLAG, 0.3),),
    transport=None,
    exposure=None,
    **kwargs,
):
    clinker = kwargs.pop("clinker_fraction", 0.65)
    return Material(
        id=id,
        name=name,
        clinker_fraction=clinker,
        ef=ef,
        default_dosage=dosage,
        scms=tuple(scms),
        transport=transport,
        exposure_classes=exposure,
        **kwargs,
    )


@pytest.fixture
def material_a():
    # EF 0.50, 300 kg/m³, mass-based transport 0.00008 kg/kg·km
    return make_material(
        id="a",
        name="CEM III/A 42.5N",
        ef=0.50,
        transport=TransportFactor(TransportBasis.MASS, 0.00008),
        exposure=("XC2", "XD1"),
        notes="Blast furnace cement",
        common=True,
    )


@pytest.fixture
def baseline_b():
    return make_material(id="b", name="CEM I 52.5R", ef=0.90, scms=(), clinker_fraction=0.95)


@pytest.fixture
def catalog(material_a, baseline_b):
    opc_low = make_material(id="opc-low", name="CEM I 42.5N", ef=0.80, scms=(), common=True)
    fly = make_material(
        id="fly",
        name="CEM II/B-V 32.5R",
        ef=0.60,
        scms=(ScmEntry(ScmType.FLY_ASH_SILICEOUS, 0.3),),
        transport=TransportFactor(TransportBasis.VOLUME, 0.03),
        notes="Fly ash, slower strength gain",
    )
    return (material_a, baseline_b, opc_low, fly)


@pytest.fixture
def inputs():
    # 100 m³, A4 excluded, global 300 kg/m³
    return DesignInputs(
        exposure_class="XC2",
        volume_m3=100.0,
        distance_km=0.0,
        include_a4=False,
        dosage_policy="global",
        global_dosage=300.0,
    )
