# cemco2/tags.py
from __future__ import annotations

from typing import List, Tuple

from .models import Material, ScmType
from .utils import round_half_up

ORDINARY_TAG = "OPC"
COMPOSITE_TAG = "Composite"

# Display order of SCM tags
_TAG_ORDER = [
    ScmType.SLAG,
    ScmType.FLY_ASH_SILICEOUS,
    ScmType.FLY_ASH_CALCAREOUS,
    ScmType.POZZOLANA,
    ScmType.CALCINED_POZZOLANA,
    ScmType.LIMESTONE,
    ScmType.LIMESTONE_L,
    ScmType.CALCINED_CLAY,
    ScmType.SILICA_FUME,
    ScmType.BURNT_SHALE,
    ScmType.OTHER,
]


def scm_label(scm: ScmType) -> str:
    """Short tag label for an SCM type."""
    if scm is ScmType.SLAG:
        return "Slag"
    if scm in (ScmType.FLY_ASH_SILICEOUS, ScmType.FLY_ASH_CALCAREOUS):
        return "FlyAsh"
    if scm in (ScmType.POZZOLANA, ScmType.CALCINED_POZZOLANA):
        return "Pozzolana"
    if scm in (ScmType.LIMESTONE, ScmType.LIMESTONE_L):
        return "Limestone"
    if scm is ScmType.CALCINED_CLAY:
        return "CalcinedClay"
    if scm is ScmType.SILICA_FUME:
        return "SilicaFume"
    if scm is ScmType.BURNT_SHALE:
        return "BurntShale"
    return "Other"


def scm_description(scm: ScmType) -> str:
    """Help text shown next to an SCM tag."""
    if scm is ScmType.SLAG:
        return "Ground granulated blast-furnace slag: by-product of iron making, slow early strength, low CO2."
    if scm is ScmType.FLY_ASH_SILICEOUS:
        return "Siliceous fly ash: coal combustion residue, improves workability, slower strength gain."
    if scm is ScmType.FLY_ASH_CALCAREOUS:
        return "Calcareous fly ash: high-lime combustion residue with some hydraulic activity."
    if scm is ScmType.POZZOLANA:
        return "Natural pozzolana: volcanic material reacting with lime to form binding phases."
    if scm is ScmType.CALCINED_POZZOLANA:
        return "Calcined natural pozzolana: thermally activated clays or shales."
    if scm in (ScmType.LIMESTONE, ScmType.LIMESTONE_L):
        return "Limestone filler: finely ground, mostly inert, dilutes clinker."
    if scm is ScmType.CALCINED_CLAY:
        return "Calcined clay: reactive metakaolin-type SCM, often combined with limestone (LC3)."
    if scm is ScmType.SILICA_FUME:
        return "Silica fume: very fine pozzolan for high strength and low permeability."
    if scm is ScmType.BURNT_SHALE:
        return "Burnt shale: oil shale calcined at around 800 °C, hydraulic and pozzolanic."
    return "Unrecognised constituent code."


def tags_for_material(material: Material) -> Tuple[str, ...]:
    types = material.scm_types
    if not types:
        return (ORDINARY_TAG,)

    tags: List[str] = []
    for scm in _TAG_ORDER:
        if scm in types:
            label = scm_label(scm)
            if label not in tags:
                tags.append(label)

    if len(types) >= 2:
        tags.append(COMPOSITE_TAG)
    return tuple(tags)


def scm_summary(material: Material) -> str:
    """e.g. 'S:35%+V:15%'; an em dash for plain cements."""
    if not material.scms:
        return "—"
    return "+".join(
        f"{entry.code or entry.type.value}:{round_half_up(entry.fraction * 100)}%" for entry in material.scms
    )
