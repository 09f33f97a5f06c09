# cemco2/dataset.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import pandas as pd

from .config import CATALOG_PATH
from .models import Material, ScmEntry, ScmType, TransportBasis, TransportFactor
from .tags import scm_summary
from .utils import as_float, is_valid_dosage

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """The catalog document is not an array of material records."""


# Bundled catalog (EN 197-1 cements), same field names as the JSON files
DEFAULT_CATALOG_RECORDS: List[Dict[str, Any]] = [
    {
        "id": "cem1-425n", "standard": "EN 197-1", "cement_type": "CEM I 42.5N",
        "strength_class": "42.5N", "early_strength": "N",
        "clinker_fraction": 0.95, "scms": [],
        "density_kg_m3": 3150, "default_dosage_kg_per_m3": 320,
        "co2e_per_kg_binder_A1A3": 0.86, "transport_ef_kg_per_kg_km": 0.0001,
        "compatible_exposure_classes": ["XC1", "XC2", "XC3", "XC4", "XD1", "XD2", "XS1", "XF1"],
        "notes": "General purpose Portland cement.", "applications": ["general", "precast"],
        "is_common": True,
    },
    {
        "id": "cem1-525r", "standard": "EN 197-1", "cement_type": "CEM I 52.5R",
        "strength_class": "52.5R", "early_strength": "R",
        "clinker_fraction": 0.95, "scms": [],
        "density_kg_m3": 3150, "default_dosage_kg_per_m3": 340,
        "co2e_per_kg_binder_A1A3": 0.91, "transport_ef_kg_per_kg_km": 0.0001,
        "notes": "High early strength, fast stripping of formwork.", "applications": ["precast"],
        "is_common": True,
    },
    {
        "id": "cem2a-s-425n", "standard": "EN 197-1", "cement_type": "CEM II/A-S 42.5N",
        "strength_class": "42.5N", "early_strength": "N",
        "clinker_fraction": 0.82, "scms": [{"type": "S", "fraction": 0.15}],
        "density_kg_m3": 3080, "default_dosage_kg_per_m3": 320,
        "co2e_per_kg_binder_A1A3": 0.75, "transport_ef_kg_per_kg_km": 0.0001,
        "compatible_exposure_classes": ["XC1", "XC2", "XC3", "XC4", "XD1", "XD2", "XS1", "XS2", "XF1"],
        "notes": "Slag cement with Portland-like early strength.", "applications": ["general"],
        "is_common": True,
    },
    {
        "id": "cem2b-s-425n", "standard": "EN 197-1", "cement_type": "CEM II/B-S 42.5N",
        "strength_class": "42.5N", "early_strength": "N",
        "clinker_fraction": 0.67, "scms": [{"type": "S", "fraction": 0.30}],
        "density_kg_m3": 3050, "default_dosage_kg_per_m3": 330,
        "co2e_per_kg_binder_A1A3": 0.62, "transport_ef_kg_per_kg_km": 0.0001,
        "compatible_exposure_classes": ["XC1", "XC2", "XC3", "XC4", "XD1", "XD2", "XD3", "XS1", "XS2", "XS3"],
        "notes": "Good chloride resistance.", "applications": ["marine", "general"],
    },
    {
        "id": "cem2a-ll-425r", "standard": "EN 197-1", "cement_type": "CEM II/A-LL 42.5R",
        "strength_class": "42.5R", "early_strength": "R",
        "clinker_fraction": 0.82, "scms": [{"type": "LL", "fraction": 0.15}],
        "density_kg_m3": 3050, "default_dosage_kg_per_m3": 320,
        "co2e_per_kg_binder_A1A3": 0.76, "transport_ef_kg_per_m3_km": 0.032,
        "compatible_exposure_classes": ["XC1", "XC2", "XC3", "XC4", "XF1"],
        "notes": "Limestone cement, legacy volumetric transport factor.", "applications": ["general"],
        "is_common": True,
    },
    {
        "id": "cem2b-v-325r", "standard": "EN 197-1", "cement_type": "CEM II/B-V 32.5R",
        "strength_class": "32.5R", "early_strength": "R",
        "clinker_fraction": 0.67, "scms": [{"type": "V", "fraction": 0.30}],
        "density_kg_m3": 2900, "default_dosage_kg_per_m3": 340,
        "co2e_per_kg_binder_A1A3": 0.60, "transport_ef_kg_per_kg_km": 0.0001,
        "compatible_exposure_classes": ["XC1", "XC2", "XC3", "XC4", "XA2"],
        "notes": "Fly ash cement, slower strength gain.", "applications": ["foundations", "mass concrete"],
    },
    {
        "id": "cem2b-m-425n", "standard": "EN 197-1", "cement_type": "CEM II/B-M (S-LL) 42.5N",
        "strength_class": "42.5N", "early_strength": "N",
        "clinker_fraction": 0.68, "scms": [{"type": "S", "fraction": 0.20}, {"type": "LL", "fraction": 0.10}],
        "density_kg_m3": 3000, "default_dosage_kg_per_m3": 330,
        "co2e_per_kg_binder_A1A3": 0.63, "transport_ef_kg_per_kg_km": 0.0001,
        "compatible_exposure_classes": ["XC1", "XC2", "XC3", "XC4", "XD1", "XS1"],
        "notes": "Portland-composite cement.", "applications": ["general"],
    },
    {
        "id": "cem3a-425n", "standard": "EN 197-1", "cement_type": "CEM III/A 42.5N",
        "strength_class": "42.5N", "early_strength": "N",
        "clinker_fraction": 0.43, "scms": [{"type": "S", "fraction": 0.55}],
        "density_kg_m3": 2950, "default_dosage_kg_per_m3": 340,
        "co2e_per_kg_binder_A1A3": 0.42, "transport_ef_kg_per_kg_km": 0.0001,
        "compatible_exposure_classes": [
            "XC1", "XC2", "XC3", "XC4", "XD1", "XD2", "XD3", "XS1", "XS2", "XS3", "XA2", "XA3",
        ],
        "notes": "Blast-furnace cement, low heat of hydration.", "applications": ["marine", "foundations"],
        "is_common": True,
    },
    {
        "id": "cem3b-325n-lh", "standard": "EN 197-1", "cement_type": "CEM III/B 32.5N-LH",
        "strength_class": "32.5N", "early_strength": "N",
        "clinker_fraction": 0.22, "scms": [{"type": "S", "fraction": 0.75}],
        "density_kg_m3": 2900, "default_dosage_kg_per_m3": 360,
        "co2e_per_kg_binder_A1A3": 0.25, "transport_ef_kg_per_kg_km": 0.0001,
        "compatible_exposure_classes": ["XC1", "XC2", "XD1", "XD2", "XD3", "XS1", "XS2", "XS3", "XA2", "XA3"],
        "notes": "Very low clinker; not for freeze-thaw with de-icing salts.", "applications": ["mass concrete"],
    },
    {
        "id": "cem4b-v-325r", "standard": "EN 197-1", "cement_type": "CEM IV/B (V) 32.5R",
        "strength_class": "32.5R", "early_strength": "R",
        "clinker_fraction": 0.52, "scms": [{"type": "V", "fraction": 0.45}],
        "density_kg_m3": 2750, "default_dosage_kg_per_m3": 350,
        "co2e_per_kg_binder_A1A3": 0.50,
        "compatible_exposure_classes": ["XC1", "XC2", "XA2"],
        "notes": "Pozzolanic cement; no transport data declared.", "applications": ["foundations"],
    },
    {
        "id": "cem5a-s-v-325n", "standard": "EN 197-1", "cement_type": "CEM V/A (S-V) 32.5N",
        "strength_class": "32.5N", "early_strength": "N",
        "clinker_fraction": 0.48, "scms": [{"type": "S", "fraction": 0.25}, {"type": "V", "fraction": 0.25}],
        "density_kg_m3": 2800, "default_dosage_kg_per_m3": 350,
        "co2e_per_kg_binder_A1A3": 0.46, "transport_ef_kg_per_kg_km": 0.0001,
        "transport_ef_kg_per_m3_km": 0.035,
        "compatible_exposure_classes": ["XC1", "XC2", "XC3", "XD1", "XA2"],
        "notes": "Composite cement, slag + fly ash.", "applications": ["general", "foundations"],
    },
    {
        "id": "lc3-cem2c-m-425n", "standard": "EN 197-5", "cement_type": "CEM II/C-M (Q-LL) 42.5N",
        "strength_class": "42.5N", "early_strength": "N",
        "clinker_fraction": 0.55, "scms": [{"type": "CC", "fraction": 0.30}, {"type": "LL", "fraction": 0.15}],
        "density_kg_m3": 2950, "default_dosage_kg_per_m3": 330,
        "co2e_per_kg_binder_A1A3": 0.52, "transport_ef_kg_per_kg_km": 0.00012,
        "notes": "Limestone calcined clay (LC3) cement, exposure data pending.",
        "applications": ["general", "precast"],
    },
]


def _first(record: Mapping[str, Any], *keys: str):
    for k in keys:
        if k in record and record[k] is not None:
            return record[k]
    return None


def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def _parse_scms(raw, material_id: str) -> Tuple[ScmEntry, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, (list, tuple)):
        logger.warning("Material %s: 'scms' is not a list, ignored", material_id)
        return ()

    entries = []
    for item in raw:
        if isinstance(item, str):
            code, fraction = item, 0.0
        elif isinstance(item, Mapping):
            code, fraction = item.get("type"), item.get("fraction")
        else:
            logger.warning("Material %s: SCM entry %r ignored", material_id, item)
            continue
        scm_type = ScmType.parse(code)
        if scm_type is ScmType.OTHER:
            logger.warning("Material %s: unknown SCM code %r", material_id, code)
        entries.append(ScmEntry(scm_type, as_float(fraction, 0.0), str(code or "").strip()))
    return tuple(entries)


def _parse_transport(record: Mapping[str, Any]) -> Optional[TransportFactor]:
    per_kg = _first(record, "transport_ef_kg_per_kg_km")
    if is_valid_dosage(per_kg):
        return TransportFactor(TransportBasis.MASS, float(per_kg))
    per_m3 = _first(record, "transport_ef_kg_per_m3_km")
    if is_valid_dosage(per_m3):
        return TransportFactor(TransportBasis.VOLUME, float(per_m3))
    return None


def _parse_exposure(raw) -> Optional[Tuple[str, ...]]:
    if not isinstance(raw, (list, tuple)):
        return None
    return tuple(str(x).strip().upper() for x in raw if str(x).strip())


def material_from_record(record: Mapping[str, Any], index: int = 0) -> Material:
    """
    Build a Material from one catalog record.

    Missing or invalid fields are repaired (and logged) instead of raising.
    """
    raw_id = _text(str(_first(record, "id") or ""))
    material_id = raw_id or f"material-{index}"
    if not raw_id:
        logger.warning("Catalog record %d has no id, using %s", index, material_id)

    name = _text(_first(record, "cement_type", "name")) or material_id

    ef_raw = _first(record, "co2e_per_kg_binder_A1A3", "ef")
    if not is_valid_dosage(ef_raw):
        logger.warning("Material %s: invalid EF %r, using 0", material_id, ef_raw)

    dosage_raw = _first(record, "default_dosage_kg_per_m3", "default_dosage")
    default_dosage = float(dosage_raw) if is_valid_dosage(dosage_raw) else None
    if default_dosage is None:
        logger.warning("Material %s: no usable default dosage", material_id)

    applications = _first(record, "applications") or ()
    if not isinstance(applications, (list, tuple)):
        applications = ()

    return Material(
        id=material_id,
        name=name,
        clinker_fraction=as_float(_first(record, "clinker_fraction"), 0.0),
        ef=as_float(ef_raw, 0.0),
        default_dosage=default_dosage,
        density_kg_m3=as_float(_first(record, "density_kg_m3", "density"), 0.0),
        scms=_parse_scms(_first(record, "scms"), material_id),
        transport=_parse_transport(record),
        exposure_classes=_parse_exposure(_first(record, "compatible_exposure_classes")),
        notes=_text(_first(record, "notes")),
        applications=tuple(str(a) for a in applications),
        common=bool(_first(record, "is_common") or _first(record, "common")),
        strength_class=_text(_first(record, "strength_class")),
        standard=_text(_first(record, "standard")),
        early_strength=_text(_first(record, "early_strength")),
        declared_scope=_text(_first(record, "declared_scope")),
    )


def load_catalog(
    source: Union[str, Path, Iterable[Mapping[str, Any]], None] = None,
) -> Tuple[Material, ...]:
    """
    Load the material catalog once per session.

    - ``None``: the CEMCO2_CATALOG file if set, otherwise the bundled records
    - path: a JSON array of records
    - iterable: records already in memory
    """
    if source is None:
        source = CATALOG_PATH if CATALOG_PATH else DEFAULT_CATALOG_RECORDS

    if isinstance(source, (str, Path)):
        with open(source, "r", encoding="utf-8") as f:
            raw = json.load(f)
        origin = str(source)
    else:
        raw = source
        origin = "records"

    if isinstance(raw, Mapping) or isinstance(raw, (str, bytes)) or not isinstance(raw, Iterable):
        raise CatalogError(f"Catalog from {origin} must be a list of material records")

    materials = []
    for i, record in enumerate(raw):
        if not isinstance(record, Mapping):
            logger.warning("Catalog entry %d is not an object, skipped", i)
            continue
        materials.append(material_from_record(record, i))

    logger.info("Loaded %d materials from %s", len(materials), origin)
    return tuple(materials)


def default_catalog() -> Tuple[Material, ...]:
    return load_catalog(DEFAULT_CATALOG_RECORDS)


def catalog_table(catalog: Iterable[Material]) -> pd.DataFrame:
    rows = []
    for m in catalog:
        rows.append((
            m.id,
            m.name,
            m.strength_class,
            100.0 * m.clinker_fraction,
            scm_summary(m),
            m.ef,
            m.default_dosage,
            "" if m.transport is None else m.transport.basis.value,
            m.common,
        ))
    return pd.DataFrame(
        rows,
        columns=[
            "Id", "Cement", "Strength", "Clinker (%)", "SCMs",
            "EF (kg CO₂e/kg)", "Default dosage (kg/m³)", "Transport basis", "Common",
        ],
    )
