# cemco2/export.py
from __future__ import annotations

import logging
import re
from typing import Iterable, List, Sequence

import pandas as pd

from .config import EXPORT_DELIMITER, EXPORT_DELIMITER_SUBSTITUTE
from .models import ComputedRow, DesignInputs
from .tags import scm_summary
from .utils import as_float, round_half_up

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "Cement",
    "Strength",
    "Clinker%",
    "EF (kgCO2/kg)",
    "Dosage (kg/m3)",
    "A1-A3 (kg/m3)",
    "A4 (kg)",
    "Total element (kg)",
    "Δ vs baseline (%)",
]

DETAILED_EXPORT_COLUMNS = [
    "Cement", "Type", "StrengthGrade", "EarlyStrength", "Clinker%", "SCMs",
    "DosageUsed_kg_per_m3", "CO2e_A1A3_kg_per_m3", "A4_kg", "Total_Element_kg",
    "ExposureCompatible", "Tags", "Notes",
]

_LINE_BREAKS = re.compile(r"\r\n|\r|\n")


def sanitize(value) -> str:
    """Keep a free-text field on one line and free of delimiters."""
    if not isinstance(value, str):
        return ""
    return _LINE_BREAKS.sub(" ", value).replace(EXPORT_DELIMITER, EXPORT_DELIMITER_SUBSTITUTE)


def _num(x) -> str:
    return format(as_float(x), ".15g")


def assumptions_line(inputs: DesignInputs) -> str:
    return (
        f"Inputs: volume={_num(inputs.volume_m3)}m3; exposure={sanitize(inputs.exposure_class)}; "
        f"distance={_num(inputs.distance_km)}km; includeA4={'true' if inputs.include_a4 else 'false'}; "
        f"dosageMode={inputs.dosage_policy.value}; globalDosage={_num(inputs.global_dosage)}"
    )


def _summary_record(r: ComputedRow) -> List[str]:
    m = r.material
    return [
        sanitize(m.name),
        sanitize(m.strength_class),
        str(round_half_up(m.clinker_fraction * 100)),
        f"{m.ef:.3f}",
        str(round_half_up(r.dosage)),
        str(round_half_up(r.a1a3_per_m3)),
        str(round_half_up(r.a4)),
        str(round_half_up(r.total)),
        str(round_half_up(r.reduction_pct)),
    ]


def _detailed_record(r: ComputedRow) -> List[str]:
    m = r.material
    return [
        sanitize(m.id),
        sanitize(m.name),
        sanitize(m.strength_class),
        sanitize(m.early_strength),
        str(round_half_up(m.clinker_fraction * 100)),
        sanitize(scm_summary(m)),
        str(round_half_up(r.dosage)),
        str(round_half_up(r.a1a3_per_m3)),
        str(round_half_up(r.a4)),
        str(round_half_up(r.total)),
        "Yes" if r.exposure_compatible else "No",
        sanitize("|".join(r.tags)),
        sanitize(m.notes),
    ]


def _document(columns: List[str], records: Iterable[List[str]], inputs: DesignInputs) -> str:
    # fields are already sanitized, so no CSV quoting is applied
    lines = [EXPORT_DELIMITER.join(columns)]
    lines.extend(EXPORT_DELIMITER.join(record) for record in records)
    return "\n".join(lines) + "\n\n" + assumptions_line(inputs) + "\n"


def export_csv(rows: Sequence[ComputedRow], inputs: DesignInputs) -> str:
    """
    Comparison table as CSV text.

    Header, one line per row (in the given order), a blank line and an
    ``Inputs: ...`` assumptions line. Text fields are sanitized so every
    record stays on a single line.
    """
    text = _document(EXPORT_COLUMNS, (_summary_record(r) for r in rows), inputs)
    logger.debug("Exported %d rows", len(rows))
    return text


def export_detailed_csv(rows: Sequence[ComputedRow], inputs: DesignInputs) -> str:
    """Per-material audit export (ids, SCM make-up, compatibility, notes)."""
    return _document(DETAILED_EXPORT_COLUMNS, (_detailed_record(r) for r in rows), inputs)


def rows_to_frame(rows: Sequence[ComputedRow]) -> pd.DataFrame:
    """Numeric results table for display (unrounded)."""
    data = [
        {
            "Id": r.material.id,
            "Cement": r.material.name,
            "Strength": r.material.strength_class,
            "Clinker (%)": 100.0 * r.material.clinker_fraction,
            "EF (kg CO₂e/kg)": r.material.ef,
            "Dosage (kg/m³)": r.dosage,
            "A1–A3 (kg CO₂e/m³)": r.a1a3_per_m3,
            "A4 (kg CO₂e)": r.a4,
            "Total element (kg CO₂e)": r.total,
            "Δ vs baseline (%)": r.reduction_pct,
            "Exposure OK": r.exposure_compatible,
            "Tags": ", ".join(r.tags),
        }
        for r in rows
    ]
    columns = [
        "Id", "Cement", "Strength", "Clinker (%)", "EF (kg CO₂e/kg)", "Dosage (kg/m³)",
        "A1–A3 (kg CO₂e/m³)", "A4 (kg CO₂e)", "Total element (kg CO₂e)", "Δ vs baseline (%)",
        "Exposure OK", "Tags",
    ]
    return pd.DataFrame(data, columns=columns)
