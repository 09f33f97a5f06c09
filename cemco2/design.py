# cemco2/design.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .baseline import select_baseline
from .config import DEFAULT_PAGE_SIZE, DEFAULT_SORT
from .dosage import resolve_dosage
from .ec import compute_impact
from .models import Baseline, ComputedRow, DesignInputs, Material
from .ranking import RankedView, rank_rows
from .tags import tags_for_material

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparisonResult:
    baseline: Optional[Baseline]
    rows: Tuple[ComputedRow, ...]   # catalog order
    view: RankedView


def exposure_compatible(material: Material, exposure_class: Optional[str]) -> bool:
    target = str(exposure_class or "").strip().upper()
    if not target:
        return True
    if not material.exposure_classes:
        # nothing declared -> not a rejection
        return True
    return target in {c.strip().upper() for c in material.exposure_classes}


def reduction_pct(material: Material, baseline: Optional[Baseline]) -> float:
    """Percent below the baseline EF (positive = better than baseline)."""
    if baseline is None or not baseline.ef > 0:
        return 0.0
    return (baseline.ef - material.ef) / baseline.ef * 100.0


def build_row(
    material: Material,
    inputs: DesignInputs,
    baseline: Optional[Baseline],
) -> ComputedRow:
    dosage = resolve_dosage(material, inputs)
    impact = compute_impact(material, dosage, inputs)
    return ComputedRow(
        material=material,
        dosage=dosage,
        a1a3_per_m3=impact.a1a3_per_m3,
        a4=impact.a4,
        total=impact.total,
        exposure_compatible=exposure_compatible(material, inputs.exposure_class),
        tags=tags_for_material(material),
        reduction_pct=reduction_pct(material, baseline),
    )


def compute_rows(
    catalog: Sequence[Material],
    inputs: DesignInputs,
    baseline: Optional[Baseline] = None,
) -> Tuple[ComputedRow, ...]:
    """
    One row per material, in catalog order.

    The whole set is rebuilt on every call. ``baseline`` is selected from the
    same catalog when not supplied; pass it in to reuse one selection across
    input changes.
    """
    if baseline is None:
        baseline = select_baseline(catalog)
    rows = tuple(build_row(m, inputs, baseline) for m in catalog)
    logger.debug(
        "Computed %d rows (baseline=%s, policy=%s)",
        len(rows),
        baseline.material_id if baseline else None,
        inputs.dosage_policy.value,
    )
    return rows


def run_comparison(
    catalog: Sequence[Material],
    inputs: DesignInputs,
    scope: str = "all",
    query: str = "",
    sort_key: str = DEFAULT_SORT[0],
    sort_dir: str = DEFAULT_SORT[1],
    page_size: Optional[int] = DEFAULT_PAGE_SIZE,
    baseline: Optional[Baseline] = None,
) -> ComparisonResult:
    if baseline is None:
        baseline = select_baseline(catalog)
    rows = compute_rows(catalog, inputs, baseline)
    view = rank_rows(rows, scope=scope, query=query, sort_key=sort_key, sort_dir=sort_dir, page_size=page_size)
    return ComparisonResult(baseline=baseline, rows=rows, view=view)
