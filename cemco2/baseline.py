# cemco2/baseline.py
from __future__ import annotations

import re
from typing import Optional, Sequence

from .config import PURE_BINDER_PATTERN
from .models import Baseline, Material

_PURE_BINDER_RE = re.compile(PURE_BINDER_PATTERN, re.IGNORECASE)


def is_ordinary(material: Material) -> bool:
    """Plain Portland cement: no SCMs, or named like 'CEM I ...'."""
    return not material.scms or bool(_PURE_BINDER_RE.match(material.name))


def _baseline_label(material: Material) -> str:
    if material.strength_class and material.strength_class not in material.name:
        return f"{material.name} ({material.strength_class})"
    return material.name


def select_baseline(catalog: Sequence[Material]) -> Optional[Baseline]:
    """
    Pick the reference material for reduction percentages.

    Worst (highest EF) ordinary cement, so improvements are never overstated;
    highest EF overall when the catalog has no ordinary cement. Ties keep the
    first material in catalog order. Must be given the full catalog, not a
    filtered view.
    """
    if not catalog:
        return None

    ordinary = [m for m in catalog if is_ordinary(m)]
    candidates = ordinary if ordinary else list(catalog)

    target = candidates[0]
    for m in candidates[1:]:
        if m.ef > target.ef:
            target = m

    return Baseline(material_id=target.id, ef=target.ef, label=_baseline_label(target))
