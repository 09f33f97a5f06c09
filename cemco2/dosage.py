# cemco2/dosage.py
from __future__ import annotations

from dataclasses import replace
from typing import Mapping, Optional

from .config import FALLBACK_DOSAGE, STRENGTH_TO_DOSAGE
from .models import DesignInputs, DosagePolicy, Material
from .utils import is_valid_dosage


def dosage_for_strength(concrete_strength: Optional[str]) -> Optional[float]:
    """Typical binder content for a nominal strength class such as 'C25/30'."""
    key = str(concrete_strength or "").strip().upper()
    return STRENGTH_TO_DOSAGE.get(key)


def resolve_dosage(
    material: Material,
    inputs: DesignInputs,
    overrides: Optional[Mapping[str, float]] = None,
) -> float:
    """
    Binder dosage (kg/m³) to use for one material.

    per-cement policy: override -> catalog default -> strength lookup
    global policy:     global dosage (> 0) -> strength lookup -> catalog default

    Always returns a finite number >= 0.
    """
    if overrides is None:
        overrides = inputs.overrides
    by_strength = dosage_for_strength(inputs.concrete_strength)

    if inputs.dosage_policy is DosagePolicy.PER_CEMENT:
        chain = (overrides.get(material.id), material.default_dosage, by_strength)
        for candidate in chain:
            if is_valid_dosage(candidate):
                return float(candidate)
        return FALLBACK_DOSAGE

    if is_valid_dosage(inputs.global_dosage, allow_zero=False):
        return float(inputs.global_dosage)
    for candidate in (by_strength, material.default_dosage):
        if is_valid_dosage(candidate):
            return float(candidate)
    return FALLBACK_DOSAGE


def suggested_dosage(material: Material, inputs: DesignInputs) -> float:
    """Per-cement dosage before any override (catalog default, strength lookup, fallback)."""
    return resolve_dosage(material, replace(inputs, dosage_policy=DosagePolicy.PER_CEMENT, overrides={}))
