# cemco2/ec.py
from __future__ import annotations

from dataclasses import dataclass

from .models import DesignInputs, Material, TransportBasis
from .utils import non_negative

# ============================================================
# Embodied carbon — A1–A3 (product) + A4 (transport to site)
# ============================================================


@dataclass(frozen=True)
class Impact:
    a1a3_per_m3: float   # kg CO2e per m³ concrete
    a4: float            # kg CO2e per element
    total: float         # kg CO2e per element


def compute_a1a3_per_m3(material: Material, dosage: float) -> float:
    return non_negative(dosage) * material.ef


def transport_slope(material: Material, dosage: float, inputs: DesignInputs) -> float:
    """A4 per km of haul for the whole element (kg CO2e/km)."""
    if not inputs.include_a4 or material.transport is None:
        return 0.0

    volume = non_negative(inputs.volume_m3)
    factor = material.transport.value
    if material.transport.basis is TransportBasis.MASS:
        # per kg·km × binder mass moved
        return factor * (non_negative(dosage) * volume)
    # legacy per m³·km
    return factor * volume


def compute_a4(material: Material, dosage: float, inputs: DesignInputs) -> float:
    return non_negative(inputs.distance_km) * transport_slope(material, dosage, inputs)


def compute_impact(material: Material, dosage: float, inputs: DesignInputs) -> Impact:
    per_m3 = compute_a1a3_per_m3(material, dosage)
    a4 = compute_a4(material, dosage, inputs)
    total = per_m3 * non_negative(inputs.volume_m3) + a4
    return Impact(a1a3_per_m3=per_m3, a4=a4, total=total)
