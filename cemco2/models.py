# cemco2/models.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .config import DEFAULT_INPUTS
from .utils import as_float, clamp_fraction, non_negative


class ScmType(Enum):
    """Supplementary cementitious material codes (EN 197-1 letters)."""

    SLAG = "S"
    FLY_ASH_SILICEOUS = "V"
    FLY_ASH_CALCAREOUS = "W"
    POZZOLANA = "P"
    CALCINED_POZZOLANA = "Q"
    SILICA_FUME = "D"
    BURNT_SHALE = "T"
    LIMESTONE = "LL"
    LIMESTONE_L = "L"
    CALCINED_CLAY = "CC"
    OTHER = "?"

    @classmethod
    def parse(cls, code) -> "ScmType":
        key = str(code or "").strip().upper()
        for member in cls:
            if member.value == key and member is not cls.OTHER:
                return member
        return cls.OTHER


@dataclass(frozen=True)
class ScmEntry:
    type: ScmType
    fraction: float = 0.0
    code: str = ""   # code as written in the catalog

    def __post_init__(self):
        object.__setattr__(self, "fraction", clamp_fraction(self.fraction))


class TransportBasis(Enum):
    MASS = "kg_km"     # kg CO2e per kg binder per km
    VOLUME = "m3_km"   # legacy: kg CO2e per m³ concrete per km


@dataclass(frozen=True)
class TransportFactor:
    basis: TransportBasis
    value: float

    def __post_init__(self):
        object.__setattr__(self, "value", non_negative(self.value))


@dataclass(frozen=True)
class Material:
    id: str
    name: str
    clinker_fraction: float
    ef: float                      # A1–A3, kg CO2e per kg binder
    default_dosage: Optional[float]   # kg/m³; None when the catalog has no usable value
    density_kg_m3: float = 0.0
    scms: Tuple[ScmEntry, ...] = ()
    transport: Optional[TransportFactor] = None
    exposure_classes: Optional[Tuple[str, ...]] = None   # None = not declared
    notes: str = ""
    applications: Tuple[str, ...] = ()
    common: bool = False
    strength_class: str = ""
    standard: str = ""
    early_strength: str = ""
    declared_scope: str = ""

    def __post_init__(self):
        object.__setattr__(self, "clinker_fraction", clamp_fraction(self.clinker_fraction))
        object.__setattr__(self, "ef", non_negative(self.ef))
        object.__setattr__(self, "density_kg_m3", non_negative(self.density_kg_m3))

    @property
    def scm_types(self) -> Tuple[ScmType, ...]:
        seen = []
        for entry in self.scms:
            if entry.type not in seen:
                seen.append(entry.type)
        return tuple(seen)


class DosagePolicy(Enum):
    GLOBAL = "global"
    PER_CEMENT = "perCement"

    @classmethod
    def parse(cls, value) -> "DosagePolicy":
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().replace("_", "").replace("-", "").lower()
        if key in ("percement", "permaterial"):
            return cls.PER_CEMENT
        return cls.GLOBAL


@dataclass(frozen=True)
class DesignInputs:
    exposure_class: str = DEFAULT_INPUTS["exposure_class"]
    volume_m3: float = DEFAULT_INPUTS["volume_m3"]
    distance_km: float = DEFAULT_INPUTS["distance_km"]
    include_a4: bool = DEFAULT_INPUTS["include_a4"]
    dosage_policy: DosagePolicy = DosagePolicy.GLOBAL
    global_dosage: float = DEFAULT_INPUTS["global_dosage"]
    concrete_strength: str = DEFAULT_INPUTS["concrete_strength"]
    overrides: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "dosage_policy", DosagePolicy.parse(self.dosage_policy))
        object.__setattr__(self, "volume_m3", non_negative(self.volume_m3))
        object.__setattr__(self, "distance_km", non_negative(self.distance_km))
        object.__setattr__(self, "exposure_class", str(self.exposure_class or "").strip())
        object.__setattr__(self, "overrides", MappingProxyType(dict(self.overrides or {})))

    def with_override(self, material_id: str, dosage) -> "DesignInputs":
        merged = dict(self.overrides)
        merged[material_id] = as_float(dosage, float("nan"))
        return replace(self, overrides=merged)

    def without_override(self, material_id: str) -> "DesignInputs":
        merged = {k: v for k, v in self.overrides.items() if k != material_id}
        return replace(self, overrides=merged)


@dataclass(frozen=True)
class Baseline:
    material_id: str
    ef: float
    label: str


@dataclass(frozen=True)
class ComputedRow:
    material: Material
    dosage: float                 # kg/m³
    a1a3_per_m3: float            # kg CO2e per m³
    a4: float                     # kg CO2e per element
    total: float                  # kg CO2e per element
    exposure_compatible: bool
    tags: Tuple[str, ...]
    reduction_pct: float

    @property
    def id(self) -> str:
        return self.material.id
