# cemco2/sensitivity.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .config import SENSITIVITY_MAX_KM, SENSITIVITY_TOP_N
from .ec import transport_slope
from .models import ComputedRow, DesignInputs
from .utils import non_negative


@dataclass(frozen=True)
class DistanceSeries:
    """Element total as a line in haul distance: y(d) = base + slope * d."""

    id: str
    name: str
    base: float    # A1–A3 for the element (kg CO2e)
    slope: float   # A4 per km (kg CO2e/km)

    def at(self, distance_km):
        return self.base + self.slope * distance_km


def distance_grid(max_km: float = SENSITIVITY_MAX_KM) -> np.ndarray:
    max_km = non_negative(max_km)
    if max_km == 0:
        return np.array([0.0])
    step = 5.0 if max_km <= 200 else 10.0
    grid = np.arange(0.0, max_km + 1e-9, step)
    if not np.isclose(grid[-1], max_km):
        grid = np.append(grid, max_km)
    return grid


def distance_series(
    rows: Sequence[ComputedRow],
    inputs: DesignInputs,
    compared_ids: Optional[Sequence[str]] = None,
    top_n: int = SENSITIVITY_TOP_N,
) -> List[DistanceSeries]:
    """Compared materials if any, otherwise the ``top_n`` lowest totals."""
    by_id = {r.material.id: r for r in rows}
    if compared_ids:
        chosen = [by_id[i] for i in compared_ids if i in by_id]
    else:
        chosen = sorted(rows, key=lambda r: r.total)[:top_n]

    volume = non_negative(inputs.volume_m3)
    return [
        DistanceSeries(
            id=r.material.id,
            name=r.material.name,
            base=r.a1a3_per_m3 * volume,
            slope=transport_slope(r.material, r.dosage, inputs),
        )
        for r in chosen
    ]


def sensitivity_frame(series: Sequence[DistanceSeries], max_km: float = SENSITIVITY_MAX_KM) -> pd.DataFrame:
    grid = distance_grid(max_km)
    names = [s.name for s in series]
    columns = {}
    for s in series:
        label = s.name if names.count(s.name) == 1 else f"{s.name} ({s.id})"
        columns[label] = s.at(grid)
    df = pd.DataFrame(columns, index=grid)
    df.index.name = "Distance (km)"
    return df


def crossovers(
    series: Sequence[DistanceSeries],
    max_km: float = SENSITIVITY_MAX_KM,
) -> List[Tuple[str, str, float, float]]:
    """Haul distances where two materials swap rank: (id_a, id_b, km, kg CO2e)."""
    out = []
    for i, a in enumerate(series):
        for b in series[i + 1:]:
            if np.isclose(a.slope, b.slope):
                continue
            d_star = (b.base - a.base) / (a.slope - b.slope)
            if 0 < d_star < max_km:
                out.append((a.id, b.id, float(d_star), float(a.at(d_star))))
    return out
