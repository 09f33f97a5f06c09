# cemco2/ranking.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Sequence, Tuple, Union

from .models import ComputedRow


class Scope(Enum):
    ALL = "all"
    COMPATIBLE = "compatible"
    COMMON = "common"


class SortKey(Enum):
    NAME = "name"
    STRENGTH = "strength"
    CLINKER = "clinker"
    EF = "ef"
    DOSAGE = "dosage"
    A1A3 = "a1a3"
    A4 = "a4"
    TOTAL = "total"
    REDUCTION = "reduction"


class SortDir(Enum):
    ASC = "asc"
    DESC = "desc"


_SORT_VALUE: Dict[SortKey, Callable[[ComputedRow], Union[str, float]]] = {
    SortKey.NAME: lambda r: r.material.name.lower(),
    SortKey.STRENGTH: lambda r: r.material.strength_class.lower(),
    SortKey.CLINKER: lambda r: r.material.clinker_fraction,
    SortKey.EF: lambda r: r.material.ef,
    SortKey.DOSAGE: lambda r: r.dosage,
    SortKey.A1A3: lambda r: r.a1a3_per_m3,
    SortKey.A4: lambda r: r.a4,
    SortKey.TOTAL: lambda r: r.total,
    SortKey.REDUCTION: lambda r: r.reduction_pct,
}

# "cement" is the column name used by the results table
_KEY_ALIASES = {"cement": SortKey.NAME}


@dataclass(frozen=True)
class RankedView:
    rows: Tuple[ComputedRow, ...]      # filtered + sorted, full set (export)
    visible: Tuple[ComputedRow, ...]   # current page

    @property
    def best_id(self) -> Optional[str]:
        return self.rows[0].material.id if self.rows else None


def _scope(value) -> Scope:
    return value if isinstance(value, Scope) else Scope(str(value))


def _sort_key(value) -> SortKey:
    if isinstance(value, SortKey):
        return value
    key = str(value).strip().lower()
    return _KEY_ALIASES.get(key) or SortKey(key)


def _sort_dir(value) -> SortDir:
    return value if isinstance(value, SortDir) else SortDir(str(value).strip().lower())


def filter_scope(rows: Sequence[ComputedRow], scope="all") -> Tuple[ComputedRow, ...]:
    scope = _scope(scope)
    if scope is Scope.COMPATIBLE:
        return tuple(r for r in rows if r.exposure_compatible)
    if scope is Scope.COMMON:
        return tuple(r for r in rows if r.material.common)
    return tuple(rows)


def _haystack(row: ComputedRow) -> str:
    m = row.material
    return " ".join([m.name, m.notes or "", " ".join(row.tags)]).lower()


def filter_search(rows: Sequence[ComputedRow], query: Optional[str]) -> Tuple[ComputedRow, ...]:
    q = (query or "").strip().lower()
    if not q:
        return tuple(rows)
    return tuple(r for r in rows if q in _haystack(r))


def sort_rows(rows: Sequence[ComputedRow], key="total", direction="asc") -> Tuple[ComputedRow, ...]:
    """Stable sort; equal keys keep their input order in both directions."""
    value = _SORT_VALUE[_sort_key(key)]
    return tuple(sorted(rows, key=value, reverse=_sort_dir(direction) is SortDir.DESC))


def limit_rows(rows: Sequence[ComputedRow], page_size: Optional[int]) -> Tuple[ComputedRow, ...]:
    if page_size is None or page_size <= 0:
        return tuple(rows)
    return tuple(rows[:page_size])


def rank_rows(
    rows: Sequence[ComputedRow],
    scope="all",
    query: str = "",
    sort_key="total",
    sort_dir="asc",
    page_size: Optional[int] = None,
) -> RankedView:
    filtered = filter_search(filter_scope(rows, scope), query)
    ordered = sort_rows(filtered, sort_key, sort_dir)
    return RankedView(rows=ordered, visible=limit_rows(ordered, page_size))


def next_sort(current_key, current_dir, clicked) -> Tuple[SortKey, SortDir]:
    """Header click: same column flips direction, a new column starts ascending."""
    current_key, clicked = _sort_key(current_key), _sort_key(clicked)
    if clicked is current_key:
        flipped = SortDir.DESC if _sort_dir(current_dir) is SortDir.ASC else SortDir.ASC
        return clicked, flipped
    return clicked, SortDir.ASC
