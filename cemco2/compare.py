# cemco2/compare.py
from __future__ import annotations

from typing import List, Sequence, Tuple

from .config import COMPARE_MAX
from .models import ComputedRow


def toggle_compare(selected: Sequence[str], material_id: str, limit: int = COMPARE_MAX) -> Tuple[str, ...]:
    if material_id in selected:
        return tuple(x for x in selected if x != material_id)
    if len(selected) >= limit:
        return tuple(selected)
    return tuple(selected) + (material_id,)


def remove_compare(selected: Sequence[str], material_id: str) -> Tuple[str, ...]:
    return tuple(x for x in selected if x != material_id)


def replace_compare(selected: Sequence[str], old_id: str, new_id: str) -> Tuple[str, ...]:
    if new_id in selected:
        return tuple(selected)
    return tuple(new_id if x == old_id else x for x in selected)


def compared_rows(selected: Sequence[str], rows: Sequence[ComputedRow]) -> List[ComputedRow]:
    by_id = {r.material.id: r for r in rows}
    return [by_id[i] for i in selected if i in by_id]
