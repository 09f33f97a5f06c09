# cemco2/cli.py
from __future__ import annotations

import logging
from typing import Optional, Sequence

from .config import (
    CATALOG_PATH,
    DEFAULT_INPUTS,
    EXPORT_FILE_NAME,
    EXPOSURE_CLASSES,
    STRENGTH_CLASSES,
)
from .dataset import load_catalog
from .design import run_comparison
from .export import export_csv
from .logger import setup_logger
from .models import Baseline, ComputedRow, DesignInputs


def ask_float(prompt, default=None):
    s = input(f"{prompt}" + (f" [{default}]" if default is not None else "") + ": ").strip()
    if not s and default is not None:
        return float(default)
    return float(s)


def ask_yes_no(prompt, default=True):
    hint = "Y/n" if default else "y/N"
    s = input(f"{prompt} [{hint}]: ").strip().lower()
    if not s:
        return bool(default)
    if s in ("y", "yes"):
        return True
    if s in ("n", "no"):
        return False
    raise ValueError("Please answer y or n.")


def choose_option(title, options: Sequence[str], default=None):
    print(f"\n=== {title} ===")
    for i, opt in enumerate(options, start=1):
        print(f"{i:<3} {opt}")
    default_idx = options.index(default) + 1 if default in options else 1
    s = input(f"Choose (1-{len(options)} or code) [{default_idx}]: ").strip().upper()
    if not s:
        return options[default_idx - 1]
    if s.isdigit():
        i = int(s)
        if 1 <= i <= len(options):
            return options[i - 1]
        raise ValueError("Invalid number.")
    for opt in options:
        if opt.upper() == s:
            return opt
    raise ValueError(f"Please enter 1–{len(options)} or one of: {', '.join(options)}")


def render_results_table(rows: Sequence[ComputedRow], baseline: Optional[Baseline] = None):
    if baseline is not None:
        print(f"\nBaseline: {baseline.label}  (EF {baseline.ef:.3f} kg CO₂e/kg)")
    else:
        print("\nBaseline: none (empty catalog) — reductions shown as 0%")

    W_NAME, W_CLK, W_EF, W_DOS, W_A13, W_A4, W_TOT, W_RED, W_EXP = 26, 9, 8, 9, 10, 9, 12, 9, 5
    print(
        f"{'Cement':<{W_NAME}}"
        f"{'Clinker%':>{W_CLK}}"
        f"{'EF':>{W_EF}}"
        f"{'Dosage':>{W_DOS}}"
        f"{'A1-A3/m3':>{W_A13}}"
        f"{'A4':>{W_A4}}"
        f"{'Total (kg)':>{W_TOT}}"
        f"{'Δ %':>{W_RED}}"
        f"{'Exp':>{W_EXP}}"
    )
    for r in rows:
        m = r.material
        name = m.name if len(m.name) < W_NAME else m.name[: W_NAME - 2] + "…"
        print(
            f"{name:<{W_NAME}}"
            f"{100 * m.clinker_fraction:>{W_CLK}.0f}"
            f"{m.ef:>{W_EF}.3f}"
            f"{r.dosage:>{W_DOS}.0f}"
            f"{r.a1a3_per_m3:>{W_A13}.1f}"
            f"{r.a4:>{W_A4}.1f}"
            f"{r.total:>{W_TOT}.0f}"
            f"{r.reduction_pct:>+{W_RED}.0f}"
            f"{('ok' if r.exposure_compatible else '-'):>{W_EXP}}"
        )
    print(f"\nRows shown: {len(rows)}")


def main():
    setup_logger("cemco2", level=logging.WARNING)
    catalog = load_catalog(CATALOG_PATH)

    print("\n=== Cement CO₂ comparison (A1–A3 + A4) ===")
    exposure = choose_option("Exposure class", EXPOSURE_CLASSES, DEFAULT_INPUTS["exposure_class"])
    strength = choose_option("Concrete strength class", STRENGTH_CLASSES, DEFAULT_INPUTS["concrete_strength"])
    volume = ask_float("Element volume (m³)", DEFAULT_INPUTS["volume_m3"])
    distance = ask_float("Transport distance, one way (km)", DEFAULT_INPUTS["distance_km"])
    include_a4 = ask_yes_no("Include A4 (transport)", DEFAULT_INPUTS["include_a4"])
    dosage = ask_float("Global binder dosage (kg/m³, 0 = by strength class)", DEFAULT_INPUTS["global_dosage"])

    inputs = DesignInputs(
        exposure_class=exposure,
        volume_m3=volume,
        distance_km=distance,
        include_a4=include_a4,
        dosage_policy="global",
        global_dosage=dosage,
        concrete_strength=strength,
    )
    compatible_only = ask_yes_no("Show compatible cements only", False)

    result = run_comparison(
        catalog,
        inputs,
        scope="compatible" if compatible_only else "all",
        page_size=None,
    )
    render_results_table(result.view.rows, result.baseline)

    path = input(f"\nWrite CSV to file (blank to skip, e.g. {EXPORT_FILE_NAME}): ").strip()
    if path:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(export_csv(result.view.rows, inputs))
        print(f"Saved {len(result.view.rows)} rows to {path}")


if __name__ == "__main__":
    main()
