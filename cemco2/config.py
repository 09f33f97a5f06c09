# cemco2/config.py
from __future__ import annotations

import os

# ============================================================
# Design input options (as offered by the input forms)
# ============================================================
EXPOSURE_CLASSES = [
    "XC1", "XC2", "XC3", "XC4",
    "XS1", "XS2", "XS3",
    "XD1", "XD2", "XD3",
    "XF1", "XF2",
    "XA2", "XA3",
]

STRENGTH_CLASSES = ["C20/25", "C25/30", "C30/37", "C35/45", "C40/50", "C45/55", "C50/60"]

# ============================================================
# Dosage (kg binder per m³ concrete)
# ============================================================
# Typical binder content by nominal concrete strength class
STRENGTH_TO_DOSAGE = {
    "C20/25": 300.0,
    "C25/30": 320.0,
    "C30/37": 340.0,
    "C35/45": 360.0,
    "C40/50": 380.0,
    "C45/55": 400.0,
    "C50/60": 420.0,
}
FALLBACK_DOSAGE = 340.0  # used when every other source is missing

DOSAGE_POLICIES = ("global", "perCement")

# ============================================================
# Baseline
# ============================================================
# "Pure" Portland cement names, e.g. "CEM I 42.5N" (not "CEM II/A-S")
PURE_BINDER_PATTERN = r"^CEM\s*I\b"

# ============================================================
# Defaults for one comparison session
# ============================================================
DEFAULT_INPUTS = {
    "exposure_class": "XC2",
    "volume_m3": 100.0,
    "distance_km": 0.0,
    "include_a4": True,
    "dosage_policy": "global",
    "global_dosage": 300.0,
    "concrete_strength": "C25/30",
}

# ============================================================
# Results view
# ============================================================
PAGE_SIZES = [10, 20, 50, 100]
DEFAULT_PAGE_SIZE = 50
DEFAULT_SORT = ("total", "asc")
SCOPES = ("all", "compatible", "common")

COMPARE_MAX = 3

SENSITIVITY_MAX_KM = 300.0
SENSITIVITY_TOP_N = 5

# ============================================================
# Export
# ============================================================
EXPORT_FILE_NAME = "cement-results.csv"
DETAILED_EXPORT_FILE_NAME = "cement-lca-comparison.csv"
EXPORT_DELIMITER = ","
EXPORT_DELIMITER_SUBSTITUTE = ";"

# Optional JSON catalog; None = bundled catalog in cemco2.dataset
CATALOG_PATH = os.environ.get("CEMCO2_CATALOG") or None
