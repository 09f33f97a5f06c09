# app.py
# Cement CO₂ Comparison Tool — Streamlit UI
# Run:
#   pip install -e .
#   streamlit run app.py

from __future__ import annotations

import logging

import pandas as pd
import streamlit as st

from cemco2.compare import compared_rows
from cemco2.config import (
    CATALOG_PATH,
    COMPARE_MAX,
    DEFAULT_INPUTS,
    DEFAULT_PAGE_SIZE,
    DETAILED_EXPORT_FILE_NAME,
    EXPORT_FILE_NAME,
    EXPOSURE_CLASSES,
    PAGE_SIZES,
    SCOPES,
    SENSITIVITY_MAX_KM,
    STRENGTH_CLASSES,
)
from cemco2.dataset import load_catalog
from cemco2.design import run_comparison
from cemco2.dosage import suggested_dosage
from cemco2.export import export_csv, export_detailed_csv, rows_to_frame
from cemco2.logger import setup_logger
from cemco2.models import DesignInputs
from cemco2.ranking import SortKey
from cemco2.sensitivity import crossovers, distance_series, sensitivity_frame
from cemco2.tags import scm_description, scm_label

setup_logger("cemco2", level=logging.WARNING)

# =============================================================================
# Page configuration
# =============================================================================
st.set_page_config(
    page_title="Cement CO₂ Comparison Tool",
    page_icon="🏗️",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.title("Cement CO₂ Comparison Tool")
st.write(
    "Compares the embodied carbon of alternative cements for one concrete element: "
    "A1–A3 (binder production) and, optionally, A4 (transport to site)."
)

with st.expander("Method and limitations (read first)", expanded=False):
    st.markdown(
        """
**Method summary**
- A1–A3 per m³ = binder dosage × cement EF (kg CO₂e/kg).
- A4 = distance × transport factor × binder mass moved (legacy per-m³ factors: × volume).
- Reduction is measured against the worst plain Portland cement (CEM I) in the catalog.

**Limitations**
- Only the binder is assessed; aggregates, water and admixtures are excluded.
- Exposure compatibility is taken from the catalog; cements without declared data are shown as compatible.
"""
    )

st.divider()


@st.cache_data
def _catalog():
    return load_catalog(CATALOG_PATH)


catalog = _catalog()

if "overrides" not in st.session_state:
    st.session_state["overrides"] = {}
if "compared" not in st.session_state:
    st.session_state["compared"] = []

# =============================================================================
# Sidebar
# =============================================================================
with st.sidebar:
    st.header("Inputs")

    exposure = st.selectbox(
        "Exposure class", EXPOSURE_CLASSES, index=EXPOSURE_CLASSES.index(DEFAULT_INPUTS["exposure_class"])
    )
    strength = st.selectbox(
        "Concrete strength", STRENGTH_CLASSES, index=STRENGTH_CLASSES.index(DEFAULT_INPUTS["concrete_strength"])
    )
    volume = st.number_input("Element volume (m³)", 0.0, 1e6, float(DEFAULT_INPUTS["volume_m3"]), 1.0)
    distance = st.number_input("Transport distance (km, one way)", 0.0, 5000.0, float(DEFAULT_INPUTS["distance_km"]), 5.0)
    include_a4 = st.toggle("Include A4 (transport)", value=DEFAULT_INPUTS["include_a4"])

    st.divider()
    st.subheader("Dosage")
    per_cement = st.radio("Dosage policy", ["Global", "Per cement"], horizontal=True) == "Per cement"
    global_dosage = st.number_input(
        "Global dosage (kg/m³)", 0.0, 800.0, float(DEFAULT_INPUTS["global_dosage"]), 5.0, disabled=per_cement
    )
    if per_cement:
        with st.expander("Per-cement overrides", expanded=False):
            for m in catalog:
                suggested = suggested_dosage(m, DesignInputs(concrete_strength=strength))
                value = st.number_input(
                    m.name,
                    min_value=0.0,
                    max_value=800.0,
                    value=float(st.session_state["overrides"].get(m.id, suggested)),
                    step=5.0,
                    key=f"dose-{m.id}",
                )
                # only an edited value becomes an override
                if value != suggested:
                    st.session_state["overrides"][m.id] = value
                else:
                    st.session_state["overrides"].pop(m.id, None)

    st.divider()
    st.subheader("View")
    scope = st.selectbox("Scope", SCOPES, format_func=lambda s: {
        "all": "All rows", "compatible": "Compatible only", "common": "Most common",
    }[s])
    query = st.text_input("Search (name, notes, tags)")
    sort_key = st.selectbox("Sort by", [k.value for k in SortKey], index=[k.value for k in SortKey].index("total"))
    sort_dir = "desc" if st.toggle("Descending", value=False) else "asc"
    page_size = st.selectbox("Rows per page", PAGE_SIZES, index=PAGE_SIZES.index(DEFAULT_PAGE_SIZE))

inputs = DesignInputs(
    exposure_class=exposure,
    volume_m3=float(volume),
    distance_km=float(distance),
    include_a4=bool(include_a4),
    dosage_policy="perCement" if per_cement else "global",
    global_dosage=float(global_dosage),
    concrete_strength=strength,
    overrides=dict(st.session_state["overrides"]),
)

result = run_comparison(
    catalog, inputs, scope=scope, query=query, sort_key=sort_key, sort_dir=sort_dir, page_size=page_size
)
view = result.view

# =============================================================================
# Summary
# =============================================================================
st.subheader("Results summary")
c1, c2, c3, c4 = st.columns(4)
c1.metric("Baseline", result.baseline.label if result.baseline else "—")
c2.metric("Baseline EF (kg CO₂e/kg)", f"{result.baseline.ef:.3f}" if result.baseline else "—")
if view.rows:
    best = view.rows[0]
    c3.metric("Top of current sort", best.material.name)
    c4.metric("Its element total (kg CO₂e)", f"{best.total:,.0f}", f"{best.reduction_pct:+.0f}% vs baseline")

st.divider()

tab1, tab2, tab3, tab4 = st.tabs(["Results", "Chart", "Distance sensitivity", "Compare"])

with tab1:
    st.write(f"Showing **{len(view.visible)}** of {len(view.rows)} results.")
    st.dataframe(rows_to_frame(view.visible).round(3), use_container_width=True, hide_index=True)
    with st.expander("SCM legend", expanded=False):
        seen = {}
        for r in view.rows:
            for scm in r.material.scm_types:
                seen.setdefault(scm_label(scm), scm_description(scm))
        st.table(pd.DataFrame(sorted(seen.items()), columns=["Tag", "Meaning"]))

with tab2:
    chart_df = pd.DataFrame(
        {
            "A1–A3": [r.a1a3_per_m3 * inputs.volume_m3 for r in view.visible],
            "A4": [r.a4 for r in view.visible],
        },
        index=[r.material.name for r in view.visible],
    )
    st.bar_chart(chart_df, stack=True)

with tab3:
    series = distance_series(view.rows, inputs, compared_ids=st.session_state["compared"])
    if series:
        st.line_chart(sensitivity_frame(series, SENSITIVITY_MAX_KM))
        points = crossovers(series, SENSITIVITY_MAX_KM)
        names = {s.id: s.name for s in series}
        for a, b, km, kg in points:
            st.caption(f"{names[a]} and {names[b]} cross at {km:.0f} km ({kg:,.0f} kg CO₂e).")
        if not inputs.include_a4:
            st.info("A4 is excluded, so totals do not depend on distance.")

with tab4:
    options = [r.material.id for r in view.rows]
    labels = {r.material.id: r.material.name for r in view.rows}
    picked = st.multiselect(
        f"Pick up to {COMPARE_MAX} cements",
        options,
        default=[i for i in st.session_state["compared"] if i in options],
        format_func=lambda i: labels.get(i, i),
        max_selections=COMPARE_MAX,
    )
    st.session_state["compared"] = list(picked)
    chosen = compared_rows(picked, view.rows)
    if len(chosen) < 2:
        st.write("Pick at least two cements to start comparing.")
    else:
        st.dataframe(rows_to_frame(chosen).set_index("Cement").T, use_container_width=True)

st.divider()

# =============================================================================
# Downloads
# =============================================================================
st.subheader("Download")
d1, d2 = st.columns(2)
d1.download_button(
    label="Download results (CSV)",
    data=export_csv(view.rows, inputs).encode("utf-8"),
    file_name=EXPORT_FILE_NAME,
    mime="text/csv",
)
d2.download_button(
    label="Download detailed comparison (CSV)",
    data=export_detailed_csv(view.rows, inputs).encode("utf-8"),
    file_name=DETAILED_EXPORT_FILE_NAME,
    mime="text/csv",
)

st.caption(
    "Prototype tool for early-stage comparison. "
    "Verify cement EFs against product EPDs before procurement decisions."
)
