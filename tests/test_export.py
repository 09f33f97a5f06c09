from cemco2.design import compute_rows
from cemco2.export import (
    EXPORT_COLUMNS,
    assumptions_line,
    export_csv,
    export_detailed_csv,
    rows_to_frame,
    sanitize,
)
from cemco2.models import DesignInputs, ScmEntry, ScmType

from conftest import make_material


def test_sanitize():
    assert sanitize("a,b\nc\r\nd") == "a;b c d"
    assert sanitize(None) == ""
    assert sanitize(42) == ""


def test_export_layout(catalog, inputs):
    rows = compute_rows(catalog, inputs)
    lines = export_csv(rows, inputs).split("\n")
    assert lines[0] == ",".join(EXPORT_COLUMNS)
    assert len(lines) == 1 + len(rows) + 3  # header, rows, blank, assumptions, trailing newline
    assert lines[len(rows) + 1] == ""
    assert lines[len(rows) + 2].startswith("Inputs: volume=100m3; exposure=XC2;")
    assert lines[-1] == ""


def test_export_rounding(catalog, inputs):
    rows = compute_rows(catalog, inputs)
    line_a = export_csv(rows, inputs).split("\n")[1]
    # name, strength, clinker%, EF, dosage, A1-A3, A4, total, reduction
    assert line_a.split(",") == ["CEM III/A 42.5N", "", "65", "0.500", "300", "150", "0", "15000", "44"]


def test_negative_reduction_is_signed():
    worse = make_material(id="w", name="CEM II/A-V", ef=1.0)
    base = make_material(id="b", name="CEM I", ef=0.8, scms=())
    inputs = DesignInputs(volume_m3=1, include_a4=False)
    text = export_csv(compute_rows([base, worse], inputs), inputs)
    assert text.split("\n")[2].split(",")[-1] == "-25"


def test_comma_in_name_keeps_single_record():
    m = make_material(id="x", name="CEM II/B-M (S,LL) 42.5N", notes="line one\nline two, more")
    inputs = DesignInputs(volume_m3=1)
    rows = compute_rows([m], inputs)
    lines = export_csv(rows, inputs).split("\n")
    assert lines[1].startswith("CEM II/B-M (S;LL) 42.5N,")
    assert len(lines[1].split(",")) == len(EXPORT_COLUMNS)

    detailed = export_detailed_csv(rows, inputs).split("\n")
    assert detailed[1].endswith("line one line two; more")


def test_empty_row_set_still_has_header_and_footer():
    inputs = DesignInputs()
    lines = export_csv([], inputs).split("\n")
    assert lines[0] == ",".join(EXPORT_COLUMNS)
    assert lines[1] == ""
    assert lines[2].startswith("Inputs:")


def test_assumptions_line():
    inputs = DesignInputs(
        exposure_class="XD3", volume_m3=12.5, distance_km=80, include_a4=False,
        dosage_policy="perCement", global_dosage=310,
    )
    assert assumptions_line(inputs) == (
        "Inputs: volume=12.5m3; exposure=XD3; distance=80km; includeA4=false; "
        "dosageMode=perCement; globalDosage=310"
    )


def test_detailed_export_columns():
    m = make_material(
        id="t1",
        name="CEM V/A (S-V)",
        scms=(ScmEntry(ScmType.SLAG, 0.25), ScmEntry(ScmType.FLY_ASH_SILICEOUS, 0.25)),
        exposure=("XC1",),
    )
    inputs = DesignInputs(exposure_class="XC4", volume_m3=1)
    fields = export_detailed_csv(compute_rows([m], inputs), inputs).split("\n")[1].split(",")
    assert fields[0] == "t1"
    assert fields[5] == "S:25%+V:25%"
    assert fields[10] == "No"
    assert fields[11] == "Slag|FlyAsh|Composite"


def test_rows_to_frame(catalog, inputs):
    df = rows_to_frame(compute_rows(catalog, inputs))
    assert list(df["Id"]) == ["a", "b", "opc-low", "fly"]
    assert df.loc[0, "Total element (kg CO₂e)"] == 15000.0


def test_assumptions_line_keeps_full_precision():
    inputs = DesignInputs(volume_m3=1234567, distance_km=1234.5678, global_dosage=312.25)
    line = assumptions_line(inputs)
    assert "volume=1234567m3;" in line
    assert "distance=1234.5678km;" in line
    assert line.endswith("globalDosage=312.25")


def test_quotes_in_names_are_written_verbatim():
    m = make_material(id="q", name='CEM "X" 42.5N', scms=())
    rows = compute_rows([m], DesignInputs())
    lines = export_csv(rows, DesignInputs()).split("\n")
    assert lines[1].startswith('CEM "X" 42.5N,')
    assert len(lines[1].split(",")) == len(EXPORT_COLUMNS)
