from __future__ import annotations

import csv
import io
import json
from pathlib import Path

import pytest

from novabom.cli import build_catalog, main
from novabom.export import CSV_HEADERS

ROOT = Path(__file__).resolve().parent.parent
SAMPLE_DESIGN = str(ROOT / "examples" / "office.yaml")
VENDOR_CATALOG = str(ROOT / "rules" / "vendor_catalog.yaml")


def test_csv_to_stdout(capsys):
    assert main(["--design", SAMPLE_DESIGN]) == 0

    rows = list(csv.reader(io.StringIO(capsys.readouterr().out)))
    assert rows[0] == CSV_HEADERS
    codes = [row[0] for row in rows[1:]]
    assert codes[:5] == ["DW_PANEL_125", "DW_STUD_75", "DW_TRACK_75", "DW_SCREW_25", "ANCHOR_8MM"]
    assert "ELEC_OUTLET_STD" in codes

    outlets = next(row for row in rows if row[0] == "ELEC_OUTLET_STD")
    # the demolition outlet is not counted
    assert float(outlets[2]) == 2.0


def test_vendor_catalog_overrides_price(capsys):
    assert main(["--design", SAMPLE_DESIGN, "--catalog", VENDOR_CATALOG]) == 0
    rows = list(csv.reader(io.StringIO(capsys.readouterr().out)))
    panel = next(row for row in rows if row[0] == "DW_PANEL_125")
    assert float(panel[4]) == 14.9


def test_json_format(capsys):
    assert main(["--design", SAMPLE_DESIGN, "--format", "json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["summary"]["material_lines"] == len(data["items"])


def test_all_formats_to_directory(tmp_path):
    out = tmp_path / "office"
    assert main(["--design", SAMPLE_DESIGN, "--output", str(out), "--format", "all"]) == 0
    assert sorted(p.name for p in out.iterdir()) == ["bom.csv", "bom.json", "bom.xlsx", "bom_summary.md"]


def test_single_format_to_directory(tmp_path):
    assert main(["--design", SAMPLE_DESIGN, "-o", str(tmp_path), "-f", "md"]) == 0
    assert (tmp_path / "bom_summary.md").read_text(encoding="utf-8").startswith("# Bill of Materials")


@pytest.mark.parametrize("fmt", ["all", "xlsx"])
def test_file_only_formats_require_output(fmt):
    with pytest.raises(SystemExit):
        main(["--design", SAMPLE_DESIGN, "--format", fmt])


def test_missing_design_returns_error(tmp_path, capsys):
    assert main(["--design", str(tmp_path / "missing.yaml")]) == 1
    assert capsys.readouterr().out == ""


def test_no_defaults_uses_only_vendor_file(capsys):
    assert main(["--design", SAMPLE_DESIGN, "--catalog", VENDOR_CATALOG, "--no-defaults"]) == 0
    codes = [row[0] for row in csv.reader(io.StringIO(capsys.readouterr().out))][1:]
    assert codes == ["DW_PANEL_125"]


def test_build_catalog_layers_files():
    catalog = build_catalog([VENDOR_CATALOG], include_defaults=True)
    assert catalog.get_by_code("DW_PANEL_125").supplier == "Gyproc"
    assert "ELEC_NYM_315" in catalog
    assert "SEAL_ACRYLIC" in catalog
