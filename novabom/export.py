"""
BOM Exporter - Export a BomCalculation to CSV, JSON, Markdown, Excel and pandas.

CSV layout (fixed):
    Material Code, Material Name, Quantity, Unit, Unit Cost, Total Cost,
    Discipline, Category, Notes

Numbers are written with Python's shortest round-trip float repr (no fixed
rounding), so the same BOM always produces the same text. Empty notes are
written as an empty field.

Output structure of export_all():
out/<dir>/
  bom.csv
  bom.json
  bom_summary.md
  bom.xlsx
"""

import csv
import io
import json
import logging
from pathlib import Path
from typing import Dict, List

import pandas as pd

from .errors import ExportError
from .schema import BomCalculation, BomItem

logger = logging.getLogger(__name__)


CSV_HEADERS = [
    "Material Code",
    "Material Name",
    "Quantity",
    "Unit",
    "Unit Cost",
    "Total Cost",
    "Discipline",
    "Category",
    "Notes",
]


def format_number(value: float) -> str:
    return repr(float(value))


def csv_row(item: BomItem) -> List[str]:
    return [
        item.material_code,
        item.material_name,
        format_number(item.quantity),
        item.unit.symbol,
        format_number(item.unit_cost),
        format_number(item.total_cost),
        item.discipline.label,
        item.category,
        item.notes or "",
    ]


def export_csv(bom: BomCalculation) -> str:
    """
    Serialize the BOM as CSV text.

    Raises:
        ExportError: a row could not be written
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    try:
        writer.writerow(CSV_HEADERS)
        for item in bom.items:
            writer.writerow(csv_row(item))
    except (csv.Error, AttributeError, TypeError, ValueError) as e:
        raise ExportError(f"CSV serialization failed: {e}") from e
    return buffer.getvalue()


class BOMExporter:
    """Export BOM data to text and files."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    # -- text -----------------------------------------------------------------

    def to_csv(self, bom: BomCalculation) -> str:
        return export_csv(bom)

    def to_csv_bytes(self, bom: BomCalculation) -> bytes:
        """CSV encoded with the exporter's encoding."""
        text = export_csv(bom)
        try:
            return text.encode(self.encoding)
        except UnicodeEncodeError as e:
            raise ExportError(f"Cannot encode CSV as {self.encoding}: {e}") from e

    def to_json(self, bom: BomCalculation) -> str:
        try:
            return json.dumps(bom.to_dict(), indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise ExportError(f"JSON serialization failed: {e}") from e

    def to_markdown(self, bom: BomCalculation) -> str:
        """Human-readable summary with per-discipline subtotals."""
        lines = [
            f"# Bill of Materials: {bom.project_id}",
            "",
            f"Calculated: {bom.calculation_date}",
            "",
            "## Summary",
            "",
            f"- **Material Lines**: {len(bom.items)}",
            f"- **Total Cost**: {bom.total_cost:,.2f}",
            "",
        ]

        summary = self.discipline_summary(bom)
        if not summary.empty:
            lines += [
                "## By Discipline",
                "",
                "| Discipline | Lines | Total Cost |",
                "|------------|-------|------------|",
            ]
            for row in summary.to_dict("records"):
                lines.append(
                    f"| {row['Discipline']} | {row['Lines']} | {row['Total Cost']:,.2f} |"
                )
            lines.append("")

        lines += [
            "## Materials",
            "",
            "| Code | Material | Quantity | Unit | Unit Cost | Total Cost |",
            "|------|----------|----------|------|-----------|------------|",
        ]
        for item in bom.items:
            lines.append(
                f"| {item.material_code} | {item.material_name} | {item.quantity:,.2f} | "
                f"{item.unit.symbol} | {item.unit_cost:,.2f} | {item.total_cost:,.2f} |"
            )
        lines.append("")
        return "\n".join(lines)

    # -- pandas ---------------------------------------------------------------

    def to_dataframe(self, bom: BomCalculation) -> pd.DataFrame:
        """BOM lines as a DataFrame with the CSV columns."""
        if not bom.items:
            return pd.DataFrame(columns=CSV_HEADERS)

        data = []
        for item in bom.items:
            data.append({
                "Material Code": item.material_code,
                "Material Name": item.material_name,
                "Quantity": item.quantity,
                "Unit": item.unit.symbol,
                "Unit Cost": item.unit_cost,
                "Total Cost": item.total_cost,
                "Discipline": item.discipline.label,
                "Category": item.category,
                "Notes": item.notes or "",
            })
        return pd.DataFrame(data, columns=CSV_HEADERS)

    def discipline_summary(self, bom: BomCalculation) -> pd.DataFrame:
        """Line count and cost per discipline, in first-seen order."""
        columns = ["Discipline", "Lines", "Total Cost"]
        df = self.to_dataframe(bom)
        if df.empty:
            return pd.DataFrame(columns=columns)

        grouped = df.groupby("Discipline", sort=False).agg(
            Lines=("Material Code", "count"),
            Cost=("Total Cost", "sum"),
        ).reset_index()
        grouped.columns = columns
        return grouped

    def to_excel(self, bom: BomCalculation, filepath=None) -> io.BytesIO:
        """
        Export the BOM to an Excel workbook.

        Sheets: Summary, By_Discipline, BOM_Items.

        Args:
            bom: Calculation to export
            filepath: Optional file path to save (if None, only the buffer is returned)

        Returns:
            BytesIO buffer with the workbook
        """
        summary_df = pd.DataFrame([
            {"Field": "Project", "Value": bom.project_id},
            {"Field": "Calculated", "Value": bom.calculation_date},
            {"Field": "Material Lines", "Value": len(bom.items)},
            {"Field": "Total Cost", "Value": round(bom.total_cost, 2)},
        ])

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            summary_df.to_excel(writer, sheet_name="Summary", index=False)
            self.discipline_summary(bom).to_excel(writer, sheet_name="By_Discipline", index=False)
            self.to_dataframe(bom).to_excel(writer, sheet_name="BOM_Items", index=False)

            # Column widths
            for worksheet in writer.sheets.values():
                for column in worksheet.columns:
                    width = max(len(str(cell.value)) for cell in column if cell.value is not None)
                    worksheet.column_dimensions[column[0].column_letter].width = min(width + 2, 60)

        buffer.seek(0)

        if filepath:
            path = Path(filepath)
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                with open(path, "wb") as f:
                    f.write(buffer.getvalue())
            except OSError as e:
                raise ExportError(f"Could not write {path}: {e}") from e
            buffer.seek(0)
            logger.info(f"Excel exported to: {path}")

        return buffer

    # -- files ----------------------------------------------------------------

    def export_all(self, bom: BomCalculation, output_dir) -> Dict[str, Path]:
        """
        Write CSV, JSON, Markdown and Excel exports.

        Returns:
            Dict mapping output type to file path

        Raises:
            ExportError: directory or file could not be written
        """
        output_dir = Path(output_dir)
        paths = {
            "csv": output_dir / "bom.csv",
            "json": output_dir / "bom.json",
            "md": output_dir / "bom_summary.md",
        }
        contents = {
            "csv": self.to_csv(bom),
            "json": self.to_json(bom),
            "md": self.to_markdown(bom),
        }

        for key, path in paths.items():
            self.write_text(contents[key], path)
        paths["xlsx"] = output_dir / "bom.xlsx"
        self.to_excel(bom, paths["xlsx"])

        logger.info(f"Exported BOM to {output_dir}")
        return paths

    def write_text(self, text: str, path) -> Path:
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", newline="", encoding=self.encoding) as f:
                f.write(text)
        except UnicodeEncodeError as e:
            raise ExportError(f"Cannot encode {path.name} as {self.encoding}: {e}") from e
        except OSError as e:
            raise ExportError(f"Could not write {path}: {e}") from e
        return path
