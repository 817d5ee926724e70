"""
NovaBOM - Quantity takeoff and Bill of Materials engine.

Modules:
- design: building design tree (project, floors, walls, components)
- materials: material catalog, starter seed, YAML vendor price files
- calculators: per-discipline takeoff (drywall, suspended ceiling, electrical)
- engine: orchestration, consolidation by material code, costing
- export: CSV / JSON / Markdown / pandas exports
- errors: typed failures

Usage:
    from novabom import BomEngine, export_csv

    engine = BomEngine()
    bom = engine.calculate(project)
    print(export_csv(bom))
"""

import logging
from pathlib import Path
from typing import Optional

from .calculators import (
    Calculator,
    DrywallCalculator,
    ElectricalCalculator,
    SuspendedCeilingCalculator,
    default_calculators,
)
from .design import Project
from .engine import BomEngine, consolidate
from .errors import (
    BomError,
    CalculationError,
    CatalogLoadError,
    DesignLoadError,
    ExportError,
    MaterialNotFound,
)
from .export import BOMExporter, CSV_HEADERS, export_csv
from .materials import Material, MaterialCatalog
from .schema import BomCalculation, BomItem

__version__ = "0.1.0"

__all__ = [
    "BOMExporter",
    "BomCalculation",
    "BomEngine",
    "BomError",
    "BomItem",
    "CSV_HEADERS",
    "CalculationError",
    "Calculator",
    "CatalogLoadError",
    "DesignLoadError",
    "DrywallCalculator",
    "ElectricalCalculator",
    "ExportError",
    "Material",
    "MaterialCatalog",
    "MaterialNotFound",
    "SuspendedCeilingCalculator",
    "consolidate",
    "default_calculators",
    "export_csv",
    "run_bom_engine",
]


def run_bom_engine(
    project: Project,
    catalog: Optional[MaterialCatalog] = None,
    output_dir=None,
) -> dict:
    """
    Run the complete BOM pipeline for one design.

    Args:
        project: Design tree
        catalog: Material catalog (built-in defaults when omitted)
        output_dir: When given, CSV/JSON/Markdown exports are written here

    Returns:
        Dict with the BomCalculation, per-discipline totals and output paths
    """
    logger = logging.getLogger(__name__)

    logger.info("Calculating bill of materials...")
    engine = BomEngine(catalog=catalog)
    bom = engine.calculate(project)

    exporter = BOMExporter()
    by_discipline = {}
    for item in bom.items:
        label = item.discipline.label
        by_discipline[label] = by_discipline.get(label, 0.0) + item.total_cost

    output_paths = {}
    if output_dir is not None:
        logger.info("Exporting BOM...")
        output_paths = exporter.export_all(bom, Path(output_dir))

    return {
        "bom": bom,
        "material_lines": len(bom.items),
        "total_cost": round(bom.total_cost, 2),
        "cost_by_discipline": {k: round(v, 2) for k, v in by_discipline.items()},
        "output_paths": {k: str(v) for k, v in output_paths.items()},
    }
