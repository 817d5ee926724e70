"""
NovaBOM command-line runner.

Usage:
    novabom --design office.json
    novabom --design office.yaml --catalog vendor_prices.yaml --output out/office
    novabom --design office.json --catalog vendor_prices.yaml --no-defaults --format json
    novabom --design office.json --output out/office --format xlsx

Without --output the chosen format is printed to stdout.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .design.loader import load_design
from .engine import BomEngine
from .errors import BomError
from .export import BOMExporter
from .materials.catalog import MaterialCatalog

logger = logging.getLogger("novabom")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="novabom",
        description="NovaBOM - Bill of Materials from a building design",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # CSV to stdout with the built-in catalog
    novabom --design office.json

    # Vendor prices on top of the built-in catalog, all exports to a folder
    novabom --design office.yaml --catalog vendor.yaml --output out/office

    # Vendor catalog only
    novabom --design office.yaml --catalog vendor.yaml --no-defaults
        """,
    )
    parser.add_argument(
        "--design", "-d",
        required=True,
        help="Design file (.json, .yaml, .yml)",
    )
    parser.add_argument(
        "--catalog", "-c",
        action="append",
        default=[],
        help="YAML material price file; may be repeated, later files win",
    )
    parser.add_argument(
        "--no-defaults",
        action="store_true",
        help="Do not load the built-in starter catalog",
    )
    parser.add_argument(
        "--output", "-o",
        help="Output directory. Without it the export is printed to stdout.",
    )
    parser.add_argument(
        "--format", "-f",
        choices=["csv", "json", "md", "xlsx", "all"],
        default="csv",
        help="Export format (default: csv). 'xlsx' and 'all' require --output.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging",
    )
    return parser


def build_catalog(paths: List[str], include_defaults: bool) -> MaterialCatalog:
    catalog = MaterialCatalog()
    if include_defaults:
        catalog.load_defaults()
    for path in paths:
        catalog.load_yaml(path)
    return catalog


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    if args.format in ("xlsx", "all") and not args.output:
        parser.error(f"--format {args.format} requires --output")

    exporter = BOMExporter()
    try:
        design = load_design(args.design)
        catalog = build_catalog(args.catalog, include_defaults=not args.no_defaults)
        engine = BomEngine(catalog=catalog)
        bom = engine.calculate(design)

        if args.output:
            if args.format == "all":
                paths = exporter.export_all(bom, args.output)
            elif args.format == "xlsx":
                path = Path(args.output) / "bom.xlsx"
                exporter.to_excel(bom, path)
                paths = {"xlsx": path}
            else:
                text = _render(exporter, bom, args.format)
                name = {"csv": "bom.csv", "json": "bom.json", "md": "bom_summary.md"}[args.format]
                paths = {args.format: exporter.write_text(text, Path(args.output) / name)}
            for key, path in paths.items():
                logger.info(f"Wrote {key}: {path}")
        else:
            sys.stdout.write(_render(exporter, bom, args.format))

    except BomError as e:
        logger.error(str(e))
        return 1

    logger.info(f"{len(bom.items)} materials, total cost {bom.total_cost:.2f}")
    return 0


def _render(exporter: BOMExporter, bom, fmt: str) -> str:
    if fmt == "json":
        return exporter.to_json(bom) + "\n"
    if fmt == "md":
        return exporter.to_markdown(bom)
    return exporter.to_csv(bom)


if __name__ == "__main__":
    sys.exit(main())
