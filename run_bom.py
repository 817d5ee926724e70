#!/usr/bin/env python3
"""
NovaBOM Runner - Single command BOM calculation from a checkout.

Usage:
    python run_bom.py --design examples/office.yaml
    python run_bom.py --design examples/office.yaml --catalog rules/vendor_catalog.yaml --output out/office --format all

Same options as the installed `novabom` command.
"""

import sys
from pathlib import Path

# Run from a source checkout without installing
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from novabom.cli import main  # noqa: E402


if __name__ == "__main__":
    sys.exit(main())
