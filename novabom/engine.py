"""
BOM Engine - Main Orchestrator
Runs the discipline calculators against one design and consolidates the
result into a costed bill of materials.

Pipeline:
1. Every registered calculator, in registration order, against the same
   design and catalog
2. Concatenate raw items
3. Consolidate by material code (first-seen order)
4. Sum costs, stamp the UTC calculation date

Fail-fast: the first calculator failure aborts the call with a
CalculationError. No partial report is returned.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional

from .calculators import Calculator, default_calculators
from .design.model import Project
from .errors import CalculationError
from .export import export_csv
from .materials.catalog import MaterialCatalog
from .schema import BomCalculation, BomItem

logger = logging.getLogger(__name__)


def consolidate(items: Iterable[BomItem]) -> List[BomItem]:
    """
    Merge items sharing a material code.

    Quantity and total_cost are summed; every other field comes from the
    first occurrence. Output order is the order codes were first seen.
    """
    merged: Dict[str, BomItem] = {}
    for item in items:
        existing = merged.get(item.material_code)
        if existing is None:
            merged[item.material_code] = item
        else:
            merged[item.material_code] = existing.merged_with(item)
    return list(merged.values())


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _discipline_of(calculator):
    tag = getattr(calculator, "discipline_tag", None)
    return tag() if callable(tag) else None


class BomEngine:
    """
    BOM calculation engine.

    Owns a material catalog and an ordered list of calculators. With no
    arguments it uses the default catalog and the built-in calculators.
    """

    def __init__(
        self,
        catalog: Optional[MaterialCatalog] = None,
        calculators: Optional[Iterable[Calculator]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if catalog is None:
            catalog = MaterialCatalog.with_defaults()
        self.catalog = catalog
        self.calculators: List[Calculator] = (
            list(calculators) if calculators is not None else default_calculators()
        )
        self._clock = clock or _utc_now

    def register(self, calculator: Calculator) -> None:
        """Append a calculator; it runs after those already registered."""
        self.calculators.append(calculator)
        logger.debug(f"Registered calculator {calculator!r}")

    def calculate_raw(self, design: Project) -> List[BomItem]:
        """Run all calculators and return their concatenated, unmerged output."""
        all_items: List[BomItem] = []

        for calculator in self.calculators:
            label = getattr(calculator, "name", type(calculator).__name__)
            try:
                # Lazy results (generators) fail while being drained
                items = list(calculator.compute(design, self.catalog) or [])
            except CalculationError:
                logger.error(f"Calculator {label} failed, aborting calculation")
                raise
            except Exception as e:
                logger.error(f"Calculator {label} failed, aborting calculation: {e}")
                raise CalculationError(
                    str(e) or type(e).__name__,
                    discipline=_discipline_of(calculator),
                    calculator=label,
                ) from e

            for item in items:
                if not isinstance(item, BomItem):
                    logger.error(f"Calculator {label} returned {type(item).__name__}, aborting calculation")
                    raise CalculationError(
                        f"Expected BomItem, got {type(item).__name__}",
                        discipline=_discipline_of(calculator),
                        calculator=label,
                    )

            logger.debug(f"{label}: {len(items)} items")
            all_items.extend(items)

        return all_items

    def calculate(self, design: Project) -> BomCalculation:
        """
        Calculate the consolidated BOM for a design.

        Raises:
            CalculationError: a calculator could not process the design
        """
        project_id = str(getattr(design, "id", ""))
        logger.info(
            f"Starting BOM calculation for project {project_id} "
            f"with {len(self.calculators)} calculators"
        )

        raw_items = self.calculate_raw(design)
        items = consolidate(raw_items)
        total_cost = sum(item.total_cost for item in items)

        bom = BomCalculation(
            project_id=project_id,
            items=tuple(items),
            total_cost=total_cost,
            calculation_date=self._clock().isoformat(),
        )

        logger.info(
            f"BOM complete: {len(raw_items)} raw lines -> {len(items)} materials, "
            f"total cost {total_cost:.2f}"
        )
        return bom

    def export_csv(self, bom: BomCalculation) -> str:
        return export_csv(bom)
