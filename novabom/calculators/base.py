"""
Calculator contract shared by all discipline calculators.

A calculator reads the design tree and the catalog and returns raw BomItems.
Anything with `compute(design, catalog)` and `discipline_tag()` can be
registered with the engine (built-ins, third-party plugins, sandboxed hosts).

Shared rules:
- Only Phase.NEW walls and components are taken off.
- Degenerate dimensions (NaN, infinite, zero or negative) count as zero.
- A line whose material code is missing from the catalog is dropped.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Tuple

from ..design.model import Component, Discipline, Floor, Phase, Project, Wall, kind_discipline
from ..errors import CalculationError
from ..materials.catalog import MaterialCatalog
from ..schema import BomItem

logger = logging.getLogger(__name__)


def usable(value) -> float:
    """Dimension as a float, or 0.0 when it is not a positive finite number."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value) or value <= 0:
        return 0.0
    return value


class Calculator(ABC):
    """Base class for discipline calculators."""

    name = "calculator"

    @abstractmethod
    def discipline_tag(self) -> Discipline:
        """Discipline this calculator takes off."""

    @abstractmethod
    def compute(self, design: Project, catalog: MaterialCatalog) -> List[BomItem]:
        """Return raw (unconsolidated) items for the design."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    # -- helpers for subclasses ---------------------------------------------

    def _error(self, message: str) -> CalculationError:
        return CalculationError(message, discipline=self.discipline_tag(), calculator=self.name)

    def floors(self, design: Project) -> Iterator[Floor]:
        try:
            buildings = list(design.buildings)
            for building in buildings:
                for floor in list(building.floors):
                    yield floor
        except (AttributeError, TypeError) as e:
            raise self._error(f"Malformed design tree: {e}") from e

    def new_walls(self, floor: Floor) -> Iterator[Wall]:
        """NEW walls on the floor tagged with this calculator's discipline."""
        discipline = self.discipline_tag()
        for wall in floor.walls:
            if wall.phase is Phase.NEW and discipline in wall.disciplines:
                yield wall

    def new_components(self, floor: Floor) -> Iterator[Component]:
        """NEW components on the floor belonging to this discipline."""
        discipline = self.discipline_tag()
        for component in floor.components:
            if component.discipline is not discipline or component.phase is not Phase.NEW:
                continue
            kind_owner = kind_discipline(component.component_type)
            if kind_owner is None:
                raise self._error(
                    f"Unsupported component type {component.component_type!r} "
                    f"on component '{component.name}'"
                )
            if kind_owner is not discipline:
                # Kind from another trade tagged with this discipline
                logger.debug(
                    f"{self.name}: skipping '{component.name}', "
                    f"{component.component_type} is not a {discipline.value} kind"
                )
                continue
            yield component

    def wall_dimensions(self, wall: Wall) -> Tuple[float, float]:
        """(length, height) with degenerate values zeroed."""
        try:
            length = wall.length()
        except (TypeError, ValueError, OverflowError):
            length = 0.0
        return usable(length), usable(wall.height)

    def line(
        self,
        catalog: MaterialCatalog,
        code: str,
        quantity: float,
        notes: Optional[str] = None,
    ) -> Optional[BomItem]:
        """BomItem for `code`, or None when the catalog lacks it."""
        material = catalog.get_by_code(code)
        if material is None:
            logger.debug(f"{self.name}: material {code} not in catalog, line omitted")
            return None
        return BomItem.from_material(material, quantity, notes)

    def emit(self, items: List[BomItem], catalog: MaterialCatalog, code: str,
             quantity: float, notes: Optional[str] = None) -> None:
        item = self.line(catalog, code, quantity, notes)
        if item is not None:
            items.append(item)
