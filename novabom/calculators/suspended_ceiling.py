"""
Suspended Ceiling Calculator - Tiles, T-grid profiles, hangers and fixings.

Ceiling area:
- 0.36 m2 per TILE component (600x600mm tile)
- plus the axis-aligned bounding box of the floor's walls, for floors that
  carry at least one NEW suspended-ceiling component of any kind

Grid quantities assume roughly square rooms: main profiles every 1200mm,
cross profiles every 600mm, hangers on a 1200x1200mm grid plus 10% at the
perimeter, one anchor per hanger.
"""

import logging
import math
from typing import List, Optional, Tuple

from ..design.model import Discipline, Floor, Phase, Project, SuspendedCeilingComponent
from ..materials.catalog import MaterialCatalog
from ..schema import BomItem
from .base import Calculator

logger = logging.getLogger(__name__)


class SuspendedCeilingCalculator(Calculator):
    """Suspended (grid) ceiling takeoff."""

    name = "suspended_ceiling"

    TILE_AREA_SQM = 0.36
    TILE_WASTE_FACTOR = 1.05
    MAIN_PROFILE_SPACING_M = 1.2
    CROSS_PROFILE_SPACING_M = 0.6
    HANGER_GRID_M = 1.2
    HANGER_PERIMETER_FACTOR = 1.1

    TILE_CODE = "CEIL_TILE_600"
    MAIN_GRID_CODE = "CEIL_GRID_MAIN"
    CROSS_GRID_CODE = "CEIL_GRID_CROSS"
    HANGER_CODE = "CEIL_HANGER"
    ANCHOR_CODE = "ANCHOR_8MM"

    def discipline_tag(self) -> Discipline:
        return Discipline.SUSPENDED_CEILING

    def _wall_bounds(self, floor: Floor) -> Optional[Tuple[float, float, float, float]]:
        """(min_x, min_y, max_x, max_y) over all wall endpoints with finite coordinates."""
        xs, ys = [], []
        for wall in floor.walls:
            for point in (wall.start_point, wall.end_point):
                if math.isfinite(point.x) and math.isfinite(point.y):
                    xs.append(point.x)
                    ys.append(point.y)
        if not xs:
            return None
        return min(xs), min(ys), max(xs), max(ys)

    def has_ceiling_components(self, floor: Floor) -> bool:
        """Any NEW suspended-ceiling component on the floor, whatever its kind."""
        return any(
            c.discipline is Discipline.SUSPENDED_CEILING and c.phase is Phase.NEW
            for c in floor.components
        )

    def calculate_area(self, design: Project) -> float:
        total = 0.0
        for floor in self.floors(design):
            for component in self.new_components(floor):
                if component.component_type is SuspendedCeilingComponent.TILE:
                    total += self.TILE_AREA_SQM

            if self.has_ceiling_components(floor):
                bounds = self._wall_bounds(floor)
                if bounds is not None:
                    min_x, min_y, max_x, max_y = bounds
                    total += (max_x - min_x) * (max_y - min_y)

        if not math.isfinite(total):
            logger.debug(f"Ceiling: area overflowed ({total}), counted as zero")
            return 0.0
        return total

    def calculate_tile_count(self, area: float) -> float:
        return (area / self.TILE_AREA_SQM) * self.TILE_WASTE_FACTOR

    def calculate_main_grid_length(self, area: float) -> float:
        if area <= 0:
            return 0.0
        room_width = math.sqrt(area * 0.75)
        if not math.isfinite(room_width):
            return 0.0
        return math.ceil(room_width / self.MAIN_PROFILE_SPACING_M) * room_width

    def calculate_cross_grid_length(self, area: float) -> float:
        if area <= 0:
            return 0.0
        room_length = math.sqrt(area * 1.33)
        if not math.isfinite(room_length):
            return 0.0
        return math.ceil(room_length / self.CROSS_PROFILE_SPACING_M) * (area / room_length)

    def calculate_hanger_count(self, area: float) -> float:
        if area <= 0:
            return 0.0
        per_sqm = 1.0 / (self.HANGER_GRID_M * self.HANGER_GRID_M)
        return area * per_sqm * self.HANGER_PERIMETER_FACTOR

    def calculate_hanger_fixings(self, hanger_count: float) -> float:
        return hanger_count

    def compute(self, design: Project, catalog: MaterialCatalog) -> List[BomItem]:
        items: List[BomItem] = []

        area = self.calculate_area(design)
        if area <= 0:
            return items

        tile_count = self.calculate_tile_count(area)
        main_grid = self.calculate_main_grid_length(area)
        cross_grid = self.calculate_cross_grid_length(area)
        hangers = self.calculate_hanger_count(area)
        fixings = self.calculate_hanger_fixings(hangers)

        logger.debug(
            f"Ceiling: area={area:.2f} tiles={tile_count:.1f} "
            f"main={main_grid:.2f} cross={cross_grid:.2f} hangers={hangers:.1f}"
        )

        self.emit(items, catalog, self.TILE_CODE, tile_count,
                  "600x600mm tiles with 5% waste factor")
        self.emit(items, catalog, self.MAIN_GRID_CODE, main_grid,
                  "Main T-grid profiles, 1200mm spacing")
        self.emit(items, catalog, self.CROSS_GRID_CODE, cross_grid,
                  "Cross T-grid profiles, 600mm spacing")
        self.emit(items, catalog, self.HANGER_CODE, hangers,
                  "Ceiling hangers, 1200x1200mm grid")
        self.emit(items, catalog, self.ANCHOR_CODE, fixings,
                  "Hanger fixings to structure")

        return items
