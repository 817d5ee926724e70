"""
Drywall Calculator - Panels, studs, tracks, screws and track fixings.

Trade heuristics:
- Panel area: 1.0 m2 per drywall PANEL component + length x height of every
  wall tagged DRYWALL
- Studs at 400mm centres, full wall height
- Top and bottom track along the wall length
- 25 screws per m2 of board
- Track fixings at 600mm centres, top and bottom
"""

import logging
import math
from typing import List

from ..design.model import Discipline, DrywallComponent, Project
from ..materials.catalog import MaterialCatalog
from ..schema import BomItem
from .base import Calculator

logger = logging.getLogger(__name__)


class DrywallCalculator(Calculator):
    """Drywall partition takeoff."""

    name = "drywall"

    PANEL_COMPONENT_AREA_SQM = 1.0
    STUD_SPACING_M = 0.4
    FIXING_SPACING_M = 0.6
    SCREWS_PER_SQM = 25.0

    PANEL_CODE = "DW_PANEL_125"
    STUD_CODE = "DW_STUD_75"
    TRACK_CODE = "DW_TRACK_75"
    SCREW_CODE = "DW_SCREW_25"
    ANCHOR_CODE = "ANCHOR_8MM"

    def discipline_tag(self) -> Discipline:
        return Discipline.DRYWALL

    def calculate_area(self, design: Project) -> float:
        """Board area from panel components and drywall walls."""
        total = 0.0
        for floor in self.floors(design):
            for component in self.new_components(floor):
                if component.component_type is DrywallComponent.PANEL:
                    total += self.PANEL_COMPONENT_AREA_SQM
            for wall in self.new_walls(floor):
                length, height = self.wall_dimensions(wall)
                total += length * height
        return total

    def calculate_stud_length(self, design: Project) -> float:
        total = 0.0
        for floor in self.floors(design):
            for wall in self.new_walls(floor):
                length, height = self.wall_dimensions(wall)
                total += math.ceil(length / self.STUD_SPACING_M) * height
        return total

    def calculate_track_length(self, design: Project) -> float:
        total = 0.0
        for floor in self.floors(design):
            for wall in self.new_walls(floor):
                length, _ = self.wall_dimensions(wall)
                total += length * 2.0
        return total

    def calculate_screws(self, area: float) -> float:
        return area * self.SCREWS_PER_SQM

    def calculate_fixings(self, design: Project) -> float:
        """Assumes a concrete/masonry substrate."""
        total = 0.0
        for floor in self.floors(design):
            for wall in self.new_walls(floor):
                length, _ = self.wall_dimensions(wall)
                total += math.ceil(length / self.FIXING_SPACING_M) * 2.0
        return total

    def compute(self, design: Project, catalog: MaterialCatalog) -> List[BomItem]:
        items: List[BomItem] = []

        area = self.calculate_area(design)
        if area <= 0:
            return items

        stud_length = self.calculate_stud_length(design)
        track_length = self.calculate_track_length(design)
        screw_count = self.calculate_screws(area)
        fixing_count = self.calculate_fixings(design)

        logger.debug(
            f"Drywall: area={area:.2f} studs={stud_length:.2f} "
            f"track={track_length:.2f} screws={screw_count:.0f} fixings={fixing_count:.0f}"
        )

        self.emit(items, catalog, self.PANEL_CODE, area,
                  "Calculated from wall areas and drywall components")
        self.emit(items, catalog, self.STUD_CODE, stud_length,
                  "400mm spacing, standard height")
        self.emit(items, catalog, self.TRACK_CODE, track_length,
                  "Top and bottom perimeter tracks")
        self.emit(items, catalog, self.SCREW_CODE, screw_count,
                  "25 screws per m² of drywall")
        self.emit(items, catalog, self.ANCHOR_CODE, fixing_count,
                  "Track fixings to structure, 600mm spacing")

        return items
