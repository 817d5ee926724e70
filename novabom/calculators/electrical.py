"""
Electrical Calculator - Cable runs and outlets.

Components are counted per kind. Cable is estimated from an average run
per component plus 20% for waste and routing. Only the cable and the
outlets are priced; switches, lights, panels, junctions and conduit are
counted but produce no line yet.
"""

import logging
from collections import Counter
from typing import Dict, List

from ..design.model import Discipline, ElectricalComponent, Project
from ..materials.catalog import MaterialCatalog
from ..schema import BomItem
from .base import Calculator

logger = logging.getLogger(__name__)


class ElectricalCalculator(Calculator):
    """Electrical takeoff (partial: cable and outlets only)."""

    name = "electrical"

    # Average cable run per component, meters
    CABLE_RUN_M: Dict[ElectricalComponent, float] = {
        ElectricalComponent.OUTLET: 10.0,
        ElectricalComponent.SWITCH: 8.0,
        ElectricalComponent.LIGHT: 12.0,  # ceiling
        ElectricalComponent.PANEL: 0.0,   # runs start at the panel
        ElectricalComponent.JUNCTION: 5.0,
        ElectricalComponent.CONDUIT: 1.0,
    }
    CABLE_WASTE_FACTOR = 1.2

    CABLE_CODE = "ELEC_NYM_315"
    OUTLET_CODE = "ELEC_OUTLET_STD"

    def discipline_tag(self) -> Discipline:
        return Discipline.ELECTRICAL

    def count_components(self, design: Project) -> Dict[ElectricalComponent, int]:
        """Electrical components per kind, in first-seen order."""
        counts: Counter = Counter()
        for floor in self.floors(design):
            for component in self.new_components(floor):
                counts[component.component_type] += 1
        return dict(counts)

    def calculate_cable_length(self, design: Project) -> float:
        total = 0.0
        for floor in self.floors(design):
            for component in self.new_components(floor):
                total += self.CABLE_RUN_M[component.component_type]
        return total * self.CABLE_WASTE_FACTOR

    def compute(self, design: Project, catalog: MaterialCatalog) -> List[BomItem]:
        items: List[BomItem] = []

        counts = self.count_components(design)
        if not counts:
            return items

        cable_length = self.calculate_cable_length(design)
        summary = ", ".join(f"{kind.value}={n}" for kind, n in counts.items())
        logger.debug(f"Electrical: {summary}; cable={cable_length:.2f}")

        if cable_length > 0:
            self.emit(items, catalog, self.CABLE_CODE, cable_length,
                      "Estimated cable runs with 20% waste factor")

        outlets = counts.get(ElectricalComponent.OUTLET, 0)
        if outlets:
            self.emit(items, catalog, self.OUTLET_CODE, float(outlets),
                      "Standard electrical outlets")

        return items
