"""
BOM Schema - Line items and the calculation report.

BomItem invariant: total_cost == quantity * unit_cost when created. Merging
two items sums quantity and total_cost together, so the invariant still holds
for the merged quantity.

BomCalculation is produced fresh by every BomEngine.calculate() call and is
never mutated afterwards.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

from .design.model import Discipline
from .materials.schema import Material, Unit


@dataclass(frozen=True)
class BomItem:
    """One costed material line."""
    material_code: str
    material_name: str
    quantity: float
    unit: Unit
    unit_cost: float
    total_cost: float
    discipline: Discipline
    category: str
    notes: Optional[str] = None

    @classmethod
    def from_material(
        cls,
        material: Material,
        quantity: float,
        notes: Optional[str] = None,
    ) -> "BomItem":
        quantity = float(quantity)
        return cls(
            material_code=material.code,
            material_name=material.name,
            quantity=quantity,
            unit=material.unit,
            unit_cost=material.cost_per_unit,
            total_cost=quantity * material.cost_per_unit,
            discipline=material.discipline,
            category=material.category_label,
            notes=notes,
        )

    def merged_with(self, other: "BomItem") -> "BomItem":
        """Sum quantity and cost of `other` into a copy of this item."""
        return replace(
            self,
            quantity=self.quantity + other.quantity,
            total_cost=self.total_cost + other.total_cost,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "material_code": self.material_code,
            "material_name": self.material_name,
            "quantity": self.quantity,
            "unit": self.unit.value,
            "unit_cost": self.unit_cost,
            "total_cost": self.total_cost,
            "discipline": self.discipline.value,
            "category": self.category,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class BomCalculation:
    """Consolidated, costed BOM for one project."""
    project_id: str
    items: Tuple[BomItem, ...]
    total_cost: float
    calculation_date: str

    def get(self, material_code: str) -> Optional[BomItem]:
        for item in self.items:
            if item.material_code == material_code:
                return item
        return None

    def items_for(self, discipline: Discipline):
        return [item for item in self.items if item.discipline is discipline]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "project_id": self.project_id,
            "calculation_date": self.calculation_date,
            "total_cost": self.total_cost,
            "summary": {
                "material_lines": len(self.items),
                "disciplines": len({item.discipline for item in self.items}),
            },
            "items": [item.to_dict() for item in self.items],
        }
