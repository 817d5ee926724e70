"""
Material Schema - Units, categories and the Material record.

Units and categories are closed enums; MaterialCategory has an open escape
case, OtherCategory(label), for vendor items that fit no standard bucket.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..design.model import Discipline


class Unit(Enum):
    """Units of measurement."""
    # Length
    METER = "m"
    CENTIMETER = "cm"
    MILLIMETER = "mm"
    # Area
    SQUARE_METER = "m2"
    # Volume
    CUBIC_METER = "m3"
    LITER = "l"
    # Count
    PIECE = "pc"
    EACH = "ea"
    # Weight
    KILOGRAM = "kg"
    GRAM = "g"
    # Electrical
    METER_CABLE = "m_cable"
    WATT = "W"
    AMPERE = "A"

    @property
    def symbol(self) -> str:
        """Display symbol used in exports."""
        return _UNIT_SYMBOLS.get(self, self.value)

    @classmethod
    def parse(cls, text: Union[str, "Unit"]) -> "Unit":
        """Resolve a unit from its value, symbol or enum name."""
        if isinstance(text, cls):
            return text
        raw = str(text).strip()
        for unit in cls:
            if raw == unit.value or raw == unit.symbol or raw.upper() == unit.name:
                return unit
        lowered = raw.lower()
        for unit in cls:
            if lowered == unit.value.lower():
                return unit
        raise ValueError(f"Unknown unit: {text!r}")


_UNIT_SYMBOLS = {
    Unit.SQUARE_METER: "m²",
    Unit.CUBIC_METER: "m³",
    Unit.METER_CABLE: "m (cable)",
}


class MaterialCategory(Enum):
    """Material categories for grouping and filtering."""
    # Drywall
    DRYWALL_PANEL = "drywall_panel"
    DRYWALL_STUD = "drywall_stud"
    DRYWALL_TRACK = "drywall_track"
    DRYWALL_SCREW = "drywall_screw"
    DRYWALL_COMPOUND = "drywall_compound"
    DRYWALL_TAPE = "drywall_tape"
    # Suspended ceiling
    CEILING_TILE = "ceiling_tile"
    CEILING_GRID = "ceiling_grid"
    CEILING_HANGER = "ceiling_hanger"
    CEILING_WIRE = "ceiling_wire"
    # Electrical
    ELECTRICAL_CABLE = "electrical_cable"
    ELECTRICAL_CONDUIT = "electrical_conduit"
    ELECTRICAL_OUTLET = "electrical_outlet"
    ELECTRICAL_SWITCH = "electrical_switch"
    ELECTRICAL_PANEL = "electrical_panel"
    ELECTRICAL_FIXTURE = "electrical_fixture"
    # Plumbing
    PLUMBING_PIPE = "plumbing_pipe"
    PLUMBING_FITTING = "plumbing_fitting"
    PLUMBING_FIXTURE = "plumbing_fixture"
    PLUMBING_VALVE = "plumbing_valve"
    # Fixings and fasteners
    ANCHOR = "anchor"
    SCREW = "screw"
    NAIL = "nail"
    BOLT = "bolt"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


@dataclass(frozen=True)
class OtherCategory:
    """Free-form category outside the standard set."""
    label: str

    @property
    def value(self) -> str:
        return "other"


CategoryType = Union[MaterialCategory, OtherCategory]


def parse_category(text: Union[str, CategoryType]) -> CategoryType:
    """
    Resolve a category from text.

    Known values/names map to MaterialCategory; anything else becomes
    OtherCategory carrying the original text. "other:<label>" is accepted
    as an explicit escape.
    """
    if isinstance(text, (MaterialCategory, OtherCategory)):
        return text
    raw = str(text).strip()
    if raw.lower().startswith("other:"):
        return OtherCategory(raw.split(":", 1)[1].strip())
    key = raw.lower().replace(" ", "_").replace("-", "_")
    for category in MaterialCategory:
        if category.value == key:
            return category
    return OtherCategory(raw)


def same_category(a: CategoryType, b: CategoryType) -> bool:
    """Variant match: any two OtherCategory values match each other."""
    if isinstance(a, OtherCategory) or isinstance(b, OtherCategory):
        return isinstance(a, OtherCategory) and isinstance(b, OtherCategory)
    return a is b


@dataclass(frozen=True)
class Material:
    """Priceable material, identified by code."""
    code: str
    name: str
    unit: Unit
    cost_per_unit: float
    discipline: Discipline
    category: CategoryType
    density: Optional[float] = None
    supplier: Optional[str] = None

    def __post_init__(self):
        if not self.code:
            raise ValueError("Material code must not be empty")
        cost = float(self.cost_per_unit)
        if not math.isfinite(cost) or cost < 0:
            raise ValueError(
                f"Material {self.code}: cost_per_unit must be finite and non-negative, got {self.cost_per_unit}"
            )

    @property
    def category_label(self) -> str:
        return self.category.label

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "name": self.name,
            "unit": self.unit.value,
            "cost_per_unit": self.cost_per_unit,
            "discipline": self.discipline.value,
            "category": (
                self.category.value
                if isinstance(self.category, MaterialCategory)
                else f"other:{self.category.label}"
            ),
            "density": self.density,
            "supplier": self.supplier,
        }
