"""
Material Catalog - Lookup table of priceable materials by code.

Provides:
- Indexed lookup by code (absence is a normal outcome, not an error)
- Filter views by category and discipline, in insertion order
- Built-in starter seed (DEFAULT_MATERIALS), replaceable by the caller
- Vendor price files in YAML, validated with pydantic

Duplicate codes: add() replaces the existing entry (last write wins). The
replaced entry keeps its original position in iteration order. Nothing is
merged and no error is raised.

The catalog is read-mostly. Mutating it while a calculation is reading it
is not supported; callers serialize writes themselves.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..design.model import Discipline
from ..errors import CatalogLoadError, MaterialNotFound
from .schema import (
    CategoryType,
    Material,
    MaterialCategory,
    Unit,
    parse_category,
    same_category,
)

logger = logging.getLogger(__name__)


# (code, name, unit, cost_per_unit, discipline, category)
DEFAULT_MATERIALS: List[Tuple[str, str, Unit, float, Discipline, MaterialCategory]] = [
    # Drywall
    ("DW_PANEL_125", "Drywall Panel 12.5mm", Unit.SQUARE_METER, 15.50,
     Discipline.DRYWALL, MaterialCategory.DRYWALL_PANEL),
    ("DW_STUD_75", "Metal Stud 75mm", Unit.METER, 3.20,
     Discipline.DRYWALL, MaterialCategory.DRYWALL_STUD),
    ("DW_TRACK_75", "Metal Track 75mm", Unit.METER, 2.80,
     Discipline.DRYWALL, MaterialCategory.DRYWALL_TRACK),
    ("DW_SCREW_25", "Drywall Screw 25mm", Unit.PIECE, 0.05,
     Discipline.DRYWALL, MaterialCategory.DRYWALL_SCREW),
    # Suspended ceiling
    ("CEIL_TILE_600", "Ceiling Tile 600x600", Unit.PIECE, 12.50,
     Discipline.SUSPENDED_CEILING, MaterialCategory.CEILING_TILE),
    ("CEIL_GRID_MAIN", "T-Grid Main Profile", Unit.METER, 8.50,
     Discipline.SUSPENDED_CEILING, MaterialCategory.CEILING_GRID),
    ("CEIL_GRID_CROSS", "T-Grid Cross Profile", Unit.METER, 6.50,
     Discipline.SUSPENDED_CEILING, MaterialCategory.CEILING_GRID),
    ("CEIL_HANGER", "Ceiling Hanger", Unit.PIECE, 1.20,
     Discipline.SUSPENDED_CEILING, MaterialCategory.CEILING_HANGER),
    # Fixings, shared by drywall tracks and ceiling hangers
    ("ANCHOR_8MM", "Wall Anchor 8mm", Unit.PIECE, 0.25,
     Discipline.ARCHITECTURE, MaterialCategory.ANCHOR),
    # Electrical
    ("ELEC_NYM_315", "NYM Cable 3x1.5mm", Unit.METER_CABLE, 2.80,
     Discipline.ELECTRICAL, MaterialCategory.ELECTRICAL_CABLE),
    ("ELEC_OUTLET_STD", "Standard Outlet", Unit.PIECE, 8.50,
     Discipline.ELECTRICAL, MaterialCategory.ELECTRICAL_OUTLET),
]


class MaterialRecord(BaseModel):
    """One material entry in a vendor price file."""
    code: str = Field(min_length=1)
    name: str
    unit: str
    cost_per_unit: float = Field(ge=0, allow_inf_nan=False)
    discipline: str
    category: str
    density: Optional[float] = None
    supplier: Optional[str] = None

    @field_validator("unit")
    @classmethod
    def _check_unit(cls, v: str) -> str:
        Unit.parse(v)
        return v

    @field_validator("discipline")
    @classmethod
    def _check_discipline(cls, v: str) -> str:
        Discipline.parse(v)
        return v

    def to_material(self) -> Material:
        return Material(
            code=self.code,
            name=self.name,
            unit=Unit.parse(self.unit),
            cost_per_unit=self.cost_per_unit,
            discipline=Discipline.parse(self.discipline),
            category=parse_category(self.category),
            density=self.density,
            supplier=self.supplier,
        )


class MaterialCatalog:
    """In-memory material table keyed by code."""

    def __init__(self, materials: Optional[Iterable[Material]] = None):
        self._materials: Dict[str, Material] = {}
        for material in materials or []:
            self.add(material)

    @classmethod
    def with_defaults(cls) -> "MaterialCatalog":
        catalog = cls()
        catalog.load_defaults()
        return catalog

    @classmethod
    def from_yaml(cls, path, include_defaults: bool = False) -> "MaterialCatalog":
        """Build a catalog from a vendor price file, optionally on top of the seed."""
        catalog = cls()
        if include_defaults:
            catalog.load_defaults()
        catalog.load_yaml(path)
        return catalog

    # -- mutation -----------------------------------------------------------

    def add(self, material: Material) -> None:
        """Insert a material; an existing code is replaced."""
        if material.code in self._materials:
            logger.debug(f"Replacing catalog entry {material.code}")
        self._materials[material.code] = material

    def load_defaults(self, seed: Optional[Sequence[tuple]] = None) -> None:
        """Seed the catalog. `seed` replaces DEFAULT_MATERIALS entirely."""
        rows = DEFAULT_MATERIALS if seed is None else seed
        for code, name, unit, cost, discipline, category in rows:
            self.add(Material(
                code=code,
                name=name,
                unit=Unit.parse(unit),
                cost_per_unit=cost,
                discipline=Discipline.parse(discipline),
                category=parse_category(category),
            ))
        logger.debug(f"Loaded {len(rows)} seed materials")

    def load_yaml(self, path) -> int:
        """
        Add materials from a YAML price file.

        Accepts either a top-level list or a mapping with a `materials` list.

        Returns:
            Number of records loaded

        Raises:
            CatalogLoadError: unreadable file or invalid record
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise CatalogLoadError(str(e), path=path) from e

        if isinstance(data, dict):
            data = data.get("materials")
        if not isinstance(data, list):
            raise CatalogLoadError("expected a list of materials", path=path)

        records = []
        for i, raw in enumerate(data):
            if not isinstance(raw, dict):
                raise CatalogLoadError(f"record {i} is not a mapping", path=path)
            try:
                records.append(MaterialRecord(**raw).to_material())
            except (ValidationError, ValueError) as e:
                code = raw.get("code", f"#{i}")
                raise CatalogLoadError(f"invalid material {code}: {e}", path=path) from e

        for material in records:
            self.add(material)

        logger.info(f"Loaded {len(records)} materials from {path}")
        return len(records)

    # -- lookup -------------------------------------------------------------

    def get_by_code(self, code: str) -> Optional[Material]:
        return self._materials.get(code)

    def require(self, code: str) -> Material:
        """Lookup that raises MaterialNotFound instead of returning None."""
        material = self._materials.get(code)
        if material is None:
            raise MaterialNotFound(code)
        return material

    def get_by_category(self, category: CategoryType) -> List[Material]:
        category = parse_category(category)
        return [m for m in self._materials.values() if same_category(m.category, category)]

    def get_by_discipline(self, discipline: Discipline) -> List[Material]:
        discipline = Discipline.parse(discipline)
        return [m for m in self._materials.values() if m.discipline is discipline]

    def codes(self) -> List[str]:
        return list(self._materials)

    def to_records(self) -> List[dict]:
        return [m.to_dict() for m in self._materials.values()]

    def __len__(self) -> int:
        return len(self._materials)

    def __iter__(self) -> Iterator[Material]:
        return iter(list(self._materials.values()))

    def __contains__(self, code) -> bool:
        return code in self._materials

    def __repr__(self) -> str:
        return f"MaterialCatalog({len(self)} materials)"
