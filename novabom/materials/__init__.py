"""
Material Catalog - priceable materials the calculators draw from.

This module provides:
- Unit / MaterialCategory / OtherCategory enums
- Material record
- MaterialCatalog with the built-in starter seed and YAML vendor files
"""

from .schema import (
    CategoryType,
    Material,
    MaterialCategory,
    OtherCategory,
    Unit,
    parse_category,
    same_category,
)
from .catalog import DEFAULT_MATERIALS, MaterialCatalog, MaterialRecord

__all__ = [
    "CategoryType",
    "DEFAULT_MATERIALS",
    "Material",
    "MaterialCatalog",
    "MaterialCategory",
    "MaterialRecord",
    "OtherCategory",
    "Unit",
    "parse_category",
    "same_category",
]
