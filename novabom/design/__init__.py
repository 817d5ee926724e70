"""
Design tree consumed by the takeoff engine.

Modules:
- model: Project/Building/Floor/Wall/Opening/Component and the enums
- loader: JSON/YAML input adapter
"""

from .model import (
    Building,
    Component,
    COMPONENT_KINDS,
    Discipline,
    DrywallComponent,
    ElectricalComponent,
    Floor,
    KIND_BY_DISCIPLINE,
    Opening,
    OpeningType,
    Phase,
    PlumbingComponent,
    Point2D,
    Project,
    SuspendedCeilingComponent,
    Wall,
    kind_discipline,
)
from .loader import load_design, project_from_dict

__all__ = [
    "Building",
    "Component",
    "COMPONENT_KINDS",
    "Discipline",
    "DrywallComponent",
    "ElectricalComponent",
    "Floor",
    "KIND_BY_DISCIPLINE",
    "Opening",
    "OpeningType",
    "Phase",
    "PlumbingComponent",
    "Point2D",
    "Project",
    "SuspendedCeilingComponent",
    "Wall",
    "kind_discipline",
    "load_design",
    "project_from_dict",
]
