"""
Design Model - The building tree the calculators read.

Project -> Buildings -> Floors -> {Walls, Openings, Components}

The tree is built and owned by the caller (editor, importer, tests). The
engine only reads it for the duration of one calculate() call and never
mutates it.

Units: all coordinates and dimensions are meters.
"""

import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Union


class Discipline(Enum):
    """Engineering disciplines (trades)."""
    ARCHITECTURE = "architecture"
    ELECTRICAL = "electrical"
    PLUMBING = "plumbing"
    MASONRY = "masonry"
    DRYWALL = "drywall"
    PAINTING = "painting"
    SUSPENDED_CEILING = "suspended_ceiling"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

    @classmethod
    def parse(cls, text: Union[str, "Discipline"]) -> "Discipline":
        """Resolve a discipline from its value, name or label."""
        if isinstance(text, cls):
            return text
        key = str(text).strip().lower().replace(" ", "_").replace("-", "_")
        for discipline in cls:
            if discipline.value == key:
                return discipline
        raise ValueError(f"Unknown discipline: {text!r}")


class Phase(Enum):
    """Construction status of an element. Only NEW work is taken off."""
    EXISTING = "existing"
    DEMOLITION = "demolition"
    NEW = "new"


class OpeningType(Enum):
    DOOR = "door"
    WINDOW = "window"
    OPENING = "opening"


class ElectricalComponent(Enum):
    OUTLET = "outlet"
    SWITCH = "switch"
    LIGHT = "light"
    PANEL = "panel"
    JUNCTION = "junction"
    CONDUIT = "conduit"


class PlumbingComponent(Enum):
    SINK = "sink"
    TOILET = "toilet"
    SHOWER = "shower"
    PIPE = "pipe"
    VALVE = "valve"
    FIXTURE = "fixture"


class DrywallComponent(Enum):
    STUD = "stud"
    TRACK = "track"
    PANEL = "panel"
    CORNER = "corner"
    JOINT = "joint"


class SuspendedCeilingComponent(Enum):
    TILE = "tile"
    GRID = "grid"
    HANGER = "hanger"
    SUPPORT = "support"
    LIGHT = "light"


ComponentType = Union[
    ElectricalComponent,
    PlumbingComponent,
    DrywallComponent,
    SuspendedCeilingComponent,
]

# Component kind family -> owning discipline
COMPONENT_KINDS = {
    ElectricalComponent: Discipline.ELECTRICAL,
    PlumbingComponent: Discipline.PLUMBING,
    DrywallComponent: Discipline.DRYWALL,
    SuspendedCeilingComponent: Discipline.SUSPENDED_CEILING,
}

KIND_BY_DISCIPLINE = {d: kind for kind, d in COMPONENT_KINDS.items()}


def kind_discipline(component_type) -> Optional[Discipline]:
    """Discipline owning a component kind, or None for unknown types."""
    return COMPONENT_KINDS.get(type(component_type))


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class Point2D:
    """Point in plan view."""
    x: float = 0.0
    y: float = 0.0


@dataclass
class Wall:
    """Straight wall between two plan points."""
    name: str
    start_point: Point2D
    end_point: Point2D
    thickness: float
    height: float
    material: str = "Generic"
    disciplines: List[Discipline] = field(
        default_factory=lambda: [Discipline.ARCHITECTURE]
    )
    phase: Phase = Phase.NEW
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def length(self) -> float:
        dx = self.end_point.x - self.start_point.x
        dy = self.end_point.y - self.start_point.y
        return math.sqrt(dx * dx + dy * dy)

    def area(self) -> float:
        """Face area (one side)."""
        return self.length() * self.height

    def has_discipline(self, discipline: Discipline) -> bool:
        return discipline in self.disciplines


@dataclass
class Opening:
    """Door, window or plain opening, optionally hosted by a wall."""
    name: str
    opening_type: OpeningType
    position: Point2D
    width: float
    height: float
    wall_id: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def area(self) -> float:
        return self.width * self.height


@dataclass
class Component:
    """
    Trade component placed on a floor (outlet, ceiling tile, drywall panel...).

    When no discipline is given it is taken from the component kind.
    """
    name: str
    component_type: ComponentType
    position: Point2D = field(default_factory=Point2D)
    discipline: Optional[Discipline] = None
    rotation: float = 0.0  # degrees
    phase: Phase = Phase.NEW
    properties: Dict[str, str] = field(default_factory=dict)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        if self.discipline is None:
            self.discipline = kind_discipline(self.component_type)


@dataclass
class Floor:
    """Single level of a building."""
    name: str
    level: float = 0.0  # elevation
    ceiling_height: float = 2.7
    walls: List[Wall] = field(default_factory=list)
    openings: List[Opening] = field(default_factory=list)
    components: List[Component] = field(default_factory=list)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def add_wall(self, wall: Wall) -> None:
        self.walls.append(wall)

    def add_opening(self, opening: Opening) -> None:
        self.openings.append(opening)

    def add_component(self, component: Component) -> None:
        self.components.append(component)

    def walls_by_discipline(self, discipline: Discipline) -> List[Wall]:
        return [w for w in self.walls if w.has_discipline(discipline)]


@dataclass
class Building:
    name: str
    address: str = ""
    floors: List[Floor] = field(default_factory=list)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def add_floor(self, floor: Floor) -> None:
        self.floors.append(floor)


@dataclass
class Project:
    """Root of the design tree."""
    name: str
    description: str = ""
    buildings: List[Building] = field(default_factory=list)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: str = field(default_factory=_utc_now)
    modified_at: str = field(default_factory=_utc_now)
    version: str = "0.1.0"

    def add_building(self, building: Building) -> None:
        self.buildings.append(building)
        self.modified_at = _utc_now()

    def iter_floors(self):
        """Yield every floor of every building, in tree order."""
        for building in self.buildings:
            for floor in building.floors:
                yield floor
