"""
Design Loader - Build a design tree from a JSON/YAML document.

This is an input adapter for the CLI and for scripted runs, not a project
file format. Expected shape:

    name: Office fit-out
    buildings:
      - name: Block A
        floors:
          - name: Ground
            walls:
              - name: W1
                start: [0, 0]
                end: [4, 0]
                thickness: 0.1
                height: 2.8
                disciplines: [drywall]
            components:
              - name: O1
                discipline: electrical
                kind: outlet
                position: [1, 0]
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..errors import DesignLoadError
from .model import (
    Building,
    Component,
    Discipline,
    Floor,
    KIND_BY_DISCIPLINE,
    Opening,
    OpeningType,
    Phase,
    Point2D,
    Project,
    Wall,
)

logger = logging.getLogger(__name__)


def _point(value: Any) -> Point2D:
    if value is None:
        return Point2D()
    if isinstance(value, dict):
        return Point2D(float(value.get("x", 0.0)), float(value.get("y", 0.0)))
    x, y = value
    return Point2D(float(x), float(y))


def _phase(value: Optional[str]) -> Phase:
    return Phase(str(value).lower()) if value else Phase.NEW


def _wall_from_dict(d: Dict) -> Wall:
    disciplines = [Discipline.parse(x) for x in d.get("disciplines", ["architecture"])]
    return Wall(
        name=d.get("name", ""),
        start_point=_point(d["start"]),
        end_point=_point(d["end"]),
        thickness=float(d.get("thickness", 0.0)),
        height=float(d["height"]),
        material=d.get("material", "Generic"),
        disciplines=disciplines,
        phase=_phase(d.get("phase")),
    )


def _opening_from_dict(d: Dict) -> Opening:
    return Opening(
        name=d.get("name", ""),
        opening_type=OpeningType(str(d.get("type", "opening")).lower()),
        position=_point(d.get("position")),
        width=float(d["width"]),
        height=float(d["height"]),
        wall_id=d.get("wall_id"),
    )


def _component_from_dict(d: Dict) -> Component:
    discipline = Discipline.parse(d["discipline"])
    kind_enum = KIND_BY_DISCIPLINE.get(discipline)
    if kind_enum is None:
        raise ValueError(f"Discipline {discipline.value} has no component kinds")
    return Component(
        name=d.get("name", ""),
        component_type=kind_enum(str(d["kind"]).lower()),
        position=_point(d.get("position")),
        discipline=discipline,
        rotation=float(d.get("rotation", 0.0)),
        phase=_phase(d.get("phase")),
        properties={str(k): str(v) for k, v in (d.get("properties") or {}).items()},
    )


def project_from_dict(data: Dict) -> Project:
    """
    Convert a plain dict into a Project tree.

    Raises:
        DesignLoadError: missing keys or values that do not parse
    """
    if not isinstance(data, dict):
        raise DesignLoadError(f"Expected a mapping at top level, got {type(data).__name__}")

    try:
        project = Project(
            name=data.get("name", "Unnamed Project"),
            description=data.get("description", ""),
        )
        if data.get("id"):
            project.id = str(data["id"])

        for b in data.get("buildings", []):
            building = Building(name=b.get("name", ""), address=b.get("address", ""))
            for f in b.get("floors", []):
                floor = Floor(
                    name=f.get("name", ""),
                    level=float(f.get("level", 0.0)),
                    ceiling_height=float(f.get("ceiling_height", 2.7)),
                )
                for w in f.get("walls", []):
                    floor.add_wall(_wall_from_dict(w))
                for o in f.get("openings", []):
                    floor.add_opening(_opening_from_dict(o))
                for c in f.get("components", []):
                    floor.add_component(_component_from_dict(c))
                building.add_floor(floor)
            project.add_building(building)

    except (KeyError, ValueError, TypeError, AttributeError) as e:
        raise DesignLoadError(f"Invalid design data: {e!r}") from e

    return project


def load_design(path) -> Project:
    """Read a .json or .yaml/.yml design file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DesignLoadError(str(e), path=path) from e

    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise DesignLoadError(f"Could not parse file: {e}", path=path) from e

    try:
        project = project_from_dict(data)
    except DesignLoadError as e:
        raise DesignLoadError(e.message, path=path) from e

    logger.info(f"Loaded design '{project.name}' from {path}")
    return project
