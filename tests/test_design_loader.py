from __future__ import annotations

import json
from pathlib import Path

import pytest

from novabom.design import (
    Discipline,
    ElectricalComponent,
    OpeningType,
    Phase,
    SuspendedCeilingComponent,
    load_design,
    project_from_dict,
)
from novabom.errors import DesignLoadError

SAMPLE_DESIGN = Path(__file__).resolve().parent.parent / "examples" / "office.yaml"


def _minimal(**floor):
    return {
        "name": "Minimal",
        "buildings": [{"name": "B", "floors": [dict({"name": "F"}, **floor)]}],
    }


def test_sample_yaml_loads():
    project = load_design(SAMPLE_DESIGN)

    assert project.name == "Office fit-out"
    floor = project.buildings[0].floors[0]
    assert len(floor.walls) == 4
    assert floor.walls[0].disciplines == [Discipline.DRYWALL]
    assert floor.walls[0].length() == pytest.approx(4.0)
    assert floor.openings[0].opening_type is OpeningType.DOOR
    assert floor.components[0].component_type is SuspendedCeilingComponent.TILE
    assert floor.components[-1].phase is Phase.DEMOLITION


def test_json_design(tmp_path):
    data = _minimal(
        walls=[{"start": {"x": 0, "y": 0}, "end": {"x": 3, "y": 4}, "height": 2.5,
                "disciplines": ["drywall", "Suspended Ceiling"]}],
        components=[{"name": "O", "discipline": "electrical", "kind": "OUTLET"}],
    )
    data["id"] = "proj-42"
    path = tmp_path / "design.json"
    path.write_text(json.dumps(data), encoding="utf-8")

    project = load_design(path)

    assert project.id == "proj-42"
    wall = project.buildings[0].floors[0].walls[0]
    assert wall.length() == pytest.approx(5.0)
    assert wall.disciplines == [Discipline.DRYWALL, Discipline.SUSPENDED_CEILING]
    assert wall.phase is Phase.NEW
    component = project.buildings[0].floors[0].components[0]
    assert component.component_type is ElectricalComponent.OUTLET
    assert component.discipline is Discipline.ELECTRICAL


def test_defaults_for_optional_fields():
    project = project_from_dict(_minimal(walls=[{"start": [0, 0], "end": [1, 0], "height": 3}]))
    wall = project.buildings[0].floors[0].walls[0]
    assert wall.disciplines == [Discipline.ARCHITECTURE]
    assert wall.thickness == 0.0
    assert project.buildings[0].floors[0].ceiling_height == 2.7


@pytest.mark.parametrize(
    "floor",
    [
        {"walls": [{"start": [0, 0], "end": [1, 0]}]},
        {"walls": [{"start": [0, 0], "end": [1, 0], "height": "tall"}]},
        {"walls": [{"start": [0], "end": [1, 0], "height": 3}]},
        {"walls": [{"start": [0, 0], "end": [1, 0], "height": 3, "disciplines": ["carpentry"]}]},
        {"walls": [{"start": [0, 0], "end": [1, 0], "height": 3, "phase": "someday"}]},
        {"components": [{"discipline": "electrical", "kind": "toaster"}]},
        {"components": [{"discipline": "masonry", "kind": "brick"}]},
        {"openings": [{"type": "hatch", "width": 1, "height": 1}]},
    ],
)
def test_invalid_design_data(floor):
    with pytest.raises(DesignLoadError):
        project_from_dict(_minimal(**floor))


def test_top_level_must_be_mapping():
    with pytest.raises(DesignLoadError):
        project_from_dict(["not", "a", "design"])


def test_unparseable_file(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("buildings: [\n", encoding="utf-8")
    with pytest.raises(DesignLoadError) as exc:
        load_design(path)
    assert exc.value.path == path


def test_missing_file(tmp_path):
    with pytest.raises(DesignLoadError):
        load_design(tmp_path / "nope.json")


def test_error_carries_path(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(_minimal(walls=[{"start": [0, 0]}])), encoding="utf-8")
    with pytest.raises(DesignLoadError) as exc:
        load_design(path)
    assert exc.value.path == path
    assert str(path) in str(exc.value)
