from __future__ import annotations

import pytest

from novabom.design import (
    Building,
    Component,
    Discipline,
    Floor,
    Point2D,
    Project,
    Wall,
)
from novabom.materials import MaterialCatalog


def make_wall(x0, y0, x1, y1, height=2.8, disciplines=(Discipline.DRYWALL,), **kwargs) -> Wall:
    return Wall(
        name=kwargs.pop("name", "W"),
        start_point=Point2D(x0, y0),
        end_point=Point2D(x1, y1),
        thickness=kwargs.pop("thickness", 0.1),
        height=height,
        disciplines=list(disciplines),
        **kwargs,
    )


def make_project(*floors: Floor) -> Project:
    building = Building(name="B1")
    for floor in floors:
        building.add_floor(floor)
    project = Project(name="Test project")
    project.add_building(building)
    return project


@pytest.fixture
def catalog() -> MaterialCatalog:
    return MaterialCatalog.with_defaults()


@pytest.fixture
def build_project():
    """Factory: build_project(walls=[...], components=[...]) -> one-floor Project."""

    def _build(walls=(), components=(), openings=()):
        floor = Floor(name="F1")
        for wall in walls:
            floor.add_wall(wall)
        for component in components:
            floor.add_component(component)
        for opening in openings:
            floor.add_opening(opening)
        return make_project(floor)

    return _build


@pytest.fixture
def wall():
    return make_wall


@pytest.fixture
def component():
    def _component(kind, name="C", **kwargs) -> Component:
        return Component(name=name, component_type=kind, **kwargs)

    return _component
