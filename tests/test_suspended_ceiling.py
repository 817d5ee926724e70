from __future__ import annotations

import math

import pytest

from novabom.calculators import SuspendedCeilingCalculator
from novabom.design import (
    Component,
    Discipline,
    DrywallComponent,
    ElectricalComponent,
    Phase,
    SuspendedCeilingComponent,
)


@pytest.fixture
def calc():
    return SuspendedCeilingCalculator()


def _by_code(items):
    return {item.material_code: item for item in items}


def test_no_ceiling_content_emits_nothing(calc, catalog, build_project, wall, component):
    project = build_project(
        walls=[wall(0, 0, 4.0, 0), wall(4.0, 0, 4.0, 3.0)],
        components=[component(ElectricalComponent.OUTLET), component(DrywallComponent.PANEL)],
    )
    assert calc.compute(project, catalog) == []


def test_empty_floor_emits_nothing(calc, catalog, build_project):
    assert calc.compute(build_project(), catalog) == []


def test_single_tile_without_walls(calc, catalog, build_project, component):
    project = build_project(components=[component(SuspendedCeilingComponent.TILE)])

    assert calc.calculate_area(project) == pytest.approx(0.36)
    lines = _by_code(calc.compute(project, catalog))

    assert list(lines) == [
        "CEIL_TILE_600", "CEIL_GRID_MAIN", "CEIL_GRID_CROSS", "CEIL_HANGER", "ANCHOR_8MM",
    ]
    assert lines["CEIL_TILE_600"].quantity == pytest.approx(1.05)
    assert lines["CEIL_TILE_600"].notes == "600x600mm tiles with 5% waste factor"


def test_tile_plus_wall_bounding_box(calc, catalog, build_project, wall, component):
    project = build_project(
        walls=[
            wall(0, 0, 4.0, 0, disciplines=(Discipline.ARCHITECTURE,)),
            wall(4.0, 0, 4.0, 3.0, disciplines=(Discipline.ARCHITECTURE,)),
        ],
        components=[component(SuspendedCeilingComponent.TILE)],
    )
    area = 0.36 + 4.0 * 3.0

    assert calc.calculate_area(project) == pytest.approx(area)

    lines = _by_code(calc.compute(project, catalog))
    room_width = math.sqrt(area * 0.75)
    room_length = math.sqrt(area * 1.33)
    hangers = area * (1.0 / 1.44) * 1.1

    assert lines["CEIL_TILE_600"].quantity == pytest.approx(area / 0.36 * 1.05)
    assert lines["CEIL_GRID_MAIN"].quantity == pytest.approx(
        math.ceil(room_width / 1.2) * room_width
    )
    assert lines["CEIL_GRID_CROSS"].quantity == pytest.approx(
        math.ceil(room_length / 0.6) * (area / room_length)
    )
    assert lines["CEIL_HANGER"].quantity == pytest.approx(hangers)
    assert lines["ANCHOR_8MM"].quantity == pytest.approx(hangers)


def test_non_tile_component_still_triggers_bounding_box(calc, catalog, build_project, wall, component):
    project = build_project(
        walls=[wall(0, 0, 2.0, 0), wall(2.0, 0, 2.0, 2.0)],
        components=[component(SuspendedCeilingComponent.HANGER)],
    )
    assert calc.calculate_area(project) == pytest.approx(4.0)


def test_collinear_walls_have_zero_box(calc, catalog, build_project, wall, component):
    project = build_project(
        walls=[wall(0, 0, 5.0, 0)],
        components=[component(SuspendedCeilingComponent.GRID)],
    )
    assert calc.compute(project, catalog) == []


def test_non_finite_wall_endpoints_are_ignored(calc, catalog, build_project, wall, component):
    project = build_project(
        walls=[wall(0, 0, 2.0, 2.0), wall(0, 0, math.inf, math.nan)],
        components=[component(SuspendedCeilingComponent.SUPPORT)],
    )
    assert calc.calculate_area(project) == pytest.approx(4.0)


def test_old_phase_components_ignored(calc, catalog, build_project, wall, component):
    project = build_project(
        walls=[wall(0, 0, 2.0, 2.0)],
        components=[component(SuspendedCeilingComponent.TILE, phase=Phase.EXISTING)],
    )
    assert calc.compute(project, catalog) == []


def test_foreign_kind_tagged_ceiling_adds_box_but_no_tile(calc, catalog, build_project, wall):
    stray = Component(
        name="stray",
        component_type=ElectricalComponent.LIGHT,
        discipline=Discipline.SUSPENDED_CEILING,
    )

    assert calc.compute(build_project(components=[stray]), catalog) == []

    project = build_project(
        walls=[wall(0, 0, 2.0, 0), wall(2.0, 0, 2.0, 2.0)],
        components=[stray],
    )
    assert calc.calculate_area(project) == pytest.approx(4.0)


def test_ceiling_component_from_old_phase_does_not_add_box(calc, build_project, wall):
    removed = Component(
        name="removed",
        component_type=ElectricalComponent.LIGHT,
        discipline=Discipline.SUSPENDED_CEILING,
        phase=Phase.DEMOLITION,
    )
    project = build_project(walls=[wall(0, 0, 2.0, 2.0)], components=[removed])
    assert calc.calculate_area(project) == 0.0


def test_overflowing_bounding_box_counts_as_zero(calc, catalog, build_project, wall, component):
    project = build_project(
        walls=[wall(-1e200, -1e200, 1e200, 1e200)],
        components=[component(SuspendedCeilingComponent.GRID)],
    )

    assert calc.calculate_area(project) == 0.0
    assert calc.compute(project, catalog) == []


def test_huge_finite_area_grid_lengths_do_not_raise(calc):
    assert math.isfinite(calc.calculate_main_grid_length(1.7e308))
    assert calc.calculate_cross_grid_length(1.7e308) == 0.0


def test_anchor_priced_as_architecture(calc, catalog, build_project, component):
    project = build_project(components=[component(SuspendedCeilingComponent.TILE)])
    anchor = _by_code(calc.compute(project, catalog))["ANCHOR_8MM"]
    assert anchor.discipline is Discipline.ARCHITECTURE
    assert anchor.unit_cost == 0.25
