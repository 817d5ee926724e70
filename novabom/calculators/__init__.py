"""
Discipline calculators.

Built-ins (registered by default, in this order):
- DrywallCalculator
- SuspendedCeilingCalculator
- ElectricalCalculator

New disciplines subclass Calculator and are passed to BomEngine.
"""

from typing import List

from .base import Calculator, usable
from .drywall import DrywallCalculator
from .suspended_ceiling import SuspendedCeilingCalculator
from .electrical import ElectricalCalculator


def default_calculators() -> List[Calculator]:
    return [
        DrywallCalculator(),
        SuspendedCeilingCalculator(),
        ElectricalCalculator(),
    ]


__all__ = [
    "Calculator",
    "DrywallCalculator",
    "ElectricalCalculator",
    "SuspendedCeilingCalculator",
    "default_calculators",
    "usable",
]
