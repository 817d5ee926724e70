"""
BOM Errors - Typed failures raised by the takeoff engine.

Taxonomy:
- MaterialNotFound: a calculator wanted a code the catalog does not hold.
  Non-fatal inside calculate(); the line is dropped.
- CalculationError: a calculator could not process the design. Fatal for
  the whole calculate() call.
- ExportError: serialization or file write failed. Fatal for the export
  call only; the BomCalculation stays valid.
- CatalogLoadError / DesignLoadError: configuration and input files.
"""

from typing import Optional


class BomError(Exception):
    """Base class for all engine errors."""


class MaterialNotFound(BomError):
    """Material code absent from the catalog."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Material not found: {code}")


class CalculationError(BomError):
    """A calculator failed on the design it was given."""

    def __init__(
        self,
        message: str,
        discipline=None,
        calculator: Optional[str] = None,
    ):
        self.message = message
        self.discipline = discipline
        self.calculator = calculator
        context = []
        if calculator:
            context.append(f"calculator={calculator}")
        if discipline is not None:
            context.append(f"discipline={getattr(discipline, 'value', discipline)}")
        suffix = f" ({', '.join(context)})" if context else ""
        super().__init__(f"Calculation error: {message}{suffix}")


class ExportError(BomError):
    """Writing a BOM out failed."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Export error: {message}")


class CatalogLoadError(BomError):
    """A material catalog file could not be read or validated."""

    def __init__(self, message: str, path=None):
        self.message = message
        self.path = path
        where = f" [{path}]" if path else ""
        super().__init__(f"Catalog load error{where}: {message}")


class DesignLoadError(BomError):
    """A design input file could not be turned into a design tree."""

    def __init__(self, message: str, path=None):
        self.message = message
        self.path = path
        where = f" [{path}]" if path else ""
        super().__init__(f"Design load error{where}: {message}")
