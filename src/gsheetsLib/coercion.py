from typing import Any
from .models import CellValue, StringMatrix, ValueMatrix

def to_strings(values: ValueMatrix) -> StringMatrix:
    "Converts a matrix of CellValues to their display text, keeping every row's length."
    return [[str(cell) for cell in row] for row in values]

def to_loose(values: StringMatrix) -> ValueMatrix:
    """
    Wraps every string as a text CellValue.

    No number or boolean inference happens here, so `to_strings(to_loose(x)) == x`
    always holds, while the reverse does not.
    """
    return [[CellValue.text(cell) for cell in row] for row in values]

def from_wire(rows: list[list[Any]]) -> ValueMatrix:
    "Tags the scalars of a ValueRange's `values` field."
    return [[CellValue.from_wire(cell) for cell in row] for row in rows]

def to_wire(values: ValueMatrix) -> list[list[Any]]:
    "Unwraps CellValues into the scalars a ValueRange body expects."
    return [[cell.to_wire() for cell in row] for row in values]
