"""Grid coordinate value type for the predator-prey field."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    """Immutable (row, col) position in the field."""
    row: int
    col: int

    def __str__(self) -> str:
        return f"{self.row},{self.col}"
