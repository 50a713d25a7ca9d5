"""Shared placement lifecycle for everything that lives on the field."""

from typing import FrozenSet, Iterable, Optional, TYPE_CHECKING

from .location import Location

if TYPE_CHECKING:
    from .field import Field


class EntityStateError(RuntimeError):
    """Raised when a destroyed entity is asked to move or act."""


class Entity:
    """
    Base for animals and field objects.

    An entity holds a non-owning reference to its Field and the cell(s) it
    occupies. All grid writes go through the Field: relocation clears the
    old cells first, then writes the new ones. Removal clears the cells and
    drops both references; removing twice is a no-op.

    Subclasses set ``kind`` (the census tag) and ``is_animal``.
    """

    kind: str = "Entity"
    is_animal: bool = False

    def __init__(self, field: "Field"):
        self._field: Optional["Field"] = field
        self._locations: FrozenSet[Location] = frozenset()

    @property
    def field(self) -> Optional["Field"]:
        return self._field

    @property
    def locations(self) -> FrozenSet[Location]:
        """Every cell this entity occupies (empty once removed)."""
        return self._locations

    def is_placed(self) -> bool:
        return self._field is not None

    def is_passable(self) -> bool:
        """Whether an animal may move onto a cell holding this entity."""
        return False

    def occupies(self, location: Optional[Location]) -> bool:
        return location is not None and location in self._locations

    def _require_field(self) -> "Field":
        if self._field is None:
            raise EntityStateError(f"{self.kind} has been removed from the field")
        return self._field

    def _occupy(self, locations: Iterable[Location]) -> None:
        """Move onto new cells, vacating the previous ones first."""
        field = self._require_field()
        locations = frozenset(locations)
        for location in locations:
            field.check_bounds(location)
        for old in self._locations:
            field.release(self, old)
        field.place_area(self, locations)
        self._locations = locations

    def _remove(self) -> None:
        if self._field is None:
            return
        for location in self._locations:
            self._field.release(self, location)
        self._locations = frozenset()
        self._field = None

    def __repr__(self) -> str:
        cells = ", ".join(str(loc) for loc in sorted(
            self._locations, key=lambda l: (l.row, l.col)))
        return f"{type(self).__name__}(kind={self.kind}, cells=[{cells}])"
