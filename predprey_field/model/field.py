"""Grid occupancy for the predator-prey simulation."""

import numpy as np
from typing import Iterable, List, Optional, TYPE_CHECKING

from .location import Location

if TYPE_CHECKING:
    from .entity import Entity


class Field:
    """
    Rectangular grid of cells, each holding at most one entity.

    Coordinate convention: Location(row, col), [row, col] for array indexing.
    The grid is the single source of truth for occupancy; entities keep
    their own location in step with it by going through place/clear.
    """

    def __init__(self, depth: int, width: int,
                 rng: Optional[np.random.Generator] = None):
        if depth <= 0 or width <= 0:
            raise ValueError(
                f"Field dimensions must be positive, got {depth}x{width}")
        self.depth = depth
        self.width = width
        self.rng = rng if rng is not None else np.random.default_rng()

        # None = empty, otherwise the occupying entity
        self.cells = np.empty((depth, width), dtype=object)

    def check_bounds(self, location: Location) -> None:
        # Negative indices would silently wrap in numpy
        if not self.in_bounds(location):
            raise IndexError(
                f"Location {location} outside {self.depth}x{self.width} field")

    def in_bounds(self, location: Location) -> bool:
        return (0 <= location.row < self.depth
                and 0 <= location.col < self.width)

    def clear(self, location: Optional[Location] = None) -> None:
        """Empty one cell, or the whole grid when no location is given."""
        if location is None:
            self.cells.fill(None)
            return
        self.check_bounds(location)
        self.cells[location.row, location.col] = None

    def release(self, entity: "Entity", location: Location) -> None:
        """Empty a cell only if it still holds the given entity."""
        self.check_bounds(location)
        if self.cells[location.row, location.col] is entity:
            self.cells[location.row, location.col] = None

    def place(self, entity: "Entity", location: Location) -> None:
        """Write entity into a cell, discarding any previous occupant."""
        self.check_bounds(location)
        self.cells[location.row, location.col] = entity

    def place_area(self, entity: "Entity",
                   locations: Iterable[Location]) -> None:
        """
        Write entity into every cell of an area.

        All cells are bounds-checked before any is written, so a bad
        location leaves the grid untouched.
        """
        locations = list(locations)
        for location in locations:
            self.check_bounds(location)
        for location in locations:
            self.cells[location.row, location.col] = entity

    def get_object_at(self, location: Location) -> Optional["Entity"]:
        """Return the occupant at location, or None."""
        self.check_bounds(location)
        return self.cells[location.row, location.col]

    def is_free(self, location: Location) -> bool:
        """
        Check if an animal may move onto the cell.

        Free means empty, or holding an object animals cannot see
        (a hidden trap does not block movement onto its cell).
        """
        occupant = self.get_object_at(location)
        return occupant is None or occupant.is_passable()

    def adjacent_locations(self, location: Location) -> List[Location]:
        """
        Return the in-bounds Moore neighbours of location in random order.

        The origin is never included. Callers rely on the shuffle: taking
        the first element yields a uniformly random neighbour.
        """
        self.check_bounds(location)
        offsets = [
            (-1, -1), (-1, 0), (-1, 1),
            (0, -1),           (0, 1),
            (1, -1),  (1, 0),  (1, 1)
        ]

        locations = []
        for dr, dc in offsets:
            nr, nc = location.row + dr, location.col + dc
            if 0 <= nr < self.depth and 0 <= nc < self.width:
                locations.append(Location(nr, nc))

        self.rng.shuffle(locations)
        return locations

    def get_free_adjacent_locations(self, location: Location) -> List[Location]:
        """Shuffled list of the free neighbours of location."""
        return [loc for loc in self.adjacent_locations(location)
                if self.is_free(loc)]

    def free_adjacent_location(self, location: Location) -> Optional[Location]:
        """One uniformly random free neighbour, or None."""
        free = self.get_free_adjacent_locations(location)
        if not free:
            return None
        return free[int(self.rng.integers(len(free)))]

    def random_adjacent_location(self, location: Location) -> Location:
        """A random neighbour; it may well be occupied."""
        return self.adjacent_locations(location)[0]

    def random_location(self) -> Location:
        """Uniformly random cell anywhere in the grid."""
        return Location(int(self.rng.integers(self.depth)),
                        int(self.rng.integers(self.width)))

    def get_random_free_location(self) -> Optional[Location]:
        """
        Find a random free cell by retrying random samples.

        Each attempt picks a uniform cell; if it is empty it wins, otherwise
        a random empty neighbour of it is tried. Hidden objects do not count
        here: the result is always truly empty so nothing gets overwritten.
        Returns None straight away when the grid has no empty cell, since
        the retry loop would never end.
        """
        if self.get_locations_left() < 1:
            return None

        while True:
            location = self.random_location()
            if self.get_object_at(location) is None:
                return location
            empty = [loc for loc in self.adjacent_locations(location)
                     if self.get_object_at(loc) is None]
            if empty:
                return empty[int(self.rng.integers(len(empty)))]

    def get_locations_left(self) -> int:
        """Count empty cells with a full grid scan."""
        return sum(1 for cell in self.cells.flat if cell is None)

    def occupants(self) -> Iterable["Entity"]:
        """Yield the occupant of every non-empty cell, row by row."""
        for cell in self.cells.flat:
            if cell is not None:
                yield cell

    def kind_grid(self) -> np.ndarray:
        """Return a copy of the grid with kind names ("" for empty)."""
        grid = np.full((self.depth, self.width), "", dtype=object)
        for (row, col), cell in np.ndenumerate(self.cells):
            if cell is not None:
                grid[row, col] = cell.kind
        return grid
