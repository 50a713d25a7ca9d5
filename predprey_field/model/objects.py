"""Stationary field objects: the object contract, traps and ponds."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, TYPE_CHECKING

from .entity import Entity
from .location import Location

if TYPE_CHECKING:
    from .animal import Animal
    from .field import Field


# Ceiling on a pond's size as a percentage of all cells
MAX_FIELD_PERCENT = 20


class FieldObject(Entity, ABC):
    """
    Stationary entity covering one cell or an area of cells.

    Objects animals cannot see are passable: their cells count as free when
    animals look for somewhere to move. Triggering is separate from
    reacting: a stimulus arms the object, and the object only does
    something once the simulator hands it an animal sharing its cell.
    """

    def __init__(self, field: "Field", locations: Iterable[Location],
                 visible_to_animals: bool):
        super().__init__(field)
        self.triggered = False
        self.visible_to_animals = visible_to_animals
        self._occupy(locations)

    @abstractmethod
    def react(self, animal: "Animal") -> None:
        """Respond to an animal standing on one of this object's cells."""

    @property
    def location(self) -> Optional[Location]:
        """A single occupied cell, or None for removed objects."""
        for location in self._locations:
            return location
        return None

    def is_passable(self) -> bool:
        return not self.visible_to_animals

    def is_triggered(self) -> bool:
        return self.triggered

    def trigger(self) -> None:
        self.triggered = True

    def set_location(self, new_location: Location) -> None:
        self._occupy((new_location,))

    def destroy(self) -> None:
        """Remove from the field. Safe to call twice."""
        self._remove()


class Trap(FieldObject):
    """
    Single-use hidden snare.

    Untriggered traps just wait. A triggered trap kills the first animal it
    reacts to and removes itself from the field.
    """

    kind = "Trap"

    def __init__(self, field: "Field", location: Location):
        super().__init__(field, (location,), visible_to_animals=False)
        self.snared = False

    def react(self, animal: "Animal") -> None:
        if self.is_triggered():
            self.snared = True
            animal.set_dead()
            self.destroy()

    def is_snared(self) -> bool:
        return self.snared


class Pond(FieldObject):
    """
    Area of water animals can see and keep out of.

    The region is a loose cluster around one random empty start cell:
    every member is a random neighbour of that same start cell, so a pond
    never spans more than the start's eight neighbours. Only empty cells
    are taken, so a pond never covers another entity. The start cell is not
    part of the pond unless every sampled neighbour was already taken.
    """

    kind = "Pond"

    def __init__(self, field: "Field",
                 max_field_percent: int = MAX_FIELD_PERCENT):
        self.max_field_percent = max_field_percent
        super().__init__(field, self._generate_area(field, max_field_percent),
                         visible_to_animals=True)

    @staticmethod
    def _generate_area(field: "Field",
                       max_field_percent: int) -> List[Location]:
        if field.depth * field.width < 2:
            raise ValueError("Field too small to hold a pond")
        if field.get_locations_left() < 1:
            raise ValueError("No empty cell left to start a pond from")

        start = field.random_location()
        while field.get_object_at(start) is not None:
            start = field.random_location()

        ceiling = field.depth * field.width * max_field_percent // 100
        samples = int(field.rng.integers(max(ceiling, 1))) + 1

        # Repeated neighbours collapse, so the area may be smaller. Cells
        # already held by another entity are skipped; if that leaves
        # nothing, the pond is just the start cell.
        area = []
        for _ in range(samples):
            location = field.random_adjacent_location(start)
            if field.get_object_at(location) is None:
                area.append(location)
        return area or [start]

    def react(self, animal: "Animal") -> None:
        pass
