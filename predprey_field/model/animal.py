"""Animal contract for the predator-prey simulation."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, TYPE_CHECKING

from .entity import Entity
from .location import Location

if TYPE_CHECKING:
    from .field import Field


class Gender(Enum):
    MALE = "M"
    FEMALE = "F"


class Animal(Entity, ABC):
    """
    Mobile entity occupying a single cell.

    Construction registers the animal in its field straight away. Gender is
    drawn uniformly at random from the field's generator.

    Subclasses implement ``act``: once per step they may move, age, breed
    (appending young to the supplied list) or die. They must not change
    another animal's state except by killing prey they find on the field.
    """

    is_animal = True

    def __init__(self, field: "Field", location: Location):
        super().__init__(field)
        self.alive = True
        self.diseased = False
        self.gender = Gender.MALE if field.rng.random() < 0.5 else Gender.FEMALE
        self.set_location(location)

    @abstractmethod
    def act(self, new_animals: List["Animal"]) -> None:
        """Perform this animal's behaviour for one step."""

    @property
    def location(self) -> Optional[Location]:
        """The occupied cell, or None once dead."""
        for location in self._locations:
            return location
        return None

    def set_location(self, new_location: Location) -> None:
        """Vacate the current cell and occupy new_location."""
        self._occupy((new_location,))

    def is_alive(self) -> bool:
        return self.alive

    def set_dead(self) -> None:
        """Mark dead and remove from the field. Safe to call twice."""
        self.alive = False
        self._remove()

    def is_diseased(self) -> bool:
        return self.diseased

    def set_diseased(self, diseased: bool = True) -> None:
        self.diseased = diseased
