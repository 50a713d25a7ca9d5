"""
Reference species: foxes hunt rabbits, rabbits breed fast.

These follow the classic foxes-and-rabbits rules. The engine only depends
on the Animal contract; the numbers come from SpeciesConfig.
"""

from typing import List, Optional, TYPE_CHECKING

from .animal import Animal
from .location import Location

if TYPE_CHECKING:
    from ..config import SpeciesConfig
    from .field import Field


class Species(Animal):
    """Age, breeding and disease rules shared by the reference species."""

    def __init__(self, field: "Field", location: Location,
                 params: "SpeciesConfig", random_age: bool = False):
        super().__init__(field, location)
        self.params = params
        self.age = int(field.rng.integers(params.max_age)) if random_age else 0

    def increment_age(self) -> None:
        self.age += 1
        if self.age > self.params.max_age:
            self.set_dead()

    def suffer_disease(self) -> None:
        # First thing every act does, so a dead animal fails here
        field = self._require_field()
        if (self.diseased and
                field.rng.random() < self.params.disease_death_probability):
            self.set_dead()

    def can_breed(self) -> bool:
        if self.age < self.params.breeding_age:
            return False
        if self.params.requires_mate:
            return self._find_mate() is not None
        return True

    def _find_mate(self) -> Optional[Animal]:
        field = self.field
        for where in field.adjacent_locations(self.location):
            other = field.get_object_at(where)
            if (other is not None and other.kind == self.kind
                    and other.is_alive() and other.gender != self.gender):
                return other
        return None

    def breed(self) -> int:
        """Number of young to produce this step (may be zero)."""
        # A zero litter ceiling means the species never breeds
        if self.params.max_litter_size < 1:
            return 0
        if (self.can_breed() and
                self.field.rng.random() < self.params.breeding_probability):
            return int(self.field.rng.integers(1, self.params.max_litter_size + 1))
        return 0

    def give_birth(self, new_animals: List[Animal]) -> None:
        field = self.field
        free = field.get_free_adjacent_locations(self.location)
        births = self.breed()
        for _ in range(births):
            if not free:
                break
            new_animals.append(self.offspring(free.pop(0)))

    def offspring(self, location: Location) -> "Species":
        return type(self)(self.field, location, self.params)


class Rabbit(Species):
    """Rabbits age, breed and wander; they die of age or overcrowding."""

    kind = "Rabbit"

    def act(self, new_animals: List[Animal]) -> None:
        self.suffer_disease()
        if not self.alive:
            return
        self.increment_age()
        if not self.alive:
            return
        self.give_birth(new_animals)
        new_location = self.field.free_adjacent_location(self.location)
        if new_location is not None:
            self.set_location(new_location)
        else:
            self.set_dead()


class Fox(Species):
    """Foxes age, get hungry, breed, and eat rabbits next to them."""

    kind = "Fox"

    def __init__(self, field: "Field", location: Location,
                 params: "SpeciesConfig", random_age: bool = False):
        super().__init__(field, location, params, random_age)
        if random_age:
            self.food_level = int(field.rng.integers(params.food_value))
        else:
            self.food_level = params.food_value

    def increment_hunger(self) -> None:
        self.food_level -= 1
        if self.food_level <= 0:
            self.set_dead()

    def find_food(self) -> Optional[Location]:
        """Eat the first live rabbit next door and return its cell."""
        field = self.field
        for where in field.adjacent_locations(self.location):
            prey = field.get_object_at(where)
            if isinstance(prey, Rabbit) and prey.is_alive():
                prey.set_dead()
                self.food_level = self.params.food_value
                return where
        return None

    def act(self, new_animals: List[Animal]) -> None:
        self.suffer_disease()
        if not self.alive:
            return
        self.increment_age()
        if self.alive:
            self.increment_hunger()
        if not self.alive:
            return
        self.give_birth(new_animals)
        new_location = self.find_food()
        if new_location is None:
            new_location = self.field.free_adjacent_location(self.location)
        if new_location is not None:
            self.set_location(new_location)
        else:
            self.set_dead()
