"""Test doubles and configuration builders shared across the test modules."""

from __future__ import annotations

from typing import Callable, List, Optional

import numpy as np

from predprey_field.config import (
    GridConfig,
    PopulationConfig,
    SimulationConfig,
    SpeciesConfig,
)
from predprey_field.model import Animal, Field, FieldObject, Location


class StubAnimal(Animal):
    """Animal whose behaviour is supplied by the test; stays put by default."""

    def __init__(self, field: Field, location: Location, kind: str = "Rabbit",
                 on_act: Optional[Callable[["StubAnimal", List[Animal]], None]] = None):
        self.kind = kind
        self.acts = 0
        self.on_act = on_act
        super().__init__(field, location)

    def act(self, new_animals: List[Animal]) -> None:
        self.acts += 1
        if self.on_act is not None:
            self.on_act(self, new_animals)


class RecordingObject(FieldObject):
    """Visible single-cell object remembering every animal it reacted to."""

    kind = "Marker"

    def __init__(self, field: Field, location: Location):
        super().__init__(field, (location,), visible_to_animals=True)
        self.seen: List[tuple] = []

    def react(self, animal: Animal) -> None:
        self.seen.append((animal, animal.is_alive()))


def quiet_species(**overrides) -> SpeciesConfig:
    """Species that never breeds, sickens or dies of age in a short test."""
    params = dict(breeding_age=0, max_age=1000, breeding_probability=0.0,
                  max_litter_size=1, food_value=50,
                  disease_death_probability=0.0)
    params.update(overrides)
    return SpeciesConfig(**params)


def empty_config(depth: int = 10, width: int = 10, **population) -> SimulationConfig:
    """Configuration whose reset leaves the field empty unless overridden."""
    pop = dict(trap_probability=0.0, fox_probability=0.0,
               rabbit_probability=0.0, pond_count=0)
    pop.update(population)
    return SimulationConfig(
        grid=GridConfig(depth=depth, width=width),
        population=PopulationConfig(**pop),
        fox=quiet_species(),
        rabbit=quiet_species(),
        max_steps=20,
    )


class ZeroDraws:
    """Generator wrapper whose uniform draws are always exactly 0.0."""

    def __init__(self, seed: int = 0):
        self._rng = np.random.default_rng(seed)

    def random(self) -> float:
        return 0.0

    def __getattr__(self, name):
        return getattr(self._rng, name)
