"""Shared fixtures for the predator-prey simulation tests."""

from __future__ import annotations

import numpy as np
import pytest

from helpers import StubAnimal, empty_config
from predprey_field.model import Field, Location, Simulator


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(12345)


@pytest.fixture
def field(rng: np.random.Generator) -> Field:
    return Field(10, 10, rng)


@pytest.fixture
def simulator() -> Simulator:
    return Simulator(empty_config(), rng=np.random.default_rng(7))


@pytest.fixture
def make_animal():
    """Factory building stub animals on a field."""
    def _make(field: Field, row: int, col: int, kind: str = "Rabbit",
              on_act=None) -> StubAnimal:
        return StubAnimal(field, Location(row, col), kind=kind, on_act=on_act)
    return _make
