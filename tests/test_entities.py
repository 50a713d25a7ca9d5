"""Unit tests for the entity lifecycle: animals, traps and ponds."""

from __future__ import annotations

import numpy as np
import pytest

from predprey_field.model import (
    EntityStateError,
    Field,
    Gender,
    Location,
    Pond,
    Trap,
)


class TestAnimalLifecycle:
    def test_construction_registers_in_field(self, field: Field, make_animal) -> None:
        animal = make_animal(field, 3, 4)
        assert animal.location == Location(3, 4)
        assert animal.field is field
        assert field.get_object_at(Location(3, 4)) is animal

    def test_initial_flags(self, field: Field, make_animal) -> None:
        animal = make_animal(field, 0, 0)
        assert animal.is_alive()
        assert not animal.is_diseased()
        assert animal.gender in (Gender.MALE, Gender.FEMALE)

    def test_gender_is_drawn_at_random(self, field: Field, make_animal) -> None:
        genders = {make_animal(field, row, col).gender
                   for row in range(10) for col in range(10)}
        assert genders == {Gender.MALE, Gender.FEMALE}

    def test_set_location_moves_between_cells(self, field: Field, make_animal) -> None:
        animal = make_animal(field, 3, 4)
        animal.set_location(Location(3, 5))
        assert field.get_object_at(Location(3, 4)) is None
        assert field.get_object_at(Location(3, 5)) is animal
        assert animal.location == Location(3, 5)

    def test_set_dead_clears_cell(self, field: Field, make_animal) -> None:
        animal = make_animal(field, 2, 2)
        animal.set_dead()
        assert not animal.is_alive()
        assert animal.location is None
        assert animal.field is None
        assert field.get_object_at(Location(2, 2)) is None

    def test_set_dead_twice_is_noop(self, field: Field, make_animal) -> None:
        animal = make_animal(field, 2, 2)
        animal.set_dead()
        other = make_animal(field, 2, 2)
        animal.set_dead()
        assert field.get_object_at(Location(2, 2)) is other

    def test_moving_dead_animal_is_an_error(self, field: Field, make_animal) -> None:
        animal = make_animal(field, 2, 2)
        animal.set_dead()
        with pytest.raises(EntityStateError):
            animal.set_location(Location(2, 3))

    def test_moving_out_of_bounds_keeps_old_cell(self, field: Field, make_animal) -> None:
        animal = make_animal(field, 0, 0)
        with pytest.raises(IndexError):
            animal.set_location(Location(-1, 0))
        assert field.get_object_at(Location(0, 0)) is animal
        assert animal.location == Location(0, 0)

    def test_disease_flag(self, field: Field, make_animal) -> None:
        animal = make_animal(field, 1, 1)
        animal.set_diseased()
        assert animal.is_diseased()
        animal.set_diseased(False)
        assert not animal.is_diseased()


class TestTrap:
    def test_hidden_and_waiting(self, field: Field) -> None:
        trap = Trap(field, Location(4, 4))
        assert trap.is_passable()
        assert not trap.is_triggered()
        assert not trap.is_snared()
        assert field.get_object_at(Location(4, 4)) is trap

    def test_untriggered_trap_ignores_animal(self, field: Field, make_animal) -> None:
        trap = Trap(field, Location(4, 4))
        animal = make_animal(field, 4, 4)
        trap.react(animal)
        assert animal.is_alive()
        assert not trap.is_snared()
        assert trap.is_placed()

    def test_triggered_trap_kills_and_destroys_itself(self, field: Field, make_animal) -> None:
        trap = Trap(field, Location(4, 4))
        animal = make_animal(field, 4, 4)
        trap.trigger()
        trap.react(animal)
        assert not animal.is_alive()
        assert trap.is_snared()
        assert not trap.is_placed()
        assert trap.location is None
        assert field.get_object_at(Location(4, 4)) is None

    def test_destroy_twice_is_noop(self, field: Field) -> None:
        trap = Trap(field, Location(1, 1))
        trap.destroy()
        trap.destroy()
        assert field.get_object_at(Location(1, 1)) is None

    def test_occupies(self, field: Field) -> None:
        trap = Trap(field, Location(1, 1))
        assert trap.occupies(Location(1, 1))
        assert not trap.occupies(Location(1, 2))
        assert not trap.occupies(None)


class TestPond:
    def test_cells_cluster_round_one_start(self) -> None:
        for seed in range(20):
            field = Field(10, 10, np.random.default_rng(seed))
            pond = Pond(field)
            cells = pond.locations
            assert 1 <= len(cells) <= 8
            # Some cell outside the pond has every pond cell as a neighbour
            centres = [
                Location(r, c) for r in range(10) for c in range(10)
                if Location(r, c) not in cells
                and all(abs(loc.row - r) <= 1 and abs(loc.col - c) <= 1
                        for loc in cells)
            ]
            assert centres

    def test_registered_over_every_cell(self) -> None:
        field = Field(10, 10, np.random.default_rng(1))
        pond = Pond(field)
        for loc in pond.locations:
            assert field.get_object_at(loc) is pond
        assert field.get_locations_left() == 100 - len(pond.locations)

    def test_small_field_gives_single_cell(self) -> None:
        # 20% of 9 cells rounds down to 1
        field = Field(3, 3, np.random.default_rng(5))
        pond = Pond(field)
        assert len(pond.locations) == 1

    def test_visible_and_inert(self, field: Field, make_animal) -> None:
        pond = Pond(field)
        assert not pond.is_passable()
        assert not pond.is_triggered()
        animal = make_animal(field, 0, 0)
        pond.react(animal)
        assert animal.is_alive()

    def test_destroy_clears_all_cells(self) -> None:
        field = Field(10, 10, np.random.default_rng(2))
        pond = Pond(field)
        pond.destroy()
        assert field.get_locations_left() == 100
        assert pond.locations == frozenset()

    def test_ponds_never_share_cells(self) -> None:
        for seed in range(200):
            field = Field(4, 4, np.random.default_rng(seed))
            first = Pond(field)
            second = Pond(field)
            for pond in (first, second):
                for loc in pond.locations:
                    assert field.get_object_at(loc) is pond
            assert not first.locations & second.locations
            assert field.get_locations_left() == \
                16 - len(first.locations) - len(second.locations)

            first.destroy()
            assert field.get_locations_left() == 16 - len(second.locations)

    def test_surrounded_start_becomes_the_pond(self, make_animal) -> None:
        field = Field(3, 3, np.random.default_rng(0))
        for row in range(3):
            for col in range(3):
                if (row, col) != (1, 1):
                    make_animal(field, row, col)
        pond = Pond(field)
        assert pond.locations == frozenset({Location(1, 1)})
        assert field.get_object_at(Location(1, 1)) is pond

    def test_refuses_full_field(self, make_animal) -> None:
        field = Field(2, 2, np.random.default_rng(0))
        for row in range(2):
            for col in range(2):
                make_animal(field, row, col)
        with pytest.raises(ValueError):
            Pond(field)
