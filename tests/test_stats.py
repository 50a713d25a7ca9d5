"""Unit tests for FieldStats census and viability."""

from __future__ import annotations

from predprey_field.model import Field, FieldStats, Location, Trap


class TestCounters:
    def test_increment_creates_counter(self) -> None:
        stats = FieldStats()
        stats.increment_count("Fox", is_animal=True)
        stats.increment_count("Fox", is_animal=True)
        assert stats.counters["Fox"].count == 2
        assert stats.counters["Fox"].is_animal

    def test_reset_zeroes_but_keeps_kinds(self) -> None:
        stats = FieldStats()
        stats.increment_count("Trap")
        stats.reset()
        assert not stats.counts_valid
        assert stats.counters["Trap"].count == 0


class TestCensus:
    def test_counts_by_kind(self, field: Field, make_animal) -> None:
        make_animal(field, 0, 0, kind="Fox")
        make_animal(field, 0, 1, kind="Rabbit")
        make_animal(field, 0, 2, kind="Rabbit")
        Trap(field, Location(5, 5))
        stats = FieldStats()
        stats.reset()
        assert stats.census(field) == {"Fox": 1, "Rabbit": 2, "Trap": 1}
        assert stats.counts_valid

    def test_stale_counts_are_rebuilt(self, field: Field, make_animal) -> None:
        fox = make_animal(field, 0, 0, kind="Fox")
        stats = FieldStats()
        stats.reset()
        assert stats.get_count(field, "Fox") == 1

        fox.set_dead()
        # Still fresh, so the old count stands until reset
        assert stats.get_count(field, "Fox") == 1
        stats.reset()
        assert stats.get_count(field, "Fox") == 0
        assert "Fox" in stats.census(field)

    def test_population_details(self, field: Field, make_animal) -> None:
        make_animal(field, 0, 0, kind="Fox")
        make_animal(field, 0, 1, kind="Rabbit")
        stats = FieldStats()
        stats.reset()
        assert stats.get_population_details(field) == "Fox: 1 Rabbit: 1"


class TestViability:
    def _viable(self, field: Field) -> bool:
        stats = FieldStats()
        stats.reset()
        return stats.is_viable(field)

    def test_empty_field_not_viable(self, field: Field) -> None:
        assert not self._viable(field)

    def test_only_foxes_not_viable(self, field: Field, make_animal) -> None:
        for col in range(5):
            make_animal(field, 0, col, kind="Fox")
        assert not self._viable(field)

    def test_fox_and_rabbit_viable(self, field: Field, make_animal) -> None:
        make_animal(field, 0, 0, kind="Fox")
        make_animal(field, 9, 9, kind="Rabbit")
        assert self._viable(field)

    def test_objects_do_not_count_as_species(self, field: Field, make_animal) -> None:
        make_animal(field, 0, 0, kind="Rabbit")
        Trap(field, Location(3, 3))
        assert not self._viable(field)
