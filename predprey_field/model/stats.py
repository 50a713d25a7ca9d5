"""Population census over the field."""

from dataclasses import dataclass
from typing import Dict, TYPE_CHECKING

if TYPE_CHECKING:
    from .field import Field


@dataclass
class Counter:
    """Live count for one entity kind."""
    name: str
    is_animal: bool
    count: int = 0

    def increment(self) -> None:
        self.count += 1

    def reset(self) -> None:
        self.count = 0


class FieldStats:
    """
    Per-kind occupancy counts, rebuilt from the field on demand.

    Counts are not maintained as entities come and go. ``reset`` marks them
    stale; the next query rescans the grid. Kinds seen once keep their
    counter (at zero) so the census always lists them.

    Area objects are counted once per cell they cover.
    """

    def __init__(self):
        self.counters: Dict[str, Counter] = {}
        self.counts_valid = True

    def reset(self) -> None:
        """Invalidate the statistics and zero every known counter."""
        self.counts_valid = False
        for counter in self.counters.values():
            counter.reset()

    def increment_count(self, kind: str, is_animal: bool = False) -> None:
        counter = self.counters.get(kind)
        if counter is None:
            counter = Counter(kind, is_animal)
            self.counters[kind] = counter
        counter.increment()

    def count_finished(self) -> None:
        self.counts_valid = True

    def generate_counts(self, field: "Field") -> None:
        """Rescan the whole grid, classifying every occupant by kind."""
        self.reset()
        for occupant in field.occupants():
            self.increment_count(occupant.kind, occupant.is_animal)
        self.count_finished()

    def _ensure_counts(self, field: "Field") -> None:
        if not self.counts_valid:
            self.generate_counts(field)

    def census(self, field: "Field") -> Dict[str, int]:
        """Mapping of kind name to current count."""
        self._ensure_counts(field)
        return {name: c.count for name, c in self.counters.items()}

    def get_count(self, field: "Field", kind: str) -> int:
        self._ensure_counts(field)
        counter = self.counters.get(kind)
        return counter.count if counter is not None else 0

    def get_population_details(self, field: "Field") -> str:
        """Census as ``"Fox: 3 Rabbit: 40 Trap: 2"``."""
        self._ensure_counts(field)
        return " ".join(f"{c.name}: {c.count}" for c in self.counters.values())

    def is_viable(self, field: "Field") -> bool:
        """True while more than one animal kind has survivors."""
        self._ensure_counts(field)
        non_zero = sum(1 for c in self.counters.values()
                       if c.is_animal and c.count > 0)
        return non_zero > 1
