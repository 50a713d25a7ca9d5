"""Simulation engine for the predator-prey field."""

import logging
import numpy as np
from collections import defaultdict
from typing import Callable, Dict, Iterator, List, Optional, TYPE_CHECKING

from .animal import Animal
from .field import Field
from .location import Location
from .objects import FieldObject, Pond, Trap
from .species import Fox, Rabbit
from .state import SimulationState, SimulationStatus
from .stats import FieldStats
from ..config import DEFAULT_DEPTH, DEFAULT_WIDTH, default_config

if TYPE_CHECKING:
    from ..config import SimulationConfig

logger = logging.getLogger(__name__)


class Simulator:
    """
    Orchestrates the discrete-time predator-prey loop.

    Each step:
    1. Advance the step counter
    2. Let every live animal act, then let objects sharing its cell react
    3. Drop dead animals and spent objects, then put surviving objects
       back on any of their cells an animal has walked off
    4. Admit the animals born during the step
    5. Publish a fresh census
    6. Halt if fewer than two animal kinds survive

    Multi-step runs can be paused; the pause takes effect at the next step
    boundary and ``resume`` carries on with the remaining steps. Observers
    receive ``update(state)`` after every step and ``finish(state)`` once
    when the run halts.
    """

    def __init__(self, config: Optional["SimulationConfig"] = None,
                 rng: Optional[np.random.Generator] = None):
        self.config = config if config is not None else default_config()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)

        depth, width = self.config.grid.depth, self.config.grid.width
        if depth <= 0 or width <= 0:
            logger.warning("Field dimensions must be greater than zero, got "
                           "%dx%d; using defaults %dx%d",
                           depth, width, DEFAULT_DEPTH, DEFAULT_WIDTH)
            depth, width = DEFAULT_DEPTH, DEFAULT_WIDTH
        self.field = Field(depth, width, self.rng)

        self.stats = FieldStats()
        self.animals: List[Animal] = []
        self.objects: List[FieldObject] = []
        self.observers: List = []

        self.step = 0
        self.status = SimulationStatus.IDLE
        self.target_step = 0
        self._pause_requested = False
        self._finish_notified = False
        self.last_state: Optional[SimulationState] = None

        self.reset()

    # ------------------------------------------------------------------
    # Run control
    # ------------------------------------------------------------------

    @property
    def remaining_steps(self) -> int:
        return max(0, self.target_step - self.step)

    def run_long_simulation(self) -> List[SimulationState]:
        """Run for the configured number of steps (500 by default)."""
        return self.simulate(self.config.max_steps)

    def simulate(self, num_steps: int) -> List[SimulationState]:
        """
        Run up to num_steps steps and return the state after each.

        Stops early when the field stops being viable or a pause is
        requested.
        """
        return list(self.iter_steps(num_steps))

    def iter_steps(self, num_steps: Optional[int] = None) -> Iterator[SimulationState]:
        """
        Yield one state per completed step.

        With num_steps the step budget is set afresh; without it the
        remaining budget of a paused run is used.
        """
        if self.status == SimulationStatus.HALTED:
            logger.info("Simulation halted at step %d; reset to run again",
                        self.step)
            return
        if num_steps is not None:
            if num_steps < 0:
                raise ValueError(f"num_steps must not be negative, got {num_steps}")
            self.target_step = self.step + num_steps

        self._pause_requested = False
        self.status = SimulationStatus.RUNNING
        try:
            while self.step < self.target_step:
                if self._pause_requested:
                    self.status = SimulationStatus.PAUSED
                    logger.info("Simulation paused at step %d (%d steps remaining)",
                                self.step, self.remaining_steps)
                    return
                state = self.simulate_one_step()
                yield state
                if self.status == SimulationStatus.HALTED:
                    return
        finally:
            # Also reached when the consumer abandons the generator mid-run
            self._pause_requested = False
            if self.status == SimulationStatus.RUNNING:
                self.status = (SimulationStatus.PAUSED if self.remaining_steps
                               else SimulationStatus.IDLE)

    def pause(self) -> None:
        """Ask a running simulation to stop at the next step boundary."""
        if self.status == SimulationStatus.RUNNING:
            self._pause_requested = True

    def resume(self) -> List[SimulationState]:
        """Continue a paused run with its remaining step budget."""
        if self.status != SimulationStatus.PAUSED:
            return []
        logger.info("Simulation resuming at step %d", self.step)
        return list(self.iter_steps())

    def reset(self) -> None:
        """Return to step 0 with a freshly generated population."""
        self.step = 0
        self.target_step = 0
        self.animals.clear()
        self.objects.clear()
        self._pause_requested = False
        self._finish_notified = False
        self.status = SimulationStatus.IDLE
        self.populate()
        self.last_state = self._snapshot()

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def add_observer(self, observer) -> None:
        """Register an object with update(state) and finish(state)."""
        self.observers.append(observer)

    def remove_observer(self, observer) -> None:
        if observer in self.observers:
            self.observers.remove(observer)

    # ------------------------------------------------------------------
    # Step
    # ------------------------------------------------------------------

    def simulate_one_step(self) -> SimulationState:
        """
        Execute one discrete time step.

        Removal of dead animals is deferred to the end of the animal pass:
        every object on an animal's cell reacts to it, even when an earlier
        object at that cell has already killed it.
        """
        if self.status == SimulationStatus.HALTED:
            return self.last_state

        self.step += 1
        new_animals: List[Animal] = []
        objects_at = self._index_objects()

        for animal in list(self.animals):
            if not animal.is_alive():
                continue
            animal.act(new_animals)

            location = animal.location
            if location is None:
                continue
            for obj in objects_at.get(location, ()):
                if obj.is_placed():
                    obj.react(animal)

        self.animals = [a for a in self.animals if a.is_alive()]
        self.objects = [o for o in self.objects if o.is_placed()]
        self._uncover_objects()

        # Newborns never act in the step they were born
        self.animals.extend(a for a in new_animals if a.is_alive())

        state = self._snapshot()
        if not state.viable:
            self.status = SimulationStatus.HALTED
            state.status = self.status

        for observer in self.observers:
            observer.update(state)

        if self.status == SimulationStatus.HALTED:
            self._finish(state)
        return state

    def _uncover_objects(self) -> None:
        # Animals overwrite passable objects in the grid while standing on them
        for obj in self.objects:
            for location in obj.locations:
                if self.field.get_object_at(location) is None:
                    self.field.place(obj, location)

    def _index_objects(self) -> Dict[Location, List[FieldObject]]:
        objects_at: Dict[Location, List[FieldObject]] = defaultdict(list)
        for obj in self.objects:
            for location in obj.locations:
                objects_at[location].append(obj)
        return objects_at

    def _snapshot(self) -> SimulationState:
        """Recount the field and package the result."""
        self.stats.reset()
        census = self.stats.census(self.field)
        state = SimulationState(
            step=self.step,
            census=census,
            viable=self.stats.is_viable(self.field),
            status=self.status,
            kind_grid=self.field.kind_grid()
        )
        self.last_state = state
        return state

    def _finish(self, state: SimulationState) -> None:
        if self._finish_notified:
            return
        self._finish_notified = True
        logger.info("Simulation no longer viable at step %d: %s",
                    state.step, state.population_details())
        for observer in self.observers:
            observer.finish(state)

    def is_viable(self) -> bool:
        self.stats.reset()
        return self.stats.is_viable(self.field)

    def census(self) -> Dict[str, int]:
        """Fresh kind -> count mapping for the current field."""
        self.stats.reset()
        return self.stats.census(self.field)

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    def populate(self) -> None:
        """
        Randomly seed the field with ponds, traps, foxes and rabbits.

        Ponds go down first. Every remaining empty cell is then tested for
        a trap, then a fox, then a rabbit, with a fresh draw per test; the
        first hit wins, so a cell given a trap is never tested for a fox.
        """
        population = self.config.population
        field = self.field
        field.clear()

        for _ in range(population.pond_count):
            if field.get_locations_left() < 1:
                break
            self.objects.append(Pond(field, population.pond_max_field_percent))

        for row in range(field.depth):
            for col in range(field.width):
                location = Location(row, col)
                if field.get_object_at(location) is not None:
                    continue
                if self.rng.random() < population.trap_probability:
                    self._new_trap(location)
                elif self.rng.random() < population.fox_probability:
                    self._new_fox(location, random_age=True)
                elif self.rng.random() < population.rabbit_probability:
                    self._new_rabbit(location, random_age=True)
                # else leave the location empty

    def _new_trap(self, location: Location) -> Trap:
        trap = Trap(self.field, location)
        if self.config.traps.armed:
            trap.trigger()
        self.objects.append(trap)
        return trap

    def _new_fox(self, location: Location, random_age: bool = False) -> Fox:
        fox = Fox(self.field, location, self.config.fox, random_age)
        self.animals.append(fox)
        return fox

    def _new_rabbit(self, location: Location, random_age: bool = False) -> Rabbit:
        rabbit = Rabbit(self.field, location, self.config.rabbit, random_age)
        self.animals.append(rabbit)
        return rabbit

    def add_animal(self, animal: Animal) -> None:
        """Adopt an animal already constructed on this simulator's field."""
        if animal.field is not self.field:
            raise ValueError("Animal belongs to a different field")
        self.animals.append(animal)

    def add_object(self, obj: FieldObject) -> None:
        """Adopt an object already constructed on this simulator's field."""
        if obj.field is not self.field:
            raise ValueError("Object belongs to a different field")
        self.objects.append(obj)

    # ------------------------------------------------------------------
    # External insertion
    # ------------------------------------------------------------------

    def _insert(self, kind: str, count: int,
                create: Callable[[Location], object]) -> bool:
        """Place count new entities on random free cells, or none at all."""
        if count < 0:
            raise ValueError(f"count must not be negative, got {count}")
        free = self.field.get_locations_left()
        if count > free:
            logger.info("Rejected insertion of %d %s: only %d free cells",
                        count, kind, free)
            return False
        for _ in range(count):
            create(self.field.get_random_free_location())
        return True

    def insert_rabbits(self, count: int) -> bool:
        return self._insert(Rabbit.kind, count,
                            lambda loc: self._new_rabbit(loc, random_age=True))

    def insert_foxes(self, count: int) -> bool:
        return self._insert(Fox.kind, count,
                            lambda loc: self._new_fox(loc, random_age=True))

    def insert_traps(self, count: int) -> bool:
        return self._insert(Trap.kind, count, self._new_trap)

    def insert_disease(self, count: int) -> bool:
        """Infect count randomly chosen healthy live animals."""
        if count < 0:
            raise ValueError(f"count must not be negative, got {count}")
        if count == 0:
            return True
        healthy = [a for a in self.animals if a.is_alive() and not a.is_diseased()]
        if count > len(healthy):
            logger.info("Rejected disease for %d animals: only %d healthy",
                        count, len(healthy))
            return False
        for index in self.rng.choice(len(healthy), size=count, replace=False):
            healthy[int(index)].set_diseased()
        return True

    def trigger_traps(self) -> int:
        """Arm every waiting trap; return how many were newly armed."""
        armed = 0
        for obj in self.objects:
            if isinstance(obj, Trap) and obj.is_placed() and not obj.is_triggered():
                obj.trigger()
                armed += 1
        return armed

    def get_summary(self) -> Dict:
        """Get summary statistics for the simulation."""
        return {
            'total_steps': self.step,
            'status': self.status.value,
            'census': self.census(),
            'animals': len(self.animals),
            'objects': len(self.objects),
            'locations_left': self.field.get_locations_left()
        }
