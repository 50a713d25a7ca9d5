"""State snapshot dataclasses for the predator-prey simulation."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict
import numpy as np


class SimulationStatus(Enum):
    """Lifecycle states of a simulator."""
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    HALTED = "halted"


@dataclass
class SimulationState:
    """Census of the field after a completed step."""
    step: int
    census: Dict[str, int]      # kind name -> live count
    viable: bool
    status: SimulationStatus
    kind_grid: np.ndarray       # Copy of the grid as kind names

    def population_details(self) -> str:
        """Census as ``"Fox: 3 Rabbit: 40 Trap: 2"``."""
        return " ".join(f"{kind}: {count}" for kind, count in self.census.items())

    def count(self, kind: str) -> int:
        return self.census.get(kind, 0)
