"""Population log export for the predator-prey simulation."""

import logging
from pathlib import Path
from typing import Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..model.state import SimulationState

logger = logging.getLogger(__name__)

START_MARKER = "[start]"
FINISH_MARKER = "[finish]"

# Kinds recorded per step, in record order
LOGGED_KINDS = ("Fox", "Rabbit", "Trap")


def format_record(census: Dict[str, int]) -> str:
    """Census as ``fox:3+rabbit:40+trap:2`` (absent kinds count 0)."""
    return "+".join(f"{kind.lower()}:{int(census.get(kind, 0))}"
                    for kind in LOGGED_KINDS)


class PopulationLog:
    """
    Records one census line per step and appends the run to a log file.

    Output format (one block per run, appended):
        [start]
        fox:20+rabbit:310+trap:6
        ...
        [finish]

    Nothing is written until ``finish`` so a crashed run never leaves a
    half-written block behind. Works as a simulator observer.
    """

    def __init__(self, output_path: Path,
                 initial_state: Optional["SimulationState"] = None):
        self.output_path = Path(output_path)
        self.records: List[str] = [START_MARKER]
        self.finished = False
        if initial_state is not None:
            self.append(initial_state)

    def append(self, state: "SimulationState") -> None:
        """Buffer the census of one step."""
        self.records.append(format_record(state.census))

    def update(self, state: "SimulationState") -> None:
        self.append(state)

    def finish(self, state: Optional["SimulationState"] = None) -> None:
        """Close the run block and append it to the log file."""
        if self.finished:
            return
        self.finished = True
        self.records.append(FINISH_MARKER)

        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.output_path, 'a') as f:
            f.write("\n".join(self.records) + "\n")
        logger.info("Wrote %d population records to %s",
                    len(self.records) - 2, self.output_path)
