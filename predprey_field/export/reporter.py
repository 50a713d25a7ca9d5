"""Summary report generation for the predator-prey simulation."""

from typing import Dict, Optional, TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from ..model.state import SimulationState


class Reporter:
    """Tracks population extremes over a run and formats a text report."""

    def __init__(self, config_path: Optional[str], seed: Optional[int]):
        self.config_path = config_path
        self.seed = seed
        self.steps_recorded = 0
        self.peak_counts: Dict[str, int] = {}
        self.peak_steps: Dict[str, int] = {}
        self.extinction_steps: Dict[str, int] = {}
        self.halt_step: Optional[int] = None

    def update(self, state: "SimulationState") -> None:
        """Accumulate census per step."""
        self.steps_recorded += 1
        for kind, count in state.census.items():
            if count > self.peak_counts.get(kind, -1):
                self.peak_counts[kind] = count
                self.peak_steps[kind] = state.step
            if count == 0 and kind not in self.extinction_steps:
                self.extinction_steps[kind] = state.step

    def finish(self, state: "SimulationState") -> None:
        self.halt_step = state.step

    def generate_summary(self, final_state: "SimulationState",
                         output_dir: Path,
                         log_enabled: bool,
                         snapshot_enabled: bool,
                         gif_enabled: bool,
                         log_name: str = 'Logs.dat') -> str:
        """Returns formatted text report."""
        # Build report
        lines = [
            "",
            "=" * 80,
            "                    PREDATOR-PREY FIELD SIMULATION REPORT",
            "=" * 80,
            f"Configuration: {self.config_path or '(built-in defaults)'}",
            f"Random Seed: {self.seed if self.seed is not None else 'None (random)'}",
            "",
            "SIMULATION METRICS",
            "-" * 40,
            f"Total Steps:           {final_state.step}",
            f"Final Status:          {final_state.status.value}",
            f"Viable:                {'yes' if final_state.viable else 'no'}",
        ]
        if self.halt_step is not None:
            lines.append(f"Halted At Step:        {self.halt_step}")

        lines += [
            "",
            "POPULATION",
            "-" * 40,
        ]
        for kind, count in final_state.census.items():
            peak = self.peak_counts.get(kind, count)
            peak_step = self.peak_steps.get(kind, final_state.step)
            line = f"{kind + ':':<22} {count:>6} (peak {peak} at step {peak_step})"
            if kind in self.extinction_steps:
                line += f", extinct at step {self.extinction_steps[kind]}"
            lines.append(line)

        lines += [
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]

        # Output file paths
        if log_enabled:
            lines.append(f"Population Log: {output_dir / log_name}")
        else:
            lines.append("Population Log: (disabled)")

        if snapshot_enabled:
            lines.append(f"Snapshot:       {output_dir / 'final_state.png'}")
        else:
            lines.append("Snapshot:       (disabled)")

        if gif_enabled:
            lines.append(f"Animation:      {output_dir / 'simulation.gif'}")
        else:
            lines.append("Animation:      (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)
