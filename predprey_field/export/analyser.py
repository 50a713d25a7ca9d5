"""Offline analysis of population log files."""

from pathlib import Path
from typing import Dict, List
import numpy as np

from .population_log import FINISH_MARKER, LOGGED_KINDS, START_MARKER


def parse_record(line: str) -> Dict[str, int]:
    """Parse ``fox:3+rabbit:40+trap:2`` into ``{"fox": 3, ...}``."""
    counts = {}
    for part in line.strip().split("+"):
        name, _, value = part.partition(":")
        if not name or not value:
            raise ValueError(f"Malformed population record: {line!r}")
        counts[name] = int(value)
    return counts


class LogAnalyser:
    """
    Loads every completed run from a population log.

    A block opened by ``[start]`` but never closed by ``[finish]`` is
    an interrupted run and is skipped.
    """

    def __init__(self):
        self.runs: List[List[str]] = []

    def load(self, log_path: Path) -> None:
        self.runs = []
        records = None
        with open(log_path) as f:
            for raw in f:
                line = raw.strip()
                if not line:
                    continue
                if line.lower() == START_MARKER:
                    records = []
                elif line.lower() == FINISH_MARKER:
                    if records is not None:
                        self.runs.append(records)
                    records = None
                elif records is not None:
                    records.append(line)

    @property
    def log_count(self) -> int:
        return len(self.runs)

    def worthy_log_count(self, min_records: int = 300) -> int:
        """Number of runs that lasted more than min_records records."""
        return sum(1 for records in self.runs if len(records) > min_records)

    def final_records(self) -> List[Dict[str, int]]:
        """Last census of every run (the survivors)."""
        return [parse_record(records[-1]) for records in self.runs if records]

    def population_series(self, run_index: int) -> np.ndarray:
        """Counts of one run as a (records x kinds) array, kinds in log order."""
        kinds = [kind.lower() for kind in LOGGED_KINDS]
        rows = [[parse_record(line).get(kind, 0) for kind in kinds]
                for line in self.runs[run_index]]
        return np.array(rows, dtype=np.int64).reshape(len(rows), len(kinds))
