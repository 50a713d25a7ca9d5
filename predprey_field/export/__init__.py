"""I/O package for the predator-prey simulation."""

from .population_log import PopulationLog, format_record
from .analyser import LogAnalyser, parse_record
from .visualizer import Visualizer
from .reporter import Reporter

__all__ = [
    'PopulationLog',
    'format_record',
    'LogAnalyser',
    'parse_record',
    'Visualizer',
    'Reporter',
]
