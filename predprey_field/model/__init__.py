"""Model package for the predator-prey simulation."""

from .location import Location
from .field import Field
from .entity import Entity, EntityStateError
from .animal import Animal, Gender
from .objects import FieldObject, Trap, Pond, MAX_FIELD_PERCENT
from .species import Species, Fox, Rabbit
from .stats import Counter, FieldStats
from .state import SimulationState, SimulationStatus
from .engine import Simulator

__all__ = [
    'Location',
    'Field',
    'Entity',
    'EntityStateError',
    'Animal',
    'Gender',
    'FieldObject',
    'Trap',
    'Pond',
    'MAX_FIELD_PERCENT',
    'Species',
    'Fox',
    'Rabbit',
    'Counter',
    'FieldStats',
    'SimulationState',
    'SimulationStatus',
    'Simulator',
]
