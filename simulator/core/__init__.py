"""Core simulation entities"""

from .entity import Entity
from .elevator import Elevator
from .door import Door
from .floor import Floor
from .hall_button import HallButton

__all__ = [
    'Entity',
    'Elevator',
    'Door',
    'Floor',
    'HallButton',
]
