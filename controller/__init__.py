"""
Elevator Dispatch Controller

This package assigns hall calls to cars and routes every external
request (hall buttons, in-cab buttons, doors, alarms) to the right car.
"""

__version__ = "0.1.0"

from .dispatcher import Dispatcher
from .system import ElevatorSystem
from .algorithms.look_scoring import LookScoringStrategy

__all__ = ['Dispatcher', 'ElevatorSystem', 'LookScoringStrategy']
