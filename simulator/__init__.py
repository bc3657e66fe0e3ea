"""
Elevator Dispatch - Core simulation engine

This package provides the cars, doors, floors and hall buttons of a
multi-elevator building, plus the SimPy infrastructure they run on.
"""

__version__ = "0.1.0"

from .core.elevator import Elevator
from .core.door import Door
from .core.floor import Floor
from .core.hall_button import HallButton
from .core.entity import Entity

from .infrastructure.message_broker import MessageBroker
from .infrastructure.realtime_env import RealtimeEnvironment
from .infrastructure.command_queue import CommandQueue

from .errors import ElevatorError, InvalidRequest, NoAvailableElevator

__all__ = [
    'Elevator',
    'Door',
    'Floor',
    'HallButton',
    'Entity',
    'MessageBroker',
    'RealtimeEnvironment',
    'CommandQueue',
    'ElevatorError',
    'InvalidRequest',
    'NoAvailableElevator',
]
