"""Infrastructure components for simulation"""

from .message_broker import MessageBroker
from .realtime_env import RealtimeEnvironment
from .command_queue import CommandQueue

__all__ = [
    'MessageBroker',
    'RealtimeEnvironment',
    'CommandQueue',
]
