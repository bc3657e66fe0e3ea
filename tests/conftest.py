import sys
from pathlib import Path

import pytest
import simpy

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config.simulation import SimulationConfig, BuildingConfig, ElevatorConfig, DoorConfig
from simulator.infrastructure.message_broker import MessageBroker


@pytest.fixture
def env():
    return simpy.Environment()


@pytest.fixture
def broker(env):
    return MessageBroker(env)


@pytest.fixture
def published(broker):
    """Every (topic, message) published on the broker, in order."""
    messages = []
    broker.subscribe(lambda topic, message: messages.append((topic, message)))
    return messages


@pytest.fixture
def small_config():
    """10 floors, 2 cars, one simulated second per floor and per door move."""
    return SimulationConfig(
        building=BuildingConfig(num_floors=10),
        elevator=ElevatorConfig(num_elevators=2, initial_floor=1, floor_move_time=1.0, check_interval=0.1),
        door=DoorConfig(open_time=1.0, close_time=1.0),
        realtime_factor=0.0,
    )
