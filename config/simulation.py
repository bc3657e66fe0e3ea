"""
Simulation Configuration

Building size, car count and the simulated durations of movement and
door operations.
"""

from dataclasses import dataclass


@dataclass
class BuildingConfig:
    """Building specifications"""
    num_floors: int = 20

    def __post_init__(self):
        if self.num_floors < 2:
            raise ValueError("num_floors must be at least 2")


@dataclass
class ElevatorConfig:
    """Elevator specifications"""
    num_elevators: int = 5
    initial_floor: int = 1
    floor_move_time: float = 0.5  # seconds per floor
    check_interval: float = 0.1  # control loop poll interval (seconds)

    def __post_init__(self):
        if self.num_elevators < 1:
            raise ValueError("num_elevators must be at least 1")
        if self.initial_floor < 1:
            raise ValueError("initial_floor must be at least 1")
        if self.floor_move_time <= 0:
            raise ValueError("floor_move_time must be positive")
        if self.check_interval <= 0:
            raise ValueError("check_interval must be positive")


@dataclass
class DoorConfig:
    """Door specifications"""
    open_time: float = 0.5  # seconds
    close_time: float = 0.5  # seconds

    def __post_init__(self):
        if self.open_time <= 0:
            raise ValueError("open_time must be positive")
        if self.close_time <= 0:
            raise ValueError("close_time must be positive")


@dataclass
class SimulationConfig:
    """
    Complete simulation configuration

    Combines building, elevator and door settings with the runtime
    controls used when the system runs against the wall clock.
    """
    building: BuildingConfig
    elevator: ElevatorConfig
    door: DoorConfig

    realtime_factor: float = 1.0  # 1.0 = realtime, 0.0 = as fast as possible
    command_poll_interval: float = 0.05  # seconds between driver command checks

    def __post_init__(self):
        if self.realtime_factor < 0:
            raise ValueError("realtime_factor cannot be negative")
        if self.command_poll_interval <= 0:
            raise ValueError("command_poll_interval must be positive")

    @classmethod
    def default(cls) -> 'SimulationConfig':
        return cls(building=BuildingConfig(), elevator=ElevatorConfig(), door=DoorConfig())

    @classmethod
    def from_dict(cls, data: dict) -> 'SimulationConfig':
        """Create SimulationConfig from dictionary"""
        sim_data = data.get('simulation', data) or {}

        building_data = sim_data.get('building', {})
        building = BuildingConfig(
            num_floors=building_data.get('num_floors', 20)
        )

        elevator_data = sim_data.get('elevator', {})
        elevator = ElevatorConfig(
            num_elevators=elevator_data.get('num_elevators', 5),
            initial_floor=elevator_data.get('initial_floor', 1),
            floor_move_time=elevator_data.get('floor_move_time', 0.5),
            check_interval=elevator_data.get('check_interval', 0.1)
        )

        door_data = sim_data.get('door', {})
        door = DoorConfig(
            open_time=door_data.get('open_time', 0.5),
            close_time=door_data.get('close_time', 0.5)
        )

        return cls(
            building=building,
            elevator=elevator,
            door=door,
            realtime_factor=sim_data.get('realtime_factor', 1.0),
            command_poll_interval=sim_data.get('command_poll_interval', 0.05)
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        return {
            'simulation': {
                'building': {
                    'num_floors': self.building.num_floors
                },
                'elevator': {
                    'num_elevators': self.elevator.num_elevators,
                    'initial_floor': self.elevator.initial_floor,
                    'floor_move_time': self.elevator.floor_move_time,
                    'check_interval': self.elevator.check_interval
                },
                'door': {
                    'open_time': self.door.open_time,
                    'close_time': self.door.close_time
                },
                'realtime_factor': self.realtime_factor,
                'command_poll_interval': self.command_poll_interval
            }
        }

    def validate(self):
        """Validate configuration consistency"""
        if self.elevator.initial_floor > self.building.num_floors:
            raise ValueError(
                f"elevator.initial_floor ({self.elevator.initial_floor}) cannot exceed "
                f"building.num_floors ({self.building.num_floors})"
            )
