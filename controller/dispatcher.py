from typing import Dict, List, Optional

import simpy

from config.dispatch import DispatchConfig
from config.simulation import SimulationConfig
from simulator.core.constants import HALL_CALL_DIRECTIONS
from simulator.core.door import Door
from simulator.core.elevator import Elevator
from simulator.core.floor import Floor
from simulator.errors import InvalidRequest, NoAvailableElevator
from simulator.infrastructure.message_broker import MessageBroker
from .algorithms import create_allocation_strategy
from .interfaces.allocation_strategy import IAllocationStrategy


class Dispatcher:
    """
    Owns every car and floor of the building and routes all requests.

    Cars and floors never reference the dispatcher or each other: cars
    report arrivals through a callback, and every external operation
    (hall calls, in-cab buttons, door and alarm controls) goes through the
    dispatcher's public methods.

    Hall-call scoring reads each car's status snapshot one car at a time
    without a global lock. A car may change state right after being scored;
    the call then goes to a car whose view was a few microseconds stale,
    which is accepted.
    """
    def __init__(self, env: simpy.Environment, broker: MessageBroker,
                 sim_config: Optional[SimulationConfig] = None,
                 dispatch_config: Optional[DispatchConfig] = None,
                 strategy: Optional[IAllocationStrategy] = None,
                 name: str = "Dispatcher"):
        self.env = env
        self.broker = broker
        self.name = name
        self.sim_config = sim_config or SimulationConfig.default()
        self.sim_config.validate()
        self.dispatch_config = dispatch_config or DispatchConfig()

        if strategy is None:
            self.dispatch_config.validate()
            strategy = create_allocation_strategy(
                self.dispatch_config.allocation_strategy.name,
                self.dispatch_config.allocation_strategy.parameters
            )
        self.strategy = strategy

        self.num_floors = self.sim_config.building.num_floors
        elevator_config = self.sim_config.elevator
        door_config = self.sim_config.door

        self.floors: List[Floor] = [
            Floor(env, floor_number, self.num_floors, broker)
            for floor_number in range(1, self.num_floors + 1)
        ]

        # Control loops start as soon as the cars exist
        self.elevators: List[Elevator] = []
        for elevator_id in range(1, elevator_config.num_elevators + 1):
            door = Door(env, f"Elevator_{elevator_id}_Door",
                        open_time=door_config.open_time, close_time=door_config.close_time)
            elevator = Elevator(
                env, elevator_id, broker, self.num_floors, door,
                initial_floor=elevator_config.initial_floor,
                floor_move_time=elevator_config.floor_move_time,
                check_interval=elevator_config.check_interval,
                arrival_handler=self._on_elevator_arrival
            )
            self.elevators.append(elevator)

        self._log(f"Using strategy: {self.strategy.get_strategy_name()}")

    def _log(self, message: str):
        print(f"{self.broker.get_current_time():.2f} [{self.name}] {message}")

    # --- Lifecycle ---

    def start(self):
        """Announce the system; the car processes are already running."""
        self._log(f"Elevator system started: {len(self.elevators)} elevators, {self.num_floors} floors")
        self.broker.put("system/lifecycle", {
            "timestamp": self.env.now,
            "event": "started",
            "num_elevators": len(self.elevators),
            "num_floors": self.num_floors,
        })

    def shutdown(self):
        """Interrupt every control loop and in-flight door transition."""
        for elevator in self.elevators:
            elevator.stop("shutdown")
        self._log("Elevator system shut down")
        self.broker.put("system/lifecycle", {"timestamp": self.env.now, "event": "shutdown"})

    # --- Lookup and validation ---

    def _validate_floor(self, floor: int):
        if isinstance(floor, bool) or not isinstance(floor, int) or not (1 <= floor <= self.num_floors):
            raise InvalidRequest(f"Invalid floor {floor!r}, valid range: 1-{self.num_floors}")

    def _validate_direction(self, direction: str):
        if direction not in HALL_CALL_DIRECTIONS:
            raise InvalidRequest(f"Invalid direction {direction!r}, use UP or DOWN")

    def get_elevator(self, elevator_id: int) -> Elevator:
        if isinstance(elevator_id, bool) or not isinstance(elevator_id, int) \
                or not (1 <= elevator_id <= len(self.elevators)):
            raise InvalidRequest(f"Invalid elevator id {elevator_id!r}, valid range: 1-{len(self.elevators)}")
        return self.elevators[elevator_id - 1]

    def get_floor(self, floor: int) -> Floor:
        self._validate_floor(floor)
        return self.floors[floor - 1]

    # --- Hall calls ---

    def press_hall_button(self, floor: int, direction: str) -> Optional[int]:
        """
        Hall button press at a floor.

        A second press while the button is lit is a no-op. When every car is
        alarmed the button stays lit and NoAvailableElevator propagates.

        Returns:
            Id of the assigned elevator, or None if the call was already pending
        """
        self._validate_direction(direction)
        floor_obj = self.get_floor(floor)
        if not floor_obj.press(direction):
            return None
        return self.request_elevator(floor, direction)

    def request_elevator(self, floor: int, direction: str) -> int:
        """
        Assign a hall call to the best-scoring non-alarmed car.

        Returns:
            Id of the assigned elevator

        Raises:
            InvalidRequest: floor out of range or direction not UP/DOWN
            NoAvailableElevator: every car is alarmed
        """
        self._validate_floor(floor)
        self._validate_direction(direction)
        self._log(f"Floor {floor} requests an elevator going {direction}")

        call_data = {'floor': floor, 'direction': direction, 'timestamp': self.env.now}
        elevator_statuses: Dict[int, dict] = {}
        for elevator in self.elevators:
            status = elevator.get_status()
            if not status['alarmed']:
                elevator_statuses[elevator.elevator_id] = status

        selected_id = self.strategy.select_elevator(call_data, elevator_statuses) if elevator_statuses else None
        if selected_id is None:
            self._log(f"All elevators are alarmed, cannot serve floor {floor} ({direction})")
            self.broker.put("dispatcher/rejected", {
                "timestamp": self.env.now,
                "floor": floor,
                "direction": direction,
                "reason": "all_elevators_alarmed",
            })
            raise NoAvailableElevator(floor, direction)

        elevator = self.get_elevator(selected_id)
        self._log(f"Selected {elevator.name} for floor {floor} ({direction})")
        served_immediately = elevator.assign_hall_call(floor, direction)
        self.broker.put("dispatcher/assignment", {
            "timestamp": self.env.now,
            "floor": floor,
            "direction": direction,
            "assigned_elevator": selected_id,
            "served_immediately": served_immediately,
        })
        return selected_id

    def _on_elevator_arrival(self, elevator_id: int, floor: int, direction: str):
        self.floors[floor - 1].elevator_arrived(direction, f"Elevator_{elevator_id}")

    # --- Car operations ---

    def add_stop(self, elevator_id: int, floor: int) -> bool:
        """In-cab floor button. Returns True if a new stop was recorded."""
        self._validate_floor(floor)
        return self.get_elevator(elevator_id).add_stop(floor)

    def open_door(self, elevator_id: int) -> bool:
        return self.get_elevator(elevator_id).open_door()

    def close_door(self, elevator_id: int) -> bool:
        return self.get_elevator(elevator_id).close_door()

    def trigger_alarm(self, elevator_id: int) -> bool:
        return self.get_elevator(elevator_id).trigger_alarm()

    def reset_alarm(self, elevator_id: int) -> bool:
        return self.get_elevator(elevator_id).reset_alarm()

    # --- System status ---

    def all_elevators_alarmed(self) -> bool:
        return all(elevator.get_status()['alarmed'] for elevator in self.elevators)

    def elevator_statuses(self) -> List[dict]:
        return [elevator.get_status() for elevator in self.elevators]

    def floor_statuses(self) -> List[dict]:
        return [floor.get_status() for floor in self.floors]

    def get_status(self) -> dict:
        """System-wide view for displays, safe to call from any thread."""
        return {
            "time": self.env.now,
            "num_floors": self.num_floors,
            "strategy": self.strategy.get_strategy_name(),
            "all_elevators_alarmed": self.all_elevators_alarmed(),
            "elevators": self.elevator_statuses(),
            "floors": self.floor_statuses(),
        }
