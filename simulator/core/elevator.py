import threading
from typing import Callable, Dict, List, Optional

import simpy

from .constants import (
    UP, DOWN, IDLE, HALL_CALL_DIRECTIONS,
    MOVING, STOPPED, DOOR_OPENING, DOOR_OPENED, DOOR_CLOSING,
    opposite,
)
from .door import Door
from .entity import Entity
from ..infrastructure.message_broker import MessageBroker


class Elevator(Entity):
    """
    A single car with its own control loop.

    The control loop polls every ``check_interval``: when stops are pending
    it picks the next floor with the LOOK discipline, travels there one
    floor per ``floor_move_time`` and opens the door on arrival. Doors never
    close on their own; they are closed by close_door() or, when further
    stops are pending, by the control loop right before departing.

    All mutable fields are guarded by a per-car re-entrant lock so that
    status snapshots taken from other threads are never torn.
    """

    def __init__(self, env: simpy.Environment, elevator_id: int, broker: MessageBroker, num_floors: int,
                 door: Door, initial_floor: int = 1, floor_move_time: float = 0.5,
                 check_interval: float = 0.1,
                 arrival_handler: Optional[Callable[[int, int, str], None]] = None):
        """
        Args:
            env: SimPy environment
            elevator_id: Stable id (1..N)
            broker: Message broker used for every notification
            num_floors: Total floors served (floors are numbered 1..num_floors)
            door: Door mechanism of this car
            initial_floor: Floor where the car starts
            floor_move_time: Simulated seconds to travel one floor
            check_interval: Control loop poll interval while there is nothing to do
            arrival_handler: Called as handler(elevator_id, floor, direction) when
                the car services a floor, so the owner can clear hall calls
        """
        if not (1 <= initial_floor <= num_floors):
            raise ValueError(f"initial_floor must be between 1 and {num_floors}")
        if floor_move_time <= 0 or check_interval <= 0:
            raise ValueError("floor_move_time and check_interval must be positive")

        # Fields touched by the state-change hook must exist before super().__init__
        self._lock = threading.RLock()
        self.broker = broker
        self.direction = IDLE
        self.elevator_id = elevator_id
        self.current_floor = initial_floor
        self.alarmed = False

        super().__init__(env, f"Elevator_{elevator_id}")
        self.num_floors = num_floors
        self.door = door
        self.floor_move_time = floor_move_time
        self.check_interval = check_interval
        self.arrival_handler = arrival_handler

        self._pending_stops: List[int] = []  # Insertion order breaks LOOK ties
        self._hall_calls: Dict[int, List[str]] = {}  # floor -> directions to commit to on arrival

        self.door.set_broker_and_elevator(self.broker, self.name, self)
        self.status_topic = f"elevator/{self.name}/status"

        self.set_state(STOPPED)

    # --- Status ---

    @property
    def pending_stops(self) -> List[int]:
        """Sorted snapshot copy of the pending stops."""
        with self._lock:
            return sorted(self._pending_stops)

    def get_status(self) -> dict:
        """Consistent snapshot of the car, safe to call from any thread."""
        with self._lock:
            return {
                "timestamp": self.env.now,
                "elevator_id": self.elevator_id,
                "name": self.name,
                "current_floor": self.current_floor,
                "direction": self.direction,
                "door_state": self.state,
                "alarmed": self.alarmed,
                "pending_stops": sorted(self._pending_stops),
                "hall_calls": [
                    {"floor": floor, "direction": direction}
                    for floor in sorted(self._hall_calls) for direction in self._hall_calls[floor]
                ],
            }

    def _on_state_changed(self, old_state: str, new_state: str):
        super()._on_state_changed(old_state, new_state)
        self._report_status()

    def _update_direction(self, new_direction: str):
        if self.direction != new_direction:
            old_direction = self.direction
            self.direction = new_direction
            self.log(f"Direction: {old_direction} -> {new_direction}")
            self._report_status()

    def _report_status(self):
        self.broker.put(self.status_topic, self.get_status())

    # --- Requests ---

    def add_stop(self, floor: int) -> bool:
        """
        Record a stop request (in-cab button or assigned hall call).

        Out-of-range floors, floors already pending and the floor the car is
        standing at are ignored. Requests made while alarmed are recorded
        but not acted upon until the alarm is reset.

        Returns:
            True if the stop was recorded
        """
        if not (1 <= floor <= self.num_floors):
            return False
        with self._lock:
            if floor in self._pending_stops:
                return False
            if floor == self.current_floor and self.state != MOVING:
                return False
            self._record_stop(floor)
            return True

    def _record_stop(self, floor: int):
        self._pending_stops.append(floor)
        self.log(f"Stop requested for floor {floor}")
        # An alarmed car keeps its direction until the control loop resumes
        if self.direction == IDLE and not self.alarmed and floor != self.current_floor:
            self._update_direction(UP if floor > self.current_floor else DOWN)

        # Sync fan-out: observers may light the button; no other car is affected
        self.broker.put(f"elevator/{self.name}/stop_added", {
            "timestamp": self.env.now,
            "elevator_id": self.elevator_id,
            "floor": floor,
            "pending_stops": sorted(self._pending_stops),
        })
        self._report_status()

    @property
    def hall_calls(self) -> Dict[int, List[str]]:
        """Snapshot copy of the hall-call directions keyed by floor."""
        with self._lock:
            return {floor: list(directions) for floor, directions in self._hall_calls.items()}

    def add_hall_call_direction(self, floor: int, direction: str):
        """Remember the direction to commit to when the car services this floor."""
        if direction not in HALL_CALL_DIRECTIONS:
            raise ValueError(f"Invalid hall call direction '{direction}'")
        with self._lock:
            directions = self._hall_calls.setdefault(floor, [])
            if direction not in directions:
                directions.append(direction)
            self.log(f"Received outside call at floor {floor} heading {direction}")

    def assign_hall_call(self, floor: int, direction: str) -> bool:
        """
        Take over a hall call chosen for this car by the dispatcher.

        The call becomes a stop plus a direction hint for that floor. If the
        car is standing at the calling floor with its door open, opening or
        closed, the call is serviced on the spot. A car whose door is closing
        there gets the floor back as a stop, so it reopens once the door has
        shut.

        Returns:
            True if the call was serviced immediately
        """
        with self._lock:
            if floor == self.current_floor and self.state in (STOPPED, DOOR_OPENING, DOOR_OPENED):
                self.log(f"Already at floor {floor}, serving {direction} call immediately")
                self._update_direction(direction)
                self._notify_arrival(floor, direction)
                self.open_door()
                return True
            if floor == self.current_floor and self.state == DOOR_CLOSING:
                if floor not in self._pending_stops:
                    self._record_stop(floor)
            else:
                self.add_stop(floor)
            self.add_hall_call_direction(floor, direction)
            return False

    # --- Door operations ---

    def open_door(self) -> bool:
        """STOPPED -> DOOR_OPENING; ignored in any other state."""
        with self._lock:
            if self.state != STOPPED:
                return False
            self.set_state(DOOR_OPENING)
            self.log(f"Opening door at floor {self.current_floor}" + (" (alarmed)" if self.alarmed else ""))
            self.door.begin_opening(self.current_floor)
            return True

    def close_door(self) -> bool:
        """DOOR_OPENED -> DOOR_CLOSING; ignored in any other state."""
        with self._lock:
            if self.state != DOOR_OPENED:
                return False
            self.set_state(DOOR_CLOSING)
            self.log(f"Closing door at floor {self.current_floor}" + (" (alarmed)" if self.alarmed else ""))
            self.door.begin_closing(self.current_floor)
            return True

    def settle_door(self, transitional_state: str, settled_state: str) -> bool:
        """Called by the door when a transition completes."""
        with self._lock:
            if self.state != transitional_state:
                return False
            self.set_state(settled_state)
            return True

    # --- Alarm ---

    def trigger_alarm(self) -> bool:
        """Put the car in the sticky alarm state, stopping it if moving."""
        with self._lock:
            if self.alarmed:
                return False
            self.alarmed = True
            if self.state == MOVING:
                self.set_state(STOPPED)
            self.log("ALARM triggered, car halted")
            self.broker.put(f"elevator/{self.name}/alarm", {
                "timestamp": self.env.now,
                "elevator_id": self.elevator_id,
                "alarmed": True,
                "floor": self.current_floor,
            })
            self._report_status()
            return True

    def reset_alarm(self) -> bool:
        with self._lock:
            if not self.alarmed:
                return False
            self.alarmed = False
            self.log("Alarm reset, resuming service")
            self.broker.put(f"elevator/{self.name}/alarm", {
                "timestamp": self.env.now,
                "elevator_id": self.elevator_id,
                "alarmed": False,
                "floor": self.current_floor,
            })
            self._report_status()
            return True

    # --- LOOK scheduling ---

    def find_next_floor_using_look(self) -> Optional[int]:
        """
        Pick the next stop with the LOOK discipline.

        - IDLE: nearest pending stop (first minimal in request order), and
          commit to the direction toward it.
        - UP/DOWN: nearest pending stop at or ahead of the current floor in
          the travel direction.
        - Nothing ahead: reverse and search again.

        Returns:
            The chosen floor, or None when nothing is pending
        """
        with self._lock:
            if not self._pending_stops:
                return None

            if self.direction == IDLE:
                closest = self._pending_stops[0]
                for floor in self._pending_stops:
                    if abs(floor - self.current_floor) < abs(closest - self.current_floor):
                        closest = floor
                if closest != self.current_floor:
                    self._update_direction(UP if closest > self.current_floor else DOWN)
                return closest

            next_floor = None
            for floor in self._pending_stops:
                ahead = floor >= self.current_floor if self.direction == UP else floor <= self.current_floor
                if ahead and (next_floor is None or abs(floor - self.current_floor) < abs(next_floor - self.current_floor)):
                    next_floor = floor

            if next_floor is None:
                self.log(f"No more {self.direction} requests, reversing")
                self._update_direction(opposite(self.direction))
                return self.find_next_floor_using_look()
            return next_floor

    # --- Control loop ---

    def run(self):
        while True:
            target = self._plan_next_move()
            if target is None:
                yield self.env.timeout(self.check_interval)
            elif target == self.current_floor:
                self._arrive()
            else:
                yield self.env.timeout(self.floor_move_time)
                self._advance_one_floor(target)

    def _plan_next_move(self) -> Optional[int]:
        with self._lock:
            if self.alarmed:
                return None
            if not self._pending_stops:
                self._update_direction(IDLE)
                return None
            if self.state in (DOOR_OPENING, DOOR_CLOSING):
                return None
            if self.state == DOOR_OPENED:
                # Departure needs the door shut first
                self.close_door()
                return None

            target = self.find_next_floor_using_look()
            if target != self.current_floor:
                self._update_direction(UP if target > self.current_floor else DOWN)
                if self.state != MOVING:
                    self.log(f"Departing floor {self.current_floor} for floor {target}")
                    self.set_state(MOVING)
            return target

    def _advance_one_floor(self, target: int):
        with self._lock:
            # An alarm during the transit leaves the car where it was
            if self.alarmed or self.state != MOVING:
                return
            self.current_floor += 1 if target > self.current_floor else -1
            self.log(f"Passing floor {self.current_floor}")
            self._report_status()

    def _arrive(self):
        with self._lock:
            floor = self.current_floor
            if self.state == MOVING:
                self.set_state(STOPPED)
            self._pending_stops.remove(floor)
            arrival_direction = self.direction
            hall_directions = self._hall_calls.pop(floor, [])
            self.log(f"Arrived at floor {floor} heading {arrival_direction}")

            # An idle arrival answering hall calls only serves those calls
            if arrival_direction != IDLE or not hall_directions:
                self._notify_arrival(floor, arrival_direction)
            for direction in hall_directions:
                if direction != arrival_direction:
                    self._notify_arrival(floor, direction)

            if hall_directions:
                committed = arrival_direction if arrival_direction in hall_directions else hall_directions[0]
                self.log(f"Answering outside call, next direction {committed}")
                self._update_direction(committed)

            self.open_door()

    def _notify_arrival(self, floor: int, direction: str):
        self.broker.put(f"elevator/{self.name}/arrival", {
            "timestamp": self.env.now,
            "elevator_id": self.elevator_id,
            "floor": floor,
            "direction": direction,
        })
        if self.arrival_handler is not None:
            self.arrival_handler(self.elevator_id, floor, direction)

    def stop(self, cause: str = "shutdown"):
        self.door.cancel(cause)
        super().stop(cause)
