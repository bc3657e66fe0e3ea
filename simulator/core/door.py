import simpy

from .constants import DOOR_OPENING, DOOR_OPENED, DOOR_CLOSING, STOPPED


class Door:
    """
    Door mechanism of one car.

    The car decides *whether* a door operation is legal and switches its own
    state to the transitional value; the door then runs the delayed
    completion as a separate SimPy process so neither the caller nor the
    car's control loop is blocked while the door moves.
    """
    def __init__(self, env: simpy.Environment, name: str, open_time=0.5, close_time=0.5,
                 broker=None, elevator_name: str = None, elevator=None):
        if open_time <= 0 or close_time <= 0:
            raise ValueError("door open_time and close_time must be positive")
        self.env = env
        self.name = name
        self.open_time = open_time
        self.close_time = close_time
        self.broker = broker
        self.elevator_name = elevator_name
        self.elevator = elevator  # Reference to parent elevator
        self._transition = None  # Handle to the running open/close process

    def set_broker_and_elevator(self, broker, elevator_name: str, elevator=None):
        """Set MessageBroker, elevator name, and elevator reference after initialization."""
        self.broker = broker
        self.elevator_name = elevator_name
        if elevator is not None:
            self.elevator = elevator

    @property
    def in_transition(self) -> bool:
        return self._transition is not None and self._transition.is_alive

    def begin_opening(self, floor: int):
        """Start the DOOR_OPENING -> DOOR_OPENED completion."""
        self._broadcast_door_event("DOOR_OPENING_START", floor)
        self._start_transition(self.open_time, DOOR_OPENING, DOOR_OPENED, "DOOR_OPENING_COMPLETE", floor)

    def begin_closing(self, floor: int):
        """Start the DOOR_CLOSING -> STOPPED completion."""
        self._broadcast_door_event("DOOR_CLOSING_START", floor)
        self._start_transition(self.close_time, DOOR_CLOSING, STOPPED, "DOOR_CLOSING_COMPLETE", floor)

    def cancel(self, cause: str = "shutdown"):
        """Interrupt an in-flight transition without settling the car state."""
        if self.in_transition and self._transition is not self.env.active_process:
            self._transition.interrupt(cause)

    def _start_transition(self, duration, transitional_state, settled_state, event_type, floor):
        self._transition = self.env.process(
            self._run_transition(duration, transitional_state, settled_state, event_type, floor)
        )

    def _run_transition(self, duration, transitional_state, settled_state, event_type, floor):
        try:
            yield self.env.timeout(duration)
        except simpy.Interrupt:
            return
        # The car may have left the transitional state meanwhile; only settle
        # the transition we started.
        if self.elevator.settle_door(transitional_state, settled_state):
            print(f"{self.env.now:.2f} [{self.name}] {event_type} at floor {floor}")
            self._broadcast_door_event(event_type, floor)

    def _broadcast_door_event(self, event_type: str, floor: int):
        if not self.broker or not self.elevator_name:
            return
        door_event_message = {
            "timestamp": self.env.now,
            "elevator_name": self.elevator_name,
            "door_id": self.name,
            "event_type": event_type,
            "floor": floor
        }
        self.broker.put(f"elevator/{self.elevator_name}/door_events", door_event_message)
