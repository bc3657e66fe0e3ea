"""Error conditions raised by the dispatch core."""


class ElevatorError(Exception):
    """Base class for every condition the dispatch core reports to callers."""


class InvalidRequest(ElevatorError, ValueError):
    """Out-of-range floor, unknown elevator id or invalid direction.

    Raised before any state is touched, so a rejected request has no
    scheduling side effect.
    """


class NoAvailableElevator(ElevatorError):
    """Every elevator is alarmed; the hall call could not be assigned."""

    def __init__(self, floor: int, direction: str):
        super().__init__(f"No available elevator for floor {floor} ({direction}): all elevators are alarmed")
        self.floor = floor
        self.direction = direction
