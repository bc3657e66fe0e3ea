"""
Shared state vocabulary for cars, doors and hall calls.

Directions and car states travel through status messages as plain strings,
so every component compares against these constants.
"""

# Travel directions
UP = "UP"
DOWN = "DOWN"
IDLE = "IDLE"

HALL_CALL_DIRECTIONS = (UP, DOWN)

# Car / door states
MOVING = "MOVING"
STOPPED = "STOPPED"
DOOR_OPENING = "DOOR_OPENING"
DOOR_OPENED = "DOOR_OPENED"
DOOR_CLOSING = "DOOR_CLOSING"

DOOR_STATES = (DOOR_OPENING, DOOR_OPENED, DOOR_CLOSING)
CAR_STATES = (MOVING, STOPPED) + DOOR_STATES


def opposite(direction: str) -> str:
    """Return the reverse travel direction (IDLE stays IDLE)."""
    if direction == UP:
        return DOWN
    if direction == DOWN:
        return UP
    return IDLE
