from typing import Dict

import simpy

from .constants import UP, DOWN, IDLE
from .hall_button import HallButton
from ..errors import InvalidRequest
from ..infrastructure.message_broker import MessageBroker


class Floor:
    """
    Hall-call state of one floor.

    Holds one HallButton per available direction: the top floor has no UP
    button and the bottom floor no DOWN button. A floor knows nothing about
    scheduling; the dispatcher forwards new calls and reports arrivals.
    """
    def __init__(self, env: simpy.Environment, floor_number: int, num_floors: int, broker: MessageBroker):
        if not (1 <= floor_number <= num_floors):
            raise ValueError(f"floor_number must be between 1 and {num_floors}")
        self.env = env
        self.floor_number = floor_number
        self.buttons: Dict[str, HallButton] = {}
        if floor_number < num_floors:
            self.buttons[UP] = HallButton(env, floor_number, UP, broker)
        if floor_number > 1:
            self.buttons[DOWN] = HallButton(env, floor_number, DOWN, broker)

    @property
    def up_pressed(self) -> bool:
        return self.has_button(UP) and self.buttons[UP].is_lit()

    @property
    def down_pressed(self) -> bool:
        return self.has_button(DOWN) and self.buttons[DOWN].is_lit()

    def has_button(self, direction: str) -> bool:
        return direction in self.buttons

    def press_up_button(self) -> bool:
        return self.press(UP)

    def press_down_button(self) -> bool:
        return self.press(DOWN)

    def press(self, direction: str) -> bool:
        """
        Returns:
            True if a new hall call was registered, False if already pending
        """
        button = self.buttons.get(direction)
        if button is None:
            raise InvalidRequest(f"Floor {self.floor_number} has no {direction} button")
        return button.press()

    def elevator_arrived(self, direction: str, elevator_name: str = None):
        """Clear the call(s) served by a car arriving with the given direction."""
        if direction in (UP, IDLE) and UP in self.buttons:
            self.buttons[UP].serve(elevator_name)
        if direction in (DOWN, IDLE) and DOWN in self.buttons:
            self.buttons[DOWN].serve(elevator_name)

    def get_status(self) -> dict:
        return {
            "floor": self.floor_number,
            "up_pressed": self.up_pressed,
            "down_pressed": self.down_pressed,
            "has_up_button": self.has_button(UP),
            "has_down_button": self.has_button(DOWN),
        }
