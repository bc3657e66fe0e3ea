import simpy

from ..infrastructure.message_broker import MessageBroker


class HallButton:
    """
    Elevator hall call button (with state management functionality)

    The light stays on from the first press until an elevator reports
    servicing this floor in this direction; presses in between are no-ops.
    """
    def __init__(self, env: simpy.Environment, floor: int, direction: str, broker: MessageBroker):
        """
        Args:
            env (simpy.Environment): SimPy environment
            floor (int): Floor where the button is installed
            direction (str): 'UP' or 'DOWN'
            broker (MessageBroker): Message broker that mediates communication
        """
        self.env = env
        self.floor = floor
        self.direction = direction
        self.broker = broker
        self.is_pressed = False

    def is_lit(self) -> bool:
        return self.is_pressed

    def press(self) -> bool:
        """
        Light the button.

        Returns:
            True if this press registered a new call, False if already lit
        """
        if self.is_pressed:
            print(f"{self.env.now:.2f} [HallButton] Button at floor {self.floor} ({self.direction}) already lit.")
            return False

        self.is_pressed = True
        print(f"{self.env.now:.2f} [HallButton] Button pressed at floor {self.floor} ({self.direction}). Light ON.")
        self.broker.put(f"hall_button/floor_{self.floor}/new_hall_call", {
            "timestamp": self.env.now,
            "floor": self.floor,
            "direction": self.direction,
        })
        return True

    def serve(self, elevator_name=None) -> bool:
        """Turn the light off once a car services this call.

        Args:
            elevator_name: Name of the elevator that serviced this call

        Returns:
            True if the button was lit
        """
        if not self.is_pressed:
            return False

        self.is_pressed = False
        print(f"{self.env.now:.2f} [HallButton] Call served at floor {self.floor} ({self.direction}). Light OFF.")
        self.broker.put(f"hall_button/floor_{self.floor}/call_off", {
            "timestamp": self.env.now,
            "floor": self.floor,
            "direction": self.direction,
            "action": "OFF",
            "serviced_by": elevator_name
        })
        return True
