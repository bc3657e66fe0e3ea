"""
Interactive console for the elevator dispatch core.

The simulation runs in a background thread on a real-time SimPy
environment; each console command is handed to it through the command
queue.
"""
import argparse
import sys
from typing import Callable, List, Optional, Tuple

from config import load_dispatch_config, load_simulation_config
from controller.system import ElevatorSystem
from simulator.core.constants import UP, DOWN
from simulator.errors import ElevatorError

HELP_TEXT = """Commands:
  request <floor> <up|down>   Press a hall call button
  press <elevator> <floor>    Press a floor button inside an elevator
  open <elevator>             Open the elevator door
  close <elevator>            Close the elevator door
  alarm <elevator>            Trigger the elevator alarm
  reset <elevator>            Reset the elevator alarm
  status                      Show elevators and pending hall calls
  help                        Show this help
  exit                        Quit"""

DIRECTIONS = {'up': UP, 'down': DOWN}
ELEVATOR_VERBS = ('open', 'close', 'alarm', 'reset')


def parse_command(line: str) -> Tuple[str, List]:
    """
    Parse a console line into (verb, arguments).

    Raises:
        ValueError: Unknown verb or malformed arguments
    """
    parts = line.split()
    if not parts:
        raise ValueError("Empty command")
    verb = parts[0].lower()
    args = parts[1:]

    def _int(value: str, what: str) -> int:
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"{what} must be a number, got '{value}'") from None

    if verb == 'request':
        if len(args) != 2:
            raise ValueError("Syntax: request <floor> <up|down>")
        direction = DIRECTIONS.get(args[1].lower())
        if direction is None:
            raise ValueError("Direction must be 'up' or 'down'")
        return verb, [_int(args[0], "Floor"), direction]
    if verb == 'press':
        if len(args) != 2:
            raise ValueError("Syntax: press <elevator> <floor>")
        return verb, [_int(args[0], "Elevator"), _int(args[1], "Floor")]
    if verb in ELEVATOR_VERBS:
        if len(args) != 1:
            raise ValueError(f"Syntax: {verb} <elevator>")
        return verb, [_int(args[0], "Elevator")]
    if verb in ('status', 'help', 'exit', 'quit'):
        return verb, []
    raise ValueError(f"Unknown command '{verb}'")


def format_status(status: dict) -> str:
    lines = [f"t={status['time']:.2f}s  strategy: {status['strategy']}"]
    if status['all_elevators_alarmed']:
        lines.append("!! All elevators are alarmed, hall calls cannot be served")
    for elevator in status['elevators']:
        stops = ", ".join(str(floor) for floor in elevator['pending_stops']) or "-"
        alarm = "  [ALARM]" if elevator['alarmed'] else ""
        lines.append(
            f"  {elevator['name']}: floor {elevator['current_floor']:>2}  {elevator['direction']:<4}  "
            f"{elevator['door_state']:<12}  stops: {stops}{alarm}"
        )
    calls = []
    for floor in status['floors']:
        if floor['up_pressed']:
            calls.append(f"{floor['floor']}{UP}")
        if floor['down_pressed']:
            calls.append(f"{floor['floor']}{DOWN}")
    lines.append(f"  Hall calls: {', '.join(calls) if calls else '-'}")
    return "\n".join(lines)


class CommandInterpreter:
    """
    Executes parsed console commands against a dispatcher.

    Args:
        dispatcher: Dispatcher to drive
        execute: Runs a state-changing call, as execute(func, *args);
            ElevatorSystem.call when the simulation runs in its own thread
    """
    def __init__(self, dispatcher, execute: Optional[Callable] = None):
        self.dispatcher = dispatcher
        self.execute = execute or (lambda func, *args: func(*args))

    def handle(self, line: str) -> str:
        try:
            verb, args = parse_command(line)
        except ValueError as exc:
            return f"Error: {exc}"

        try:
            return self._dispatch(verb, args)
        except ElevatorError as exc:
            return f"Rejected: {exc}"

    def _dispatch(self, verb: str, args: List) -> str:
        d = self.dispatcher
        if verb == 'request':
            floor, direction = args
            assigned = self.execute(d.press_hall_button, floor, direction)
            if assigned is None:
                return f"Floor {floor} {direction} call already pending"
            return f"Floor {floor} {direction} call assigned to Elevator_{assigned}"
        if verb == 'press':
            elevator_id, floor = args
            added = self.execute(d.add_stop, elevator_id, floor)
            return f"Elevator_{elevator_id}: stop at floor {floor} " + ("added" if added else "ignored")
        if verb in ELEVATOR_VERBS:
            (elevator_id,) = args
            operation = {
                'open': d.open_door,
                'close': d.close_door,
                'alarm': d.trigger_alarm,
                'reset': d.reset_alarm,
            }[verb]
            accepted = self.execute(operation, elevator_id)
            return f"Elevator_{elevator_id}: {verb} " + ("done" if accepted else "ignored")
        if verb == 'status':
            return format_status(d.get_status())
        if verb == 'help':
            return HELP_TEXT
        return ""


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument('--config', help="Simulation config YAML (default: built-in 20 floors / 5 cars)")
    parser.add_argument('--dispatch-config', help="Dispatch config YAML")
    parser.add_argument('--speed', type=float, help="Override realtime_factor (1.0 = real time)")
    parser.add_argument('--verbose', action='store_true', help="Print every broker publish")
    parser.add_argument('--record', help="Write the event log to this JSON Lines file on exit")
    args = parser.parse_args(argv)

    print("--- Loading Configuration ---")
    sim_config = load_simulation_config(args.config) if args.config else None
    dispatch_config = load_dispatch_config(args.dispatch_config) if args.dispatch_config else None

    system = ElevatorSystem(sim_config, dispatch_config, verbose=args.verbose, record_events=bool(args.record))
    if args.speed is not None:
        system.env.set_speed(args.speed)
    system.start()

    interpreter = CommandInterpreter(system.dispatcher, execute=system.call)
    print(HELP_TEXT)
    try:
        while True:
            try:
                line = input("\n> ").strip()
            except EOFError:
                break
            if not line:
                continue
            if line.lower() in ('exit', 'quit'):
                break
            print(interpreter.handle(line))
    except KeyboardInterrupt:
        print()
    finally:
        system.stop()
        if system.recorder is not None:
            system.recorder.save_jsonl(args.record)
    print("Elevator system stopped")
    return 0


if __name__ == '__main__':
    sys.exit(main())
