"""
ElevatorSystem

Wires the dispatch core to a real-time SimPy environment running in a
background thread, for drivers (console, HTTP API) that live in other
threads.
"""

import threading
from typing import Any, Callable, Optional

from analyzer.event_recorder import EventRecorder
from config.dispatch import DispatchConfig
from config.simulation import SimulationConfig
from simulator.infrastructure.command_queue import CommandQueue
from simulator.infrastructure.message_broker import MessageBroker
from simulator.infrastructure.realtime_env import RealtimeEnvironment
from .dispatcher import Dispatcher


class ElevatorSystem:
    """
    Runtime container: environment, broker, dispatcher and command inbox.

    Driver threads must go through call() (or submit()) for anything that
    changes state; read-only snapshots can use dispatcher.get_status()
    directly.
    """
    def __init__(self, sim_config: Optional[SimulationConfig] = None,
                 dispatch_config: Optional[DispatchConfig] = None,
                 verbose: bool = False, record_events: bool = False):
        self.sim_config = sim_config or SimulationConfig.default()
        self.env = RealtimeEnvironment(speed_factor=self.sim_config.realtime_factor)
        self.broker = MessageBroker(self.env, verbose=verbose)
        self.recorder: Optional[EventRecorder] = None
        if record_events:
            self.recorder = EventRecorder(self.env, self.broker.get_broadcast_pipe())
            self.recorder.set_simulation_metadata(self.sim_config.to_dict())
        self.dispatcher = Dispatcher(self.env, self.broker, self.sim_config, dispatch_config)
        self.commands = CommandQueue(self.env, poll_interval=self.sim_config.command_poll_interval)
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        """Start the simulation thread."""
        if self.running:
            return
        self.dispatcher.start()
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self.env.run_until_stopped, args=(self._stop_event,),
            name="elevator-simulation", daemon=True
        )
        self._thread.start()

    def submit(self, func: Callable[..., Any], *args, **kwargs):
        return self.commands.submit(func, *args, **kwargs)

    def call(self, func: Callable[..., Any], *args, timeout: Optional[float] = 5.0, **kwargs) -> Any:
        """Run func inside the simulation thread and return its result."""
        if not self.running:
            raise RuntimeError("Elevator system is not running")
        return self.commands.call(func, *args, timeout=timeout, **kwargs)

    def stop(self, timeout: float = 5.0):
        """Interrupt the control loops, then stop the simulation thread."""
        if not self.running:
            return
        self.commands.call(self.dispatcher.shutdown, timeout=timeout)
        # Interrupts land on later steps; one more round trip lets them finish
        self.commands.call(lambda: None, timeout=timeout)
        self._stop_event.set()
        self._thread.join(timeout=timeout)
        self.commands.cancel_pending()
