import itertools
from abc import ABC, abstractmethod
from typing import Optional

import simpy


class Entity(ABC):
    """
    Abstract base class for entities that run as SimPy processes.

    The constructor registers run() with the environment, so the process
    starts at the next simulation step. Subclasses set up their own fields
    right after calling super().__init__().
    """
    # Entity ID counter shared across all class instances
    _entity_id_counter = itertools.count()

    def __init__(self, env: simpy.Environment, name: Optional[str] = None):
        """
        Args:
            env: The SimPy environment this entity belongs to.
            name: Entity name. Auto-generated from class name and ID when omitted.
        """
        self.env = env
        self.entity_id: int = next(self._entity_id_counter)
        self.name: str = name if name is not None else f"{self.__class__.__name__}_{self.entity_id}"

        # Concrete classes replace this with their own initial state
        self.state: str = "initial_state"

        self._started = False
        self._stop_requested = False
        self._process = self.env.process(self._main())

        self.log(f'Entity created ({self.__class__.__name__}, ID:{self.entity_id})')

    @abstractmethod
    def run(self):
        """
        Generator holding the entity's behaviour.

        Typically an infinite loop that inspects the current state and
        yields timeouts to advance simulation time.
        """
        pass

    def _main(self):
        self._started = True
        if self._stop_requested:
            return
        try:
            yield from self.run()
        except simpy.Interrupt as interrupt:
            self.log(f"Process stopped ({interrupt.cause})")

    # --- Common utility methods ---

    def log(self, message: str):
        """Print a trace line stamped with the simulation time."""
        print(f"{self.env.now:.2f} [{self.name}] {message}")

    def set_state(self, new_state: str):
        """Transition the entity's state, notifying the change hook."""
        if self.state != new_state:
            old_state = self.state
            self.state = new_state
            self._on_state_changed(old_state, new_state)

    def get_state(self) -> str:
        return self.state

    def _on_state_changed(self, old_state: str, new_state: str):
        """Hook for subclasses; logs the transition by default."""
        self.log(f"State: {old_state} -> {new_state}")

    def stop(self, cause: str = "shutdown"):
        """Interrupt the entity's process, ending run() cleanly."""
        if not self._started:
            self._stop_requested = True
            return
        if self._process.is_alive:
            self._process.interrupt(cause)

    @property
    def process(self) -> simpy.Process:
        """SimPy process object running this entity."""
        return self._process
