from typing import Callable, Dict, List

import simpy


class MessageBroker:
    """
    Mediates communication between components within the simulation.
    Implements a topic-based publish-subscribe model.

    Two kinds of observers are supported:
    - SimPy processes that wait on a topic pipe (get()) or on the global
      broadcast pipe.
    - Plain callables registered with subscribe(), invoked synchronously on
      every publish. Listeners must not call back into the publisher.
    """
    def __init__(self, env: simpy.Environment, verbose: bool = False):
        """
        Args:
            env (simpy.Environment): SimPy environment
            verbose (bool): Print every publish to stdout
        """
        self.env = env
        self.verbose = verbose
        self.topics: Dict[str, simpy.Store] = {}  # Store per subscribed topic
        self.broadcast_pipe = None  # Created on first get_broadcast_pipe()
        self._listeners: List[Callable[[str, dict], None]] = []

    def get_pipe(self, topic: str) -> simpy.Store:
        """
        Get or create a communication pipe (Store) for the specified topic
        """
        if topic not in self.topics:
            self.topics[topic] = simpy.Store(self.env)
        return self.topics[topic]

    def put(self, topic: str, message):
        """
        Publish (put) a message to the specified topic

        Topic pipes are only fed once somebody asked for them, so topics
        without a SimPy subscriber do not accumulate messages.
        """
        if self.verbose:
            print(f"{self.env.now:.2f} [Broker] Publish on '{topic}': {message}")
        if self.broadcast_pipe is not None:
            self.broadcast_pipe.put({'topic': topic, 'message': message})
        for listener in list(self._listeners):
            listener(topic, message)
        pipe = self.topics.get(topic)
        if pipe is None:
            return None
        return pipe.put(message)

    def get(self, topic: str):
        """
        Wait to receive (get) a message from the specified topic
        """
        pipe = self.get_pipe(topic)
        return pipe.get()

    def subscribe(self, listener: Callable[[str, dict], None]):
        """Register a synchronous listener called as listener(topic, message)."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[[str, dict], None]):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def get_broadcast_pipe(self) -> simpy.Store:
        """
        Returns the global broadcast pipe carrying {'topic', 'message'} for
        every publish (used by the event recorder)
        """
        if self.broadcast_pipe is None:
            self.broadcast_pipe = simpy.Store(self.env)
        return self.broadcast_pipe

    def get_current_time(self) -> float:
        """
        Current simulation time, so controllers can timestamp messages
        without depending on the SimPy environment directly.
        """
        return self.env.now
