"""
RealtimeEnvironment

A SimPy environment that keeps simulation time in step with wall-clock
time, so elevator movement and door delays are observable by people
driving the system interactively.
"""

import threading
import time

import simpy


class RealtimeEnvironment(simpy.Environment):
    """
    SimPy environment with real-time synchronization.

    Args:
        speed_factor (float): Speed multiplier for simulation
            - 1.0 = real-time (1 sim second = 1 real second)
            - 2.0 = double speed (1 sim second = 0.5 real seconds)
            - 0.0 = no delay (fastest possible, default SimPy behavior)
    """

    def __init__(self, speed_factor=1.0, initial_time=0):
        if speed_factor < 0:
            raise ValueError("speed_factor cannot be negative")
        super().__init__(initial_time=initial_time)
        self.speed_factor = speed_factor
        self.real_start_time = time.time()
        self.sim_start_time = self.now

    def step(self):
        """
        Execute one simulation step, then sleep if the simulation is ahead
        of the wall clock.
        """
        result = super().step()

        if self.speed_factor > 0:
            sim_elapsed = self.now - self.sim_start_time
            target_real_time = self.real_start_time + (sim_elapsed / self.speed_factor)
            sleep_time = target_real_time - time.time()
            if sleep_time > 0:
                time.sleep(sleep_time)

        return result

    def run_until_stopped(self, stop_event: threading.Event):
        """
        Step the simulation until stop_event is set (or nothing is scheduled).

        Meant to be the body of the background simulation thread.
        """
        self.set_speed(self.speed_factor)
        while not stop_event.is_set():
            if self.peek() == float('inf'):
                return
            self.step()

    def set_speed(self, speed_factor):
        """
        Change simulation speed at runtime; timing references are reset so
        the change takes effect from now on.
        """
        self.speed_factor = speed_factor
        self.real_start_time = time.time()
        self.sim_start_time = self.now

    def get_speed(self):
        return self.speed_factor
