"""
Simulator Tests

Tests for the car control loop, doors, floors and the SimPy infrastructure.
"""
