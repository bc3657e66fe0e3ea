"""
Configuration management package

Provides configuration classes for the dispatcher and the simulation.
"""

from .dispatch import (
    DispatchConfig,
    AllocationStrategyConfig
)

from .simulation import (
    SimulationConfig,
    BuildingConfig,
    ElevatorConfig,
    DoorConfig
)

from .config_loader import (
    ConfigLoader,
    load_dispatch_config,
    load_simulation_config,
    save_dispatch_config,
    save_simulation_config
)

__all__ = [
    # Dispatch
    'DispatchConfig',
    'AllocationStrategyConfig',

    # Simulation
    'SimulationConfig',
    'BuildingConfig',
    'ElevatorConfig',
    'DoorConfig',

    # Loader
    'ConfigLoader',
    'load_dispatch_config',
    'load_simulation_config',
    'save_dispatch_config',
    'save_simulation_config',
]
