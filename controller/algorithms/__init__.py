"""Allocation strategy implementations"""

from typing import Dict, Type

from .look_scoring import LookScoringStrategy
from ..interfaces.allocation_strategy import IAllocationStrategy

STRATEGY_REGISTRY: Dict[str, Type[IAllocationStrategy]] = {
    "LookScoring": LookScoringStrategy,
}


def create_allocation_strategy(name: str, parameters: dict = None) -> IAllocationStrategy:
    """Instantiate a registered strategy by its configuration name."""
    cls = STRATEGY_REGISTRY.get(name)
    if cls is None:
        raise ValueError(f"Unknown allocation strategy: {name}. Available: {', '.join(STRATEGY_REGISTRY)}")
    return cls(**(parameters or {}))


__all__ = ['LookScoringStrategy', 'STRATEGY_REGISTRY', 'create_allocation_strategy']
