"""
Dispatch Configuration

Control-logic settings only: which allocation strategy assigns hall calls
and how it weighs the candidates.
"""

from dataclasses import dataclass, field
from typing import Dict, Any


@dataclass
class AllocationStrategyConfig:
    """Configuration for hall call allocation strategy"""
    name: str = "LookScoring"
    parameters: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.name:
            raise ValueError("allocation_strategy.name cannot be empty")


@dataclass
class DispatchConfig:
    """Dispatcher configuration"""
    allocation_strategy: AllocationStrategyConfig = field(default_factory=AllocationStrategyConfig)

    @classmethod
    def from_dict(cls, data: dict) -> 'DispatchConfig':
        """Create DispatchConfig from dictionary"""
        dispatch_data = data.get('dispatch', data) or {}

        alloc_data = dispatch_data.get('allocation_strategy', {})
        allocation_strategy = AllocationStrategyConfig(
            name=alloc_data.get('name', 'LookScoring'),
            parameters=alloc_data.get('parameters') or {}
        )
        return cls(allocation_strategy=allocation_strategy)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        return {
            'dispatch': {
                'allocation_strategy': {
                    'name': self.allocation_strategy.name,
                    'parameters': dict(self.allocation_strategy.parameters)
                }
            }
        }

    def validate(self):
        """Validate configuration consistency"""
        if not self.allocation_strategy.name:
            raise ValueError("allocation_strategy.name is required")
        for key, value in self.allocation_strategy.parameters.items():
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise ValueError(f"allocation_strategy parameter '{key}' must be a number")
