"""
Allocation Strategy Interface

Defines how elevators are selected for hall calls.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional


class IAllocationStrategy(ABC):
    """
    Interface for elevator allocation strategies

    Strategies only see status snapshots, never the cars themselves, so a
    strategy can not mutate elevator state while it deliberates.
    """

    @abstractmethod
    def select_elevator(
        self,
        call_data: Dict[str, Any],
        elevator_statuses: Dict[int, Dict[str, Any]]
    ) -> Optional[int]:
        """
        Select the best elevator for a hall call

        Args:
            call_data: Hall call information
                {
                    'floor': int,              # Call floor
                    'direction': str,          # 'UP' or 'DOWN'
                    'timestamp': float         # Simulation time
                }

            elevator_statuses: Snapshots of the eligible (non-alarmed) cars,
                keyed by elevator id in ascending id order
                {
                    1: {
                        'current_floor': int,
                        'direction': str,          # 'UP', 'DOWN', 'IDLE'
                        'door_state': str,         # 'MOVING', 'STOPPED', 'DOOR_*'
                        'pending_stops': List[int],
                        'alarmed': bool,
                        ...
                    },
                    ...
                }

        Returns:
            Id of the selected elevator, or None if there is no candidate
        """
        pass

    @abstractmethod
    def get_strategy_name(self) -> str:
        """
        Get the name of this strategy (for logging and debugging)
        """
        pass
