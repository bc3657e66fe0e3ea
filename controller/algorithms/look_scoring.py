"""
LOOK Scoring Strategy

Scores every eligible car against a hall call; the lowest score wins.
Cars already sweeping toward the call in the call's direction are strongly
preferred over idle cars, which in turn beat cars that must reverse.
"""

from typing import Dict, Any, Optional

from simulator.core.constants import UP, DOWN, IDLE, MOVING, STOPPED
from ..interfaces.allocation_strategy import IAllocationStrategy


class LookScoringStrategy(IAllocationStrategy):
    """
    LOOK-aware scoring allocation

    Score (lower = better):
    - Base: distance_weight * |current_floor - call_floor|
    - IDLE car: base only
    - Car moving toward the call (call at or ahead of the car):
      minus same_direction_bonus if the call direction matches the travel
      direction, otherwise minus opposite_direction_bonus
    - Car moving away from the call: plus reversal_penalty, minus
      reversal_match_bonus if the call direction equals the direction the
      car will have after reversing
    - Door/car state: MOVING plus moving_penalty, STOPPED minus
      stopped_bonus, any door transition plus door_busy_penalty
    - Load: plus pending_stop_weight per pending stop

    Ties go to the first car in iteration order (ascending id).
    """

    DEFAULT_WEIGHTS = {
        'distance_weight': 2,
        'same_direction_bonus': 10,
        'opposite_direction_bonus': 5,
        'reversal_penalty': 20,
        'reversal_match_bonus': 2,
        'moving_penalty': 2,
        'stopped_bonus': 2,
        'door_busy_penalty': 5,
        'pending_stop_weight': 3,
    }

    def __init__(self, **weights):
        unknown = set(weights) - set(self.DEFAULT_WEIGHTS)
        if unknown:
            raise ValueError(f"Unknown LookScoring parameters: {', '.join(sorted(unknown))}")
        self.weights = dict(self.DEFAULT_WEIGHTS)
        self.weights.update(weights)

    def calculate_score(self, status: Dict[str, Any], call_floor: int, call_direction: str) -> float:
        """Score one car snapshot against a hall call."""
        w = self.weights
        current_floor = status['current_floor']
        direction = status.get('direction', IDLE)

        score = abs(current_floor - call_floor) * w['distance_weight']

        # An idle car is judged on distance alone
        if direction == IDLE:
            return score

        if direction == UP:
            if call_floor >= current_floor:
                score -= w['same_direction_bonus'] if call_direction == UP else w['opposite_direction_bonus']
            else:
                score += w['reversal_penalty']
                if call_direction == DOWN:
                    score -= w['reversal_match_bonus']
        elif direction == DOWN:
            if call_floor <= current_floor:
                score -= w['same_direction_bonus'] if call_direction == DOWN else w['opposite_direction_bonus']
            else:
                score += w['reversal_penalty']
                if call_direction == UP:
                    score -= w['reversal_match_bonus']

        door_state = status.get('door_state', STOPPED)
        if door_state == MOVING:
            score += w['moving_penalty']
        elif door_state == STOPPED:
            score -= w['stopped_bonus']
        else:
            score += w['door_busy_penalty']

        score += len(status.get('pending_stops', [])) * w['pending_stop_weight']
        return score

    def select_elevator(
        self,
        call_data: Dict[str, Any],
        elevator_statuses: Dict[int, Dict[str, Any]]
    ) -> Optional[int]:
        call_floor = call_data['floor']
        call_direction = call_data['direction']

        best_elevator = None
        best_score = float('inf')

        for elevator_id, status in elevator_statuses.items():
            if not status or status.get('alarmed'):
                continue

            score = self.calculate_score(status, call_floor, call_direction)
            print(f"[Dispatcher] Elevator_{elevator_id}: Floor={status['current_floor']}, "
                  f"Direction={status.get('direction')}, State={status.get('door_state')}, Score={score}")

            if score < best_score:
                best_score = score
                best_elevator = elevator_id

        return best_elevator

    def get_strategy_name(self) -> str:
        return "LOOK Scoring (direction-aware)"
