"""
Dispatcher tests

Two cars in a 10-floor building, both starting at floor 1.
"""

import pytest

from config.dispatch import DispatchConfig, AllocationStrategyConfig
from controller.dispatcher import Dispatcher
from simulator.core.constants import UP, DOWN, DOOR_OPENING, DOOR_OPENED
from simulator.errors import InvalidRequest, NoAvailableElevator


@pytest.fixture
def dispatcher(env, broker, small_config):
    return Dispatcher(env, broker, small_config)


def assignments(published):
    return [m for topic, m in published if topic == "dispatcher/assignment"]


class TestAlarmExclusion:
    def test_call_goes_to_the_non_alarmed_car(self, dispatcher):
        dispatcher.trigger_alarm(1)

        for floor in (3, 5, 8):
            assert dispatcher.request_elevator(floor, UP) == 2

    def test_all_alarmed_rejects_without_adding_stops(self, dispatcher, published):
        dispatcher.trigger_alarm(1)
        dispatcher.trigger_alarm(2)
        assert dispatcher.all_elevators_alarmed() is True

        with pytest.raises(NoAvailableElevator) as exc_info:
            dispatcher.request_elevator(5, UP)

        assert exc_info.value.floor == 5
        assert all(elevator.pending_stops == [] for elevator in dispatcher.elevators)
        assert [m['reason'] for topic, m in published if topic == "dispatcher/rejected"] == ["all_elevators_alarmed"]

    def test_rejected_hall_call_stays_lit(self, dispatcher):
        dispatcher.trigger_alarm(1)
        dispatcher.trigger_alarm(2)

        with pytest.raises(NoAvailableElevator):
            dispatcher.press_hall_button(5, DOWN)

        assert dispatcher.get_floor(5).down_pressed is True

    def test_reset_alarm_restores_service(self, dispatcher):
        dispatcher.trigger_alarm(1)
        dispatcher.trigger_alarm(2)
        dispatcher.reset_alarm(2)

        assert dispatcher.all_elevators_alarmed() is False
        assert dispatcher.request_elevator(5, UP) == 2


class TestHallCalls:
    def test_idempotent_press_issues_one_request(self, dispatcher, published):
        assert dispatcher.press_hall_button(6, UP) == 1
        assert dispatcher.press_hall_button(6, UP) is None

        assert dispatcher.get_floor(6).up_pressed is True
        assert len(assignments(published)) == 1

    def test_flag_cleared_by_servicing_car(self, env, dispatcher):
        dispatcher.press_hall_button(4, UP)
        dispatcher.get_floor(4).press(DOWN)  # lit without a request

        env.run(until=10)

        floor = dispatcher.get_floor(4)
        assert floor.up_pressed is False
        assert floor.down_pressed is True
        assert dispatcher.get_elevator(1).current_floor == 4

    def test_hint_direction_clears_its_own_flag(self, env, dispatcher):
        dispatcher.press_hall_button(6, DOWN)

        env.run(until=10)

        assert dispatcher.get_floor(6).down_pressed is False
        assert dispatcher.get_elevator(1).current_floor == 6

    def test_call_at_standing_car_is_served_immediately(self, dispatcher, published):
        assert dispatcher.press_hall_button(1, UP) == 1

        assert dispatcher.get_floor(1).up_pressed is False
        assert dispatcher.get_elevator(1).state == DOOR_OPENING
        assert assignments(published)[0]['served_immediately'] is True

    def test_moving_car_preferred_for_call_on_its_sweep(self, env, dispatcher):
        dispatcher.add_stop(2, 9)
        env.run(until=1.5)  # car 2 is moving up past floor 2

        assert dispatcher.request_elevator(6, UP) == 2

    def test_assignment_commits_call_direction(self, dispatcher):
        dispatcher.request_elevator(7, DOWN)
        elevator = dispatcher.get_elevator(1)

        assert elevator.pending_stops == [7]
        assert elevator.hall_calls == {7: [DOWN]}


class TestHallCallClearing:
    def test_earlier_in_cab_stop_leaves_other_calls_lit(self, env, dispatcher):
        dispatcher.trigger_alarm(2)
        dispatcher.get_floor(3).press(DOWN)  # lit, not yet dispatched

        assert dispatcher.press_hall_button(8, DOWN) == 1
        assert dispatcher.add_stop(1, 3) is True

        env.run(until=100)

        assert dispatcher.get_floor(8).down_pressed is False
        assert dispatcher.get_floor(3).down_pressed is True

    def test_two_calls_on_one_car_are_both_cleared(self, env, dispatcher):
        dispatcher.trigger_alarm(2)

        assert dispatcher.press_hall_button(5, DOWN) == 1
        assert dispatcher.press_hall_button(7, DOWN) == 1

        env.run(until=100)

        assert dispatcher.get_floor(5).down_pressed is False
        assert dispatcher.get_floor(7).down_pressed is False

    def test_call_while_door_closing_is_cleared_on_reopen(self, env, dispatcher):
        dispatcher.trigger_alarm(2)
        dispatcher.open_door(1)
        env.run(until=1.5)
        dispatcher.close_door(1)

        assert dispatcher.press_hall_button(1, UP) == 1
        assert dispatcher.get_floor(1).up_pressed is True

        env.run(until=10)

        assert dispatcher.get_elevator(1).state == DOOR_OPENED
        assert dispatcher.get_floor(1).up_pressed is False


class TestInvalidRequests:
    @pytest.mark.parametrize("floor, direction", [
        (0, UP), (11, DOWN), (5, "SIDEWAYS"), ("5", UP), (True, UP), (3, None),
    ])
    def test_request_elevator(self, dispatcher, published, floor, direction):
        with pytest.raises(InvalidRequest):
            dispatcher.request_elevator(floor, direction)
        assert published == []

    def test_missing_hall_buttons(self, dispatcher):
        with pytest.raises(InvalidRequest):
            dispatcher.press_hall_button(10, UP)
        with pytest.raises(InvalidRequest):
            dispatcher.press_hall_button(1, DOWN)
        assert dispatcher.get_floor(10).up_pressed is False

    def test_car_operations(self, dispatcher):
        with pytest.raises(InvalidRequest):
            dispatcher.add_stop(1, 11)
        with pytest.raises(InvalidRequest):
            dispatcher.add_stop(3, 5)
        with pytest.raises(InvalidRequest):
            dispatcher.open_door(0)
        assert dispatcher.get_elevator(1).pending_stops == []

    def test_invalid_request_is_a_value_error(self, dispatcher):
        with pytest.raises(ValueError):
            dispatcher.get_floor(42)


class TestCarOperations:
    def test_in_cab_button(self, env, dispatcher):
        assert dispatcher.add_stop(2, 5) is True
        assert dispatcher.add_stop(2, 5) is False

        env.run(until=10)

        assert dispatcher.get_elevator(2).current_floor == 5
        assert dispatcher.get_elevator(2).state == DOOR_OPENED
        assert dispatcher.get_elevator(1).current_floor == 1

    def test_door_and_alarm_controls(self, env, dispatcher):
        assert dispatcher.open_door(1) is True
        env.run(until=1.5)
        assert dispatcher.close_door(1) is True
        assert dispatcher.close_door(1) is False

        assert dispatcher.trigger_alarm(1) is True
        assert dispatcher.trigger_alarm(1) is False
        assert dispatcher.reset_alarm(1) is True


def test_status(dispatcher):
    dispatcher.press_hall_button(5, UP)

    status = dispatcher.get_status()

    assert status['num_floors'] == 10
    assert status['all_elevators_alarmed'] is False
    assert [e['elevator_id'] for e in status['elevators']] == [1, 2]
    assert status['elevators'][0]['pending_stops'] == [5]
    assert status['floors'][4] == {
        "floor": 5, "up_pressed": True, "down_pressed": False,
        "has_up_button": True, "has_down_button": True,
    }


def test_lifecycle(env, dispatcher, published):
    dispatcher.start()
    env.run(until=1)
    dispatcher.shutdown()
    env.run(until=2)

    assert all(not elevator.process.is_alive for elevator in dispatcher.elevators)
    events = [m['event'] for topic, m in published if topic == "system/lifecycle"]
    assert events == ["started", "shutdown"]


def test_shutdown_before_first_step(env, dispatcher):
    dispatcher.shutdown()
    env.run(until=1)
    assert all(not elevator.process.is_alive for elevator in dispatcher.elevators)


def test_strategy_from_dispatch_config(env, broker, small_config):
    config = DispatchConfig(AllocationStrategyConfig(parameters={'distance_weight': 1}))
    dispatcher = Dispatcher(env, broker, small_config, config)
    assert dispatcher.strategy.weights['distance_weight'] == 1

    with pytest.raises(ValueError):
        Dispatcher(env, broker, small_config, DispatchConfig(AllocationStrategyConfig(name="Unknown")))
