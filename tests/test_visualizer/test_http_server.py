"""
HTTP API tests

The app is driven with Flask's test client against a dispatcher on a plain
SimPy environment; operations run directly in the test thread.
"""

import pytest

from controller.dispatcher import Dispatcher
from simulator.core.constants import DOOR_OPENED
from visualizer.http_server import create_app


@pytest.fixture
def dispatcher(env, broker, small_config):
    return Dispatcher(env, broker, small_config)


@pytest.fixture
def client(dispatcher):
    return create_app(dispatcher).test_client()


def test_status(client):
    response = client.get('/api/status')

    assert response.status_code == 200
    data = response.get_json()
    assert len(data['elevators']) == 2
    assert len(data['floors']) == 10
    assert data['all_elevators_alarmed'] is False


def test_single_elevator_status(client):
    response = client.get('/api/elevators/2')
    assert response.get_json()['name'] == "Elevator_2"

    assert client.get('/api/elevators/7').status_code == 400


def test_hall_call(client, dispatcher):
    response = client.post('/api/hall_calls', json={'floor': 4, 'direction': 'up'})

    assert response.status_code == 200
    assert response.get_json() == {
        'floor': 4, 'direction': 'UP', 'assigned_elevator': 1, 'already_pending': False
    }
    assert dispatcher.get_floor(4).up_pressed is True

    again = client.post('/api/hall_calls', json={'floor': 4, 'direction': 'up'})
    assert again.get_json()['already_pending'] is True


@pytest.mark.parametrize("body", [
    {'floor': 0, 'direction': 'up'},
    {'floor': 4, 'direction': 'sideways'},
    {'floor': 4},
    {'floor': '4', 'direction': 'up'},
    {'floor': 10, 'direction': 'up'},
])
def test_hall_call_rejects_invalid_input(client, body):
    response = client.post('/api/hall_calls', json=body)
    assert response.status_code == 400
    assert 'error' in response.get_json()


def test_hall_call_requires_json_object(client):
    response = client.post('/api/hall_calls', data="floor=4", content_type="text/plain")
    assert response.status_code == 400


def test_hall_call_with_every_car_alarmed(client, dispatcher):
    client.post('/api/elevators/1/alarm')
    client.post('/api/elevators/2/alarm')

    response = client.post('/api/hall_calls', json={'floor': 6, 'direction': 'down'})

    assert response.status_code == 503
    assert response.get_json()['floor'] == 6
    assert dispatcher.get_floor(6).down_pressed is True
    assert client.get('/api/status').get_json()['all_elevators_alarmed'] is True


def test_in_cab_stop(client, dispatcher, env):
    response = client.post('/api/elevators/2/stops', json={'floor': 3})

    assert response.get_json()['added'] is True
    env.run(until=5)
    assert dispatcher.get_elevator(2).current_floor == 3
    assert dispatcher.get_elevator(2).state == DOOR_OPENED

    assert client.post('/api/elevators/2/stops', json={'floor': 30}).status_code == 400


def test_door_controls(client, env):
    assert client.post('/api/elevators/1/door/open').get_json()['accepted'] is True
    assert client.post('/api/elevators/1/door/open').get_json()['accepted'] is False
    env.run(until=1.5)
    assert client.post('/api/elevators/1/door/close').get_json()['accepted'] is True

    assert client.post('/api/elevators/1/door/slam').status_code == 400


def test_alarm_trigger_and_reset(client, dispatcher):
    triggered = client.post('/api/elevators/1/alarm').get_json()
    assert triggered == {'elevator_id': 1, 'alarmed': True, 'changed': True}
    assert dispatcher.get_elevator(1).alarmed is True

    reset = client.delete('/api/elevators/1/alarm').get_json()
    assert reset['changed'] is True
    assert dispatcher.get_elevator(1).alarmed is False


def test_operations_go_through_execute(dispatcher):
    calls = []

    def execute(func, *args):
        calls.append(func.__name__)
        return func(*args)

    client = create_app(dispatcher, execute=execute).test_client()
    client.post('/api/hall_calls', json={'floor': 3, 'direction': 'up'})
    client.post('/api/elevators/1/alarm')

    assert calls == ['press_hall_button', 'trigger_alarm']
