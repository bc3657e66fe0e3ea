#!/usr/bin/env python3
"""
HTTP Server for the elevator dispatch core
Exposes live status for displays and the operator controls as a JSON API
"""
import argparse

from flask import Flask, jsonify, request
from flask_cors import CORS

from simulator.errors import InvalidRequest, NoAvailableElevator


def _direct_execute(func, *args, **kwargs):
    return func(*args, **kwargs)


def create_app(dispatcher, execute=None):
    """
    Build the Flask app around a dispatcher.

    Args:
        dispatcher: Dispatcher whose state is served
        execute: Callable used to run state-changing operations, called as
            execute(func, *args). Pass ElevatorSystem.call when the
            simulation runs in another thread; defaults to a direct call.
    """
    execute = execute or _direct_execute

    app = Flask(__name__)
    CORS(app)  # Enable CORS for all routes

    @app.errorhandler(InvalidRequest)
    def handle_invalid_request(error):
        return jsonify({'error': str(error)}), 400

    @app.errorhandler(NoAvailableElevator)
    def handle_no_available_elevator(error):
        return jsonify({'error': str(error), 'floor': error.floor, 'direction': error.direction}), 503

    def _json_body():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise InvalidRequest("Request body must be a JSON object")
        return data

    def _direction(value):
        if not isinstance(value, str):
            raise InvalidRequest("direction must be 'up' or 'down'")
        return value.upper()

    @app.route('/api/status')
    def get_status():
        """Per-elevator, per-floor and system-wide status"""
        return jsonify(dispatcher.get_status())

    @app.route('/api/elevators/<int:elevator_id>')
    def get_elevator(elevator_id):
        return jsonify(dispatcher.get_elevator(elevator_id).get_status())

    @app.route('/api/hall_calls', methods=['POST'])
    def press_hall_button():
        """Hall button press: {"floor": 4, "direction": "up"}"""
        data = _json_body()
        floor = data.get('floor')
        direction = _direction(data.get('direction'))
        assigned = execute(dispatcher.press_hall_button, floor, direction)
        return jsonify({
            'floor': floor,
            'direction': direction,
            'assigned_elevator': assigned,
            'already_pending': assigned is None
        })

    @app.route('/api/elevators/<int:elevator_id>/stops', methods=['POST'])
    def add_stop(elevator_id):
        """In-cab floor button: {"floor": 7}"""
        data = _json_body()
        floor = data.get('floor')
        added = execute(dispatcher.add_stop, elevator_id, floor)
        return jsonify({'elevator_id': elevator_id, 'floor': floor, 'added': added})

    @app.route('/api/elevators/<int:elevator_id>/door/<action>', methods=['POST'])
    def operate_door(elevator_id, action):
        if action == 'open':
            accepted = execute(dispatcher.open_door, elevator_id)
        elif action == 'close':
            accepted = execute(dispatcher.close_door, elevator_id)
        else:
            raise InvalidRequest(f"Unknown door action '{action}', use open or close")
        return jsonify({'elevator_id': elevator_id, 'action': action, 'accepted': accepted})

    @app.route('/api/elevators/<int:elevator_id>/alarm', methods=['POST', 'DELETE'])
    def alarm(elevator_id):
        if request.method == 'POST':
            changed = execute(dispatcher.trigger_alarm, elevator_id)
        else:
            changed = execute(dispatcher.reset_alarm, elevator_id)
        return jsonify({
            'elevator_id': elevator_id,
            'alarmed': request.method == 'POST',
            'changed': changed
        })

    return app


def main():
    from config import load_dispatch_config, load_simulation_config
    from controller.system import ElevatorSystem

    parser = argparse.ArgumentParser(description="Elevator dispatch HTTP API")
    parser.add_argument('--config', help="Simulation config YAML")
    parser.add_argument('--dispatch-config', help="Dispatch config YAML")
    parser.add_argument('--host', default='localhost')
    parser.add_argument('--port', type=int, default=5000)
    args = parser.parse_args()

    sim_config = load_simulation_config(args.config) if args.config else None
    dispatch_config = load_dispatch_config(args.dispatch_config) if args.dispatch_config else None

    system = ElevatorSystem(sim_config, dispatch_config)
    system.start()
    app = create_app(system.dispatcher, execute=system.call)
    try:
        app.run(host=args.host, port=args.port, threaded=True)
    finally:
        system.stop()


if __name__ == '__main__':
    main()
