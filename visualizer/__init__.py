"""
Elevator Dispatch Visualizer

HTTP/JSON surface for status displays and operator controls.
"""

from .http_server import create_app

__all__ = ['create_app']
