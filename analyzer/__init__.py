"""
Elevator System Analyzer

Observers that consume the notifications published by the dispatch core.

Components:
- EventRecorder: records every broker publish, exportable as JSON Lines
"""

__version__ = "0.1.0"

from .event_recorder import EventRecorder

__all__ = ['EventRecorder']
