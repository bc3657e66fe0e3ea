import json
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union


class EventRecorder:
    """
    Receives every publish from the broker's broadcast pipe and records it
    as an independent "recorder".

    This is the observer side of the notification fan-out: stop-added
    syncs, arrivals, door events, alarms, hall-button lights and dispatcher
    decisions all end up here in publish order. The log can be written as
    JSON Lines for offline inspection.
    """
    def __init__(self, env, broadcast_pipe, max_events: Optional[int] = None):
        self.env = env
        self.broadcast_pipe = broadcast_pipe
        self.max_events = max_events
        self.event_log: List[dict] = []
        self.simulation_metadata = {}
        self._process = self.env.process(self.start_listening())

    def set_simulation_metadata(self, metadata: dict):
        """
        Args:
            metadata (dict): Simulation configuration (num_floors, elevators, etc.)
        """
        self.simulation_metadata = {
            "format_version": "1.0",
            "timestamp": datetime.now().isoformat(),
            "config": metadata
        }

    def start_listening(self):
        while True:
            data = yield self.broadcast_pipe.get()
            self._add_event_log(data.get('topic', ''), data.get('message', {}))

    def _add_event_log(self, topic: str, message):
        self.event_log.append({
            "time": self.env.now,
            "topic": topic,
            "data": message
        })
        if self.max_events is not None and len(self.event_log) > self.max_events:
            del self.event_log[0]

    def events(self, topic_prefix: str = "") -> List[dict]:
        """Recorded events whose topic starts with topic_prefix."""
        return [event for event in self.event_log if event["topic"].startswith(topic_prefix)]

    def events_matching(self, suffix: str) -> List[dict]:
        """Recorded events whose topic ends with suffix (e.g. '/stop_added')."""
        return [event for event in self.event_log if event["topic"].endswith(suffix)]

    def save_jsonl(self, file_path: Union[str, Path]) -> Path:
        """Write metadata (first line) and every event as JSON Lines."""
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, 'w', encoding='utf-8') as f:
            if self.simulation_metadata:
                f.write(json.dumps({"type": "metadata", "data": self.simulation_metadata}) + "\n")
            for event in self.event_log:
                f.write(json.dumps(event, default=str) + "\n")
        print(f"{self.env.now:.2f} [EventRecorder] Saved {len(self.event_log)} events to {file_path}")
        return file_path
