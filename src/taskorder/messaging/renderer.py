import sys
import json
from typing import TextIO, Optional
from datetime import datetime, timezone

from .bus import MessageStore

LOG_LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
}


def level_value(level: str) -> int:
    return LOG_LEVELS.get(level.upper(), 20)


def for_display(kwargs: dict) -> dict:
    """Flattens message data that templates show as text, such as cycle paths."""
    if "cycle" in kwargs:
        kwargs = dict(kwargs, cycle=" -> ".join(kwargs["cycle"]))
    return kwargs


class CliRenderer:
    """
    Renders messages as human-readable text lines.
    """

    def __init__(
        self,
        store: MessageStore,
        stream: Optional[TextIO] = None,
        min_level: str = "INFO",
    ):
        self._store = store
        self._stream = stream if stream is not None else sys.stderr
        self._min_level_val = level_value(min_level)

    def render(self, msg_id: str, level: str, **kwargs):
        if level_value(level) < self._min_level_val:
            return
        print(self._store.get(msg_id, **for_display(kwargs)), file=self._stream)


class JsonRenderer:
    """
    Renders messages as structured, JSON-formatted lines.

    `data` keeps the raw message fields (a cycle stays a list of ids). When a
    store is given, each record also carries the rendered `message` text.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        min_level: str = "INFO",
        store: Optional[MessageStore] = None,
    ):
        self._store = store
        self._stream = stream if stream is not None else sys.stderr
        self._min_level_val = level_value(min_level)

    def render(self, msg_id: str, level: str, **kwargs):
        if level_value(level) < self._min_level_val:
            return

        log_record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level.upper(),
            "event_id": msg_id,
            "data": kwargs,
        }
        if self._store is not None:
            log_record["message"] = self._store.get(msg_id, **for_display(kwargs))

        def default_serializer(o):
            """Handle non-serializable objects gracefully."""
            return repr(o)

        print(json.dumps(log_record, default=default_serializer), file=self._stream)
