"""
JSON-lines event reader.

Each non-blank line is validated as an `Event`. Lines that are not valid
JSON or do not match the event model are logged and counted, never fatal.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from pydantic import ValidationError

from analytics_bridge.models.events import Event
from analytics_bridge.observability import get_logger

logger = get_logger(__name__)


class EventReader:
    """Iterates the valid events of a JSON-lines stream."""

    def __init__(self) -> None:
        self.read: int = 0
        self.invalid: int = 0

    def iter_events(self, lines: Iterable[str]) -> Iterator[Event]:
        for line_no, line in enumerate(lines, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                event = Event.model_validate_json(line)
            except ValidationError as exc:
                self.invalid += 1
                logger.warning(
                    "Skipping invalid event line.",
                    extra={"line_no": line_no, "errors": exc.errors(include_url=False)},
                )
                continue
            self.read += 1
            yield event
