"""
Dotted-path field lookup over an event.

Paths are relative to the event's `properties` (`"field2.id"`) unless they
start with a dot, in which case the lookup starts at the event root
(`".anonymousId"`, `".context.library"`).
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from analytics_bridge.errors import InvalidPathError
from analytics_bridge.models.events import Event


def _split(path: str) -> tuple[bool, List[str]]:
    if path is None or not path.strip():
        raise InvalidPathError(path)

    segments = path.split(".")
    from_root = segments[0] == ""
    if from_root:
        segments = segments[1:]

    if not segments or any(not segment.strip() for segment in segments):
        raise InvalidPathError(path)
    return from_root, segments


def validate_path(path: str) -> None:
    """Raise InvalidPathError if `path` is malformed."""
    _split(path)


def resolve(path: str, event: Event) -> Optional[Any]:
    """
    Resolve `path` against `event`.

    Returns None when any segment is missing or null, or when a non-terminal
    segment holds something other than a mapping. Only a malformed path
    raises.
    """
    from_root, segments = _split(path)

    current: Any = event.root() if from_root else event.properties
    for segment in segments:
        if not isinstance(current, Mapping):
            return None
        current = current.get(segment)
        if current is None:
            return None
    return current
