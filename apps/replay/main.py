"""
Entrypoint for the replay service.

Reads JSON-lines events from a file (or stdin) and dispatches them through
the analytics destination:

    python -m apps.replay.main data/events.jsonl
"""

from __future__ import annotations

import argparse
import sys
from typing import IO, Optional, Sequence

from analytics_bridge.base import BaseService
from analytics_bridge.config import AppConfig
from analytics_bridge.errors import BridgeError
from apps.replay.bootstrap import build_integration
from apps.replay.config import ReplaySettings, get_replay_settings
from apps.replay.reader import EventReader


class ReplayService(BaseService):
    """
    Replays recorded events through an AdobeIntegration.

    Events that violate the destination protocol (e.g. a video event with no
    active session) are logged and counted as failed; the run continues.
    """

    def __init__(
        self,
        replay: ReplaySettings,
        config: Optional[AppConfig] = None,
        stream: Optional[IO[str]] = None,
    ) -> None:
        super().__init__("replay", config=config)
        self.replay = replay
        self.integration = build_integration(self.config, replay)
        self.reader = EventReader()
        self._stream = stream

        self.dispatched: int = 0
        self.skipped: int = 0
        self.failed: int = 0

    async def start(self) -> None:
        if self._stream is not None:
            self._replay(self._stream)
        elif self.replay.input_path:
            with open(self.replay.input_path, encoding="utf-8") as stream:
                self._replay(stream)
        else:
            self._replay(sys.stdin)

    def _replay(self, stream: IO[str]) -> None:
        self.logger.info("Replay started.", extra={"input_path": self.replay.input_path})
        for event in self.reader.iter_events(stream):
            try:
                kind = self.integration.dispatch(event)
            except BridgeError:
                self.failed += 1
                self.logger.exception(
                    "Event could not be translated.",
                    extra={"event_type": event.type.value, "event_name": event.name},
                )
                continue
            if kind is None:
                self.skipped += 1
            else:
                self.dispatched += 1

    async def shutdown(self) -> None:
        self.integration.flush()
        self.logger.info(
            "Replay finished.",
            extra={
                "read": self.reader.read,
                "invalid": self.reader.invalid,
                "dispatched": self.dispatched,
                "skipped": self.skipped,
                "failed": self.failed,
            },
        )


def main(argv: Optional[Sequence[str]] = None) -> None:
    """
    Main entrypoint for the replay service.
    """
    parser = argparse.ArgumentParser(description="Replay JSON-lines events into the analytics destination.")
    parser.add_argument("path", nargs="?", help="Events file; overrides REPLAY__INPUT_PATH.")
    args = parser.parse_args(argv)

    replay = get_replay_settings()
    if args.path:
        replay = replay.model_copy(update={"input_path": args.path})

    ReplayService(replay).run_sync()


if __name__ == "__main__":
    main()
