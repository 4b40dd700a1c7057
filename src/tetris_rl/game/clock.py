from __future__ import annotations

import logging
import queue
from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol

from .core import GameView, TetrisGame

logger = logging.getLogger(__name__)


class RenderSink(Protocol):
    def render(self, view: GameView) -> None: ...


@dataclass
class GravityClock:
    """Turns elapsed milliseconds into a number of due gravity steps."""

    interval_ms: int = 500
    _pending_ms: float = field(default=0.0, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {self.interval_ms}")

    def advance(self, elapsed_ms: float) -> int:
        if elapsed_ms <= 0:
            return 0
        self._pending_ms += elapsed_ms
        due = int(self._pending_ms // self.interval_ms)
        self._pending_ms -= due * self.interval_ms
        return due

    def reset(self) -> None:
        self._pending_ms = 0.0


class GameDriver:
    """Single point of mutation for a TetrisGame.

    ``submit`` may be called from any thread; queued commands and due gravity
    steps are only applied inside ``update``, on the caller's thread.
    """

    def __init__(
        self,
        game: TetrisGame,
        clock: Optional[GravityClock] = None,
        sinks: Optional[List[RenderSink]] = None,
    ) -> None:
        self.game = game
        self.clock = clock or GravityClock()
        self.sinks: List[RenderSink] = list(sinks or [])
        self._commands: "queue.Queue[Any]" = queue.Queue()

    def add_sink(self, sink: RenderSink) -> None:
        self.sinks.append(sink)

    def submit(self, command: Any) -> None:
        self._commands.put(command)

    def update(self, elapsed_ms: float) -> int:
        """Apply queued input, then due gravity. Returns the number of state events."""
        events = 0
        while True:
            try:
                command = self._commands.get_nowait()
            except queue.Empty:
                break
            if self.game.apply(command) is not None:
                events += 1
                self.publish()
        ticks = self.clock.advance(elapsed_ms)
        if ticks > 1:
            logger.debug("catching up %d gravity steps", ticks)
        for _ in range(ticks):
            if self.game.game_over:
                break
            self.game.tick()
            events += 1
            self.publish()
        return events

    def publish(self) -> None:
        view = self.game.snapshot()
        for sink in self.sinks:
            sink.render(view)
