from __future__ import annotations
"""Terminal player: drives one effect live in the alternate screen.

Design goals:
- Pacing comes from a monotonic clock feeding a fixed-tick SimClock, so the effect advances
  at ``fps`` ticks per second no matter how long a render takes.
- The terminal size is polled every frame; a change resizes the effect (full rebuild).
- Rendering is the effect's own ANSI text wrapped with ``Text.from_ansi``.
"""

import shutil
import time
from typing import Callable, Optional, Tuple

from rich.console import Console
from rich.live import Live
from rich.text import Text

from fxapp import crash_reporter, log_buffer
from fxpreview.sim_clock import SimClock

SizeFn = Callable[[], Tuple[int, int]]


def terminal_size() -> Tuple[int, int]:
    ts = shutil.get_terminal_size(fallback=(80, 24))
    return (max(1, ts.columns), max(1, ts.lines))


class Player:
    def __init__(self, effect, *, fps: float = 20.0, max_ticks: int = 0,
                 console: Optional[Console] = None, size_fn: SizeFn = terminal_size):
        self.effect = effect
        self.fps = max(1.0, float(fps))
        self.max_ticks = max(0, int(max_ticks))
        self.console = console or Console()
        self.size_fn = size_fn
        self.clock = SimClock.for_fps(self.fps)
        self.size = (effect.width, effect.height)
        self.frames_drawn = 0

    def frame(self) -> Text:
        return Text.from_ansi(self.effect.render(), no_wrap=True, end="")

    def check_resize(self) -> bool:
        size = self.size_fn()
        if size == self.size:
            return False
        self.size = size
        self.effect.resize(*size)
        log_buffer.push(f"[player] resize -> {size[0]}x{size[1]}")
        return True

    def done(self) -> bool:
        return self.max_ticks > 0 and self.clock.ticks >= self.max_ticks

    def run(self) -> int:
        """Play until ``max_ticks`` (0 = forever) or Ctrl-C. Returns ticks simulated."""
        crash_reporter.watch(self.effect)
        self.check_resize()
        dt = 1.0 / self.fps
        next_frame = time.monotonic()
        self.clock.step_to(next_frame)
        log_buffer.push(f"[player] start {self.effect.key} {self.size[0]}x{self.size[1]} @ {self.fps:g} fps")
        with Live(self.frame(), console=self.console, refresh_per_second=self.fps,
                  screen=True, transient=False, auto_refresh=False) as live:
            try:
                while not self.done():
                    now = time.monotonic()
                    for _ in range(self.clock.step_to(now)):
                        self.effect.step()
                        if self.done():
                            break
                    self.check_resize()
                    live.update(self.frame(), refresh=True)
                    self.frames_drawn += 1

                    next_frame += dt
                    sleep_for = next_frame - time.monotonic()
                    if sleep_for > 0:
                        time.sleep(sleep_for)
                    else:
                        # Behind: skip the sleep but don't try to catch up renders.
                        next_frame = time.monotonic()
            except KeyboardInterrupt:
                log_buffer.push("[player] interrupted")
        log_buffer.push(f"[player] stop ticks={self.clock.ticks} frames={self.frames_drawn}")
        return self.clock.ticks
