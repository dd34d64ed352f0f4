from __future__ import annotations
"""Fixed-tick simulation clock.

Given incoming wall-clock timestamps t (seconds), advances an internal sim_time in fixed dt
steps. Effects only ever see whole ticks, so playback speed never changes what a frame looks
like; a slow terminal drops renders, not simulation steps.
"""

class SimClock:
    def __init__(self, fixed_dt: float = 1.0/20.0, max_steps: int = 10):
        self.fixed_dt = max(1e-4, float(fixed_dt))
        self.max_steps = max(1, int(max_steps))
        self.sim_time = 0.0
        self.ticks = 0
        self._last_t = None
        self._accum = 0.0

    @classmethod
    def for_fps(cls, fps: float, max_steps: int = 10) -> "SimClock":
        return cls(1.0 / max(1.0, float(fps)), max_steps=max_steps)

    def reset(self):
        self.sim_time = 0.0
        self.ticks = 0
        self._last_t = None
        self._accum = 0.0

    def step_to(self, t: float) -> int:
        """Advance clock toward timestamp t. Returns number of fixed steps executed."""
        t = float(t)
        if self._last_t is None:
            self._last_t = t
            return 0
        # Time went backwards (clock swap, suspend): start over rather than replay.
        if t < self._last_t:
            self._last_t = t
            self._accum = 0.0
            return 0
        dt_real = t - self._last_t
        self._last_t = t
        if dt_real > 0.5:
            # clamp huge jumps to avoid spiral; still deterministic
            dt_real = 0.5
        self._accum += dt_real
        steps = 0
        while self._accum >= self.fixed_dt and steps < self.max_steps:
            self._accum -= self.fixed_dt
            self.sim_time += self.fixed_dt
            steps += 1
        if steps >= self.max_steps:
            self._accum = 0.0
        self.ticks += steps
        return steps

    def until_next(self) -> float:
        """Seconds of accumulated slack still missing before the next tick is due."""
        return max(0.0, self.fixed_dt - self._accum)
