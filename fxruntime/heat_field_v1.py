"""Heat field runtime (HeatField V1).

A cellular automaton over a width x height grid of integer heat values used by
the fire-style effects.

Design goals:
- Deterministic given the injected RNG (no module-level randomness).
- Heat *moves*: each tick every hot cell pushes its (decayed) value one row up
  into a fresh buffer; collisions keep the max. Without ignition the total
  heat of the field can only go down.
- The top rows form a hard-limit band that is always zero. Below it a fade
  zone applies extra decay so flames thin out before the band.
- Masked cells never hold heat.

Typical usage inside an effect:

    field = HeatFieldV1(HeatConfig(width=w, height=h), rng)
    field.ignite(0.5)
    field.step()
    field.draw(canvas, glyphs=" ░▒▓█", palette=palette)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence


@dataclass
class HeatConfig:
    width: int
    height: int
    hmax: int = 65
    max_decay: int = 3
    hard_limit_ratio: float = 0.1
    fade_zone_ratio: float = 0.15
    fade_extra_decay: int = 2
    min_visible: int = 5


class HeatFieldV1:
    def __init__(self, cfg: HeatConfig, rng):
        self.cfg = cfg
        self.rng = rng
        self.w = max(1, int(cfg.width))
        self.h = max(1, int(cfg.height))
        self.hmax = max(1, int(cfg.hmax))
        self.data: List[int] = [0] * (self.w * self.h)
        self.mask: Optional[List[bool]] = None
        self.hard_rows = 0
        self.fade_rows = 0
        self._bands()

    def _bands(self) -> None:
        h = self.h
        if h <= 1:
            # A single row is the source row; nothing above it to limit.
            self.hard_rows = 0
            self.fade_rows = 0
            return
        hard = max(1, int(math.ceil(h * float(self.cfg.hard_limit_ratio))))
        self.hard_rows = min(h - 1, hard)
        fade = int(math.ceil(h * float(self.cfg.fade_zone_ratio)))
        self.fade_rows = max(0, min(fade, h - 1 - self.hard_rows))

    def _idx(self, x: int, y: int) -> int:
        return y * self.w + x

    def in_hard_band(self, y: int) -> bool:
        return 0 <= y < self.hard_rows

    def in_fade_zone(self, y: int) -> bool:
        return self.hard_rows <= y < self.hard_rows + self.fade_rows

    def is_masked(self, x: int, y: int) -> bool:
        if self.mask is None:
            return False
        return bool(self.mask[self._idx(x, y)])

    # ---------- mutation ----------

    def clear(self) -> None:
        self.data[:] = [0] * (self.w * self.h)

    def set_mask(self, mask: Optional[Sequence[bool]]) -> None:
        if mask is None:
            self.mask = None
            return
        m = [bool(v) for v in mask][: self.w * self.h]
        if len(m) < self.w * self.h:
            m.extend([False] * (self.w * self.h - len(m)))
        self.mask = m
        self._enforce()

    def get(self, x: int, y: int) -> int:
        if x < 0 or y < 0 or x >= self.w or y >= self.h:
            return 0
        return self.data[self._idx(x, y)]

    def set(self, x: int, y: int, v: int) -> bool:
        """Write heat at (x, y). Returns False when the write is rejected."""
        if x < 0 or y < 0 or x >= self.w or y >= self.h:
            return False
        if self.in_hard_band(y) or self.is_masked(x, y):
            return False
        self.data[self._idx(x, y)] = max(0, min(self.hmax, int(v)))
        return True

    def ignite(self, chance: float = 0.5, *, row: Optional[int] = None) -> int:
        """Re-seed the source row; returns the number of cells lit."""
        y = self.h - 1 if row is None else int(row)
        lit = 0
        for x in range(self.w):
            if self.rng.rand() < chance:
                if self.set(x, y, self.hmax):
                    lit += 1
        return lit

    def seed_gradient(self) -> None:
        """Fill the whole field with a bottom-to-top heat ramp."""
        for y in range(self.h):
            v = int(self.hmax * (y + 1) / float(self.h))
            for x in range(self.w):
                self.set(x, y, v)

    def step(self) -> None:
        cfg = self.cfg
        nxt = [0] * (self.w * self.h)
        max_decay = max(0, int(cfg.max_decay))
        for y in range(self.h - 1, -1, -1):
            ty = y - 1
            for x in range(self.w):
                heat = self.data[self._idx(x, y)]
                if heat <= 0 or self.is_masked(x, y):
                    continue
                decay = self.rng.randint(0, max_decay)
                offset = self.rng.randint(0, 3)
                if ty < 0 or self.in_hard_band(ty):
                    continue
                if self.in_fade_zone(ty):
                    decay += int(cfg.fade_extra_decay)
                tx = min(self.w - 1, max(0, x + 1 - offset))
                if self.is_masked(tx, ty):
                    continue
                v = max(0, heat - decay)
                ti = self._idx(tx, ty)
                if v > nxt[ti]:
                    nxt[ti] = v
        self.data = nxt
        self._enforce()

    def _enforce(self) -> None:
        for y in range(self.hard_rows):
            base = y * self.w
            for x in range(self.w):
                self.data[base + x] = 0
        if self.mask is not None:
            for i, m in enumerate(self.mask):
                if m:
                    self.data[i] = 0

    def resize(self, width: int, height: int) -> None:
        self.w = max(1, int(width))
        self.h = max(1, int(height))
        self.data = [0] * (self.w * self.h)
        self.mask = None
        self._bands()

    # ---------- queries ----------

    def total(self) -> int:
        return sum(self.data)

    def band_total(self) -> int:
        return sum(self.data[: self.hard_rows * self.w])

    def glyph_index(self, heat: int, n: int) -> int:
        if n <= 0:
            return 0
        i = int(heat) * (n - 1) // self.hmax
        return max(0, min(n - 1, i))

    def draw(self, canvas, *, glyphs: str, palette: Sequence[str]) -> None:
        if not glyphs:
            return
        floor = int(self.cfg.min_visible)
        for y in range(min(self.h, canvas.h)):
            for x in range(min(self.w, canvas.w)):
                heat = self.data[self._idx(x, y)]
                if heat < floor:
                    continue
                ch = glyphs[self.glyph_index(heat, len(glyphs))]
                if ch == " ":
                    continue
                color = palette[self.glyph_index(heat, len(palette))] if palette else None
                canvas.put(x, y, ch, color)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "w": self.w,
            "h": self.h,
            "hmax": self.hmax,
            "hard_rows": self.hard_rows,
            "fade_rows": self.fade_rows,
            "total": self.total(),
        }
