from __future__ import annotations
SHIPPED = True

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from fxbehaviors.effect_base import EffectBase
from fxbehaviors.registry import EffectDef, register
from fxruntime.entities_v1 import EntityV1, parse_text_block

USES = [
    "matrix_freeze_chance", "matrix_streak_min", "matrix_streak_max",
    "matrix_speed_min", "matrix_speed_max", "matrix_spawn_chance",
    "matrix_initial_per_col", "matrix_max_per_col",
]

CHARSET = (
    "0123456789"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
    "αβγδεζηθικλμνξοπρστυφχψω"
    "АБВГДЕЖЗИЙКЛМНОПРСТУФХЦЧШЩ"
    "░▒▓█▀▄▌▐■□▪▫"
)


@dataclass
class Streak:
    x: int
    y: int
    length: int
    speed: int
    counter: int = 0
    glyphs: List[str] = field(default_factory=list)


class MatrixArtEffect(EffectBase):
    """Digital rain; streak heads crossing the art crystallise it in place."""

    key = "matrix-art"
    uses = USES

    def build(self) -> None:
        self.palette = self.ctx.palette("matrix")
        self.art = self.load_art()
        for e in self.art.values():
            e.visible = False
        self.streaks: List[Streak] = []
        for _ in range(self.width * int(self.params["matrix_initial_per_col"])):
            self.streaks.append(self._new_streak(-self.rng.intn(self.height)))
        self.compositor.add_layer("streaks", self._draw_streaks)
        self.compositor.add_layer("frozen", self._draw_frozen)

    def load_art(self) -> Dict[Tuple[int, int], EntityV1]:
        return {(e.ox, e.oy): e for e in parse_text_block(self.ctx.text, self.width, self.height)}

    def rewind(self) -> None:
        # Unfreeze the art but keep the rain falling.
        for e in self.art.values():
            e.restore(visible=False)

    def _new_streak(self, y: int) -> Streak:
        p = self.params
        length = self.rng.randint(int(p["matrix_streak_min"]), int(p["matrix_streak_max"]))
        s = Streak(
            x=self.rng.intn(self.width),
            y=y,
            length=length,
            speed=self.rng.randint(int(p["matrix_speed_min"]), int(p["matrix_speed_max"])),
        )
        s.glyphs = [self.rng.choice(CHARSET) for _ in range(length)]
        return s

    def head_color(self) -> str:
        return self.palette[-1]

    def trail_color(self, i: int, length: int) -> str:
        fade = i / float(max(1, length))
        if fade < 0.2:
            return self.palette[-1]
        if fade < 0.5 and len(self.palette) > 2:
            return self.palette[-2]
        return self.palette[0]

    def advance(self) -> None:
        p = self.params
        freeze = float(p["matrix_freeze_chance"]) if self.art else 0.0
        alive: List[Streak] = []
        for s in self.streaks:
            s.counter += 1
            if s.counter >= s.speed:
                s.counter = 0
                s.y += 1
                s.glyphs.insert(0, self.rng.choice(CHARSET))
                s.glyphs.pop()
                art = self.art.get((s.x, s.y))
                if art is not None and not art.visible and self.rng.rand() < freeze:
                    art.visible = True
                    art.color = self.head_color()
            if s.y - s.length > self.height:
                continue
            alive.append(s)
        self.streaks = alive

        cap = self.width * int(p["matrix_max_per_col"])
        chance = float(p["matrix_spawn_chance"])
        while len(self.streaks) < cap and self.rng.rand() < chance:
            self.streaks.append(self._new_streak(-self.rng.intn(10)))

    def _draw_streaks(self, canvas) -> None:
        for s in self.streaks:
            for i in range(s.length):
                y = s.y - i
                if 0 <= y < self.height:
                    color = self.head_color() if i == 0 else self.trail_color(i, s.length)
                    canvas.put(s.x, y, s.glyphs[i], color)

    def _draw_frozen(self, canvas) -> None:
        for e in self.art.values():
            e.draw(canvas)

    def frozen_count(self) -> int:
        return sum(1 for e in self.art.values() if e.visible)

    def extra_snapshot(self):
        return {"streaks": len(self.streaks), "frozen": self.frozen_count(), "art_cells": len(self.art)}


def register_matrix_art():
    register(EffectDef(
        "matrix-art",
        title="Matrix Art",
        factory=MatrixArtEffect,
        uses=USES,
        requires_text=True,
        category="text",
        description="Matrix rain revealing ASCII art",
        version="1.0.0",
    ))
