from __future__ import annotations
SHIPPED = True

from dataclasses import dataclass
from typing import Dict, List, Tuple

from fxbehaviors.effect_base import EffectBase
from fxbehaviors.registry import EffectDef, register
from fxruntime.entities_v1 import EntityV1, parse_text_block

USES = [
    "rain_freeze_chance", "rain_respawn_chance", "rain_speed_min",
    "rain_speed_max", "rain_drop_divisor", "rain_max_per_col",
]

DROP_GLYPHS = "|⋮║¦┆┊╎╏▏▎▍▌▋▊▉"


@dataclass
class Drop:
    x: int
    y: int
    speed: int
    glyph: str
    color: str


class RainArtEffect(EffectBase):
    """Rain; a drop landing on an art cell freezes there in its own color."""

    key = "rain-art"
    uses = USES

    def build(self) -> None:
        self.palette = self.ctx.palette("rain")
        self.art = self.load_art()
        for e in self.art.values():
            e.visible = False
        self.drops: List[Drop] = [
            self._new_drop(-self.rng.intn(self.height))
            for _ in range(self.width // int(self.params["rain_drop_divisor"]))
        ]
        self.compositor.add_layer("drops", self._draw_drops)
        self.compositor.add_layer("frozen", self._draw_frozen)

    def load_art(self) -> Dict[Tuple[int, int], EntityV1]:
        return {(e.ox, e.oy): e for e in parse_text_block(self.ctx.text, self.width, self.height)}

    def rewind(self) -> None:
        for e in self.art.values():
            e.restore(visible=False)

    def _new_drop(self, y: int) -> Drop:
        p = self.params
        return Drop(
            x=self.rng.intn(self.width),
            y=y,
            speed=self.rng.randint(int(p["rain_speed_min"]), int(p["rain_speed_max"])),
            glyph=self.rng.choice(DROP_GLYPHS),
            color=self.rng.choice(self.palette),
        )

    def advance(self) -> None:
        p = self.params
        freeze = float(p["rain_freeze_chance"]) if self.art else 0.0
        alive: List[Drop] = []
        for d in self.drops:
            art = self.art.get((d.x, d.y))
            if art is not None and not art.visible and self.rng.rand() < freeze:
                art.visible = True
                art.color = d.color
                continue
            d.y += d.speed
            if d.y >= self.height:
                fresh = self._new_drop(-self.rng.intn(10))
                d.x, d.y, d.speed, d.glyph, d.color = fresh.x, fresh.y, fresh.speed, fresh.glyph, fresh.color
            alive.append(d)
        self.drops = alive

        cap = self.width * int(p["rain_max_per_col"])
        chance = float(p["rain_respawn_chance"])
        while len(self.drops) < cap and self.rng.rand() < chance:
            self.drops.append(self._new_drop(-self.rng.intn(10)))

    def _draw_drops(self, canvas) -> None:
        for d in self.drops:
            canvas.put(d.x, d.y, d.glyph, d.color)

    def _draw_frozen(self, canvas) -> None:
        for e in self.art.values():
            e.draw(canvas)

    def frozen_count(self) -> int:
        return sum(1 for e in self.art.values() if e.visible)

    def extra_snapshot(self):
        return {"drops": len(self.drops), "frozen": self.frozen_count(), "art_cells": len(self.art)}


def register_rain_art():
    register(EffectDef(
        "rain-art",
        title="Rain Art",
        factory=RainArtEffect,
        uses=USES,
        requires_text=True,
        category="text",
        description="Rain revealing ASCII art",
        version="1.0.0",
    ))
