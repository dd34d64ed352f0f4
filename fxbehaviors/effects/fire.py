from __future__ import annotations
SHIPPED = True

from fxbehaviors.effect_base import EffectBase
from fxbehaviors.registry import EffectDef, register
from fxruntime.heat_field_v1 import HeatConfig, HeatFieldV1

USES = [
    "fire_ignite_chance", "fire_max_decay", "fire_hard_limit",
    "fire_fade_zone", "fire_fade_decay", "fire_min_visible",
    "fire_seed_gradient",
]

GLYPHS = "░▒▓█"


def heat_config(params: dict, width: int, height: int) -> HeatConfig:
    return HeatConfig(
        width=width,
        height=height,
        max_decay=int(params["fire_max_decay"]),
        hard_limit_ratio=float(params["fire_hard_limit"]),
        fade_zone_ratio=float(params["fire_fade_zone"]),
        fade_extra_decay=int(params["fire_fade_decay"]),
        min_visible=int(params["fire_min_visible"]),
    )


class FireEffect(EffectBase):
    """DOOM-style fire: the bottom row is re-ignited each tick and heat rises."""

    key = "fire"
    uses = USES
    glyphs = GLYPHS

    def build(self) -> None:
        self.palette = self.ctx.palette("fire")
        self.field = HeatFieldV1(heat_config(self.params, self.width, self.height), self.rng)
        self.prepare_field()
        if self.params["fire_seed_gradient"]:
            self.field.seed_gradient()
        else:
            self.field.ignite(1.0)
        self.compositor.add_layer("fire", self._draw)

    def prepare_field(self) -> None:
        pass

    def advance(self) -> None:
        self.field.ignite(float(self.params["fire_ignite_chance"]))
        self.field.step()

    def _draw(self, canvas) -> None:
        self.field.draw(canvas, glyphs=self.glyphs, palette=self.palette)

    def extra_snapshot(self):
        return {"heat": self.field.to_dict()}


def register_fire():
    register(EffectDef(
        "fire",
        title="Fire",
        factory=FireEffect,
        uses=USES,
        category="particle",
        description="Doom-style fire effect",
        version="1.0.0",
    ))
