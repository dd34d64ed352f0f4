from __future__ import annotations
SHIPPED = True

from fxbehaviors.effects.rain_art import USES as ART_USES, RainArtEffect
from fxbehaviors.registry import EffectDef, register

USES = [k for k in ART_USES if k != "rain_freeze_chance"]


class RainEffect(RainArtEffect):
    key = "rain"
    uses = USES

    def load_art(self):
        return {}


def register_rain():
    register(EffectDef(
        "rain",
        title="Rain",
        factory=RainEffect,
        uses=USES,
        category="particle",
        description="Falling rain droplets",
        version="1.0.0",
    ))
