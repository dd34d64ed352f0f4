from __future__ import annotations
SHIPPED = True

from fxbehaviors.effects.fire import USES, FireEffect
from fxbehaviors.registry import EffectDef, register
from fxruntime.entities_v1 import parse_text_block


class FireTextEffect(FireEffect):
    """Fire that burns around the text; glyph cells are masked cold."""

    key = "fire-text"
    glyphs = " ░░▒▒▓▓█"

    def prepare_field(self) -> None:
        mask = [False] * (self.width * self.height)
        for e in parse_text_block(self.ctx.text, self.width, self.height, mode="block"):
            mask[e.oy * self.width + e.ox] = True
        self.field.set_mask(mask)
        self.masked = sum(1 for m in mask if m)

    def extra_snapshot(self):
        snap = super().extra_snapshot()
        snap["masked_cells"] = self.masked
        return snap


def register_fire_text():
    register(EffectDef(
        "fire-text",
        title="Fire Text",
        factory=FireTextEffect,
        uses=USES,
        requires_text=True,
        category="text",
        description="Fire effect with text as negative space",
        version="1.0.1",
    ))
