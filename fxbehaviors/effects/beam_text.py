from __future__ import annotations
SHIPPED = True

from typing import List

from fxbehaviors.effects.beams import USES as BEAM_USES, BeamsEffect
from fxbehaviors.registry import EffectDef, register
from fxruntime.compositor_v1 import CompositorV1
from fxruntime.entities_v1 import EntityV1, parse_text_block, text_extent

USES = BEAM_USES + ["beam_auto_size"]


class BeamTextEffect(BeamsEffect):
    """Beams reveal the text; the diagonal wipe brightens it to the final gradient."""

    key = "beam-text"
    uses = USES
    fade_steps = 5
    brighten = True

    def build(self) -> None:
        if self.params.get("beam_auto_size") and self.ctx.text:
            w, h = text_extent(self.ctx.text)
            self.width = max(1, w)
            self.height = max(1, h)
            self.compositor = CompositorV1(self.width, self.height)
        super().build()

    def make_entities(self) -> List[EntityV1]:
        return parse_text_block(self.ctx.text, self.width, self.height, mode="block")

    def final_stops(self) -> List[str]:
        return self.ctx.colors("final_colors", "gradient")


def register_beam_text():
    register(EffectDef(
        "beam-text",
        title="Beam Text",
        factory=BeamTextEffect,
        uses=USES,
        requires_text=True,
        category="text",
        description="Light beams revealing ASCII art",
        version="1.0.0",
    ))
