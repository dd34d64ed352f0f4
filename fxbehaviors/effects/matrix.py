from __future__ import annotations
SHIPPED = True

from fxbehaviors.effects.matrix_art import USES as ART_USES, MatrixArtEffect
from fxbehaviors.registry import EffectDef, register

USES = [k for k in ART_USES if k != "matrix_freeze_chance"]


class MatrixEffect(MatrixArtEffect):
    """Plain digital rain. Any text in the context is ignored."""

    key = "matrix"
    uses = USES

    def load_art(self):
        return {}


def register_matrix():
    register(EffectDef(
        "matrix",
        title="Matrix",
        factory=MatrixEffect,
        uses=USES,
        category="particle",
        description="Classic Matrix digital rain effect",
        version="1.0.0",
    ))
