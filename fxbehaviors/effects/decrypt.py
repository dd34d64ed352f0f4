from __future__ import annotations
SHIPPED = True

from typing import List

from fxbehaviors.effect_base import EffectBase
from fxbehaviors.registry import EffectDef, register
from fxruntime.entities_v1 import EntityV1, SceneFrameV1, SceneV1, bbox, parse_text_block
from fxruntime.interp_v1 import WHITE, direction_ratio, lerp_color, pick_stop
from fxruntime.phase_machine_v1 import PhaseMachineV1, PhaseV1

USES = [
    "decrypt_typing_speed", "decrypt_typing_chance", "decrypt_fast_frames",
    "decrypt_cipher_colors", "decrypt_gradient_direction", "decrypt_hold_ticks",
    "final_colors",
]

BLOCKS = "▉▓▒░"
TYPING_FRAME_TICKS = 3
FAST_FRAME_TICKS = 3
SLOW_FRAMES_MAX = 15
DISCOVER_STEPS = 15


def cipher_symbols() -> str:
    """Keyboard, block, box-drawing and latin-extended characters."""
    ranges = ((33, 126), (9608, 9631), (9472, 9599), (174, 451))
    return "".join(chr(c) for lo, hi in ranges for c in range(lo, hi + 1))


CIPHER = cipher_symbols()


class DecryptEffect(EffectBase):
    """Movie-style decryption: text types in as ciphertext, then resolves.

    Phases: typing -> decrypting -> hold. Every character carries its own
    scenes; frame durations differ per character.
    """

    key = "decrypt"
    uses = USES

    def build(self) -> None:
        p = self.params
        self.cipher_colors = list(p["decrypt_cipher_colors"]) or ["#00ff00"]
        self.stops = self.ctx.colors("final_colors", "gradient")
        self.entities = parse_text_block(self.ctx.text, self.width, self.height, mode="lines")
        self.box = bbox(self.entities)
        self.typed = 0
        self._restart()

        self.pm = PhaseMachineV1(
            [
                PhaseV1("typing", until=self._typed_all, on_tick=self._tick_typing),
                PhaseV1("decrypting", until=self._decrypted, on_enter=self._enter_decrypting,
                        on_tick=self._tick_decrypting),
                PhaseV1("hold", ticks=int(p["decrypt_hold_ticks"])),
            ],
            display=self.display,
            on_loop=self._restart,
            owner=self.key,
        )
        self.compositor.add_layer("text", self._draw)

    def _final_color(self, e: EntityV1) -> str:
        ratio = direction_ratio(e.ox, e.oy, self.box, str(self.params["decrypt_gradient_direction"]))
        return pick_stop(self.stops, ratio)

    def _typing_scene(self, color: str) -> SceneV1:
        frames = [SceneFrameV1(b, color, TYPING_FRAME_TICKS) for b in BLOCKS]
        frames.append(SceneFrameV1(self.rng.choice(CIPHER), color, TYPING_FRAME_TICKS))
        return SceneV1("typing", frames)

    def _slow_ticks(self) -> int:
        if self.rng.intn(100) <= 40:
            return 80 + self.rng.intn(100)
        return 10 + self.rng.intn(10)

    def _decrypt_scene(self, e: EntityV1) -> SceneV1:
        color = e.state["cipher_color"]
        frames: List[SceneFrameV1] = [
            SceneFrameV1(self.rng.choice(CIPHER), color, FAST_FRAME_TICKS)
            for _ in range(int(self.params["decrypt_fast_frames"]))
        ]
        for _ in range(1 + self.rng.intn(SLOW_FRAMES_MAX)):
            frames.append(SceneFrameV1(self.rng.choice(CIPHER), color, self._slow_ticks()))
        final = e.state["final_color"]
        for i in range(DISCOVER_STEPS):
            frames.append(SceneFrameV1(e.glyph, lerp_color(WHITE, final, i / float(DISCOVER_STEPS - 1)), FAST_FRAME_TICKS))
        return SceneV1("decrypting", frames)

    def _restart(self) -> None:
        self.typed = 0
        for e in self.entities:
            e.restore(visible=False)
            e.state["cipher_color"] = self.rng.choice(self.cipher_colors)
            e.state["final_color"] = self._final_color(e)

    def rewind(self) -> None:
        self._restart()
        self.pm.reset()

    # ---------- phases ----------

    def _tick_typing(self, _ticks: int) -> None:
        p = self.params
        if self.typed < len(self.entities) and self.rng.rand() < float(p["decrypt_typing_chance"]):
            for _ in range(int(p["decrypt_typing_speed"])):
                if self.typed >= len(self.entities):
                    break
                e = self.entities[self.typed]
                e.visible = True
                e.play(self._typing_scene(e.state["cipher_color"]))
                self.typed += 1
        for e in self.entities:
            if e.visible:
                e.tick_scene()

    def _typed_all(self) -> bool:
        if self.typed < len(self.entities):
            return False
        return not any(e.animating for e in self.entities)

    def _enter_decrypting(self) -> None:
        for e in self.entities:
            e.play(self._decrypt_scene(e))

    def _tick_decrypting(self, _ticks: int) -> None:
        for e in self.entities:
            e.tick_scene()

    def _decrypted(self) -> bool:
        return not any(e.animating for e in self.entities)

    # ---------- frame ----------

    def advance(self) -> None:
        self.pm.step()

    def _draw(self, canvas) -> None:
        for e in self.entities:
            e.draw(canvas)

    def extra_snapshot(self):
        return {
            "entities": len(self.entities),
            "typed": self.typed,
            "decrypting": sum(1 for e in self.entities if e.scene_name() == "decrypting"),
        }


def register_decrypt():
    register(EffectDef(
        "decrypt",
        title="Decrypt",
        factory=DecryptEffect,
        uses=USES,
        requires_text=True,
        category="text",
        description="Movie-style text decryption",
        version="1.0.0",
    ))
