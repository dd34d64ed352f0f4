from __future__ import annotations
SHIPPED = True

import math
from typing import List

from fxbehaviors.effect_base import EffectBase
from fxbehaviors.registry import EffectDef, register
from fxruntime.entities_v1 import EntityV1, bbox, parse_text_block
from fxruntime.interp_v1 import (
    bezier_control,
    bezier_point,
    build_gradient,
    direction_ratio,
    in_expo,
    in_out_cubic,
    lerp_point,
    out_expo,
    pick,
    polar,
)
from fxruntime.phase_machine_v1 import PhaseMachineV1, PhaseV1

USES = [
    "bh_static_ticks", "bh_forming_ticks", "bh_consuming_ticks", "bh_collapsing_ticks",
    "bh_exploding_ticks", "bh_returning_ticks", "bh_hold_ticks", "bh_radius_ratio",
    "bh_rotation", "bh_final_steps", "bh_gradient_direction", "final_colors",
]

BORDER_GLYPH = "●"
UNSTABLE_GLYPHS = "◦◎◉●"
STAR_GLYPHS = "*·•∗⋆✦✧✶✷✸✹"
STAR_MIN = 200
STAR_SPREAD = 200
SWALLOW_RATIO = 0.3


class BlackholeEffect(EffectBase):
    """A rotating singularity forms, swallows the text, collapses and explodes.

    Phases: static -> forming -> consuming -> collapsing -> exploding ->
    returning -> hold. Without text a field of random stars is consumed instead.
    """

    key = "blackhole"
    uses = USES

    def build(self) -> None:
        p = self.params
        self.cx = self.width / 2.0
        self.cy = self.height / 2.0
        min_dim = float(min(self.width, self.height))
        self.radius = min(max(min_dim * float(p["bh_radius_ratio"]), 3.0), float(max(self.width, self.height)))

        star_colors = self.ctx.palette("beam")
        self.hole_color = star_colors[0]
        self.star_colors = star_colors
        self.star_gradient = build_gradient(star_colors, 100)
        self.static_gradient = build_gradient(self.ctx.palette("gradient"), 100)
        self.final_gradient = build_gradient(self.ctx.colors("final_colors", "gradient"), int(p["bh_final_steps"]))

        if self.ctx.text:
            self.entities = parse_text_block(self.ctx.text, self.width, self.height, mode="lines")
        else:
            self.entities = self._stars()
        self.box = bbox(self.entities)
        self.order: List[int] = [e.eid for e in self.entities]
        self.rng.shuffle(self.order)
        self.border = self._make_border()
        self._restart()

        self.pm = PhaseMachineV1(
            [
                PhaseV1("static", ticks=int(p["bh_static_ticks"])),
                PhaseV1("forming", ticks=int(p["bh_forming_ticks"]), on_tick=self._tick_forming),
                PhaseV1("consuming", until=self._swallowed, on_tick=self._tick_consuming),
                PhaseV1("collapsing", ticks=int(p["bh_collapsing_ticks"]), on_tick=self._tick_collapsing),
                PhaseV1("exploding", ticks=int(p["bh_exploding_ticks"]), on_enter=self._enter_exploding,
                        on_tick=self._tick_exploding),
                PhaseV1("returning", ticks=int(p["bh_returning_ticks"]), on_tick=self._tick_returning),
                PhaseV1("hold", ticks=int(p["bh_hold_ticks"])),
            ],
            display=self.display,
            on_loop=self._restart,
            owner=self.key,
        )
        self.compositor.add_layer("border", self._draw_border)
        self.compositor.add_layer("chars", self._draw_chars)

    def _stars(self) -> List[EntityV1]:
        out: List[EntityV1] = []
        for i in range(STAR_MIN + self.rng.intn(STAR_SPREAD)):
            e = EntityV1(
                eid=i,
                glyph=self.rng.choice(STAR_GLYPHS),
                ox=self.rng.intn(self.width),
                oy=self.rng.intn(self.height),
            )
            e.state["star_color"] = self.rng.choice(self.static_gradient)
            out.append(e)
        return out

    def _make_border(self) -> List[EntityV1]:
        n = max(20, int(self.radius * 3))
        delay_step = max(10, 100 // n)
        out: List[EntityV1] = []
        for i in range(n):
            b = EntityV1(eid=i, glyph=BORDER_GLYPH, ox=int(self.cx), oy=int(self.cy))
            b.state["base_angle"] = (i / float(n)) * 2.0 * math.pi
            b.state["delay"] = i * delay_step
            out.append(b)
        return out

    def _static_color(self, e: EntityV1) -> str:
        if "star_color" in e.state:
            return e.state["star_color"]
        ratio = direction_ratio(e.ox, e.oy, self.box, "horizontal", (self.cx, self.cy))
        return pick(self.static_gradient, ratio)

    def _final_index(self, e: EntityV1) -> int:
        ratio = direction_ratio(e.ox, e.oy, self.box, str(self.params["bh_gradient_direction"]), (self.cx, self.cy))
        return int(ratio * (len(self.final_gradient) - 1))

    def _scatter(self, e: EntityV1) -> None:
        angle = self.rng.rand() * 2.0 * math.pi
        dist = self.radius * (0.5 + self.rng.rand())
        sx, sy = polar(self.cx, self.cy, dist, angle)
        e.state["scatter"] = (
            min(max(sx, 0.0), float(self.width - 1)),
            min(max(sy, 0.0), float(self.height - 1)),
        )

    def _restart(self) -> None:
        self.consumed = 0
        self.pull = 0.0
        for e in self.entities:
            star = e.state.get("star_color")
            e.restore(visible=True)
            if star is not None:
                e.state["star_color"] = star
            e.color = self._static_color(e)
            e.state["consumed"] = False
            self._scatter(e)
        for b in self.border:
            angle = b.state["base_angle"]
            delay = b.state["delay"]
            b.restore(visible=False, color=self.hole_color)
            b.state["angle"] = angle
            b.state["base_angle"] = angle
            b.state["delay"] = delay
            b.x, b.y = polar(self.cx, self.cy, self.radius, angle)

    def rewind(self) -> None:
        self._restart()
        self.pm.reset()

    # ---------- phases ----------

    def _orbit(self, radius: float) -> None:
        for b in self.border:
            b.x, b.y = polar(self.cx, self.cy, radius, b.state["angle"])

    def _tick_forming(self, ticks: int) -> None:
        self._orbit(self.radius)
        for b in self.border:
            if ticks >= b.state["delay"]:
                b.visible = True

    def _tick_consuming(self, ticks: int) -> None:
        progress = min(1.0, ticks / float(self.params["bh_consuming_ticks"]))
        self._orbit(self.radius)
        self.pull = progress

        for _ in range(1 + int(progress * 6)):
            if self.consumed >= len(self.order):
                break
            e = self.entities[self.order[self.consumed]]
            e.state["consumed"] = True
            e.state["control"] = bezier_control(e.origin, (self.cx, self.cy))
            self.consumed += 1

        t = in_expo(progress)
        for e in self.entities:
            if not e.state["consumed"]:
                continue
            e.x, e.y = bezier_point(e.origin, e.state["control"], (self.cx, self.cy), t)
            if math.hypot(e.x - self.cx, e.y - self.cy) / self.radius < SWALLOW_RATIO:
                e.visible = False

    def _swallowed(self) -> bool:
        # Every glyph is marked and the pull has reached the center.
        return self.consumed >= len(self.order) and self.pull >= 1.0

    def _tick_collapsing(self, ticks: int) -> None:
        progress = min(1.0, ticks / float(self.params["bh_collapsing_ticks"]))
        self._orbit(self.radius * (1.0 - progress))
        for b in self.border:
            if self.rng.rand() < 0.1:
                b.cur_glyph = self.rng.choice(UNSTABLE_GLYPHS)
            if self.rng.rand() < 0.05:
                b.color = self.rng.choice(self.star_colors)

    def _enter_exploding(self) -> None:
        for b in self.border:
            b.visible = False
        for e in self.entities:
            e.visible = True
            e.x, e.y = self.cx, self.cy

    def _tick_exploding(self, ticks: int) -> None:
        progress = min(1.0, ticks / float(self.params["bh_exploding_ticks"]))
        t = out_expo(progress)
        n = len(self.star_gradient)
        for i, e in enumerate(self.entities):
            e.x, e.y = lerp_point((self.cx, self.cy), e.state["scatter"], t)
            e.color = self.star_gradient[int((progress + i * 0.1) * n) % n]

    def _tick_returning(self, ticks: int) -> None:
        t = in_out_cubic(min(1.0, ticks / float(self.params["bh_returning_ticks"])))
        for e in self.entities:
            e.x, e.y = lerp_point(e.state["scatter"], e.origin, t)
            e.color = self.final_gradient[int(t * self._final_index(e))]

    # ---------- frame ----------

    def advance(self) -> None:
        rot = float(self.params["bh_rotation"])
        for b in self.border:
            b.state["angle"] = (b.state["angle"] + rot) % (2.0 * math.pi)
        self.pm.step()

    def _draw_border(self, canvas) -> None:
        for b in self.border:
            b.draw(canvas)

    def _draw_chars(self, canvas) -> None:
        for e in self.entities:
            e.draw(canvas)

    def extra_snapshot(self):
        return {
            "entities": len(self.entities),
            "consumed": self.consumed,
            "pull": round(self.pull, 3),
            "radius": round(self.radius, 3),
            "border": len(self.border),
        }


def register_blackhole():
    register(EffectDef(
        "blackhole",
        title="Blackhole",
        factory=BlackholeEffect,
        uses=USES,
        category="abstract",
        description="Singularity consuming text (or stars) and exploding it back",
        version="1.0.0",
    ))
