from __future__ import annotations
SHIPPED = True

import math
from dataclasses import dataclass, field
from typing import List

from fxbehaviors.effect_base import EffectBase
from fxbehaviors.registry import EffectDef, register
from fxruntime.entities_v1 import EntityV1, bbox, parse_text_block
from fxruntime.interp_v1 import (
    build_gradient,
    clamp_index,
    direction_ratio,
    in_out_cubic,
    lerp_point,
    pick,
    polar,
    spiral_point,
    to_polar,
)
from fxruntime.phase_machine_v1 import PhaseMachineV1, PhaseV1

USES = [
    "ring_gap", "ring_spin_min", "ring_spin_max", "ring_static_ticks",
    "ring_disperse_ticks", "ring_transition_ticks", "ring_spin_ticks",
    "ring_spin_cycles", "ring_final_steps", "ring_gradient_direction",
    "ring_hold_ticks", "final_colors",
]

RING_GRADIENT_STEPS = 8
STATIC_GRADIENT_STEPS = 100
TWO_PI = 2.0 * math.pi


@dataclass
class Ring:
    radius: float
    color: str
    speed: float
    clockwise: bool
    gradient: List[str] = field(default_factory=list)
    members: List[int] = field(default_factory=list)


class RingTextEffect(EffectBase):
    """Text swirls out onto concentric spinning rings and back.

    Phases: static -> swirl_to_rings -> spin -> return_to_text -> hold.
    ``spin`` jumps back to ``swirl_to_rings`` until ``ring_spin_cycles`` spins
    have run.
    """

    key = "ring-text"
    uses = USES

    def build(self) -> None:
        p = self.params
        self.cx = self.width / 2.0
        self.cy = self.height / 2.0
        self.final_gradient = build_gradient(self.ctx.colors("final_colors", "gradient"), int(p["ring_final_steps"]))
        self.static_gradient = build_gradient(self.ctx.palette("gradient"), STATIC_GRADIENT_STEPS)

        self.entities = parse_text_block(self.ctx.text, self.width, self.height, mode="lines")
        self.box = bbox(self.entities)
        self.rings: List[Ring] = self._make_rings()
        for i, e in enumerate(self.entities):
            ring_idx = i % len(self.rings)
            e.group_id = ring_idx
            self.rings[ring_idx].members.append(e.eid)
        self.cycle = 0
        self._restart()

        swirl_ticks = int(p["ring_disperse_ticks"]) + 2 * int(p["ring_transition_ticks"])
        self.pm = PhaseMachineV1(
            [
                PhaseV1("static", ticks=int(p["ring_static_ticks"])),
                PhaseV1("swirl_to_rings", ticks=swirl_ticks, on_enter=self._enter_swirl, on_tick=self._tick_swirl),
                PhaseV1("spin", ticks=int(p["ring_spin_ticks"]), on_tick=self._tick_spin, next=self._after_spin),
                PhaseV1("return_to_text", ticks=int(p["ring_transition_ticks"]), on_tick=self._tick_return),
                PhaseV1("hold", ticks=int(p["ring_hold_ticks"])),
            ],
            display=self.display,
            on_loop=self._restart,
            owner=self.key,
        )
        self.swirl_ticks = swirl_ticks
        self.compositor.add_layer("rings", self._draw)

    def _make_rings(self) -> List[Ring]:
        p = self.params
        colors = self.ctx.palette("beam")
        min_dim = float(min(self.width, self.height))
        gap = min_dim * float(p["ring_gap"])
        lo = float(p["ring_spin_min"])
        hi = max(lo, float(p["ring_spin_max"]))
        rings: List[Ring] = []
        radius = gap
        while radius < min_dim / 2.0:
            rings.append(self._ring(radius, colors[len(rings) % len(colors)], lo, hi, len(rings) % 2 == 0))
            radius += gap
        if not rings:
            # Canvas too small for even one gap; keep a single ring so every entity has one.
            rings.append(self._ring(max(gap, 0.5), colors[0], lo, hi, True))
        return rings

    def _ring(self, radius: float, color: str, lo: float, hi: float, clockwise: bool) -> Ring:
        ring = Ring(radius=radius, color=color, speed=self.rng.uniform(lo, hi), clockwise=clockwise)
        ring.gradient = build_gradient([self.final_gradient[0], color], RING_GRADIENT_STEPS)
        return ring

    def _ring_of(self, e: EntityV1) -> Ring:
        return self.rings[e.group_id]

    def _static_color(self, e: EntityV1) -> str:
        ratio = direction_ratio(
            e.ox, e.oy, self.box, str(self.params["ring_gradient_direction"]), (self.cx, self.cy)
        )
        return pick(self.static_gradient, ratio)

    def _restart(self) -> None:
        self.cycle = 0
        for e in self.entities:
            ring_idx = e.group_id
            e.restore(visible=True, color=self._static_color(e))
            e.group_id = ring_idx
            e.state["angle"] = to_polar(self.cx, self.cy, e.ox, e.oy)[1]

    def rewind(self) -> None:
        self._restart()
        self.pm.reset()

    # ---------- phases ----------

    def _enter_swirl(self) -> None:
        for e in self.entities:
            ring = self._ring_of(e)
            r0, a0 = to_polar(self.cx, self.cy, e.x, e.y)
            e.state["origin"] = (max(r0, 0.1), a0)
            e.state["overshoot"] = (
                ring.radius * (2.0 + self.rng.rand()),
                a0 + (self.rng.rand() - 0.5) * math.pi / 4.0,
            )
            e.state["target"] = (ring.radius, e.state["angle"])

    def _tick_swirl(self, ticks: int) -> None:
        progress = min(1.0, ticks / float(self.swirl_ticks))
        for e in self.entities:
            ring = self._ring_of(e)
            radius, angle, stage = spiral_point(
                progress,
                origin=e.state["origin"],
                overshoot=e.state["overshoot"],
                target=e.state["target"],
                clockwise=ring.clockwise,
            )
            e.x, e.y = polar(self.cx, self.cy, radius, angle)
            if stage == 0:
                eased = in_out_cubic(progress / 0.25)
                e.color = ring.gradient[clamp_index(int(eased * (len(ring.gradient) - 1)), len(ring.gradient))]
            else:
                e.color = ring.gradient[-1]
            if progress >= 1.0:
                e.state["angle"] = e.state["target"][1] % TWO_PI

    def _tick_spin(self, _ticks: int) -> None:
        for e in self.entities:
            ring = self._ring_of(e)
            delta = ring.speed if ring.clockwise else -ring.speed
            e.state["angle"] = (e.state["angle"] + delta) % TWO_PI
            e.x, e.y = polar(self.cx, self.cy, ring.radius, e.state["angle"])

    def _after_spin(self) -> str:
        self.cycle += 1
        if self.cycle < int(self.params["ring_spin_cycles"]):
            return "swirl_to_rings"
        return "return_to_text"

    def _tick_return(self, ticks: int) -> None:
        eased = in_out_cubic(min(1.0, ticks / float(self.params["ring_transition_ticks"])))
        for e in self.entities:
            ring = self._ring_of(e)
            on_ring = polar(self.cx, self.cy, ring.radius, e.state["angle"])
            e.x, e.y = lerp_point(on_ring, e.origin, eased)
            n = len(ring.gradient)
            e.color = ring.gradient[clamp_index(n - 1 - int(eased * (n - 1)), n)]

    # ---------- frame ----------

    def advance(self) -> None:
        self.pm.step()

    def _draw(self, canvas) -> None:
        for e in self.entities:
            e.draw(canvas)

    def extra_snapshot(self):
        return {
            "entities": len(self.entities),
            "rings": [round(r.radius, 3) for r in self.rings],
            "cycle": self.cycle,
        }


def register_ring_text():
    register(EffectDef(
        "ring-text",
        title="Ring Text",
        factory=RingTextEffect,
        uses=USES,
        requires_text=True,
        category="text",
        description="Text swirling onto spinning rings and back",
        version="1.0.0",
    ))
