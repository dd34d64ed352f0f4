from __future__ import annotations
SHIPPED = True

from typing import Dict, Tuple

from fxbehaviors.effect_base import EffectBase
from fxbehaviors.registry import EffectDef, register
from fxruntime.entities_v1 import EntityV1, SceneFrameV1, SceneV1, by_id, parse_text_block
from fxruntime.group_scheduler_v1 import GroupSchedulerV1, build_groups
from fxruntime.interp_v1 import get_easing, lerp_color, lerp_point, normalize_hex, pick_stop
from fxruntime.phase_machine_v1 import PhaseMachineV1, PhaseV1

USES = [
    "pour_direction", "pour_speed", "pour_movement_speed", "pour_gap",
    "pour_starting_color", "pour_final_steps", "pour_final_frames",
    "pour_gradient_direction", "pour_easing", "pour_hold_ticks", "final_colors",
]


class PourEffect(EffectBase):
    """Text pours in from one edge, row by row (or column by column).

    Each character eases from the edge to its cell, then fades from the
    starting color to its final color.
    """

    key = "pour"
    uses = USES

    def build(self) -> None:
        p = self.params
        self.direction = str(p["pour_direction"])
        self.easing = get_easing(str(p["pour_easing"]))
        self.start_color = normalize_hex(p["pour_starting_color"])
        self.stops = self.ctx.colors("final_colors", "gradient")

        self.entities = parse_text_block(self.ctx.text, self.width, self.height, mode="block")
        self.ents: Dict[int, EntityV1] = by_id(self.entities)
        for e in self.entities:
            e.state["final_color"] = self._final_color(e.ox, e.oy)
        self._restart()

        vertical = self.direction in ("down", "up")
        groups = build_groups(
            self.entities,
            "row" if vertical else "column",
            self.rng,
            reverse_chance=0.0,
            shuffle=False,
            descending=self.direction in ("up", "left"),
            speed_for=lambda _axis: float(p["pour_speed"]),
        )
        self.sched = GroupSchedulerV1(self.rng, mode="sequential", gap=int(p["pour_gap"]))
        self.sched.add_lane("pour", groups)

        self.pm = PhaseMachineV1(
            [
                PhaseV1("pouring", until=self._poured, on_tick=self._tick_pour),
                PhaseV1("hold", ticks=int(p["pour_hold_ticks"])),
            ],
            display=self.display,
            on_loop=self._restart_groups,
            owner=self.key,
        )
        self.compositor.add_layer("pour", self._draw)

    def _final_color(self, x: int, y: int) -> str:
        if str(self.params["pour_gradient_direction"]) == "vertical":
            ratio = y / float(self.height - 1) if self.height > 1 else 0.0
        else:
            ratio = x / float(self.width - 1) if self.width > 1 else 0.0
        return pick_stop(self.stops, ratio)

    def _start_pos(self, e: EntityV1) -> Tuple[float, float]:
        if self.direction == "down":
            return (float(e.ox), 0.0)
        if self.direction == "up":
            return (float(e.ox), float(self.height - 1))
        if self.direction == "left":
            return (float(self.width - 1), float(e.oy))
        return (0.0, float(e.oy))

    def _restart(self) -> None:
        for e in self.entities:
            final = e.state.get("final_color")
            e.restore(visible=False, color=self.start_color)
            e.state["final_color"] = final
            e.state["progress"] = 0.0
            e.state["start"] = self._start_pos(e)
            e.x, e.y = e.state["start"]

    def _restart_groups(self) -> None:
        self._restart()
        self.sched.reset()

    def rewind(self) -> None:
        self._restart_groups()
        self.pm.reset()

    def _gradient_scene(self, e: EntityV1) -> SceneV1:
        steps = int(self.params["pour_final_steps"])
        frames = int(self.params["pour_final_frames"])
        final = e.state["final_color"]
        return SceneV1(
            "gradient",
            [SceneFrameV1(None, lerp_color(self.start_color, final, i / float(steps)), frames)
             for i in range(1, steps + 1)],
        )

    def _tick_pour(self, _ticks: int) -> None:
        for _group, ids in self.sched.step():
            for eid in ids:
                self.ents[eid].visible = True

    def _poured(self) -> bool:
        if not self.sched.done:
            return False
        for e in self.entities:
            if e.state["progress"] < 1.0 or e.animating:
                return False
        return True

    def advance(self) -> None:
        self.pm.step()
        speed = float(self.params["pour_movement_speed"])
        for e in self.entities:
            if not e.visible:
                continue
            if e.state["progress"] < 1.0:
                e.state["progress"] = min(1.0, e.state["progress"] + speed)
                e.x, e.y = lerp_point(e.state["start"], e.origin, e.state["progress"], self.easing)
                if e.state["progress"] >= 1.0:
                    e.x, e.y = e.origin
                    e.play(self._gradient_scene(e))
                continue
            e.tick_scene()

    def _draw(self, canvas) -> None:
        for e in self.entities:
            e.draw(canvas)

    def extra_snapshot(self):
        arrived = sum(1 for e in self.entities if e.state.get("progress", 0.0) >= 1.0)
        return {"entities": len(self.entities), "arrived": arrived, "direction": self.direction}


def register_pour():
    register(EffectDef(
        "pour",
        title="Pour",
        factory=PourEffect,
        uses=USES,
        requires_text=True,
        category="text",
        description="Text pouring onto screen with color transition",
        version="1.0.0",
    ))
