from __future__ import annotations
SHIPPED = True

from typing import Dict, List, Optional

from fxbehaviors.effect_base import EffectBase
from fxbehaviors.registry import EffectDef, register
from fxruntime.entities_v1 import EntityV1, SceneFrameV1, SceneV1, by_id, grid_entities
from fxruntime.group_scheduler_v1 import GroupSchedulerV1, build_groups
from fxruntime.interp_v1 import build_gradient, fade_gradient
from fxruntime.phase_machine_v1 import PhaseMachineV1, PhaseV1

USES = [
    "beam_row_symbols", "beam_col_symbols", "beam_delay", "beam_burst_min", "beam_burst_max",
    "beam_row_speed_min", "beam_row_speed_max", "beam_col_speed_min", "beam_col_speed_max",
    "beam_gradient_steps", "beam_gradient_frames", "beam_final_steps", "beam_final_frames",
    "beam_wipe_speed", "beam_hold_ticks", "final_colors",
]

FADE_STEPS = 3


class BeamsEffect(EffectBase):
    """Row and column beams sweep the canvas.

    Phases: beams -> hold. Each cell a beam passes plays a ``beam`` scene
    (beam gradient) followed by a ``fade`` scene that leaves the cell's own
    glyph behind. Subclasses that set ``brighten`` insert a diagonal
    ``final_wipe`` phase that plays the final gradient before hold.
    """

    key = "beams"
    uses = USES
    fade_steps = FADE_STEPS
    brighten = False

    def make_entities(self) -> List[EntityV1]:
        return grid_entities(self.width, self.height, " ")

    def final_stops(self) -> List[str]:
        return self.ctx.colors("final_colors", "beam")

    def build(self) -> None:
        p = self.params
        self.row_symbols = p["beam_row_symbols"] or "▂▁_"
        self.col_symbols = p["beam_col_symbols"] or "▌▍▎▏"
        self.entities = self.make_entities()
        self.ents: Dict[int, EntityV1] = by_id(self.entities)
        for e in self.entities:
            e.visible = False

        self.beam_gradient = build_gradient(self.ctx.palette("beam"), int(p["beam_gradient_steps"]))
        self.fade = fade_gradient(self.beam_gradient[-1], self.fade_steps)

        self.beams = GroupSchedulerV1(
            self.rng,
            mode="burst",
            arm_delay=int(p["beam_delay"]),
            arm_min=int(p["beam_burst_min"]),
            arm_max=int(p["beam_burst_max"]),
            arm_nudge=0.01,
        )
        rows = build_groups(self.entities, "row", self.rng, speed_for=self._speed)
        cols = build_groups(self.entities, "column", self.rng, speed_for=self._speed, gid_start=len(rows))
        self.beams.add_lane("row", rows)
        self.beams.add_lane("column", cols)

        phases = [PhaseV1("beams", until=lambda: self.beams.done, on_tick=self._tick_beams)]
        self.wipe: Optional[GroupSchedulerV1] = None
        # Background mode goes straight from the beams to hold.
        if self.brighten:
            self.final_gradient = build_gradient(self.final_stops(), int(p["beam_final_steps"]))
            self.wipe = GroupSchedulerV1(self.rng, mode="wipe", per_tick=int(p["beam_wipe_speed"]))
            self.wipe.add_lane(
                "diagonal",
                build_groups(self.entities, "diagonal", self.rng, reverse_chance=0.0, shuffle=False),
            )
            phases.append(PhaseV1("final_wipe", until=self._wipe_finished, on_tick=self._tick_wipe))
        phases.append(PhaseV1("hold", ticks=int(p["beam_hold_ticks"])))

        self.pm = PhaseMachineV1(
            phases,
            display=self.display,
            on_loop=self._restart,
            owner=self.key,
        )
        self.compositor.add_layer("beams", self._draw)

    def _speed(self, axis: str) -> float:
        p = self.params
        if axis == "row":
            lo, hi = int(p["beam_row_speed_min"]), int(p["beam_row_speed_max"])
        else:
            lo, hi = int(p["beam_col_speed_min"]), int(p["beam_col_speed_max"])
        return self.rng.randint(lo, max(lo, hi - 1)) * 0.1

    def _beam_scenes(self, e: EntityV1) -> List[SceneV1]:
        frames = int(self.params["beam_gradient_frames"])
        beam = SceneV1("beam", [SceneFrameV1(None, c, frames) for c in self.beam_gradient])
        fade = SceneV1("fade", [SceneFrameV1(None, c, 1) for c in self.fade])
        fade.frames.append(SceneFrameV1(e.glyph, self.fade[-1], 1))
        return [beam, fade]

    def _tick_beams(self, _ticks: int) -> None:
        for group, ids in self.beams.step():
            symbols = self.row_symbols if group.direction == "row" else self.col_symbols
            for eid in ids:
                e = self.ents[eid]
                e.visible = True
                e.cur_glyph = symbols[0]
                e.play(*self._beam_scenes(e))
            for j, eid in enumerate(group.trail(len(symbols))):
                e = self.ents[eid]
                if e.scene_name() == "beam":
                    e.cur_glyph = symbols[min(j, len(symbols) - 1)]

    def _tick_wipe(self, _ticks: int) -> None:
        frames = int(self.params["beam_final_frames"])
        for _group, ids in self.wipe.step():
            for eid in ids:
                e = self.ents[eid]
                e.visible = True
                e.cur_glyph = e.glyph
                e.play(SceneV1("brighten", [SceneFrameV1(e.glyph, c, frames) for c in self.final_gradient]))

    def _wipe_finished(self) -> bool:
        if not self.wipe.done:
            return False
        return not any(e.scene_name() == "brighten" for e in self.entities)

    def _restart(self) -> None:
        for e in self.entities:
            e.restore(visible=False)
        self.beams.reset()
        if self.wipe is not None:
            self.wipe.reset()

    def rewind(self) -> None:
        self._restart()
        self.pm.reset()

    def advance(self) -> None:
        self.pm.step()
        for e in self.entities:
            if e.visible:
                e.tick_scene()

    def _draw(self, canvas) -> None:
        for e in self.entities:
            e.draw(canvas)

    def extra_snapshot(self):
        return {
            "entities": len(self.entities),
            "groups": len(self.beams.groups()),
            "revealed": sum(1 for e in self.entities if e.visible),
        }


def register_beams():
    register(EffectDef(
        "beams",
        title="Beams",
        factory=BeamsEffect,
        uses=USES,
        category="abstract",
        description="Light beams crossing the screen",
        version="1.0.0",
    ))
