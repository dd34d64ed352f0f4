from __future__ import annotations
"""Common shell for every effect.

Design goals:
- Effects implement ``build()`` (allocate everything for the current size),
  ``advance()`` (one tick of simulation) and add compositor layers in build.
- ``step``/``update``/``render``/``reset``/``resize`` behave the same for all
  effects; nothing here knows about a particular effect.
- ``resize`` rebuilds from scratch; ``reset`` rewinds without resizing.
"""

from typing import Any, Dict, List, Optional

from fxbehaviors.state import EffectContext
from fxparams.resolve import resolve
from fxruntime.compositor_v1 import CompositorV1
from fxruntime.phase_machine_v1 import PhaseMachineV1


class EffectBase:
    key = "effect"
    uses: List[str] = []

    def __init__(self, ctx: EffectContext):
        self.ctx = ctx
        self.rng = ctx.rng
        self.params: Dict[str, Any] = resolve(ctx.params, self.uses)
        self.display = bool(self.params.get("display", False))
        self.width = ctx.width
        self.height = ctx.height
        self.frame = 0
        self.pm: Optional[PhaseMachineV1] = None
        self.compositor = CompositorV1(self.width, self.height)
        self._rebuild()

    # ---------- hooks ----------

    def build(self) -> None:
        raise NotImplementedError

    def advance(self) -> None:
        raise NotImplementedError

    def rewind(self) -> None:
        """Back to the first frame at the current size. Default: rebuild."""
        self._rebuild()

    def extra_snapshot(self) -> Dict[str, Any]:
        return {}

    # ---------- public surface ----------

    def _rebuild(self) -> None:
        self.compositor = CompositorV1(self.width, self.height)
        self.pm = None
        self.build()

    def step(self) -> None:
        self.frame += 1
        self.advance()

    def update(self) -> None:
        self.step()

    def render(self) -> str:
        return self.compositor.render()

    def plain(self) -> str:
        self.compositor.compose()
        return self.compositor.canvas.plain()

    def reset(self) -> None:
        self.frame = 0
        self.rewind()
        self.ctx.log(f"[fx] {self.key}: reset")

    def resize(self, width: int, height: int) -> None:
        self.width = max(1, int(width))
        self.height = max(1, int(height))
        self.frame = 0
        self._rebuild()
        self.ctx.log(f"[fx] {self.key}: resize {self.width}x{self.height}")

    @property
    def phase(self) -> str:
        if self.pm is None:
            return "running"
        return self.pm.current

    def snapshot(self) -> Dict[str, Any]:
        snap: Dict[str, Any] = {
            "key": self.key,
            "width": self.width,
            "height": self.height,
            "frame": self.frame,
            "phase": self.phase,
            "seed": self.rng.seed,
        }
        if self.pm is not None:
            snap["phase_machine"] = self.pm.to_dict()
        snap.update(self.extra_snapshot())
        return snap
