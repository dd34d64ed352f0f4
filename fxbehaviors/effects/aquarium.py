from __future__ import annotations
SHIPPED = True

import math
from dataclasses import dataclass
from typing import List, Optional

from fxbehaviors.effect_base import EffectBase
from fxbehaviors.effects import aquarium_art as art
from fxbehaviors.registry import EffectDef, register
from fxruntime.occupancy_v1 import OccupancySlotV1
from fxthemes.palettes import aquarium_roles

USES = [
    "aq_fish_interval", "aq_fish_max", "aq_bubble_interval", "aq_bubble_max",
    "aq_medium_interval", "aq_large_interval", "aq_mermaid_interval",
    "aq_diver_speed", "aq_boat_speed",
]

TINY, SMALL, MEDIUM, LARGE = 0, 1, 2, 3


@dataclass
class Prop:
    kind: str
    x: float
    y: float
    speed: float
    direction: int
    art: List[str]
    color: str
    size: int = 0
    phase: float = 0.0


@dataclass
class Seaweed:
    x: int
    height: int
    phase: float
    speed: float
    amount: float
    wavy: bool


@dataclass
class Bubble:
    x: float
    y: float
    speed: float
    wobble: float
    amount: float


class AquariumEffect(EffectBase):
    """Endless underwater scene: fish, bubbles, seaweed and a few big visitors.

    The diver and the mermaid share one occupancy slot, so at most one of them
    is ever on screen.
    """

    key = "aquarium"
    uses = USES

    def build(self) -> None:
        w, h = self.width, self.height
        self.roles = aquarium_roles(self.ctx.theme)
        self.surface_y = min(h - 1, max(2, int(h * 0.15)))
        self.slot = OccupancySlotV1("swimmer")

        self.seaweed: List[Seaweed] = []
        for _ in range(w // 8):
            self.seaweed.append(Seaweed(
                x=self.rng.intn(w),
                height=3 + self.rng.intn(h // 3),
                phase=self.rng.rand() * 2.0 * math.pi,
                speed=0.05 + self.rng.rand() * 0.05,
                amount=1.0 + self.rng.rand() * 0.5,
                wavy=self.rng.intn(2) == 1,
            ))

        self.fish: List[Prop] = []
        self.bubbles: List[Bubble] = []
        self.diver: Optional[Prop] = None
        self.mermaid: Optional[Prop] = None
        self._spawn_diver()
        for _ in range(8 + self.rng.intn(15)):
            self._spawn_fish(TINY if self.rng.rand() < 0.7 else SMALL)
        for _ in range(15 + self.rng.intn(10)):
            self._spawn_bubble()
        self.boat = self._make_boat()
        self.anchor_x = w // 2 - 5
        self.anchor_y = h - len(art.ANCHOR) - 1

        self.last_medium = -1000
        self.last_large = -1000
        self.last_mermaid = -1000

        self.compositor.add_layer("surface", self._draw_surface)
        self.compositor.add_layer("floor", self._draw_floor)
        self.compositor.add_layer("seaweed", self._draw_seaweed)
        self.compositor.add_layer("anchor", self._draw_anchor)
        self.compositor.add_layer("bubbles", self._draw_bubbles)
        self.compositor.add_layer("diver", lambda c: self._draw_prop(c, self.diver))
        self.compositor.add_layer("boat", lambda c: self._draw_prop(c, self.boat))
        self.compositor.add_layer("mermaid", lambda c: self._draw_prop(c, self.mermaid))
        self.compositor.add_layer("fish", self._draw_fish)

    # ---------- spawning ----------

    def _band(self, lo: int, hi: int) -> int:
        """Random row in [lo, hi), falling back to the open water on short screens."""
        if hi <= lo:
            hi = self.height - 2
        return self.rng.randint(lo, max(lo, hi - 1))

    def _direction(self) -> int:
        return 1 if self.rng.rand() < 0.5 else -1

    def _spawn_fish(self, size: int) -> None:
        d = self._direction()
        if size == TINY:
            shape, margin = art.FISH_TINY[d], 10
            speed = (0.5 + self.rng.rand() * 1.5) * 1.8
            y = self._band(self.surface_y + 2, self.height - 10)
        elif size == SMALL:
            shape, margin = art.FISH_SMALL[d], 10
            speed = (0.5 + self.rng.rand() * 1.5) * 1.5
            y = self._band(self.surface_y + 2, self.height - 10)
        elif size == MEDIUM:
            shape = self.rng.choice(art.FISH_MEDIUM_LEFT) if d < 0 else art.FISH_MEDIUM_RIGHT
            margin = 15
            speed = 0.4 + self.rng.rand() * 0.8
            y = self._band(self.surface_y + 2, self.height - 10)
        else:
            shape = self.rng.choice(art.FISH_LARGE_LEFT) if d < 0 else art.FISH_LARGE_RIGHT
            margin = 20
            speed = 0.3 + self.rng.rand() * 0.5
            y = self._band(self.surface_y + 5, self.height - 15)
        x = -margin if d > 0 else self.width + margin
        self.fish.append(Prop(
            kind="fish",
            x=float(x),
            y=float(y),
            speed=speed,
            direction=d,
            art=shape,
            color=self.rng.choice(self.roles["fish"]),
            size=size,
            phase=self.rng.rand() * 2.0 * math.pi,
        ))

    def _spawn_bubble(self) -> None:
        self.bubbles.append(Bubble(
            x=float(self.rng.intn(self.width)),
            y=float(self._band(self.surface_y + 2, self.height - 1)),
            speed=0.2 + self.rng.rand() * 0.3,
            wobble=self.rng.rand() * 2.0 * math.pi,
            amount=0.3 + self.rng.rand() * 0.3,
        ))

    def _spawn_diver(self) -> bool:
        if not self.slot.occupy("diver"):
            return False
        self.diver = Prop(
            kind="diver",
            x=-20.0,
            y=float(self.height - len(art.DIVER) - 2),
            speed=float(self.params["aq_diver_speed"]),
            direction=1,
            art=art.DIVER,
            color=self.roles["diver"],
        )
        return True

    def _spawn_mermaid(self) -> bool:
        # The mermaid displaces the diver.
        if self.diver is not None:
            self.slot.vacate("diver")
            self.diver = None
        if not self.slot.occupy("mermaid"):
            return False
        d = self._direction()
        tall = len(art.MERMAID)
        lo = self.height - tall - 15
        self.mermaid = Prop(
            kind="mermaid",
            x=float(-50 if d > 0 else self.width + 50),
            y=float(self.rng.randint(lo, max(lo, self.height - tall - 5))),
            speed=0.2 + self.rng.rand() * 0.3,
            direction=d,
            art=art.MERMAID,
            color=self.roles["mermaid"],
        )
        return True

    def _make_boat(self) -> Prop:
        kind = self.rng.intn(2)
        shape = art.BOATS[kind]
        # The large ship only sails left.
        d = -1 if kind == 1 else self._direction()
        return Prop(
            kind="boat",
            x=float(self.rng.intn(self.width)),
            y=float(self.surface_y - len(shape)),
            speed=float(self.params["aq_boat_speed"]),
            direction=d,
            art=shape,
            color=self.roles["boat"],
        )

    # ---------- simulation ----------

    def advance(self) -> None:
        p = self.params
        w = self.width
        tick = self.frame

        for s in self.seaweed:
            s.phase += s.speed

        kept: List[Prop] = []
        for f in self.fish:
            f.x += f.speed * f.direction
            f.phase += 0.2
            f.y += math.sin(f.phase) * 0.1
            if (f.direction > 0 and f.x > w + 30) or (f.direction < 0 and f.x < -30):
                continue
            kept.append(f)
        self.fish = kept

        rising: List[Bubble] = []
        for b in self.bubbles:
            b.y -= b.speed
            b.wobble += 0.1
            b.x += math.sin(b.wobble) * b.amount
            if b.y >= self.surface_y:
                rising.append(b)
        self.bubbles = rising

        if self.diver is not None:
            dv = self.diver
            dv.x += dv.speed * dv.direction
            dv.phase += 0.1
            dv.y += math.sin(dv.phase) * 0.05
            if dv.direction > 0 and dv.x > w + 30:
                dv.x = -30.0
            elif dv.direction < 0 and dv.x < -30:
                dv.x = float(w + 30)

        bt = self.boat
        bt.x += bt.speed * bt.direction
        if bt.direction > 0 and bt.x > w + 15:
            bt.x = -15.0
        elif bt.direction < 0 and bt.x < -15:
            bt.x = float(w + 15)

        if self.mermaid is not None:
            m = self.mermaid
            m.x += m.speed * m.direction
            m.phase += 0.1
            m.y += math.sin(m.phase) * 0.08
            if (m.direction > 0 and m.x > w + 50) or (m.direction < 0 and m.x < -50):
                self.mermaid = None
                self.slot.vacate("mermaid")
                self._spawn_diver()

        if tick % int(p["aq_fish_interval"]) == 0 and len(self.fish) < int(p["aq_fish_max"]):
            self._spawn_fish(TINY if self.rng.rand() < 0.7 else SMALL)

        medium_every = int(p["aq_medium_interval"])
        if not any(f.size == MEDIUM for f in self.fish) and \
                tick - self.last_medium >= medium_every + self.rng.intn(max(1, medium_every // 3)):
            self._spawn_fish(MEDIUM)
            self.last_medium = tick

        if not any(f.size == LARGE for f in self.fish) and tick - self.last_large >= int(p["aq_large_interval"]):
            self._spawn_fish(LARGE)
            self.last_large = tick

        mermaid_every = int(p["aq_mermaid_interval"])
        if self.mermaid is None and \
                tick - self.last_mermaid >= mermaid_every + self.rng.intn(max(1, mermaid_every // 2)):
            if self._spawn_mermaid():
                self.last_mermaid = tick

        if tick % int(p["aq_bubble_interval"]) == 0 and len(self.bubbles) < int(p["aq_bubble_max"]):
            self._spawn_bubble()

    def swimmers(self) -> List[str]:
        return [pr.kind for pr in (self.diver, self.mermaid) if pr is not None]

    # ---------- drawing ----------

    def _draw_surface(self, canvas) -> None:
        water = self.roles["water"][0]
        for x in range(self.width):
            if (self.frame // 2 + x) % 3 == 0:
                canvas.put(x, self.surface_y, "~", water)

    def _draw_floor(self, canvas) -> None:
        sand = self.roles["water"][-1]
        top = self.height - 2
        for x in range(self.width):
            k = x + self.frame // 5
            glyph = "^" if k % 7 == 0 else ("." if k % 5 == 0 else "_")
            canvas.put(x, top, glyph, sand)
            if (x + top + 1) % 3 == 0:
                canvas.put(x, top + 1, ".", sand)

    def _draw_seaweed(self, canvas) -> None:
        colors = self.roles["seaweed"]
        for s in self.seaweed:
            sway = int(math.sin(s.phase) * s.amount)
            x = s.x + sway
            for i in range(s.height):
                y = self.height - 3 - i
                if y < self.surface_y:
                    break
                if s.wavy:
                    glyph = "(" if (i + s.x) % 2 == 0 else ")"
                else:
                    glyph = "|"
                idx = min(len(colors) - 1, int(i / float(s.height) * len(colors)))
                canvas.put(x, y, glyph, colors[idx])

    def _draw_anchor(self, canvas) -> None:
        canvas.blit_lines(self.anchor_x, self.anchor_y, art.ANCHOR, self.roles["anchor"])

    def _draw_bubbles(self, canvas) -> None:
        for b in self.bubbles:
            canvas.put(int(b.x), int(b.y), "o", self.roles["bubble"])

    def _draw_prop(self, canvas, prop: Optional[Prop]) -> None:
        if prop is not None:
            canvas.blit_lines(int(prop.x), int(prop.y), prop.art, prop.color)

    def _draw_fish(self, canvas) -> None:
        for f in self.fish:
            self._draw_prop(canvas, f)

    def extra_snapshot(self):
        return {
            "fish": len(self.fish),
            "bubbles": len(self.bubbles),
            "swimmer": self.slot.holder(),
        }


def register_aquarium():
    register(EffectDef(
        "aquarium",
        title="Aquarium",
        factory=AquariumEffect,
        uses=USES,
        category="scene",
        description="Underwater scene with fish, diver, mermaid and boat",
        version="1.0.0",
    ))
