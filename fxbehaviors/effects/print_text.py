from __future__ import annotations
SHIPPED = True

from typing import List

from fxbehaviors.effect_base import EffectBase
from fxbehaviors.registry import EffectDef, register
from fxruntime.entities_v1 import split_lines
from fxruntime.interp_v1 import pick_stop
from fxruntime.phase_machine_v1 import PhaseMachineV1, PhaseV1

USES = [
    "print_speed", "print_char_delay", "print_head_symbol",
    "print_trail_symbols", "print_hold_ticks", "final_colors",
]


def printable_lines(text: str) -> List[str]:
    lines = split_lines(text) if text else []
    while lines and not lines[-1].strip():
        lines.pop()
    return lines


class PrintTextEffect(EffectBase):
    """Typewriter: lines print left to right behind a moving print head."""

    key = "print"
    uses = USES

    def build(self) -> None:
        p = self.params
        self.lines = printable_lines(self.ctx.text)
        self.stops = self.ctx.colors("final_colors", "gradient")
        self.head = (p["print_head_symbol"] or "█")[0]
        self.trail = p["print_trail_symbols"] or "░▒▓"
        longest = max((len(l) for l in self.lines), default=0)
        self.top = max(0, (self.height - len(self.lines)) // 2)
        self.left = max(0, (self.width - longest) // 2)
        self._restart()

        self.pm = PhaseMachineV1(
            [
                PhaseV1("printing", until=self.complete, on_tick=self._tick_print),
                PhaseV1("hold", ticks=int(p["print_hold_ticks"])),
            ],
            display=self.display,
            on_loop=self._restart,
            owner=self.key,
        )
        self.compositor.add_layer("text", self._draw)

    def _restart(self) -> None:
        self.line = 0
        self.col = 0
        self.wait = 0

    def rewind(self) -> None:
        self._restart()
        self.pm.reset()

    def complete(self) -> bool:
        return self.line >= len(self.lines)

    def _tick_print(self, _ticks: int) -> None:
        if self.complete():
            return
        self.wait += 1
        if self.wait < int(self.params["print_char_delay"]):
            return
        self.wait = 0
        text = self.lines[self.line]
        self.col = min(len(text), self.col + int(self.params["print_speed"]))
        if self.col >= len(text):
            self.line += 1
            self.col = 0

    def advance(self) -> None:
        self.pm.step()

    def _put_text(self, canvas, y: int, text: str, count: int) -> None:
        for i, ch in enumerate(text[:count]):
            canvas.put(self.left + i, y, ch, pick_stop(self.stops, i / float(len(text))))

    def _draw(self, canvas) -> None:
        for i in range(min(self.line, len(self.lines))):
            self._put_text(canvas, self.top + i, self.lines[i], len(self.lines[i]))
        if self.complete():
            return
        y = self.top + self.line
        self._put_text(canvas, y, self.lines[self.line], self.col)
        if self.col == 0:
            canvas.put(self.left, y, self.trail[0])
            canvas.put(self.left + 1, y, self.head)
            return
        x = self.left + self.col
        for i, sym in enumerate(self.trail):
            canvas.put(x + i, y, sym)
        canvas.put(x + len(self.trail), y, self.head)

    def extra_snapshot(self):
        return {"lines": len(self.lines), "line": self.line, "col": self.col}


def register_print_text():
    register(EffectDef(
        "print",
        title="Print",
        factory=PrintTextEffect,
        uses=USES,
        requires_text=True,
        category="text",
        description="Typewriter printing with a moving print head",
        version="1.0.0",
    ))
