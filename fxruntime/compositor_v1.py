"""Character canvas + ANSI serialiser (Compositor V1).

Design goals:
- One fresh grid per frame; nothing carries over between renders.
- Painter's algorithm: later draws overwrite earlier ones, no blending.
- Out-of-bounds writes are ignored so effects never need to pre-clip.
- Output is truecolor ANSI; runs of equal color share one escape sequence.
"""

from __future__ import annotations

import re
from typing import Callable, List, Optional, Sequence, Tuple

from fxruntime.interp_v1 import parse_hex

Cell = Tuple[str, Optional[str]]

RESET = "\x1b[0m"
_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text or "")


def _open(color: str) -> str:
    r, g, b = parse_hex(color)
    return f"\x1b[38;2;{r};{g};{b}m"


class CanvasV1:
    """A height x width grid of (glyph, color) cells."""

    def __init__(self, width: int, height: int):
        self.w = max(1, int(width))
        self.h = max(1, int(height))
        self.cells: List[List[Cell]] = []
        self.clear()

    def clear(self) -> None:
        self.cells = [[(" ", None) for _ in range(self.w)] for _ in range(self.h)]

    def put(self, x: int, y: int, glyph: str, color: Optional[str] = None) -> None:
        if x < 0 or y < 0 or x >= self.w or y >= self.h:
            return
        if not glyph:
            return
        self.cells[y][x] = (glyph[0], color)

    def put_round(self, x: float, y: float, glyph: str, color: Optional[str] = None) -> None:
        self.put(int(round(x)), int(round(y)), glyph, color)

    def get(self, x: int, y: int) -> Cell:
        if x < 0 or y < 0 or x >= self.w or y >= self.h:
            return (" ", None)
        return self.cells[y][x]

    def blit_lines(self, x: int, y: int, lines: Sequence[str], color: Optional[str] = None) -> None:
        """Stamp multi-line art; spaces are transparent."""
        for dy, line in enumerate(lines):
            for dx, ch in enumerate(line):
                if ch != " ":
                    self.put(x + dx, y + dy, ch, color)

    def to_text(self) -> str:
        rows: List[str] = []
        for row in self.cells:
            parts: List[str] = []
            run: Optional[str] = None
            for ch, color in row:
                if ch == " " or not color:
                    if run is not None:
                        parts.append(RESET)
                        run = None
                    parts.append(ch)
                    continue
                if color != run:
                    if run is not None:
                        parts.append(RESET)
                    parts.append(_open(color))
                    run = color
                parts.append(ch)
            if run is not None:
                parts.append(RESET)
            rows.append("".join(parts))
        return "\n".join(rows)

    def plain(self) -> str:
        return "\n".join("".join(ch for ch, _ in row) for row in self.cells)


DrawFn = Callable[[CanvasV1], None]


class CompositorV1:
    """Ordered named layers drawn onto one canvas per frame."""

    def __init__(self, width: int, height: int):
        self.canvas = CanvasV1(width, height)
        self.layers: List[Tuple[str, DrawFn]] = []

    def add_layer(self, name: str, draw: DrawFn) -> None:
        self.layers.append((str(name), draw))

    def layer_names(self) -> List[str]:
        return [n for n, _ in self.layers]

    def resize(self, width: int, height: int) -> None:
        self.canvas = CanvasV1(width, height)

    def compose(self) -> CanvasV1:
        self.canvas.clear()
        for _name, draw in self.layers:
            draw(self.canvas)
        return self.canvas

    def render(self) -> str:
        return self.compose().to_text()
