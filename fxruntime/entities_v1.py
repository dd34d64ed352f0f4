"""Entity model (Entities V1).

Entities are the discrete things choreography effects move around: one per
visible character of the source text, or procedurally placed particles.

Design goals:
- Plain dataclasses; effects keep per-entity scratch data in ``state``.
- An entity remembers its origin so ``restore()`` can rewind it without
  re-parsing the text.
- Scenes are small per-entity frame lists (glyph/color/duration) used for
  reveal, fade and brighten sub-animations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

WHITESPACE = (" ", "\t")


@dataclass
class SceneFrameV1:
    glyph: Optional[str]
    color: Optional[str]
    duration: int = 1


@dataclass
class SceneV1:
    """Frame list played once; ``glyph=None`` leaves the current glyph alone."""

    name: str
    frames: List[SceneFrameV1] = field(default_factory=list)
    index: int = 0
    elapsed: int = 0

    @property
    def done(self) -> bool:
        return self.index >= len(self.frames)

    def current(self) -> Optional[SceneFrameV1]:
        if self.done:
            return None
        return self.frames[self.index]

    def advance(self) -> bool:
        """Tick once; returns True when the scene has finished."""
        if self.done:
            return True
        self.elapsed += 1
        if self.elapsed >= max(1, int(self.frames[self.index].duration)):
            self.elapsed = 0
            self.index += 1
        return self.done


def scene_from_gradient(
    name: str, colors: Sequence[str], *, duration: int = 1, glyph: Optional[str] = None
) -> SceneV1:
    return SceneV1(name, [SceneFrameV1(glyph, c, duration) for c in colors])


@dataclass
class EntityV1:
    eid: int
    glyph: str
    ox: int
    oy: int
    x: float = 0.0
    y: float = 0.0
    visible: bool = True
    cur_glyph: str = ""
    color: Optional[str] = None
    group_id: int = -1
    state: Dict[str, Any] = field(default_factory=dict)
    scene: Optional[SceneV1] = None
    queue: List[SceneV1] = field(default_factory=list)
    scenes_done: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.x = float(self.ox)
        self.y = float(self.oy)
        if not self.cur_glyph:
            self.cur_glyph = self.glyph

    def restore(self, *, visible: bool = True, color: Optional[str] = None) -> None:
        self.x = float(self.ox)
        self.y = float(self.oy)
        self.visible = visible
        self.cur_glyph = self.glyph
        self.color = color
        self.state.clear()
        self.scene = None
        self.queue.clear()
        self.scenes_done.clear()

    def play(self, *scenes: SceneV1) -> None:
        """Replace whatever is playing with ``scenes`` (run back to back)."""
        self.queue = list(scenes[1:])
        self.scene = scenes[0] if scenes else None

    @property
    def animating(self) -> bool:
        return self.scene is not None

    def scene_name(self) -> str:
        return self.scene.name if self.scene is not None else ""

    def tick_scene(self) -> bool:
        """Advance the active scene and apply its frame. True once all scenes finished."""
        sc = self.scene
        if sc is None:
            return True
        fr = sc.current()
        if fr is not None:
            if fr.color is not None:
                self.color = fr.color
            if fr.glyph is not None:
                self.cur_glyph = fr.glyph
        if sc.advance():
            self.scenes_done.append(sc.name)
            self.scene = self.queue.pop(0) if self.queue else None
        return self.scene is None

    @property
    def pos(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def origin(self) -> Tuple[float, float]:
        return (float(self.ox), float(self.oy))

    def draw(self, canvas) -> None:
        if self.visible:
            canvas.put_round(self.x, self.y, self.cur_glyph, self.color)


# ---------- text parsing ----------


def split_lines(text: str) -> List[str]:
    return str(text or "").replace("\r\n", "\n").replace("\r", "\n").split("\n")


def text_extent(text: str) -> Tuple[int, int]:
    lines = split_lines(text)
    if not text:
        return (0, 0)
    return (max((len(l) for l in lines), default=0), len(lines))


def parse_text_block(text: str, width: int, height: int, *, mode: str = "block") -> List[EntityV1]:
    """Place every non-whitespace character of ``text`` on a width x height canvas.

    mode="block": the whole block is centered by its longest line and line
    count, start clamped to 0. mode="lines": every line is centered on its own.
    Characters that land outside the canvas are dropped.
    """
    if not text:
        return []
    if mode not in ("block", "lines"):
        raise ValueError(f"Unknown text placement mode: {mode!r}")
    w = max(1, int(width))
    h = max(1, int(height))
    lines = split_lines(text)
    block_w = max((len(l) for l in lines), default=0)
    start_y = max(0, (h - len(lines)) // 2)
    block_x = max(0, (w - block_w) // 2)

    out: List[EntityV1] = []
    for row, line in enumerate(lines):
        y = start_y + row
        if y >= h:
            break
        start_x = block_x if mode == "block" else (w - len(line)) // 2
        for col, ch in enumerate(line):
            if ch in WHITESPACE:
                continue
            x = start_x + col
            if x < 0 or x >= w:
                continue
            out.append(EntityV1(eid=len(out), glyph=ch, ox=x, oy=y))
    return out


def grid_entities(width: int, height: int, glyph: str = " ") -> List[EntityV1]:
    """One entity per cell (background-mode effects)."""
    out: List[EntityV1] = []
    for y in range(max(1, int(height))):
        for x in range(max(1, int(width))):
            out.append(EntityV1(eid=len(out), glyph=glyph, ox=x, oy=y))
    return out


# ---------- bounds helpers ----------


def in_bounds(x: float, y: float, width: int, height: int) -> bool:
    xi = int(round(x))
    yi = int(round(y))
    return 0 <= xi < width and 0 <= yi < height


def bbox(entities: Iterable[EntityV1]) -> Tuple[int, int, int, int]:
    """(min_x, min_y, max_x, max_y) of origins; zeros for an empty set."""
    xs: List[int] = []
    ys: List[int] = []
    for e in entities:
        xs.append(e.ox)
        ys.append(e.oy)
    if not xs:
        return (0, 0, 0, 0)
    return (min(xs), min(ys), max(xs), max(ys))


def by_id(entities: Sequence[EntityV1]) -> Dict[int, EntityV1]:
    return {e.eid: e for e in entities}
