"""Interpolator (v1): easing, colors, gradients and motion paths.

This is NOT an "effect". It is the shared math every choreography effect uses
instead of carrying its own copy of easing/gradient helpers.

Design goals:
- Pure functions only (no RNG, no state).
- Colors travel as lowercase '#rrggbb' strings; anything unparsable is white.
- Gradient contract: len == steps + 1 for >= 2 stops, first == first stop,
  last == last stop (bit-exact).
"""

from __future__ import annotations

import math
from typing import Callable, Dict, List, Sequence, Tuple

RGB = Tuple[int, int, int]
Point = Tuple[float, float]
Easing = Callable[[float], float]

WHITE = "#ffffff"


# ---------- colors ----------


def parse_hex(color: str) -> RGB:
    s = str(color or "").strip()
    if s.startswith("#"):
        s = s[1:]
    if len(s) != 6:
        return (255, 255, 255)
    try:
        return (int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))
    except ValueError:
        return (255, 255, 255)


def to_hex(rgb: Sequence[int]) -> str:
    r, g, b = (max(0, min(255, int(c))) for c in rgb[:3])
    return "#%02x%02x%02x" % (r, g, b)


def normalize_hex(color: str) -> str:
    return to_hex(parse_hex(color))


def lerp_color(a: str, b: str, t: float) -> str:
    t = clamp01(t)
    ca = parse_hex(a)
    cb = parse_hex(b)
    return to_hex(tuple(int(ca[i] + (cb[i] - ca[i]) * t) for i in range(3)))


def scale_color(color: str, factor: float) -> str:
    r, g, b = parse_hex(color)
    f = max(0.0, float(factor))
    return to_hex((min(255, int(r * f)), min(255, int(g * f)), min(255, int(b * f))))


def build_gradient(stops: Sequence[str], steps: int) -> List[str]:
    """Multi-stop gradient with exactly steps + 1 entries.

    The n steps are spread over the k-1 segments; the first n % (k-1)
    segments get one extra so the total is exact. The final stop is appended
    verbatim (after normalisation).
    """
    norm = [normalize_hex(s) for s in (stops or [])]
    if not norm:
        return [WHITE]
    if len(norm) == 1:
        return [norm[0]]

    n = max(1, int(steps))
    segments = len(norm) - 1
    base, extra = divmod(n, segments)

    out: List[str] = []
    for i in range(segments):
        seg_steps = base + (1 if i < extra else 0)
        if seg_steps <= 0:
            continue
        a = parse_hex(norm[i])
        b = parse_hex(norm[i + 1])
        for j in range(seg_steps):
            t = j / float(seg_steps)
            out.append(to_hex(tuple(int(a[c] + (b[c] - a[c]) * t) for c in range(3))))
    out.append(norm[-1])
    return out


def fade_gradient(color: str, steps: int, floor: float = 0.3) -> List[str]:
    """color -> color*floor over steps + 1 entries."""
    n = max(1, int(steps))
    start = parse_hex(color)
    end = tuple(int(c * float(floor)) for c in start)
    return [
        to_hex(tuple(int(start[c] * (1.0 - i / n) + end[c] * (i / n)) for c in range(3)))
        for i in range(n + 1)
    ]


def pick(gradient: Sequence[str], ratio: float) -> str:
    if not gradient:
        return WHITE
    idx = int(clamp01(ratio) * (len(gradient) - 1))
    return gradient[clamp_index(idx, len(gradient))]


def pick_stop(stops: Sequence[str], ratio: float) -> str:
    """Nearest-lower stop for ratio (no blending)."""
    if not stops:
        return WHITE
    if len(stops) == 1:
        return normalize_hex(stops[0])
    idx = int(clamp01(ratio) * (len(stops) - 1))
    return normalize_hex(stops[clamp_index(idx, len(stops))])


# ---------- scalars ----------


def clamp01(x: float) -> float:
    if x < 0.0:
        return 0.0
    if x > 1.0:
        return 1.0
    return x


def clamp_index(i: int, n: int) -> int:
    if n <= 0:
        return 0
    if i < 0:
        return 0
    if i >= n:
        return n - 1
    return i


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


# ---------- easing ----------


def linear(t: float) -> float:
    return clamp01(t)


def in_quad(t: float) -> float:
    t = clamp01(t)
    return t * t


def out_quad(t: float) -> float:
    t = clamp01(t)
    return t * (2.0 - t)


def in_out_quad(t: float) -> float:
    t = clamp01(t)
    if t < 0.5:
        return 2.0 * t * t
    return -1.0 + (4.0 - 2.0 * t) * t


def in_cubic(t: float) -> float:
    t = clamp01(t)
    return t * t * t


def out_cubic(t: float) -> float:
    t = clamp01(t)
    return 1.0 - (1.0 - t) ** 3


def in_out_cubic(t: float) -> float:
    t = clamp01(t)
    if t < 0.5:
        return 4.0 * t * t * t
    return 1.0 - ((-2.0 * t + 2.0) ** 3) / 2.0


def in_expo(t: float) -> float:
    t = clamp01(t)
    if t == 0.0:
        return 0.0
    return 2.0 ** (10.0 * (t - 1.0))


def out_expo(t: float) -> float:
    t = clamp01(t)
    if t == 1.0:
        return 1.0
    return 1.0 - 2.0 ** (-10.0 * t)


EASINGS: Dict[str, Easing] = {
    "linear": linear,
    "in_quad": in_quad,
    "out_quad": out_quad,
    "in_out_quad": in_out_quad,
    "in_cubic": in_cubic,
    "out_cubic": out_cubic,
    "in_out_cubic": in_out_cubic,
    "in_expo": in_expo,
    "out_expo": out_expo,
}

_ALIASES = {
    "easeIn": "in_quad",
    "easeOut": "out_quad",
    "easeInOut": "in_out_quad",
}


def get_easing(name: str) -> Easing:
    key = str(name or "").strip()
    key = _ALIASES.get(key, key)
    fn = EASINGS.get(key)
    if fn is None:
        raise ValueError(f"Unknown easing: {name!r}")
    return fn


# ---------- motion paths ----------


def lerp_point(start: Point, end: Point, t: float, easing: Easing = linear) -> Point:
    e = easing(t)
    return (start[0] + (end[0] - start[0]) * e, start[1] + (end[1] - start[1]) * e)


def polar(cx: float, cy: float, radius: float, angle: float) -> Point:
    return (cx + radius * math.cos(angle), cy + radius * math.sin(angle))


def to_polar(cx: float, cy: float, x: float, y: float) -> Tuple[float, float]:
    dx = x - cx
    dy = y - cy
    return (math.sqrt(dx * dx + dy * dy), math.atan2(dy, dx))


def bezier_control(start: Point, end: Point, *, along: float = 0.5, bend: float = 0.3) -> Point:
    """Midpoint-ish control point pushed sideways by bend * |d|."""
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    return (start[0] + dx * along + dy * bend, start[1] + dy * along - dx * bend)


def bezier_point(p0: Point, p1: Point, p2: Point, t: float) -> Point:
    t = clamp01(t)
    u = 1.0 - t
    return (
        u * u * p0[0] + 2.0 * u * t * p1[0] + t * t * p2[0],
        u * u * p0[1] + 2.0 * u * t * p1[1] + t * t * p2[1],
    )


def spiral_point(
    progress: float,
    *,
    origin: Tuple[float, float],
    overshoot: Tuple[float, float],
    target: Tuple[float, float],
    clockwise: bool,
) -> Tuple[float, float, int]:
    """Three-stage orbital path in polar space.

    origin/overshoot/target are (radius, angle). Returns (radius, angle, stage)
    where stage is 0 (expand), 1 (orbit and contract) or 2 (tighten).
    """
    p = clamp01(progress)
    r0, a0 = origin
    rd, ad = overshoot
    rt, at = target
    sign = 1.0 if clockwise else -1.0

    if p < 0.25:
        e = in_out_cubic(p / 0.25)
        return (r0 + (rd - r0) * e, a0 + (ad - a0) * e, 0)

    if p < 0.75:
        swirl = (p - 0.25) / 0.5
        e = 1.0 - (1.0 - swirl) ** 2
        return (rd + (rt - rd) * e, ad + sign * swirl * 2.0 * math.pi, 1)

    e = in_out_cubic((p - 0.75) / 0.25)
    r75 = rd + (rt - rd) * 0.99
    a75 = ad + sign * math.pi
    return (r75 + (rt - r75) * e, a75 + (at - a75) * e, 2)


def direction_ratio(
    x: float,
    y: float,
    box: Tuple[int, int, int, int],
    direction: str,
    center: Point = (0.0, 0.0),
) -> float:
    """Position of (x, y) along a gradient laid over ``box`` (min_x, min_y, max_x, max_y).

    horizontal/vertical/diagonal measure across the box; radial measures the
    distance from ``center`` against half the box diagonal.
    """
    min_x, min_y, max_x, max_y = box
    bw = float(max_x - min_x) or 1.0
    bh = float(max_y - min_y) or 1.0
    if direction == "vertical":
        return clamp01((y - min_y) / bh)
    if direction == "diagonal":
        return clamp01(((x - min_x) / bw + (y - min_y) / bh) / 2.0)
    if direction == "radial":
        dist = math.hypot(x - center[0], y - center[1])
        return clamp01(dist / (math.hypot(bw, bh) / 2.0))
    return clamp01((x - min_x) / bw)
