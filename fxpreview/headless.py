from __future__ import annotations
"""Headless runner for regression tests.

It steps an effect without any terminal, producing a stable hash of the rendered frames
for a given effect + size + seed + text.

Same inputs, same hash: this is what the determinism selftests and tools/soak_run.py lean on.
"""

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
import hashlib
import json

from fxapp import crash_reporter
from fxbehaviors.registry import create_effect, make_context


def render_frames(key: str, frames: int = 60, width: int = 80, height: int = 24, *, seed: int = 0,
                  theme: str = "default", text: str = "", params: Optional[Dict[str, Any]] = None) -> List[str]:
    """Every rendered frame, first one before any step."""
    ctx = make_context(key, width, height, seed=seed, theme=theme, text=text, params=params)
    fx = create_effect(key, ctx)
    crash_reporter.watch(fx)
    out = [fx.render()]
    for _ in range(max(0, int(frames) - 1)):
        fx.step()
        out.append(fx.render())
    return out


def run_headless(key: str, frames: int = 60, width: int = 80, height: int = 24, *, seed: int = 0,
                 theme: str = "default", text: str = "", params: Optional[Dict[str, Any]] = None) -> str:
    h = hashlib.sha256()
    for frame in render_frames(key, frames, width, height, seed=seed, theme=theme, text=text, params=params):
        h.update(frame.encode("utf-8"))
        h.update(b"\x00")
    return h.hexdigest()


@dataclass
class HeadlessResult:
    key: str
    sha256: str
    frames: int
    width: int
    height: int
    seed: int
    theme: str
    params: Dict[str, Any] = field(default_factory=dict)


def run_and_write(key: str, out_json: Path, frames: int = 60, width: int = 80, height: int = 24, *,
                  seed: int = 0, theme: str = "default", text: str = "",
                  params: Optional[Dict[str, Any]] = None) -> HeadlessResult:
    sha = run_headless(key, frames, width, height, seed=seed, theme=theme, text=text, params=params)
    res = HeadlessResult(key=key, sha256=sha, frames=int(frames), width=int(width), height=int(height),
                         seed=int(seed), theme=theme, params=dict(params or {}))
    Path(out_json).write_text(json.dumps(asdict(res), indent=2), encoding="utf-8")
    return res
