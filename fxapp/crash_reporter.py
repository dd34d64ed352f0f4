from __future__ import annotations
"""Crash reports for a running effect.

The player owns the terminal, so an uncaught exception mid-animation is easy
to lose. The excepthook installed here writes a plain-text report naming the
effect that was running (key, canvas size, seed, frame and phase), the recent
phase transitions, the log tail, diagnostics and the traceback.

Reports go to ``$GLYPHFX_CRASH_DIR`` or ``./glyphfx_crash_reports``.
"""

import json
import os
import sys
import time
import traceback
from pathlib import Path
from typing import Any, Dict, Optional

ENV_DIR = "GLYPHFX_CRASH_DIR"
LOG_LINES = 250
PHASE_LINES = 40

_watched: Any = None


def _now_stamp() -> str:
    return time.strftime("%Y%m%d_%H%M%S", time.localtime())


def report_dir() -> Path:
    env = os.environ.get(ENV_DIR, "").strip()
    return Path(env) if env else Path.cwd() / "glyphfx_crash_reports"


def watch(effect) -> None:
    """Remember the effect being driven so a crash report can describe it."""
    global _watched
    _watched = effect


def watched():
    return _watched


def effect_summary(effect) -> Dict[str, Any]:
    snap = effect.snapshot()
    out: Dict[str, Any] = {k: snap.get(k) for k in ("key", "width", "height", "frame", "phase", "seed")}
    pm = getattr(effect, "pm", None)
    if pm is not None:
        out["phase_ticks"] = pm.ticks
        out["loops"] = pm.loops
        out["phase_history"] = list(pm.history)[-10:]
    return out


def _effect_section() -> str:
    if _watched is None:
        return "(no effect running)\n"
    try:
        return json.dumps(effect_summary(_watched), indent=2, default=str) + "\n"
    except Exception as e:
        return f"(effect snapshot failed: {type(e).__name__}: {e})\n"


def write_report(exc_type, exc, tb, outdir: Optional[Path] = None) -> Path:
    from fxapp import log_buffer

    outdir = Path(outdir) if outdir is not None else report_dir()
    outdir.mkdir(parents=True, exist_ok=True)
    key = getattr(_watched, "key", None) or "none"
    p = outdir / f"crash_{_now_stamp()}_{key}.txt"

    try:
        from fxapp.diagnostics import as_text as _diag
        diag = _diag() + "\n"
    except Exception as e:
        diag = f"(diagnostics unavailable: {e})\n"

    phases = log_buffer.tagged("phase", PHASE_LINES)
    dropped = log_buffer.dropped()
    log_tail = "\n".join(log_buffer.numbered(LOG_LINES)) + "\n"
    if dropped:
        log_tail = f"({dropped} older lines dropped)\n" + log_tail

    trace = "".join(traceback.format_exception(exc_type, exc, tb))

    p.write_text(
        "GLYPHFX CRASH REPORT\n"
        f"timestamp={_now_stamp()}\n"
        f"argv={sys.argv}\n"
        "\n--- effect ---\n"
        + _effect_section() +
        "\n--- phase transitions ---\n"
        + ("\n".join(phases) + "\n" if phases else "(none)\n") +
        "\n--- diagnostics ---\n"
        + diag +
        "\n--- recent log ---\n"
        + log_tail +
        "\n--- traceback ---\n"
        + trace,
        encoding="utf-8",
        errors="ignore",
    )
    return p


def install_global():
    def _hook(exc_type, exc, tb):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc, tb)
            return
        try:
            rp = write_report(exc_type, exc, tb)
            key = getattr(_watched, "key", None)
            where = f" while playing {key}" if key else ""
            sys.stderr.write(f"\n[glyphfx] crashed{where}; report written to {rp}\n")
        except OSError as e:
            sys.stderr.write(f"\n[glyphfx] crash report failed: {e}\n")
        sys.__excepthook__(exc_type, exc, tb)
    sys.excepthook = _hook
