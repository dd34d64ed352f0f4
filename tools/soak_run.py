"""Soak runner.

Purpose:
- Step every registered effect headless for N ticks (and through a few resizes) to catch
  crashes, broken frame shapes and runaway entity counts.

Usage:
  python3 tools/soak_run.py --frames 2000
  python3 tools/soak_run.py --only fire,beams --width 120 --height 40

Notes:
- Text effects get a small built-in banner unless --text is given.
- It prints one status line per effect and exits non-zero on any failure.
"""
from __future__ import annotations
import argparse, sys, time, traceback
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

BANNER = " _  _  ___ \n| || ||_ _|\n| __ | | | \n|_||_||___|\n"

RESIZES = ((1, 1), (40, 12), (0, 0))


def soak_one(key: str, frames: int, width: int, height: int, seed: int, text: str) -> None:
    from fxbehaviors.registry import create_effect, make_context

    ctx = make_context(key, width, height, seed=seed, text=text)
    fx = create_effect(key, ctx)
    for i in range(frames):
        fx.step()
        out = fx.render()
        rows = out.split("\n")
        if len(rows) != fx.height:
            raise AssertionError(f"{key}: frame {i} has {len(rows)} rows, expected {fx.height}")
    for w, h in RESIZES:
        fx.resize(w, h)
        fx.step()
        if len(fx.render().split("\n")) != fx.height:
            raise AssertionError(f"{key}: bad frame after resize {w}x{h}")
    fx.resize(width, height)
    fx.reset()
    fx.step()


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--frames", type=int, default=1000)
    ap.add_argument("--width", type=int, default=80)
    ap.add_argument("--height", type=int, default=24)
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--text", default="")
    ap.add_argument("--only", default="", help="comma separated effect keys")
    args = ap.parse_args(argv)

    from fxbehaviors.registry import get_effect, list_effects

    keys = [k.strip() for k in args.only.split(",") if k.strip()] or list_effects()
    failures = 0
    t0 = time.time()
    for key in keys:
        defn = get_effect(key)
        if defn is None:
            print(f"[soak] {key}: unknown effect")
            failures += 1
            continue
        text = args.text or (BANNER if defn.requires_text else "")
        t1 = time.time()
        try:
            soak_one(key, args.frames, args.width, args.height, args.seed, text)
            print(f"[soak] {key}: OK frames={args.frames} {time.time()-t1:.2f}s")
        except Exception as e:
            failures += 1
            print(f"[soak] {key}: FAIL {type(e).__name__}: {e}")
            traceback.print_exc()
    print(f"[soak] done effects={len(keys)} failures={failures} {time.time()-t0:.1f}s")
    return 0 if failures == 0 else 2

if __name__ == "__main__":
    raise SystemExit(main())
