"""Command line entry for `python -m fxapp`.

  python -m fxapp list
  python -m fxapp play fire --theme dracula --fps 30
  python -m fxapp play beam-text --file banner.txt --display
  python -m fxapp hash ring-text --text HELLO --frames 300 --seed 7
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from fxapp import crash_reporter, log_buffer


def _read_text(args) -> str:
    if args.file:
        return Path(args.file).read_text(encoding="utf-8")
    return args.text or ""


def _params(args) -> dict:
    params = {}
    if args.params:
        params.update(json.loads(args.params))
    if args.display:
        params["display"] = True
    return params


def cmd_list(args) -> int:
    from fxbehaviors.registry import REGISTRY, list_effects
    from fxthemes.palettes import list_themes

    for key in list_effects():
        d = REGISTRY[key]
        flag = " (text)" if d.requires_text else ""
        print(f"{key:<12} {d.category:<9} {d.description}{flag}")
    print("")
    print("themes: " + ", ".join(list_themes()))
    return 0


def cmd_play(args) -> int:
    from fxbehaviors.registry import create_effect, make_context, require_effect
    from fxpreview.player import Player, terminal_size

    defn = require_effect(args.effect)
    text = _read_text(args)
    if defn.requires_text and not text:
        log_buffer.push(f"[cli] {args.effect} has no text; rendering an empty canvas")
    w, h = terminal_size()
    ctx = make_context(args.effect, w, h, seed=args.seed, theme=args.theme, text=text, params=_params(args))
    Player(create_effect(args.effect, ctx), fps=args.fps, max_ticks=args.frames).run()
    return 0


def cmd_hash(args) -> int:
    from fxpreview.headless import run_and_write, run_headless

    text = _read_text(args)
    if args.out:
        res = run_and_write(args.effect, Path(args.out), args.frames, args.width, args.height,
                            seed=args.seed, theme=args.theme, text=text, params=_params(args))
        print(res.sha256)
        return 0
    print(run_headless(args.effect, args.frames, args.width, args.height,
                       seed=args.seed, theme=args.theme, text=text, params=_params(args)))
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="fxapp", description="Terminal procedural animation effects")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_list = sub.add_parser("list", help="list effects and themes")
    p_list.set_defaults(func=cmd_list)

    def common(p):
        p.add_argument("effect")
        p.add_argument("--theme", default="default")
        src = p.add_mutually_exclusive_group()
        src.add_argument("--text", default="")
        src.add_argument("--file", default="")
        p.add_argument("--seed", type=int, default=0)
        p.add_argument("--display", action="store_true", help="hold the final frame instead of looping")
        p.add_argument("--params", default="", help="JSON object of param overrides")

    p_play = sub.add_parser("play", help="play an effect in the terminal")
    common(p_play)
    p_play.add_argument("--fps", type=float, default=20.0)
    p_play.add_argument("--frames", type=int, default=0, help="stop after N ticks (0 = until Ctrl-C)")
    p_play.set_defaults(func=cmd_play)

    p_hash = sub.add_parser("hash", help="render headless and print the frame hash")
    common(p_hash)
    p_hash.add_argument("--frames", type=int, default=60)
    p_hash.add_argument("--width", type=int, default=80)
    p_hash.add_argument("--height", type=int, default=24)
    p_hash.add_argument("--out", default="", help="also write a JSON result here")
    p_hash.set_defaults(func=cmd_hash)
    return ap


def main(argv: Optional[list] = None) -> int:
    crash_reporter.install_global()
    args = build_parser().parse_args(argv)
    try:
        return int(args.func(args))
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
