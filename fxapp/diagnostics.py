from __future__ import annotations
import sys, platform, json
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

def gather() -> dict:
    from fxbehaviors.registry import REGISTRY, LIBRARY_VERSION, list_effects, text_effects
    from fxthemes.palettes import list_themes

    effect_files = len([p for p in (ROOT / "fxbehaviors" / "effects").glob("*.py") if p.name != "__init__.py"])
    keys = list_effects()

    return {
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "project_root": str(ROOT),
        "library_version": LIBRARY_VERSION,
        "effects": keys,
        "versions": {k: REGISTRY[k].version for k in keys},
        "themes": list_themes(),
        "counts": {
            "effect_files": effect_files,
            "registered_effects": len(keys),
            "text_effects": len(text_effects()),
        },
    }

def as_text() -> str:
    d = gather()
    return json.dumps(d, indent=2)
