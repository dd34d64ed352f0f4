"""Theme palettes.

The catalog lives in ``palettes.json`` next to this module: one color list per
(kind, theme). Theme lookups never fail; unknown themes fall back to ``default`` and
an empty list falls back to a single default color.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

KINDS = ("fire", "matrix", "particle", "rain", "fireworks", "gradient", "beam", "aquarium")

_CATALOG: Optional[Dict[str, Any]] = None


def load_catalog() -> Dict[str, Any]:
    global _CATALOG
    if _CATALOG is not None:
        return _CATALOG
    p = Path(__file__).resolve().parent / "palettes.json"
    _CATALOG = json.loads(p.read_text(encoding="utf-8"))
    return _CATALOG


def canonical_theme(theme: str) -> str:
    cat = load_catalog()
    name = str(theme or "default").strip().lower()
    name = cat.get("aliases", {}).get(name, name)
    if name not in cat.get("themes", []):
        return "default"
    return name


def list_themes() -> List[str]:
    return list(load_catalog().get("themes", []))


def get_palette(kind: str, theme: str = "default") -> List[str]:
    cat = load_catalog()
    if kind not in KINDS:
        raise ValueError(f"Unknown palette kind: {kind!r}")
    table = cat.get("kinds", {}).get(kind, {})
    colors = table.get(canonical_theme(theme)) or table.get("default") or []
    if not colors:
        return [str(cat.get("default_color", "#ffffff"))]
    return list(colors)


def aquarium_roles(theme: str = "default") -> Dict[str, Any]:
    """Spread the three aquarium colors over the scene's props."""
    c = get_palette("aquarium", theme)
    if len(c) >= 3:
        return {
            "fish": [c[0], c[1]],
            "water": [c[1], c[2]],
            "seaweed": [c[2], c[0]],
            "bubble": c[2],
            "diver": c[0],
            "boat": c[1],
            "mermaid": c[0],
            "anchor": c[1],
        }
    return {
        "fish": ["#00d1ff", "#8a008a"],
        "water": ["#004d66", "#003d52"],
        "seaweed": ["#00ff00", "#00cc00"],
        "bubble": "#ffffff",
        "diver": "#ff8800",
        "boat": "#8b4513",
        "mermaid": "#ff79c6",
        "anchor": "#666666",
    }
