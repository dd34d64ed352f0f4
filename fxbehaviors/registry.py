from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional

from fxapp import log_buffer
from fxbehaviors.state import EffectContext
from fxparams.resolve import resolve

REGISTRY: Dict[str, "EffectDef"] = {}

LIBRARY_VERSION = "1.0.2"

CATEGORIES = ("particle", "text", "abstract", "scene")


class EffectDef:
    # factory(ctx) -> effect instance exposing step/render/reset/resize

    def __init__(self, key, *, factory, uses=None, title=None, requires_text=False,
                 category="abstract", description="", version="1.0.0"):
        self.key = str(key)
        self.title = title or self.key
        self.factory = factory
        self.uses = list(uses or [])
        self.requires_text = bool(requires_text)
        self.category = str(category)
        self.description = str(description)
        self.version = str(version)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "title": self.title,
            "requires_text": self.requires_text,
            "category": self.category,
            "description": self.description,
            "version": self.version,
            "uses": list(self.uses),
        }

def register(defn: EffectDef):
    if defn.key in REGISTRY:
        raise ValueError(f"Duplicate effect key: {defn.key}")
    if defn.factory is None:
        raise ValueError(f"Effect '{defn.key}' missing factory")
    if defn.category not in CATEGORIES:
        raise ValueError(f"Effect '{defn.key}' has unknown category {defn.category!r}")
    REGISTRY[defn.key] = defn
    return defn

def ensure_loaded() -> None:
    if not REGISTRY:
        from fxbehaviors.auto_load import register_all
        register_all()
        log_buffer.push(f"[registry] loaded {len(REGISTRY)} effects")

def get_effect(key: str) -> Optional[EffectDef]:
    ensure_loaded()
    return REGISTRY.get(str(key))

def require_effect(key: str) -> EffectDef:
    defn = get_effect(key)
    if defn is None:
        raise ValueError(f"Unknown effect: {key!r} (known: {', '.join(list_effects())})")
    return defn

def list_effects() -> List[str]:
    ensure_loaded()
    return sorted(REGISTRY.keys())

def text_effects() -> List[str]:
    ensure_loaded()
    return sorted(k for k, d in REGISTRY.items() if d.requires_text)

def make_context(key: str, width: int, height: int, *, seed: int = 0, theme: str = "default",
                 text: str = "", params: Optional[Dict[str, Any]] = None,
                 log: Optional[Callable[[str], None]] = None) -> EffectContext:
    """Build an EffectContext with params resolved against the effect's USES."""
    defn = require_effect(key)
    ctx = EffectContext(
        width=width,
        height=height,
        seed=seed,
        theme=theme,
        text=text,
        params=resolve(params, defn.uses),
    )
    if log is not None:
        ctx.log = log
    return ctx

def create_effect(key: str, ctx: Optional[EffectContext] = None, **kw):
    defn = require_effect(key)
    if ctx is None:
        ctx = make_context(key, kw.pop("width", 80), kw.pop("height", 24), **kw)
    return defn.factory(ctx)
