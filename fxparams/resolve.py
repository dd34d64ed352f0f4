from __future__ import annotations
from typing import Dict, Any, List

from fxruntime.interp_v1 import normalize_hex

from .ensure import ensure_params
from .registry import PARAMS

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off", "")


def clamp_param(key: str, v: Any):
    """Coerce ``v`` to the registered type of ``key`` and clamp it to range.

    Never raises for a bad value; falls back to the registered default.
    Unknown keys pass through untouched.
    """
    spec = PARAMS.get(key) or {}
    t = spec.get("type")

    if t == "float":
        try:
            v = float(v)
        except (TypeError, ValueError):
            v = float(spec.get("default", 0.0))
        if v != v:  # NaN
            v = float(spec.get("default", 0.0))
        mn = spec.get("min", None)
        mx = spec.get("max", None)
        if mn is not None and v < float(mn):
            v = float(mn)
        if mx is not None and v > float(mx):
            v = float(mx)
        return v

    if t == "int":
        try:
            v = int(round(float(v)))
        except (TypeError, ValueError, OverflowError):
            v = int(spec.get("default", 0))
        mn = spec.get("min", None)
        mx = spec.get("max", None)
        if mn is not None and v < int(mn):
            v = int(mn)
        if mx is not None and v > int(mx):
            v = int(mx)
        return v

    if t == "bool":
        if isinstance(v, str):
            s = v.strip().lower()
            if s in _TRUE:
                return True
            if s in _FALSE:
                return False
            return bool(spec.get("default", False))
        return bool(v)

    if t == "enum":
        choices = list(spec.get("choices", []) or [])
        s = str(v) if v is not None else str(spec.get("default", ""))
        if choices and s not in choices:
            return str(spec.get("default", choices[0]))
        return s

    if t == "str":
        if v is None:
            return str(spec.get("default", ""))
        s = str(v)
        return s if s else str(spec.get("default", ""))

    if t == "colors":
        if isinstance(v, str):
            v = [p for p in v.replace(";", ",").split(",") if p.strip()]
        if not isinstance(v, (list, tuple)):
            return list(spec.get("default", []))
        return [normalize_hex(c) for c in v]

    return v


def resolve(base_params: Dict[str, Any] | None, keys: List[str]) -> Dict[str, Any]:
    """Fill defaults for ``keys`` then clamp every registered value."""
    params = ensure_params(base_params, keys)
    return {k: clamp_param(k, v) for k, v in params.items()}
