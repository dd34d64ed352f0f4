from __future__ import annotations
from typing import Dict, Any, List

from .registry import PARAMS

# Keys every effect receives even if it doesn't list them in USES
ALWAYS_KEYS = ["display"]


def _copy_default(v: Any) -> Any:
    return list(v) if isinstance(v, list) else v


def defaults_for(keys: List[str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for k in list(keys) + ALWAYS_KEYS:
        if k in PARAMS:
            out[k] = _copy_default(PARAMS[k].get("default"))
    return out

def ensure_params(params: Dict[str, Any] | None, keys: List[str]) -> Dict[str, Any]:
    """Return a params dict that contains at least defaults for given keys."""
    params = dict(params or {})
    for k in list(keys) + ALWAYS_KEYS:
        if k not in params and k in PARAMS:
            params[k] = _copy_default(PARAMS[k].get("default"))
    return params
