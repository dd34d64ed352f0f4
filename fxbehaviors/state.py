from __future__ import annotations
"""Context container handed to every effect at construction.

Design goals:
- No globals: the RNG, palette lookup and logger all hang off the context, so
  two effect instances never share randomness.
- Params are resolved (defaults filled, values clamped) before an effect sees
  them; effects just read ``ctx.params[...]``.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from fxapp import log_buffer
from fxbehaviors.state_runtime import DeterministicRNG
from fxthemes.palettes import canonical_theme, get_palette


@dataclass
class EffectContext:
    width: int = 80
    height: int = 24
    seed: int = 0
    theme: str = "default"
    text: str = ""
    params: Dict[str, Any] = field(default_factory=dict)
    log: Callable[[str], None] = log_buffer.push
    rng: Optional[DeterministicRNG] = None

    def __post_init__(self) -> None:
        self.width = max(1, int(self.width))
        self.height = max(1, int(self.height))
        self.theme = canonical_theme(self.theme)
        self.text = str(self.text or "")
        if self.rng is None:
            self.rng = DeterministicRNG(self.seed)

    def palette(self, kind: str) -> List[str]:
        return get_palette(kind, self.theme)

    def colors(self, key: str, fallback_kind: str) -> List[str]:
        """A ``colors`` param if set, else the theme palette of ``fallback_kind``."""
        v = self.params.get(key)
        if isinstance(v, list) and v:
            return list(v)
        return self.palette(fallback_kind)

    def param(self, key: str, default: Any = None) -> Any:
        return self.params.get(key, default)
