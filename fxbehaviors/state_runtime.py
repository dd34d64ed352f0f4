from __future__ import annotations
from typing import Any, List, MutableSequence, Sequence, TypeVar
import random

T = TypeVar("T")


class DeterministicRNG:
    """Deterministic RNG owned by one effect instance (never shared)."""
    def __init__(self, seed: int = 0):
        self.seed = int(seed) & 0xFFFFFFFF
        self._rng = random.Random(self.seed)

    def reseed(self, seed: int | None = None) -> None:
        if seed is not None:
            self.seed = int(seed) & 0xFFFFFFFF
        self._rng.seed(self.seed)

    def rand(self) -> float:
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        # Degenerate ranges collapse instead of raising on tiny canvases.
        if b < a:
            return a
        return self._rng.randint(a, b)

    def intn(self, n: int) -> int:
        """Uniform in [0, n); 0 for n <= 0."""
        if n <= 0:
            return 0
        return self._rng.randrange(n)

    def choice(self, seq: Sequence[T]) -> T:
        return self._rng.choice(seq)

    def uniform(self, a: float, b: float) -> float:
        return self._rng.uniform(a, b)

    def shuffle(self, seq: MutableSequence[Any]) -> None:
        self._rng.shuffle(seq)

    def sample(self, seq: Sequence[T], k: int) -> List[T]:
        k = max(0, min(int(k), len(seq)))
        return self._rng.sample(list(seq), k)

def clamp(x: float, lo: float, hi: float) -> float:
    if x < lo: return lo
    if x > hi: return hi
    return x
