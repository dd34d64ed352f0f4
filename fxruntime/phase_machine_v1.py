"""Phase machine runtime (PhaseMachine V1).

A linear cousin of ``fsm_v1``: ordered named phases with tick budgets and exit
predicates, used by every choreography effect.

Design goals:
- Phases run in declared order; the only exceptions are explicit ``next``
  overrides (a name, or a callable returning a name).
- The hold phase obeys ``display``: display=True holds forever, display=False
  rewinds to the first phase after its budget and calls ``on_loop``.
- The tick counter resets on every transition.

Typical usage inside an effect:

    pm = PhaseMachineV1(
        [
            PhaseV1("static", ticks=60),
            PhaseV1("swirl", until=lambda: all_arrived()),
            PhaseV1("hold", ticks=100),
        ],
        display=False,
        on_loop=self._rewind,
    )
    pm.step()
    if pm.current == "swirl":
        ...
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, List, Optional, Sequence, Union

from fxapp import log_buffer

Successor = Union[str, Callable[[], Optional[str]]]


@dataclass
class PhaseV1:
    name: str
    ticks: Optional[int] = None
    until: Optional[Callable[[], bool]] = None
    on_enter: Optional[Callable[[], None]] = None
    on_tick: Optional[Callable[[int], None]] = None
    next: Optional[Successor] = None


class PhaseMachineV1:
    def __init__(
        self,
        phases: Sequence[PhaseV1],
        *,
        display: bool = False,
        hold_phase: str = "hold",
        on_loop: Optional[Callable[[], None]] = None,
        owner: str = "",
        history_len: int = 256,
    ):
        if not phases:
            raise ValueError("PhaseMachineV1 needs at least one phase")
        names = [p.name for p in phases]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate phase names: {names}")
        self.phases: List[PhaseV1] = list(phases)
        self._index: Dict[str, int] = {p.name: i for i, p in enumerate(self.phases)}
        self.display = bool(display)
        self.hold_phase = hold_phase
        self.on_loop = on_loop
        self.owner = owner

        self.idx = 0
        self.ticks = 0
        self.transitions = 0
        self.loops = 0
        self.history: Deque[str] = deque(maxlen=max(1, int(history_len)))
        self._enter(0)

    @property
    def current(self) -> str:
        return self.phases[self.idx].name

    @property
    def phase(self) -> PhaseV1:
        return self.phases[self.idx]

    def budget(self, name: str) -> Optional[int]:
        p = self.phases[self._index[name]]
        return p.ticks

    def _enter(self, idx: int) -> None:
        self.idx = idx
        self.ticks = 0
        self.history.append(self.current)
        p = self.phases[idx]
        if p.on_enter is not None:
            p.on_enter()

    def _goto(self, idx: int) -> None:
        prev = self.current
        self.transitions += 1
        self._enter(idx)
        log_buffer.push(f"[phase] {self.owner or 'fx'}: {prev} -> {self.current}")

    def _successor(self, p: PhaseV1) -> Optional[int]:
        nxt = p.next
        if callable(nxt):
            nxt = nxt()
        if isinstance(nxt, str) and nxt:
            if nxt not in self._index:
                raise ValueError(f"Unknown phase: {nxt!r}")
            return self._index[nxt]
        if self.idx + 1 < len(self.phases):
            return self.idx + 1
        return None

    def step(self) -> str:
        """Advance one tick; returns the current phase name afterwards."""
        p = self.phase
        self.ticks += 1
        if p.on_tick is not None:
            p.on_tick(self.ticks)

        expired = p.ticks is not None and self.ticks >= int(p.ticks)
        satisfied = p.until is not None and bool(p.until())
        if not (expired or satisfied):
            return self.current

        if p.name == self.hold_phase:
            if self.display:
                return self.current
            self.loops += 1
            self._goto(0)
            if self.on_loop is not None:
                self.on_loop()
            return self.current

        nxt = self._successor(p)
        if nxt is not None:
            self._goto(nxt)
        return self.current

    def jump(self, name: str) -> None:
        self._goto(self._index[name])

    def reset(self) -> None:
        self.transitions = 0
        self.loops = 0
        self.history.clear()
        self._enter(0)

    def to_dict(self) -> Dict[str, object]:
        return {
            "phase": self.current,
            "ticks": self.ticks,
            "transitions": self.transitions,
            "loops": self.loops,
            "display": self.display,
        }
