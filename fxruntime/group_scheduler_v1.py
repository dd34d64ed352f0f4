"""Group scheduler runtime (GroupScheduler V1).

Partitions entities into row/column/diagonal groups and reveals them over time.

Design goals:
- Deterministic: every random choice goes through the injected RNG.
- One partition per *lane*. Inside a lane each entity id belongs to exactly one
  group; effects that sweep the same entities twice (beams: rows and columns)
  use two lanes.
- Speed is fractional: ``cursor += speed`` each tick, the integer part is
  revealed and the remainder carries forward.

Arming modes:
- burst: wait ``arm_delay`` ticks, then arm a random number of rounds where
  every lane arms its next idle group.
- sequential: one group per lane at a time, ``gap`` idle ticks in between.
- wipe: ``per_tick`` groups per lane complete instantly each tick.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

MIN_SPEED = 1e-3

AXES = ("row", "column", "diagonal")
MODES = ("burst", "sequential", "wipe")


@dataclass
class GroupV1:
    gid: int
    direction: str
    key: int
    entity_ids: List[int] = field(default_factory=list)
    speed: float = 1.0
    cursor: float = 0.0
    revealed: int = 0
    armed: bool = False

    def __post_init__(self) -> None:
        self.speed = max(MIN_SPEED, float(self.speed))

    @property
    def complete(self) -> bool:
        return self.revealed >= len(self.entity_ids)

    @property
    def started(self) -> bool:
        return self.armed or self.revealed > 0

    def advance(self) -> List[int]:
        """Move the cursor by one tick; returns ids revealed this tick."""
        if not self.armed or self.complete:
            return []
        self.cursor += self.speed
        n = int(self.cursor)
        self.cursor -= n
        take = self.entity_ids[self.revealed:self.revealed + n]
        self.revealed += len(take)
        if self.complete:
            self.armed = False
        return take

    def reveal_all(self) -> List[int]:
        take = self.entity_ids[self.revealed:]
        self.revealed = len(self.entity_ids)
        self.armed = False
        self.cursor = 0.0
        return take

    def trail(self, length: int) -> List[int]:
        """Last ``length`` revealed ids, newest first."""
        if length <= 0 or self.revealed <= 0:
            return []
        lo = max(0, self.revealed - int(length))
        return list(reversed(self.entity_ids[lo:self.revealed]))

    def reset(self) -> None:
        self.cursor = 0.0
        self.revealed = 0
        self.armed = False


def _key_of(axis: str, x: int, y: int) -> int:
    if axis == "row":
        return y
    if axis == "column":
        return x
    return x + y


def _order_of(axis: str, x: int, y: int) -> int:
    return y if axis == "column" else x


def build_groups(
    entities: Sequence,
    axis: str,
    rng,
    *,
    reverse_chance: float = 0.5,
    shuffle: bool = True,
    descending: bool = False,
    speed_for: Optional[Callable[[str], float]] = None,
    gid_start: int = 0,
) -> List[GroupV1]:
    """Bucket entities (by origin) along ``axis``.

    Buckets are sorted by the orthogonal coordinate, each reversed with
    ``reverse_chance``; bucket order is shuffled unless ``shuffle`` is False,
    in which case it is ascending (or descending) by key.
    """
    if axis not in AXES:
        raise ValueError(f"Unknown group axis: {axis!r}")
    buckets: Dict[int, List[Tuple[int, int]]] = {}
    for e in entities:
        k = _key_of(axis, e.ox, e.oy)
        buckets.setdefault(k, []).append((_order_of(axis, e.ox, e.oy), e.eid))

    keys = sorted(buckets.keys(), reverse=descending)
    groups: List[GroupV1] = []
    for k in keys:
        members = [eid for _, eid in sorted(buckets[k])]
        if reverse_chance > 0.0 and rng.rand() < reverse_chance:
            members.reverse()
        speed = speed_for(axis) if speed_for is not None else 1.0
        groups.append(GroupV1(gid=0, direction=axis, key=k, entity_ids=members, speed=speed))

    if shuffle:
        rng.shuffle(groups)
    for i, g in enumerate(groups):
        g.gid = gid_start + i
    return groups


class GroupSchedulerV1:
    def __init__(
        self,
        rng,
        *,
        mode: str = "burst",
        arm_delay: int = 2,
        arm_min: int = 1,
        arm_max: int = 5,
        arm_nudge: float = 0.0,
        gap: int = 0,
        per_tick: int = 1,
    ):
        if mode not in MODES:
            raise ValueError(f"Unknown scheduler mode: {mode!r}")
        self.rng = rng
        self.mode = mode
        self.arm_delay = max(0, int(arm_delay))
        self.arm_min = max(1, int(arm_min))
        self.arm_max = max(self.arm_min, int(arm_max))
        self.arm_nudge = float(arm_nudge)
        self.gap = max(0, int(gap))
        self.per_tick = max(1, int(per_tick))

        self.lanes: Dict[str, List[GroupV1]] = {}
        self._next: Dict[str, int] = {}
        self._gap_left: Dict[str, int] = {}
        self.delay = 0
        self.ticks = 0

    def add_lane(self, name: str, groups: List[GroupV1]) -> None:
        self.lanes[str(name)] = list(groups)
        self._next[str(name)] = 0
        self._gap_left[str(name)] = 0

    def groups(self) -> List[GroupV1]:
        out: List[GroupV1] = []
        for lane in self.lanes.values():
            out.extend(lane)
        return out

    @property
    def done(self) -> bool:
        return all(g.complete for g in self.groups())

    def active(self) -> List[GroupV1]:
        return [g for g in self.groups() if g.armed and not g.complete]

    def _arm_next(self, lane: str) -> Optional[GroupV1]:
        groups = self.lanes[lane]
        i = self._next[lane]
        while i < len(groups) and groups[i].started:
            i += 1
        self._next[lane] = i + 1 if i < len(groups) else i
        if i >= len(groups):
            return None
        g = groups[i]
        if g.complete:
            # empty group: nothing to reveal
            return g
        g.armed = True
        g.cursor += self.arm_nudge
        return g

    def step(self) -> List[Tuple[GroupV1, List[int]]]:
        """Arm per mode, advance armed groups; returns (group, new ids) pairs."""
        self.ticks += 1
        if self.mode == "wipe":
            return self._step_wipe()
        if self.mode == "burst":
            self._arm_burst()
        else:
            self._arm_sequential()

        out: List[Tuple[GroupV1, List[int]]] = []
        for g in self.groups():
            if not g.armed:
                continue
            ids = g.advance()
            if ids:
                out.append((g, ids))
        return out

    def _arm_burst(self) -> None:
        if self.delay > 0:
            self.delay -= 1
            return
        rounds = self.rng.randint(self.arm_min, self.arm_max)
        armed = False
        for _ in range(rounds):
            for lane in self.lanes:
                if self._arm_next(lane) is not None:
                    armed = True
        if armed:
            self.delay = self.arm_delay

    def _arm_sequential(self) -> None:
        for lane, groups in self.lanes.items():
            if any(g.armed and not g.complete for g in groups):
                continue
            if self._gap_left[lane] > 0:
                self._gap_left[lane] -= 1
                continue
            g = self._arm_next(lane)
            if g is not None:
                self._gap_left[lane] = self.gap

    def _step_wipe(self) -> List[Tuple[GroupV1, List[int]]]:
        out: List[Tuple[GroupV1, List[int]]] = []
        for lane, groups in self.lanes.items():
            n = 0
            i = self._next[lane]
            while i < len(groups) and n < self.per_tick:
                g = groups[i]
                ids = g.reveal_all()
                if ids:
                    out.append((g, ids))
                i += 1
                n += 1
            self._next[lane] = i
        return out

    def trail(self, group: GroupV1, length: int) -> List[int]:
        return group.trail(length)

    def reset(self) -> None:
        for g in self.groups():
            g.reset()
        for lane in self.lanes:
            self._next[lane] = 0
            self._gap_left[lane] = 0
        self.delay = 0
        self.ticks = 0
