import pytest

from fxbehaviors.state_runtime import DeterministicRNG
from fxruntime.entities_v1 import grid_entities
from fxruntime.group_scheduler_v1 import GroupSchedulerV1, GroupV1, build_groups


def test_row_group_reveals_one_per_tick():
    g = GroupV1(gid=0, direction="row", key=0, entity_ids=[0, 1, 2, 3, 4], speed=1.0, armed=True)
    for tick in range(1, 6):
        assert len(g.advance()) == 1
        assert g.revealed == tick
        assert g.complete == (tick == 5)
    assert g.advance() == []


def test_fractional_speed_carries_remainder():
    g = GroupV1(gid=0, direction="row", key=0, entity_ids=list(range(10)), speed=0.5, armed=True)
    counts = [len(g.advance()) for _ in range(4)]
    assert counts == [0, 1, 0, 1]


def test_each_lane_is_a_partition():
    rng = DeterministicRNG(5)
    ents = grid_entities(7, 4)
    ids = sorted(e.eid for e in ents)
    for axis in ("row", "column", "diagonal"):
        groups = build_groups(ents, axis, rng)
        seen = [eid for g in groups for eid in g.entity_ids]
        assert sorted(seen) == ids
        assert len(set(seen)) == len(seen)
    with pytest.raises(ValueError):
        build_groups(ents, "spiral", rng)


def test_empty_groups_count_as_complete():
    sched = GroupSchedulerV1(DeterministicRNG(0), mode="sequential")
    sched.add_lane("row", [GroupV1(gid=0, direction="row", key=0)])
    assert sched.done
    sched.step()
    assert sched.done


@pytest.mark.parametrize("mode", ["burst", "sequential", "wipe"])
def test_every_mode_terminates_and_reveals_everything(mode):
    rng = DeterministicRNG(11)
    ents = grid_entities(12, 6)
    sched = GroupSchedulerV1(rng, mode=mode, gap=2, per_tick=2)
    sched.add_lane("row", build_groups(ents, "row", rng, speed_for=lambda _a: 0.7))
    sched.add_lane("column", build_groups(ents, "column", rng, speed_for=lambda _a: 1.3))
    revealed = {"row": set(), "column": set()}
    for _ in range(5000):
        if sched.done:
            break
        for g, ids in sched.step():
            revealed[g.direction].update(ids)
    assert sched.done
    assert revealed["row"] == revealed["column"] == {e.eid for e in ents}


def test_sequential_descending_order():
    rng = DeterministicRNG(2)
    ents = grid_entities(3, 3)
    groups = build_groups(ents, "row", rng, reverse_chance=0.0, shuffle=False, descending=True)
    assert [g.key for g in groups] == [2, 1, 0]
    sched = GroupSchedulerV1(rng, mode="sequential")
    sched.add_lane("row", groups)
    first = sched.step()
    assert first and first[0][0].key == 2


def test_reset_rewinds_groups():
    rng = DeterministicRNG(4)
    sched = GroupSchedulerV1(rng, mode="wipe", per_tick=10)
    sched.add_lane("diagonal", build_groups(grid_entities(4, 4), "diagonal", rng))
    sched.step()
    assert sched.done
    sched.reset()
    assert not sched.done
    assert sched.ticks == 0


def test_unknown_mode_raises():
    with pytest.raises(ValueError):
        GroupSchedulerV1(DeterministicRNG(0), mode="random")
