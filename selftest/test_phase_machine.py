import pytest

from fxapp import log_buffer
from fxruntime.phase_machine_v1 import PhaseMachineV1, PhaseV1


def _phases(hold=3):
    return [
        PhaseV1("static", ticks=2),
        PhaseV1("move", ticks=3),
        PhaseV1("hold", ticks=hold),
    ]


def test_phases_run_in_declared_order():
    pm = PhaseMachineV1(_phases(), display=True)
    seen = [pm.step() for _ in range(6)]
    assert seen == ["static", "move", "move", "move", "hold", "hold"]
    assert list(pm.history) == ["static", "move", "hold"]


def test_display_holds_forever():
    pm = PhaseMachineV1(_phases(), display=True)
    for _ in range(5):
        pm.step()
    assert pm.current == "hold"
    for _ in range(500):
        assert pm.step() == "hold"
    assert pm.loops == 0


def test_loop_returns_to_first_phase_after_hold_budget():
    looped = []
    pm = PhaseMachineV1(_phases(hold=4), display=False, on_loop=lambda: looped.append(1))
    while pm.current != "hold":
        pm.step()
    for _ in range(3):
        assert pm.step() == "hold"
    assert pm.step() == "static"
    assert looped == [1]
    assert pm.loops == 1


def test_until_predicate_and_hooks():
    state = {"n": 0, "entered": 0}
    pm = PhaseMachineV1(
        [
            PhaseV1("count", until=lambda: state["n"] >= 4,
                    on_tick=lambda t: state.__setitem__("n", t)),
            PhaseV1("done", on_enter=lambda: state.__setitem__("entered", state["entered"] + 1)),
        ],
    )
    for _ in range(4):
        pm.step()
    assert pm.current == "done"
    assert state["entered"] == 1


def test_successor_override_cycles():
    cycles = {"n": 0}

    def after_spin():
        cycles["n"] += 1
        return "swirl" if cycles["n"] < 3 else "land"

    pm = PhaseMachineV1(
        [
            PhaseV1("swirl", ticks=1),
            PhaseV1("spin", ticks=1, next=after_spin),
            PhaseV1("land", ticks=1),
            PhaseV1("hold", ticks=1),
        ],
        display=True,
    )
    for _ in range(20):
        pm.step()
    assert list(pm.history) == ["swirl", "spin", "swirl", "spin", "swirl", "spin", "land", "hold"]


def test_transitions_are_logged():
    log_buffer.clear()
    pm = PhaseMachineV1(_phases(), owner="unit")
    pm.step()
    pm.step()
    assert "[phase] unit: static -> move" in log_buffer.tail(10)


def test_bad_machines_raise():
    with pytest.raises(ValueError):
        PhaseMachineV1([])
    with pytest.raises(ValueError):
        PhaseMachineV1([PhaseV1("a"), PhaseV1("a")])
    pm = PhaseMachineV1([PhaseV1("a", ticks=1, next="nowhere"), PhaseV1("b")])
    with pytest.raises(ValueError):
        pm.step()
