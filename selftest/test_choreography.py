"""Phase-driven effects reach their hold and loop or stay as configured."""

import pytest

from fxbehaviors.registry import create_effect, make_context
from fxruntime.compositor_v1 import strip_ansi

BANNER = "GLYPH\nFX"


def _make(key, w=30, h=10, text=BANNER, **params):
    return create_effect(key, make_context(key, w, h, seed=3, text=text, params=params))


def _run_to(fx, phase, limit=20000):
    for _ in range(limit):
        if fx.phase == phase:
            return True
        fx.step()
    return fx.phase == phase


@pytest.mark.parametrize("key,params", [
    ("pour", {}),
    ("pour", {"pour_direction": "up", "pour_gradient_direction": "vertical"}),
    ("pour", {"pour_direction": "left"}),
    ("pour", {"pour_direction": "right"}),
    ("beam-text", {}),
    ("beams", {}),
    ("decrypt", {"decrypt_fast_frames": 5}),
    ("print", {}),
    ("ring-text", {"ring_static_ticks": 5, "ring_disperse_ticks": 10, "ring_transition_ticks": 5,
                   "ring_spin_ticks": 10}),
    ("blackhole", {"bh_static_ticks": 5, "bh_forming_ticks": 5, "bh_consuming_ticks": 10,
                   "bh_collapsing_ticks": 5, "bh_exploding_ticks": 5, "bh_returning_ticks": 5}),
])
def test_reaches_hold_and_settles_on_the_text(key, params):
    fx = _make(key, display=True, **params)
    assert _run_to(fx, "hold")
    for _ in range(300):
        fx.step()
    assert fx.phase == "hold"
    if key != "beams":
        plain = fx.plain()
        assert "GLYPH" in plain
        assert "FX" in plain


def test_looping_effect_restarts_when_hold_budget_elapses():
    fx = _make("print", print_hold_ticks=7)
    assert _run_to(fx, "hold")
    for _ in range(6):
        fx.step()
        assert fx.phase == "hold"
    fx.step()
    assert fx.phase == "printing"
    assert fx.pm.loops == 1
    assert fx.line == 0 and fx.col == 0


def test_ring_text_spins_the_configured_number_of_cycles():
    fx = _make(
        "ring-text", display=True, ring_spin_cycles=3, ring_static_ticks=2,
        ring_disperse_ticks=4, ring_transition_ticks=2, ring_spin_ticks=3,
    )
    assert _run_to(fx, "hold")
    assert list(fx.pm.history) == [
        "static",
        "swirl_to_rings", "spin",
        "swirl_to_rings", "spin",
        "swirl_to_rings", "spin",
        "return_to_text", "hold",
    ]


def test_ring_text_assigns_rings_round_robin():
    fx = _make("ring-text")
    n = len(fx.rings)
    assert n >= 1
    for i, e in enumerate(fx.entities):
        assert e.group_id == i % n
    assert [r.clockwise for r in fx.rings] == [i % 2 == 0 for i in range(n)]
    for r in fx.rings:
        assert len(r.gradient) == 9


def test_ring_text_on_a_tiny_canvas_still_has_a_ring():
    fx = _make("ring-text", w=2, h=2, text="AB", ring_gap=1.0)
    assert len(fx.rings) == 1
    for _ in range(50):
        fx.step()


def test_pour_arrives_from_the_named_edge():
    fx = _make("pour", w=20, h=8, text="AB", pour_direction="down")
    e = fx.entities[0]
    assert e.state["start"] == (float(e.ox), 0.0)
    fx = _make("pour", w=20, h=8, text="AB", pour_direction="left")
    e = fx.entities[0]
    assert e.state["start"] == (19.0, float(e.oy))


def test_pour_unknown_direction_falls_back_to_down():
    fx = _make("pour", pour_direction="sideways")
    assert fx.direction == "down"


def test_pour_colors_follow_final_stops():
    fx = _make("pour", w=10, h=3, text="A        B", display=True,
               final_colors=["#ff0000", "#0000ff"])
    assert _run_to(fx, "hold")
    colors = {e.glyph: e.color for e in fx.entities}
    assert colors["A"] == "#ff0000"
    assert colors["B"] == "#0000ff"


def test_beam_text_auto_size_fits_the_text():
    fx = _make("beam-text", w=80, h=24, beam_auto_size=True)
    assert (fx.width, fx.height) == (5, 2)
    assert len(fx.render().split("\n")) == 2


def test_beams_background_covers_every_cell():
    fx = _make("beams", w=12, h=4, text="", display=True)
    assert len(fx.entities) == 48
    assert _run_to(fx, "hold")
    assert all(e.visible for e in fx.entities)


def test_beams_background_skips_the_final_wipe():
    fx = _make("beams", w=12, h=4, text="", display=True)
    assert [p.name for p in fx.pm.phases] == ["beams", "hold"]
    assert fx.wipe is None
    assert _run_to(fx, "hold")
    assert "final_wipe" not in fx.pm.history
    text_fx = _make("beam-text")
    assert [p.name for p in text_fx.pm.phases] == ["beams", "final_wipe", "hold"]


def test_blackhole_swallows_then_restores():
    fx = _make("blackhole", display=True, bh_static_ticks=2, bh_forming_ticks=2,
               bh_consuming_ticks=20, bh_collapsing_ticks=3, bh_exploding_ticks=3, bh_returning_ticks=6)
    assert _run_to(fx, "collapsing")
    assert fx.consumed == len(fx.entities)
    assert not any(e.visible for e in fx.entities)
    assert all((e.x, e.y) == (fx.cx, fx.cy) for e in fx.entities)
    assert _run_to(fx, "hold")
    for e in fx.entities:
        assert (round(e.x), round(e.y)) == (e.ox, e.oy)
        assert e.visible


def test_blackhole_without_text_uses_stars():
    fx = _make("blackhole", text="")
    assert 200 <= len(fx.entities) < 400
    assert len(fx.border) >= 20


def test_decrypt_types_then_resolves():
    fx = _make("decrypt", display=True, decrypt_typing_chance=1.0, decrypt_typing_speed=1,
               decrypt_fast_frames=2)
    n = len(fx.entities)
    assert n == 7
    fx.step()
    assert fx.typed == 1
    assert _run_to(fx, "decrypting")
    assert fx.typed == n
    assert _run_to(fx, "hold")
    assert all(e.cur_glyph == e.glyph for e in fx.entities)


def test_print_head_moves_across_the_line():
    fx = _make("print", w=20, h=3, text="abcdef", print_speed=2, print_char_delay=1)
    fx.step()
    line = strip_ansi(fx.render()).split("\n")[1]
    assert line.strip().startswith("ab")
    assert "█" in line
    assert fx.col == 2
