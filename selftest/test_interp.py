import math

import pytest

from fxruntime.interp_v1 import (
    EASINGS,
    WHITE,
    build_gradient,
    direction_ratio,
    fade_gradient,
    get_easing,
    lerp_color,
    pick,
    pick_stop,
    spiral_point,
)


def test_two_stop_gradient_has_steps_plus_one_entries():
    g = build_gradient(["#000000", "#ffffff"], 4)
    assert len(g) == 5
    assert g[0] == "#000000"
    assert g[4] == "#ffffff"


def test_multi_stop_gradient_endpoints_are_exact():
    for steps in (1, 2, 3, 7, 12, 100):
        g = build_gradient(["#ff0000", "#00ff00", "#0000ff"], steps)
        assert len(g) == steps + 1
        assert g[0] == "#ff0000"
        assert g[-1] == "#0000ff"


def test_gradient_degenerate_inputs():
    assert build_gradient([], 10) == [WHITE]
    assert build_gradient(["#ABCDEF"], 10) == ["#abcdef"]
    # unparsable colors become white rather than raising
    assert build_gradient(["nope", "#000000"], 2)[0] == WHITE


def test_fade_gradient_dims_toward_floor():
    g = fade_gradient("#c8c8c8", 4, floor=0.5)
    assert len(g) == 5
    assert g[0] == "#c8c8c8"
    assert g[-1] == "#646464"


def test_every_easing_pins_its_endpoints():
    for name, fn in EASINGS.items():
        assert fn(0.0) == pytest.approx(0.0, abs=1e-3), name
        assert fn(1.0) == pytest.approx(1.0, abs=1e-3), name
        # out of range input is clamped
        assert fn(-3.0) == pytest.approx(0.0, abs=1e-3), name
        assert fn(4.0) == pytest.approx(1.0, abs=1e-3), name


def test_easing_aliases_and_unknown_name():
    assert get_easing("easeIn") is EASINGS["in_quad"]
    with pytest.raises(ValueError):
        get_easing("bounce_forever")


def test_pick_helpers_clamp():
    g = ["#000000", "#111111", "#222222"]
    assert pick(g, -1.0) == "#000000"
    assert pick(g, 2.0) == "#222222"
    assert pick([], 0.5) == WHITE
    assert pick_stop(["#aa0000", "#00aa00"], 0.99) == "#aa0000"
    assert pick_stop(["#aa0000", "#00aa00"], 1.0) == "#00aa00"
    assert pick_stop([], 0.3) == WHITE


def test_lerp_color_midpoint():
    assert lerp_color("#000000", "#fefefe", 0.5) == "#7f7f7f"


def test_direction_ratio_per_direction():
    box = (0, 0, 10, 4)
    assert direction_ratio(5, 0, box, "horizontal") == pytest.approx(0.5)
    assert direction_ratio(0, 2, box, "vertical") == pytest.approx(0.5)
    assert direction_ratio(10, 4, box, "diagonal") == pytest.approx(1.0)
    assert direction_ratio(5, 2, box, "radial", (5, 2)) == pytest.approx(0.0)
    # zero-size box never divides by zero
    assert 0.0 <= direction_ratio(3, 3, (3, 3, 3, 3), "diagonal") <= 1.0


def test_spiral_point_stages_and_landing():
    kw = dict(origin=(1.0, 0.0), overshoot=(6.0, 0.5), target=(3.0, math.pi), clockwise=True)
    assert spiral_point(0.0, **kw)[2] == 0
    assert spiral_point(0.5, **kw)[2] == 1
    assert spiral_point(0.9, **kw)[2] == 2
    r, a, _ = spiral_point(1.0, **kw)
    assert r == pytest.approx(3.0)
    assert a == pytest.approx(math.pi)
