"""Behaviour every registered effect shares, whatever it draws."""

import json

import pytest

from fxbehaviors.registry import create_effect, list_effects, make_context, require_effect
from fxpreview.headless import render_frames, run_headless
from fxruntime.compositor_v1 import strip_ansi
from fxthemes import palettes

SAMPLE = "HELLO\nWORLD"
KEYS = list_effects()


def _make(key, w=30, h=10, seed=4, text=None, **params):
    if text is None:
        text = SAMPLE if require_effect(key).requires_text else ""
    ctx = make_context(key, w, h, seed=seed, text=text, params=params)
    return create_effect(key, ctx)


@pytest.mark.parametrize("key", KEYS)
def test_render_has_one_line_per_row(key):
    fx = _make(key)
    for _ in range(40):
        fx.step()
        rows = fx.render().split("\n")
        assert len(rows) == fx.height
        assert all(len(strip_ansi(r)) == fx.width for r in rows)


@pytest.mark.parametrize("key", KEYS)
def test_resize_to_zero_gives_one_cell(key):
    fx = _make(key)
    fx.step()
    fx.resize(0, 0)
    assert (fx.width, fx.height) == (1, 1)
    for _ in range(5):
        fx.step()
        assert len(strip_ansi(fx.render())) == 1
    fx.resize(50, 16)
    fx.step()
    assert len(fx.render().split("\n")) == fx.height


@pytest.mark.parametrize("key", KEYS)
def test_same_seed_same_frames(key):
    text = SAMPLE if require_effect(key).requires_text else ""
    a = render_frames(key, 25, 30, 10, seed=7, text=text)
    b = render_frames(key, 25, 30, 10, seed=7, text=text)
    assert a == b


@pytest.mark.parametrize("key", KEYS)
def test_empty_text_never_raises(key):
    fx = _make(key, text="")
    for _ in range(30):
        fx.step()
    assert len(fx.render().split("\n")) == fx.height


@pytest.mark.parametrize("key", KEYS)
def test_empty_palette_never_raises(key, monkeypatch):
    monkeypatch.setattr(palettes, "_CATALOG", {"themes": ["default"], "kinds": {}})
    fx = _make(key)
    for _ in range(30):
        fx.step()
    assert len(fx.render().split("\n")) == fx.height


@pytest.mark.parametrize("key", KEYS)
def test_reset_and_snapshot(key):
    fx = _make(key)
    first = fx.phase
    for _ in range(15):
        fx.update()
    assert fx.frame == 15
    fx.reset()
    assert fx.frame == 0
    assert fx.phase == first
    snap = fx.snapshot()
    assert snap["key"] == key
    assert snap["width"] == 30 and snap["height"] == 10
    json.dumps(snap)


def test_different_seeds_differ():
    assert run_headless("fire", 20, 30, 10, seed=1) != run_headless("fire", 20, 30, 10, seed=2)


def test_plain_matches_stripped_render():
    fx = _make("print")
    for _ in range(20):
        fx.step()
    assert fx.plain() == strip_ansi(fx.render())


def test_fire_text_keeps_glyph_cells_cold():
    fx = _make("fire-text", w=20, h=8, text="XX")
    for _ in range(60):
        fx.step()
    rows = fx.plain().split("\n")
    for y in range(8):
        for x in range(20):
            if fx.field.is_masked(x, y):
                assert rows[y][x] == " "
    assert fx.snapshot()["masked_cells"] == 2


def test_matrix_art_crystallises_the_art():
    fx = _make("matrix-art", w=12, h=6, text="AB", matrix_freeze_chance=1.0)
    for _ in range(400):
        fx.step()
        if fx.frozen_count() == 2:
            break
    assert fx.frozen_count() == 2
    assert "AB" in fx.plain()


def test_plain_matrix_ignores_text_and_keeps_raining():
    fx = _make("matrix", w=12, h=6, text="AB")
    assert fx.art == {}
    cap = 12 * int(fx.params["matrix_max_per_col"])
    for _ in range(60):
        fx.step()
        assert len(fx.streaks) <= cap
    assert fx.frozen_count() == 0
    assert fx.snapshot()["art_cells"] == 0
    assert fx.plain().strip()
    assert "matrix_freeze_chance" not in require_effect("matrix").uses


def test_plain_rain_ignores_text():
    fx = _make("rain", w=12, h=6, text="AB")
    assert fx.art == {}
    cap = 12 * int(fx.params["rain_max_per_col"])
    drawn = 0
    for _ in range(60):
        fx.step()
        assert len(fx.drops) <= cap
        if fx.plain().strip():
            drawn += 1
    assert drawn > 0
    assert fx.frozen_count() == 0


def test_rain_art_crystallises_the_art():
    fx = _make("rain-art", w=12, h=6, text="AB", rain_freeze_chance=1.0)
    for _ in range(1000):
        fx.step()
        if fx.frozen_count() == 2:
            break
    assert fx.frozen_count() == 2
