from fxbehaviors.state_runtime import DeterministicRNG
from fxruntime.compositor_v1 import CanvasV1
from fxruntime.heat_field_v1 import HeatConfig, HeatFieldV1


def _seeded_field(w=10, h=4, seed=3):
    field = HeatFieldV1(HeatConfig(width=w, height=h), DeterministicRNG(seed))
    for x in range(w):
        assert field.set(x, h - 1, field.hmax)
    return field


def test_total_heat_never_grows_without_ignition():
    field = _seeded_field()
    prev = field.total()
    for _ in range(20):
        field.step()
        assert field.total() <= prev
        assert field.band_total() == 0
        prev = field.total()


def test_heat_stays_in_range_with_ignition():
    field = HeatFieldV1(HeatConfig(width=16, height=12), DeterministicRNG(9))
    for _ in range(200):
        field.ignite(0.7)
        field.step()
        assert all(0 <= v <= field.hmax for v in field.data)
        assert field.band_total() == 0


def test_hard_limit_band_rejects_writes():
    field = HeatFieldV1(HeatConfig(width=5, height=10), DeterministicRNG(0))
    assert field.hard_rows >= 1
    assert not field.set(2, 0, 40)
    assert field.get(2, 0) == 0
    assert not field.set(-1, 5, 40)
    assert field.set(2, 9, 999)
    assert field.get(2, 9) == field.hmax


def test_masked_cells_hold_no_heat():
    w, h = 6, 6
    field = HeatFieldV1(HeatConfig(width=w, height=h), DeterministicRNG(1))
    mask = [x == 3 for y in range(h) for x in range(w)]
    field.set_mask(mask)
    for _ in range(50):
        field.ignite(1.0)
        field.step()
        assert all(field.get(3, y) == 0 for y in range(h))


def test_single_row_field_has_no_band():
    field = HeatFieldV1(HeatConfig(width=4, height=1), DeterministicRNG(0))
    assert field.hard_rows == 0
    assert field.ignite(1.0) == 4
    field.step()
    assert field.total() == 0


def test_resize_clears_and_clamps():
    field = _seeded_field()
    field.resize(0, 0)
    assert (field.w, field.h) == (1, 1)
    assert field.total() == 0


def test_glyph_and_color_indices_stay_in_range():
    field = HeatFieldV1(HeatConfig(width=2, height=2), DeterministicRNG(0))
    for n in (1, 2, 4, 8, 13):
        seen = {field.glyph_index(v, n) for v in range(field.hmax + 1)}
        assert min(seen) == 0
        assert max(seen) == n - 1
    assert field.glyph_index(field.hmax * 3, 4) == 3
    assert field.glyph_index(-5, 4) == 0
    assert field.glyph_index(10, 0) == 0


def test_draw_maps_heat_and_hides_cells_below_min_visible():
    glyphs = "░▒▓█"
    palette = ["#110000", "#880000", "#ff8800"]
    w = 66
    field = HeatFieldV1(HeatConfig(width=w, height=2, min_visible=5), DeterministicRNG(0))
    for x in range(w):
        assert field.set(x, 1, x)
    canvas = CanvasV1(w, 2)
    field.draw(canvas, glyphs=glyphs, palette=palette)
    for x in range(w):
        ch, color = canvas.get(x, 1)
        if x < 5:
            assert (ch, color) == (" ", None)
        else:
            assert ch == glyphs[field.glyph_index(x, len(glyphs))]
            assert color == palette[field.glyph_index(x, len(palette))]
    assert canvas.get(w - 1, 1) == ("█", "#ff8800")


def test_fade_zone_decays_harder_than_open_rows():
    cfg = HeatConfig(width=1, height=20, max_decay=0, hard_limit_ratio=0.25,
                     fade_zone_ratio=0.25, fade_extra_decay=7)
    field = HeatFieldV1(cfg, DeterministicRNG(2))
    fade_row = field.hard_rows
    open_row = field.h - 2
    assert field.in_fade_zone(fade_row)
    assert not field.in_fade_zone(open_row) and not field.in_hard_band(open_row)
    field.set(0, fade_row + 1, 50)
    field.set(0, open_row + 1, 50)
    field.step()
    assert field.get(0, open_row) == 50
    assert field.get(0, fade_row) == 43


def test_seed_gradient_ramps_up_toward_the_source_row():
    field = HeatFieldV1(HeatConfig(width=3, height=10), DeterministicRNG(0))
    field.seed_gradient()
    column = [field.get(1, y) for y in range(field.h)]
    assert column[field.h - 1] == field.hmax
    assert all(v == 0 for v in column[: field.hard_rows])
    open_rows = column[field.hard_rows:]
    assert open_rows == sorted(open_rows)
    assert open_rows[0] > 0


def test_fire_can_start_from_a_seeded_gradient():
    from fxbehaviors.registry import create_effect, make_context

    seeded = create_effect("fire", make_context("fire", 20, 10, seed=1, params={"fire_seed_gradient": True}))
    plain = create_effect("fire", make_context("fire", 20, 10, seed=1))
    assert seeded.field.get(5, 4) > 0
    assert plain.field.get(5, 4) == 0
    assert seeded.field.total() > plain.field.total()
