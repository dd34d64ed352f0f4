import pytest

from fxruntime.entities_v1 import (
    EntityV1,
    SceneFrameV1,
    SceneV1,
    bbox,
    grid_entities,
    parse_text_block,
    scene_from_gradient,
    text_extent,
)


def test_two_chars_are_centered():
    ents = parse_text_block("AB", 10, 3)
    assert [e.glyph for e in ents] == ["A", "B"]
    assert min(e.ox for e in ents) == 4
    assert all(e.oy == 1 for e in ents)


def test_whitespace_creates_no_entities():
    ents = parse_text_block("A B\n\tC", 20, 5)
    assert [e.glyph for e in ents] == ["A", "B", "C"]
    assert [e.eid for e in ents] == [0, 1, 2]


def test_lines_mode_centers_each_line():
    ents = parse_text_block("ABCD\nXY", 10, 4, mode="lines")
    xs = {e.glyph: e.ox for e in ents}
    assert xs["A"] == 3
    assert xs["X"] == 4


def test_oversized_text_is_clipped():
    ents = parse_text_block("ABCDEFGHIJ\n" * 8, 4, 3)
    assert all(0 <= e.ox < 4 and 0 <= e.oy < 3 for e in ents)
    assert len(ents) == 12


def test_parse_rejects_unknown_mode_and_handles_empty():
    assert parse_text_block("", 10, 10) == []
    with pytest.raises(ValueError):
        parse_text_block("A", 10, 10, mode="diagonal")


def test_extent_and_bbox():
    assert text_extent("") == (0, 0)
    assert text_extent("abc\nde") == (3, 2)
    assert bbox([]) == (0, 0, 0, 0)
    assert bbox(grid_entities(3, 2)) == (0, 0, 2, 1)


def test_scenes_play_back_to_back():
    e = EntityV1(eid=0, glyph="x", ox=1, oy=1)
    a = SceneV1("a", [SceneFrameV1("1", "#010101", 2)])
    b = scene_from_gradient("b", ["#020202", "#030303"])
    e.play(a, b)
    assert e.animating and e.scene_name() == "a"
    done = [e.tick_scene() for _ in range(4)]
    assert done == [False, False, False, True]
    assert e.scenes_done == ["a", "b"]
    assert e.color == "#030303"
    # gradient frames leave the glyph alone
    assert e.cur_glyph == "1"


def test_restore_rewinds_to_origin():
    e = EntityV1(eid=0, glyph="x", ox=2, oy=3)
    e.x, e.y, e.cur_glyph = 9.0, 9.0, "#"
    e.state["k"] = 1
    e.play(SceneV1("s", [SceneFrameV1(None, None)]))
    e.restore(visible=False, color="#123456")
    assert (e.x, e.y) == (2.0, 3.0)
    assert e.cur_glyph == "x" and not e.visible and e.color == "#123456"
    assert e.state == {} and not e.animating
