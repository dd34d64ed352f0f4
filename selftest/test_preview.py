from rich.console import Console
from rich.text import Text

from fxbehaviors.registry import create_effect, make_context
from fxpreview.headless import render_frames, run_headless
from fxpreview.player import Player
from fxpreview.sim_clock import SimClock


def test_sim_clock_fixed_steps():
    clock = SimClock(fixed_dt=0.25, max_steps=10)
    assert clock.step_to(5.0) == 0
    assert clock.step_to(5.5) == 2
    assert clock.step_to(5.625) == 0
    assert clock.step_to(5.75) == 1
    assert clock.ticks == 3
    assert clock.sim_time == 0.75
    assert clock.until_next() == 0.25


def test_sim_clock_caps_big_jumps_and_backwards_time():
    clock = SimClock(fixed_dt=0.125, max_steps=2)
    clock.step_to(0.0)
    assert clock.step_to(100.0) == 2
    assert clock.step_to(50.0) == 0
    assert clock.step_to(50.25) == 2
    clock.reset()
    assert clock.ticks == 0 and clock.sim_time == 0.0


def test_for_fps():
    assert SimClock.for_fps(40).fixed_dt == 1.0 / 40
    assert SimClock.for_fps(0).fixed_dt == 1.0


def test_headless_first_frame_is_unstepped():
    frames = render_frames("print", 3, 20, 5, text="hello")
    assert len(frames) == 3
    assert "h" not in frames[0]
    assert len(run_headless("print", 3, 20, 5, text="hello")) == 64


class FakeEffect:
    key = "fake"

    def __init__(self):
        self.width, self.height = 10, 4
        self.resized = []
        self.steps = 0

    def resize(self, w, h):
        self.width, self.height = w, h
        self.resized.append((w, h))

    def step(self):
        self.steps += 1

    def render(self):
        return "\n".join(["\x1b[38;2;255;0;0mx\x1b[0m" + " " * (self.width - 1)] * self.height)


def test_player_resizes_only_on_change():
    sizes = [(10, 4), (10, 4), (20, 6)]
    fx = FakeEffect()
    player = Player(fx, fps=30, console=Console(file=None, force_terminal=False), size_fn=lambda: sizes[0])
    assert not player.check_resize()
    sizes[0] = (20, 6)
    assert player.check_resize()
    assert fx.resized == [(20, 6)]
    assert not player.check_resize()


def test_player_frame_parses_ansi():
    fx = FakeEffect()
    player = Player(fx, size_fn=lambda: (10, 4))
    frame = player.frame()
    assert isinstance(frame, Text)
    assert frame.plain.split("\n")[0].startswith("x")
    assert not player.done()


def test_player_drives_a_real_effect_size():
    ctx = make_context("fire", 30, 8, seed=1)
    fx = create_effect("fire", ctx)
    player = Player(fx, max_ticks=5, size_fn=lambda: (12, 3))
    assert player.check_resize()
    assert (fx.width, fx.height) == (12, 3)
    assert len(player.frame().plain.split("\n")) == 3
