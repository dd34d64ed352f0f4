import json
import sys

from fxapp import crash_reporter, diagnostics, log_buffer
from fxapp.__main__ import main
from fxpreview.headless import render_frames


def test_log_buffer_is_bounded():
    log_buffer.clear()
    for i in range(1000):
        log_buffer.push(f"line {i}")
    assert len(log_buffer.tail(5000)) == 400
    assert log_buffer.tail(2) == ["line 998", "line 999"]
    assert log_buffer.tail(0) == []


def test_crash_report_has_every_section(tmp_path, monkeypatch):
    monkeypatch.setattr(crash_reporter, "_watched", None)
    log_buffer.clear()
    log_buffer.push("[fx] blackhole: reset")
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        p = crash_reporter.write_report(*sys.exc_info(), outdir=tmp_path)
    text = p.read_text(encoding="utf-8")
    assert p.parent == tmp_path
    assert text.startswith("GLYPHFX CRASH REPORT")
    for section in ("--- effect ---", "--- phase transitions ---", "--- diagnostics ---",
                    "--- recent log ---", "--- traceback ---"):
        assert section in text
    assert "[fx] blackhole: reset" in text
    assert "RuntimeError: boom" in text
    assert "(no effect running)" in text
    assert p.name.endswith("_none.txt")


def test_log_buffer_tags_numbers_and_counts_dropped_lines():
    log_buffer.clear()
    assert log_buffer.dropped() == 0
    log_buffer.push("fire: reset", tag="fx")
    log_buffer.push("[phase] pour: pouring -> hold")
    assert log_buffer.tail(2) == ["[fx] fire: reset", "[phase] pour: pouring -> hold"]
    assert log_buffer.tagged("phase") == ["[phase] pour: pouring -> hold"]
    assert log_buffer.numbered(1) == ["     2 [phase] pour: pouring -> hold"]
    for i in range(500):
        log_buffer.push(f"line {i}")
    assert log_buffer.dropped() == 502 - 400
    log_buffer.clear()
    log_buffer.push("again")
    assert log_buffer.numbered(1) == ["     1 again"]


def test_crash_report_describes_the_running_effect(tmp_path, monkeypatch):
    monkeypatch.setattr(crash_reporter, "_watched", None)
    monkeypatch.setenv(crash_reporter.ENV_DIR, str(tmp_path))
    log_buffer.clear()
    frames = render_frames("print", 5, 20, 4, seed=7, text="hi")
    assert len(frames) == 5
    fx = crash_reporter.watched()
    assert fx is not None and fx.key == "print"
    summary = crash_reporter.effect_summary(fx)
    assert summary["key"] == "print" and summary["seed"] == 7
    assert (summary["width"], summary["height"], summary["frame"]) == (20, 4, 4)
    assert summary["phase_history"][0] == "printing"
    try:
        raise KeyError("glyph")
    except KeyError:
        p = crash_reporter.write_report(*sys.exc_info())
    assert p.parent == tmp_path
    assert p.name.endswith("_print.txt")
    text = p.read_text(encoding="utf-8")
    assert '"key": "print"' in text
    assert '"seed": 7' in text


def test_install_global_sets_the_hook(monkeypatch):
    monkeypatch.setattr(sys, "excepthook", sys.__excepthook__)
    crash_reporter.install_global()
    assert sys.excepthook is not sys.__excepthook__


def test_diagnostics_counts_match_registry():
    d = diagnostics.gather()
    assert d["counts"]["registered_effects"] == len(d["effects"]) == 14
    assert d["counts"]["effect_files"] >= 14
    assert "default" in d["themes"]
    assert json.loads(diagnostics.as_text())["library_version"] == d["library_version"]


def test_cli_list(capsys, monkeypatch):
    monkeypatch.setattr(sys, "excepthook", sys.__excepthook__)
    assert main(["list"]) == 0
    out = capsys.readouterr().out
    assert "ring-text" in out
    assert "themes:" in out and "dracula" in out


def test_cli_hash_is_stable(capsys, monkeypatch, tmp_path):
    monkeypatch.setattr(sys, "excepthook", sys.__excepthook__)
    args = ["hash", "decrypt", "--text", "HI", "--frames", "20", "--width", "20", "--height", "5", "--seed", "2"]
    assert main(args) == 0
    first = capsys.readouterr().out.strip()
    out_json = tmp_path / "res.json"
    assert main(args + ["--out", str(out_json)]) == 0
    assert capsys.readouterr().out.strip() == first
    saved = json.loads(out_json.read_text(encoding="utf-8"))
    assert saved["sha256"] == first and saved["key"] == "decrypt"
    assert len(first) == 64


def test_cli_unknown_effect_exits_2(capsys, monkeypatch):
    monkeypatch.setattr(sys, "excepthook", sys.__excepthook__)
    assert main(["hash", "no-such-effect"]) == 2
    assert "Unknown effect" in capsys.readouterr().err
