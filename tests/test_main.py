import io

import pytest

from game2048.api import GameConfig
from game2048.main import build_frontend, main, parse_config
from game2048.script_io import ScriptedFrontend


def test_default_config():
    assert parse_config([]) == GameConfig()


def test_options_map_to_config():
    config = parse_config(["--seed", "3", "--log", "--testing", "--no-display", "--size", "5", "--goal", "64"])
    assert config == GameConfig(
        size=5, goal=64, seed=3, logging_enabled=True, testing_mode=True, display_enabled=False,
    )


@pytest.mark.parametrize("argv", [["--goal", "100"], ["--goal", "2"], ["--size", "0"], ["--seed", "x"], ["--bogus"]])
def test_bad_options_exit_with_usage(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        parse_config(argv)
    assert excinfo.value.code == 2
    assert "usage:" in capsys.readouterr().err


def test_headless_frontends():
    testing = build_frontend(GameConfig(testing_mode=True))
    assert isinstance(testing, ScriptedFrontend)
    assert testing.scripted_tiles

    no_display = build_frontend(GameConfig(display_enabled=False, seed=1))
    assert isinstance(no_display, ScriptedFrontend)
    assert not no_display.scripted_tiles


def test_main_plays_a_script(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("T 2 0 0\nT 2 1 0\nUp\nNew Game\nT 2 3 3\nT 4 0 0\nQuit\n"))
    assert main(["--testing", "--goal", "4", "--log"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out[:3] == ["T 2 0 0", "T 2 1 0", "Up"]
    assert "[Info] Game over: score=4, best=4" in out
    assert out[-1] == "[Info] Best score: 4"


def test_main_reports_script_errors(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("T 2 0 0\nJump\n"))
    assert main(["--testing"]) == 1
    assert "[Error] line 2" in capsys.readouterr().err
