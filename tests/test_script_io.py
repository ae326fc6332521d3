import io

import pytest

import game2048
from game2048.api import Command
from game2048.script_io import ScriptError, ScriptedFrontend, parse_line


@pytest.mark.parametrize("text, expected", [
    ("T 2 1 3", (2, 1, 3)),
    ("  T 4 0 0  \n", (4, 0, 0)),
    ("Up", Command.NORTH),
    ("down", Command.SOUTH),
    ("Left\n", Command.WEST),
    ("RIGHT", Command.EAST),
    ("New Game", Command.NEW_GAME),
    ("new   game", Command.NEW_GAME),
    ("Quit", Command.QUIT),
    ("←", Command.WEST),
    ("↑", Command.NORTH),
    ("→", Command.EAST),
    ("↓", Command.SOUTH),
])
def test_parse_entries(text, expected):
    assert parse_line(text) == expected


@pytest.mark.parametrize("text", ["", "   \n", "# comment", "[Info] Game over: score=4, best=4"])
def test_parse_skips_blank_comment_and_status_lines(text):
    assert parse_line(text) is None


@pytest.mark.parametrize("text", ["T 2 1", "T 2 x 1", "Sideways", "T2 0 0"])
def test_parse_rejects_garbage(text):
    with pytest.raises(ScriptError):
        parse_line(text, 7)


def test_script_error_carries_line_number():
    with pytest.raises(ScriptError) as excinfo:
        parse_line("Sideways", 12)
    assert excinfo.value.line_no == 12
    assert str(excinfo.value).startswith("line 12:")
    assert isinstance(excinfo.value, ValueError)


def test_read_move_logs_commands():
    out = io.StringIO()
    frontend = ScriptedFrontend(io.StringIO("Up\n# skip\n\nNew Game\n"), log=True, out=out)
    assert frontend.read_move() is Command.NORTH
    assert frontend.read_move() is Command.NEW_GAME
    assert frontend.read_move() is Command.QUIT
    assert out.getvalue().splitlines() == ["Up", "New Game", "Quit"]


def test_scripted_tile_value_is_checked():
    frontend = ScriptedFrontend(io.StringIO("T 8 0 0\n"))
    with pytest.raises(ScriptError, match="2 or 4"):
        frontend.get_random_tile()


def test_random_tile_follows_view():
    frontend = ScriptedFrontend(io.StringIO(""), size=2, seed=0)
    frontend.report_tile_added(2, 0, 0)
    frontend.report_tile_added(2, 0, 1)
    frontend.report_tile_added(4, 1, 0)
    value, row, col = frontend.get_random_tile()
    assert (row, col) == (1, 1)
    assert value in (2, 4)

    frontend.report_tile_merged(2, 4, 0, 1, 0, 0)
    assert frontend.view.tolist() == [[4, 0], [4, 0]]
    frontend.report_tile_moved(4, 1, 0, 1, 1)
    assert frontend.view.tolist() == [[4, 0], [0, 4]]
    frontend.clear()
    assert frontend.view.sum() == 0


def test_package_lists_modules_lazily():
    modules = game2048.available_modules()
    assert {"api", "game_core", "script_io", "main", "gui_pygame"} <= set(modules)
    assert game2048.game_core.Side.NORTH.name == "NORTH"
    with pytest.raises(AttributeError):
        game2048.no_such_module
