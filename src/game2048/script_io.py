from __future__ import annotations
import sys
from typing import Dict, Iterator, Optional, TextIO, Tuple, Union

from .api import BaseFrontend, Command
from .game_core import SIZE, TILE_VALUES


# 脚本格式（每行一条）：
#   T <value> <row> <col>     放置方块
#   Up / Down / Left / Right  方向（也接受 ← ↑ → ↓）
#   New Game / Quit
# 空行、# 注释以及 [Info] 这类状态行会被忽略
Entry = Union[Tuple[int, int, int], Command]

_KEYWORDS: Dict[str, Command] = {cmd.value.lower(): cmd for cmd in Command}
_ARROWS: Dict[str, Command] = {
    "←": Command.WEST,
    "↑": Command.NORTH,
    "→": Command.EAST,
    "↓": Command.SOUTH,
}


class ScriptError(ValueError):
    def __init__(self, message: str, line_no: Optional[int] = None):
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)


def parse_line(text: str, line_no: Optional[int] = None) -> Optional[Entry]:
    text = text.strip()
    if not text or text[0] in "#[":
        return None
    if text in _ARROWS:
        return _ARROWS[text]

    parts = text.split()
    if parts[0] == "T":
        if len(parts) != 4:
            raise ScriptError(f"tile entries look like 'T <value> <row> <col>', got {text!r}", line_no)
        try:
            value, row, col = (int(p) for p in parts[1:])
        except ValueError:
            raise ScriptError(f"non-integer field in {text!r}", line_no) from None
        return value, row, col

    command = _KEYWORDS.get(" ".join(parts).lower())
    if command is None:
        raise ScriptError(f"unrecognized entry {text!r}", line_no)
    return command


class ScriptedFrontend(BaseFrontend):
    """
    无界面 frontend：从文本流（默认 stdin）读取方块放置与指令。

    scripted_tiles=False 时方块总是随机生成，只从流中读取指令。
    脚本读完后，方块退回随机生成，指令视为 Quit。
    """

    def __init__(self, stream: Optional[TextIO] = None, size: int = SIZE, seed: Optional[int] = None,
                 log: bool = False, out: Optional[TextIO] = None, scripted_tiles: bool = True):
        super().__init__(size=size, seed=seed, log=log, out=out)
        self.stream = stream if stream is not None else sys.stdin
        self.scripted_tiles = scripted_tiles
        self._lines: Iterator[Tuple[int, str]] = enumerate(self.stream, start=1)

    def _next_entry(self) -> Optional[Tuple[int, Entry]]:
        for line_no, text in self._lines:
            entry = parse_line(text, line_no)
            if entry is not None:
                return line_no, entry
        return None

    def get_random_tile(self) -> Tuple[int, int, int]:
        if not self.scripted_tiles:
            return super().get_random_tile()
        item = self._next_entry()
        if item is None:
            return super().get_random_tile()

        line_no, entry = item
        if isinstance(entry, Command):
            raise ScriptError(f"expected a tile placement, got {entry.value!r}", line_no)
        value, row, col = entry
        if value not in TILE_VALUES:
            raise ScriptError(f"tile value must be 2 or 4, got {value}", line_no)
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise ScriptError(f"cell ({row}, {col}) is off the board", line_no)
        return value, row, col

    def read_move(self) -> Command:
        item = self._next_entry()
        if item is None:
            return self._record(Command.QUIT)

        line_no, entry = item
        if not isinstance(entry, Command):
            raise ScriptError("expected a command, got a tile placement", line_no)
        return self._record(entry)
