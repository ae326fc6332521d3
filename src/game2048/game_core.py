from __future__ import annotations
from enum import Enum
from typing import TYPE_CHECKING, List, NamedTuple, Optional, Tuple, Union

import numpy as np

if TYPE_CHECKING:
    from .api import GameFrontend


SIZE: int = 4
GOAL: int = 2048
TILE_VALUES: Tuple[int, int] = (2, 4)

# 标记缓冲区：1=本次移动中仍可合并，-1=本次已合并
_LIVE = 1
_MERGED = -1


class Side(Enum):
    """方块滑向的棋盘边。"""
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3


class TileMoved(NamedTuple):
    value: int
    from_row: int
    from_col: int
    to_row: int
    to_col: int


class TileMerged(NamedTuple):
    value: int
    result: int
    from_row: int
    from_col: int
    to_row: int
    to_col: int


TiltEvent = Union[TileMoved, TileMerged]


class TiltResult(NamedTuple):
    grid: np.ndarray
    changed: bool
    score: int
    merges: int
    events: List[TiltEvent]


def tilt_row(side: Side, r: int, c: int, size: int = SIZE) -> int:
    """
    旋转后棋盘 (r, c) 对应的真实行号。旋转后的棋盘总是让 side 朝北，
    因此 NORTH 原样返回 r；WEST 时旋转棋盘的第 c 列对应真实的第 size-1-c 行。
    """
    if side is Side.NORTH:
        return r
    if side is Side.EAST:
        return c
    if side is Side.SOUTH:
        return size - 1 - r
    if side is Side.WEST:
        return size - 1 - c
    raise ValueError(f"Unknown side: {side!r}")


def tilt_col(side: Side, r: int, c: int, size: int = SIZE) -> int:
    """旋转后棋盘 (r, c) 对应的真实列号，与 tilt_row 配对使用。"""
    if side is Side.NORTH:
        return c
    if side is Side.EAST:
        return size - 1 - r
    if side is Side.SOUTH:
        return size - 1 - c
    if side is Side.WEST:
        return r
    raise ValueError(f"Unknown side: {side!r}")


def _as_grid(grid) -> np.ndarray:
    arr = np.asarray(grid, dtype=np.int64)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1] or arr.shape[0] == 0:
        raise ValueError(f"Board must be a non-empty square grid, got shape {arr.shape}")
    return arr


def tilt_grid(grid, side: Side) -> TiltResult:
    """
    将整个棋盘朝 side 倾斜，返回新棋盘，不修改传入的 grid。

    四个方向共用同一套扫描：先把棋盘按坐标映射转到"朝北"，
    逐列自上而下扫描，每个方块向第 0 行滑动，遇到本次未合并过的
    同值方块则合并，否则停在障碍下方。
    """
    if not isinstance(side, Side):
        raise ValueError(f"Unknown side: {side!r}")
    src = _as_grid(grid)
    size = src.shape[0]

    def real(r: int, c: int) -> Tuple[int, int]:
        return tilt_row(side, r, c, size), tilt_col(side, r, c, size)

    board = np.zeros((size, size), dtype=np.int64)
    tiles = np.zeros((size, size), dtype=np.int8)
    for r in range(size):
        for c in range(size):
            board[r, c] = src[real(r, c)]
            if board[r, c] > 0:
                tiles[r, c] = _LIVE

    events: List[TiltEvent] = []
    score = 0
    merges = 0
    for r in range(1, size):
        for c in range(size):
            value = int(board[r, c])
            if value == 0:
                continue

            dest = r
            merged = False
            t = r - 1
            while t >= 0:
                if board[t, c] == 0:
                    dest = t
                    t -= 1
                    continue
                if tiles[t, c] == _LIVE and board[t, c] == value:
                    dest = t
                    merged = True
                break

            if merged:
                result = value * 2
                board[dest, c] = result
                tiles[dest, c] = _MERGED
                board[r, c] = 0
                tiles[r, c] = 0
                score += result
                merges += 1
                events.append(TileMerged(value, result, *real(r, c), *real(dest, c)))
            elif dest != r:
                board[dest, c] = value
                tiles[dest, c] = _LIVE
                board[r, c] = 0
                tiles[r, c] = 0
                events.append(TileMoved(value, *real(r, c), *real(dest, c)))

    if not events:
        return TiltResult(src.copy(), False, 0, 0, [])

    out = np.zeros((size, size), dtype=np.int64)
    for r in range(size):
        for c in range(size):
            out[real(r, c)] = board[r, c]
    return TiltResult(out, True, score, merges, events)


def can_merge(grid) -> bool:
    # 完整扫描所有横向、纵向相邻对
    arr = _as_grid(grid)
    size = arr.shape[0]
    for r in range(size):
        for c in range(size):
            v = arr[r, c]
            if v == 0:
                continue
            if r + 1 < size and arr[r + 1, c] == v:
                return True
            if c + 1 < size and arr[r, c + 1] == v:
                return True
    return False


def has_won(grid, goal: int = GOAL) -> bool:
    return bool(np.any(_as_grid(grid) == goal))


class Board:
    """
    2048 规则引擎：持有棋盘、分数与方块计数，并把每次变化通知给 frontend。

    frontend 可以为空，此时引擎只维护状态（place_random_tile 除外）。
    """

    def __init__(self, frontend: Optional[GameFrontend] = None, size: int = SIZE, goal: int = GOAL):
        if size < 1:
            raise ValueError(f"Board size must be positive, got {size}")
        self.size = size
        self.goal = goal
        self.frontend = frontend
        self._grid = np.zeros((size, size), dtype=np.int64)
        self.score: int = 0
        self.max_score: int = 0
        self.count: int = 0

    @property
    def capacity(self) -> int:
        return self.size * self.size

    @property
    def grid(self) -> np.ndarray:
        return self._grid.copy()

    def get_state(self) -> List[List[int]]:
        return self._grid.tolist()

    def empty_cells(self) -> List[Tuple[int, int]]:
        return [(int(r), int(c)) for r, c in np.argwhere(self._grid == 0)]

    def max_tile(self) -> int:
        return int(self._grid.max())

    def clear(self) -> None:
        self._grid[:] = 0
        self.score = 0
        self.count = 0
        if self.frontend is not None:
            self.frontend.clear()
            self.frontend.report_score(self.score, self.max_score)

    def _check_cell(self, row: int, col: int) -> None:
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise ValueError(f"Cell ({row}, {col}) is outside a {self.size}x{self.size} board")

    def place_tile(self, value: int, row: int, col: int) -> bool:
        """在空格 (row, col) 放入 value；格子已被占用时不做任何事并返回 False。"""
        if value not in TILE_VALUES:
            raise ValueError(f"New tiles must be 2 or 4, got {value}")
        self._check_cell(row, col)
        if self._grid[row, col] != 0:
            return False
        self._grid[row, col] = value
        self.count += 1
        if self.frontend is not None:
            self.frontend.report_tile_added(value, row, col)
        return True

    def place_random_tile(self) -> bool:
        """
        向 frontend 索取随机方块并放置。被占用的格子会重试，
        重试次数不超过当前剩余空格数；棋盘已满或次数用尽时返回 False。
        """
        if self.frontend is None:
            raise RuntimeError("place_random_tile needs a frontend to supply tiles")
        for _ in range(self.capacity - self.count):
            value, row, col = self.frontend.get_random_tile()
            if self.place_tile(value, row, col):
                return True
        return False

    def tilt(self, side: Side) -> bool:
        result = tilt_grid(self._grid, side)
        if not result.changed:
            return False

        self._grid = result.grid
        self.score += result.score
        self.count -= result.merges
        if self.frontend is not None:
            for event in result.events:
                if isinstance(event, TileMerged):
                    self.frontend.report_tile_merged(*event)
                else:
                    self.frontend.report_tile_moved(*event)
            self.frontend.report_score(self.score, self.max_score)
        return True

    def has_won(self) -> bool:
        return has_won(self._grid, self.goal)

    def can_merge(self) -> bool:
        return can_merge(self._grid)

    def game_over(self) -> bool:
        return self.has_won() or (self.count == self.capacity and not self.can_merge())

    def finish_game(self) -> None:
        if self.max_score < self.score:
            self.max_score = self.score
        if self.frontend is not None:
            self.frontend.report_score(self.score, self.max_score)
            self.frontend.report_game_ended()
