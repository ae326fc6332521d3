from __future__ import annotations
import random
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Protocol, TextIO, Tuple

import numpy as np

from .game_core import GOAL, SIZE, Board, Side


class Command(Enum):
    """frontend 可返回的指令；取值即脚本/日志中使用的关键字。"""
    NORTH = "Up"
    EAST = "Right"
    SOUTH = "Down"
    WEST = "Left"
    NEW_GAME = "New Game"
    QUIT = "Quit"

    @property
    def side(self) -> Optional[Side]:
        return COMMAND_SIDES.get(self)


COMMAND_SIDES: Dict[Command, Side] = {
    Command.NORTH: Side.NORTH,
    Command.EAST: Side.EAST,
    Command.SOUTH: Side.SOUTH,
    Command.WEST: Side.WEST,
}
DIRECTIONS: Tuple[Command, ...] = tuple(COMMAND_SIDES)


@dataclass
class GameConfig:
    size: int = SIZE
    goal: int = GOAL
    seed: Optional[int] = None
    logging_enabled: bool = False
    testing_mode: bool = False
    display_enabled: bool = True


class GameFrontend(Protocol):
    """引擎与显示/输入端之间的全部接口。"""

    def get_random_tile(self) -> Tuple[int, int, int]: ...

    def read_move(self) -> Command: ...

    def clear(self) -> None: ...

    def report_score(self, score: int, max_score: int) -> None: ...

    def report_tile_added(self, value: int, row: int, col: int) -> None: ...

    def report_tile_moved(self, value: int, from_row: int, from_col: int, to_row: int, to_col: int) -> None: ...

    def report_tile_merged(
        self, value: int, result: int, from_row: int, from_col: int, to_row: int, to_col: int
    ) -> None: ...

    def report_game_ended(self) -> None: ...


class BaseFrontend:
    """
    frontend 公共部分：
    - 根据引擎的通知维护一份棋盘镜像 view（用于绘制与选取空格）
    - 用带种子的 random.Random 生成新方块（10% 为 4）
    - log=True 时把放置与指令按脚本格式打印，可直接用 --testing 回放
    """

    def __init__(self, size: int = SIZE, seed: Optional[int] = None, log: bool = False,
                 out: Optional[TextIO] = None):
        self.size = size
        self.rng = random.Random(seed)
        self.log = log
        self.out = out if out is not None else sys.stdout
        self.view = np.zeros((size, size), dtype=np.int64)
        self.score = 0
        self.max_score = 0
        self.over = False

    def _log(self, line: str) -> None:
        if self.log:
            print(line, file=self.out)

    def _record(self, command: Command) -> Command:
        self._log(command.value)
        return command

    def get_random_tile(self) -> Tuple[int, int, int]:
        empties = np.argwhere(self.view == 0)
        if len(empties) == 0:
            r, c = self.rng.randrange(self.size), self.rng.randrange(self.size)
        else:
            r, c = empties[self.rng.randrange(len(empties))]
        value = 4 if self.rng.random() < 0.1 else 2
        return value, int(r), int(c)

    def read_move(self) -> Command:
        raise NotImplementedError

    def clear(self) -> None:
        self.view[:] = 0
        self.score = 0
        self.over = False

    def report_score(self, score: int, max_score: int) -> None:
        self.score = score
        self.max_score = max_score

    def report_tile_added(self, value: int, row: int, col: int) -> None:
        self.view[row, col] = value
        self._log(f"T {value} {row} {col}")

    def report_tile_moved(self, value: int, from_row: int, from_col: int, to_row: int, to_col: int) -> None:
        self.view[from_row, from_col] = 0
        self.view[to_row, to_col] = value

    def report_tile_merged(
        self, value: int, result: int, from_row: int, from_col: int, to_row: int, to_col: int
    ) -> None:
        self.view[from_row, from_col] = 0
        self.view[to_row, to_col] = result

    def report_game_ended(self) -> None:
        self.over = True
        self._log(f"[Info] Game over: score={self.score}, best={self.max_score}")

    def close(self) -> None:
        pass


class Game2048Session:
    """
    回合循环：
    - play() 进行一局，返回 True 表示继续新的一局，False 表示退出
    - run() 反复调用 play()，返回本进程内的最高分
    """

    def __init__(self, frontend: GameFrontend, config: Optional[GameConfig] = None):
        self.config = config if config is not None else GameConfig()
        self.frontend = frontend
        self.board = Board(frontend, size=self.config.size, goal=self.config.goal)

    @property
    def score(self) -> int:
        return self.board.score

    @property
    def max_score(self) -> int:
        return self.board.max_score

    def is_over(self) -> bool:
        return self.board.game_over()

    def play(self) -> bool:
        board = self.board
        board.clear()
        board.place_random_tile()

        while True:
            if not board.game_over():
                board.place_random_tile()
            if board.game_over():
                board.finish_game()

            while True:
                command = self.frontend.read_move()
                if command is Command.QUIT:
                    return False
                if command is Command.NEW_GAME:
                    return True
                # 已结束或无效的方向不消耗回合
                if not board.game_over() and board.tilt(command.side):
                    break

    def run(self) -> int:
        while self.play():
            pass
        return self.board.max_score
