import argparse
import sys
from typing import List, Optional

from .api import BaseFrontend, Game2048Session, GameConfig
from .game_core import GOAL, SIZE
from .script_io import ScriptError, ScriptedFrontend


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text}")
    return value


def _goal_value(text: str) -> int:
    value = int(text)
    # 目标必须能由 2/4 合并得到
    if value < 4 or value & (value - 1):
        raise argparse.ArgumentTypeError(f"goal must be a power of two >= 4, got {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="game2048", description="2048 sliding-tile puzzle")
    parser.add_argument("--seed", type=int, default=None, help="随机数种子")
    parser.add_argument("--log", action="store_true", help="按脚本格式打印放置的方块与指令")
    parser.add_argument("--testing", action="store_true", help="从 stdin 读取方块与指令（无界面）")
    parser.add_argument("--no-display", action="store_true", help="不打开窗口，从 stdin 读取指令")
    parser.add_argument("--size", type=_positive_int, default=SIZE)
    parser.add_argument("--goal", type=_goal_value, default=GOAL)
    return parser


def parse_config(argv: Optional[List[str]] = None) -> GameConfig:
    args = build_parser().parse_args(argv)
    return GameConfig(
        size=args.size,
        goal=args.goal,
        seed=args.seed,
        logging_enabled=args.log,
        testing_mode=args.testing,
        display_enabled=not args.no_display,
    )


def build_frontend(config: GameConfig) -> BaseFrontend:
    if config.testing_mode or not config.display_enabled:
        return ScriptedFrontend(
            size=config.size,
            seed=config.seed,
            log=config.logging_enabled,
            scripted_tiles=config.testing_mode,
        )

    # 只有需要窗口时才导入 pygame
    from .gui_pygame import PygameFrontend
    return PygameFrontend(size=config.size, seed=config.seed, log=config.logging_enabled)


def main(argv: Optional[List[str]] = None) -> int:
    config = parse_config(argv)
    frontend = build_frontend(config)
    session = Game2048Session(frontend, config)
    try:
        best = session.run()
    except ScriptError as e:
        print(f"[Error] {e}", file=sys.stderr)
        return 1
    finally:
        frontend.close()

    print(f"[Info] Best score: {best}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
