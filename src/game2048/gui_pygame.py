from __future__ import annotations
import pygame
from typing import Optional, TextIO

from .api import BaseFrontend, Command
from .game_core import SIZE


# 颜色配置（简化版）
BG_COLOR = (250, 248, 239)
GRID_COLOR = (187, 173, 160)
EMPTY_COLOR = (205, 193, 180)
TILE_COLORS = {
    2: (238, 228, 218),
    4: (237, 224, 200),
    8: (242, 177, 121),
    16: (245, 149, 99),
    32: (246, 124, 95),
    64: (246, 94, 59),
    128: (237, 207, 114),
    256: (237, 204, 97),
    512: (237, 200, 80),
    1024: (237, 197, 63),
    2048: (237, 194, 46),
}
TILE_TEXT_COLOR_DARK = (119, 110, 101)
TILE_TEXT_COLOR_LIGHT = (249, 246, 242)

KEY_COMMANDS = {
    pygame.K_UP: Command.NORTH,
    pygame.K_RIGHT: Command.EAST,
    pygame.K_DOWN: Command.SOUTH,
    pygame.K_LEFT: Command.WEST,
    pygame.K_r: Command.NEW_GAME,
    pygame.K_ESCAPE: Command.QUIT,
}


class PygameFrontend(BaseFrontend):
    """PyGame 窗口：绘制 view 镜像，read_move 阻塞直到按下有效按键或关闭窗口。"""

    cell_size = 100
    margin = 15
    header_h = 90

    def __init__(self, size: int = SIZE, seed: Optional[int] = None, log: bool = False,
                 out: Optional[TextIO] = None, title: str = "2048"):
        super().__init__(size=size, seed=seed, log=log, out=out)
        pygame.init()
        pygame.display.set_caption(title)

        board_pixels = self.margin + size * (self.cell_size + self.margin)
        self.width = board_pixels
        self.height = self.header_h + board_pixels
        self.screen = pygame.display.set_mode((self.width, self.height))
        self.clock = pygame.time.Clock()

        # 字体
        self.font_big = pygame.font.SysFont("arial", 48, bold=True)
        self.font_mid = pygame.font.SysFont("arial", 28, bold=True)
        self.font_small = pygame.font.SysFont("arial", 20)

    def draw(self) -> None:
        screen = self.screen
        margin, cell_size, header_h = self.margin, self.cell_size, self.header_h
        screen.fill(BG_COLOR)

        # 顶部信息栏
        score_text = self.font_mid.render(f"Score: {self.score}  Best: {self.max_score}", True, TILE_TEXT_COLOR_DARK)
        hint_text = self.font_small.render("Arrows: Move | R: New Game | Esc: Quit", True, TILE_TEXT_COLOR_DARK)
        screen.blit(score_text, (margin, (header_h - score_text.get_height()) // 2))
        screen.blit(hint_text, (margin, header_h - hint_text.get_height() - 8))

        # 棋盘背景
        pygame.draw.rect(screen, GRID_COLOR, pygame.Rect(0, header_h, self.width, self.height - header_h))
        # 网格 + 方块
        for r in range(self.size):
            for c in range(self.size):
                x = margin + c * (cell_size + margin)
                y = header_h + margin + r * (cell_size + margin)
                val = int(self.view[r, c])
                color = TILE_COLORS.get(val, EMPTY_COLOR if val == 0 else (60, 58, 50))
                pygame.draw.rect(screen, color, pygame.Rect(x, y, cell_size, cell_size), border_radius=6)
                if val:
                    text_color = TILE_TEXT_COLOR_DARK if val <= 4 else TILE_TEXT_COLOR_LIGHT
                    # 自适应字号
                    if val < 100:
                        f = self.font_big
                    elif val < 1000:
                        f = self.font_mid
                    else:
                        f = self.font_small
                    text = f.render(str(val), True, text_color)
                    screen.blit(text, (x + (cell_size - text.get_width()) // 2, y + (cell_size - text.get_height()) // 2))

        # 结束遮罩
        if self.over:
            overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
            overlay.fill((255, 255, 255, 180))
            screen.blit(overlay, (0, 0))
            go_text = self.font_big.render("Game Over", True, (80, 70, 60))
            screen.blit(go_text, (self.width // 2 - go_text.get_width() // 2, self.height // 2 - go_text.get_height() // 2))

        pygame.display.flip()

    def read_move(self) -> Command:
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return self._record(Command.QUIT)
                if event.type == pygame.KEYDOWN and event.key in KEY_COMMANDS:
                    return self._record(KEY_COMMANDS[event.key])
            self.draw()
            self.clock.tick(60)

    def close(self) -> None:
        pygame.quit()
