from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from catris.game import FallingBlockGame, Piece


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (24, 22, 30),
        1: (180, 215, 255),  # I
        2: (255, 210, 128),  # O
        3: (230, 195, 255),  # T
        4: (152, 255, 152),  # S
        5: (255, 182, 182),  # Z
        6: (173, 216, 230),  # J
        7: (255, 218, 185),  # L
    }
    return palette.get(abs(v), (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_cells = panel_cells
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        board_w = width * self.cell_size
        board_h = height * self.cell_size
        panel_w = self.panel_cells * self.cell_size
        return self.margin * 3 + board_w + panel_w, self.margin * 2 + board_h

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((36, 32, 44))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, _color_for_value(int(state[y, x])), rect)
        return surf

    def _draw_ghost(self, surf: pygame.Surface, game: FallingBlockGame) -> None:
        piece = game.state.current_piece
        ghost = game.ghost_position()
        if piece is None or ghost is None or game.state.game_over:
            return
        color = _color_for_value(int(piece.kind))
        for x, y in piece.cells_at(ghost.x, ghost.y):
            if y >= 0:
                rect = pygame.Rect(x * self.cell_size + 3, y * self.cell_size + 3, self.cell_size - 7, self.cell_size - 7)
                pygame.draw.rect(surf, color, rect, 2)

    def _draw_preview(self, screen: pygame.Surface, piece: Optional[Piece], x0: int, y0: int) -> None:
        if piece is None:
            return
        color = _color_for_value(int(piece.kind))
        for dx, dy in piece.offsets():
            rect = pygame.Rect(x0 + dx * self.cell_size, y0 + dy * self.cell_size, self.cell_size - 1, self.cell_size - 1)
            pygame.draw.rect(screen, color, rect)

    def _fonts(self) -> Tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None or self._big_font is None:
            self._font = pygame.font.SysFont(None, 26)
            self._big_font = pygame.font.SysFont(None, 44)
        return self._font, self._big_font

    def _banner(self, screen: pygame.Surface, board_rect: pygame.Rect, lines: Tuple[str, ...]) -> None:
        font, big_font = self._fonts()
        shade = pygame.Surface(board_rect.size, pygame.SRCALPHA)
        shade.fill((0, 0, 0, 128))
        screen.blit(shade, board_rect.topleft)
        for i, txt in enumerate(lines):
            img = (big_font if i == 0 else font).render(txt, True, (255, 255, 255))
            rect = img.get_rect(center=(board_rect.centerx, board_rect.centery + i * 40))
            screen.blit(img, rect)

    def draw(self, screen: pygame.Surface, game: FallingBlockGame) -> None:
        state = game.get_state()
        grid_surf = self._grid_surface(state)
        self._draw_ghost(grid_surf, game)
        screen.fill((14, 12, 18))
        screen.blit(grid_surf, (self.margin, self.margin))
        board_rect = pygame.Rect((self.margin, self.margin), grid_surf.get_size())

        font, _ = self._fonts()
        x_panel = board_rect.right + self.margin
        screen.blit(font.render(f"Score: {game.state.score}", True, (230, 230, 230)), (x_panel, self.margin))
        screen.blit(font.render(f"Lines: {game.state.lines_cleared_total}", True, (230, 230, 230)), (x_panel, self.margin + 28))
        screen.blit(font.render("Next:", True, (230, 230, 230)), (x_panel, self.margin + 72))
        self._draw_preview(screen, game.state.next_piece, x_panel, self.margin + 100)

        if game.state.game_over:
            self._banner(screen, board_rect, ("GAME OVER", f"Score: {game.state.score}", "Press R to restart"))
        elif game.state.paused:
            self._banner(screen, board_rect, ("PAUSED",))
        pygame.display.flip()
