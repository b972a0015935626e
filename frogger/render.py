from __future__ import annotations

from typing import Optional

import pygame

from .config import CFG
from .constants import (
    ACCENT,
    BG,
    CAR_COLORS,
    FONT_SIZE_BIG,
    FONT_SIZE_MID,
    FONT_SIZE_SMALL,
    FROG_COLOR,
    FROG_EYE_COLOR,
    HUD_HEIGHT,
    HUD_LABEL_COLOR,
    HUD_PAD_X,
    HUD_VALUE_COLOR,
    INK,
    LANE_COLORS,
    LIVES_COLOR,
    LIVES_RADIUS,
    LOG_COLOR,
    LOG_GRAIN_COLOR,
    OVERLAY_BG,
    PAD_COLOR,
    PAD_FILLED_COLOR,
)
from .image_store import IMAGES, ImageStore
from .lanes import LaneTable
from .models import ObstacleKind, ObstacleView, Phase, Snapshot


class Renderer:
    """Draws a :class:`Snapshot`. Reads nothing else from the game."""

    def __init__(self, screen: pygame.Surface, lanes: LaneTable, *,
                 images: ImageStore = IMAGES, cfg: Optional[dict] = None) -> None:
        self.screen = screen
        self.lanes = lanes
        self.images = images
        self.cfg = CFG if cfg is None else cfg
        self.small = pygame.font.Font(None, FONT_SIZE_SMALL + 6)
        self.mid = pygame.font.Font(None, FONT_SIZE_MID + 8)
        self.big = pygame.font.Font(None, FONT_SIZE_BIG + 12)
        self.board = pygame.Surface((lanes.grid.play_width, lanes.grid.play_height))

    def _img(self, key: str) -> Optional[str]:
        return self.cfg.get("images", {}).get(key)

    # ---- Board ----

    def _draw_lanes(self, snap: Snapshot) -> None:
        cell = snap.grid.cell_size
        for lane in self.lanes:
            rect = pygame.Rect(0, lane.index * cell, snap.grid.play_width, cell)
            pygame.draw.rect(self.board, LANE_COLORS[lane.kind.name], rect)
        for col in snap.goal_pads:
            pad = pygame.Rect(col * cell, 0, cell, cell)
            color = PAD_FILLED_COLOR if col in snap.claimed_pads else PAD_COLOR
            pygame.draw.ellipse(self.board, color, pad.inflate(-6, -6))

    def _draw_obstacle(self, o: ObstacleView, cell: int) -> None:
        rect = pygame.Rect(int(o.x), o.lane * cell, o.width_cells * cell, cell)
        if o.kind is ObstacleKind.CAR:
            key = "car_red" if o.id % 2 else "car_blue"
        else:
            key = "log"
        img = self.images.scaled(self._img(key), rect.size)
        if img:
            self.board.blit(img, rect)
            return

        if o.kind is ObstacleKind.CAR:
            body = rect.inflate(-4, -8)
            pygame.draw.rect(self.board, CAR_COLORS[o.id % len(CAR_COLORS)], body, border_radius=6)
            glass = pygame.Rect(0, 0, max(4, body.width // 4), body.height - 8)
            glass.center = body.center
            pygame.draw.rect(self.board, (200, 230, 255), glass, border_radius=3)
        else:
            body = rect.inflate(0, -10)
            pygame.draw.rect(self.board, LOG_COLOR, body, border_radius=8)
            for gx in range(body.left + cell // 2, body.right - 4, cell):
                pygame.draw.line(self.board, LOG_GRAIN_COLOR, (gx, body.top + 4), (gx, body.bottom - 4), 2)

    def _draw_player(self, snap: Snapshot) -> None:
        cell = snap.grid.cell_size
        rect = pygame.Rect(int(snap.player_x), int(snap.player_y), cell, cell)
        img = self.images.scaled(self._img("frog"), rect.size)
        if img:
            self.board.blit(img, rect)
            return
        body = rect.inflate(-8, -8)
        pygame.draw.ellipse(self.board, FROG_COLOR, body)
        r = max(2, cell // 10)
        for ex in (body.left + body.width // 3, body.right - body.width // 3):
            pygame.draw.circle(self.board, FROG_EYE_COLOR, (ex, body.top + body.height // 3), r)

    # ---- HUD ----

    def _draw_hud(self, snap: Snapshot, start_label: str) -> None:
        w = self.screen.get_width()
        bar = pygame.Rect(0, 0, w, HUD_HEIGHT)
        pygame.draw.rect(self.screen, (22, 26, 34), bar)
        pygame.draw.line(self.screen, ACCENT, (0, bar.bottom - 2), (w, bar.bottom - 2), 2)

        lab = self.small.render("SCORE", True, HUD_LABEL_COLOR)
        val = self.mid.render(str(snap.score), True, HUD_VALUE_COLOR)
        self.screen.blit(lab, (HUD_PAD_X, 8))
        self.screen.blit(val, (HUD_PAD_X, 8 + lab.get_height()))

        lab = self.small.render("LIVES", True, HUD_LABEL_COLOR)
        lx = w // 2 - lab.get_width() // 2
        self.screen.blit(lab, (lx, 8))
        for i in range(snap.lives):
            cx = w // 2 - (snap.lives - 1) * (LIVES_RADIUS * 3) // 2 + i * LIVES_RADIUS * 3
            pygame.draw.circle(self.screen, LIVES_COLOR, (cx, 8 + lab.get_height() + 12), LIVES_RADIUS)

        diff = self.small.render(snap.difficulty.upper(), True, HUD_LABEL_COLOR)
        self.screen.blit(diff, (w - diff.get_width() - HUD_PAD_X, 8))
        hint = self.small.render(f"[Enter] {start_label}", True, INK)
        self.screen.blit(hint, (w - hint.get_width() - HUD_PAD_X, 8 + diff.get_height() + 4))

    def _draw_overlay(self, snap: Snapshot, board_rect: pygame.Rect) -> None:
        if snap.phase is Phase.RUNNING:
            if snap.message:
                msg = self.small.render(snap.message, True, INK)
                self.screen.blit(msg, msg.get_rect(midtop=(board_rect.centerx, board_rect.bottom + 6)))
            return
        shade = pygame.Surface(board_rect.size, pygame.SRCALPHA)
        shade.fill(OVERLAY_BG)
        self.screen.blit(shade, board_rect.topleft)
        title = {
            Phase.IDLE: "FROGGER",
            Phase.GAME_OVER: "GAME OVER",
            Phase.LEVEL_COMPLETE: "LEVEL COMPLETE",
        }[snap.phase]
        t = self.big.render(title, True, ACCENT)
        self.screen.blit(t, t.get_rect(center=(board_rect.centerx, board_rect.centery - 30)))
        if snap.message:
            m = self.mid.render(snap.message, True, INK)
            self.screen.blit(m, m.get_rect(center=(board_rect.centerx, board_rect.centery + 20)))
        if snap.phase is Phase.IDLE:
            h = self.small.render("1/2/3 difficulty   arrows/WASD move", True, HUD_LABEL_COLOR)
            self.screen.blit(h, h.get_rect(center=(board_rect.centerx, board_rect.centery + 56)))

    def draw(self, snap: Snapshot, *, start_label: str = "Start Game") -> None:
        self.screen.fill(BG)
        self.board.fill(BG)
        self._draw_lanes(snap)
        cell = snap.grid.cell_size
        for o in snap.obstacles:
            self._draw_obstacle(o, cell)
        self._draw_player(snap)

        sw, sh = self.screen.get_size()
        board_rect = self.board.get_rect()
        board_rect.midtop = (sw // 2, HUD_HEIGHT + max(0, (sh - HUD_HEIGHT - board_rect.height) // 2))
        self.screen.blit(self.board, board_rect)
        self._draw_hud(snap, start_label)
        self._draw_overlay(snap, board_rect)


__all__ = ["Renderer"]
