from __future__ import annotations

import logging
import os
import sys

import pygame

from .config import CFG
from .constants import FPS, HUD_HEIGHT, MAX_FRAME_DT, WINDOWED_DEFAULT_SIZE
from .game import Game
from .gpio import init_gpio
from .input_map import KEY_TO_DIFFICULTY, QUIT_KEYS, START_KEYS, intent_for_key
from .models import Phase
from .render import Renderer

log = logging.getLogger(__name__)


def _window_size(game: Game) -> tuple[int, int]:
    w, h = WINDOWED_DEFAULT_SIZE
    need_w = game.grid.play_width
    need_h = game.grid.play_height + HUD_HEIGHT + 32
    return max(int(w), need_w), max(int(h), need_h)


def handle_event(game: Game, event: pygame.event.Event) -> bool:
    """Apply one pygame event. Returns False when the app should quit."""
    if event.type == pygame.QUIT:
        return False
    if event.type != pygame.KEYDOWN:
        return True
    if event.key in QUIT_KEYS:
        return False
    if event.key in START_KEYS:
        game.start()
        return True
    if event.key in KEY_TO_DIFFICULTY and game.state.phase is not Phase.RUNNING:
        game.set_difficulty(KEY_TO_DIFFICULTY[event.key])
        return True
    move = intent_for_key(event.key)
    if move is not None:
        game.queue_move(move)
    return True


# ============================== MAIN LOOP ============================== #
def main():
    logging.basicConfig(
        level=getattr(logging, CFG.get("log_level", "INFO"), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    os.environ.setdefault('SDL_VIDEO_CENTERED', "1")
    pygame.init()
    game = Game()
    fps = int(CFG.get("display", {}).get("fps", FPS))
    flags = pygame.FULLSCREEN if CFG.get("display", {}).get("fullscreen", False) else 0
    screen = pygame.display.set_mode((0, 0) if flags else _window_size(game), flags)
    pygame.display.set_caption("Frogger")
    renderer = Renderer(screen, game.lanes)
    _ = init_gpio(game.queue_move)
    clock = pygame.time.Clock()

    while True:
        for event in pygame.event.get():
            if not handle_event(game, event):
                pygame.quit(); sys.exit(0)
        dt = min(MAX_FRAME_DT, clock.tick(fps) / 1000.0)
        game.tick(dt)
        renderer.draw(game.snapshot(), start_label=game.start_label())
        pygame.display.flip()

if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        pygame.quit(); sys.exit(0)
