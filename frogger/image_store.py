from __future__ import annotations

import logging
import os
from typing import Optional

import pygame

log = logging.getLogger(__name__)


class ImageStore:
    def __init__(self) -> None:
        self.cache: dict[str, Optional[pygame.Surface]] = {}
        self._scaled: dict[tuple[str, int, int], pygame.Surface] = {}

    def load(self, path: Optional[str], *, allow_alpha: bool = True) -> Optional[pygame.Surface]:
        if not path:
            return None
        norm = os.path.normpath(path)
        if norm in self.cache:
            return self.cache[norm]
        img: Optional[pygame.Surface] = None
        if os.path.exists(norm):
            try:
                img = pygame.image.load(norm)
                img = img.convert_alpha() if allow_alpha else img.convert()
            except pygame.error as exc:
                log.warning("could not load sprite %s: %s", norm, exc)
                img = None
        else:
            log.debug("sprite %s not found, drawing shapes instead", norm)
        # misses are cached too so a missing file is only probed once
        self.cache[norm] = img
        return img

    def scaled(self, path: Optional[str], size: tuple[int, int]) -> Optional[pygame.Surface]:
        img = self.load(path)
        if img is None:
            return None
        key = (os.path.normpath(path), int(size[0]), int(size[1]))
        if key not in self._scaled:
            self._scaled[key] = pygame.transform.smoothscale(img, (max(1, key[1]), max(1, key[2])))
        return self._scaled[key]


IMAGES = ImageStore()

__all__ = ["ImageStore", "IMAGES"]
