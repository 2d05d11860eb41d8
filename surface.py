# surface.py

"""
Render surfaces.

The simulation draws through the narrow Canvas interface below and never
touches pygame itself. PygameCanvas is the window-backed implementation used
by main.py: it keeps a small logical buffer (one pixel per simulated pixel)
and scales it up into the window when a frame is rendered.

Data Contract:
- Canvas.filled_rect(x, y, width, height, color): draws a filled rectangle;
  anything outside the surface is clipped.
- Canvas.clear_screen(color): fills the whole surface.
- Canvas.render(): presents the current contents. Returns False when the
  refresh limit caused the frame to be skipped.
"""

import logging
import time
from typing import Optional, Protocol, Tuple

import pygame

logger = logging.getLogger("particle_sim")

RGB = Tuple[int, int, int]


class Canvas(Protocol):
    width: int
    height: int

    def filled_rect(self, x: int, y: int, width: int, height: int, color: RGB) -> None: ...

    def clear_screen(self, color: RGB) -> None: ...

    def render(self) -> bool: ...


class PygameCanvas:
    """
    A window-backed canvas of `width` x `height` logical pixels, each shown as
    a `scale` x `scale` block on screen.
    """
    def __init__(self, width: int, height: int, scale: int = 1, title: str = ""):
        self.width = width
        self.height = height
        self.scale = scale
        self.refresh_limit: Optional[int] = None
        self._last_render = None

        self.window = pygame.display.set_mode((width * scale, height * scale))
        if title:
            pygame.display.set_caption(title)
        self.buffer = pygame.Surface((width, height))

        logger.info(f"Canvas created: {width}x{height} logical pixels at scale {scale}.")

    def set_refresh_limit(self, frames_per_second: int):
        self.refresh_limit = frames_per_second

    def filled_rect(self, x: int, y: int, width: int, height: int, color: RGB):
        pygame.draw.rect(self.buffer, color, pygame.Rect(x, y, width, height))

    def clear_screen(self, color: RGB):
        self.buffer.fill(color)

    def render(self) -> bool:
        now = time.perf_counter()
        if (
            self.refresh_limit
            and self._last_render is not None
            and now - self._last_render < 1.0 / self.refresh_limit
        ):
            return False
        self._last_render = now

        pygame.transform.scale(self.buffer, self.window.get_size(), self.window)
        pygame.display.flip()
        return True
