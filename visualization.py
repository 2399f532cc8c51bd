# visualization.py
"""
Handles the drawing surface and window using Pygame.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

import pygame

from constants import BACKGROUND_COLOR, FPS, WINDOW_TITLE

# --- Data Contracts ---
#
# class Visualizer:
#   - __init__(self, vis_params: Dict[str, Any]):
#     - Inputs: "visualization" section of the config.
#     - Side Effects: Initializes Pygame and opens a resizable window.
#     - Invariants:
#       - (self.width, self.height) is the logical canvas size. It never
#         changes, even when the window is resized.
#       - self.displayed_size is the current window size.
#
#   - clear() -> None / fill_rect(x, y, w, h, color) -> None:
#     The drawing primitives. Both draw into the offscreen buffer.
#
#   - present() -> None: scales the buffer to the window and flips.
#   - poll_events() -> List[pygame.event.Event]


def to_color(value: Any) -> pygame.Color:
    """Accepts a color name, a hex string or an (r, g, b) sequence."""
    if isinstance(value, (tuple, list)):
        return pygame.Color(*value)
    return pygame.Color(value)


class Visualizer:
    """
    An offscreen canvas of fixed logical size shown in a resizable window.
    """
    def __init__(self, vis_params: Optional[Dict[str, Any]] = None):
        vis_params = vis_params or {}
        pygame.init()

        self.width = int(vis_params.get('canvas_width', 1200))
        self.height = int(vis_params.get('canvas_height', 700))
        window_size = (
            int(vis_params.get('window_width', self.width)),
            int(vis_params.get('window_height', self.height)),
        )
        self.fps = vis_params.get('fps', FPS)
        self.background_color = to_color(vis_params.get('background_color', BACKGROUND_COLOR))

        self.screen = pygame.display.set_mode(window_size, pygame.RESIZABLE)
        pygame.display.set_caption(vis_params.get('title', WINDOW_TITLE))
        self.buffer = pygame.Surface((self.width, self.height))
        self.clock = pygame.time.Clock()

        logging.info(
            f"Visualizer initialized: canvas {self.width}x{self.height}, "
            f"window {window_size[0]}x{window_size[1]}."
        )

    @property
    def displayed_size(self) -> Tuple[int, int]:
        return self.screen.get_size()

    def clear(self) -> None:
        self.buffer.fill(self.background_color)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Any) -> None:
        """Draws a filled rectangle; `color` may be a name, hex string or RGB triple."""
        pygame.draw.rect(self.buffer, to_color(color), pygame.Rect(x, y, w, h))

    def present(self) -> None:
        """Shows the buffer, stretched to the window if the sizes differ."""
        if min(self.displayed_size) <= 0:
            return
        if self.displayed_size == (self.width, self.height):
            self.screen.blit(self.buffer, (0, 0))
        else:
            self.screen.blit(pygame.transform.scale(self.buffer, self.displayed_size), (0, 0))
        pygame.display.flip()

    def poll_events(self) -> List[pygame.event.Event]:
        """Drains the pygame queue, dropping resizes to an empty window."""
        events = []
        for event in pygame.event.get():
            if event.type == pygame.VIDEORESIZE:
                if event.w <= 0 or event.h <= 0:
                    logging.warning("Ignoring resize to an empty window.")
                    continue
                logging.info(f"Window resized to {event.w}x{event.h}.")
            events.append(event)
        return events

    def wait_frame(self) -> float:
        """Caps the frame rate; returns the milliseconds since the last frame."""
        return self.clock.tick(self.fps)

    def close(self):
        """Shuts down Pygame."""
        pygame.quit()
