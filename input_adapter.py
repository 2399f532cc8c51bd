# input_adapter.py
"""
Translates raw pointer events into canvas coordinates.

The window the user sees can be a different size from the logical canvas
the bodies live in, so every move event is rescaled by the ratio of
canvas size to displayed size.
"""
import logging
from typing import Tuple

# --- Data Contracts ---
#
# class InputAdapter:
#   - __init__(self, canvas, pointer_size: Tuple[float, float]):
#     - canvas must expose `width`, `height` (logical buffer size) and
#       `displayed_size` -> (w, h) of the on-screen area.
#   - on_move(offset_x, offset_y): offsets are in displayed coordinates.
#   - position -> (x, y): top-left of the pointer body in canvas coordinates.


class InputAdapter:
    """Holds the last pointer position and the button-held flag."""
    def __init__(self, canvas, pointer_size: Tuple[float, float]):
        self.canvas = canvas
        self.pointer_width, self.pointer_height = pointer_size
        # Until the first move event the pointer parks in the far corner.
        self.x = float(canvas.width)
        self.y = float(canvas.height)
        self.held = False
        self._scale = (1.0, 1.0)

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    def scale_factors(self) -> Tuple[float, float]:
        """
        Canvas units per displayed pixel along each axis.

        A minimized or collapsed window reports an empty size; the last
        usable factors are kept until it has an area again.
        """
        displayed_width, displayed_height = self.canvas.displayed_size
        if displayed_width <= 0 or displayed_height <= 0:
            logging.debug(
                f"Displayed size {displayed_width}x{displayed_height} is empty; "
                f"keeping scale {self._scale}."
            )
            return self._scale
        self._scale = (
            self.canvas.width / displayed_width,
            self.canvas.height / displayed_height,
        )
        return self._scale

    def on_move(self, offset_x: float, offset_y: float) -> None:
        # Center the pointer body on the cursor, then rescale.
        scale_x, scale_y = self.scale_factors()
        self.x = (offset_x - self.pointer_width / 2) * scale_x
        self.y = (offset_y - self.pointer_height / 2) * scale_y

    def on_press(self) -> None:
        self.held = True
        logging.debug(f"Pointer pressed at ({self.x:.1f}, {self.y:.1f}).")

    def on_release(self) -> None:
        self.held = False
        logging.debug("Pointer released.")
