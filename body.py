# body.py
"""
Defines the rectangular bodies that drift around the canvas.

A Body owns its kinematic state (position, velocity, acceleration as
float64 NumPy vectors), its size, its color and a sticky collision flag.
The pointer-force and wall math lives in Numba-jitted kernels at module
level. The per-body methods call the scalar kernels; World.tick runs the
whole population through _step_bodies_numba in a single call.
"""
import logging
import math
from typing import Any, Optional, Tuple

import numpy as np
from numba import jit

import constants

# --- Data Contracts ---
#
# class Body:
#   - __init__(self, x, y, width, height, color, velocity=(0, 0), rng=None, ...):
#     - Inputs:
#       - x, y: float, top-left corner in canvas units. Must be finite.
#       - width, height: float, must be > 0. Fixed for the body's lifetime.
#       - color: anything pygame.Color accepts (name, hex string, RGB triple).
#       - velocity: (vx, vy), must be finite.
#       - rng: np.random.Generator used by randomize_color().
#     - Raises: ValueError if an invariant is violated.
#     - Invariants:
#       - self.position, self.velocity, self.acceleration are float64 arrays of shape (2,).
#         After bind_state() they are views into a World's arrays; every
#         method updates them in place.
#       - self.collided only ever goes from False to True.
#
# Drawing surface contract (see visualization.Visualizer):
#   - fill_rect(x: float, y: float, w: float, h: float, color) -> None


@jit(nopython=True)
def _boxes_overlap(x, y, width, height, px, py, p_width, p_height):
    """Axis-aligned bounding box test between a body and the pointer."""
    return px < x + width and px + p_width > x and py < y + height and py + p_height > y


@jit(nopython=True)
def _wall_velocity(coord, extent, velocity, bound):
    """Velocity along one axis after the wall check; the low side uses `extent` as margin."""
    if coord + extent >= bound:
        return -abs(velocity)
    elif coord - extent <= 0:
        return abs(velocity)
    return velocity


@jit(nopython=True)
def _inverse_power_acceleration(dx, dy, strength, exponent, min_distance):
    """
    Numba-jitted pointer force kernel.

    Returns strength * (delta / d) / d**exponent per axis. The distance is
    clamped to min_distance so coincident centers yield a zero vector
    instead of a division by zero.
    """
    distance = math.sqrt(dx * dx + dy * dy)
    if distance < min_distance:
        distance = min_distance
    scale = strength / (distance * distance ** exponent)
    return dx * scale, dy * scale


@jit(nopython=True)
def _step_bodies_numba(
    positions, velocities, accelerations, sizes, bounds, pointer, strength, min_distance, overlaps
):
    """
    Numba-jitted physics step for a whole population.

    Per body, in order: Euler integration, wall check, then either an
    overlap flag or the pointer repulsion. Mirrors Body.integrate,
    Body.resolve_wall_collision and Body.resolve_pointer_interaction;
    overlaps[i] is set instead of touching colors, which stay in Python.

    `pointer` is (x, y, width, height); `bounds` is (width, height).
    """
    for i in range(positions.shape[0]):
        for axis in range(2):
            velocities[i, axis] += accelerations[i, axis]
            positions[i, axis] += velocities[i, axis]
        for axis in range(2):
            velocities[i, axis] = _wall_velocity(
                positions[i, axis], sizes[i, axis], velocities[i, axis], bounds[axis]
            )

        x = positions[i, 0]
        y = positions[i, 1]
        if _boxes_overlap(x, y, sizes[i, 0], sizes[i, 1], pointer[0], pointer[1], pointer[2], pointer[3]):
            overlaps[i] = True
        else:
            overlaps[i] = False
            ax, ay = _inverse_power_acceleration(
                x - pointer[0], y - pointer[1], strength, 2.0, min_distance
            )
            accelerations[i, 0] = ax
            accelerations[i, 1] = ay


class Body:
    """
    A filled rectangle with Euler-integrated motion and a pointer reaction.
    """
    def __init__(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        color: Any,
        velocity: Tuple[float, float] = (0.0, 0.0),
        rng: Optional[np.random.Generator] = None,
        strength: float = constants.FORCE_STRENGTH,
        attraction_exponent: float = constants.ATTRACTION_EXPONENT,
        min_distance: float = constants.MIN_DISTANCE,
        collided_color: Any = constants.COLLIDED_COLOR,
    ):
        if not (width > 0 and height > 0):
            raise ValueError(f"Body dimensions must be positive, got {width}x{height}.")

        self.position = np.array([x, y], dtype=np.float64)
        self.velocity = np.array(velocity, dtype=np.float64)
        if self.position.shape != (2,) or self.velocity.shape != (2,):
            raise ValueError("Body position and velocity must be 2D vectors.")
        if not (np.all(np.isfinite(self.position)) and np.all(np.isfinite(self.velocity))):
            raise ValueError(
                f"Body state must be finite, got position={self.position}, "
                f"velocity={self.velocity}."
            )
        self.acceleration = np.zeros(2, dtype=np.float64)

        self._size = (float(width), float(height))
        self.color = color
        self._collided = False
        self.rng = rng if rng is not None else np.random.default_rng()

        self.strength = float(strength)
        self.attraction_exponent = float(attraction_exponent)
        self.min_distance = float(min_distance)
        self.collided_color = collided_color

    def __repr__(self) -> str:
        return (
            f"Body(x={self.x:.1f}, y={self.y:.1f}, size={self.width:.1f}x{self.height:.1f}, "
            f"collided={self._collided})"
        )

    @property
    def x(self) -> float:
        return float(self.position[0])

    @property
    def y(self) -> float:
        return float(self.position[1])

    @property
    def width(self) -> float:
        return self._size[0]

    @property
    def height(self) -> float:
        return self._size[1]

    @property
    def collided(self) -> bool:
        """True once this body has overlapped the pointer. Never reset."""
        return self._collided

    def bind_state(self, position: np.ndarray, velocity: np.ndarray, acceleration: np.ndarray) -> None:
        """
        Moves the kinematic vectors into caller-owned storage.

        The arrays are typically rows of a population-wide array, so the
        batched step and the per-body methods see the same numbers.
        """
        position[:] = self.position
        velocity[:] = self.velocity
        acceleration[:] = self.acceleration
        self.position, self.velocity, self.acceleration = position, velocity, acceleration

    def render(self, canvas) -> None:
        """Draws the body as a filled rectangle on the given surface."""
        canvas.fill_rect(self.x, self.y, self.width, self.height, self.color)

    def integrate(self) -> None:
        """
        One explicit Euler step with an implicit timestep of 1.
        v_new = v_old + a
        p_new = p_old + v_new
        """
        self.velocity += self.acceleration
        self.position += self.velocity

    def move_to(self, x: float, y: float) -> None:
        """Places the body directly, bypassing velocity."""
        self.position[0] = x
        self.position[1] = y

    def resolve_wall_collision(self, bounds_width: float, bounds_height: float) -> None:
        """
        Points the velocity back inside the canvas when a wall is reached.

        Only the sign is forced, so repeated calls at the same position are
        stable. The low side uses the body's own size as a margin.
        """
        self.velocity[0] = _wall_velocity(self.x, self.width, float(self.velocity[0]), float(bounds_width))
        self.velocity[1] = _wall_velocity(self.y, self.height, float(self.velocity[1]), float(bounds_height))

    def resolve_pointer_interaction(
        self, px: float, py: float, p_width: float, p_height: float
    ) -> None:
        """
        Tints the body on overlap with the pointer, otherwise repels it.

        The overlap test runs first so an overlapping body never reaches
        the distance-based force computation.
        """
        x, y = self.x, self.y
        if _boxes_overlap(x, y, self.width, self.height, px, py, p_width, p_height):
            self.mark_collided()
            return

        ax, ay = _inverse_power_acceleration(x - px, y - py, self.strength, 2.0, self.min_distance)
        self.acceleration[0] = ax
        self.acceleration[1] = ay

    def mark_collided(self) -> None:
        """Sets the sticky collision flag and the collided tint."""
        if not self._collided:
            logging.debug(f"Body collided with pointer at ({self.x:.1f}, {self.y:.1f}).")
        self._collided = True
        self.color = self.collided_color

    def attract_toward_pointer(self, px: float, py: float) -> None:
        """
        Stops the body and accelerates it toward the pointer.

        Bodies that have collided before also pick a new random color on
        every call.
        """
        self.velocity[:] = 0.0

        ax, ay = _inverse_power_acceleration(
            self.x - px, self.y - py, -self.strength, self.attraction_exponent, self.min_distance
        )
        self.acceleration[0] = ax
        self.acceleration[1] = ay

        if self._collided:
            self.randomize_color()

    def randomize_color(self) -> None:
        """Sets the color to a uniformly random (r, g, b) triple."""
        red, green, blue = self.rng.integers(0, 256, size=3)
        self.color = (int(red), int(green), int(blue))
