# world.py
"""
Handles the population of bodies and the per-tick update rule.

This module defines the World class, which creates every body once at
startup, advances them one physics step per tick, and draws them along
with the pointer body.
"""
import logging
from typing import Any, Dict, List, Optional

import numpy as np

from body import Body, _step_bodies_numba

# --- Data Contracts ---
#
# class World:
#   - __init__(self, params: Dict[str, Any], width: float, height: float,
#              input_adapter: InputAdapter, rng: Optional[np.random.Generator] = None):
#     - Inputs:
#       - params: "simulation_parameters" section of the config.
#       - width, height: logical canvas size, used as wall bounds.
#       - input_adapter: source of the pointer position.
#     - Side Effects: Creates between body_count_min and body_count_max
#       bodies (inclusive) and one pointer body.
#     - Invariants: len(self.bodies) never changes after construction.
#       - self.positions, self.velocities, self.accelerations are float64
#         arrays of shape (N, 2); row i is the storage behind self.bodies[i].
#
#   - tick(self) -> None: one physics step for every body.
#   - draw(self, canvas) -> None: clears the canvas, renders bodies, then the pointer.
#   - on_pointer_held(self) -> None: one step of the click-and-hold pull.


class World:
    """
    Owns the bodies and the pointer surrogate and applies the update rule.
    """
    def __init__(
        self,
        params: Dict[str, Any],
        width: float,
        height: float,
        input_adapter,
        rng: Optional[np.random.Generator] = None,
    ):
        self.width = width
        self.height = height
        self.input_adapter = input_adapter
        self.rng = rng if rng is not None else np.random.default_rng(params.get('seed'))

        force_kwargs = {
            'strength': params['force_strength'],
            'attraction_exponent': params['attraction_exponent'],
            'min_distance': params['min_distance'],
            'collided_color': params['collided_color'],
        }

        body_count = int(self.rng.integers(params['body_count_min'], params['body_count_max'] + 1))
        self.bodies: List[Body] = [
            self._spawn_body(params, force_kwargs) for _ in range(body_count)
        ]

        # Gather the bodies' vectors into contiguous arrays for the batched step.
        self.positions = np.zeros((body_count, 2), dtype=np.float64)
        self.velocities = np.zeros((body_count, 2), dtype=np.float64)
        self.accelerations = np.zeros((body_count, 2), dtype=np.float64)
        self.sizes = np.array([[b.width, b.height] for b in self.bodies], dtype=np.float64).reshape(body_count, 2)
        for i, body in enumerate(self.bodies):
            body.bind_state(self.positions[i], self.velocities[i], self.accelerations[i])
        self._overlaps = np.zeros(body_count, dtype=np.bool_)
        self._bounds = np.array([width, height], dtype=np.float64)
        self.strength = float(params['force_strength'])
        self.min_distance = float(params['min_distance'])

        pointer_width, pointer_height = params['pointer_size']
        pointer_x, pointer_y = input_adapter.position
        self.pointer = Body(
            pointer_x, pointer_y, pointer_width, pointer_height,
            params['pointer_color'], rng=self.rng, **force_kwargs
        )

        logging.info(f"World initialized with {body_count} bodies on a {width}x{height} canvas.")
        logging.debug(
            f"Body arrays created. Positions shape: {self.positions.shape}, "
            f"Sizes shape: {self.sizes.shape}"
        )

    def _spawn_body(self, params: Dict[str, Any], force_kwargs: Dict[str, Any]) -> Body:
        """Creates one body with uniformly random position, size and velocity."""
        speed = params['initial_speed']
        x, y = self.rng.uniform(low=[0, 0], high=[self.width, self.height])
        body_width = self.rng.uniform(*params['body_width_range'])
        body_height = self.rng.uniform(*params['body_height_range'])
        velocity = (self.rng.random(2) - 0.5) * speed

        body = Body(
            x, y, body_width, body_height, params['body_color'],
            velocity=tuple(velocity), rng=self.rng, **force_kwargs
        )
        logging.debug(f"Spawned {body!r}")
        return body

    def tick(self) -> None:
        """
        Executes one physics step.

        Position integration runs before the collision checks, so the
        response to an overlap shows up one tick later.
        """
        self.pointer.move_to(*self.input_adapter.position)
        pointer = np.array(
            [self.pointer.x, self.pointer.y, self.pointer.width, self.pointer.height],
            dtype=np.float64,
        )

        # 1. Integrate, bounce and repel every body (using Numba)
        _step_bodies_numba(
            self.positions, self.velocities, self.accelerations, self.sizes,
            self._bounds, pointer, self.strength, self.min_distance, self._overlaps
        )

        # 2. Colors are Python objects, so overlaps are applied here
        for i in np.flatnonzero(self._overlaps):
            self.bodies[i].mark_collided()

    def draw(self, canvas) -> None:
        """Clears the canvas and renders every body with the pointer on top."""
        canvas.clear()
        for body in self.bodies:
            body.render(canvas)
        self.pointer.render(canvas)

    def on_pointer_held(self) -> None:
        """Recolors the pointer and pulls every body toward it."""
        self.pointer.randomize_color()
        px, py = self.pointer.x, self.pointer.y
        for body in self.bodies:
            body.attract_toward_pointer(px, py)

    # --- Statistics for throttled logging ---

    @property
    def collided_count(self) -> int:
        return sum(1 for body in self.bodies if body.collided)

    def average_speed(self) -> float:
        return float(np.mean(np.linalg.norm(self.velocities, axis=1)))
