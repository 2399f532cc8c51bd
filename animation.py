# animation.py
"""
Wires the world, the pointer input and the timers together.

Three recurring callbacks share the one World instance:
1. The physics tick, a one-shot rescheduled from its own due time. A late
   pass runs every step that came due since, so the tick rate does not
   depend on the frame rate.
2. The render tick, called once per displayed frame by the main loop.
3. The hold pull, a recurring task that exists only while the button is held.
They interleave on the main thread; a tick is not guaranteed to precede
the draw of the same frame.
"""
import logging
from typing import Any, Dict, Optional

import pygame

import constants
from input_adapter import InputAdapter
from scheduler import ScheduledTask, Scheduler
from world import World

# --- Data Contracts ---
#
# class Animation:
#   - __init__(self, world: World, input_adapter: InputAdapter, scheduler: Scheduler,
#              run_params: Dict[str, Any]):
#     - run_params: "run_control" section ("tick_interval_ms", "hold_interval_ms").
#   - start() -> None: schedules the first physics tick.
#   - handle_event(event: pygame.event.Event) -> bool: False on a quit request.
#   - frame(canvas) -> None: runs due timers, then the render tick.
#   - stop() -> None: cancels every timer.


class Animation:
    """Owns the timer lifecycle for the physics tick and the hold pull."""
    def __init__(
        self,
        world: World,
        input_adapter: InputAdapter,
        scheduler: Scheduler,
        run_params: Dict[str, Any],
    ):
        self.world = world
        self.input_adapter = input_adapter
        self.scheduler = scheduler
        self.tick_interval_ms = run_params['tick_interval_ms']
        self.hold_interval_ms = run_params['hold_interval_ms']

        self.tick_count = 0
        self._next_tick_due = 0.0
        self.frame_count = 0
        self._tick_task: Optional[ScheduledTask] = None
        self._hold_task: Optional[ScheduledTask] = None

    @property
    def hold_active(self) -> bool:
        return self._hold_task is not None

    def start(self) -> None:
        logging.info(
            f"Animation started: physics every {self.tick_interval_ms}ms, "
            f"hold pull every {self.hold_interval_ms}ms."
        )
        self._next_tick_due = self.scheduler.clock()
        self._physics_tick()

    def _physics_tick(self) -> None:
        now = self.scheduler.clock()
        steps = 0
        while self._next_tick_due <= now and steps < constants.MAX_CATCHUP_TICKS:
            self.world.tick()
            self.tick_count += 1
            steps += 1
            self._next_tick_due += self.tick_interval_ms

        if self._next_tick_due <= now:
            logging.warning(
                f"Physics fell {now - self._next_tick_due:.0f}ms behind; "
                f"dropping the backlog after {steps} ticks."
            )
            self._next_tick_due = now + self.tick_interval_ms

        self._tick_task = self.scheduler.call_at(self._next_tick_due, self._physics_tick)

    def _hold_step(self) -> None:
        if self.input_adapter.held:
            self.world.on_pointer_held()

    def press(self) -> None:
        self.input_adapter.on_press()
        # A second press without a release must not leak the first interval.
        if self._hold_task is not None:
            self._hold_task.cancel()
        self._hold_task = self.scheduler.call_every(self.hold_interval_ms, self._hold_step)
        logging.info("Pointer hold started.")

    def release(self) -> None:
        if self._hold_task is not None:
            self._hold_task.cancel()
            self._hold_task = None
            logging.info("Pointer hold stopped.")
        self.input_adapter.on_release()

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Routes one pygame event.

        Returns:
            bool: False if the animation should exit, True otherwise.
        """
        if event.type == pygame.QUIT:
            logging.info("Quit event received.")
            return False
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            logging.info("ESC key pressed.")
            return False

        if event.type == pygame.MOUSEMOTION:
            self.input_adapter.on_move(*event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.press()
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.release()
        elif event.type == pygame.WINDOWFOCUSLOST and self.input_adapter.held:
            # The matching button-up may never arrive once focus is gone.
            self.release()
        return True

    def frame(self, canvas) -> None:
        self.scheduler.run_pending()
        self.world.draw(canvas)
        self.frame_count += 1

    def stop(self) -> None:
        self.release()
        self.scheduler.cancel_all()
        self._tick_task = None
        logging.info(f"Animation stopped after {self.tick_count} ticks and {self.frame_count} frames.")
