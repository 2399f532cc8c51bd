# main.py
"""
Main entry point for the pointer swarm animation.

This script orchestrates the entire lifecycle:
1. Loads configuration from `config.json` (or the path given as the first argument).
2. Initializes the logging system.
3. Sets up the window, the world and the timers.
4. Runs the frame loop until the window is closed.
5. Handles clean shutdown.
"""
import logging
import sys
from utils import setup_logging, load_config
import cProfile
import pstats
import io

def main(config_path: str = 'config.json'):
    """
    The main function to run the animation.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(config_path)
    except Exception as e:
        print(f"FATAL: Could not load {config_path}. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Pointer Swarm Starting ---")

    sim_params = config['simulation_parameters']
    run_params = config['run_control']
    vis_params = config['visualization']

    import pygame
    from visualization import Visualizer
    from input_adapter import InputAdapter
    from world import World
    from scheduler import Scheduler
    from animation import Animation

    # --- Component Initialization ---
    # 1. The visualizer owns the drawing surface; everything else sizes itself from it.
    visualizer = Visualizer(vis_params)

    # 2. Input and world share the canvas dimensions.
    input_adapter = InputAdapter(visualizer, sim_params['pointer_size'])
    world = World(sim_params, visualizer.width, visualizer.height, input_adapter)

    # 3. Timers run on pygame's millisecond clock.
    scheduler = Scheduler(pygame.time.get_ticks)
    animation = Animation(world, input_adapter, scheduler, run_params)

    profiler = cProfile.Profile() if run_params.get('profile') else None

    log_throttle = run_params.get('log_throttle_frames', 300)
    max_frames = run_params.get('max_frames', 0)

    running = True
    if profiler:
        profiler.enable()
    animation.start()
    while running:
        for event in visualizer.poll_events():
            if not animation.handle_event(event):
                running = False

        animation.frame(visualizer)
        visualizer.present()
        visualizer.wait_frame()

        frame_num = animation.frame_count
        if frame_num % log_throttle == 0:
            logging.info(
                f"Frame {frame_num} | Ticks: {animation.tick_count} | "
                f"Collided: {world.collided_count}/{len(world.bodies)}"
            )
            logging.debug(f"Frame {frame_num} | Average Speed: {world.average_speed():.4f}")

        if max_frames and frame_num >= max_frames:
            logging.info(f"Reached max_frames ({max_frames}). Stopping animation.")
            running = False
    if profiler:
        profiler.disable()

    animation.stop()
    visualizer.close()
    logging.info("Frame loop finished.")

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Pointer Swarm Shutting Down ---")


if __name__ == "__main__":
    main(*sys.argv[1:2])
