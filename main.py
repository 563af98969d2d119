# main.py
"""
Main entry point for the Gravity Box simulation.

This script orchestrates the entire simulation lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Generates the particles and sets up the simulation.
4. Runs the main loop: one fixed step, then one frame, until the user quits.
5. Handles clean shutdown.
"""
import logging
import cProfile
import pstats
import io
import numpy as np
from utils import setup_logging, load_config, config_section
from constants import (
    BACKGROUND_COLOR, COLLISION_DAMP_FACTOR, DEFAULT_PARTICLE_COUNT,
    DEFAULT_PARTICLE_RADIUS, DELTA_TIME, FPS, GRAVITY, LOG_THROTTLE_STEPS,
    PARTICLE_COLOR, PARTICLE_SPACING, WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
)

SIMULATION_DEFAULTS = {
    'particle_count': DEFAULT_PARTICLE_COUNT,
    'particle_radius': DEFAULT_PARTICLE_RADIUS,
    'particle_padding': PARTICLE_SPACING,
    'particle_color': list(PARTICLE_COLOR),
    'gravity': GRAVITY,
    'damp_factor': COLLISION_DAMP_FACTOR,
    'delta_time': DELTA_TIME,
    'parallel': False,
    'reject_oversized_particles': False,
}

RUN_DEFAULTS = {
    'max_steps': 0,
    'log_throttle_steps': LOG_THROTTLE_STEPS,
    'profile': False,
}

VISUALIZATION_DEFAULTS = {
    'window_width': WINDOW_WIDTH,
    'window_height': WINDOW_HEIGHT,
    'title': WINDOW_TITLE,
    'fps': FPS,
    'background_color': list(BACKGROUND_COLOR),
}


def main(config_path: str = 'config.json'):
    """
    The main function to run the simulation.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(config_path)
    except Exception as e:
        print(f"FATAL: Could not load {config_path}. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Gravity Box Simulation Starting ---")

    sim_params = config_section(config, 'simulation_parameters', SIMULATION_DEFAULTS)
    run_params = config_section(config, 'run_control', RUN_DEFAULTS)
    vis_params = config_section(config, 'visualization', VISUALIZATION_DEFAULTS)

    from particle import generate
    from simulation import Simulation
    from visualization import Visualizer

    # --- Component Initialization ---
    particles = generate(
        sim_params['particle_count'],
        sim_params['particle_radius'],
        padding=sim_params['particle_padding'],
        color=sim_params['particle_color'],
    )
    sim = Simulation(sim_params)
    visualizer = Visualizer(vis_params)

    profiler = cProfile.Profile() if run_params['profile'] else None

    log_throttle = max(1, int(run_params['log_throttle_steps']))
    max_steps = int(run_params['max_steps'])

    running = True
    step_num = 0

    if profiler:
        profiler.enable()
    try:
        while running:
            # The domain is re-read every frame so window resizes apply at once.
            sim.step(particles, visualizer.domain)
            step_num += 1

            if not visualizer.draw(particles):
                running = False

            # Hot loops must throttle logs
            if step_num % log_throttle == 0:
                logging.info(f"Simulation step {step_num}")
                if particles.particle_count:
                    avg_speed = np.mean(np.linalg.norm(particles.velocities, axis=1))
                    logging.debug(
                        f"Step {step_num} | Average speed: {avg_speed:.4f} | "
                        f"Kinetic energy: {sim.kinetic_energy(particles):.2f}"
                    )

            if max_steps and step_num >= max_steps:
                logging.info(f"Reached max_steps ({max_steps}). Stopping simulation.")
                running = False
    finally:
        if profiler:
            profiler.disable()
        visualizer.close()

    logging.info(f"Simulation loop finished after {step_num} steps.")

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Gravity Box Simulation Shutting Down ---")


if __name__ == "__main__":
    main()
