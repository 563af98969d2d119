# visualization.py
"""
Handles the visualization of the particle simulation using Pygame.
"""
import logging
import pygame
import numpy as np
from particle import ParticleSystem
from simulation import Domain
from constants import (
    BACKGROUND_COLOR, FPS, WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
)
from typing import Any, Dict, Optional


# --- Data Contracts ---
#
# world_to_screen(positions: np.ndarray, width: int, height: int) -> np.ndarray:
#   - Outputs: integer pixel coordinates, positions + (width / 2, height / 2),
#     truncated toward zero. Shape (N, 2).
#
# class Visualizer:
#   - __init__(self, vis_params: Optional[dict] = None):
#     - Inputs: the "visualization" config section ("window_width",
#       "window_height", "title", "fps", "background_color").
#     - Side Effects: Initializes Pygame and creates a resizable window.
#
#   - domain -> Domain: the current window size, read fresh on every access.
#
#   - draw(self, particles: ParticleSystem) -> bool:
#     - Outputs: False if the user has quit (window close or Escape),
#       True otherwise.
#     - Side Effects: Renders particles, handles Pygame events and waits
#       for the next frame at the configured FPS.

def world_to_screen(positions: np.ndarray, width: int, height: int) -> np.ndarray:
    """Translates center-origin world coordinates to top-left-origin pixels."""
    offset = np.array([width // 2, height // 2], dtype=np.float64)
    return (positions + offset).astype(np.int32)


class Visualizer:
    """
    Renders the particle system state into a resizable Pygame window.
    """
    def __init__(self, vis_params: Optional[Dict[str, Any]] = None):
        """
        Initializes Pygame and the display window.
        """
        vis_params = vis_params if vis_params is not None else {}
        width = int(vis_params.get('window_width', WINDOW_WIDTH))
        height = int(vis_params.get('window_height', WINDOW_HEIGHT))
        self.fps = int(vis_params.get('fps', FPS))
        self.background_color = pygame.Color(*vis_params.get('background_color', BACKGROUND_COLOR))

        pygame.init()
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption(vis_params.get('title', WINDOW_TITLE))
        self.clock = pygame.time.Clock()

        logging.info(f"Visualizer initialized with Pygame display ({width}x{height}).")

    @property
    def domain(self) -> Domain:
        """The simulation boundary matching the current window size."""
        width, height = self.screen.get_size()
        return Domain(width, height)

    def _handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False

            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                logging.info("ESC key pressed. Shutting down visualizer.")
                return False

            if event.type == pygame.VIDEORESIZE:
                logging.info(f"Window resized to {event.w}x{event.h}.")
        return True

    def draw(self, particles: ParticleSystem) -> bool:
        """
        Draws all particles and handles events.

        Returns:
            bool: False if the simulation should exit, True otherwise.
        """
        if not self._handle_events():
            return False

        width, height = self.screen.get_size()
        self.screen.fill(self.background_color)

        screen_positions = world_to_screen(particles.positions, width, height)
        for i in range(particles.particle_count):
            x, y = screen_positions[i]
            pygame.draw.circle(
                self.screen,
                tuple(int(c) for c in particles.colors[i]),
                (int(x), int(y)),
                int(particles.radii[i])
            )

        pygame.display.flip()
        self.clock.tick(self.fps)
        return True

    def close(self):
        """Shuts down Pygame."""
        pygame.quit()
        logging.info("Visualizer closed.")
