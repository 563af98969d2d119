"""Tests for the Pygame renderer, run against SDL's dummy video driver."""

import numpy as np
import pygame
import pytest

from particle import generate
from visualization import Visualizer, world_to_screen


def test_world_to_screen_offsets_by_half_window():
    positions = np.array([[0.0, 0.0], [-395.0, 295.0], [10.7, -3.2]])
    screen = world_to_screen(positions, 800, 600)
    np.testing.assert_array_equal(screen, [[400, 300], [5, 595], [410, 296]])


@pytest.fixture
def visualizer():
    vis = Visualizer({"window_width": 320, "window_height": 240, "fps": 1000})
    yield vis
    vis.close()


def test_domain_tracks_window_size(visualizer):
    domain = visualizer.domain
    assert (domain.width, domain.height) == (320, 240)


def test_draw_renders_particles(visualizer):
    particles = generate(1, 5, color=(0, 0, 255))
    assert visualizer.draw(particles) is True
    # The particle sits at the world origin, i.e. the window center.
    assert tuple(visualizer.screen.get_at((160, 120)))[:3] == (0, 0, 255)
    assert tuple(visualizer.screen.get_at((0, 0)))[:3] == (0, 0, 0)


def test_quit_event_stops(visualizer):
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    assert visualizer.draw(generate(4, 2)) is False


def test_escape_stops(visualizer):
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
    assert visualizer.draw(generate(4, 2)) is False
