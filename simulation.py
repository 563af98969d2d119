# simulation.py
"""
Handles the core simulation logic and physics calculations.

This module defines the Domain the particles are confined to and the
Simulation class, which advances a particle system by one fixed time step:
gravity, position integration and wall bounces. Particles never interact
with each other, so each particle's update only touches its own state.
"""
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np
from numba import jit, prange

from constants import COLLISION_DAMP_FACTOR, DELTA_TIME, GRAVITY
from errors import DegenerateDomain, InvalidParameter
from particle import ParticleSystem

# --- Data Contracts ---
#
# class Domain:
#   - width, height: float. Rectangle centered on the world origin.
#
# class Simulation:
#   - __init__(self, params: Dict[str, Any]):
#     - Inputs:
#       - params: Dictionary of simulation parameters from config.json.
#         - "gravity": float (finite)
#         - "damp_factor": float (>= 0)
#         - "delta_time": float (> 0)
#         - "parallel": bool
#         - "reject_oversized_particles": bool
#     - Side Effects: None. Holds no reference to any particle system.
#
#   - step(self, particles: ParticleSystem, domain: Domain, dt: Optional[float]) -> None:
#     - Side Effects: Modifies particles.positions and particles.velocities
#       in place. Never reorders, adds or removes particles.
#     - Raises: DegenerateDomain for a non-positive width or height (or, when
#       reject_oversized_particles is set, a radius that does not fit).
#       InvalidParameter for a non-positive or non-finite dt.
#     - Invariants: |x| <= width / 2 - radius and |y| <= height / 2 - radius
#       for every particle whose radius fits inside the domain.


@dataclass(frozen=True)
class Domain:
    """Rectangular simulation boundary centered at the world origin."""
    width: float
    height: float

    @property
    def half_width(self) -> float:
        return self.width / 2.0

    @property
    def half_height(self) -> float:
        return self.height / 2.0


def _integrate_particles(positions, velocities, radii, half_width, half_height, gravity, damp_factor, dt):
    """
    Advances every particle by one step of semi-implicit Euler.

    Each iteration reads and writes only row i, so the loop is safe to run
    as a parallel prange.
    """
    for i in prange(positions.shape[0]):
        # Gravity
        velocities[i, 1] += gravity * dt

        # Position, using the post-gravity velocity
        positions[i, 0] += velocities[i, 0] * dt
        positions[i, 1] += velocities[i, 1] * dt

        # Wall collisions. sign(0) is +1.
        bound_x = half_width - radii[i]
        if abs(positions[i, 0]) > bound_x:
            positions[i, 0] = bound_x if positions[i, 0] >= 0.0 else -bound_x
            velocities[i, 0] *= -damp_factor

        bound_y = half_height - radii[i]
        if abs(positions[i, 1]) > bound_y:
            positions[i, 1] = bound_y if positions[i, 1] >= 0.0 else -bound_y
            velocities[i, 1] *= -damp_factor


# prange behaves like range in the serial build.
_integrate_serial = jit(nopython=True)(_integrate_particles)
_integrate_parallel = jit(nopython=True, parallel=True)(_integrate_particles)


class Simulation:
    """
    Advances a particle system under constant gravity inside a box.

    The instance only stores physics settings; the particle system and the
    domain are handed in on every call, so a resized window takes effect on
    the very next step.
    """
    def __init__(self, params: Optional[Dict[str, Any]] = None):
        """
        Initializes the simulation settings.

        Args:
            params (Dict[str, Any]): Simulation parameters from config.
        """
        params = params if params is not None else {}
        self.gravity = float(params.get('gravity', GRAVITY))
        # Named for damping, but the default of 1.0 bounces without loss.
        self.damp_factor = float(params.get('damp_factor', COLLISION_DAMP_FACTOR))
        self.delta_time = float(params.get('delta_time', DELTA_TIME))
        self.parallel = bool(params.get('parallel', False))
        self.reject_oversized_particles = bool(params.get('reject_oversized_particles', False))
        self._oversize_warned = False

        if not math.isfinite(self.gravity):
            msg = f"Configuration error: gravity must be finite, got {self.gravity}."
            logging.critical(msg)
            raise InvalidParameter(msg)
        if not (self.damp_factor >= 0 and math.isfinite(self.damp_factor)):
            msg = f"Configuration error: damp_factor must be finite and non-negative, got {self.damp_factor}."
            logging.critical(msg)
            raise InvalidParameter(msg)
        if not (self.delta_time > 0 and math.isfinite(self.delta_time)):
            msg = f"Configuration error: delta_time must be finite and positive, got {self.delta_time}."
            logging.critical(msg)
            raise InvalidParameter(msg)

        logging.info(
            f"Simulation initialized: gravity={self.gravity}, damp_factor={self.damp_factor}, "
            f"delta_time={self.delta_time:.5f}, parallel={self.parallel}."
        )

    def _check_domain(self, particles: ParticleSystem, domain: Domain) -> None:
        if not (domain.width > 0 and domain.height > 0):
            msg = f"Degenerate domain {domain.width}x{domain.height}: width and height must be positive."
            logging.error(msg)
            raise DegenerateDomain(msg)

        if particles.particle_count == 0:
            return
        max_radius = int(particles.radii.max())
        if max_radius <= min(domain.half_width, domain.half_height):
            return

        msg = (
            f"Particle radius {max_radius} does not fit inside the "
            f"{domain.width}x{domain.height} domain."
        )
        if self.reject_oversized_particles:
            logging.error(msg)
            raise DegenerateDomain(msg)
        if not self._oversize_warned:
            # Oversized particles get pinned against a negative half-bound.
            logging.warning(msg + " Affected particles will be pinned in place.")
            self._oversize_warned = True

    def step(self, particles: ParticleSystem, domain: Domain, dt: Optional[float] = None) -> None:
        """
        Executes one time step of the simulation.

        Args:
            particles (ParticleSystem): Particles to advance, mutated in place.
            domain (Domain): The current simulation boundary.
            dt (float): Overrides the configured delta_time for this call.
        """
        dt = self.delta_time if dt is None else float(dt)
        if not (dt > 0 and math.isfinite(dt)):
            msg = f"Time step must be finite and positive, got {dt}."
            logging.error(msg)
            raise InvalidParameter(msg)
        self._check_domain(particles, domain)

        integrate = _integrate_parallel if self.parallel else _integrate_serial
        integrate(
            particles.positions, particles.velocities, particles.radii,
            float(domain.half_width), float(domain.half_height),
            self.gravity, self.damp_factor, dt
        )

    def kinetic_energy(self, particles: ParticleSystem) -> float:
        """Total kinetic energy of the system, treating every particle as unit mass."""
        return float(0.5 * np.sum(particles.velocities ** 2))
