# particle.py
"""
Manages the state of all particles in the simulation.

This module defines the ParticleSystem class, which stores particle data
(position, velocity, radius, color) in NumPy arrays, and the generate()
function that builds the initial population on a centered grid.
"""
import logging
import math
import numbers
import numpy as np
from typing import Iterator, NamedTuple, Sequence, Tuple

from constants import PARTICLE_COLOR, PARTICLE_SPACING
from errors import InvalidParameter

# --- Data Contracts ---
#
# class ParticleSystem:
#   - __init__(self, positions, velocities, radii, colors):
#     - Inputs: array-likes of shape (N, 2), (N, 2), (N,), (N, 3).
#     - Invariants:
#       - self.positions is a NumPy array of shape (N, 2) of dtype float64,
#         world coordinates with the origin at the domain center, Y down.
#       - self.velocities is a NumPy array of shape (N, 2) of dtype float64.
#       - self.radii is a NumPy array of shape (N,) of dtype uint32. Never
#         written after construction.
#       - self.colors is a NumPy array of shape (N, 3) of dtype uint8. Display
#         only, never written by the simulation.
#
# generate(count: int, radius: int, padding: float, color, require_non_empty: bool)
#     -> ParticleSystem:
#   - Outputs: exactly `count` particles at rest on a grid centered on the
#     origin, spaced 2 * radius + padding apart.
#   - Raises: InvalidParameter for a negative count, a non-positive radius,
#     a negative or non-finite padding, a malformed color, or count == 0 when
#     require_non_empty is set.
#   - Invariants: deterministic for the same arguments; no two particles
#     overlap.


class Particle(NamedTuple):
    """Read-only snapshot of a single particle."""
    position: Tuple[float, float]
    velocity: Tuple[float, float]
    radius: int
    color: Tuple[int, int, int]


class ParticleSystem:
    """
    A container for all particles, managing their state via NumPy arrays.

    The simulation mutates `positions` and `velocities` in place; indexing or
    iterating the system yields Particle snapshots in generation order.
    """
    def __init__(self, positions, velocities, radii, colors):
        self.positions = np.ascontiguousarray(positions, dtype=np.float64).reshape(-1, 2)
        self.velocities = np.ascontiguousarray(velocities, dtype=np.float64).reshape(-1, 2)
        self.radii = np.ascontiguousarray(radii, dtype=np.uint32).reshape(-1)
        self.colors = np.ascontiguousarray(colors, dtype=np.uint8).reshape(-1, 3)

        count = self.positions.shape[0]
        if not (self.velocities.shape[0] == self.radii.shape[0] == self.colors.shape[0] == count):
            msg = (
                f"Particle arrays disagree on particle count: positions {self.positions.shape}, "
                f"velocities {self.velocities.shape}, radii {self.radii.shape}, "
                f"colors {self.colors.shape}."
            )
            logging.error(msg)
            raise InvalidParameter(msg)

    @property
    def particle_count(self) -> int:
        return self.positions.shape[0]

    def __len__(self) -> int:
        return self.particle_count

    def __getitem__(self, index: int) -> Particle:
        pos = self.positions[index]
        vel = self.velocities[index]
        return Particle(
            position=(float(pos[0]), float(pos[1])),
            velocity=(float(vel[0]), float(vel[1])),
            radius=int(self.radii[index]),
            color=tuple(int(c) for c in self.colors[index]),
        )

    def __iter__(self) -> Iterator[Particle]:
        for i in range(self.particle_count):
            yield self[i]


def _validate_color(color: Sequence[int]) -> Tuple[int, int, int]:
    try:
        channels = tuple(int(c) for c in color)
    except (TypeError, ValueError) as e:
        raise InvalidParameter(f"Particle color {color!r} is not a sequence of integers: {e}") from e
    if len(channels) != 3 or any(c < 0 or c > 255 for c in channels):
        raise InvalidParameter(f"Particle color {color!r} must be three channels in 0..255.")
    return channels


def _grid_shape(count: int) -> Tuple[int, int]:
    """Columns and rows of the smallest square-ish grid holding `count` cells."""
    per_row = max(1, math.isqrt(count))
    rows = max(1, math.ceil(count / per_row))
    return per_row, rows


def generate(
    count: int,
    radius: int,
    padding: float = PARTICLE_SPACING,
    color: Sequence[int] = PARTICLE_COLOR,
    require_non_empty: bool = False,
) -> ParticleSystem:
    """
    Builds `count` resting particles laid out on a grid centered on the origin.

    The grid has floor(sqrt(count)) columns (at least one) and as many rows as
    needed; the last row may be partial. Cell centers are offset by half the
    grid extent so the grid's bounding box is centered on the world origin.

    Args:
        count (int): Number of particles. Zero yields an empty system unless
            `require_non_empty` is set.
        radius (int): Radius shared by every particle. Must be positive.
        padding (float): Gap between neighbouring particles.
        color: RGB display color shared by every particle.
        require_non_empty (bool): Reject count == 0 instead of returning an
            empty system.

    Returns:
        ParticleSystem: The generated particles, in row-major grid order.
    """
    if isinstance(count, bool) or not isinstance(count, numbers.Integral) or count < 0:
        msg = f"Particle count must be a non-negative integer, got {count!r}."
        logging.critical(msg)
        raise InvalidParameter(msg)
    if isinstance(radius, bool) or not isinstance(radius, numbers.Integral) or radius <= 0:
        msg = f"Particle radius must be a positive integer, got {radius!r}."
        logging.critical(msg)
        raise InvalidParameter(msg)
    if count == 0 and require_non_empty:
        msg = "Particle count is zero but a non-empty particle set is required."
        logging.critical(msg)
        raise InvalidParameter(msg)
    if not (padding >= 0 and math.isfinite(padding)):
        msg = f"Particle padding must be a finite non-negative number, got {padding!r}."
        logging.critical(msg)
        raise InvalidParameter(msg)
    rgb = _validate_color(color)

    count = int(count)
    spacing = 2.0 * int(radius) + float(padding)
    per_row, rows = _grid_shape(count)

    indices = np.arange(count)
    cols_idx = indices % per_row
    rows_idx = indices // per_row

    positions = np.empty((count, 2), dtype=np.float64)
    positions[:, 0] = (cols_idx - (per_row - 1) / 2.0) * spacing
    positions[:, 1] = (rows_idx - (rows - 1) / 2.0) * spacing

    particles = ParticleSystem(
        positions=positions,
        velocities=np.zeros((count, 2), dtype=np.float64),
        radii=np.full(count, radius, dtype=np.uint32),
        colors=np.tile(np.array(rgb, dtype=np.uint8), (count, 1)),
    )

    logging.info(
        f"Generated {count} particles of radius {radius} "
        f"on a {per_row}x{rows} grid (spacing {spacing:.2f})."
    )
    logging.debug(
        f"Particle data arrays created. "
        f"Positions shape: {particles.positions.shape}, "
        f"Velocities shape: {particles.velocities.shape}, "
        f"Radii shape: {particles.radii.shape}"
    )
    return particles
