# errors.py
"""
Error types raised by the particle generator and the simulation stepper.

Both are caller input errors rather than transient conditions, so neither
is ever retried. They also derive from ValueError so callers that only
care about "bad argument" can keep catching that.
"""


class PhysicsError(Exception):
    """Base class for every error raised by the simulation core."""


class InvalidParameter(PhysicsError, ValueError):
    """A generator or stepper argument cannot produce a valid state."""


class DegenerateDomain(PhysicsError, ValueError):
    """The domain cannot bound the particles (non-positive size, or too small)."""
