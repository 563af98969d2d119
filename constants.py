# constants.py
"""
Application-level constants.

These values are static and do not change between simulation runs.
They act as defaults for anything the config file leaves out: the
physics settings handed to the generator and stepper, the default
window size, and rendering properties.
"""

# --- Physics defaults ---
# Downward acceleration in world units per second squared (Y grows downward).
GRAVITY = 300.0
# Velocity multiplier on a wall bounce. 1.0 keeps the bounce perfectly
# elastic; only values below 1.0 actually remove energy.
COLLISION_DAMP_FACTOR = 1.0
# Gap added between neighbouring particles of the initial grid so that no
# two particles start in contact.
PARTICLE_SPACING = 0.1
# Fixed simulation step, independent of the measured frame time.
DELTA_TIME = 1.0 / 60.0

# --- Generator defaults ---
DEFAULT_PARTICLE_COUNT = 500
DEFAULT_PARTICLE_RADIUS = 5
PARTICLE_COLOR = (0, 0, 255) # Blue

# Visualization settings
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
WINDOW_TITLE = "Gravity Box"
FPS = 60
BACKGROUND_COLOR = (0, 0, 0) # Black

# Run control
LOG_THROTTLE_STEPS = 100
