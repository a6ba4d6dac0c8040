# MIT License (see LICENSE)
"""
Physical constants and numerical limits used throughout the simulation core.

Physical values use SI units. The teaching panels use g = 9.8 m/s² rather
than the full standard value, so that hand calculations match the readouts.
"""
from __future__ import annotations

# Gravitational acceleration near Earth's surface used by every motion panel.
STANDARD_GRAVITY: float = 9.8

# Newtonian gravitational constant, N·m²/kg².
# Reference: https://physics.nist.gov/cgi-bin/cuu/Value?bg
G_NEWTON: float = 6.674e-11

# Coulomb's constant k = 1/(4πε₀), rounded the way the calculator panels use it.
K_COULOMB: float = 8.99e9

# Mass and radius of the Earth, used as defaults for orbit panels.
EARTH_MASS: float = 5.97e24
EARTH_RADIUS: float = 6.37e6

# Largest frame delta-time handed to the integrator, in seconds.
# A stalled host (background tab, debugger pause) would otherwise produce a
# single huge step.
MAX_FRAME_DT: float = 1 / 30

# Guard radius for field evaluation in normalized panel units: closer than
# this to a source, its contribution is taken as zero.
FIELD_EPS: float = 0.01

# Guard radius for central-force laws in metres.
CENTRAL_FORCE_EPS: float = 1e-3
