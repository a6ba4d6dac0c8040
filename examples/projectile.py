# examples/projectile.py
import logging

from physics_lab import ProjectileConfig, panels, setup_logging
from physics_lab.core.analytic import projectile_summary

setup_logging(logging.INFO)

cfg = ProjectileConfig(speed=20.0, angle_deg=45.0, height=5.0)
sim = panels.projectile(cfg)
sim.play()
sim.host.run(duration=5.0)

expected = projectile_summary(cfg)
x, y = sim.state.position
print("halted:", sim.halted, "t:", sim.time)
print("landing x:", x, "expected:", expected.range)
print("peak y:", max(s.values["y"] for s in sim.history), "expected:", expected.peak_height)
print("chart points:", len(sim.history))
