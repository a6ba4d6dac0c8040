# examples/bungee_jump.py
import logging

from physics_lab import BungeeConfig, panels, setup_logging

setup_logging(logging.DEBUG)

cfg = BungeeConfig(mass=80.0, k=120.0)
sim = panels.bungee_jump(cfg)
sim.run_for(8.0)

# Positions are measured down from the platform
lowest = max(sim.history, key=lambda s: s.values["epe"])
depth = cfg.platform_height - lowest.values["gpe"] / (cfg.mass * cfg.g)
print("lowest point at t=%.2f s: %.1f m below the platform (ground at %.0f m)" % (
    lowest.time, depth, cfg.platform_height))
for row in sim.history.to_records()[::20]:
    print("t=%5.2f  ke=%8.1f  gpe=%8.1f  epe=%8.1f  total=%8.1f" % (
        row["time"], row["ke"], row["gpe"], row["epe"], row["total"]))
