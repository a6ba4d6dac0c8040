# examples/collision_lab.py
from physics_lab import CollisionConfig, setup_logging
from physics_lab.simulation import CollisionSimulation

setup_logging()

for e in (1.0, 0.5, 0.0):
    cfg = CollisionConfig(m1=1.0, v1=3.0, m2=2.0, v2=-1.0, restitution=e)
    sim = CollisionSimulation(cfg, walls=(-6.0, 6.0))
    sim.run_for(5.0)
    first = sim.events[0]
    p0 = cfg.m1 * first.before[0] + cfg.m2 * first.before[1]
    p1 = cfg.m1 * first.after[0] + cfg.m2 * first.after[1]
    print(f"e={e}: collisions={len(sim.events)}  before={first.before}  after={first.after}  dp={p1 - p0:.2e}")
