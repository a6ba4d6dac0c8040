import numpy as np
import pytest

from physics_lab import panels
from physics_lab.collision import resolve
from physics_lab.config import CollisionConfig
from physics_lab.core.invariants import pair_kinetic_energy, pair_momentum
from physics_lab.errors import ConfigurationError
from physics_lab.simulation import CollisionSimulation


def test_elastic_headon():
    """
    m1 = 2, v1 = 4, m2 = 4, v2 = -2, e = 1:
      v1' = -4, v2' = 2; momentum 0 before and after; KE 24 J before and after.
    """
    v1p, v2p = resolve(2.0, 4.0, 4.0, -2.0, 1.0)
    assert v1p == pytest.approx(-4.0)
    assert v2p == pytest.approx(2.0)
    assert pair_momentum(2.0, 4.0, 4.0, -2.0) == pytest.approx(0.0)
    assert pair_momentum(2.0, v1p, 4.0, v2p) == pytest.approx(0.0, abs=1e-12)
    assert pair_kinetic_energy(2.0, 4.0, 4.0, -2.0) == pytest.approx(24.0)
    assert pair_kinetic_energy(2.0, v1p, 4.0, v2p) == pytest.approx(24.0)


def test_perfectly_inelastic_zero_momentum_comes_to_rest():
    v1p, v2p = resolve(2.0, 4.0, 4.0, -2.0, 0.0)
    assert v1p == pytest.approx(0.0, abs=1e-12)
    assert v2p == pytest.approx(0.0, abs=1e-12)


@pytest.mark.parametrize("seed", range(20))
def test_momentum_conserved_and_energy_never_gained(seed):
    rng = np.random.default_rng(seed)
    m1, m2 = rng.uniform(0.1, 50.0, size=2)
    v1, v2 = rng.uniform(-30.0, 30.0, size=2)
    e = float(rng.uniform(0.0, 1.0))

    v1p, v2p = resolve(m1, v1, m2, v2, e)
    p0, p1 = pair_momentum(m1, v1, m2, v2), pair_momentum(m1, v1p, m2, v2p)
    ke0, ke1 = pair_kinetic_energy(m1, v1, m2, v2), pair_kinetic_energy(m1, v1p, m2, v2p)

    assert p1 == pytest.approx(p0, rel=1e-9, abs=1e-9)
    assert ke1 <= ke0 * (1 + 1e-12)
    # Relative velocity reverses and scales by e
    assert (v2p - v1p) == pytest.approx(e * (v1 - v2), rel=1e-9, abs=1e-9)


@pytest.mark.parametrize("seed", range(5))
def test_energy_conserved_only_when_elastic(seed):
    rng = np.random.default_rng(100 + seed)
    m1, m2 = rng.uniform(0.5, 10.0, size=2)
    v1, v2 = 5.0, -3.0
    ke0 = pair_kinetic_energy(m1, v1, m2, v2)

    v1p, v2p = resolve(m1, v1, m2, v2, 1.0)
    assert pair_kinetic_energy(m1, v1p, m2, v2p) == pytest.approx(ke0)

    v1p, v2p = resolve(m1, v1, m2, v2, 0.5)
    assert pair_kinetic_energy(m1, v1p, m2, v2p) < ke0


@pytest.mark.parametrize(
    "args",
    [
        (0.0, 1.0, 1.0, 0.0, 1.0),
        (1.0, 1.0, -2.0, 0.0, 1.0),
        (1.0, 1.0, 1.0, 0.0, 1.5),
        (1.0, 1.0, 1.0, 0.0, -0.1),
    ],
)
def test_invalid_inputs_fail_loudly(args):
    with pytest.raises(ConfigurationError):
        resolve(*args)


def test_collision_panel_scenario():
    """Run the default panel through the approach; exactly one collision, outcome as resolved."""
    sim = panels.collision()
    sim.play()
    sim.host.run(duration=2.0, fps=60)

    assert len(sim.events) == 1
    assert sim.before == pytest.approx((4.0, -2.0))
    assert sim.after == pytest.approx((-4.0, 2.0))
    assert sim.events[0].time == pytest.approx(0.8, abs=1 / 60)
    # Blocks moving apart, never interpenetrating
    assert sim.state.a.position < sim.state.b.position
    last = sim.history.latest.values
    assert last["momentum"] == pytest.approx(0.0, abs=1e-9)
    assert last["ke"] == pytest.approx(24.0)


def test_latch_prevents_repeated_resolution():
    """Perfectly inelastic blocks stay in contact; the collision must not fire again every frame."""
    sim = CollisionSimulation(CollisionConfig(restitution=0.0))
    sim.run_for(3.0)
    assert len(sim.events) == 1
    assert sim.state.a.velocity == pytest.approx(0.0, abs=1e-12)
    assert sim.state.b.velocity == pytest.approx(0.0, abs=1e-12)


def test_fast_blocks_do_not_tunnel():
    """At 600 m/s closing speed the blocks cross the contact zone inside a single 1/30 s frame."""
    cfg = CollisionConfig(v1=300.0, v2=-300.0)
    sim = CollisionSimulation(cfg)
    sim.step(1 / 30)
    assert len(sim.events) == 1
    assert sim.events[0].time == pytest.approx(4.8 / 600.0)
    assert sim.state.a.position < sim.state.b.position
    assert pair_momentum(cfg.m1, sim.state.a.velocity, cfg.m2, sim.state.b.velocity) == pytest.approx(
        pair_momentum(cfg.m1, cfg.v1, cfg.m2, cfg.v2)
    )


def test_walls_allow_repeated_collisions():
    """With elastic walls the blocks meet again; the latch re-arms after each separation."""
    sim = CollisionSimulation(CollisionConfig(), walls=(-5.0, 5.0))
    sim.run_for(8.0)
    assert len(sim.events) >= 2
    for event in sim.events:
        assert pair_kinetic_energy(2.0, event.after[0], 4.0, event.after[1]) == pytest.approx(24.0)
