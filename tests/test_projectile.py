import math

import numpy as np

from physics_lab import panels
from physics_lab.config import ProjectileConfig
from physics_lab.core.analytic import projectile_summary
from physics_lab.core.forces import projectile_gravity
from physics_lab.core.integrators import semi_implicit_euler
from physics_lab.types import MotionState


def test_projectile_converges_to_closed_form():
    """
    Analytic (g = 9.8, v0 = 20 m/s at 45°, h0 = 0):
      t_peak = v0 sin θ / g        ≈ 1.44 s
      y_max  = (v0 sin θ)² / 2g    ≈ 10.2 m
      T      = 2 v0 sin θ / g      ≈ 2.89 s
      R      = v0² sin 2θ / g      ≈ 40.8 m
    Stepped at dt = 1/120 every quantity must be within 1%.
    """
    cfg = ProjectileConfig(speed=20.0, angle_deg=45.0, height=0.0)
    dt = 1 / 120
    exp = projectile_summary(cfg)

    state = MotionState.initial((0.0, 0.0), cfg.launch_velocity)
    peak_y, peak_t = 0.0, 0.0
    while True:
        state = semi_implicit_euler(cfg, projectile_gravity, state, dt)
        if state.position[1] > peak_y:
            peak_y, peak_t = state.position[1], state.elapsed_time
        if state.position[1] <= 0.0:
            break

    errs = {
        "peak_height": abs(peak_y - exp.peak_height) / exp.peak_height,
        "time_to_peak": abs(peak_t - exp.time_to_peak) / exp.time_to_peak,
        "flight_time": abs(state.elapsed_time - exp.flight_time) / exp.flight_time,
        "range": abs(state.position[0] - exp.range) / exp.range,
    }
    print("projectile relerr", errs)

    assert math.isclose(exp.peak_height, 10.2, abs_tol=0.01)
    assert math.isclose(exp.time_to_peak, 1.44, abs_tol=0.01)
    assert math.isclose(exp.flight_time, 2.89, abs_tol=0.01)
    assert math.isclose(exp.range, 40.8, abs_tol=0.05)
    for name, err in errs.items():
        assert err <= 0.01, name


def test_error_shrinks_with_dt():
    """Range error at dt = 1/240 is smaller than at dt = 1/30."""
    cfg = ProjectileConfig()
    exp = projectile_summary(cfg).range

    def stepped_range(dt):
        state = MotionState.initial((0.0, 0.0), cfg.launch_velocity)
        while True:
            state = semi_implicit_euler(cfg, projectile_gravity, state, dt)
            if state.position[1] <= 0.0:
                return state.position[0]

    coarse = abs(stepped_range(1 / 30) - exp)
    fine = abs(stepped_range(1 / 240) - exp)
    print("range err coarse", coarse, "fine", fine)
    assert fine < coarse


def test_projectile_panel_halts_on_landing():
    sim = panels.projectile(ProjectileConfig(speed=20.0, angle_deg=45.0))
    frames = sim.run_for(10.0, dt=1 / 120)
    exp = projectile_summary(sim.config)

    assert sim.halted
    assert frames < 10.0 * 120
    assert abs(sim.state.position[1]) <= 1e-9
    assert sim.state.velocity[1] < 0.0
    assert abs(sim.time - exp.flight_time) / exp.flight_time <= 0.01
    assert abs(sim.state.position[0] - exp.range) / exp.range <= 0.01

    # Further steps do nothing once halted
    t = sim.time
    sim.step(1 / 60)
    assert sim.time == t


def test_drag_shortens_range():
    dragless = panels.projectile(ProjectileConfig(drag=0.0))
    draggy = panels.projectile(ProjectileConfig(drag=0.2))
    dragless.run_for(10.0)
    draggy.run_for(10.0)
    assert draggy.state.position[0] < dragless.state.position[0]
    assert np.all(np.isfinite(draggy.state.position))
