import numpy as np
import pytest

from physics_lab.field import (
    FieldCalibration,
    SourceCollection,
    SourceKind,
    StopReason,
    trace_field_line,
    trace_field_lines,
)

ELECTRIC = FieldCalibration.electric()


def test_lone_positive_charge_lines_leave_the_panel():
    sources = SourceCollection()
    q = sources.add(SourceKind.POINT_CHARGE, (0.5, 0.5))
    lines = trace_field_lines(sources, calibration=ELECTRIC)
    assert len(lines) == 12
    for line in lines:
        assert line.source_id == q.id
        assert line.stop is StopReason.OUT_OF_BOUNDS
        # Radial: every point moves farther from the charge
        r = np.linalg.norm(line.points - q.position, axis=1)
        assert np.all(np.diff(r) > 0.0)


def test_dipole_line_is_captured_by_negative_charge():
    sources = SourceCollection()
    plus, minus = sources.add_dipole_pair()
    lines = trace_field_lines(sources, calibration=ELECTRIC)
    # Only the positive charge seeds lines
    assert len(lines) == 12
    assert all(line.source_id == plus.id for line in lines)
    # The first seed points straight at the negative charge along the axis
    axial = lines[0]
    assert axial.stop is StopReason.CAPTURED
    assert np.linalg.norm(axial.points[-1] - minus.position) < ELECTRIC.eps
    np.testing.assert_allclose(axial.points[:, 1], 0.5, atol=1e-12)


def test_sinks_wires_and_loops_seed_nothing():
    sources = SourceCollection()
    sources.add(SourceKind.POINT_CHARGE, (0.3, 0.3), strength=-1.0)
    sources.add(SourceKind.STRAIGHT_WIRE, (0.6, 0.6))
    sources.add(SourceKind.LOOP, (0.2, 0.8))
    assert trace_field_lines(sources) == []


def test_bar_magnet_line_returns_to_south_pole():
    sources = SourceCollection()
    sources.add(SourceKind.DIPOLE, (0.5, 0.5))
    lines = trace_field_lines(sources)
    assert len(lines) == 12
    # Seed 6 of 12 starts on the inner side of the north pole, heading south
    inner = lines[6]
    assert inner.stop is StopReason.CAPTURED
    south = np.array([0.5 - FieldCalibration().dipole_half_length, 0.5])
    assert np.linalg.norm(inner.points[-1] - south) < FieldCalibration().eps


def test_solenoid_seeds_from_north_end():
    sources = SourceCollection()
    sol = sources.add(SourceKind.SOLENOID, (0.5, 0.5))
    lines = trace_field_lines(sources, lines_per_pole=4)
    assert len(lines) == 4
    assert {line.source_id for line in lines} == {sol.id}


def test_solenoid_interior_seeds_run_through_the_north_end():
    cal = FieldCalibration()
    sources = SourceCollection()
    sol = sources.add(SourceKind.SOLENOID, (0.5, 0.5))
    north = sol.position + np.array([0.5 * cal.solenoid_length, 0.0])
    lines = trace_field_lines(sources, lines_per_pole=12, calibration=cal)
    assert len(lines) == 12
    for line in lines:
        assert len(line) > 2
        assert not (line.stop is StopReason.CAPTURED
                    and np.linalg.norm(line.points[-1] - north) < cal.eps)
    # Seeds on the inner side of the pole cross it heading +x
    inner = lines[6]
    assert inner.points[0][0] < north[0]
    assert inner.points[:, 0].max() > north[0] + cal.eps


def test_step_budget_and_weak_field_stops():
    sources = SourceCollection()
    sources.add(SourceKind.POINT_CHARGE, (0.5, 0.5))

    short = trace_field_line(sources, (0.55, 0.5), max_steps=3, calibration=ELECTRIC)
    assert short.stop is StopReason.MAX_STEPS
    assert len(short) == 4
    np.testing.assert_allclose(short.points[-1], [0.58, 0.5])

    weak = trace_field_line(sources, (0.55, 0.5), min_magnitude=1e9, calibration=ELECTRIC)
    assert weak.stop is StopReason.WEAK_FIELD
    assert len(weak) == 1


def test_empty_field_is_weak_immediately():
    line = trace_field_line([], (0.5, 0.5))
    assert line.stop is StopReason.WEAK_FIELD


def test_invalid_arguments():
    with pytest.raises(ValueError):
        trace_field_line([], (0.5, 0.5), step=0.0)
    with pytest.raises(ValueError):
        trace_field_lines([], lines_per_pole=0)
