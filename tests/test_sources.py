import math

import numpy as np
import pytest

from physics_lab.field import FieldSource, SourceCollection, SourceKind


def test_ids_are_monotonic_and_never_reused():
    sources = SourceCollection()
    a = sources.add(SourceKind.POINT_CHARGE)
    b = sources.add(SourceKind.DIPOLE)
    assert (a.id, b.id) == (1, 2)
    sources.remove(a.id)
    c = sources.add(SourceKind.LOOP)
    assert c.id == 3

    sources.clear()
    assert len(sources) == 0
    d = sources.add(SourceKind.SOLENOID)
    assert d.id == 4


def test_dipole_pair_defaults():
    sources = SourceCollection()
    plus, minus = sources.add_dipole_pair()
    assert plus.kind is SourceKind.POINT_CHARGE and minus.kind is SourceKind.POINT_CHARGE
    assert (plus.strength, minus.strength) == (1.0, -1.0)
    np.testing.assert_array_equal(plus.position, [0.4, 0.5])
    np.testing.assert_array_equal(minus.position, [0.6, 0.5])
    assert minus.id == plus.id + 1


def test_move_clamps_to_unit_square():
    sources = SourceCollection()
    s = sources.add(SourceKind.STRAIGHT_WIRE, (0.2, 0.2))
    moved = sources.move(s.id, (1.7, -0.3))
    np.testing.assert_array_equal(moved.position, [1.0, 0.0])
    assert moved.id == s.id
    assert sources.get(s.id) is moved

    far = sources.add(SourceKind.LOOP, (5.0, 0.5))
    np.testing.assert_array_equal(far.position, [1.0, 0.5])


def test_rotate_and_strength_replace_the_value():
    sources = SourceCollection()
    s = sources.add(SourceKind.DIPOLE)
    turned = sources.rotate(s.id)
    assert turned.orientation == pytest.approx(math.pi / 4)
    assert s.orientation == 0.0
    stronger = sources.set_strength(s.id, 3.0)
    assert stronger.strength == 3.0
    assert stronger.orientation == pytest.approx(math.pi / 4)


def test_snapshot_is_isolated_from_later_edits():
    sources = SourceCollection()
    s = sources.add(SourceKind.POINT_CHARGE, (0.1, 0.1))
    snap = sources.snapshot()
    sources.move(s.id, (0.9, 0.9))
    sources.add(SourceKind.POINT_CHARGE)
    assert len(snap) == 1
    np.testing.assert_array_equal(snap[0].position, [0.1, 0.1])


def test_source_position_is_read_only():
    s = FieldSource(SourceKind.POINT_CHARGE, (0.3, 0.3), id=1)
    with pytest.raises(ValueError):
        s.position[0] = 0.5


def test_unknown_id_and_kind():
    sources = SourceCollection()
    with pytest.raises(KeyError):
        sources.remove(42)
    with pytest.raises(KeyError):
        sources.move(42, (0.5, 0.5))
    with pytest.raises(ValueError):
        sources.add("magnetic-monopole")
    assert 42 not in sources


def test_iteration_uses_snapshot():
    sources = SourceCollection()
    sources.add(SourceKind.POINT_CHARGE)
    sources.add(SourceKind.POINT_CHARGE)
    seen = []
    for s in sources:
        seen.append(s.id)
        sources.clear()
    assert seen == [1, 2]
