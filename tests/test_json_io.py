import json
import math

import numpy as np
import pytest

from physics_lab import panels
from physics_lab.config import BungeeConfig, CollisionConfig, OrbitConfig
from physics_lab.errors import ConfigurationError
from physics_lab.field import SourceCollection, SourceKind
from physics_lab.io import (
    config_from_json,
    config_to_json,
    load_config,
    load_sources,
    save_config,
    save_history,
    save_sources,
    sources_from_json,
)


def test_config_file_round_trip(tmp_path):
    path = tmp_path / "bungee.json"
    cfg = BungeeConfig(mass=85.0, k=60.0)
    save_config(cfg, str(path))

    raw = json.loads(path.read_text())
    assert raw["type"] == "bungee"
    assert raw["mass"] == 85.0

    assert load_config(str(path)) == cfg


def test_missing_parameters_take_defaults():
    cfg = config_from_json({"type": "collision", "restitution": 0.5})
    assert cfg == CollisionConfig(restitution=0.5)


def test_large_values_survive():
    cfg = config_from_json(config_to_json(OrbitConfig()))
    assert cfg.central_mass == OrbitConfig().central_mass


@pytest.mark.parametrize(
    "data",
    [
        {"mass": 1.0},
        {"type": "catapult"},
        {"type": "bungee", "colour": "red"},
    ],
)
def test_bad_config_documents(data):
    with pytest.raises(ValueError):
        config_from_json(data)


def test_out_of_range_value_in_file(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"type": "collision", "restitution": 2.0}))
    with pytest.raises(ConfigurationError):
        load_config(str(path))


def test_sources_round_trip_reassigns_ids(tmp_path):
    sources = SourceCollection()
    first = sources.add(SourceKind.POINT_CHARGE, (0.2, 0.3), strength=-2.0)
    sources.remove(first.id)
    sources.add(SourceKind.DIPOLE, (0.4, 0.6), orientation=math.pi / 2)
    sources.add(SourceKind.SOLENOID, (0.7, 0.1), strength=3.0)

    path = tmp_path / "layout.json"
    save_sources(sources, str(path))
    loaded = load_sources(str(path))

    original = sources.snapshot()
    restored = loaded.snapshot()
    assert [s.id for s in original] == [2, 3]
    assert [s.id for s in restored] == [1, 2]
    for a, b in zip(original, restored):
        assert a.kind is b.kind
        np.testing.assert_allclose(a.position, b.position)
        assert a.orientation == pytest.approx(b.orientation)
        assert a.strength == b.strength


def test_source_defaults_and_errors():
    loaded = sources_from_json({"sources": [{"kind": "loop"}]})
    (s,) = loaded.snapshot()
    np.testing.assert_array_equal(s.position, [0.5, 0.5])
    assert s.strength == 1.0
    assert len(sources_from_json({})) == 0
    with pytest.raises(ValueError):
        sources_from_json({"sources": [{"position": [0.1, 0.1]}]})
    with pytest.raises(ValueError):
        sources_from_json({"sources": [{"kind": "monopole"}]})


def test_history_export(tmp_path):
    sim = panels.collision(CollisionConfig())
    sim.run_for(2.0)
    path = tmp_path / "history.json"
    save_history(sim.history, str(path))
    rows = json.loads(path.read_text())
    assert len(rows) == len(sim.history)
    assert set(rows[0]) == {"time", "x1", "x2", "v1", "v2", "momentum", "ke"}
    # Momentum is conserved through the collision
    assert {round(r["momentum"], 9) for r in rows} == {round(2.0 * 4.0 + 4.0 * -2.0, 9)}
