import logging
import math

import pytest

from physics_lab.config import (
    CONFIG_TYPES,
    BungeeConfig,
    CollisionConfig,
    ConicalPendulumConfig,
    ProjectileConfig,
    Range,
    SpringConfig,
    config_type,
    describe_ranges,
)
from physics_lab.errors import ConfigurationError


@pytest.mark.parametrize("kind", sorted(CONFIG_TYPES))
def test_defaults_are_valid(kind):
    cfg = config_type(kind)()
    for name, value in cfg.to_dict().items():
        assert isinstance(value, float), name
        rng = cfg.RANGES.get(name)
        if rng is not None:
            assert rng.contains(value)


@pytest.mark.parametrize(
    "cls,params",
    [
        (ProjectileConfig, {"speed": 101.0}),
        (ProjectileConfig, {"angle_deg": -1.0}),
        (SpringConfig, {"mass": 0.0}),
        (BungeeConfig, {"k": -5.0}),
        (ConicalPendulumConfig, {"angle_deg": 90.0}),
        (ConicalPendulumConfig, {"angle_deg": 0.0}),
        (CollisionConfig, {"restitution": 1.5}),
    ],
)
def test_out_of_range_rejected(cls, params):
    with pytest.raises(ConfigurationError) as info:
        cls(**params)
    (name,) = params
    assert info.value.name == name


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_rejected(bad):
    with pytest.raises(ConfigurationError):
        CollisionConfig(v1=bad)


def test_non_numbers_rejected():
    with pytest.raises(ConfigurationError):
        ProjectileConfig(speed="fast")
    with pytest.raises(ConfigurationError):
        ProjectileConfig(speed=True)


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError, match="mass"):
        SpringConfig(mass=-1.0)


def test_blocks_must_start_in_order():
    with pytest.raises(ConfigurationError):
        CollisionConfig(x1=3.0, x2=3.0)
    with pytest.raises(ConfigurationError):
        CollisionConfig(x1=4.0, x2=-4.0)


def test_ints_are_stored_as_floats():
    cfg = SpringConfig(mass=3, k=10)
    assert cfg.mass == 3.0 and isinstance(cfg.mass, float)


def test_configs_are_immutable():
    cfg = ProjectileConfig()
    with pytest.raises(AttributeError):
        cfg.speed = 50.0


def test_replace_revalidates():
    cfg = ProjectileConfig()
    steeper = cfg.replace(angle_deg=60.0)
    assert steeper.angle_deg == 60.0
    assert cfg.angle_deg == 45.0
    with pytest.raises(ConfigurationError):
        cfg.replace(speed=-1.0)


def test_from_ui_clamps_and_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="physics_lab"):
        cfg = ProjectileConfig.from_ui(speed=250.0, angle_deg=30.0)
    assert cfg.speed == 100.0
    assert cfg.angle_deg == 30.0
    assert any("clamped" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize(
    "cls,params",
    [
        (SpringConfig, {"mass": 0.0}),
        (BungeeConfig, {"k": -3.0}),
        (ConicalPendulumConfig, {"angle_deg": 90.0}),
        (ConicalPendulumConfig, {"angle_deg": -10.0}),
    ],
)
def test_from_ui_rejects_values_at_open_bounds(cls, params):
    """Open bounds have no nearest valid value: a zero mass never becomes a tiny one."""
    with pytest.raises(ConfigurationError):
        cls.from_ui(**params)


def test_from_ui_still_clamps_closed_bounds():
    cfg = ConicalPendulumConfig.from_ui(angle_deg=45.0)
    assert cfg.angle_deg == 45.0
    assert CollisionConfig.from_ui(restitution=-0.5).restitution == 0.0
    assert CollisionConfig.from_ui(restitution=1.5).restitution == 1.0


def test_from_ui_still_rejects_non_finite():
    with pytest.raises(ConfigurationError):
        ProjectileConfig.from_ui(speed=math.nan)


def test_range_describe_and_lookup():
    assert Range(0.0, 90.0, low_inclusive=False, high_inclusive=False).describe() == "(0, 90)"
    assert describe_ranges(ProjectileConfig)["speed"] == "[0, 100]"
    assert config_type("bungee") is BungeeConfig
    with pytest.raises(ValueError):
        config_type("trebuchet")


def test_derived_quantities():
    cfg = ProjectileConfig(speed=10.0, angle_deg=90.0)
    vx, vy = cfg.launch_velocity
    assert vx == pytest.approx(0.0, abs=1e-12)
    assert vy == pytest.approx(10.0)
