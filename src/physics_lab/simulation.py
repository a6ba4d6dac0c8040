# MIT License (see LICENSE)
"""
Simulation runners.

A runner owns everything one panel needs while it is on screen:
- its config (immutable, replaced wholesale by set_config),
- its current state (replaced by the integrator every frame),
- a HistoryBuffer with its SamplingGate,
- a FrameScheduler subscribed to the host.

Each frame runs the same fixed sequence in step():
    1. Read the current config from the runner (never from a closure).
    2. Integrate the state (and resolve collisions, for the collision panel).
    3. Push a history sample if the sampling gate admits the new time.
    4. Auto-pause if the panel's halt condition holds.

Because the config is read at the start of every step, a config change
while running can never be applied with a stale value. set_config() also
resets the run.

Structure:
    - MotionSimulation: point mass, force law + semi-implicit Euler.
    - AngularSimulation: body on a circle, rate law + angle stepping.
    - CollisionSimulation: two blocks, continuous contact detection.
The panel factories in panels.py wire these to concrete configs.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
from typing import Any, Callable, Generic, TypeVar

from .collision import CollisionPair, contact_time
from .config import CollisionConfig, SimulationConfig
from .constants import MAX_FRAME_DT
from .core.forces import no_force
from .core.integrators import ForceLaw, RateLaw, semi_implicit_euler, step_angular
from .core.invariants import pair_kinetic_energy, pair_momentum
from .history import HistoryBuffer, SamplingGate
from .host import FrameHost, ManualFrameHost
from .scheduler import FrameScheduler, RunState
from .types import AngularState, Block, HistorySample, MotionState

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=SimulationConfig)
S = TypeVar("S")

# (config, state) -> named chart values
Sampler = Callable[[Any, Any], dict[str, float]]

# (config, state) -> True once the run should stop by itself
HaltCondition = Callable[[Any, Any], bool]

# (config, previous state, integrated state) -> state actually kept
Constraint = Callable[[Any, MotionState, MotionState], MotionState]


class Simulation(ABC, Generic[C, S]):
    """
    Base runner: config, state, history and scheduler of one panel.

    Args:
        config: Validated panel configuration.
        host: Frame provider; a ManualFrameHost is created if omitted.
        sample_rate_hz: Chart points per second of simulated time.
        capacity: Number of chart points retained.
        max_dt: Frame dt clamp in seconds.
        time_scale: Simulated seconds per wall-clock second (for panels
            whose natural time scale is hours, like orbits).
        halt_when: Optional condition that auto-pauses the run.
    """

    def __init__(
        self,
        config: C,
        *,
        host: FrameHost | None = None,
        sample_rate_hz: float = 30.0,
        capacity: int = 100,
        max_dt: float = MAX_FRAME_DT,
        time_scale: float = 1.0,
        halt_when: HaltCondition | None = None,
    ):
        if not time_scale > 0.0:
            raise ValueError(f"time_scale must be positive, got {time_scale}")
        self._config = config
        self.time_scale = float(time_scale)
        self.halt_when = halt_when
        self.history = HistoryBuffer(capacity)
        self.gate = SamplingGate(sample_rate_hz)
        self.host = host if host is not None else ManualFrameHost()
        self.scheduler = FrameScheduler(self.host, self.step, max_dt=max_dt)
        self.halted = False
        self.state: S = self.initial_state(config)

    # -------------------------------------------------------------------------
    # Panel hooks
    # -------------------------------------------------------------------------

    @abstractmethod
    def initial_state(self, config: C) -> S:
        """State at t = 0 for `config`."""
        ...

    @abstractmethod
    def advance(self, config: C, state: S, dt: float) -> S:
        """Integrate one frame and return the new state."""
        ...

    @abstractmethod
    def sample(self, config: C, state: S) -> dict[str, float]:
        """Chart values for the current state."""
        ...

    @property
    @abstractmethod
    def time(self) -> float:
        """Simulated time since the last reset."""
        ...

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def config(self) -> C:
        return self._config

    @property
    def run_state(self) -> RunState:
        return self.scheduler.state

    def set_config(self, config: C) -> None:
        """Replace the configuration and reset the run."""
        if not isinstance(config, type(self._config)):
            raise TypeError(f"Expected {type(self._config).__name__}, got {type(config).__name__}")
        self._config = config
        self.reset()

    def play(self) -> None:
        """Start or resume. A halted run stays paused until reset()."""
        if self.halted:
            logger.debug("%s is halted; reset before playing", type(self).__name__)
            return
        self.scheduler.play()

    def pause(self) -> None:
        self.scheduler.pause()

    def reset(self) -> None:
        """Back to IDLE with a fresh initial state and empty history."""
        self.scheduler.stop()
        self.state = self.initial_state(self._config)
        self.history.clear()
        self.gate.reset()
        self.halted = False
        logger.debug("%s reset", type(self).__name__)

    def step(self, dt: float) -> None:
        """
        Run one frame: integrate, then sample, then check the halt condition.

        Also usable without a host to drive the runner manually.
        """
        if self.halted:
            return
        config = self._config
        self.state = self.advance(config, self.state, dt * self.time_scale)
        t = self.time
        if self.gate.admit(t):
            self.history.push(HistorySample(t, self.sample(config, self.state)))
        if self.halt_when is not None and self.halt_when(config, self.state):
            self.halted = True
            logger.debug("%s halted at t=%.3f", type(self).__name__, t)
            self.pause()

    def run_for(self, duration: float, dt: float = 1 / 60) -> int:
        """
        Step headlessly for `duration` wall-clock seconds of frames.

        Returns:
            Number of frames stepped (fewer if the run halted).
        """
        frames = 0
        while frames * dt < duration - 1e-12 and not self.halted:
            self.step(dt)
            frames += 1
        return frames


class MotionSimulation(Simulation[SimulationConfig, MotionState]):
    """
    Point mass driven by a force law.

    Args:
        config: Panel configuration.
        force_law: (config, state) -> acceleration.
        initial: (config) -> MotionState at t = 0.
        sampler: (config, state) -> chart values.
        constrain: Optional (config, previous, new) -> MotionState applied
            after every step, e.g. to stop a body exactly on the ground.
        **kwargs: Passed to Simulation.
    """

    def __init__(
        self,
        config: SimulationConfig,
        force_law: ForceLaw,
        initial: Callable[[Any], MotionState],
        sampler: Sampler,
        constrain: Constraint | None = None,
        **kwargs: Any,
    ):
        self.force_law = force_law
        self.constrain = constrain
        self._initial = initial
        self._sampler = sampler
        super().__init__(config, **kwargs)

    def initial_state(self, config) -> MotionState:
        return self._initial(config)

    def advance(self, config, state: MotionState, dt: float) -> MotionState:
        new = semi_implicit_euler(config, self.force_law, state, dt)
        if self.constrain is not None:
            new = self.constrain(config, state, new)
        return new

    def sample(self, config, state: MotionState) -> dict[str, float]:
        return self._sampler(config, state)

    @property
    def time(self) -> float:
        return self.state.elapsed_time


class AngularSimulation(Simulation[SimulationConfig, AngularState]):
    """Body constrained to a circle, driven by an angular rate law."""

    def __init__(
        self,
        config: SimulationConfig,
        rate_law: RateLaw,
        initial: Callable[[Any], AngularState],
        sampler: Sampler,
        **kwargs: Any,
    ):
        self.rate_law = rate_law
        self._initial = initial
        self._sampler = sampler
        super().__init__(config, **kwargs)

    def initial_state(self, config) -> AngularState:
        return self._initial(config)

    def advance(self, config, state: AngularState, dt: float) -> AngularState:
        return step_angular(config, self.rate_law, state, dt)

    def sample(self, config, state: AngularState) -> dict[str, float]:
        return self._sampler(config, state)

    @property
    def time(self) -> float:
        return self.state.elapsed_time


# =============================================================================
# Collisions
# =============================================================================

@dataclass(frozen=True)
class CollisionEvent:
    """Velocities of both blocks just before and just after one collision."""
    time: float
    before: tuple[float, float]
    after: tuple[float, float]


class CollisionSimulation(Simulation[CollisionConfig, CollisionPair]):
    """
    Two blocks coasting on a track until they collide.

    Between collisions both blocks move with no_force through the shared
    integrator. Each frame first asks contact_time() whether the blocks
    touch within the frame; if so the frame is split at the time of impact
    and the collision is resolved there, so fast blocks cannot pass through
    each other. The pair's latch then guarantees one resolution per
    approach.

    Args:
        config: Collision configuration.
        walls: Optional (left, right) track ends. Blocks reflect elastically
            off them, which makes repeated collisions possible.
        **kwargs: Passed to Simulation.
    """

    def __init__(self, config: CollisionConfig, walls: tuple[float, float] | None = None, **kwargs: Any):
        if walls is not None and not walls[0] < walls[1]:
            raise ValueError(f"walls must be (left, right) with left < right, got {walls}")
        self.walls = walls
        self.events: list[CollisionEvent] = []
        super().__init__(config, **kwargs)

    def initial_state(self, config: CollisionConfig) -> CollisionPair:
        self.events = []
        return CollisionPair(
            a=Block(config.m1, config.width, MotionState.initial(config.x1, config.v1)),
            b=Block(config.m2, config.width, MotionState.initial(config.x2, config.v2)),
        )

    @property
    def time(self) -> float:
        return self.state.a.state.elapsed_time

    @property
    def before(self) -> tuple[float, float] | None:
        """Velocities before the most recent collision."""
        return self.events[-1].before if self.events else None

    @property
    def after(self) -> tuple[float, float] | None:
        """Velocities after the most recent collision."""
        return self.events[-1].after if self.events else None

    def _drift(self, config: CollisionConfig, pair: CollisionPair, dt: float) -> None:
        for block in (pair.a, pair.b):
            block.state = semi_implicit_euler(config, no_force, block.state, dt)

    def _collide(self, config: CollisionConfig, pair: CollisionPair) -> None:
        before = (pair.a.velocity, pair.b.velocity)
        after = pair.apply(config.restitution)
        self.events.append(CollisionEvent(time=pair.a.state.elapsed_time, before=before, after=after))
        logger.debug("Collision at t=%.4f: %s -> %s", self.events[-1].time, before, after)

    def _bounce_off_walls(self, pair: CollisionPair) -> None:
        left, right = self.walls
        for block in (pair.a, pair.b):
            half = 0.5 * block.width
            if block.position - half <= left and block.velocity < 0.0:
                block.state = block.state.with_velocity(-block.velocity)
            elif block.position + half >= right and block.velocity > 0.0:
                block.state = block.state.with_velocity(-block.velocity)

    def advance(self, config: CollisionConfig, pair: CollisionPair, dt: float) -> CollisionPair:
        remaining = dt
        if not pair.has_collided and pair.approaching:
            t_hit = contact_time(
                pair.a.position, pair.a.velocity,
                pair.b.position, pair.b.velocity,
                pair.contact_distance, dt,
            )
            if t_hit is not None:
                self._drift(config, pair, t_hit)
                pair.has_collided = True
                self._collide(config, pair)
                remaining = dt - t_hit
        self._drift(config, pair, remaining)
        if pair.check():
            self._collide(config, pair)
        if self.walls is not None:
            self._bounce_off_walls(pair)
        return pair

    def sample(self, config: CollisionConfig, pair: CollisionPair) -> dict[str, float]:
        m1, v1, m2, v2 = pair.a.mass, pair.a.velocity, pair.b.mass, pair.b.velocity
        return {
            "x1": pair.a.position,
            "x2": pair.b.position,
            "v1": v1,
            "v2": v2,
            "momentum": pair_momentum(m1, v1, m2, v2),
            "ke": pair_kinetic_energy(m1, v1, m2, v2),
        }
