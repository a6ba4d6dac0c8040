# MIT License (see LICENSE)
"""
Frame scheduler state machine.

    IDLE --play--> RUNNING --pause--> PAUSED --play--> RUNNING
      ^                                                   |
      +---------------------- stop (from any) ------------+

While RUNNING the scheduler holds exactly one pending frame request on the
host. Each frame converts the host timestamp into a clamped dt and calls
on_step(dt). The first frame after entering RUNNING only records the
timestamp: the gap since the last frame of a previous run (or since the
page was hidden) is not simulated.

dt is clamped to [0, max_dt]. A host that stalls for seconds (a hidden
tab, a debugger breakpoint) therefore advances the simulation by at most
max_dt, which keeps the integrator within its stable step range.
"""
from __future__ import annotations
from enum import StrEnum
import logging
from typing import Callable

from .constants import MAX_FRAME_DT
from .host import FrameHost
from .util import clamp

logger = logging.getLogger(__name__)


class RunState(StrEnum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


class FrameScheduler:
    """
    Drives a step function from a FrameHost.

    Attributes:
        host: The frame provider.
        on_step: Called with the clamped dt once per frame while running.
        max_dt: Upper bound for dt in seconds.
        frames: Number of on_step calls since construction.
    """

    def __init__(self, host: FrameHost, on_step: Callable[[float], None], max_dt: float = MAX_FRAME_DT):
        if not max_dt > 0.0:
            raise ValueError(f"max_dt must be positive, got {max_dt}")
        self.host = host
        self.on_step = on_step
        self.max_dt = float(max_dt)
        self.frames = 0
        self._state = RunState.IDLE
        self._handle: int | None = None
        self._last_timestamp: float | None = None

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def subscribed(self) -> bool:
        return self._handle is not None

    def _transition(self, new: RunState) -> None:
        if new is not self._state:
            logger.debug("Scheduler %s -> %s", self._state, new)
        self._state = new

    def _subscribe(self) -> None:
        if self._handle is None:
            self._handle = self.host.request_frame(self._on_frame)

    def _unsubscribe(self) -> None:
        if self._handle is not None:
            self.host.cancel_frame(self._handle)
            self._handle = None

    def play(self) -> None:
        """Enter RUNNING from IDLE or PAUSED. Calling it while running does nothing."""
        if self._state is RunState.RUNNING:
            return
        self._last_timestamp = None
        self._transition(RunState.RUNNING)
        self._subscribe()

    def pause(self) -> None:
        """Leave RUNNING for PAUSED. A no-op in any other state."""
        if self._state is not RunState.RUNNING:
            return
        self._unsubscribe()
        self._transition(RunState.PAUSED)

    def stop(self) -> None:
        """Return to IDLE from any state, cancelling the pending frame."""
        self._unsubscribe()
        self._last_timestamp = None
        self._transition(RunState.IDLE)

    def _on_frame(self, timestamp: float) -> None:
        self._handle = None
        if self._state is not RunState.RUNNING:
            return
        last, self._last_timestamp = self._last_timestamp, timestamp
        if last is not None:
            dt = clamp(timestamp - last, 0.0, self.max_dt)
            self.frames += 1
            self.on_step(dt)
        # on_step may have paused or stopped the scheduler.
        if self._state is RunState.RUNNING:
            self._subscribe()
