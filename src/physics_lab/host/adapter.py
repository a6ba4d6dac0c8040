# MIT License (see LICENSE)
"""
Frame host adapters.

The simulation core never owns a clock. A host environment (a browser's
animation-frame loop, a GUI timer, a test) calls back once per display
refresh with a monotonically increasing timestamp. This module defines
that contract and a headless implementation for scripts and tests.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
import itertools
from typing import Callable

# Called with the frame timestamp in seconds.
FrameCallback = Callable[[float], None]


class FrameHost(ABC):
    """
    Abstract per-frame callback provider.

    Callbacks are one-shot: a subscriber that wants the next frame as well
    requests it again from inside its callback.

    Usage:
        handle = host.request_frame(on_frame)
        ...
        host.cancel_frame(handle)   # before it fires
    """

    @abstractmethod
    def request_frame(self, callback: FrameCallback) -> int:
        """
        Schedule `callback` for the next frame.

        Returns:
            Handle that can be passed to cancel_frame().
        """
        ...

    @abstractmethod
    def cancel_frame(self, handle: int) -> None:
        """Cancel a pending request. Unknown or fired handles are ignored."""
        ...


class ManualFrameHost(FrameHost):
    """
    Headless host driven explicitly by tick().

    Example:
        host = ManualFrameHost()
        scheduler = FrameScheduler(host, on_step)
        scheduler.play()
        host.run(duration=2.0, fps=60)
    """

    def __init__(self, start: float = 0.0):
        self.time = float(start)
        self._pending: dict[int, FrameCallback] = {}
        self._handles = itertools.count(1)

    @property
    def pending(self) -> int:
        """Number of callbacks waiting for the next frame."""
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._handles)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def tick(self, timestamp: float | None = None, dt: float = 1 / 60) -> None:
        """
        Deliver one frame.

        Args:
            timestamp: Frame time in seconds; defaults to the previous time
                plus dt. Must not go backwards.
            dt: Frame gap used when no timestamp is given.
        """
        if timestamp is None:
            timestamp = self.time + dt
        if timestamp < self.time:
            raise ValueError(f"Frame timestamps must not decrease: {timestamp} < {self.time}")
        self.time = float(timestamp)
        # Requests made by the callbacks belong to the next frame.
        due, self._pending = self._pending, {}
        for callback in due.values():
            callback(self.time)

    def run(self, duration: float, fps: float = 60.0) -> int:
        """
        Deliver frames at a fixed rate for `duration` seconds.

        Returns:
            Number of frames delivered.
        """
        frames = int(round(duration * fps))
        for _ in range(frames):
            self.tick(dt=1.0 / fps)
        return frames
