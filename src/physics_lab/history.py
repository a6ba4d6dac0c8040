# MIT License (see LICENSE)
"""
Bounded chart history and the gate that decides when to sample.

The integrator steps once per display frame, 60 times a second or more.
Charts want far fewer points, so a SamplingGate admits one sample per
1/rate seconds of simulated time and a HistoryBuffer keeps only the most
recent `capacity` of them.
"""
from __future__ import annotations
from collections import deque
import math
from typing import Iterator

from .types import HistorySample


class HistoryBuffer:
    """
    Fixed-capacity FIFO of time-stamped samples.

    Pushing into a full buffer evicts the oldest sample in O(1). Samples
    must arrive in strictly increasing time order.

    Example:
        buf = HistoryBuffer(capacity=100)
        buf.push(HistorySample(0.05, {"ke": 1.2}))
        rows = buf.to_records()
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._capacity = int(capacity)
        self._samples: deque[HistorySample] = deque(maxlen=self._capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[HistorySample]:
        return iter(self.to_sequence())

    @property
    def latest(self) -> HistorySample | None:
        return self._samples[-1] if self._samples else None

    def push(self, sample: HistorySample) -> None:
        """
        Append a sample, evicting the oldest one when full.

        Raises:
            ValueError: If the sample is not strictly newer than the latest one.
        """
        latest = self.latest
        if latest is not None and sample.time <= latest.time:
            raise ValueError(
                f"History samples must be strictly increasing in time: {sample.time} after {latest.time}"
            )
        self._samples.append(sample)

    def to_sequence(self) -> tuple[HistorySample, ...]:
        """Retained samples, oldest first. Empty before the first push."""
        return tuple(self._samples)

    def to_records(self) -> list[dict[str, float]]:
        """Retained samples as flat chart rows {"time": t, **values}."""
        return [s.to_record() for s in self._samples]

    def clear(self) -> None:
        self._samples.clear()


class SamplingGate:
    """
    Admits at most one sample per 1/rate seconds of simulated time.

    Time is divided into buckets floor(t · rate); a time is admitted when it
    falls in a later bucket than the last admitted one. The first time seen
    after construction or reset() is always admitted.
    """

    def __init__(self, rate_hz: float):
        if not rate_hz > 0.0:
            raise ValueError(f"rate_hz must be positive, got {rate_hz}")
        self.rate_hz = float(rate_hz)
        self._last_bucket: int | None = None

    def admit(self, t: float) -> bool:
        bucket = math.floor(t * self.rate_hz)
        if self._last_bucket is not None and bucket <= self._last_bucket:
            return False
        self._last_bucket = bucket
        return True

    def reset(self) -> None:
        self._last_bucket = None
