# MIT License (see LICENSE)
"""
Frame host adapters.

The core has no clock of its own - hosts deliver per-frame callbacks.

Available hosts:
    - FrameHost: Abstract base class for custom hosts.
    - ManualFrameHost: Headless host for tests and scripts.
"""
from .adapter import FrameCallback, FrameHost, ManualFrameHost

__all__ = [
    "FrameCallback",
    "FrameHost",
    "ManualFrameHost",
]
