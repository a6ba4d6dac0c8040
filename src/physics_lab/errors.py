# MIT License (see LICENSE)
"""
Exception types raised by the simulation core.

Only invalid usage surfaces as an exception. Numerical edge cases (a field
sample taken on top of a source, an oversized frame delta) are guarded
locally and never raise.
"""
from __future__ import annotations


class ConfigurationError(ValueError):
    """
    A parameter is outside its declared valid range.

    Raised when a config is constructed or replaced, and by the collision
    resolver for non-positive masses or a restitution outside [0, 1].
    Subclasses ValueError so callers validating plain input can catch either.

    Attributes:
        name: The offending parameter name.
        value: The rejected value.
    """

    def __init__(self, name: str, value: object, reason: str) -> None:
        super().__init__(f"Invalid {name}={value!r}: {reason}")
        self.name = name
        self.value = value
