# MIT License (see LICENSE)
"""
Collision detection and resolution for collinear blocks.

This subpackage provides:
    - Resolver: closed-form outgoing velocities with restitution.
    - Detector: latched contact check for a pair of blocks.
    - CCD: time of impact within a frame for tunnelling prevention.

Typical usage:
    from physics_lab.collision import CollisionPair

    pair = CollisionPair(left, right)
    if pair.check():
        pair.apply(restitution=0.8)
"""
from .ccd import contact_time
from .detector import CollisionPair
from .resolver import resolve

__all__ = [
    "resolve",
    "CollisionPair",
    "contact_time",
]
