# MIT License (see LICENSE)
"""
Latched contact detection for a pair of collinear blocks.

A positional test alone would fire on every frame the blocks overlap, and
each firing would apply the restitution again and remove energy that the
collision never lost. The pair therefore keeps a latch:

    separated --(gap < d, approaching)--> fire, latch set
    latched   --(gap < d)---------------> nothing
    latched   --(gap > d)---------------> latch cleared, ready again

so a collision fires at most once per approach, and a later approach (for
example after a wall bounce) can fire again.
"""
from __future__ import annotations
from dataclasses import dataclass
import logging

from ..types import Block
from .resolver import resolve

logger = logging.getLogger(__name__)


@dataclass
class CollisionPair:
    """
    Two blocks on the same track and their contact latch.

    Attributes:
        a: Left block.
        b: Right block.
        has_collided: Latch, set when a collision fires and cleared once the
            blocks separate beyond the contact distance.
    """
    a: Block
    b: Block
    has_collided: bool = False

    @property
    def contact_distance(self) -> float:
        """Centre distance at which the blocks touch (mean of the widths)."""
        return 0.5 * (self.a.width + self.b.width)

    @property
    def gap(self) -> float:
        """Current centre distance."""
        return abs(self.b.position - self.a.position)

    @property
    def approaching(self) -> bool:
        """True if the relative motion closes the gap."""
        return (self.a.velocity - self.b.velocity) * (self.b.position - self.a.position) > 0.0

    def check(self) -> bool:
        """
        Update the latch and report whether a collision fires now.

        Returns:
            True exactly once per approach: on the first call that finds the
            blocks in contact and closing while the latch is clear.
        """
        if self.gap < self.contact_distance:
            if not self.has_collided and self.approaching:
                self.has_collided = True
                return True
            return False
        if self.has_collided:
            logger.debug("Blocks separated (gap=%.4f), latch re-armed", self.gap)
        self.has_collided = False
        return False

    def apply(self, restitution: float) -> tuple[float, float]:
        """
        Replace both block velocities with the resolved ones.

        Returns:
            The new (v_a, v_b).
        """
        va, vb = resolve(self.a.mass, self.a.velocity, self.b.mass, self.b.velocity, restitution)
        logger.debug(
            "Collision resolved: (%.4f, %.4f) -> (%.4f, %.4f), e=%.3f",
            self.a.velocity, self.b.velocity, va, vb, restitution,
        )
        self.a.state = self.a.state.with_velocity(va)
        self.b.state = self.b.state.with_velocity(vb)
        return va, vb
