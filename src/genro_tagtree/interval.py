# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Interval - immutable half-open integer range."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Interval:
    """A half-open range ``[start, end)`` over buffer offsets.

    Intervals are values: a node that changes its range gets a new
    Interval, so two nodes can never share a mutable range.

    Example:
        >>> Interval(10, 20).clamp(Interval(15, 40))
        Interval(start=15, end=20)
        >>> Interval(10, 20).overlaps(Interval(20, 30))
        False
    """

    start: int
    end: int

    def __iter__(self):
        yield self.start
        yield self.end

    @property
    def length(self) -> int:
        """Number of offsets covered (0 for empty or inverted intervals)."""
        return max(0, self.end - self.start)

    @property
    def is_empty(self) -> bool:
        """True if the interval covers no offset."""
        return self.start >= self.end

    def overlaps(self, other: Interval) -> bool:
        """True if the two intervals share at least one offset."""
        return self.start < other.end and other.start < self.end

    def contains(self, other: Interval) -> bool:
        """True if ``other`` lies entirely within this interval."""
        return self.start <= other.start and other.end <= self.end

    def clamp(self, other: Interval) -> Interval:
        """Return the intersection with ``other`` (possibly empty)."""
        return Interval(max(self.start, other.start), min(self.end, other.end))

    def with_start(self, start: int) -> Interval:
        return Interval(start, self.end)

    def with_end(self, end: int) -> Interval:
        return Interval(self.start, end)
