# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TaggedIntervalTree - formatting spans over a mutable text buffer.

This module provides the TaggedIntervalTree class, the engine behind a
rich-text formatting model. The tree keeps labeled spans (bold, italic,
underline...) over half-open character offsets and supports adding and
removing a label over any sub-range, querying coverage, and rendering
the buffer as marked-up text.

Tree Structure:
    - The root is untagged and covers ``[0, length)``
    - Every other node carries exactly one label
    - Siblings are sorted, disjoint, and never touch with the same label
    - A child lies inside its parent and never repeats the parent's label

Example:
    Basic usage::

        tree = TaggedIntervalTree(12)
        tree.add_tag('b', 0, 11)
        tree.add_tag('i', 6, 11)

        tree.get_formatted_text('Hello world!')
        # '<b>Hello <i>world</i></b>!'

        tree.remove_tag('b', 0, 5)
        tree.has_tag('b', 0, 5)  # False
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from ..exceptions import InvariantError
from ..interval import Interval
from ..markup import format_text
from ..node import IntervalNode
from ..validation import validation_errors
from .normalize import insert_span, restore_invariants
from .removal import remove_tag

logger = logging.getLogger(__name__)


class TaggedIntervalTree:
    """A tree of nested, tag-exclusive, non-overlapping labeled intervals.

    TaggedIntervalTree provides:
    - add_tag(tag, start, end): Apply a label over a range
    - remove_tag(tag, start, end): Strip a label from a range
    - has_tag(tag, start, end): Check a range lies under one occurrence
    - get_formatted_text(text): Render ``<tag>``/``</tag>`` markup
    - grow_root(length): Follow the buffer when it grows

    Invalid or out-of-range intervals are silent no-ops.

    Attributes:
        root: The untagged IntervalNode covering the whole buffer.
        strict: If True, every mutation verifies the invariants and
            raises InvariantError on violation.

    Example:
        >>> tree = TaggedIntervalTree(100)
        >>> tree.add_tag('b', 10, 20)
        >>> tree.add_tag('b', 20, 30)
        >>> tree.spans()
        [('b', 10, 30)]
    """

    __slots__ = ('root', 'strict')

    def __init__(
        self,
        length: int = 0,
        source: Iterable[tuple[str, int, int]] | None = None,
        strict: bool = False,
    ) -> None:
        """Initialize a TaggedIntervalTree.

        Args:
            length: Current length of the text buffer.
            source: Optional iterable of (tag, start, end) tuples applied
                in order through add_tag.
            strict: If True, check the invariants after every mutation.

        Raises:
            ValueError: If length is negative or a source item is not a
                (tag, start, end) triple.
            TypeError: If source is not iterable.

        Example:
            >>> TaggedIntervalTree(100, [('b', 0, 10), ('i', 5, 20)])
            >>> TaggedIntervalTree(100, strict=True)
        """
        if length < 0:
            raise ValueError(f"length must be non-negative, got {length}")
        self.root = IntervalNode(0, length)
        self.strict = strict

        if source is not None:
            self._load_source(source)

    def _load_source(self, source: Iterable[tuple[str, int, int]]) -> None:
        """Apply (tag, start, end) tuples from source.

        Raises:
            TypeError: If source is a string or not iterable.
            ValueError: If an item is not a 3-element tuple or list.
        """
        if isinstance(source, (str, bytes)) or not hasattr(source, '__iter__'):
            raise TypeError(
                f"source must be an iterable of (tag, start, end), "
                f"not {type(source).__name__}"
            )
        for item in source:
            if not isinstance(item, (tuple, list)) or len(item) != 3:
                raise ValueError(
                    f"source items must be (tag, start, end), got {item!r}"
                )
            tag, start, end = item
            self.add_tag(tag, start, end)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"TaggedIntervalTree({len(self)}, spans={len(self.spans())})"

    def __str__(self) -> str:
        return self.dump()

    def __len__(self) -> int:
        """Return the length of the buffer covered by the root."""
        return self.root.interval.length

    # ==================== Mutation ====================

    def add_tag(self, tag: str, start: int, end: int) -> None:
        """Apply ``tag`` over ``[start, end)``, clamped to the buffer.

        Parts of the range already under ``tag`` are left alone; the new
        label nests inside other labels it overlaps and becomes a sibling
        wherever the range is untagged. Touching runs of the same label
        end up as one node.

        Args:
            tag: The label to apply.
            start: First offset of the range.
            end: Offset one past the last of the range.
        """
        if start >= end:
            logger.debug("add_tag %r ignored: empty interval [%s,%s)", tag, start, end)
            return
        logger.debug("Adding tag %r to interval [%s,%s)", tag, start, end)
        self._add_tag(self.root, tag, start, end)
        restore_invariants(self.root)
        self._check()

    def _add_tag(self, node: IntervalNode, tag: str, start: int, end: int) -> None:
        """Add ``tag`` below ``node``, recursing into overlapped children."""
        start = max(start, node.start)
        end = min(end, node.end)
        if start >= end:
            return
        if node.tag == tag:
            return
        if not node.children:
            node.children.append(IntervalNode(start, end, tag))
            return

        gaps: list[tuple[int, int]] = []
        position = start
        for child in node.children:
            if position >= end:
                break
            if child.end <= position:
                continue
            if position < child.start:
                gap_end = min(end, child.start)
                gaps.append((position, gap_end))
                position = gap_end
                if position >= end:
                    break
            self._add_tag(child, tag, position, end)
            position = child.end
        if position < end:
            gaps.append((position, end))

        # right to left, so each gap still sees the siblings it was measured against
        for gap_start, gap_end in reversed(gaps):
            insert_span(node.children, tag, gap_start, gap_end)

    def remove_tag(self, tag: str, start: int, end: int) -> bool:
        """Strip ``tag`` from ``[start, end)``, clamped to the buffer.

        Occurrences partly inside the range are shrunk or split; labels
        nested in a removed occurrence are rehooked to its parent.

        Args:
            tag: The label to remove.
            start: First offset of the range.
            end: Offset one past the last of the range.

        Returns:
            True if the label was removed anywhere, False if the range is
            empty, outside the buffer, or not under ``tag``.
        """
        request = Interval(start, end)
        if request.is_empty or not self.root.interval.overlaps(request):
            logger.debug(
                "remove_tag %r ignored: interval [%s,%s) outside [%s,%s)",
                tag, start, end, self.root.start, self.root.end,
            )
            return False
        logger.debug("Removing tag %r from interval [%s,%s)", tag, start, end)
        result = remove_tag(self.root, tag, request)
        if result.removed:
            restore_invariants(self.root)
            self._check()
        return result.removed

    def grow_root(self, length: int) -> None:
        """Widen the root to cover a buffer of ``length`` characters.

        The root never shrinks: a smaller length is ignored.
        """
        if length > self.root.end:
            self.root.interval = self.root.interval.with_end(length)

    # ==================== Queries ====================

    def has_tag(self, tag: str, start: int, end: int) -> bool:
        """True if a single occurrence of ``tag`` covers ``[start, end)``.

        Coverage is not summed over several occurrences: two separate
        nodes with the same label that happen to meet do not count.
        Empty ranges are never covered.
        """
        query = Interval(start, end)
        if query.is_empty:
            return False
        return self._has_tag(self.root, tag, query)

    def _has_tag(self, node: IntervalNode, tag: str, query: Interval) -> bool:
        if node.tag == tag and node.interval.contains(query):
            return True
        for child in node.children:
            if child.start >= query.end:
                break
            if child.interval.overlaps(query) and self._has_tag(child, tag, query):
                return True
        return False

    def tags_at(self, position: int) -> set[str]:
        """Return the labels in effect at offset ``position``."""
        tags: set[str] = set()
        node = self.root
        while True:
            for child in node.children:
                if child.start <= position < child.end:
                    tags.add(child.tag)
                    node = child
                    break
            else:
                return tags

    def get_formatted_text(self, text: str) -> str:
        """Return ``text`` with ``<tag>``/``</tag>`` markers inserted.

        Example:
            >>> tree = TaggedIntervalTree(12)
            >>> tree.add_tag('b', 0, 11)
            >>> tree.add_tag('i', 6, 11)
            >>> tree.get_formatted_text('Hello world!')
            '<b>Hello <i>world</i></b>!'
        """
        return format_text(self.root, text)

    # ==================== Walk ====================

    def walk(self) -> Iterator[tuple[str, IntervalNode]]:
        """Yield (path, node) for every tagged node in pre-order.

        Paths use positional syntax: '#0' is the first child of the
        root, '#0.#1' the second child of that node.

        Example:
            >>> for path, node in tree.walk():
            ...     print(path, node.tag, node.start, node.end)
        """
        def _walk_gen(node: IntervalNode, prefix: str) -> Iterator[tuple[str, IntervalNode]]:
            for index, child in enumerate(node.children):
                path = f"{prefix}.#{index}" if prefix else f"#{index}"
                yield path, child
                yield from _walk_gen(child, path)

        return _walk_gen(self.root, '')

    def spans(self) -> list[tuple[str, int, int]]:
        """Return (tag, start, end) for every tagged node in pre-order."""
        return [(node.tag, node.start, node.end) for _, node in self.walk()]

    def dump(self) -> str:
        """Return an indented listing of the tree, one line per node."""
        return self.root.dump()

    # ==================== Validation ====================

    @property
    def is_valid(self) -> bool:
        """True if every node satisfies the tree invariants."""
        return not self.validation_errors()

    def validation_errors(self) -> dict[str, list[str]]:
        """Return all invariant violations, keyed by node path.

        Example:
            >>> tree.validation_errors()
            {}
        """
        return validation_errors(self.root)

    def _check(self) -> None:
        """In strict mode, raise InvariantError if the tree is inconsistent."""
        if not self.strict:
            return
        errors = self.validation_errors()
        if errors:
            logger.error("Tree invariants violated:\n%s", self.dump())
            raise InvariantError(errors)
