# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Sibling insertion, merging and the normalization pass.

These helpers operate on plain child lists. They are shared by the
add and remove algorithms, and ``restore_invariants`` is the single
pass run once after each top-level mutation to bring a whole subtree
back to canonical form.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from typing import Iterable, Iterator

from ..interval import Interval
from ..node import IntervalNode


def _node_start(node: IntervalNode) -> int:
    return node.start


def insert_sorted(children: list[IntervalNode], node: IntervalNode) -> int:
    """Insert ``node`` after any sibling with the same or a smaller start.

    Returns:
        The index the node was inserted at.
    """
    index = bisect_right(children, node.start, key=_node_start)
    children.insert(index, node)
    return index


def insert_span(
    children: list[IntervalNode], tag: str, start: int, end: int
) -> IntervalNode:
    """Cover ``[start, end)`` with ``tag`` inside a sorted child list.

    The span is expected to fall in a gap between siblings. If the
    sibling right before or right after it already carries ``tag`` and
    touches the span, that sibling is extended instead of creating a
    new node; an extension that reaches the following same-tag sibling
    absorbs it together with its children.

    Returns:
        The node now covering the span (new or extended).
    """
    index = bisect_left(children, start, key=_node_start)
    previous = children[index - 1] if index > 0 else None
    following = children[index] if index < len(children) else None

    if previous is not None and previous.tag == tag and previous.end >= start:
        previous.interval = previous.interval.with_end(max(previous.end, end))
        if (
            following is not None
            and following.tag == tag
            and previous.end >= following.start
        ):
            previous.interval = previous.interval.with_end(
                max(previous.end, following.end)
            )
            previous.children.extend(following.children)
            del children[index]
        return previous

    if following is not None and following.tag == tag and end >= following.start:
        following.interval = following.interval.with_start(min(following.start, start))
        return following

    node = IntervalNode(start, end, tag)
    children.insert(index, node)
    return node


def merge_siblings(nodes: Iterable[IntervalNode]) -> list[IntervalNode]:
    """Sort nodes by start and fuse touching or overlapping same-tag runs.

    A fused node spans both ranges and owns the concatenation of their
    children. The input nodes may be modified in place.
    """
    merged: list[IntervalNode] = []
    for node in sorted(nodes, key=_node_start):
        if merged:
            last = merged[-1]
            if last.tag == node.tag and last.end >= node.start:
                last.interval = last.interval.with_end(max(last.end, node.end))
                last.children.extend(node.children)
                continue
        merged.append(node)
    return merged


def _hoist(
    children: Iterable[IntervalNode], tag: str | None, bounds: Interval
) -> Iterator[IntervalNode]:
    """Clamp children to ``bounds``, replacing any child tagged ``tag``
    with its own (recursively hoisted) children. Empty results are dropped.
    """
    for child in children:
        interval = bounds.clamp(child.interval)
        if interval.is_empty:
            continue
        if tag is not None and child.tag == tag:
            yield from _hoist(child.children, tag, interval)
        else:
            child.interval = interval
            yield child


def clamp_children(node: IntervalNode) -> None:
    """Clamp the direct children of ``node`` to its range, dropping empty ones."""
    node.children = list(_hoist(node.children, None, node.interval))


def restore_invariants(node: IntervalNode) -> None:
    """Bring the subtree rooted at ``node`` back to canonical form.

    For every node, children are clamped to the node's range (empty
    ones dropped), children repeating the node's tag are replaced by
    their own children, then siblings are sorted and same-tag runs
    that touch are merged.
    """
    node.children = merge_siblings(_hoist(node.children, node.tag, node.interval))
    for child in node.children:
        restore_invariants(child)
