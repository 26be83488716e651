# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tag removal over a parent-pointer-free tree.

Nodes do not know their parent, so a node that has to disappear or be
split cannot unhook itself. Instead ``remove_tag`` returns a
RemovalResult describing what happened, and the caller (the actual
parent) performs the splice:

==========================  ==========================================
state                       caller action
==========================  ==========================================
REMOVE_INTERVAL_INSIDE      replace the child with ``rehook``
REMOVE_ENTIRE_NODE          replace the child with ``rehook``
REMOVE_INTERVAL_LEFT        keep the shrunk child, add ``rehook``
REMOVE_INTERVAL_RIGHT       keep the shrunk child, add ``rehook``
PROCESSED_CHILDREN          keep the child
NO_OVERLAP                  nothing
==========================  ==========================================

In every case the caller continues with ``remaining``, the part of the
request lying to the right of the child, against the next siblings.
"""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass, field
from enum import Enum

from ..interval import Interval
from ..node import IntervalNode
from .normalize import clamp_children, insert_sorted, merge_siblings


class RemovalState(Enum):
    """What a removal did to the node it was applied to."""

    NO_OVERLAP = 'no_overlap'
    PROCESSED_CHILDREN = 'processed_children'
    REMOVE_INTERVAL_INSIDE = 'remove_interval_inside'
    REMOVE_INTERVAL_LEFT = 'remove_interval_left'
    REMOVE_INTERVAL_RIGHT = 'remove_interval_right'
    REMOVE_ENTIRE_NODE = 'remove_entire_node'


_REPLACING_STATES = frozenset({
    RemovalState.REMOVE_INTERVAL_INSIDE,
    RemovalState.REMOVE_ENTIRE_NODE,
})


@dataclass
class RemovalResult:
    """Outcome of removing a tag from one node.

    Attributes:
        removed: True if the tag was removed anywhere in the subtree.
        state: What happened to the node itself.
        remaining: Part of the request to the right of the node.
        rehook: Sorted, merged nodes the caller must splice into its
            own children.
    """

    removed: bool
    state: RemovalState
    remaining: Interval
    rehook: list[IntervalNode] = field(default_factory=list)

    @property
    def replaces_node(self) -> bool:
        """True if the caller must drop the node and splice ``rehook`` instead."""
        return self.state in _REPLACING_STATES


def _cut(
    nodes: list[IntervalNode], position: int
) -> tuple[list[IntervalNode], list[IntervalNode]]:
    """Split a sorted sibling list at ``position`` into (left, right) pieces."""
    left: list[IntervalNode] = []
    right: list[IntervalNode] = []
    for node in nodes:
        before, after = node.split(position)
        if before is not None:
            left.append(before)
        if after is not None:
            right.append(after)
    return left, right


def _strip(nodes: list[IntervalNode], tag: str, request: Interval) -> list[IntervalNode]:
    """Return ``nodes`` with ``tag`` removed wherever they meet ``request``."""
    stripped = list(nodes)
    remove_from_children(stripped, tag, request)
    return merge_siblings(stripped)


def remove_from_children(
    children: list[IntervalNode], tag: str, request: Interval
) -> bool:
    """Remove ``tag`` over ``request`` from a sorted sibling list, in place.

    Children are visited left to right. Each overlapping child gets the
    part of the request not yet consumed by its predecessors; its result
    tells whether to keep it, drop it, or splice replacement nodes.

    Returns:
        True if any child changed.
    """
    removed = False
    pending = request
    index = 0
    while index < len(children) and not pending.is_empty:
        child = children[index]
        if child.start >= pending.end:
            break
        if not child.interval.overlaps(pending):
            index += 1
            continue

        child_end = child.end
        result = remove_tag(child, tag, pending)
        removed = removed or result.removed
        if result.replaces_node:
            del children[index]
        for node in result.rehook:
            insert_sorted(children, node)
        # everything spliced lies inside the child's original range
        index = bisect_left(children, child_end, key=lambda n: n.start)
        pending = result.remaining
    return removed


def _remove_inside(node: IntervalNode, tag: str, gap: Interval) -> list[IntervalNode]:
    """Split ``node`` around ``gap`` into pre-gap and post-gap nodes.

    Children are divided at both gap boundaries: pieces before the gap
    stay under the pre-gap node, pieces after it under the post-gap
    node, and the pieces inside the gap are rehooked between them.
    """
    before, rest = _cut(node.children, gap.start)
    middle, after = _cut(rest, gap.end)
    rehook = [IntervalNode(node.start, gap.start, tag, before)]
    rehook.extend(_strip(middle, tag, gap))
    rehook.append(IntervalNode(gap.end, node.end, tag, after))
    return merge_siblings(rehook)


def remove_tag(node: IntervalNode, tag: str, request: Interval) -> RemovalResult:
    """Remove ``tag`` from the subtree of ``node`` over ``request``.

    The node is modified in place when it survives (shrunk or with
    processed children). When it must be replaced, the replacement
    nodes are returned in ``RemovalResult.rehook``.
    """
    effective = node.interval.clamp(request)
    if effective.is_empty:
        return RemovalResult(False, RemovalState.NO_OVERLAP, request)

    remaining = Interval(max(request.start, node.end), request.end)

    if node.tag != tag:
        removed = remove_from_children(node.children, tag, effective)
        clamp_children(node)
        return RemovalResult(removed, RemovalState.PROCESSED_CHILDREN, remaining)

    if effective.start > node.start and effective.end < node.end:
        return RemovalResult(
            True,
            RemovalState.REMOVE_INTERVAL_INSIDE,
            remaining,
            _remove_inside(node, tag, effective),
        )

    if effective.end < node.end:
        # removal covers the start of the node
        dropped, kept = _cut(node.children, effective.end)
        node.interval = node.interval.with_start(effective.end)
        node.children = kept
        return RemovalResult(
            True,
            RemovalState.REMOVE_INTERVAL_LEFT,
            remaining,
            _strip(dropped, tag, effective),
        )

    if effective.start > node.start:
        # removal covers the end of the node
        kept, dropped = _cut(node.children, effective.start)
        node.interval = node.interval.with_end(effective.start)
        node.children = kept
        return RemovalResult(
            True,
            RemovalState.REMOVE_INTERVAL_RIGHT,
            remaining,
            _strip(dropped, tag, effective),
        )

    return RemovalResult(
        True,
        RemovalState.REMOVE_ENTIRE_NODE,
        remaining,
        _strip(node.children, tag, effective),
    )
