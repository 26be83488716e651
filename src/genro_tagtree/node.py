# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""IntervalNode - a labeled range with ordered, owned children."""

from __future__ import annotations

from .interval import Interval


class IntervalNode:
    """A node in a TaggedIntervalTree.

    Each node has:
    - interval: The half-open range it covers
    - tag: The formatting label (None only for the root)
    - children: Ordered list of child nodes, owned by this node

    Nodes keep no reference to their parent. Invariants between a node
    and its children are maintained by the tree, not by the node.

    Example:
        >>> node = IntervalNode(0, 10, 'b')
        >>> node.children.append(IntervalNode(2, 8, 'i'))
        >>> print(node.dump(), end='')
        [0,10] tag: b
          [2,8] tag: i
    """

    __slots__ = ('interval', 'tag', 'children')

    def __init__(
        self,
        start: int,
        end: int,
        tag: str | None = None,
        children: list[IntervalNode] | None = None,
    ) -> None:
        """Initialize an IntervalNode.

        Args:
            start: First offset covered.
            end: Offset one past the last covered.
            tag: The node's label, None for the root.
            children: Optional initial children (the list is copied).
        """
        self.interval = Interval(start, end)
        self.tag = tag
        self.children: list[IntervalNode] = list(children) if children else []

    def __repr__(self) -> str:
        return (
            f"IntervalNode({self.start}, {self.end}, {self.tag!r}, "
            f"children={len(self.children)})"
        )

    @property
    def start(self) -> int:
        return self.interval.start

    @property
    def end(self) -> int:
        return self.interval.end

    @property
    def is_leaf(self) -> bool:
        """True if this node has no children."""
        return not self.children

    def dump(self, indent: int = 0) -> str:
        """Return an indented listing of this subtree, one line per node."""
        line = f"{' ' * indent}[{self.start},{self.end}]"
        if self.tag:
            line += f" tag: {self.tag}"
        parts = [line + '\n']
        for child in self.children:
            parts.append(child.dump(indent + 2))
        return ''.join(parts)

    def split(self, position: int) -> tuple[IntervalNode | None, IntervalNode | None]:
        """Cut this subtree at ``position``.

        Returns the (left, right) halves. Each half is a new node carrying
        the same tag and the matching halves of the children. A half is
        None when ``position`` falls outside the node; in that case the
        other half is this very node, unchanged.
        """
        if position <= self.start:
            return None, self
        if position >= self.end:
            return self, None
        left_children: list[IntervalNode] = []
        right_children: list[IntervalNode] = []
        for child in self.children:
            left, right = child.split(position)
            if left is not None:
                left_children.append(left)
            if right is not None:
                right_children.append(right)
        return (
            IntervalNode(self.start, position, self.tag, left_children),
            IntervalNode(position, self.end, self.tag, right_children),
        )
