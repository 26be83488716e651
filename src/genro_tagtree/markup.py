# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Rendering of a tagged interval tree as marked-up text."""

from __future__ import annotations

from dataclasses import dataclass

from .node import IntervalNode


@dataclass(frozen=True)
class Marker:
    """An open or close tag at a text offset.

    Attributes:
        position: Offset in the text where the marker goes.
        tag: The label to emit.
        is_opening: True for ``<tag>``, False for ``</tag>``.
        depth: Nesting depth of the node the marker belongs to.
    """

    position: int
    tag: str
    is_opening: bool
    depth: int

    @property
    def sort_key(self) -> tuple[int, int, int]:
        """Order by position; at one position closes (innermost first)
        precede opens (outermost first)."""
        if self.is_opening:
            return (self.position, 1, self.depth)
        return (self.position, 0, -self.depth)

    def render(self) -> str:
        if self.is_opening:
            return f"<{self.tag}>"
        return f"</{self.tag}>"


def collect_markers(root: IntervalNode) -> list[Marker]:
    """Return the markers of every tagged node, sorted for emission."""
    markers: list[Marker] = []

    def _collect(node: IntervalNode, depth: int) -> None:
        if node.tag is not None:
            markers.append(Marker(node.start, node.tag, True, depth))
            markers.append(Marker(node.end, node.tag, False, depth))
        for child in node.children:
            _collect(child, depth + 1)

    _collect(root, 0)
    markers.sort(key=lambda m: m.sort_key)
    return markers


def format_text(root: IntervalNode, text: str) -> str:
    """Interleave ``text`` with the open/close markers of the tree.

    Example:
        >>> root = IntervalNode(0, 12)
        >>> root.children.append(IntervalNode(0, 5, 'b'))
        >>> format_text(root, 'Hello world!')
        '<b>Hello</b> world!'
    """
    parts: list[str] = []
    last_position = 0
    for marker in collect_markers(root):
        parts.append(text[last_position:marker.position])
        last_position = marker.position
        parts.append(marker.render())
    parts.append(text[last_position:])
    return ''.join(parts)
