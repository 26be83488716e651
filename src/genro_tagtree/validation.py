# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Invariant checking for TaggedIntervalTree nodes.

The checks mirror the structural rules the tree maintains after every
mutating call:

- sorted: children ordered by ascending start
- non-overlapping: ``children[i].end <= children[i+1].start``
- merged: no two touching siblings share a tag
- inside: every child lies within its parent's range
- tag-exclusive: no child carries its parent's tag

Errors are reported per node path, using the positional syntax
``'#0.#1'`` (second child of the first child of the root).
"""

from __future__ import annotations

from typing import Iterator

from .node import IntervalNode


def iter_node_errors(node: IntervalNode, is_root: bool = False) -> Iterator[str]:
    """Yield the invariant violations local to ``node`` and its children."""
    if not is_root:
        # an empty document has an empty root, nothing else may be empty
        if node.interval.is_empty:
            yield f"empty range [{node.start},{node.end}]"
        if node.tag is None:
            yield "untagged node below the root"

    previous: IntervalNode | None = None
    for index, child in enumerate(node.children):
        if not node.interval.contains(child.interval):
            yield (
                f"child #{index} [{child.start},{child.end}] outside "
                f"[{node.start},{node.end}]"
            )
        if child.tag is not None and child.tag == node.tag:
            yield f"child #{index} repeats parent tag '{child.tag}'"
        if previous is not None:
            if child.start < previous.start:
                yield f"child #{index} not sorted by start"
            if previous.end > child.start:
                yield f"children #{index - 1} and #{index} overlap"
            elif previous.end == child.start and previous.tag == child.tag:
                yield f"children #{index - 1} and #{index} not merged ('{child.tag}')"
        previous = child


def validation_errors(root: IntervalNode) -> dict[str, list[str]]:
    """Return all invariant violations in the tree rooted at ``root``.

    Returns:
        Dictionary mapping node paths to their error lists. The root has
        path ''. Only nodes with errors are included.
    """
    errors: dict[str, list[str]] = {}

    def _check(node: IntervalNode, path: str) -> None:
        reasons = list(iter_node_errors(node, is_root=(path == '')))
        if reasons:
            errors[path] = reasons
        for index, child in enumerate(node.children):
            _check(child, f"{path}.#{index}" if path else f"#{index}")

    _check(root, '')
    return errors
