# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tree package - Tagged interval tree and its algorithms.

The package is organized into:
- core: Main TaggedIntervalTree class with add, remove, query and rendering
- normalize: Sibling insertion, merging and the invariant-restoring pass
- removal: Removal result record and the parent-pointer-free removal DFS

Example:
    >>> from genro_tagtree import TaggedIntervalTree
    >>> tree = TaggedIntervalTree(100)
    >>> tree.add_tag('b', 10, 50)
    >>> tree.remove_tag('b', 25, 35)
    True
    >>> tree.spans()
    [('b', 10, 25), ('b', 35, 50)]
"""

from .core import TaggedIntervalTree
from .removal import RemovalResult, RemovalState

__all__ = ["TaggedIntervalTree", "RemovalResult", "RemovalState"]
