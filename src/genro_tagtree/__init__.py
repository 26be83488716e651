# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-TagTree - Tagged interval trees for rich-text formatting.

A lightweight, zero-dependency library keeping labeled formatting spans
(bold, italic, underline...) over a text buffer, with add, remove and
query operations and rendering to marked-up text.
"""

__version__ = "0.1.0"

from .exceptions import InvariantError, TagTreeError
from .interval import Interval
from .markup import Marker, format_text
from .node import IntervalNode
from .tree import RemovalResult, RemovalState, TaggedIntervalTree

__all__ = [
    # Core classes
    "TaggedIntervalTree",
    "IntervalNode",
    "Interval",
    # Removal
    "RemovalResult",
    "RemovalState",
    # Rendering
    "Marker",
    "format_text",
    # Exceptions
    "TagTreeError",
    "InvariantError",
]
