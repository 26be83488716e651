# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TagTree exceptions."""

from __future__ import annotations


class TagTreeError(Exception):
    """Base exception for TagTree errors."""

    pass


class InvariantError(TagTreeError):
    """Raised in strict mode when a mutation leaves the tree inconsistent.

    Attributes:
        errors: Mapping of node path to the list of violated invariants.
    """

    def __init__(self, errors: dict[str, list[str]]) -> None:
        self.errors = errors
        details = '; '.join(
            f"{path or '<root>'}: {', '.join(reasons)}"
            for path, reasons in errors.items()
        )
        super().__init__(f"Tree invariants violated: {details}")
