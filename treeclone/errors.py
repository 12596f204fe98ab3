"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""


class TreeCloneError(Exception):
    """Base exception for TreeClone."""


class FileProcessingError(TreeCloneError):
    """Error processing a source file."""


class ParseError(FileProcessingError):
    """Syntax tree construction failed."""


class ValidationError(TreeCloneError):
    """Input validation failed."""


class TraversalError(TreeCloneError):
    """A node does not have the shape its construct type promises."""

    __slots__ = ("node_type", "slot")

    def __init__(self, message: str, *, node_type: str, slot: str) -> None:
        super().__init__(message)
        self.node_type = node_type
        self.slot = slot
