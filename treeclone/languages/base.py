"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..grammar import Grammar
from ..nodes import Node, Position, Span

ROOT_SPAN = Span(Position(1, 0), Position(1, 0))


@dataclass(frozen=True, slots=True)
class Language:
    """A parser adapter: source text in, root ``Node`` out."""

    name: str
    extensions: frozenset[str]
    grammar: Grammar
    # (source, filepath) -> root node; raises ParseError.
    parse: Callable[[str, str], Node]
