"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True, slots=True, order=True)
class Position:
    line: int
    column: int


@dataclass(frozen=True, slots=True)
class Span:
    start: Position
    end: Position


# A child slot holds one node, a list of nodes, or nothing.
Child = Union["Node", list["Node | None"], None]


@dataclass(frozen=True, slots=True, eq=False)
class Node:
    """
    Language-neutral syntax tree node.

    ``fields`` maps semantic child-slot names to children and never holds
    scalars: identifier-bearing nodes carry ``name``, literal and text nodes
    carry ``value`` as their source spelling.
    """

    type: str
    span: Span
    fields: dict[str, Child] = field(default_factory=dict)
    name: str | None = None
    value: str | None = None

    @property
    def start(self) -> Position:
        return self.span.start

    @property
    def end(self) -> Position:
        return self.span.end

    def __repr__(self) -> str:
        label = self.name if self.name is not None else self.value
        suffix = f" {label!r}" if label is not None else ""
        return f"<Node {self.type}{suffix} @{self.start.line}:{self.start.column}>"
