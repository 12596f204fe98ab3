"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from .grammar import Grammar
from .navigator import TreeNavigator
from .nodes import Node


@dataclass(frozen=True, slots=True)
class FileSequence:
    """Depth-first node sequence of one file, root container excluded."""

    path: str
    grammar: Grammar
    nodes: tuple[Node, ...]
    # Index of each node's parent in ``nodes``; -1 for top-level nodes.
    parents: tuple[int, ...]
    # Index one past the last descendant of each node.
    ends: tuple[int, ...]
    lines: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.nodes)

    def ancestors(self, index: int) -> list[Node]:
        chain: list[Node] = []
        parent = self.parents[index]
        while parent >= 0:
            chain.append(self.nodes[parent])
            parent = self.parents[parent]
        chain.reverse()
        return chain

    def line_range(self, start: int, length: int) -> tuple[int, int]:
        """
        Source lines spanned by ``nodes[start:start + length]``.

        A node whose subtree reaches past the run adds only its start line,
        so a run that begins at a compound statement stops where the matched
        nodes stop.
        """
        stop = start + length
        first = last = self.nodes[start].start.line
        for index in range(start, stop):
            node = self.nodes[index]
            first = min(first, node.start.line)
            if self.ends[index] <= stop:
                last = max(last, node.end.line)
            else:
                last = max(last, node.start.line)
        return first, last


@dataclass(frozen=True, slots=True)
class Window:
    file_index: int
    start: int
    key: str


def linearize(
    path: str, source: str, root: Node, navigator: TreeNavigator
) -> FileSequence:
    nodes: list[Node] = []
    parents: list[int] = []
    index_of: dict[int, int] = {}

    def _visit(node: Node, parent: Node | None, _ancestors: tuple[Node, ...]) -> None:
        index_of[id(node)] = len(nodes)
        nodes.append(node)
        parents.append(-1 if parent is None else index_of[id(parent)])

    navigator.walk(root, _visit)

    # Children follow their parent in pre-order, so one backward pass settles
    # every subtree before it is folded into its parent.
    ends = [index + 1 for index in range(len(nodes))]
    for index in range(len(nodes) - 1, -1, -1):
        parent = parents[index]
        if parent >= 0 and ends[index] > ends[parent]:
            ends[parent] = ends[index]

    return FileSequence(
        path=path,
        grammar=navigator.grammar,
        nodes=tuple(nodes),
        parents=tuple(parents),
        ends=tuple(ends),
        lines=tuple(re.split(navigator.grammar.line_breaks, source)),
    )


def structural_key(nodes: Sequence[Node]) -> str:
    return "|".join(node.type for node in nodes)


def iter_windows(
    sequence: FileSequence, file_index: int, threshold: int
) -> Iterator[Window]:
    types = [node.type for node in sequence.nodes]
    for i in range(len(types) - threshold + 1):
        yield Window(
            file_index=file_index,
            start=i,
            key="|".join(types[i : i + threshold]),
        )
