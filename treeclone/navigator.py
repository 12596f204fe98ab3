"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Sequence

from .errors import TraversalError
from .grammar import Grammar
from .nodes import Node

Visitor = Callable[[Node, "Node | None", tuple[Node, ...]], None]


class TreeNavigator:
    """
    Deterministic traversal over ``Node`` trees of one grammar.

    The slot order of each construct type is resolved once per navigator:
    overrides from the grammar are copied in at construction, every other
    type is derived from the first node of that type seen.
    """

    __slots__ = ("_child_keys", "grammar")

    def __init__(self, grammar: Grammar) -> None:
        self.grammar = grammar
        self._child_keys: dict[str, tuple[str, ...]] = dict(grammar.child_order)

    def child_keys(self, node: Node) -> tuple[str, ...]:
        keys = self._child_keys.get(node.type)
        if keys is None:
            keys = tuple(
                key
                for key, value in node.fields.items()
                if key != "loc" and (value is None or isinstance(value, (Node, list)))
            )
            self._child_keys[node.type] = keys
        return keys

    def children(self, node: Node) -> list[Node]:
        res: list[Node] = []
        for key in self.child_keys(node):
            if key not in node.fields:
                raise TraversalError(
                    f"{node.type} node at line {node.start.line} has no '{key}' slot",
                    node_type=node.type,
                    slot=key,
                )
            value = node.fields[key]
            if value is None:
                continue
            if isinstance(value, Node):
                if not self._ignored(value):
                    res.append(value)
                continue
            if not isinstance(value, list):
                raise TraversalError(
                    f"{node.type}.{key} holds {type(value).__name__}, not a node",
                    node_type=node.type,
                    slot=key,
                )
            for item in value:
                if item is None:
                    continue
                if not isinstance(item, Node):
                    raise TraversalError(
                        f"{node.type}.{key} contains {type(item).__name__}, "
                        "not a node",
                        node_type=node.type,
                        slot=key,
                    )
                if not self._ignored(item):
                    res.append(item)
        return res

    def _ignored(self, node: Node) -> bool:
        # Parsers emit text fragments for the whitespace between markup tags.
        return node.type in self.grammar.text_types and not (node.value or "").strip()

    def walk(self, root: Node, visit: Visitor) -> None:
        """
        Depth-first pre-order walk over the descendants of ``root``.

        ``visit`` receives the node, its parent (``None`` for the root's
        direct children) and the chain of ancestors below ``root``, nearest
        ancestor last.
        """
        stack: list[tuple[Node, Node | None, tuple[Node, ...]]] = [
            (child, None, ()) for child in reversed(self.children(root))
        ]
        while stack:
            node, parent, ancestors = stack.pop()
            visit(node, parent, ancestors)
            chain = (*ancestors, node)
            stack.extend(
                (child, node, chain) for child in reversed(self.children(node))
            )

    def dfs_sequence(self, node: Node, limit: int | None = None) -> list[Node]:
        res: list[Node] = []
        stack = [node]
        while stack:
            if limit is not None and len(res) >= limit:
                break
            current = stack.pop()
            res.append(current)
            stack.extend(reversed(self.children(current)))
        return res

    def bfs_sequence(self, node: Node, limit: int | None = None) -> list[Node]:
        res = [node]
        queue = deque([node])
        while queue:
            if limit is not None and len(res) >= limit:
                break
            current = queue.popleft()
            children = self.children(current)
            res.extend(children)
            queue.extend(children)
        return res if limit is None else res[:limit]


def precedes(a: Node, b: Node) -> bool:
    return (a.start.line, a.start.column) < (b.start.line, b.start.column)


def types_equal(nodes: Sequence[Node]) -> bool:
    first = nodes[0].type
    return all(node.type == first for node in nodes)


def identifiers_equal(nodes: Sequence[Node]) -> bool:
    first = nodes[0].name
    return all(node.name == first for node in nodes)


def literals_equal(nodes: Sequence[Node]) -> bool:
    first = nodes[0].value
    return all(node.value is None or node.value == first for node in nodes)
