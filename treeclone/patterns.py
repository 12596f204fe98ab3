"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from collections.abc import Sequence

from .grammar import Grammar
from .nodes import Node

ASYNC_MODULE_LOOKBEHIND = 5


def _slot_node(node: Node, slot: str | None) -> Node | None:
    if slot is None:
        return node
    value = node.fields.get(slot)
    if isinstance(value, Node):
        return value
    if isinstance(value, list):
        return next((item for item in value if isinstance(item, Node)), None)
    return None


def _slot_nodes(node: Node, slot: str | None) -> list[Node]:
    if slot is None:
        return [node]
    value = node.fields.get(slot)
    if isinstance(value, Node):
        return [value]
    if isinstance(value, list):
        return [item for item in value if isinstance(item, Node)]
    return []


def _statement_call(node: Node, grammar: Grammar) -> Node | None:
    if node.type != grammar.expression_statement:
        return None
    expression = _slot_node(node, grammar.expression_slot)
    if expression is None or expression.type != grammar.call_type:
        return None
    return expression


def _callee_name(call: Node, grammar: Grammar) -> str | None:
    callee = _slot_node(call, grammar.callee_slot)
    if callee is None:
        return None
    if callee.type == grammar.member_type:
        prop = _slot_node(callee, grammar.property_slot)
        return prop.name if prop is not None else None
    return callee.name


def is_module_import(nodes: Sequence[Node], grammar: Grammar) -> bool:
    return bool(nodes) and nodes[0].type in grammar.import_types


def is_class_boilerplate(nodes: Sequence[Node], grammar: Grammar) -> bool:
    return bool(nodes) and nodes[-1].type in grammar.class_types


def is_async_module(nodes: Sequence[Node], grammar: Grammar) -> bool:
    """Whether one of the trailing nodes is a define/require style loader call."""
    for node in reversed(nodes[-ASYNC_MODULE_LOOKBEHIND:]):
        call = _statement_call(node, grammar)
        if call is None:
            continue
        if _callee_name(call, grammar) in grammar.loader_names:
            return True
    return False


def is_common_module(nodes: Sequence[Node], grammar: Grammar) -> bool:
    if not nodes:
        return False
    first = nodes[0]

    call = _statement_call(first, grammar)
    if call is not None:
        callee = _slot_node(call, grammar.callee_slot)
        return callee is not None and callee.name == grammar.require_name

    if first.type not in grammar.declaration_types:
        return False
    for declarator in _slot_nodes(first, grammar.declarators_slot):
        if (
            grammar.declarator_type is not None
            and declarator.type != grammar.declarator_type
        ):
            continue
        init = _slot_node(declarator, grammar.initializer_slot)
        if init is None or init.type != grammar.call_type:
            continue
        callee = _slot_node(init, grammar.callee_slot)
        if callee is not None and callee.name == grammar.require_name:
            return True
    return False


def is_boilerplate(
    start: Node, ancestors: Sequence[Node], grammar: Grammar
) -> bool:
    """
    Whether a window starting at ``start`` is module or class scaffolding.

    Import, require and loader checks look at the chain down to and
    including the start node; the class check looks at the enclosing
    construct only.
    """
    context = [*ancestors, start]
    return (
        is_module_import(context, grammar)
        or is_common_module(context, grammar)
        or is_async_module(context, grammar)
        or is_class_boilerplate(ancestors, grammar)
    )
