"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

import tree_sitter

from ..errors import ParseError
from ..grammar import Grammar
from ..nodes import Node, Position, Span
from .base import Language

JAVASCRIPT_GRAMMAR = Grammar(
    name="javascript",
    import_types=frozenset({"import_statement"}),
    class_types=frozenset({"class_declaration", "class_body"}),
    expression_statement="expression_statement",
    expression_slot="children",
    call_type="call_expression",
    callee_slot="function",
    member_type="member_expression",
    property_slot="property",
    declaration_types=frozenset({"variable_declaration", "lexical_declaration"}),
    declarators_slot="children",
    declarator_type="variable_declarator",
    initializer_slot="value",
    loader_names=frozenset({"define", "require"}),
    require_name="require",
    # Markup is matched tag by tag, so an element's content must come
    # between its opening and closing tags.
    child_order={
        "jsx_element": ("open_tag", "children", "close_tag"),
        "jsx_opening_element": ("name", "attribute"),
        "jsx_self_closing_element": ("name", "attribute"),
    },
    text_types=frozenset({"jsx_text"}),
    # tree-sitter advances its row on "\n" only.
    line_breaks=r"\r?\n",
)

# Node types whose tree-sitter fields become named slots. All other types
# keep their named children, in source order, in a single "children" slot.
_FIELD_SLOTS: dict[str, tuple[str, ...]] = {
    "call_expression": ("function", "arguments"),
    "member_expression": ("object", "property"),
    "variable_declarator": ("name", "value"),
    "jsx_element": ("open_tag", "children", "close_tag"),
    "jsx_opening_element": ("name", "attribute"),
    "jsx_self_closing_element": ("name", "attribute"),
}
_LIST_SLOTS = frozenset({"children", "attribute"})

_IDENTIFIER_TYPES = frozenset(
    {
        "identifier",
        "property_identifier",
        "shorthand_property_identifier",
        "shorthand_property_identifier_pattern",
        "private_property_identifier",
        "statement_identifier",
    }
)
_LITERAL_TYPES = frozenset(
    {
        "string",
        "number",
        "template_string",
        "regex",
        "true",
        "false",
        "null",
        "undefined",
        "jsx_text",
    }
)


@lru_cache(maxsize=1)
def _get_parser() -> tree_sitter.Parser:
    import tree_sitter_javascript

    return tree_sitter.Parser(tree_sitter.Language(tree_sitter_javascript.language()))


def _text(ts_node: Any) -> str:
    raw = ts_node.text
    return raw.decode("utf-8", errors="replace") if raw is not None else ""


def _make_node(ts_node: Any) -> Node:
    name = _text(ts_node) if ts_node.type in _IDENTIFIER_TYPES else None
    value = _text(ts_node) if ts_node.type in _LITERAL_TYPES else None
    return Node(
        type=ts_node.type,
        span=Span(
            Position(ts_node.start_point[0] + 1, ts_node.start_point[1]),
            Position(ts_node.end_point[0] + 1, ts_node.end_point[1]),
        ),
        name=name,
        value=value,
    )


def _is_structural(ts_node: Any) -> bool:
    return bool(ts_node.is_named) and not ts_node.is_extra


def _slot_children(ts_node: Any, slot: str | None) -> list[Any]:
    if slot is None:
        return [c for c in ts_node.children if _is_structural(c)]
    if slot == "children":
        # Content between the tags of an element carries no field name.
        return [
            child
            for i, child in enumerate(ts_node.children)
            if _is_structural(child) and ts_node.field_name_for_child(i) is None
        ]
    return [c for c in ts_node.children_by_field_name(slot) if _is_structural(c)]


def _first_error(root: Any) -> Any | None:
    stack = [root]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current
        if current.has_error:
            stack.extend(reversed(current.children))
    return None


def cst_to_node(ts_root: Any) -> Node:
    """Convert a tree-sitter JavaScript tree into ``Node`` form."""
    root = _make_node(ts_root)
    stack: list[tuple[Any, Node]] = [(ts_root, root)]
    while stack:
        source, target = stack.pop()
        if source.type in _LITERAL_TYPES or source.type in _IDENTIFIER_TYPES:
            continue
        slots = _FIELD_SLOTS.get(source.type)
        if slots is None:
            raw = _slot_children(source, None)
            children = [_make_node(child) for child in raw]
            stack.extend(zip(raw, children))
            target.fields["children"] = children
            continue
        for slot in slots:
            raw = _slot_children(source, slot)
            children = [_make_node(child) for child in raw]
            stack.extend(zip(raw, children))
            if slot in _LIST_SLOTS:
                target.fields[slot] = list(children)
            else:
                target.fields[slot] = children[0] if children else None
    return root


def parse_javascript(source: str, filepath: str) -> Node:
    tree = _get_parser().parse(source.encode("utf-8"))
    error = _first_error(tree.root_node)
    if error is not None:
        raise ParseError(
            f"Failed to parse {filepath}: syntax error at line "
            f"{error.start_point[0] + 1}, column {error.start_point[1]}"
        )
    return cst_to_node(tree.root_node)


JAVASCRIPT = Language(
    name="javascript",
    extensions=frozenset({".js", ".jsx", ".mjs", ".cjs"}),
    grammar=JAVASCRIPT_GRAMMAR,
    parse=parse_javascript,
)
