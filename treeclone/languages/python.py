"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import ast

from ..errors import ParseError
from ..grammar import Grammar
from ..nodes import Node, Position, Span
from .base import ROOT_SPAN, Language

PYTHON_GRAMMAR = Grammar(
    name="python",
    import_types=frozenset({"Import", "ImportFrom"}),
    class_types=frozenset({"ClassDef"}),
    expression_statement="Expr",
    expression_slot="value",
    call_type="Call",
    callee_slot="func",
    member_type="Attribute",
    property_slot=None,
    declaration_types=frozenset({"Assign", "AnnAssign"}),
    declarators_slot=None,
    declarator_type=None,
    initializer_slot="value",
    loader_names=frozenset({"import_module", "__import__"}),
    require_name="__import__",
    # ast field order puts decorators and annotations after the code they
    # precede in the source.
    child_order={
        "FunctionDef": ("decorator_list", "args", "type_params", "returns", "body"),
        "AsyncFunctionDef": (
            "decorator_list",
            "args",
            "type_params",
            "returns",
            "body",
        ),
        "ClassDef": ("decorator_list", "bases", "keywords", "type_params", "body"),
        "IfExp": ("body", "test", "orelse"),
    },
)

# Expression context carries no structure of its own.
_SKIPPED_FIELDS = frozenset({"ctx"})

# Scalar fields that may be None; every other None field is an empty child slot.
_OPTIONAL_SCALAR_FIELDS = frozenset(
    {"type_comment", "asname", "module", "arg", "name", "rest", "kind", "level"}
)

_NAME_ATTRS: dict[str, str] = {
    "Name": "id",
    "arg": "arg",
    "Attribute": "attr",
    "FunctionDef": "name",
    "AsyncFunctionDef": "name",
    "ClassDef": "name",
    "alias": "name",
    "keyword": "arg",
    "ExceptHandler": "name",
    "ImportFrom": "module",
    "MatchAs": "name",
    "MatchStar": "name",
    "TypeVar": "name",
    "ParamSpec": "name",
    "TypeVarTuple": "name",
}

_LITERAL_TYPES = frozenset({"Constant", "MatchSingleton"})


def _span(node: ast.AST, fallback: Span) -> Span:
    lineno = getattr(node, "lineno", None)
    if lineno is None:
        return Span(fallback.start, fallback.start)
    col = getattr(node, "col_offset", 0) or 0
    end_lineno = getattr(node, "end_lineno", None) or lineno
    end_col = getattr(node, "end_col_offset", None)
    return Span(
        Position(lineno, col),
        Position(end_lineno, col if end_col is None else end_col),
    )


def _make_node(node: ast.AST, parent_span: Span) -> Node:
    type_name = type(node).__name__
    name: str | None = None
    value: str | None = None
    if type_name in _LITERAL_TYPES:
        value = repr(getattr(node, "value", None))
    else:
        attr = _NAME_ATTRS.get(type_name)
        raw = getattr(node, attr, None) if attr else None
        name = raw if isinstance(raw, str) else None
    return Node(
        type=type_name,
        span=_span(node, parent_span),
        name=name,
        value=value,
    )


def ast_to_node(tree: ast.AST) -> Node:
    """
    Convert a stdlib ``ast`` tree into ``Node`` form.

    Nodes without position info (operators, ``arguments``, ``comprehension``)
    get an empty span at the start of their parent. Literal nodes become
    leaves.
    """
    root = _make_node(tree, ROOT_SPAN)
    stack: list[tuple[ast.AST, Node]] = [(tree, root)]
    while stack:
        source, target = stack.pop()
        if target.type in _LITERAL_TYPES:
            continue
        for field_name in source._fields:
            if field_name in _SKIPPED_FIELDS:
                continue
            raw = getattr(source, field_name, None)
            if isinstance(raw, ast.AST):
                child = _make_node(raw, target.span)
                target.fields[field_name] = child
                stack.append((raw, child))
            elif isinstance(raw, list):
                items: list[Node | None] = []
                for item in raw:
                    if isinstance(item, ast.AST):
                        child = _make_node(item, target.span)
                        items.append(child)
                        stack.append((item, child))
                    elif item is None:
                        # Dict keys for ``**mapping`` entries.
                        items.append(None)
                target.fields[field_name] = items
            elif raw is None and field_name not in _OPTIONAL_SCALAR_FIELDS:
                target.fields[field_name] = None
        # Older interpreters lack some slots the order table names.
        for key in PYTHON_GRAMMAR.child_order.get(target.type, ()):
            target.fields.setdefault(key, None)
    return root


def parse_python(source: str, filepath: str) -> Node:
    try:
        tree = ast.parse(source, filename=filepath)
    except (SyntaxError, ValueError, RecursionError) as e:
        raise ParseError(f"Failed to parse {filepath}: {e}") from e
    return ast_to_node(tree)


PYTHON = Language(
    name="python",
    extensions=frozenset({".py"}),
    grammar=PYTHON_GRAMMAR,
    parse=parse_python,
)
