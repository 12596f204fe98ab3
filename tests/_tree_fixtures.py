from __future__ import annotations

from pathlib import Path

from treeclone.grammar import Grammar
from treeclone.nodes import Child, Node, Position, Span

# ESTree-shaped grammar used by hand-built trees.
ESTREE_GRAMMAR = Grammar(
    name="estree",
    import_types=frozenset({"ImportDeclaration"}),
    class_types=frozenset({"ClassDeclaration", "ClassBody"}),
    expression_statement="ExpressionStatement",
    expression_slot="expression",
    call_type="CallExpression",
    callee_slot="callee",
    member_type="MemberExpression",
    property_slot="property",
    declaration_types=frozenset({"VariableDeclaration"}),
    declarators_slot="declarations",
    declarator_type="VariableDeclarator",
    initializer_slot="init",
    loader_names=frozenset({"define", "require"}),
    require_name="require",
    child_order={"JSXElement": ("openingElement", "children", "closingElement")},
    text_types=frozenset({"JSXText"}),
)


def node(
    type_: str,
    line: int = 1,
    column: int = 0,
    *,
    end_line: int | None = None,
    name: str | None = None,
    value: str | None = None,
    **fields: Child,
) -> Node:
    return Node(
        type=type_,
        span=Span(Position(line, column), Position(end_line or line, column + 1)),
        fields=dict(fields),
        name=name,
        value=value,
    )


def ident(name: str, line: int = 1, column: int = 0) -> Node:
    return node("Identifier", line, column, name=name)


def literal(value: str, line: int = 1, column: int = 0) -> Node:
    return node("Literal", line, column, value=value)


def call(callee: Node, *args: Node, line: int = 1) -> Node:
    return node("CallExpression", line, callee=callee, arguments=list(args))


def member(obj: Node, prop: Node, line: int = 1) -> Node:
    return node("MemberExpression", line, object=obj, property=prop)


def expression_statement(expression: Node, line: int = 1) -> Node:
    return node("ExpressionStatement", line, expression=expression)


def write_sources(root: Path, files: dict[str, str]) -> list[str]:
    paths: list[str] = []
    for name, source in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, "utf-8")
        paths.append(str(path))
    return sorted(paths)


# One function per file; the bodies are identical apart from the function
# name, its parameter and the last returned name.
BUILD_A = """\
def build_a(name):
    options = {"retries": 3, "timeout": 10, "verbose": False}
    return options, name
"""

BUILD_B = """\
def build_b(label):
    options = {"retries": 3, "timeout": 10, "verbose": False}
    return options, label
"""

TOTAL_JS = """\
function total(items) {
  let sum = 0;
  for (const item of items) {
    sum += item.price * item.qty;
  }
  return sum;
}
"""
