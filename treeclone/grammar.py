"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Grammar:
    """
    Type tags a parser adapter uses for the constructs the engine needs
    to recognise.

    ``child_order`` forces the slot order of specific construct types;
    every other type gets its order from the first node of that type.

    Slots named by ``expression_slot`` and ``declarators_slot`` may hold a
    single node or a list (the first element is used). A ``None``
    ``property_slot`` means the member access node carries the property
    name itself; a ``None`` ``declarators_slot`` means a declaration is its
    own declarator.
    """

    name: str
    import_types: frozenset[str]
    class_types: frozenset[str]
    expression_statement: str
    expression_slot: str
    call_type: str
    callee_slot: str
    member_type: str
    property_slot: str | None
    declaration_types: frozenset[str]
    declarators_slot: str | None
    declarator_type: str | None
    initializer_slot: str
    loader_names: frozenset[str]
    require_name: str
    child_order: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    text_types: frozenset[str] = frozenset()
    # Line terminators as the parser counts them when numbering lines.
    line_breaks: str = r"\r\n|\r|\n"
