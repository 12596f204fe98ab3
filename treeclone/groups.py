"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .fingerprint import sha1
from .matcher import Match
from .windows import FileSequence, structural_key


@dataclass(frozen=True, slots=True)
class Instance:
    path: str
    start_line: int
    end_line: int
    code: str
    start_column: int = 0


@dataclass(frozen=True, slots=True)
class MatchGroup:
    id: str
    # Number of syntax nodes each instance spans.
    size: int
    instances: tuple[Instance, ...]


def extract_code(
    lines: Sequence[str], start_line: int, end_line: int, truncate_length: int = 0
) -> str:
    selected = list(lines[start_line - 1 : end_line])
    if truncate_length > 0:
        selected = [line[:truncate_length] for line in selected]
    return "\n".join(selected)


def _instance_sort_key(instance: Instance) -> tuple[str, int, int]:
    return instance.path, instance.start_line, instance.start_column


def assemble_groups(
    matches: Sequence[Match],
    sequences: Sequence[FileSequence],
    *,
    truncate_length: int = 0,
) -> list[MatchGroup]:
    """
    Turn matches into report groups ordered by their first instance.

    The id hashes the type-tag sequence of the match, so it survives file
    reordering and renames. Distinct groups of identical shape are told
    apart by an ordinal assigned in report order.
    """
    pending: list[tuple[str, int, tuple[Instance, ...]]] = []
    for match in matches:
        instances: list[Instance] = []
        for member in match.members:
            sequence = sequences[member.file_index]
            start_line, end_line = sequence.line_range(member.start, match.length)
            instances.append(
                Instance(
                    path=sequence.path,
                    start_line=start_line,
                    end_line=end_line,
                    code=extract_code(
                        sequence.lines, start_line, end_line, truncate_length
                    ),
                    start_column=sequence.nodes[member.start].start.column,
                )
            )
        instances.sort(key=_instance_sort_key)

        first = match.members[0]
        first_nodes = sequences[first.file_index].nodes[
            first.start : first.start + match.length
        ]
        pending.append(
            (structural_key(first_nodes), match.length, tuple(instances))
        )

    pending.sort(key=lambda item: _instance_sort_key(item[2][0]))

    seen: dict[str, int] = {}
    groups: list[MatchGroup] = []
    for key, size, instances in pending:
        digest = sha1(key)
        ordinal = seen.get(digest, 0)
        seen[digest] = ordinal + 1
        if ordinal:
            digest = sha1(f"{key}#{ordinal}")
        groups.append(MatchGroup(id=digest, size=size, instances=instances))
    return groups
