"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import heapq
from collections.abc import Sequence
from dataclasses import dataclass

from .config import DetectionConfig
from .navigator import identifiers_equal, literals_equal, precedes, types_equal
from .nodes import Node
from .patterns import is_boilerplate
from .windows import FileSequence, iter_windows

Members = tuple["Member", ...]


@dataclass(frozen=True, slots=True, order=True)
class Member:
    file_index: int
    start: int


@dataclass(frozen=True, slots=True)
class Match:
    members: Members
    length: int


PreferenceKey = tuple[int, int, int, int, str, Members]
_QueueItem = tuple[PreferenceKey, Members, Match]


class Matcher:
    """
    Cross-file window matching.

    Windows are bucketed by their type-tag key, split into exact
    equivalence classes, stripped of boilerplate and self-overlapping
    members, extended past the threshold and finally reduced to a set of
    groups that never overlap within a file.
    """

    __slots__ = ("config", "sequences")

    def __init__(
        self, sequences: Sequence[FileSequence], config: DetectionConfig
    ) -> None:
        self.sequences = sequences
        self.config = config

    def find_matches(self) -> list[Match]:
        min_instances = self.config.min_instances
        verified: list[Members] = []
        for members in self._bucket().values():
            if len(members) < min_instances:
                continue
            for group in self._verify(members):
                reduced = self._drop_self_overlaps(self._drop_boilerplate(group))
                if len(reduced) >= min_instances:
                    verified.append(reduced)

        # A group whose members all sit one node after another group's is
        # that group's continuation. Only chain heads are queued up front;
        # a continuation is built once its predecessor has been rejected.
        known = set(verified)
        queue: list[_QueueItem] = []
        for group in verified:
            if _shifted(group, -1) not in known:
                self._enqueue(queue, group, known)
        return self._resolve_overlaps(queue, known)

    def _bucket(self) -> dict[str, list[Member]]:
        buckets: dict[str, list[Member]] = {}
        for file_index, sequence in enumerate(self.sequences):
            if self.config.is_ignored(sequence.path):
                continue
            for window in iter_windows(sequence, file_index, self.config.threshold):
                buckets.setdefault(window.key, []).append(
                    Member(file_index=file_index, start=window.start)
                )
        return buckets

    def _verify(self, members: list[Member]) -> list[Members]:
        """Split a bucket into classes that agree on every enabled check."""
        match_identifiers = self.config.match_identifiers
        match_literals = self.config.match_literals
        if not (match_identifiers or match_literals):
            return [tuple(members)]

        threshold = self.config.threshold
        classes: dict[tuple[tuple[str | None, str | None], ...], list[Member]] = {}
        for member in members:
            nodes = self.sequences[member.file_index].nodes
            signature = tuple(
                (
                    node.name if match_identifiers else None,
                    node.value if match_literals else None,
                )
                for node in nodes[member.start : member.start + threshold]
            )
            classes.setdefault(signature, []).append(member)

        return [
            tuple(group)
            for group in classes.values()
            if len(group) >= self.config.min_instances
        ]

    def _drop_boilerplate(self, members: Members) -> Members:
        kept: list[Member] = []
        for member in members:
            sequence = self.sequences[member.file_index]
            start = sequence.nodes[member.start]
            ancestors = sequence.ancestors(member.start)
            if not is_boilerplate(start, ancestors, sequence.grammar):
                kept.append(member)
        return tuple(kept)

    def _drop_self_overlaps(self, members: Members) -> Members:
        threshold = self.config.threshold
        kept: list[Member] = []
        for member in sorted(members):
            if (
                kept
                and kept[-1].file_index == member.file_index
                and member.start < kept[-1].start + threshold
            ):
                continue
            kept.append(member)
        return tuple(kept)

    def _position_matches(self, nodes: Sequence[Node]) -> bool:
        if not types_equal(nodes):
            return False
        if self.config.match_identifiers and not identifiers_equal(nodes):
            return False
        return not (self.config.match_literals and not literals_equal(nodes))

    def _extend(self, members: Members) -> int:
        """
        Grow all members in lockstep and return the common match length.

        Same-file members must stay disjoint, so the distance between two
        neighbours caps the length.
        """
        limit: int | None = None
        for prev, member in zip(members, members[1:]):
            if prev.file_index == member.file_index:
                gap = member.start - prev.start
                limit = gap if limit is None else min(limit, gap)

        sequences = [self.sequences[m.file_index] for m in members]
        length = self.config.threshold
        while limit is None or length < limit:
            nodes: list[Node] = []
            for member, sequence in zip(members, sequences):
                index = member.start + length
                if index >= len(sequence):
                    return length
                nodes.append(sequence.nodes[index])
            if not self._position_matches(nodes):
                break
            length += 1
        return length

    def _earliest(self, match: Match) -> tuple[Member, Node]:
        best_member = match.members[0]
        best = self.sequences[best_member.file_index].nodes[best_member.start]
        for member in match.members[1:]:
            node = self.sequences[member.file_index].nodes[member.start]
            if precedes(node, best):
                best_member, best = member, node
        return best_member, best

    def _preference_key(self, match: Match) -> PreferenceKey:
        member, node = self._earliest(match)
        return (
            -len(match.members),
            -match.length,
            node.start.line,
            node.start.column,
            self.sequences[member.file_index].path,
            match.members,
        )

    def _line_range(self, member: Member, length: int) -> tuple[int, int]:
        return self.sequences[member.file_index].line_range(member.start, length)

    def _build_match(self, group: Members) -> Match | None:
        """
        Extend ``group`` and drop members whose source lines run into an
        earlier member of the same file.
        """
        length = self._extend(group)
        kept: list[Member] = []
        last_line: dict[int, int] = {}
        for member in group:
            first, last = self._line_range(member, length)
            if first <= last_line.get(member.file_index, 0):
                continue
            last_line[member.file_index] = last
            kept.append(member)
        if len(kept) < self.config.min_instances:
            return None
        return Match(members=tuple(kept), length=length)

    def _enqueue(
        self, queue: list[_QueueItem], group: Members, known: set[Members]
    ) -> None:
        while group in known:
            match = self._build_match(group)
            if match is not None:
                heapq.heappush(queue, (self._preference_key(match), group, match))
                return
            group = _shifted(group, 1)

    def _resolve_overlaps(
        self, queue: list[_QueueItem], known: set[Members]
    ) -> list[Match]:
        """
        Accept matches best first; a match touching claimed lines is dropped.

        A rejected match hands over to its continuation. Continuations that
        start inside an accepted match are skipped and the chain resumes
        right after it.
        """
        claimed: dict[int, set[int]] = {}
        accepted: list[Match] = []
        while queue:
            _, group, match = heapq.heappop(queue)
            spans = [
                (m.file_index, self._line_range(m, match.length))
                for m in match.members
            ]
            if any(
                not claimed.get(file_index, set()).isdisjoint(range(first, last + 1))
                for file_index, (first, last) in spans
            ):
                self._enqueue(queue, _shifted(group, 1), known)
                continue
            for file_index, (first, last) in spans:
                claimed.setdefault(file_index, set()).update(range(first, last + 1))
            accepted.append(match)

            resume = _shifted(group, match.length)
            if _shifted(resume, -1) in known:
                self._enqueue(queue, resume, known)
        return accepted


def _shifted(group: Members, offset: int) -> Members:
    return tuple(Member(m.file_index, m.start + offset) for m in group)
