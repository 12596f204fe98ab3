"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from .config import DetectionConfig
from .errors import ParseError
from .groups import MatchGroup, assemble_groups
from .languages import language_for_path
from .matcher import Matcher
from .navigator import TreeNavigator
from .windows import FileSequence, linearize

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB

ProgressCallback = Callable[[str], None]


@dataclass(frozen=True, slots=True)
class FileFailure:
    filepath: str
    error: str
    error_kind: str


@dataclass(slots=True)
class ProcessingResult:
    """Result of processing a single file."""

    filepath: str
    success: bool
    error: str | None = None
    sequence: FileSequence | None = None
    error_kind: str | None = None


@dataclass(frozen=True, slots=True)
class DetectionResult:
    groups: list[MatchGroup]
    files_analyzed: int
    failures: tuple[FileFailure, ...] = ()


def _failed(filepath: str, error: str, error_kind: str) -> ProcessingResult:
    return ProcessingResult(
        filepath=filepath, success=False, error=error, error_kind=error_kind
    )


def process_file(
    filepath: str, navigators: dict[str, TreeNavigator]
) -> ProcessingResult:
    """
    Read, parse and linearize one file.

    Recoverable problems (unreadable, oversized or unparsable files) come
    back as a failed result. A tree the navigator cannot walk is a bug in a
    language adapter and propagates as ``TraversalError``.
    """
    language = language_for_path(filepath)
    if language is None:
        return _failed(
            filepath,
            f"No parser for extension '{Path(filepath).suffix}'",
            "unsupported_language",
        )

    try:
        st_size = os.path.getsize(filepath)
    except OSError as e:
        return _failed(filepath, f"Cannot stat file: {e}", "stat_error")
    if st_size > MAX_FILE_SIZE:
        return _failed(
            filepath,
            f"File too large: {st_size} bytes (max {MAX_FILE_SIZE})",
            "file_too_large",
        )

    try:
        source = Path(filepath).read_text("utf-8")
    except UnicodeDecodeError as e:
        return _failed(filepath, f"Encoding error: {e}", "source_read_error")
    except OSError as e:
        return _failed(filepath, f"Cannot read file: {e}", "source_read_error")

    try:
        root = language.parse(source, filepath)
    except ParseError as e:
        return _failed(filepath, str(e), "parse_error")

    navigator = navigators.get(language.name)
    if navigator is None:
        navigator = navigators[language.name] = TreeNavigator(language.grammar)
    return ProcessingResult(
        filepath=filepath,
        success=True,
        sequence=linearize(filepath, source, root, navigator),
    )


def find_groups(
    sequences: Sequence[FileSequence], config: DetectionConfig
) -> list[MatchGroup]:
    matches = Matcher(sequences, config).find_matches()
    return assemble_groups(
        matches, sequences, truncate_length=config.truncate_length
    )


def detect_clones(
    paths: Sequence[str],
    config: DetectionConfig,
    *,
    on_progress: ProgressCallback | None = None,
) -> DetectionResult:
    """
    Run clone detection over ``paths``.

    Files matching the ignore pattern are never read. ``on_progress`` is
    called with each path once it has been processed.
    """
    navigators: dict[str, TreeNavigator] = {}
    sequences: list[FileSequence] = []
    failures: list[FileFailure] = []
    for filepath in paths:
        if config.is_ignored(filepath):
            continue
        result = process_file(filepath, navigators)
        if result.success and result.sequence is not None:
            sequences.append(result.sequence)
        else:
            failures.append(
                FileFailure(
                    filepath=filepath,
                    error=result.error or "unknown error",
                    error_kind=result.error_kind or "unexpected_error",
                )
            )
        if on_progress is not None:
            on_progress(filepath)

    return DetectionResult(
        groups=find_groups(sequences, config),
        files_analyzed=len(sequences),
        failures=tuple(failures),
    )
