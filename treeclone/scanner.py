"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import tempfile
from collections.abc import Iterable, Sequence
from pathlib import Path

from .errors import ValidationError
from .languages import supported_extensions

DEFAULT_EXCLUDES = (
    ".git",
    ".venv",
    "venv",
    "__pycache__",
    "site-packages",
    "node_modules",
    "bower_components",
    "dist",
    "build",
    ".tox",
)

DEFAULT_MAX_FILES = 100_000

SENSITIVE_DIRS = {
    "/etc",
    "/sys",
    "/proc",
    "/dev",
    "/root",
    "/boot",
    "/var",
    "/private/var",
    "/usr/bin",
    "/usr/sbin",
    "/private/etc",
}


def _get_tempdir() -> Path:
    return Path(tempfile.gettempdir()).resolve()


def _check_sensitive(rootp: Path, root: str) -> None:
    try:
        rootp.relative_to(_get_tempdir())
        return
    except ValueError:
        pass

    root_str = str(rootp)
    if root_str in SENSITIVE_DIRS:
        raise ValidationError(f"Cannot scan sensitive directory: {root}")
    for sensitive in SENSITIVE_DIRS:
        if root_str.startswith(sensitive + "/"):
            raise ValidationError(f"Cannot scan under sensitive directory: {root}")


def iter_source_files(
    root: str,
    *,
    extensions: frozenset[str] | None = None,
    excludes: tuple[str, ...] = DEFAULT_EXCLUDES,
    max_files: int = DEFAULT_MAX_FILES,
) -> Iterable[str]:
    """
    Yield supported source files under ``root``.

    A file root is yielded as-is when its extension is supported. Directory
    roots are searched recursively; excluded directory names and symlinks
    that lead outside the root are skipped.
    """
    suffixes = supported_extensions() if extensions is None else extensions
    try:
        rootp = Path(root).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise ValidationError(f"Invalid root path '{root}': {e}") from e

    _check_sensitive(rootp, root)

    if rootp.is_file():
        if rootp.suffix.lower() in suffixes:
            yield str(rootp)
        return
    if not rootp.is_dir():
        raise ValidationError(f"Root must be a file or directory: {root}")

    file_count = 0
    for p in sorted(rootp.rglob("*")):
        if p.suffix.lower() not in suffixes or not p.is_file():
            continue
        # Symlinks must not lead outside the root.
        try:
            p.resolve().relative_to(rootp)
        except ValueError:
            continue

        parts = set(p.relative_to(rootp).parts)
        if any(ex in parts for ex in excludes):
            continue

        file_count += 1
        if file_count > max_files:
            raise ValidationError(
                f"File count exceeds limit of {max_files}. "
                "Use more specific root or increase limit."
            )
        yield str(p)


def collect_source_files(
    roots: Sequence[str],
    *,
    extensions: frozenset[str] | None = None,
    excludes: tuple[str, ...] = DEFAULT_EXCLUDES,
    max_files: int = DEFAULT_MAX_FILES,
) -> list[str]:
    """Sorted, de-duplicated union of the files found under every root."""
    found: set[str] = set()
    for root in roots:
        found.update(
            iter_source_files(
                root, extensions=extensions, excludes=excludes, max_files=max_files
            )
        )
    return sorted(found)
