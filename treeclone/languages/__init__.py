"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from pathlib import Path

from .base import Language
from .javascript import JAVASCRIPT
from .python import PYTHON

LANGUAGES: tuple[Language, ...] = (PYTHON, JAVASCRIPT)


def supported_extensions() -> frozenset[str]:
    return frozenset(ext for language in LANGUAGES for ext in language.extensions)


def language_for_path(path: str) -> Language | None:
    suffix = Path(path).suffix.lower()
    for language in LANGUAGES:
        if suffix in language.extensions:
            return language
    return None


__all__ = [
    "JAVASCRIPT",
    "LANGUAGES",
    "PYTHON",
    "Language",
    "language_for_path",
    "supported_extensions",
]
