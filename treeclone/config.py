"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ValidationError

DEFAULT_THRESHOLD = 30
DEFAULT_MIN_INSTANCES = 2
DEFAULT_TRUNCATE_LENGTH = 100

MAX_RC_FILE_SIZE = 1024 * 1024

# Run-control key -> (DetectionConfig field, expected type)
RC_KEYS: dict[str, tuple[str, type]] = {
    "threshold": ("threshold", int),
    "min_instances": ("min_instances", int),
    "identifiers": ("match_identifiers", bool),
    "literals": ("match_literals", bool),
    "ignore": ("ignore_pattern", str),
    "truncate": ("truncate_length", int),
}


@dataclass(frozen=True, slots=True)
class DetectionConfig:
    threshold: int = DEFAULT_THRESHOLD
    min_instances: int = DEFAULT_MIN_INSTANCES
    match_identifiers: bool = True
    match_literals: bool = True
    ignore_pattern: str | None = None
    truncate_length: int = DEFAULT_TRUNCATE_LENGTH
    _ignore_re: re.Pattern[str] | None = field(
        init=False, default=None, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if self.threshold < 1:
            raise ValidationError(
                f"threshold must be a positive integer, got {self.threshold}"
            )
        if self.min_instances < 2:
            raise ValidationError(
                f"min_instances must be at least 2, got {self.min_instances}"
            )
        if self.truncate_length < 0:
            raise ValidationError(
                f"truncate_length must be non-negative, got {self.truncate_length}"
            )
        if self.ignore_pattern:
            try:
                compiled = re.compile(self.ignore_pattern)
            except re.error as e:
                raise ValidationError(
                    f"Invalid ignore pattern {self.ignore_pattern!r}: {e}"
                ) from e
            object.__setattr__(self, "_ignore_re", compiled)

    def is_ignored(self, path: str) -> bool:
        return self._ignore_re is not None and self._ignore_re.search(path) is not None


def load_rc_file(path: Path) -> dict[str, Any]:
    """
    Read a JSON run-control file and map its keys to DetectionConfig fields.

    Unknown keys and values of the wrong type are rejected so a typo never
    silently falls back to a default.
    """
    try:
        size = path.stat().st_size
    except OSError as e:
        raise ValidationError(f"Cannot stat run-control file at {path}: {e}") from e
    if size > MAX_RC_FILE_SIZE:
        raise ValidationError(
            f"Run-control file too large at {path}: {size} bytes "
            f"(max {MAX_RC_FILE_SIZE})"
        )
    try:
        raw = path.read_text("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ValidationError(f"Cannot read run-control file at {path}: {e}") from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Corrupted run-control file at {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValidationError(f"Run-control file must hold an object at {path}")

    unknown = set(data) - set(RC_KEYS)
    if unknown:
        raise ValidationError(
            f"Unknown keys in run-control file at {path}: "
            f"{', '.join(sorted(unknown))}"
        )

    options: dict[str, Any] = {}
    for key, value in data.items():
        field_name, expected = RC_KEYS[key]
        # bool is an int subclass; keep the two apart.
        if not isinstance(value, expected) or (
            expected is int and isinstance(value, bool)
        ):
            raise ValidationError(
                f"Invalid run-control file at {path}: "
                f"'{key}' must be {expected.__name__}"
            )
        options[field_name] = value
    return options
