"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final

REPORT_SCHEMA_VERSION: Final = "1.0"
RC_FILE_NAME: Final = ".treeclonerc"


class ExitCode(IntEnum):
    SUCCESS = 0
    CLONES_FOUND = 1
    CONTRACT_ERROR = 2
    INTERNAL_ERROR = 5


EXIT_CODE_DESCRIPTIONS: Final[tuple[tuple[ExitCode, str], ...]] = (
    (ExitCode.SUCCESS, "success (no clone groups found)"),
    (ExitCode.CLONES_FOUND, "one or more clone groups found"),
    (
        ExitCode.CONTRACT_ERROR,
        (
            "contract error (invalid options or run-control file, "
            "invalid output paths, missing or sensitive scan roots)"
        ),
    ),
    (
        ExitCode.INTERNAL_ERROR,
        "internal error (unexpected exception or unsupported tree shape)",
    ),
)


def cli_help_epilog() -> str:
    lines = ["Exit codes"]
    for code, description in EXIT_CODE_DESCRIPTIONS:
        lines.append(f"  - {int(code)} - {description}")
    return "\n".join(lines)
