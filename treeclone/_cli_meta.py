"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import sys
from typing import TypedDict

from .config import DetectionConfig
from .contracts import REPORT_SCHEMA_VERSION


def _current_python_version() -> str:
    return f"{sys.version_info.major}.{sys.version_info.minor}"


class ReportMeta(TypedDict):
    """
    Report metadata shared by the JSON and TXT reports.

    The detection settings are recorded so two reports can be compared
    only when they were produced under the same configuration.
    """

    report_schema_version: str
    treeclone_version: str
    python_version: str
    threshold: int
    min_instances: int
    match_identifiers: bool
    match_literals: bool
    ignore_pattern: str | None
    files_found: int
    files_analyzed: int
    files_skipped: int


def _build_report_meta(
    *,
    treeclone_version: str,
    config: DetectionConfig,
    files_found: int,
    files_analyzed: int,
    files_skipped: int,
) -> ReportMeta:
    return {
        "report_schema_version": REPORT_SCHEMA_VERSION,
        "treeclone_version": treeclone_version,
        "python_version": _current_python_version(),
        "threshold": config.threshold,
        "min_instances": config.min_instances,
        "match_identifiers": config.match_identifiers,
        "match_literals": config.match_literals,
        "ignore_pattern": config.ignore_pattern,
        "files_found": files_found,
        "files_analyzed": files_analyzed,
        "files_skipped": files_skipped,
    }
