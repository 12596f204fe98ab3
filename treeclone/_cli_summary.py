"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import ui_messages as ui

_CLONE_LABELS = frozenset({ui.SUMMARY_LABEL_GROUPS, ui.SUMMARY_LABEL_INSTANCES})


def _summary_value_style(*, label: str, value: int) -> str:
    if value == 0:
        return "dim"
    if label == ui.SUMMARY_LABEL_FILES_SKIPPED:
        return "yellow"
    if label in _CLONE_LABELS:
        return "bold yellow"
    return "bold"


def _build_summary_rows(
    *,
    files_found: int,
    files_analyzed: int,
    files_skipped: int,
    groups_count: int,
    instances_count: int,
) -> list[tuple[str, int]]:
    return [
        (ui.SUMMARY_LABEL_FILES_FOUND, files_found),
        (ui.SUMMARY_LABEL_FILES_ANALYZED, files_analyzed),
        (ui.SUMMARY_LABEL_FILES_SKIPPED, files_skipped),
        (ui.SUMMARY_LABEL_GROUPS, groups_count),
        (ui.SUMMARY_LABEL_INSTANCES, instances_count),
    ]


def _build_summary_table(rows: list[tuple[str, int]]) -> Table:
    summary_table = Table(
        title=ui.SUMMARY_TITLE,
        show_header=True,
        width=ui.CLI_LAYOUT_WIDTH,
    )
    summary_table.add_column("Metric")
    summary_table.add_column("Value", justify="right")
    for label, value in rows:
        summary_table.add_row(
            label,
            Text(str(value), style=_summary_value_style(label=label, value=value)),
        )
    return summary_table


def _print_summary(
    *,
    console: Console,
    quiet: bool,
    files_found: int,
    files_analyzed: int,
    files_skipped: int,
    groups_count: int,
    instances_count: int,
) -> None:
    # Files dropped by the ignore pattern count as skipped.
    invariant_ok = files_found == files_analyzed + files_skipped

    if quiet:
        console.print(ui.SUMMARY_TITLE)
        console.print(
            ui.fmt_summary_compact_input(
                found=files_found, analyzed=files_analyzed, skipped=files_skipped
            )
        )
        console.print(
            ui.fmt_summary_compact_clones(
                groups=groups_count, instances=instances_count
            )
        )
    else:
        rows = _build_summary_rows(
            files_found=files_found,
            files_analyzed=files_analyzed,
            files_skipped=files_skipped,
            groups_count=groups_count,
            instances_count=instances_count,
        )
        console.print(_build_summary_table(rows))

    if not invariant_ok:
        console.print(f"[warning]{ui.WARN_SUMMARY_ACCOUNTING_MISMATCH}[/warning]")
