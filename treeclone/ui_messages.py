"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import platform
import shlex
import sys
import traceback
from pathlib import Path

from . import __version__

BANNER_SUBTITLE = "[italic]Syntax-tree clone detector[/italic]"

MARKER_CONTRACT_ERROR = "[error]CONTRACT ERROR:[/error]"
MARKER_INTERNAL_ERROR = "[error]INTERNAL ERROR:[/error]"

HELP_VERSION = "Print the TreeClone version and exit."
HELP_PATHS = "Files or directories to scan."
HELP_THRESHOLD = "Minimum number of syntax nodes in a reported match."
HELP_MIN_INSTANCES = "Minimum number of instances for a match to be reported."
HELP_NO_IDENTIFIERS = "Do not require identifier names to match."
HELP_NO_LITERALS = "Do not require literal values to match."
HELP_IGNORE = "Regular expression; files whose path matches it are skipped."
HELP_TRUNCATE = "Truncate reported code lines to N characters (0 = no limit)."
HELP_CONFIG = "Path to a JSON run-control file. Default: ./.treeclonerc if present."
HELP_JSON = "Generate a JSON report to FILE."
HELP_TEXT = "Generate a text report to FILE."
HELP_XML = "Generate a PMD CPD style XML report to FILE."
HELP_NO_PROGRESS = "Disable the progress bar (recommended for CI logs)."
HELP_NO_COLOR = "Disable ANSI colors in output."
HELP_QUIET = "Minimize output (still shows warnings and errors)."
HELP_VERBOSE = "Print the code of every clone instance."
HELP_DEBUG = "Print debug details (traceback and environment) on internal errors."

SUMMARY_TITLE = "Analysis Summary"
CLI_LAYOUT_WIDTH = 40
SUMMARY_LABEL_FILES_FOUND = "Files found"
SUMMARY_LABEL_FILES_ANALYZED = "Files analyzed"
SUMMARY_LABEL_FILES_SKIPPED = "Files skipped"
SUMMARY_LABEL_GROUPS = "Clone groups"
SUMMARY_LABEL_INSTANCES = "Clone instances"
SUMMARY_COMPACT_INPUT = "Input: found={found} analyzed={analyzed} skipped={skipped}"
SUMMARY_COMPACT_CLONES = "Clones: groups={groups} instances={instances}"
WARN_SUMMARY_ACCOUNTING_MISMATCH = (
    "Summary accounting mismatch: files_found != files_analyzed + files_skipped"
)

STATUS_DISCOVERING = "[bold green]Discovering source files..."

INFO_SCANNING_ROOT = "[info]Scanning:[/info] {root}"
INFO_PROCESSING = "[info]Processing {count} files...[/info]"
INFO_CONFIG_LOADED = "[info]Run-control file:[/info] {path}"
INFO_JSON_REPORT_SAVED = "[info]JSON report saved:[/info] {path}"
INFO_TEXT_REPORT_SAVED = "[info]Text report saved:[/info] {path}"
INFO_XML_REPORT_SAVED = "[info]XML report saved:[/info] {path}"

WARN_FAILED_FILES_HEADER = "\n[warning]{count} files failed to process:[/warning]"

GROUP_HEADER = (
    "\n[bold]Match {index}[/bold] [dim]{id}[/dim] "
    "({count} instances, {size} nodes)"
)
GROUP_INSTANCE = "  [info]{path}[/info]:{start_line},{end_line}"
NO_CLONES_FOUND = "[success]No clone groups found.[/success]"

ERR_INVALID_OUTPUT_EXT = (
    "[error]Invalid {label} output extension: {path} "
    "(expected {expected_suffix}).[/error]"
)
ERR_PATH_NOT_FOUND = "[error]Path does not exist: {path}[/error]"
ERR_INVALID_PATH = "[error]Invalid path: {error}[/error]"
ERR_SCAN_FAILED = "[error]Scan failed: {error}[/error]"
ERR_INVALID_CONFIG = "[error]Invalid configuration.[/error]\n{error}"
ERR_REPORT_WRITE_FAILED = (
    "[error]Failed to write {label} report: {path} ({error}).[/error]"
)


def version_output(version: str) -> str:
    return f"TreeClone {version}"


def banner_title(version: str) -> str:
    return (
        f"[bold white]TreeClone[/bold white] [dim]v{version}[/dim]\n{BANNER_SUBTITLE}"
    )


def fmt_invalid_output_extension(
    *, label: str, path: Path, expected_suffix: str
) -> str:
    return ERR_INVALID_OUTPUT_EXT.format(
        label=label, path=path, expected_suffix=expected_suffix
    )


def fmt_report_write_failed(*, label: str, path: Path, error: object) -> str:
    return ERR_REPORT_WRITE_FAILED.format(label=label, path=path, error=error)


def fmt_invalid_config(error: object) -> str:
    return ERR_INVALID_CONFIG.format(error=error)


def fmt_scanning_root(root: Path) -> str:
    return INFO_SCANNING_ROOT.format(root=root)


def fmt_processing(count: int) -> str:
    return INFO_PROCESSING.format(count=count)


def fmt_failed_files_header(count: int) -> str:
    return WARN_FAILED_FILES_HEADER.format(count=count)


def fmt_group_header(*, index: int, group_id: str, count: int, size: int) -> str:
    return GROUP_HEADER.format(index=index, id=group_id, count=count, size=size)


def fmt_group_instance(*, path: str, start_line: int, end_line: int) -> str:
    return GROUP_INSTANCE.format(path=path, start_line=start_line, end_line=end_line)


def fmt_path(template: str, path: Path) -> str:
    return template.format(path=path)


def fmt_summary_compact_input(*, found: int, analyzed: int, skipped: int) -> str:
    return SUMMARY_COMPACT_INPUT.format(
        found=found, analyzed=analyzed, skipped=skipped
    )


def fmt_summary_compact_clones(*, groups: int, instances: int) -> str:
    return SUMMARY_COMPACT_CLONES.format(groups=groups, instances=instances)


def fmt_contract_error(message: str) -> str:
    return f"{MARKER_CONTRACT_ERROR}\n{message}"


def fmt_internal_error(error: BaseException, *, debug: bool = False) -> str:
    error_name = type(error).__name__
    error_text = str(error).strip() or "<no message>"
    lines = [
        MARKER_INTERNAL_ERROR,
        "Unexpected exception.",
        f"Reason: {error_name}: {error_text}",
        "",
        "Next steps:",
        "- Re-run with --debug to include a traceback.",
        (
            "- Attach: command line, TreeClone version, Python version, "
            "and the smallest input file that reproduces it."
        ),
    ]
    if not debug:
        return "\n".join(lines)

    traceback_lines = traceback.format_exception(
        type(error), error, error.__traceback__
    )
    command_line = shlex.join(sys.argv)
    lines.extend(
        [
            "",
            "DEBUG DETAILS",
            f"Platform: {platform.platform()}",
            f"Python: {sys.version.split()[0]}",
            f"TreeClone: {__version__}",
            f"Command: {command_line}",
            f"CWD: {Path.cwd()}",
            "Traceback:",
            "".join(traceback_lines).rstrip(),
        ]
    )
    return "\n".join(lines)
