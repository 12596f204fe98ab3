"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import argparse

from . import ui_messages as ui
from .contracts import cli_help_epilog


def build_parser(version: str) -> argparse.ArgumentParser:
    # Tuning options default to None so values from the run-control file
    # apply unless overridden on the command line.
    ap = argparse.ArgumentParser(
        prog="treeclone",
        description="Syntax-tree clone detector for Python and JavaScript.",
        epilog=cli_help_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument(
        "--version",
        action="version",
        version=ui.version_output(version),
        help=ui.HELP_VERSION,
    )

    core_group = ap.add_argument_group("Target")
    core_group.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help=ui.HELP_PATHS,
    )

    tune_group = ap.add_argument_group("Analysis Tuning")
    tune_group.add_argument(
        "-t",
        "--threshold",
        type=int,
        default=None,
        metavar="N",
        help=ui.HELP_THRESHOLD,
    )
    tune_group.add_argument(
        "-m",
        "--min-instances",
        dest="min_instances",
        type=int,
        default=None,
        metavar="N",
        help=ui.HELP_MIN_INSTANCES,
    )
    tune_group.add_argument(
        "-I",
        "--no-identifiers",
        dest="match_identifiers",
        action="store_false",
        default=None,
        help=ui.HELP_NO_IDENTIFIERS,
    )
    tune_group.add_argument(
        "-L",
        "--no-literals",
        dest="match_literals",
        action="store_false",
        default=None,
        help=ui.HELP_NO_LITERALS,
    )
    tune_group.add_argument(
        "--ignore",
        dest="ignore_pattern",
        default=None,
        metavar="REGEX",
        help=ui.HELP_IGNORE,
    )
    tune_group.add_argument(
        "--truncate",
        dest="truncate_length",
        type=int,
        default=None,
        metavar="N",
        help=ui.HELP_TRUNCATE,
    )
    tune_group.add_argument(
        "--config",
        dest="config_path",
        default=None,
        metavar="FILE",
        help=ui.HELP_CONFIG,
    )

    out_group = ap.add_argument_group("Reporting")
    out_group.add_argument(
        "--json",
        dest="json_out",
        metavar="FILE",
        help=ui.HELP_JSON,
    )
    out_group.add_argument(
        "--text",
        dest="text_out",
        metavar="FILE",
        help=ui.HELP_TEXT,
    )
    out_group.add_argument(
        "--xml",
        dest="xml_out",
        metavar="FILE",
        help=ui.HELP_XML,
    )
    out_group.add_argument(
        "--no-progress",
        action="store_true",
        help=ui.HELP_NO_PROGRESS,
    )
    out_group.add_argument(
        "--no-color",
        action="store_true",
        help=ui.HELP_NO_COLOR,
    )
    out_group.add_argument(
        "--quiet",
        action="store_true",
        help=ui.HELP_QUIET,
    )
    out_group.add_argument(
        "--verbose",
        action="store_true",
        help=ui.HELP_VERBOSE,
    )
    out_group.add_argument(
        "--debug",
        action="store_true",
        help=ui.HELP_DEBUG,
    )
    return ap
