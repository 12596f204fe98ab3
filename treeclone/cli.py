from __future__ import annotations

import argparse
import os
import sys
import time
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import NoReturn

from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.rule import Rule
from rich.text import Text
from rich.theme import Theme

from . import __version__
from . import ui_messages as ui
from ._cli_args import build_parser
from ._cli_meta import _build_report_meta
from ._cli_summary import _print_summary
from .config import DetectionConfig, load_rc_file
from .contracts import RC_FILE_NAME, ExitCode
from .detector import DetectionResult, detect_clones
from .errors import ValidationError
from .groups import MatchGroup
from .report import to_json_report, to_text_report, to_xml_report
from .scanner import collect_source_files

# Custom theme for Rich
custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "dim": "dim",
    }
)

# CLI option dest -> DetectionConfig field
_CONFIG_OPTIONS = (
    "threshold",
    "min_instances",
    "match_identifiers",
    "match_literals",
    "ignore_pattern",
    "truncate_length",
)


def _make_console(*, no_color: bool) -> Console:
    return Console(theme=custom_theme, width=100, no_color=no_color)


console = _make_console(no_color=False)


def print_banner() -> None:
    console.print(
        Panel(
            ui.banner_title(__version__),
            border_style="blue",
            padding=(0, 2),
            width=ui.CLI_LAYOUT_WIDTH,
            expand=False,
        )
    )


def _is_debug_enabled(
    *,
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> bool:
    args = list(sys.argv[1:] if argv is None else argv)
    debug_from_flag = any(arg == "--debug" for arg in args)
    env = os.environ if environ is None else environ
    debug_from_env = env.get("TREECLONE_DEBUG") == "1"
    return debug_from_flag or debug_from_env


def _contract_exit(message: str) -> NoReturn:
    console.print(ui.fmt_contract_error(message))
    sys.exit(ExitCode.CONTRACT_ERROR)


def _resolve_config(args: argparse.Namespace) -> DetectionConfig:
    """
    Build the detection config from the run-control file and CLI options.

    An explicit ``--config`` must exist; the default ``.treeclonerc`` in the
    working directory is optional. Options given on the command line win.
    """
    if args.config_path:
        rc_path: Path | None = Path(args.config_path).expanduser()
    else:
        default_rc = Path.cwd() / RC_FILE_NAME
        rc_path = default_rc if default_rc.is_file() else None

    try:
        options = load_rc_file(rc_path) if rc_path is not None else {}
        for name in _CONFIG_OPTIONS:
            value = getattr(args, name)
            if value is not None:
                options[name] = value
        config = DetectionConfig(**options)
    except ValidationError as e:
        _contract_exit(ui.fmt_invalid_config(e))

    if rc_path is not None and not args.quiet:
        console.print(ui.fmt_path(ui.INFO_CONFIG_LOADED, rc_path))
    return config


def _validate_output_path(
    path: str | None,
    *,
    expected_suffix: str,
    label: str,
) -> Path | None:
    if not path:
        return None
    out = Path(path).expanduser()
    if out.suffix.lower() != expected_suffix:
        _contract_exit(
            ui.fmt_invalid_output_extension(
                label=label, path=out, expected_suffix=expected_suffix
            )
        )
    return out.resolve()


def _validate_targets(paths: Sequence[str]) -> None:
    for raw in paths:
        try:
            target = Path(raw).resolve()
        except OSError as e:
            _contract_exit(ui.ERR_INVALID_PATH.format(error=e))
        if not target.exists():
            _contract_exit(ui.ERR_PATH_NOT_FOUND.format(path=target))


def _discover(paths: Sequence[str], *, quiet: bool) -> list[str]:
    try:
        if quiet:
            return collect_source_files(paths)
        with console.status(ui.STATUS_DISCOVERING, spinner="dots"):
            return collect_source_files(paths)
    except ValidationError as e:
        _contract_exit(ui.ERR_SCAN_FAILED.format(error=e))
    except OSError as e:
        _contract_exit(ui.ERR_SCAN_FAILED.format(error=e))


def _run_detection(
    files: list[str], config: DetectionConfig, *, no_progress: bool, quiet: bool
) -> DetectionResult:
    total = sum(1 for fp in files if not config.is_ignored(fp))
    if no_progress or total == 0:
        if not quiet and total:
            console.print(ui.fmt_processing(total))
        return detect_clones(files, config)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        TimeElapsedColumn(),
        console=console,
    ) as progress:
        task = progress.add_task(f"Analyzing {total} files...", total=total)
        return detect_clones(
            files, config, on_progress=lambda _fp: progress.advance(task)
        )


def _print_failures(result: DetectionResult) -> None:
    if not result.failures:
        return
    console.print(ui.fmt_failed_files_header(len(result.failures)))
    for failure in result.failures[:10]:
        console.print(f"  • {failure.filepath}: {failure.error}")
    if len(result.failures) > 10:
        console.print(f"  ... and {len(result.failures) - 10} more")


def _print_groups(groups: Sequence[MatchGroup], *, verbose: bool) -> None:
    if not groups:
        console.print(ui.NO_CLONES_FOUND)
        return
    for index, group in enumerate(groups, start=1):
        console.print(
            ui.fmt_group_header(
                index=index,
                group_id=group.id,
                count=len(group.instances),
                size=group.size,
            )
        )
        for inst in group.instances:
            console.print(
                ui.fmt_group_instance(
                    path=inst.path,
                    start_line=inst.start_line,
                    end_line=inst.end_line,
                )
            )
            if verbose:
                console.print(Text(inst.code, style="dim"))


def _main_impl() -> None:
    ap = build_parser(__version__)
    args = ap.parse_args()

    if args.quiet:
        args.no_progress = True

    global console
    console = _make_console(no_color=args.no_color)

    t0 = time.monotonic()

    if not args.quiet:
        print_banner()

    config = _resolve_config(args)

    json_out = _validate_output_path(
        args.json_out, expected_suffix=".json", label="JSON"
    )
    text_out = _validate_output_path(
        args.text_out, expected_suffix=".txt", label="text"
    )
    xml_out = _validate_output_path(args.xml_out, expected_suffix=".xml", label="XML")

    _validate_targets(args.paths)
    if not args.quiet:
        for raw in args.paths:
            console.print(ui.fmt_scanning_root(Path(raw).resolve()))

    files = _discover(args.paths, quiet=args.quiet)
    files_found = len(files)

    result = _run_detection(
        files, config, no_progress=args.no_progress, quiet=args.quiet
    )
    groups = result.groups
    files_skipped = files_found - result.files_analyzed

    _print_failures(result)

    if not args.quiet:
        _print_groups(groups, verbose=args.verbose)
        console.print(Rule(style="dim"))

    _print_summary(
        console=console,
        quiet=args.quiet,
        files_found=files_found,
        files_analyzed=result.files_analyzed,
        files_skipped=files_skipped,
        groups_count=len(groups),
        instances_count=sum(len(group.instances) for group in groups),
    )

    report_meta = _build_report_meta(
        treeclone_version=__version__,
        config=config,
        files_found=files_found,
        files_analyzed=result.files_analyzed,
        files_skipped=files_skipped,
    )
    outputs: list[tuple[Path | None, str, Callable[[], str], str]] = [
        (
            json_out,
            "JSON",
            lambda: to_json_report(groups, report_meta),
            ui.INFO_JSON_REPORT_SAVED,
        ),
        (
            text_out,
            "text",
            lambda: to_text_report(groups, report_meta),
            ui.INFO_TEXT_REPORT_SAVED,
        ),
        (xml_out, "XML", lambda: to_xml_report(groups), ui.INFO_XML_REPORT_SAVED),
    ]

    output_notice_printed = False
    for out, label, render, notice in outputs:
        if out is None:
            continue
        try:
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_text(render(), "utf-8")
        except OSError as e:
            _contract_exit(ui.fmt_report_write_failed(label=label, path=out, error=e))
        if not args.quiet:
            if not output_notice_printed:
                console.print("")
                output_notice_printed = True
            console.print(ui.fmt_path(notice, out))

    if not args.quiet:
        elapsed = time.monotonic() - t0
        console.print(f"\n[dim]Done in {elapsed:.1f}s[/dim]")

    if groups:
        sys.exit(ExitCode.CLONES_FOUND)


def main() -> None:
    try:
        _main_impl()
    except SystemExit:
        raise
    except Exception as e:
        console.print(ui.fmt_internal_error(e, debug=_is_debug_enabled()))
        sys.exit(ExitCode.INTERNAL_ERROR)


if __name__ == "__main__":
    main()
