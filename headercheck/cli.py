"""Command line interface.

Usage:
    python -m headercheck check [--template FILE] [--fix] PATH [PATH ...]

Without --template, the header template is looked up among the files in
the current directory ending with the configured suffix. Directories are
searched recursively for files with the given extensions.

Exit codes: 0 no errors, 1 error diagnostics reported, 2 usage error.
"""

import argparse
import logging
import sys
from collections.abc import Iterable
from pathlib import Path

from headercheck.consumers.checker import CheckSummary, HeaderChecker
from headercheck.services.template_source import (
    discover_template_files,
    load_header_template,
)
from headercheck.utilities.logging import setup_logging
from headercheck.utilities.tz import current_values

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".py",)


def _expand_paths(paths: Iterable[str], extensions: tuple[str, ...]) -> list[Path]:
    files: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            files.extend(sorted(p for p in path.rglob("*") if p.is_file() and p.suffix in extensions))
        else:
            files.append(path)
    return files


def _print_summary(summary: CheckSummary, out) -> None:
    for report in summary.reports:
        if report.error is not None:
            print(f"{report.path}: error: {report.error}", file=out)
            continue
        for d in report.diagnostics:
            print(f"{report.path}:{d.start}: {d.id} {d.severity.value}: {d.message}", file=out)
        if report.fixed and report.fix is not None:
            print(f"{report.path}: fixed ({report.fix.title})", file=out)

    print(
        f"{summary.files_checked} files checked, "
        f"{summary.files_with_errors} with errors, "
        f"{summary.files_fixed} fixed",
        file=out,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="headercheck",
        description="Check source file headers against a header template.",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: from HEADERCHECK_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Check (and optionally fix) file headers")
    check.add_argument("paths", nargs="+", help="Files or directories to check")
    check.add_argument("--template", action="append", default=None, help="Header template file")
    check.add_argument("--fix", action="store_true", help="Write fixed headers back to the files")
    check.add_argument("--year", type=int, default=None, help="Override the current year")
    check.add_argument(
        "--ext",
        action="append",
        default=None,
        help="File extension to check inside directories (default: .py)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        values = current_values(args.year)
    except ValueError as e:
        parser.error(str(e))

    candidates = args.template if args.template else discover_template_files(Path.cwd())
    # An explicit --template is taken whatever its name
    load = load_header_template(candidates, "" if args.template else None)

    extensions = tuple(args.ext) if args.ext else DEFAULT_EXTENSIONS
    files = _expand_paths(args.paths, extensions)

    summary = HeaderChecker(load, values).check_paths(files, write_fixes=args.fix)
    _print_summary(summary, sys.stdout)
    return 1 if summary.files_with_errors else 0
