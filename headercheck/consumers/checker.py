"""Per-file header checking driver.

Checks many files against one template in parallel. The template's
compiled pattern is shared by all worker threads. Each file is
independent: a file that cannot be read or written is reported and the rest
continue.
"""

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from core import DynamicValues
from headercheck.config import get_max_workers
from headercheck.consumers.analyzer import (
    HeaderAnalysis,
    HeaderState,
    analyze_with_template_load,
)
from headercheck.consumers.fixer import HeaderFix, fix_text
from headercheck.diagnostics import Diagnostic, Severity
from headercheck.services.template_source import TemplateLoad

logger = logging.getLogger(__name__)


@dataclass
class FileReport:
    """Result of checking one file."""

    path: Path
    state: HeaderState | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)
    fix: HeaderFix | None = None
    fixed: bool = False
    error: str | None = None

    @property
    def has_errors(self) -> bool:
        if self.error is not None:
            return True
        return any(d.severity == Severity.ERROR for d in self.diagnostics)


@dataclass
class CheckSummary:
    """Aggregate of a check run."""

    reports: list[FileReport] = field(default_factory=list)

    @property
    def files_checked(self) -> int:
        return len(self.reports)

    @property
    def files_with_errors(self) -> int:
        return sum(1 for r in self.reports if r.has_errors)

    @property
    def files_fixed(self) -> int:
        return sum(1 for r in self.reports if r.fixed)


class HeaderChecker:
    """Checks (and optionally fixes) headers of source files.

    Usage:
        load = load_header_template(discover_template_files(root))
        checker = HeaderChecker(load, current_values())
        summary = checker.check_paths(paths, write_fixes=True)
    """

    def __init__(
        self,
        template_load: TemplateLoad,
        values: DynamicValues,
        max_workers: int | None = None,
    ):
        self._load = template_load
        self._values = values
        self._max_workers = max_workers or get_max_workers()

    def check_text(self, text: str) -> tuple[HeaderAnalysis, HeaderFix | None]:
        """Analyze a text and compute its fix, if any."""
        analysis = analyze_with_template_load(text, self._load, self._values)
        fix = None
        if self._load.template is not None and analysis.diagnostics:
            fix = fix_text(text, self._load.template, analysis.diagnostics, self._values)
        return analysis, fix

    def check_file(self, path: Path, write_fixes: bool = False) -> FileReport:
        """Check one file.

        Args:
            path: Source file
            write_fixes: Write the fixed text back to the file

        Returns:
            FileReport
        """
        try:
            # newline="" keeps line endings as they are on disk
            with open(path, encoding="utf-8", newline="") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("[CHECK] Could not read %s: %s", path, e)
            return FileReport(path=path, error=str(e))

        analysis, fix = self.check_text(text)
        report = FileReport(
            path=path,
            state=analysis.state,
            diagnostics=analysis.diagnostics,
            fix=fix,
        )

        if write_fixes and fix is not None and fix.text != text:
            try:
                with open(path, "w", encoding="utf-8", newline="") as f:
                    f.write(fix.text)
            except OSError as e:
                logger.warning("[FIX] Could not write %s: %s", path, e)
                report.error = str(e)
                return report
            report.fixed = True
            logger.info("[FIX] %s: %s", path, fix.title)

        return report

    def check_paths(self, paths: Iterable[Path | str], write_fixes: bool = False) -> CheckSummary:
        """Check many files in parallel.

        Reports come back in the order the paths were given.
        """
        path_list = [Path(p) for p in paths]
        if not path_list:
            return CheckSummary()

        reports: dict[int, FileReport] = {}
        workers = min(len(path_list), self._max_workers)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(self.check_file, path, write_fixes): i
                for i, path in enumerate(path_list)
            }
            for future in as_completed(futures):
                reports[futures[future]] = future.result()

        summary = CheckSummary(reports=[reports[i] for i in range(len(path_list))])
        logger.info(
            "[CHECK] Checked %d files: %d with errors, %d fixed",
            summary.files_checked,
            summary.files_with_errors,
            summary.files_fixed,
        )
        return summary
