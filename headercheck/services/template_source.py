"""Header template source discovery and loading.

A project configures exactly one header template file. Candidate files
are filtered by suffix (see headercheck.config.get_template_suffix):

- no candidate: MISSING_TEMPLATE diagnostic
- several candidates: MISCONFIGURED_TEMPLATE diagnostic
- the file does not exist: MISCONFIGURED_TEMPLATE diagnostic
- the file is empty: header checking is turned off (no template, no diagnostic)
- the template does not parse: MISCONFIGURED_TEMPLATE diagnostic

Parsed templates are cached by path, modification time and size, so
a template is parsed once and rebuilt only when its file changes.
"""

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from header_template import HeaderTemplate, TemplateParseError, parse_template
from headercheck.config import get_template_suffix
from headercheck.diagnostics import (
    MISCONFIGURED_TEMPLATE,
    MISSING_TEMPLATE,
    Diagnostic,
    create_diagnostic,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TemplateLoad:
    """Result of looking up a project's header template.

    Exactly one of these holds:
    - template is set: check headers against it
    - diagnostic is set: report it instead of checking headers
    - neither: the template file is empty, header checking is off
    """

    template: HeaderTemplate | None = None
    diagnostic: Diagnostic | None = None
    path: Path | None = None

    @property
    def is_disabled(self) -> bool:
        return self.template is None and self.diagnostic is None


def _misconfigured(message: str) -> TemplateLoad:
    return TemplateLoad(diagnostic=create_diagnostic(MISCONFIGURED_TEMPLATE, argument=message))


def select_template_files(paths: Iterable[Path | str], suffix: str | None = None) -> list[Path]:
    """Filter candidate paths down to header template files.

    At most two are returned: one is the normal case, two is enough to
    report that there are too many.
    """
    suffix = get_template_suffix() if suffix is None else suffix
    selected: list[Path] = []
    for path in paths:
        path = Path(path)
        if path.name.endswith(suffix):
            selected.append(path)
            if len(selected) == 2:
                break
    return selected


def discover_template_files(root: Path | str, suffix: str | None = None) -> list[Path]:
    """List template files directly inside a project directory."""
    suffix = get_template_suffix() if suffix is None else suffix
    root = Path(root)
    if not root.is_dir():
        return []
    return sorted(p for p in root.iterdir() if p.is_file() and p.name.endswith(suffix))


def parse_template_text(text: str, path: Path | str = "<template>") -> TemplateLoad:
    """Parse template text that has already been read.

    Args:
        text: Template source
        path: Where the text came from (for messages)

    Returns:
        TemplateLoad with a template, a diagnostic, or neither (empty text)
    """
    path = Path(path)
    if not text:
        logger.info("[TEMPLATE] %s is empty, header checking is off", path)
        return TemplateLoad(path=path)

    try:
        template = parse_template(text)
    except TemplateParseError as e:
        logger.warning("[TEMPLATE] Error in %s: %s", path, e.message)
        return TemplateLoad(
            diagnostic=create_diagnostic(MISCONFIGURED_TEMPLATE, argument=f"Error in {path}: {e.message}"),
            path=path,
        )

    return TemplateLoad(template=template, path=path)


class TemplateCache:
    """Cache of parsed templates keyed by (path, mtime, size).

    All methods are class methods; the cache is shared process-wide.
    """

    _entries: ClassVar[dict[Path, tuple[tuple[float, int], TemplateLoad]]] = {}
    _lock: ClassVar[threading.Lock] = threading.Lock()

    @classmethod
    def load(cls, path: Path) -> TemplateLoad:
        """Load a template file, reusing the parsed result if unchanged."""
        stat = path.stat()
        key = (stat.st_mtime, stat.st_size)
        resolved = path.resolve()

        with cls._lock:
            cached = cls._entries.get(resolved)
        if cached is not None and cached[0] == key:
            return cached[1]

        result = parse_template_text(path.read_text(encoding="utf-8"), path)
        with cls._lock:
            cls._entries[resolved] = (key, result)
        logger.debug("[TEMPLATE] Loaded %s", path)
        return result

    @classmethod
    def clear(cls) -> None:
        """Clear all cached templates (for testing)."""
        with cls._lock:
            cls._entries.clear()


def load_header_template(paths: Iterable[Path | str], suffix: str | None = None) -> TemplateLoad:
    """Find and load the header template among a project's files.

    Args:
        paths: The project's additional files (candidates)
        suffix: Template file suffix (None = from configuration)

    Returns:
        TemplateLoad
    """
    suffix = get_template_suffix() if suffix is None else suffix
    selected = select_template_files(paths, suffix)

    if not selected:
        return TemplateLoad(diagnostic=create_diagnostic(MISSING_TEMPLATE, argument=suffix))

    if len(selected) > 1:
        return _misconfigured(
            f"More than one header *{suffix} file has been added to this project. "
            "Remove all but one of them."
        )

    path = selected[0]
    if not path.is_file():
        return _misconfigured(f"{path} does not exist.")

    return TemplateCache.load(path)
