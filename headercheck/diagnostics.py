"""Diagnostic descriptors and diagnostics.

Every problem reported about a header (or about the template itself)
is a Diagnostic pointing at a span of the checked text. Descriptors are
registered once here and looked up by id.
"""

from dataclasses import dataclass, field
from enum import Enum


class Severity(Enum):
    """Diagnostic severity."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class DiagnosticDescriptor:
    """Static description of a kind of diagnostic.

    message_format may contain '{0}', replaced by the diagnostic's
    argument.
    """

    id: str
    title: str
    message_format: str
    severity: Severity

    def format(self, argument: str | None = None) -> str:
        if argument is None:
            return self.message_format
        return self.message_format.replace("{0}", argument)


@dataclass(frozen=True)
class Diagnostic:
    """A reported problem at a span of the checked text."""

    descriptor: DiagnosticDescriptor
    start: int
    length: int
    message: str
    properties: dict[str, str] = field(default_factory=dict, compare=False)

    @property
    def id(self) -> str:
        return self.descriptor.id

    @property
    def severity(self) -> Severity:
        return self.descriptor.severity

    @property
    def end(self) -> int:
        return self.start + self.length

    @property
    def is_insert_only(self) -> bool:
        return IS_INSERT_ONLY in self.properties


def create_diagnostic(
    descriptor: DiagnosticDescriptor,
    start: int = 0,
    length: int = 0,
    argument: str | None = None,
    properties: dict[str, str] | None = None,
) -> Diagnostic:
    """Create a diagnostic with its message formatted from the descriptor."""
    return Diagnostic(
        descriptor=descriptor,
        start=start,
        length=length,
        message=descriptor.format(argument),
        properties=dict(properties or {}),
    )


# Set on "header not found" diagnostics: fixing them inserts a header
# instead of replacing a span
IS_INSERT_ONLY = "is_insert_only"


MISSING_TEMPLATE = DiagnosticDescriptor(
    id="SHA0000",
    title="A header template file must be added to this project.",
    message_format=(
        "A header template file must be added to this project. Create a file "
        "ending in '{0}' at the highest-level folder where the header applies."
    ),
    severity=Severity.ERROR,
)

MISCONFIGURED_TEMPLATE = DiagnosticDescriptor(
    id="SHA0001",
    title="Header template file configuration is invalid.",
    message_format="{0}",
    severity=Severity.ERROR,
)

INCORRECT_HEADER = DiagnosticDescriptor(
    id="SHA0002",
    title="The file does not have the correct header.",
    message_format="The file does not have the correct header.",
    severity=Severity.ERROR,
)

MISPLACED_HEADER = DiagnosticDescriptor(
    id="SHA0003",
    title="Nothing must come before the file header.",
    message_format="Nothing must come before the file header.",
    severity=Severity.ERROR,
)

OUTDATED_HEADER = DiagnosticDescriptor(
    id="SHA0004",
    title="The header is not current.",
    message_format="{0}",
    severity=Severity.INFO,
)

INVALID_HEADER = DiagnosticDescriptor(
    id="SHA0005",
    title="The header has invalid information.",
    message_format="{0}",
    severity=Severity.ERROR,
)

DESCRIPTORS: dict[str, DiagnosticDescriptor] = {
    d.id: d
    for d in (
        MISSING_TEMPLATE,
        MISCONFIGURED_TEMPLATE,
        INCORRECT_HEADER,
        MISPLACED_HEADER,
        OUTDATED_HEADER,
        INVALID_HEADER,
    )
}

# Diagnostics a header fix can resolve
FIXABLE_IDS = frozenset(
    {
        INCORRECT_HEADER.id,
        MISPLACED_HEADER.id,
        OUTDATED_HEADER.id,
        INVALID_HEADER.id,
    }
)


def get_descriptor(diagnostic_id: str) -> DiagnosticDescriptor | None:
    """Look up a descriptor by id."""
    return DESCRIPTORS.get(diagnostic_id)
