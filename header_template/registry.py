"""Special segment registry.

Maps the names usable inside braces in a template ({Year}, {YearRange})
to the segments they stand for. Lookup is case-insensitive.
"""

from dataclasses import dataclass

from header_template.segments import YEAR, YEAR_RANGE, Segment


@dataclass(frozen=True)
class SpecialSegmentDefinition:
    """A named special segment."""

    name: str
    segment: Segment
    description: str = ""
    example: str = ""


class SpecialSegmentRegistry:
    """Registry of special segment names.

    Names are stored case-folded; the definition keeps the canonical
    spelling for display.
    """

    def __init__(self) -> None:
        self._definitions: dict[str, SpecialSegmentDefinition] = {}

    def register(
        self,
        name: str,
        segment: Segment,
        description: str = "",
        example: str = "",
    ) -> None:
        """Register a special segment name."""
        self._definitions[name.casefold()] = SpecialSegmentDefinition(
            name=name,
            segment=segment,
            description=description,
            example=example,
        )

    def get(self, name: str) -> SpecialSegmentDefinition | None:
        """Look up a special segment by name (case-insensitive)."""
        return self._definitions.get(name.casefold())

    def all_definitions(self) -> list[SpecialSegmentDefinition]:
        """Get all registered special segments."""
        return list(self._definitions.values())

    def names(self) -> list[str]:
        """Get the canonical names of all registered special segments."""
        return [d.name for d in self._definitions.values()]


_registry = SpecialSegmentRegistry()
_registry.register(
    "Year",
    YEAR,
    description="Current year",
    example="2024",
)
_registry.register(
    "YearRange",
    YEAR_RANGE,
    description="Start year, followed by the current year once they differ",
    example="2019–2024",
)


def get_registry() -> SpecialSegmentRegistry:
    """Get the special segment registry."""
    return _registry
