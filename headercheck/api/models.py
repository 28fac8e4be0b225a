"""Pydantic models for the API."""

from pydantic import BaseModel, Field

from core import MAX_YEAR, MIN_YEAR


class TemplateValidateRequest(BaseModel):
    """Template source to validate."""

    template: str


class SegmentResponse(BaseModel):
    """One parsed template segment."""

    kind: str
    text: str | None = None


class TemplateValidateResponse(BaseModel):
    """Parsed template summary."""

    valid: bool = True
    segments: list[SegmentResponse]
    rendered: str


class HeaderRequest(BaseModel):
    """Source text to check or fix against a template."""

    template: str
    text: str
    current_year: int | None = Field(default=None, ge=MIN_YEAR, le=MAX_YEAR)


class DiagnosticResponse(BaseModel):
    """A reported diagnostic."""

    id: str
    severity: str
    message: str
    start: int
    length: int


class MatchResponse(BaseModel):
    """Where the header was found and how it matched."""

    start: int
    length: int
    is_inexact: bool
    error_messages: list[str] = []
    update_messages: list[str] = []


class HeaderCheckResponse(BaseModel):
    """Outcome of a header check."""

    state: str
    current_year: int
    diagnostics: list[DiagnosticResponse] = []
    match: MatchResponse | None = None


class HeaderFixResponse(BaseModel):
    """Fixed text. title is None when there was nothing to fix."""

    title: str | None = None
    text: str
    changed: bool = False


class DescriptorResponse(BaseModel):
    """A diagnostic descriptor."""

    id: str
    title: str
    severity: str
