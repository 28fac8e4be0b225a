"""Header check and fix API endpoints."""

import logging

from fastapi import APIRouter

from headercheck.api.models import (
    DescriptorResponse,
    DiagnosticResponse,
    HeaderCheckResponse,
    HeaderFixResponse,
    HeaderRequest,
    MatchResponse,
)
from headercheck.api.routes.templates import parse_or_400
from headercheck.consumers.analyzer import analyze_text
from headercheck.consumers.fixer import fix_text
from headercheck.diagnostics import DESCRIPTORS
from headercheck.utilities.tz import current_values

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/headers/check", response_model=HeaderCheckResponse)
def check_header(request: HeaderRequest):
    """Check a source text's header against a template."""
    template = parse_or_400(request.template)
    values = current_values(request.current_year)
    analysis = analyze_text(request.text, template, values)

    match = None
    if analysis.match is not None:
        match = MatchResponse(
            start=analysis.match.start,
            length=analysis.match.length,
            is_inexact=analysis.match.is_inexact,
            error_messages=list(analysis.match.error_messages),
            update_messages=list(analysis.match.update_messages),
        )

    return HeaderCheckResponse(
        state=analysis.state.value,
        current_year=values.current_year,
        diagnostics=[
            DiagnosticResponse(
                id=d.id,
                severity=d.severity.value,
                message=d.message,
                start=d.start,
                length=d.length,
            )
            for d in analysis.diagnostics
        ],
        match=match,
    )


@router.post("/headers/fix", response_model=HeaderFixResponse)
def fix_header(request: HeaderRequest):
    """Fix a source text's header. Returns the text unchanged if it is correct."""
    template = parse_or_400(request.template)
    values = current_values(request.current_year)
    analysis = analyze_text(request.text, template, values)

    fix = fix_text(request.text, template, analysis.diagnostics, values)
    if fix is None:
        return HeaderFixResponse(text=request.text)

    logger.debug("[FIX] API fix: %s", fix.title)
    return HeaderFixResponse(
        title=fix.title,
        text=fix.text,
        changed=fix.text != request.text,
    )


@router.get("/diagnostics", response_model=list[DescriptorResponse])
def list_diagnostics():
    """List all diagnostic descriptors."""
    return [
        DescriptorResponse(id=d.id, title=d.title, severity=d.severity.value)
        for d in DESCRIPTORS.values()
    ]
