"""Template API endpoints."""

from fastapi import APIRouter, HTTPException, status

from header_template import (
    HeaderTemplate,
    NameSegment,
    Segment,
    TemplateParseError,
    TextSegment,
    YearRangeSegment,
    YearSegment,
    parse_template,
)
from headercheck.api.models import (
    SegmentResponse,
    TemplateValidateRequest,
    TemplateValidateResponse,
)
from headercheck.utilities.tz import current_values

router = APIRouter()


def parse_or_400(source: str) -> HeaderTemplate:
    """Parse template source, turning syntax errors into HTTP 400."""
    try:
        return parse_template(source)
    except TemplateParseError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        ) from e


def _segment_response(segment: Segment) -> SegmentResponse:
    if isinstance(segment, TextSegment):
        return SegmentResponse(kind="text", text=segment.literal)
    if isinstance(segment, YearSegment):
        return SegmentResponse(kind="year")
    if isinstance(segment, YearRangeSegment):
        return SegmentResponse(kind="year_range")
    if isinstance(segment, NameSegment):
        return SegmentResponse(kind="name", text=segment.default_name)
    raise TypeError(f"Unknown template segment type: {type(segment).__name__}")


@router.post("/templates/validate", response_model=TemplateValidateResponse)
def validate_template(request: TemplateValidateRequest):
    """Parse a template and show its segments and a fresh rendering."""
    template = parse_or_400(request.template)
    return TemplateValidateResponse(
        segments=[_segment_response(s) for s in template.segments],
        rendered=template.evaluate(current_values()).text,
    )
