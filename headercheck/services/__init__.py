"""Services - template source discovery and loading."""

from headercheck.services.template_source import (
    TemplateCache,
    TemplateLoad,
    discover_template_files,
    load_header_template,
    parse_template_text,
    select_template_files,
)

__all__ = [
    "TemplateCache",
    "TemplateLoad",
    "discover_template_files",
    "load_header_template",
    "parse_template_text",
    "select_template_files",
]
