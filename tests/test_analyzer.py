"""Tests for header analysis and fixes.

Each scenario checks the diagnostics reported for a source text and
what fixing them produces.
"""

import pytest

from core import DynamicValues
from header_template import parse_template
from headercheck.consumers.analyzer import (
    HeaderState,
    analyze_text,
    analyze_with_template_load,
    top_line_span,
)
from headercheck.consumers.fixer import fix_text, fix_title
from headercheck.diagnostics import (
    INCORRECT_HEADER,
    IS_INSERT_ONLY,
    MISPLACED_HEADER,
    create_diagnostic,
)
from headercheck.services.template_source import TemplateLoad, parse_template_text

VALUES_2024 = DynamicValues(2024)
HEADER = "// Copyright (c) 2024 Contoso\n"


@pytest.fixture
def template():
    return parse_template("// Copyright (c) {YearRange} Contoso\n")


def _ids(analysis):
    return [d.id for d in analysis.diagnostics]


class TestTopLineSpan:
    """Location used when there is no header."""

    def test_first_line(self):
        assert top_line_span("import os\nx = 1\n") == (0, 9)

    def test_skips_blank_lines(self):
        assert top_line_span("\n\n  x = 1\ny") == (0, 9)

    def test_crlf(self):
        assert top_line_span("\r\nabc\r\n") == (0, 5)

    def test_all_blank(self):
        assert top_line_span("  \n") == (0, 3)

    def test_empty(self):
        assert top_line_span("") == (0, 0)


class TestAnalyze:
    """Diagnostics per header state."""

    def test_exact_header(self, template):
        analysis = analyze_text(HEADER + "import os\n", template, VALUES_2024)
        assert analysis.state == HeaderState.HEADER_MATCHED_EXACT
        assert analysis.diagnostics == []
        assert analysis.has_errors is False

    def test_missing_header(self, template):
        analysis = analyze_text("import os\n", template, VALUES_2024)
        assert analysis.state == HeaderState.HEADER_ABSENT
        assert _ids(analysis) == ["SHA0002"]
        diagnostic = analysis.diagnostics[0]
        assert diagnostic.is_insert_only
        assert (diagnostic.start, diagnostic.length) == (0, 9)

    def test_misplaced_header(self, template):
        prefix = "#!/usr/bin/env python\n"
        analysis = analyze_text(prefix + HEADER, template, VALUES_2024)
        assert analysis.state == HeaderState.HEADER_MATCHED_EXACT
        assert _ids(analysis) == ["SHA0003"]
        assert (analysis.diagnostics[0].start, analysis.diagnostics[0].length) == (0, len(prefix))

    def test_inexact_header(self, template):
        analysis = analyze_text("// Copyright © 2024 Contoso\n", template, VALUES_2024)
        assert analysis.state == HeaderState.HEADER_MATCHED_INEXACT
        assert _ids(analysis) == ["SHA0002"]
        assert not analysis.diagnostics[0].is_insert_only

    def test_stale_header_is_info(self, template):
        analysis = analyze_text("// Copyright (c) 2019 Contoso\n", template, VALUES_2024)
        assert analysis.state == HeaderState.HEADER_MATCHED_EXACT
        assert _ids(analysis) == ["SHA0004"]
        assert analysis.diagnostics[0].message == "The current year is 2024."
        assert analysis.has_errors is False

    def test_invalid_year(self, template):
        analysis = analyze_text("// Copyright (c) 2019-2030 Contoso\n", template, VALUES_2024)
        assert _ids(analysis) == ["SHA0002", "SHA0005"]
        assert analysis.diagnostics[1].message == "The year 2030 is invalid. The current year is 2024."
        assert analysis.has_errors is True


class TestAnalyzeWithTemplateLoad:
    """Template problems are reported per file."""

    def test_template_diagnostic_on_top_line(self):
        load = parse_template_text("{Foo}", "Header.template")
        analysis = analyze_with_template_load("\nimport os\n", load, VALUES_2024)
        assert analysis.state == HeaderState.TEMPLATE_INVALID
        assert _ids(analysis) == ["SHA0001"]
        assert (analysis.diagnostics[0].start, analysis.diagnostics[0].length) == (0, 10)

    def test_disabled(self):
        analysis = analyze_with_template_load("import os\n", TemplateLoad(), VALUES_2024)
        assert analysis.state == HeaderState.CHECK_DISABLED
        assert analysis.diagnostics == []


class TestFixTitle:
    """Fix titles follow the kinds of diagnostics being fixed."""

    def test_insert(self):
        diagnostic = create_diagnostic(INCORRECT_HEADER, properties={IS_INSERT_ONLY: "True"})
        assert fix_title([diagnostic]) == "Insert header"

    def test_move(self):
        assert fix_title([create_diagnostic(MISPLACED_HEADER)]) == "Move below header"

    def test_update_and_move(self):
        diagnostics = [create_diagnostic(MISPLACED_HEADER), create_diagnostic(INCORRECT_HEADER)]
        assert fix_title(diagnostics) == "Update and move header"

    def test_update(self):
        assert fix_title([create_diagnostic(INCORRECT_HEADER)]) == "Update header"


class TestFix:
    """Fixing produces a text whose header checks clean."""

    def _fix(self, template, text):
        analysis = analyze_text(text, template, VALUES_2024)
        return fix_text(text, template, analysis.diagnostics, VALUES_2024)

    def test_insert(self, template):
        fix = self._fix(template, "import os\n")
        assert fix.title == "Insert header"
        assert fix.text == HEADER + "import os\n"

    def test_update_keeps_start_year(self, template):
        fix = self._fix(template, "// Copyright (c) 2019 Contoso\nimport os\n")
        assert fix.title == "Update header"
        assert fix.text == "// Copyright (c) 2019–2024 Contoso\nimport os\n"

    def test_update_inexact(self, template):
        fix = self._fix(template, "// Copyright ©   2019 Contoso\n")
        assert fix.title == "Update header"
        assert fix.text == "// Copyright (c) 2019–2024 Contoso\n"

    def test_move(self, template):
        fix = self._fix(template, "#!x\n" + HEADER + "body\n")
        assert fix.title == "Move below header"
        assert fix.text == HEADER + "#!x\nbody\n"

    def test_update_and_move(self, template):
        fix = self._fix(template, "#!x\n// Copyright (c) 2020 Contoso\nbody\n")
        assert fix.title == "Update and move header"
        assert fix.text == "// Copyright (c) 2020–2024 Contoso\n#!x\nbody\n"

    def test_nothing_to_fix(self, template):
        assert self._fix(template, HEADER) is None

    @pytest.mark.parametrize(
        "text",
        [
            "import os\n",
            "// Copyright (c) 2019 Contoso\nimport os\n",
            "#!x\n// Copyright © 2020 Contoso\nbody\n",
        ],
    )
    def test_fixed_text_is_clean(self, template, text):
        fixed = self._fix(template, text).text
        analysis = analyze_text(fixed, template, VALUES_2024)
        assert analysis.state == HeaderState.HEADER_MATCHED_EXACT
        assert analysis.diagnostics == []
