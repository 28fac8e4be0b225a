"""Tests for the command line interface."""

import pytest

from headercheck import cli
from headercheck.services.template_source import TemplateCache

TEMPLATE = "# Copyright (c) {YearRange} Contoso\n"


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """Leave pytest's log handlers alone."""
    monkeypatch.setattr(cli, "setup_logging", lambda level=None: None)
    TemplateCache.clear()


@pytest.fixture
def project(tmp_path, monkeypatch):
    (tmp_path / "Header.template").write_text(TEMPLATE, encoding="utf-8")
    src = tmp_path / "src"
    src.mkdir()
    (src / "good.py").write_text("# Copyright (c) 2024 Contoso\nx = 1\n", encoding="utf-8")
    (src / "bad.py").write_text("x = 1\n", encoding="utf-8")
    (src / "notes.txt").write_text("not checked\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestCheckCommand:
    def test_reports_errors(self, project, capsys):
        exit_code = cli.main(["check", "--year", "2024", "src"])

        out = capsys.readouterr().out
        assert exit_code == 1
        assert "bad.py:0: SHA0002 error: The file does not have the correct header." in out
        assert "good.py" not in out
        assert "2 files checked, 1 with errors, 0 fixed" in out

    def test_clean_tree(self, project, capsys):
        exit_code = cli.main(["check", "--year", "2024", "src/good.py"])
        assert exit_code == 0
        assert "1 files checked, 0 with errors, 0 fixed" in capsys.readouterr().out

    def test_fix_writes_files(self, project, capsys):
        cli.main(["check", "--year", "2024", "--fix", "src"])

        assert (project / "src" / "bad.py").read_text(encoding="utf-8") == (
            "# Copyright (c) 2024 Contoso\nx = 1\n"
        )
        assert "fixed (Insert header)" in capsys.readouterr().out

    def test_explicit_template(self, project, capsys):
        custom = project / "custom_header.txt"
        custom.write_text("# Licensed MIT\n", encoding="utf-8")

        exit_code = cli.main(["check", "--year", "2024", "--template", str(custom), "src/good.py"])

        assert exit_code == 1
        assert "SHA0002" in capsys.readouterr().out

    def test_missing_template(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "a.py").write_text("x = 1\n", encoding="utf-8")

        exit_code = cli.main(["check", "--year", "2024", "a.py"])

        assert exit_code == 1
        assert "SHA0000" in capsys.readouterr().out

    def test_extension_filter(self, project, capsys):
        exit_code = cli.main(["check", "--year", "2024", "--ext", ".txt", "src"])
        assert exit_code == 1
        assert "notes.txt" in capsys.readouterr().out

    def test_invalid_year(self, project):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["check", "--year", "999", "src"])
        assert exc_info.value.code == 2
