"""Tests for Rich Console factory and theme."""

from io import StringIO

from dqcatalog.output.console import (
    DQ_THEME,
    create_console,
    get_output,
    style_for_severity,
    style_for_source,
)


class TestCreateConsole:
    def test_returns_console_with_stringio(self) -> None:
        assert isinstance(create_console().file, StringIO)

    def test_no_color_disables_ansi(self) -> None:
        console = create_console(no_color=True)
        console.print("[dq.error]boom[/dq.error]")
        output = get_output(console)
        assert "\x1b" not in output
        assert "boom" in output

    def test_widths(self) -> None:
        assert create_console().width == 120
        assert create_console(width=80).width == 80


class TestStyles:
    def test_severity_styles_exist_in_theme(self) -> None:
        for severity in ("critical", "high", "medium", "low", "warning"):
            assert style_for_severity(severity) in DQ_THEME.styles

    def test_empty_severity(self) -> None:
        assert style_for_severity("") == ""

    def test_source_styles(self) -> None:
        assert style_for_source("alias:email") == "blue"
        assert style_for_source("core:string") == "green"
        assert style_for_source("nullable:false") == "magenta"
        assert style_for_source("mystery") == ""
