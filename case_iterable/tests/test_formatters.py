"""
Tests for the post-processing formatters.
"""

from __future__ import annotations

import pytest

from case_iterable import CaseIterableGenerator, GeneratorConfig
from case_iterable.pipeline.config import FormatterConfig
from case_iterable.pipeline.formatters import BlackFormatter, Formatter, FormattingFailed, RuffFormatter, get_formatter

UNFORMATTED = "x = {'a':1}\n"

SOURCE = "from enum import Enum\n\nclass Color(Enum):\n    RED = 'red'\n    GREEN = 'green'\n"


class TestGetFormatter:
    def test_backends(self):
        assert isinstance(get_formatter(FormatterConfig(backend="ruff")), RuffFormatter)
        assert isinstance(get_formatter(FormatterConfig(backend="black")), BlackFormatter)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            get_formatter(FormatterConfig(backend="yapf"))


@pytest.mark.parametrize("formatter_class", [RuffFormatter, BlackFormatter])
class TestFormatters:
    def test_format(self, formatter_class):
        formatter = formatter_class()
        if not formatter.is_available():
            pytest.skip(f"{formatter_class.__name__} not available")
        assert formatter.format(UNFORMATTED, FormatterConfig(enabled=True)) == 'x = {"a": 1}\n'

    def test_invalid_code_returned_unchanged(self, formatter_class):
        formatter = formatter_class()
        if not formatter.is_available():
            pytest.skip(f"{formatter_class.__name__} not available")
        assert formatter.format("def (", FormatterConfig(enabled=True)) == "def ("

    def test_generated_code_is_formatted(self, formatter_class):
        if not formatter_class().is_available():
            pytest.skip(f"{formatter_class.__name__} not available")
        backend = "ruff" if formatter_class is RuffFormatter else "black"
        config = GeneratorConfig(formatter=FormatterConfig(enabled=True, backend=backend))
        code = CaseIterableGenerator(config).derive(SOURCE)
        assert "RED = \"red\"" in code
        assert "\n\n\nclass ColorIterator:" in code


class UppercaseFormatter(Formatter):
    tool = "upper"

    def __init__(self, installed=True, fails=False):
        super().__init__()
        self.installed = installed
        self.fails = fails
        self.detections = 0

    def _detect(self):
        self.detections += 1
        return self.installed

    def _format(self, code, config):
        if self.fails:
            raise FormattingFailed("cannot parse")
        return code.upper()


class TestSharedFormatterBehavior:
    def test_formats_when_available(self):
        assert UppercaseFormatter().format("x = 1\n", FormatterConfig()) == "X = 1\n"

    def test_missing_tool_leaves_code_unchanged(self, caplog):
        formatter = UppercaseFormatter(installed=False)
        with caplog.at_level("WARNING"):
            assert formatter.format("x = 1\n", FormatterConfig()) == "x = 1\n"
        assert "upper is not installed" in caplog.text

    def test_failure_leaves_code_unchanged(self, caplog):
        formatter = UppercaseFormatter(fails=True)
        with caplog.at_level("WARNING"):
            assert formatter.format("x = 1\n", FormatterConfig()) == "x = 1\n"
        assert "cannot parse" in caplog.text

    def test_detection_runs_once(self):
        formatter = UppercaseFormatter()
        formatter.format("a\n", FormatterConfig())
        formatter.format("b\n", FormatterConfig())
        assert formatter.is_available()
        assert formatter.detections == 1
