"""
Tests for the formatter adapter — subprocess contract.

Uses the running Python interpreter as a stand-in formatter so the
tests don't need Deno.
"""

import sys

import pytest

from lemonade_dev.adapters.formatter import (
    DEFAULT_FORMATTER_COMMAND,
    FormatterAdapter,
    FormatterError,
    identity_formatter,
)

UPPERCASE = [sys.executable, "-c", "import sys; sys.stdout.write(sys.stdin.read().upper())"]
ECHO = [sys.executable, "-c", "import sys; sys.stdout.write(sys.stdin.read())"]
FAIL = [sys.executable, "-c", "import sys; sys.stderr.write('bad input'); sys.exit(3)"]


class TestFormatterAdapter:
    def test_default_command(self):
        assert FormatterAdapter().command == list(DEFAULT_FORMATTER_COMMAND)
        assert FormatterAdapter().name == "deno"

    def test_stdout_is_result(self):
        assert FormatterAdapter(UPPERCASE)("const x = 1;\n") == "CONST X = 1;\n"

    def test_callable_and_format_agree(self):
        fmt = FormatterAdapter(ECHO)
        assert fmt("a") == fmt.format("a") == "a"

    def test_utf8_roundtrip(self):
        assert FormatterAdapter(ECHO)('"./über.island.tsx"') == '"./über.island.tsx"'

    def test_large_input(self):
        text = "import * as $0 from './routes/+page.tsx';\n" * 20000
        assert FormatterAdapter(ECHO)(text) == text

    def test_non_zero_exit(self):
        with pytest.raises(FormatterError, match="exited with code 3") as exc_info:
            FormatterAdapter(FAIL)("x")
        assert exc_info.value.returncode == 3

    def test_missing_binary(self):
        with pytest.raises(FormatterError, match="Cannot run formatter"):
            FormatterAdapter(["lemonade-no-such-formatter-binary", "-"])("x")

    def test_empty_command_rejected(self):
        with pytest.raises(ValueError):
            FormatterAdapter([])

    def test_is_available(self):
        assert FormatterAdapter([sys.executable]).is_available() is True
        assert FormatterAdapter(["lemonade-no-such-formatter-binary"]).is_available() is False


class TestIdentityFormatter:
    def test_passthrough(self):
        assert identity_formatter("  messy  ") == "  messy  "
