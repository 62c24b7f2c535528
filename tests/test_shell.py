"""
Tests for non-interactive command execution.
"""

import sys

import pytest

from dotstrap.core.shell import ENV_OVERRIDES, command_exists, excerpt, probe, run_capture

MISSING_TOOL = "dotstrap-definitely-missing-tool"


class TestRunCapture:

    def test_stdin_is_empty(self):
        output, code = run_capture(
            sys.executable, "-c", "import sys; print(len(sys.stdin.read()))"
        )
        assert code == 0
        assert output == "0"

    def test_stderr_is_merged(self):
        output, code = run_capture(
            sys.executable, "-c",
            "import sys; print('out'); sys.stdout.flush(); print('err', file=sys.stderr); sys.exit(3)",
        )
        assert code == 3
        assert "out" in output and "err" in output

    def test_environment_overrides(self):
        output, _ = run_capture(
            sys.executable, "-c", "import os; print(os.environ['NONINTERACTIVE'])"
        )
        assert output == ENV_OVERRIDES["NONINTERACTIVE"]

    def test_missing_tool_raises(self):
        with pytest.raises(FileNotFoundError):
            run_capture(MISSING_TOOL, "--version")


class TestProbe:

    def test_zero_exit_is_true(self):
        assert probe(sys.executable, "-c", "pass")

    def test_non_zero_exit_is_false(self):
        assert not probe(sys.executable, "-c", "raise SystemExit(1)")

    def test_missing_tool_is_false(self):
        assert not probe(MISSING_TOOL, "list")

    def test_command_exists(self):
        assert command_exists(sys.executable)
        assert not command_exists(MISSING_TOOL)


class TestExcerpt:

    def test_keeps_first_lines(self):
        output = "\n".join(f"line {i}" for i in range(20))
        assert excerpt(output).splitlines() == [f"line {i}" for i in range(5)]

    def test_skips_blank_lines(self):
        assert excerpt("\n\nError: nothing provides foo\n\n") == "Error: nothing provides foo"

    def test_empty_output(self):
        assert excerpt("") == ""
