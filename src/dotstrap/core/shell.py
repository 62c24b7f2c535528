"""Non-interactive shell command execution."""

from __future__ import annotations

import os
import shutil
import subprocess
import time

from dotstrap.core.logging import get_logger

log = get_logger(__name__)

ENV_OVERRIDES = {
    "LANG": "C",
    "HOMEBREW_NO_COLOR": "1",
    "HOMEBREW_NO_ENV_HINTS": "1",
    "NONINTERACTIVE": "1",
}

EXCERPT_LINES = 5


def run_capture(*cmd: str) -> tuple[str, int]:
    """Run a command to completion with stdin bound to /dev/null.

    stderr is merged into stdout so the caller sees one ordered stream,
    and nothing is written to the terminal. There is no timeout.

    Args:
        *cmd: Command and its arguments to run.

    Returns:
        A tuple of (output, returncode).

    Raises:
        OSError: If the command cannot be started.
    """
    start = time.perf_counter()
    log.debug("command_start", command=" ".join(cmd))

    process = subprocess.run(
        cmd,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        env={**os.environ, **ENV_OVERRIDES},
        check=False,
    )

    duration_ms = int((time.perf_counter() - start) * 1000)
    log.info(
        "command_complete",
        command=" ".join(cmd),
        returncode=process.returncode,
        duration_ms=duration_ms
    )

    return process.stdout.decode(errors="replace").strip(), process.returncode


def probe(*cmd: str) -> bool:
    """Run a read-only check command.

    Returns:
        True if the command exits 0; False on non-zero exit or if the
        tool is not installed.
    """
    try:
        _, code = run_capture(*cmd)
    except FileNotFoundError:
        log.debug("probe_tool_missing", command=" ".join(cmd))
        return False
    return code == 0


def command_exists(name: str) -> bool:
    return shutil.which(name) is not None


def excerpt(output: str, lines: int = EXCERPT_LINES) -> str:
    """First few non-blank lines of command output."""
    kept = [line.rstrip() for line in output.splitlines() if line.strip()]
    return "\n".join(kept[:lines])
