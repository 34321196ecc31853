"""Subprocess utilities for running the external gleam and esbuild tools.

Every toolchain call goes through a ProcessRunner: a callable taking the
command and working directory and returning a ToolResult. The pipeline
components accept a runner argument so tests can substitute a fake one.
"""

import logging
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one external tool invocation."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


ProcessRunner = Callable[[Sequence[str], Optional[Path]], ToolResult]


def get_subprocess_creation_flags() -> int:
    """Get platform-specific subprocess creation flags.

    Returns:
        - Windows: subprocess.CREATE_NO_WINDOW (prevents console window)
        - Other platforms: 0 (no special flags)
    """
    if sys.platform == "win32":
        return subprocess.CREATE_NO_WINDOW
    return 0


def safe_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
    """Execute subprocess.run with platform-specific flags.

    Automatically applies:
    - CREATE_NO_WINDOW on Windows (prevents console window)
    - stdin=DEVNULL (keeps the child from reading the parent terminal)

    Note:
        - An explicit 'creationflags' is OR'd with the platform default.
        - An explicit 'stdin' is used as-is.
    """
    default_flags = get_subprocess_creation_flags()

    if "creationflags" in kwargs:
        kwargs["creationflags"] = kwargs["creationflags"] | default_flags
    elif default_flags:
        kwargs["creationflags"] = default_flags

    if "stdin" not in kwargs:
        kwargs["stdin"] = subprocess.DEVNULL

    return subprocess.run(cmd, **kwargs)


def run_tool(cmd: Sequence[str], cwd: Optional[Path] = None) -> ToolResult:
    """Run an external tool to completion and capture its output.

    There is no timeout: a hung compiler hangs the build.

    Args:
        cmd: Command and arguments
        cwd: Working directory for the process (defaults to the current one)

    Returns:
        ToolResult with the exit status and decoded output

    Raises:
        FileNotFoundError: If the executable does not exist
    """
    logger.debug("Running %s (cwd=%s)", " ".join(str(c) for c in cmd), cwd)
    result = safe_run(
        [str(c) for c in cmd],
        cwd=str(cwd) if cwd is not None else None,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        check=False,
    )
    logger.debug("Exit status %d", result.returncode)
    return ToolResult(returncode=result.returncode, stdout=result.stdout or "", stderr=result.stderr or "")


def output_tail(result: ToolResult, lines: int = 20) -> str:
    """Last few lines of a tool's stderr (or stdout when stderr is empty)."""
    text = result.stderr.strip() or result.stdout.strip()
    return "\n".join(text.splitlines()[-lines:])
