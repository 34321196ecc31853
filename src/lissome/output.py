"""
Timestamped user-facing output for lissome builds.

Every line is prefixed with the time elapsed since the build started, in
MM:SS.cc format, so a slow toolchain step is easy to spot:

    00:00.01 lissome v0.1.0
    00:00.02 [1/4] Staging gleam project...
    00:00.03       Package: _build/lib/my_app
    00:01.87 [2/4] Compiling my_app gleam frontend to javascript...
    00:02.40 [3/4] Bundling 3 modules with esbuild...

Debug chatter does not belong here; modules use ``logging`` for that.

Usage:
    from lissome.output import log, log_phase, log_detail

    log_phase(1, 4, "Staging gleam project...")
    log_detail("Package: _build/lib/my_app")
"""

import sys
import time
from pathlib import Path
from types import TracebackType
from typing import Optional, TextIO

_start_time: Optional[float] = None
_output_stream: TextIO = sys.stdout
_verbose: bool = True


def init_timer(output_stream: Optional[TextIO] = None) -> None:
    """
    Set the reference time for all timestamps.

    Called lazily by the first log line if the program never calls it.

    Args:
        output_stream: Stream to write to (defaults to sys.stdout)
    """
    global _start_time, _output_stream
    _start_time = time.time()
    if output_stream is not None:
        _output_stream = output_stream


def set_verbose(verbose: bool) -> None:
    """Enable or disable lines logged with ``verbose_only=True``."""
    global _verbose
    _verbose = verbose


def get_elapsed() -> float:
    """Seconds elapsed since init_timer()."""
    if _start_time is None:
        init_timer()
    return time.time() - _start_time  # type: ignore


def format_timestamp() -> str:
    elapsed = get_elapsed()
    minutes = int(elapsed // 60)
    seconds = elapsed % 60
    return f"{minutes:02d}:{seconds:05.2f}"


def _print(message: str) -> None:
    _output_stream.write(f"{format_timestamp()} {message}\n")
    _output_stream.flush()


def log(message: str, verbose_only: bool = False) -> None:
    """
    Log a message with timestamp.

    Args:
        message: Message to log
        verbose_only: If True, only print if verbose mode is enabled
    """
    if verbose_only and not _verbose:
        return
    _print(message)


def log_phase(phase: int, total: int, message: str, verbose_only: bool = False) -> None:
    """
    Log a pipeline phase as ``[N/M] message``.

    Args:
        phase: Current phase number
        total: Total number of phases
        message: Phase description
        verbose_only: If True, only print if verbose mode is enabled
    """
    if verbose_only and not _verbose:
        return
    _print(f"[{phase}/{total}] {message}")


def log_detail(message: str, indent: int = 6, verbose_only: bool = False) -> None:
    """Log an indented detail line under the current phase."""
    if verbose_only and not _verbose:
        return
    _print(f"{' ' * indent}{message}")


def log_header(title: str, version: str) -> None:
    _print(f"{title} v{version}")


def log_artifact(kind: str, path: Path, verbose_only: bool = True) -> None:
    """
    Log a produced build artifact.

    Format: [kind] path

    Args:
        kind: Artifact kind (e.g., 'bundle', 'entry')
        path: Path of the written file
        verbose_only: If True, only print if verbose mode is enabled
    """
    if verbose_only and not _verbose:
        return
    _print(f"      [{kind}] {path}")


def log_build_complete(build_time: float, verbose_only: bool = False) -> None:
    if verbose_only and not _verbose:
        return
    _print(f"Build time: {build_time:.2f}s")


def log_error(message: str) -> None:
    _print(f"ERROR: {message}")


def log_warning(message: str) -> None:
    _print(f"WARNING: {message}")


class TimedLogger:
    """
    Context manager that logs an operation and how long it took.

    Usage:
        with TimedLogger("Bundling", phase=(3, 4)) as timed:
            timed.detail("3 modules")
        # logs "Done (0.53s)" when the block exits without an exception
    """

    def __init__(self, operation: str, phase: Optional[tuple[int, int]] = None, verbose_only: bool = False):
        self.operation = operation
        self.phase = phase
        self.verbose_only = verbose_only
        self.start_time = 0.0

    def __enter__(self) -> "TimedLogger":
        self.start_time = time.time()
        if self.phase:
            log_phase(self.phase[0], self.phase[1], f"{self.operation}...", self.verbose_only)
        else:
            log(f"{self.operation}...", self.verbose_only)
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        del exc_val, exc_tb  # Unused
        if exc_type is None:
            elapsed = time.time() - self.start_time
            log_detail(f"Done ({elapsed:.2f}s)", verbose_only=self.verbose_only)
        return None

    def detail(self, message: str) -> None:
        log_detail(message, verbose_only=self.verbose_only)
