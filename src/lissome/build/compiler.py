"""Gleam to JavaScript compilation.

Runs `gleam build --target javascript` in the staged package directory and
collects the emitted ES modules from build/dev/javascript/<app>/. The
runtime-support module gleam.mjs is a dependency of the others, not an entry
point, so it is left out.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import List, Optional

from ..errors import CompilationError
from ..output import log_detail, log_warning
from ..subprocess_utils import ProcessRunner, output_tail, run_tool
from .project_stager import manifest_name

logger = logging.getLogger(__name__)

COMPILED_EXT = ".mjs"
RUNTIME_MODULE = "gleam.mjs"


def find_gleam() -> str:
    """Locate the gleam binary.

    Priority: LISSOME_GLEAM environment variable > gleam on PATH > "gleam".
    """
    override = os.environ.get("LISSOME_GLEAM")
    if override:
        return override
    return shutil.which("gleam") or "gleam"


def compiled_output_dir(package_dir: Path, app_name: str) -> Path:
    return package_dir / "build" / "dev" / "javascript" / app_name


def list_compiled_modules(out_dir: Path) -> List[Path]:
    """List compiled entry-point candidates, sorted by file name."""
    if not out_dir.is_dir():
        return []
    return sorted(
        path
        for path in out_dir.iterdir()
        if path.is_file() and path.name.endswith(COMPILED_EXT) and path.name != RUNTIME_MODULE
    )


class GleamCompiler:
    """Invokes the gleam compiler for the JavaScript target."""

    def __init__(self, app_name: str, runner: ProcessRunner = run_tool, gleam_bin: Optional[str] = None):
        """
        Args:
            app_name: Gleam application name (names the output directory)
            runner: Process runner used to invoke gleam
            gleam_bin: Explicit gleam binary (defaults to find_gleam())
        """
        self.app_name = app_name
        self.runner = runner
        self.gleam_bin = gleam_bin or find_gleam()

    def command(self) -> List[str]:
        return [self.gleam_bin, "build", "--target", "javascript"]

    def compile(self, package_dir: Path) -> List[Path]:
        """Compile the package and return the compiled module paths.

        Args:
            package_dir: Directory containing the active gleam.toml

        Returns:
            Paths of the emitted .mjs modules, excluding gleam.mjs

        Raises:
            CompilationError: If gleam cannot be run or exits non-zero
        """
        cmd = self.command()
        log_detail(f"Compiler command: {' '.join(cmd)}", verbose_only=True)

        try:
            result = self.runner(cmd, package_dir)
        except FileNotFoundError as e:
            raise CompilationError(f"JS Compilation failed: gleam binary not found ({self.gleam_bin})") from e

        if not result.ok:
            details = output_tail(result)
            logger.error("gleam build exited with status %d:\n%s", result.returncode, details)
            message = "JS Compilation failed"
            if details:
                message = f"{message}\n{details}"
            raise CompilationError(message)

        out_dir = compiled_output_dir(package_dir, manifest_name(package_dir) or self.app_name)
        modules = list_compiled_modules(out_dir)
        if not modules:
            log_warning(f"gleam emitted no JavaScript modules in {out_dir}")
        logger.debug("Compiled modules: %s", [m.name for m in modules])
        return modules
