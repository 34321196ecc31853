"""esbuild bundling of compiled gleam modules.

esbuild runs once with every compiled module, producing one self-contained
ES module per input in the output directory (same file name as the input).

Binary lookup order:
    1. LISSOME_ESBUILD environment variable
    2. <project_dir>/node_modules/.bin/esbuild (or esbuild.cmd on Windows)
    3. esbuild on PATH
"""

import logging
import os
import shutil
from pathlib import Path
from typing import List, Optional, Sequence

from ..errors import BundlerNotFoundError, BundlingError
from ..output import log_detail
from ..subprocess_utils import ProcessRunner, output_tail, run_tool

logger = logging.getLogger(__name__)

BUNDLE_FLAGS = ("--bundle", "--format=esm")
MISSING_BUNDLER_HINT = "Install esbuild (npm install --save-dev esbuild) or point LISSOME_ESBUILD at the binary."


def find_esbuild(project_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the esbuild binary.

    Args:
        project_dir: Project directory to search for a local node_modules install

    Returns:
        Path to esbuild, or None if not found
    """
    override = os.environ.get("LISSOME_ESBUILD")
    if override:
        return Path(override)

    if project_dir is not None:
        bin_dir = project_dir / "node_modules" / ".bin"
        for name in ("esbuild.cmd", "esbuild"):
            candidate = bin_dir / name
            if candidate.is_file():
                return candidate

    on_path = shutil.which("esbuild")
    return Path(on_path) if on_path else None


def bundle_args(modules: Sequence[Path], minify: bool, out_dir: Path) -> List[str]:
    """Build esbuild's argument list.

    Optional flags go before the positional module paths.
    """
    args = [str(m) for m in modules]
    if minify:
        args = ["--minify"] + args
    return args + list(BUNDLE_FLAGS) + [f"--outdir={out_dir}"]


class EsbuildBundler:
    """Runs esbuild over the compiled modules."""

    def __init__(self, runner: ProcessRunner = run_tool, esbuild_bin: Optional[Path] = None, project_dir: Optional[Path] = None):
        """
        Args:
            runner: Process runner used to invoke esbuild
            esbuild_bin: Explicit esbuild binary (defaults to find_esbuild())
            project_dir: Project directory searched for node_modules/.bin/esbuild
        """
        self.runner = runner
        self.esbuild_bin = esbuild_bin
        self.project_dir = project_dir

    def bundle(self, modules: Sequence[Path], minify: bool, out_dir: Path) -> None:
        """Bundle the modules into out_dir.

        Args:
            modules: Compiled module paths
            minify: Whether to pass --minify
            out_dir: Output directory (created if missing)

        Raises:
            BundlerNotFoundError: If esbuild cannot be located or executed
            BundlingError: If esbuild exits non-zero
        """
        out_dir.mkdir(parents=True, exist_ok=True)

        if not modules:
            logger.debug("No compiled modules, skipping esbuild")
            return

        esbuild = self.esbuild_bin or find_esbuild(self.project_dir)
        if esbuild is None:
            raise BundlerNotFoundError(f"JS Bundling failed: esbuild binary not found. {MISSING_BUNDLER_HINT}")

        cmd = [str(esbuild)] + bundle_args(modules, minify, out_dir)
        log_detail(f"Bundler command: {' '.join(cmd)}", verbose_only=True)

        try:
            result = self.runner(cmd, None)
        except FileNotFoundError as e:
            raise BundlerNotFoundError(f"JS Bundling failed: cannot execute {esbuild}. {MISSING_BUNDLER_HINT}") from e

        if not result.ok:
            details = output_tail(result)
            logger.error("esbuild exited with status %d:\n%s", result.returncode, details)
            message = f"JS Bundling failed. Check that the esbuild binary works. {MISSING_BUNDLER_HINT}"
            if details:
                message = f"{message}\n{details}"
            raise BundlingError(message)
