"""
Gleam JavaScript build pipeline.

Sequences the build stages:

    Discover -> (no sources: Skipped) -> Stage -> Compile -> Bundle -> Entries -> Done

Every stage is one blocking call; the first BuildError moves the pipeline to
FAILED and propagates to the caller. Entry files are only written once
esbuild succeeded, so a half-bundled build never looks complete.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from ..errors import BuildError
from ..output import TimedLogger, log, log_build_complete, log_detail, log_error
from ..subprocess_utils import ProcessRunner, run_tool
from .build_config import BuildConfig
from .bundler import EsbuildBundler
from .compiler import GleamCompiler
from .entry import EntrySynthesizer
from .project_stager import ProjectStager

logger = logging.getLogger(__name__)

SOURCE_EXT = ".gleam"
TOTAL_PHASES = 4
NO_SOURCES_MESSAGE = "No .gleam files in src/, skipping JavaScript compilation"


class BuildPhase(Enum):
    """Phase the pipeline is in (or ended in)."""

    DISCOVER = "discover"
    SKIPPED = "skipped"
    STAGE = "stage"
    COMPILE = "compile"
    BUNDLE = "bundle"
    ENTRIES = "entries"
    DONE = "done"
    FAILED = "failed"


@dataclass
class BuildResult:
    """Result of a pipeline run.

    Attributes:
        phase: Terminal phase (DONE or SKIPPED)
        compiled: Compiled module paths handed to the bundler
        entries: Entry files written
        output_dir: Bundle output directory (None when skipped)
        build_time: Wall time in seconds
        message: Human-readable summary
    """

    phase: BuildPhase
    compiled: List[Path] = field(default_factory=list)
    entries: List[Path] = field(default_factory=list)
    output_dir: Optional[Path] = None
    build_time: float = 0.0
    message: str = ""

    @property
    def skipped(self) -> bool:
        return self.phase is BuildPhase.SKIPPED


def has_gleam_sources(project_dir: Path) -> bool:
    """True if project_dir/src directly contains a .gleam file."""
    src = project_dir / "src"
    if not src.is_dir():
        return False
    return any(p.name.endswith(SOURCE_EXT) for p in src.iterdir())


class BuildPipeline:
    """Orchestrates one full compile + bundle pass."""

    def __init__(
        self,
        config: BuildConfig,
        runner: ProcessRunner = run_tool,
        stager: Optional[ProjectStager] = None,
        compiler: Optional[GleamCompiler] = None,
        bundler: Optional[EsbuildBundler] = None,
        entries: Optional[EntrySynthesizer] = None,
    ):
        self.config = config
        self.stager = stager or ProjectStager(config.project_dir, config.app_build_dir)
        self.compiler = compiler or GleamCompiler(config.app_name, runner=runner)
        self.bundler = bundler or EsbuildBundler(runner=runner, project_dir=config.project_dir)
        self.entries = entries or EntrySynthesizer()
        self.phase = BuildPhase.DISCOVER

    def run(self) -> BuildResult:
        """Run the pipeline.

        Returns:
            BuildResult; phase is SKIPPED when there are no gleam sources

        Raises:
            BuildError: If compilation or bundling fails
        """
        start_time = time.time()
        config = self.config

        if not has_gleam_sources(config.project_dir):
            self.phase = BuildPhase.SKIPPED
            log(NO_SOURCES_MESSAGE)
            return BuildResult(phase=self.phase, message="No gleam sources")

        try:
            self.phase = BuildPhase.STAGE
            with TimedLogger("Staging gleam project", phase=(1, TOTAL_PHASES)) as timed:
                package_dir = self.stager.stage(config.app_name)
                timed.detail(f"Package: {package_dir}")

            self.phase = BuildPhase.COMPILE
            with TimedLogger(f"Compiling {config.app_name} gleam frontend to javascript", phase=(2, TOTAL_PHASES)) as timed:
                compiled = self.compiler.compile(package_dir)
                timed.detail(f"{len(compiled)} module(s)")

            self.phase = BuildPhase.BUNDLE
            mode = "minified" if config.minify else "unminified"
            with TimedLogger(f"Bundling {len(compiled)} module(s) with esbuild ({mode})", phase=(3, TOTAL_PHASES)):
                self.bundler.bundle(compiled, config.minify, config.output_dir)

            self.phase = BuildPhase.ENTRIES
            with TimedLogger("Writing entry files", phase=(4, TOTAL_PHASES)):
                entries = self.entries.write_entries(compiled, config.output_dir)
        except BuildError as e:
            failed_in = self.phase
            self.phase = BuildPhase.FAILED
            logger.debug("Build failed during %s", failed_in.value)
            log_error(e.message.partition("\n")[0])
            raise

        self.phase = BuildPhase.DONE
        build_time = time.time() - start_time
        log_detail(f"Output: {config.output_dir}")
        log_build_complete(build_time)
        return BuildResult(
            phase=self.phase,
            compiled=compiled,
            entries=entries,
            output_dir=config.output_dir,
            build_time=build_time,
            message=f"Built {len(entries)} entry file(s)",
        )


def run_build(project_dir: Path, minify: bool = False, runner: ProcessRunner = run_tool) -> BuildResult:
    """Resolve the config for project_dir and run the full pipeline.

    Skips before reading any metadata when there are no gleam sources.
    """
    if not has_gleam_sources(project_dir):
        log(NO_SOURCES_MESSAGE)
        return BuildResult(phase=BuildPhase.SKIPPED, message="No gleam sources")
    config = BuildConfig.from_project(project_dir, minify=minify)
    return BuildPipeline(config, runner=runner).run()
