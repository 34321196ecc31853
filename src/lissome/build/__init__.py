"""Gleam to JavaScript build pipeline.

This module provides the staging, compilation, bundling and entry-file
stages, plus the orchestrator that runs them in order.
"""

from .build_config import BuildConfig
from .bundler import EsbuildBundler, find_esbuild
from .compiler import GleamCompiler
from .entry import EntryFile, EntrySynthesizer
from .pipeline import BuildPhase, BuildPipeline, BuildResult, has_gleam_sources, run_build
from .project_stager import ProjectStager

__all__ = [
    "BuildConfig",
    "BuildPhase",
    "BuildPipeline",
    "BuildResult",
    "EntryFile",
    "EntrySynthesizer",
    "EsbuildBundler",
    "GleamCompiler",
    "ProjectStager",
    "find_esbuild",
    "has_gleam_sources",
    "run_build",
]
