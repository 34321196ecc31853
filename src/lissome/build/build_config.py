"""Build Config - per-run settings for the gleam JavaScript build.

BuildConfig is created once per pipeline run from the caller's flags merged
with project metadata (pyproject.toml, or a root gleam.toml), then passed
unchanged to every stage.

Metadata lookup:
    [tool.lissome]
    app = "my_app"          # application name (else [project].name)
    build_root = "_build"   # relative to the project directory
    minify = false          # OR'd with the --minify flag
"""

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_BUILD_ROOT = "_build"
STATIC_OUTPUT_SUBDIR = Path("priv") / "static" / "gleam"


@dataclass(frozen=True)
class BuildConfig:
    """Immutable settings for one pipeline run.

    Attributes:
        app_name: Gleam application name, used for the synthesized gleam.toml
            and the compiler output directory
        minify: Whether esbuild should minify the bundles
        build_root: Root of all build artifacts
        project_dir: Directory holding src/ (the caller's working directory)
    """

    app_name: str
    minify: bool
    build_root: Path
    project_dir: Path

    @property
    def app_build_dir(self) -> Path:
        """Staging directory for this application inside the build root."""
        return self.build_root / "lib" / self.app_name

    @property
    def output_dir(self) -> Path:
        """Directory receiving bundles and entry files."""
        return self.app_build_dir / STATIC_OUTPUT_SUBDIR

    @classmethod
    def from_project(cls, project_dir: Path, minify: bool = False) -> "BuildConfig":
        """Create a BuildConfig from project metadata and caller flags.

        Args:
            project_dir: Project directory
            minify: Value of the --minify flag

        Returns:
            Resolved BuildConfig

        Raises:
            ConfigurationError: If no application name can be found or the
                metadata cannot be parsed
        """
        project_dir = project_dir.resolve()
        settings = _read_tool_settings(project_dir)

        app_name = resolve_app_name(project_dir)

        build_root_value = settings.get("build_root") or os.environ.get("LISSOME_BUILD_ROOT") or DEFAULT_BUILD_ROOT
        build_root = Path(build_root_value)
        if not build_root.is_absolute():
            build_root = project_dir / build_root

        config = cls(
            app_name=app_name,
            minify=bool(minify or settings.get("minify", False)),
            build_root=build_root,
            project_dir=project_dir,
        )
        logger.debug("Resolved build config: %s", config)
        return config


def load_toml(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Failed to parse {path}: {e}") from e


def _read_tool_settings(project_dir: Path) -> Dict[str, Any]:
    pyproject = load_toml(project_dir / "pyproject.toml")
    settings = pyproject.get("tool", {}).get("lissome", {})
    if not isinstance(settings, dict):
        raise ConfigurationError("[tool.lissome] in pyproject.toml must be a table")
    return settings


def _normalize_app_name(name: str) -> str:
    return name.strip().lower().replace("-", "_").replace(".", "_")


def resolve_app_name(project_dir: Path) -> str:
    """Find the application name in the project metadata.

    Priority: [tool.lissome].app > [project].name in pyproject.toml > name
    in a root gleam.toml.

    Raises:
        ConfigurationError: If none of the sources defines a name
    """
    pyproject = load_toml(project_dir / "pyproject.toml")
    candidates: list[Optional[str]] = [
        _read_tool_settings(project_dir).get("app"),
        pyproject.get("project", {}).get("name"),
        load_toml(project_dir / "gleam.toml").get("name"),
    ]
    for candidate in candidates:
        if isinstance(candidate, str) and candidate.strip():
            return _normalize_app_name(candidate)
    raise ConfigurationError("Unable to find app name")
