"""Project staging for the gleam compiler.

`gleam build` needs a gleam.toml with at least a project name, and expects
src/ and test/ next to it. This module picks the directory to run the
compiler in:

    1. <project_dir>/gleam.toml exists -> compile in place
    2. <app_build_dir>/gleam.toml exists (left by an earlier build) -> reuse it
    3. otherwise write a name-only gleam.toml into <app_build_dir> and
       symlink (or, where links are unsupported, copy) src/ and test/ there
"""

import logging
import shutil
from pathlib import Path
from typing import Optional

from .build_config import load_toml

logger = logging.getLogger(__name__)

MANIFEST_NAME = "gleam.toml"
STAGED_DIRS = ("src", "test")


def manifest_name(package_dir: Path) -> Optional[str]:
    """Project name declared by the gleam.toml in package_dir, if any.

    gleam writes its output under build/dev/javascript/<this name>, which can
    differ from the application name when a user-written gleam.toml is active.
    """
    name = load_toml(package_dir / MANIFEST_NAME).get("name")
    if isinstance(name, str) and name.strip():
        return name.strip()
    return None


def remove_path(path: Path) -> None:
    """Remove a symlink, file, or directory tree if present."""
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path)


class ProjectStager:
    """Resolves the gleam package directory for a build."""

    def __init__(self, project_dir: Path, app_build_dir: Path):
        """
        Args:
            project_dir: Directory holding the real src/ and test/ trees
            app_build_dir: Staging directory inside the build root
        """
        self.project_dir = project_dir
        self.app_build_dir = app_build_dir

    def stage(self, app_name: str) -> Path:
        """Return the directory to run `gleam build` in.

        Args:
            app_name: Name written into a synthesized gleam.toml

        Returns:
            The package directory containing the active gleam.toml
        """
        if (self.project_dir / MANIFEST_NAME).is_file():
            logger.debug("Using project gleam.toml in %s", self.project_dir)
            return self.project_dir

        if (self.app_build_dir / MANIFEST_NAME).is_file():
            logger.debug("Reusing staged gleam.toml in %s", self.app_build_dir)
            return self.app_build_dir

        self.app_build_dir.mkdir(parents=True, exist_ok=True)
        (self.app_build_dir / MANIFEST_NAME).write_text(f'name = "{app_name}"\n', encoding="utf-8")

        for name in STAGED_DIRS:
            self._link_or_copy(self.project_dir / name, self.app_build_dir / name)

        return self.app_build_dir

    def _link_or_copy(self, source: Path, dest: Path) -> None:
        # Stale content at the destination makes gleam report duplicate modules
        remove_path(dest)

        if not source.is_dir():
            logger.debug("Nothing to stage for %s", source)
            return

        try:
            dest.symlink_to(source.resolve(), target_is_directory=True)
            logger.debug("Linked %s -> %s", dest, source)
        except OSError as e:
            logger.debug("Symlink failed (%s), copying %s to %s", e, source, dest)
            shutil.copytree(source, dest, symlinks=False)
