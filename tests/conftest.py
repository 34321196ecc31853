"""Pytest configuration and fixtures for lissome tests.

Besides restoring stdio between tests, this provides a fake toolchain that
stands in for the gleam and esbuild binaries: it records every invocation and
writes the files the real tools would.
"""

import sys
import tomllib
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pytest

from lissome.subprocess_utils import ToolResult


@pytest.fixture(autouse=True)
def _restore_stdio():  # noqa: PT004
    """Ensure stdout/stderr and the output module stream are restored after each test."""
    yield

    if sys.stdout.closed:
        sys.stdout = sys.__stdout__
    if sys.stderr.closed:
        sys.stderr = sys.__stderr__

    from lissome import output

    output._output_stream = sys.stdout
    output._verbose = True


class FakeToolchain:
    """Process runner imitating `gleam build` and `esbuild`.

    gleam writes one <name>.mjs per src/*.gleam plus the gleam.mjs runtime
    into build/dev/javascript/<name>/ under its working directory, where
    <name> comes from the gleam.toml there (falling back to app_name). esbuild
    copies every .mjs argument into --outdir.
    """

    def __init__(self, app_name: str, gleam_status: int = 0, esbuild_status: int = 0):
        self.app_name = app_name
        self.gleam_status = gleam_status
        self.esbuild_status = esbuild_status
        self.calls: List[Tuple[List[str], Optional[Path]]] = []

    def tool_calls(self, tool: str) -> List[List[str]]:
        return [cmd for cmd, _ in self.calls if Path(cmd[0]).name == tool]

    def _package_name(self, package_dir: Path) -> str:
        manifest = package_dir / "gleam.toml"
        if manifest.is_file():
            with open(manifest, "rb") as f:
                return tomllib.load(f).get("name", self.app_name)
        return self.app_name

    def __call__(self, cmd: Sequence[str], cwd: Optional[Path]) -> ToolResult:
        cmd = [str(c) for c in cmd]
        self.calls.append((cmd, cwd))
        tool = Path(cmd[0]).name

        if tool == "gleam":
            if self.gleam_status != 0:
                return ToolResult(self.gleam_status, "", "error: Unknown variable\n  src/app.gleam:3")
            assert cwd is not None
            out = Path(cwd) / "build" / "dev" / "javascript" / self._package_name(Path(cwd))
            out.mkdir(parents=True, exist_ok=True)
            (out / "gleam.mjs").write_text("export class CustomType {}\n", encoding="utf-8")
            for source in sorted((Path(cwd) / "src").glob("*.gleam")):
                (out / f"{source.stem}.mjs").write_text(f"// compiled {source.name}\n", encoding="utf-8")
            return ToolResult(0)

        if tool == "esbuild":
            if self.esbuild_status != 0:
                return ToolResult(self.esbuild_status, "", "✘ [ERROR] Could not resolve \"./gleam.mjs\"")
            out_dir = Path(next(a.split("=", 1)[1] for a in cmd if a.startswith("--outdir=")))
            for arg in cmd[1:]:
                if arg.endswith(".mjs"):
                    (out_dir / Path(arg).name).write_text(f"// bundle of {Path(arg).name}\n", encoding="utf-8")
            return ToolResult(0)

        raise FileNotFoundError(cmd[0])


@pytest.fixture
def toolchain_env(monkeypatch):
    """Pin tool binary names and clear build-root overrides."""
    monkeypatch.setenv("LISSOME_GLEAM", "gleam")
    monkeypatch.setenv("LISSOME_ESBUILD", "esbuild")
    monkeypatch.delenv("LISSOME_BUILD_ROOT", raising=False)


@pytest.fixture
def gleam_project(tmp_path, toolchain_env) -> Path:
    """A project named my_app with src/app.gleam and a test/ directory."""
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "my-app"\nversion = "0.1.0"\n', encoding="utf-8")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.gleam").write_text('pub fn main() { "hi" }\n', encoding="utf-8")
    (tmp_path / "test").mkdir()
    (tmp_path / "test" / "app_test.gleam").write_text("pub fn main() { Nil }\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def fake_toolchain() -> FakeToolchain:
    return FakeToolchain("my_app")
