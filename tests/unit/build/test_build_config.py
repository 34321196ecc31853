"""Tests for BuildConfig resolution from project metadata."""

from pathlib import Path

import pytest

from lissome.build.build_config import BuildConfig, resolve_app_name
from lissome.errors import BuildError, ConfigurationError


def test_app_name_from_project_table(tmp_path, toolchain_env):
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "My-App.web"\n')
    assert resolve_app_name(tmp_path) == "my_app_web"


def test_tool_table_overrides_project_name(tmp_path, toolchain_env):
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "backend"\n\n[tool.lissome]\napp = "frontend"\n')
    assert resolve_app_name(tmp_path) == "frontend"


def test_app_name_from_root_gleam_toml(tmp_path, toolchain_env):
    (tmp_path / "gleam.toml").write_text('name = "counter"\nversion = "1.0.0"\n')
    assert resolve_app_name(tmp_path) == "counter"


def test_missing_app_name_is_a_configuration_error(tmp_path, toolchain_env):
    with pytest.raises(ConfigurationError, match="Unable to find app name"):
        BuildConfig.from_project(tmp_path)


def test_configuration_error_is_a_build_error(tmp_path, toolchain_env):
    (tmp_path / "pyproject.toml").write_text("[project\nname = ")
    with pytest.raises(BuildError):
        BuildConfig.from_project(tmp_path)


def test_default_paths(gleam_project):
    config = BuildConfig.from_project(gleam_project)

    assert config.app_name == "my_app"
    assert config.minify is False
    assert config.build_root == gleam_project.resolve() / "_build"
    assert config.app_build_dir == config.build_root / "lib" / "my_app"
    assert config.output_dir == config.app_build_dir / "priv" / "static" / "gleam"


def test_build_root_from_environment(gleam_project, monkeypatch, tmp_path_factory):
    elsewhere = tmp_path_factory.mktemp("elsewhere")
    monkeypatch.setenv("LISSOME_BUILD_ROOT", str(elsewhere))

    config = BuildConfig.from_project(gleam_project)

    assert config.build_root == elsewhere


def test_tool_settings_build_root_and_minify(tmp_path, toolchain_env):
    (tmp_path / "pyproject.toml").write_text('[tool.lissome]\napp = "web"\nbuild_root = "out"\nminify = true\n')

    config = BuildConfig.from_project(tmp_path)

    assert config.build_root == tmp_path.resolve() / "out"
    assert config.minify is True


def test_minify_flag_is_kept(gleam_project):
    assert BuildConfig.from_project(gleam_project, minify=True).minify is True


def test_config_is_immutable(gleam_project):
    config = BuildConfig.from_project(gleam_project)
    with pytest.raises(AttributeError):
        config.minify = True  # type: ignore[misc]
    assert isinstance(config.project_dir, Path)
