"""lissome - build Gleam frontends to JavaScript and render them into pages."""

from lissome.errors import BuildError, BundlerNotFoundError, BundlingError, CompilationError, ConfigurationError
from lissome.render import render_client_only, render_server_side

__version__ = "0.1.0"

__all__ = [
    "BuildError",
    "BundlerNotFoundError",
    "BundlingError",
    "CompilationError",
    "ConfigurationError",
    "render_client_only",
    "render_server_side",
]
