"""Build error taxonomy for lissome.

All fatal build conditions derive from BuildError so callers (the CLI, a
host build system) only need to catch one type. None of these are retried:
they come from deterministic toolchain conditions that need a source or
environment fix.
"""


class BuildError(Exception):
    """Raised when the JavaScript build cannot complete."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(BuildError):
    """Raised when the application name or build settings cannot be resolved."""

    pass


class CompilationError(BuildError):
    """Raised when the gleam compiler exits with a non-zero status."""

    pass


class BundlingError(BuildError):
    """Raised when esbuild exits with a non-zero status."""

    pass


class BundlerNotFoundError(BundlingError):
    """Raised when no esbuild binary can be located or executed."""

    pass
