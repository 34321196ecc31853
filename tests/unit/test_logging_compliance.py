"""Unit tests for logging compliance across the codebase.

Production code reports progress through lissome.output and debug detail
through the logging module; only the CLI prints directly.
"""

import re
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).parent.parent.parent / "src"


def _production_files():
    files = [p for p in SRC_DIR.rglob("*.py") if "__pycache__" not in str(p)]
    assert files, f"No Python files found in {SRC_DIR}"
    return files


class TestLoggingCompliance:
    """Test cases for logging vs print statement compliance."""

    def test_no_print_statements_in_production_code(self):
        """No print() calls outside cli.py.

        Note: CLI output is legitimate user-facing output.
        """
        violations = []

        for file_path in _production_files():
            if file_path.name == "cli.py":
                continue

            for line_num, line in enumerate(file_path.read_text(encoding="utf-8").split("\n"), start=1):
                if line.strip().startswith("#"):
                    continue
                if re.search(r"(?<![\w.])print\s*\(", line):
                    violations.append(f"{file_path}:{line_num}: {line.strip()}")

        if violations:
            violation_report = "\n".join(violations)
            pytest.fail(f"Found {len(violations)} print() statements in production code:\n{violation_report}\n\nUse lissome.output or logging instead.")

    def test_logger_usage_has_module_logger(self):
        """Files calling logger.* define a module-level logger from logging.getLogger(__name__)."""
        missing = []

        for file_path in _production_files():
            content = file_path.read_text(encoding="utf-8")
            if re.search(r"\blogger\.(debug|info|warning|error)\(", content):
                if not re.search(r"^logger = logging\.getLogger\(__name__\)$", content, re.MULTILINE):
                    missing.append(str(file_path))

        if missing:
            pytest.fail(f"Files using logger.* without a module logger:\n{chr(10).join(missing)}")
