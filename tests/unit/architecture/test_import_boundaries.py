"""Tests for architecture import boundaries.

These tests ensure that the clean architecture boundaries are maintained:
- Core modules (application, domain) must not import from CLI or infrastructure
- Infrastructure must not import from CLI
"""

from __future__ import annotations

import ast
import re
from pathlib import Path

import pytest


# Root of the define_explorer package
PACKAGE_ROOT = Path(__file__).parent.parent.parent.parent / "define_explorer"

CLI_PATTERN = r"(^|\.)cli(\.|$)"
INFRASTRUCTURE_PATTERN = r"(^|\.)infrastructure(\.|$)"


def get_python_files(directory: Path) -> list[Path]:
    """Get all Python files in a directory recursively."""
    return list(directory.rglob("*.py"))


def extract_imports_from_file(file_path: Path) -> list[str]:
    """Extract all import statements from a Python file.

    Args:
        file_path: Path to Python file

    Returns:
        List of import strings (module names)
    """
    imports = []

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            content = f.read()

        tree = ast.parse(content)

        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    imports.append(alias.name)
            elif isinstance(node, ast.ImportFrom):
                if node.module:
                    imports.append(node.module)

    except SyntaxError:
        # Skip files with syntax errors
        pass

    return imports


def has_forbidden_import(imports: list[str], forbidden_pattern: str) -> list[str]:
    """Check if any imports match a forbidden pattern."""
    pattern = re.compile(forbidden_pattern)
    return [imp for imp in imports if pattern.search(imp)]


def find_violations(layer: str, forbidden_pattern: str) -> list[str]:
    layer_dir = PACKAGE_ROOT / layer
    if not layer_dir.exists():
        pytest.skip(f"{layer} directory not found")

    violations = []
    for py_file in get_python_files(layer_dir):
        forbidden = has_forbidden_import(
            extract_imports_from_file(py_file), forbidden_pattern
        )
        if forbidden:
            rel_path = py_file.relative_to(PACKAGE_ROOT.parent)
            violations.append(f"{rel_path}: {forbidden}")
    return violations


class TestCLIImportBoundary:
    """Tests ensuring core modules do not import from CLI.

    The CLI layer should be the outermost layer - it can import from
    anything, but nothing should import from it except CLI code itself.
    """

    @pytest.mark.parametrize("layer", ["application", "domain", "infrastructure"])
    def test_layer_does_not_import_cli(self, layer):
        violations = find_violations(layer, CLI_PATTERN)
        assert not violations, f"{layer} layer imports CLI modules:\n" + "\n".join(
            violations
        )

    def test_root_modules_do_not_import_cli(self):
        violations = []
        for name in ("config.py", "constants.py"):
            forbidden = has_forbidden_import(
                extract_imports_from_file(PACKAGE_ROOT / name), CLI_PATTERN
            )
            if forbidden:
                violations.append(f"{name}: {forbidden}")
        assert not violations, "\n".join(violations)


class TestInfrastructureImportBoundary:
    """Application and domain code reach adapters only through ports."""

    @pytest.mark.parametrize("layer", ["application", "domain"])
    def test_layer_does_not_import_infrastructure(self, layer):
        violations = find_violations(layer, INFRASTRUCTURE_PATTERN)
        assert not violations, (
            f"{layer} layer imports infrastructure modules:\n" + "\n".join(violations)
        )


class TestRegressionPrevention:
    def test_no_cli_helpers_outside_cli(self):
        """Ensure cli.helpers is not imported outside CLI."""
        excluded_dirs = {PACKAGE_ROOT / "cli"}

        violations = []
        for py_file in get_python_files(PACKAGE_ROOT):
            if any(py_file.is_relative_to(excluded) for excluded in excluded_dirs):
                continue

            imports = extract_imports_from_file(py_file)
            forbidden = has_forbidden_import(imports, r"cli\.helpers")
            if forbidden:
                rel_path = py_file.relative_to(PACKAGE_ROOT.parent)
                violations.append(f"{rel_path}: {forbidden}")

        assert not violations, "cli.helpers imported outside CLI:\n" + "\n".join(
            violations
        )

    def test_package_import_has_no_cli_side_effects(self):
        """Importing the package root must not pull in click."""
        source = (PACKAGE_ROOT / "__init__.py").read_text(encoding="utf-8")
        imports = extract_imports_from_file(PACKAGE_ROOT / "__init__.py")
        assert not has_forbidden_import(imports, r"^click$|" + CLI_PATTERN)
        assert "import click" not in source
