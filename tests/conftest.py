"""
Shared pytest fixtures for docset-lint tests.

This module provides:
- The static sample documentation set under fixtures/docset
- A factory that writes small documentation trees into tmp_path
- Quiet logging for the whole session
"""

from pathlib import Path

import pytest

from docset_lint.config import LintConfig
from docset_lint.logging import configure_logging
from docset_lint.orchestrator import LintOrchestrator


@pytest.fixture(autouse=True)
def quiet_logging():
    """Route structlog to the current stderr, quietly, for every test."""
    configure_logging(level="WARNING", json_format=False)


@pytest.fixture(scope="session")
def fixtures_path():
    """Path to test fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def docset_root(fixtures_path):
    """Sample documentation set with a known set of problems."""
    return fixtures_path / "docset"


@pytest.fixture
def make_docset(tmp_path):
    """Write {relative path: content} into tmp_path and return the root."""

    def _make(files: dict[str, str | bytes]) -> Path:
        for rel_path, content in files.items():
            path = tmp_path / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return tmp_path

    return _make


@pytest.fixture
def lint(make_docset):
    """Lint a small tree; returns the list of findings."""

    def _lint(files: dict[str, str | bytes], checks: list[str] | None = None, **config):
        root = make_docset(files)
        lint_config = LintConfig(project_root=root, **config)
        report = LintOrchestrator(root, config=lint_config, checks=checks).run()
        return report.findings

    return _lint

