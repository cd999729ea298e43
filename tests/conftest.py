"""Shared test fixtures for bloxt-mcp tests."""

import itertools

import pytest


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep settings written by tools out of the real home directory."""
    home = tmp_path / "bloxt-home"
    monkeypatch.setenv("BLOXT_HOME", str(home))
    return home


@pytest.fixture
def storage_dir(tmp_path):
    """Provide a temporary storage directory for settings."""
    d = tmp_path / "storage"
    d.mkdir()
    return str(d)


@pytest.fixture
def id_factory():
    """Deterministic block IDs: b0, b1, b2, ..."""
    counter = itertools.count()
    return lambda: f"b{next(counter)}"


@pytest.fixture
def sample_markdown():
    """Return sample markdown content with multiple heading levels."""
    return """Intro line before any header.

# Getting Started

Welcome to the documentation.
This line continues the paragraph.

## Installation

Install with pip.

## Configuration

### Basic Config

Set environment variables.

# Reference

Final words.
"""


@pytest.fixture
def sample_frontmatter():
    """Return markdown with YAML front-matter."""
    return "---\nkey: v\n---\n\n# Title\n\nBody"


@pytest.fixture
def sample_nesting():
    """Return the four-header nesting example."""
    return "# A\n\n## B\n\n## C\n\n# D"
