"""Shared pytest fixtures for the skel test suite.

Provides reusable fixtures for:
- A temporary config directory with a registry file
- Writers for skeleton definitions and include files
- A ready-made ``rs`` Rust skeleton with a template and an include
"""

from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Temporary stand-in for ``~/.config/skel``."""
    directory = tmp_path / "config" / "skel"
    directory.mkdir(parents=True)
    return directory


@pytest.fixture
def projects_dir(tmp_path: Path) -> Path:
    """Parent directory that generated projects are created in."""
    directory = tmp_path / "projects"
    directory.mkdir()
    return directory


# ---------------------------------------------------------------------------
# File writers
# ---------------------------------------------------------------------------

@pytest.fixture
def write_file(config_dir: Path) -> Callable[[str, str], Path]:
    """Write dedented text to a path relative to ``config_dir``."""

    def _write(relative: str, content: str) -> Path:
        path = config_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_registry(write_file) -> Callable[[str], Path]:
    """Write ``config.toml`` in the config directory."""

    def _write(content: str) -> Path:
        return write_file("config.toml", content)

    return _write


# ---------------------------------------------------------------------------
# Sample skeletons
# ---------------------------------------------------------------------------

RUST_SKELETON = '''\
dirs = ["src"]
files = ["src/main.rs", "Cargo.toml"]

[[templates]]
path = "src/main.rs"
template = """fn main() {
    println!("hello {{name}}");
}
"""

[[templates]]
path = "Cargo.toml"
include = "{{config-dir}}/includes/cargo.toml"
'''

CARGO_INCLUDE = '''\
[package]
name = "{{name}}"
version = "0.1.0"
'''


@pytest.fixture
def rust_registry(write_file, write_registry) -> Path:
    """Registry with an ``rs`` skeleton aliased to ``r`` plus a second skeleton."""
    write_file("skeletons/rust.toml", RUST_SKELETON)
    write_file("includes/cargo.toml", CARGO_INCLUDE)
    write_file("skeletons/python.toml", 'dirs = ["{{name}}"]\n')
    return write_registry(
        """
        [skeletons.rs]
        path = "{{config-dir}}/skeletons/rust.toml"
        aliases = ["r", "rust"]

        [skeletons.py]
        path = "skeletons/python.toml"
        aliases = ["p"]
        """
    )
