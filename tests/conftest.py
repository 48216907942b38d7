"""Shared pytest fixtures for the dimension-scaffold test suite.

Provides reusable fixtures for:
- The default dependency registry and a template renderer
- One instance of each override selection
- Destination paths and configs for scaffolding runs
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from dimension_scaffold.config import ScaffoldConfig
from dimension_scaffold.scaffolder import (
    DependencyRegistry,
    LocalPathOverride,
    NoOverride,
    RemoteBranchOverride,
    TemplateRenderer,
    default_registry,
)


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clean_dimension_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer override variables from leaking into tests."""
    for name in (
        "DIMENSION_WORKSPACE_PATH",
        "DIMENSION_GIT_URL",
        "DIMENSION_GIT_BRANCH",
        "DIMENSION_TOOLCHAIN",
    ):
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Registry & rendering
# ---------------------------------------------------------------------------

@pytest.fixture
def registry() -> DependencyRegistry:
    return default_registry()


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


# ---------------------------------------------------------------------------
# Override selections
# ---------------------------------------------------------------------------

@pytest.fixture
def no_override() -> NoOverride:
    return NoOverride()


@pytest.fixture
def local_override() -> LocalPathOverride:
    return LocalPathOverride(path=Path("/work"))


@pytest.fixture
def remote_override() -> RemoteBranchOverride:
    return RemoteBranchOverride(
        url="https://github.com/dimension-labs/dimension-node",
        branch="dev",
    )


# ---------------------------------------------------------------------------
# Scaffolding destinations
# ---------------------------------------------------------------------------

@pytest.fixture
def destination(tmp_path: Path) -> Path:
    """A destination path that does not exist yet."""
    return tmp_path / "foo"


@pytest.fixture
def make_config(destination: Path):
    """Factory building a ``ScaffoldConfig`` rooted at ``destination``."""

    def _make(**kwargs: Any) -> ScaffoldConfig:
        kwargs.setdefault("root_path", destination)
        return ScaffoldConfig(**kwargs)

    return _make

