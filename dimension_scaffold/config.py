"""Dimension scaffold configuration.

A single typed ``ScaffoldConfig`` describes one run: where the workspace goes,
which dependency override (if any) is active, and the toolchain and package
metadata written into the generated files.  It is built once by the CLI and
passed explicitly to the scaffolder.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .errors import OverrideConflictError
from .scaffolder.overrides import (
    LocalPathOverride,
    NoOverride,
    OverrideSelection,
    RemoteBranchOverride,
    resolve_overrides,
)

DEFAULT_TOOLCHAIN = "nightly-2022-08-03"

# Environment variables recognised by ``ScaffoldConfig.from_env``.
ENV_WORKSPACE_PATH = "DIMENSION_WORKSPACE_PATH"
ENV_GIT_URL = "DIMENSION_GIT_URL"
ENV_GIT_BRANCH = "DIMENSION_GIT_BRANCH"
ENV_TOOLCHAIN = "DIMENSION_TOOLCHAIN"


class ScaffoldConfig(BaseModel):
    """Settings for a single scaffolding run."""

    model_config = ConfigDict(frozen=True)

    root_path: Path = Field(..., description="Workspace directory to create")
    overrides: OverrideSelection = Field(default_factory=NoOverride)
    toolchain: str = Field(default=DEFAULT_TOOLCHAIN, min_length=1)
    package_version: str = Field(default="0.1.0", min_length=1)
    edition: str = Field(default="2021", pattern=r"^20\d\d$")

    @classmethod
    def from_env(
        cls,
        root_path: str | Path,
        environ: Mapping[str, str] | None = None,
        overrides: NoOverride | LocalPathOverride | RemoteBranchOverride | None = None,
    ) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            DIMENSION_WORKSPACE_PATH, DIMENSION_GIT_URL, DIMENSION_GIT_BRANCH,
            DIMENSION_TOOLCHAIN.

        When *overrides* is given the override variables are ignored.

        Raises:
            OverrideConflictError: If the override variables do not form a
                valid combination.
        """
        env = os.environ if environ is None else environ
        if overrides is None:
            try:
                overrides = resolve_overrides(
                    env.get(ENV_WORKSPACE_PATH),
                    env.get(ENV_GIT_URL),
                    env.get(ENV_GIT_BRANCH),
                )
            except OverrideConflictError as exc:
                raise OverrideConflictError(
                    f"{exc} (check the {ENV_WORKSPACE_PATH}, {ENV_GIT_URL} and "
                    f"{ENV_GIT_BRANCH} environment variables)"
                ) from exc
        return cls(
            root_path=Path(root_path),
            overrides=overrides,
            toolchain=env.get(ENV_TOOLCHAIN) or DEFAULT_TOOLCHAIN,
        )
