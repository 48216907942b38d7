"""Dependency override selection and ``[patch.crates-io]`` rendering.

When working on the Dimension crates themselves, the generated manifests can
redirect every shared dependency to a local ``dimension-node`` checkout or to
a branch of a git repository.  The three possible modes are modelled as a
tagged union so exactly one is ever active.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from ..errors import OverrideConflictError
from .registry import Dependency
from .templates import toml_string

PATCH_HEADER = "[patch.crates-io]"


class NoOverride(BaseModel):
    """Use the published version of every dependency."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["none"] = "none"


class LocalPathOverride(BaseModel):
    """Point every dependency at its crate inside a local workspace checkout."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["local_path"] = "local_path"
    path: Path

    def crate_path(self, dep: Dependency) -> str:
        return (self.path / dep.workspace_subpath).as_posix()


class RemoteBranchOverride(BaseModel):
    """Point every dependency at the same git repository and branch."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["remote_branch"] = "remote_branch"
    url: str = Field(..., min_length=1)
    branch: str = Field(..., min_length=1)


OverrideSelection = Annotated[
    Union[NoOverride, LocalPathOverride, RemoteBranchOverride],
    Field(discriminator="kind"),
]


def resolve_overrides(
    workspace_path: str | Path | None = None,
    git_url: str | None = None,
    git_branch: str | None = None,
) -> NoOverride | LocalPathOverride | RemoteBranchOverride:
    """Turn the three optional override inputs into a single selection.

    Empty values count as absent.  Valid combinations are: nothing at all, a
    workspace path on its own, or a git URL together with a branch.  A
    relative workspace path is made absolute so the generated manifests do
    not depend on where they live.

    Raises:
        OverrideConflictError: For any other combination.
    """
    has_path = bool(workspace_path)
    has_url = bool(git_url)
    has_branch = bool(git_branch)

    if has_path and not (has_url or has_branch):
        return LocalPathOverride(path=Path(workspace_path).expanduser().absolute())
    if has_url and has_branch and not has_path:
        return RemoteBranchOverride(url=git_url, branch=git_branch)
    if not (has_path or has_url or has_branch):
        return NoOverride()

    if has_path:
        raise OverrideConflictError(
            "a workspace path cannot be combined with a git URL or branch"
        )
    raise OverrideConflictError("a git URL and a git branch must be given together")


def render_patch_section(
    selection: NoOverride | LocalPathOverride | RemoteBranchOverride,
    dependencies: Iterable[Dependency],
) -> str:
    """Render the ``[patch.crates-io]`` section for *dependencies*.

    Only *dependencies* are patched: callers pass the crates the target
    manifest declares, so each manifest patches exactly what it depends on.

    Returns an empty string when no override is active or there is nothing to
    patch.  Otherwise the result is a header line followed by one entry per
    dependency, in the order given, terminated by a newline.
    """
    dependencies = list(dependencies)
    if isinstance(selection, NoOverride) or not dependencies:
        return ""

    if isinstance(selection, LocalPathOverride):
        entries = [
            f"{dep.name} = {{ path = {toml_string(selection.crate_path(dep))} }}"
            for dep in dependencies
        ]
    elif isinstance(selection, RemoteBranchOverride):
        url = toml_string(selection.url)
        branch = toml_string(selection.branch)
        entries = [
            f"{dep.name} = {{ git = {url}, branch = {branch} }}" for dep in dependencies
        ]
    else:
        raise TypeError(f"unsupported override selection: {selection!r}")

    return "\n".join([PATCH_HEADER, *entries]) + "\n"
