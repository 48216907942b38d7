"""Workspace scaffolder -- renders the contract and tests packages.

Quick usage::

    from dimension_scaffold.config import ScaffoldConfig
    from dimension_scaffold.scaffolder import ScaffoldGenerator

    config = ScaffoldConfig(root_path=Path("/tmp/my-contract"))
    ScaffoldGenerator(config).generate()
"""

from .generator import ScaffoldGenerator
from .manifest import GeneratedManifest, ManifestComposer, PackageIdentity
from .overrides import (
    LocalPathOverride,
    NoOverride,
    RemoteBranchOverride,
    render_patch_section,
    resolve_overrides,
)
from .registry import Dependency, DependencyRegistry, default_registry
from .templates import TemplateRenderer

__all__ = [
    "Dependency",
    "DependencyRegistry",
    "GeneratedManifest",
    "LocalPathOverride",
    "ManifestComposer",
    "NoOverride",
    "PackageIdentity",
    "RemoteBranchOverride",
    "ScaffoldGenerator",
    "TemplateRenderer",
    "default_registry",
    "render_patch_section",
    "resolve_overrides",
]
