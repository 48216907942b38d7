"""``Cargo.toml`` composition for the generated contract and tests packages.

The composer is pure text production: it takes a package identity, the
registry descriptors the package needs and an already rendered patch section,
and returns a ``GeneratedManifest``.  Dependency versions are always read from
the descriptors, so two manifests built from the same registry agree on every
shared crate.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .registry import Dependency
from .templates import TemplateRenderer

MANIFEST_FILENAME = "Cargo.toml"


class PackageIdentity(BaseModel):
    """Name, version and fixed metadata of one generated package."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    version: str = Field(default="0.1.0")
    edition: str = Field(default="2021")
    directory: str = Field(..., min_length=1, description="Package directory inside the workspace")
    template: str = Field(..., description="Manifest template, relative to the template root")
    dependency_table: Literal["dependencies", "dev-dependencies"] = "dependencies"


class GeneratedManifest(BaseModel):
    """Rendered manifest text for one package."""

    model_config = ConfigDict(frozen=True)

    package_name: str
    relative_path: str
    text: str
    dependencies: tuple[str, ...] = ()


class ManifestComposer:
    """Assembles a package manifest from its identity and dependencies."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def compose(
        self,
        identity: PackageIdentity,
        dependencies: Sequence[Dependency],
        patch_section: str = "",
    ) -> GeneratedManifest:
        """Render the manifest for *identity*.

        Args:
            identity: Package name, version and template.
            dependencies: Registry descriptors to declare, in registry order.
            patch_section: Output of ``render_patch_section``; appended
                verbatim after the package sections when non-empty.
        """
        names = [dep.name for dep in dependencies]
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate dependencies for package {identity.name!r}: {names}")

        text = self.renderer.render(
            identity.template,
            {
                "package": identity,
                "dependencies": list(dependencies),
                "patch_section": patch_section,
            },
        )
        return GeneratedManifest(
            package_name=identity.name,
            relative_path=f"{identity.directory}/{MANIFEST_FILENAME}",
            text=text,
            dependencies=tuple(names),
        )
