"""Main scaffolding orchestrator.

Takes a ``ScaffoldConfig`` and creates the workspace: the ``contract`` and
``tests`` packages with their manifests and source stubs, followed by the
toolchain pin, Makefile and CI configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..errors import DestinationExistsError
from ..utils import create_dir, write_file
from .aux_gen import AuxiliaryGenerator
from .manifest import GeneratedManifest, ManifestComposer, PackageIdentity
from .overrides import render_patch_section
from .registry import (
    CONTRACT,
    EXECUTION_ENGINE,
    TEST_SUPPORT,
    TYPES,
    DependencyRegistry,
    default_registry,
)
from .templates import TemplateRenderer

if TYPE_CHECKING:
    from ..config import ScaffoldConfig


# Registry roles each generated package declares.
CONTRACT_PACKAGE_ROLES: tuple[str, ...] = (CONTRACT, TYPES, EXECUTION_ENGINE)
TESTS_PACKAGE_ROLES: tuple[str, ...] = (CONTRACT, TYPES, EXECUTION_ENGINE, TEST_SUPPORT)


class ScaffoldGenerator:
    """Creates a new contract workspace on disk.

    Every failure is fatal and propagates to the caller.  Nothing is rolled
    back: if a write fails part-way, the files written so far stay in place.
    """

    def __init__(
        self,
        config: ScaffoldConfig,
        registry: DependencyRegistry | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.registry = registry if registry is not None else default_registry()
        self.renderer = renderer or TemplateRenderer()
        self.composer = ManifestComposer(self.renderer)
        self.aux_gen = AuxiliaryGenerator(self.renderer)

    # -- Public API --------------------------------------------------------

    @property
    def contract_identity(self) -> PackageIdentity:
        return PackageIdentity(
            name="contract",
            version=self.config.package_version,
            edition=self.config.edition,
            directory="contract",
            template="contract/Cargo.toml.j2",
        )

    @property
    def tests_identity(self) -> PackageIdentity:
        return PackageIdentity(
            name="tests",
            version=self.config.package_version,
            edition=self.config.edition,
            directory="tests",
            template="tests/Cargo.toml.j2",
            dependency_table="dev-dependencies",
        )

    def compose_contract_manifest(self) -> GeneratedManifest:
        return self._compose(self.contract_identity, CONTRACT_PACKAGE_ROLES)

    def compose_tests_manifest(self) -> GeneratedManifest:
        return self._compose(self.tests_identity, TESTS_PACKAGE_ROLES)

    def generate(self) -> Path:
        """Create the workspace at ``config.root_path``.

        Returns:
            The workspace root.

        Raises:
            DestinationExistsError: If the root already exists.  Nothing is
                written in that case.
            ScaffoldFileSystemError: If a directory or file cannot be written.
        """
        root = self.config.root_path
        if root.exists() or root.is_symlink():
            raise DestinationExistsError(root)

        create_dir(root)
        context = self._build_context()

        # 1. Contract package
        contract = self.compose_contract_manifest()
        write_file(root / contract.relative_path, contract.text)
        self.renderer.render_to_file(
            "contract/main.rs.j2", root / "contract" / "src" / "main.rs", context
        )
        self.renderer.render_to_file(
            "contract/config.toml.j2", root / "contract" / ".cargo" / "config.toml", context
        )

        # 2. Tests package
        tests = self.compose_tests_manifest()
        write_file(root / tests.relative_path, tests.text)
        self.renderer.render_to_file(
            "tests/integration_tests.rs.j2",
            root / "tests" / "src" / "integration_tests.rs",
            context,
        )

        # 3. Toolchain, Makefile, CI
        self.aux_gen.generate_all(root, context)

        return root

    # -- Internal helpers --------------------------------------------------

    def _compose(self, identity: PackageIdentity, roles: tuple[str, ...]) -> GeneratedManifest:
        dependencies = self.registry.subset(*roles)
        patch_section = render_patch_section(self.config.overrides, dependencies)
        return self.composer.compose(identity, dependencies, patch_section)

    def _build_context(self) -> dict[str, Any]:
        return {
            "toolchain": self.config.toolchain,
            "contract_crate": self.registry.get(CONTRACT).name,
            "types_crate": self.registry.get(TYPES).name,
            "execution_engine_crate": self.registry.get(EXECUTION_ENGINE).name,
            "test_support_crate": self.registry.get(TEST_SUPPORT).name,
        }
