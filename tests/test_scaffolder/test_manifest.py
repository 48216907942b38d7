"""Tests for the manifest composer (dimension_scaffold.scaffolder.manifest).

Covers:
- Exact contract manifest text without overrides
- Package identity, dependency table and target sections
- Patch section inclusion and omission
- Version single-source-of-truth across packages
- Determinism
"""

from __future__ import annotations

import tomllib

import pytest
from pydantic import ValidationError

from dimension_scaffold.scaffolder.manifest import (
    GeneratedManifest,
    ManifestComposer,
    PackageIdentity,
)
from dimension_scaffold.scaffolder.overrides import render_patch_section
from dimension_scaffold.scaffolder.registry import (
    CONTRACT,
    EXECUTION_ENGINE,
    TEST_SUPPORT,
    TYPES,
    Dependency,
)

pytestmark = pytest.mark.unit

CONTRACT_ROLES = (CONTRACT, TYPES, EXECUTION_ENGINE)
TESTS_ROLES = (CONTRACT, TYPES, EXECUTION_ENGINE, TEST_SUPPORT)


@pytest.fixture
def composer(renderer) -> ManifestComposer:
    return ManifestComposer(renderer)


@pytest.fixture
def contract_identity() -> PackageIdentity:
    return PackageIdentity(name="contract", directory="contract", template="contract/Cargo.toml.j2")


@pytest.fixture
def tests_identity() -> PackageIdentity:
    return PackageIdentity(
        name="tests",
        directory="tests",
        template="tests/Cargo.toml.j2",
        dependency_table="dev-dependencies",
    )


# ---------------------------------------------------------------------------
# Contract manifest
# ---------------------------------------------------------------------------


class TestContractManifest:
    def test_exact_text_without_override(self, composer, contract_identity, registry):
        manifest = composer.compose(contract_identity, registry.subset(*CONTRACT_ROLES))
        assert manifest.text == (
            "[package]\n"
            'name = "contract"\n'
            'version = "0.1.0"\n'
            'edition = "2021"\n'
            "\n"
            "[dependencies]\n"
            'dimension-contract = "1.4.3"\n'
            'dimension-types = "1.4.6"\n'
            'dimension-execution-engine = "1.4.4"\n'
            "\n"
            "[[bin]]\n"
            'name = "contract"\n'
            'path = "src/main.rs"\n'
            "bench = false\n"
            "doctest = false\n"
            "test = false\n"
            "\n"
            "[profile.release]\n"
            "codegen-units = 1\n"
            "lto = true\n"
        )

    def test_metadata(self, composer, contract_identity, registry):
        manifest = composer.compose(contract_identity, registry.subset(*CONTRACT_ROLES))
        assert isinstance(manifest, GeneratedManifest)
        assert manifest.package_name == "contract"
        assert manifest.relative_path == "contract/Cargo.toml"
        assert manifest.dependencies == (
            "dimension-contract",
            "dimension-types",
            "dimension-execution-engine",
        )

    def test_patch_section_appended(self, composer, contract_identity, registry, local_override):
        deps = registry.subset(*CONTRACT_ROLES)
        patch = render_patch_section(local_override, deps)
        manifest = composer.compose(contract_identity, deps, patch)
        assert manifest.text.endswith("lto = true\n\n" + patch)

        parsed = tomllib.loads(manifest.text)
        assert set(parsed["patch"]["crates-io"]) == set(parsed["dependencies"])

    def test_empty_patch_section_omitted(self, composer, contract_identity, registry):
        manifest = composer.compose(contract_identity, registry.subset(*CONTRACT_ROLES), "")
        assert "[patch" not in manifest.text
        assert "patch" not in tomllib.loads(manifest.text)


# ---------------------------------------------------------------------------
# Tests manifest
# ---------------------------------------------------------------------------


class TestTestsManifest:
    def test_declares_all_four_as_dev_dependencies(self, composer, tests_identity, registry):
        manifest = composer.compose(tests_identity, registry.subset(*TESTS_ROLES))
        parsed = tomllib.loads(manifest.text)
        assert "dependencies" not in parsed
        assert parsed["dev-dependencies"] == {dep.name: dep.version for dep in registry}

    def test_bin_target(self, composer, tests_identity, registry):
        parsed = tomllib.loads(
            composer.compose(tests_identity, registry.subset(*TESTS_ROLES)).text
        )
        assert parsed["bin"] == [
            {
                "name": "integration-tests",
                "path": "src/integration_tests.rs",
                "bench": False,
                "doctest": False,
            }
        ]

    def test_remote_patch_matches_declared_names(
        self, composer, tests_identity, registry, remote_override
    ):
        deps = registry.subset(*TESTS_ROLES)
        manifest = composer.compose(tests_identity, deps, render_patch_section(remote_override, deps))
        parsed = tomllib.loads(manifest.text)
        patch = parsed["patch"]["crates-io"]
        assert set(patch) == set(parsed["dev-dependencies"])
        for entry in patch.values():
            assert entry == {"git": remote_override.url, "branch": remote_override.branch}


# ---------------------------------------------------------------------------
# Invariants
# ---------------------------------------------------------------------------


class TestComposerInvariants:
    def test_shared_versions_identical_across_packages(
        self, composer, contract_identity, tests_identity, registry
    ):
        contract = tomllib.loads(
            composer.compose(contract_identity, registry.subset(*CONTRACT_ROLES)).text
        )
        tests = tomllib.loads(composer.compose(tests_identity, registry.subset(*TESTS_ROLES)).text)
        shared = set(contract["dependencies"]) & set(tests["dev-dependencies"])
        assert shared == {"dimension-contract", "dimension-types", "dimension-execution-engine"}
        for name in shared:
            assert contract["dependencies"][name] == tests["dev-dependencies"][name]

    def test_versions_come_from_descriptors(self, composer, contract_identity):
        deps = [Dependency(role="x", name="custom-crate", version="7.8.9", workspace_subpath="x")]
        parsed = tomllib.loads(composer.compose(contract_identity, deps).text)
        assert parsed["dependencies"] == {"custom-crate": "7.8.9"}

    def test_idempotent(self, composer, tests_identity, registry, local_override):
        deps = registry.subset(*TESTS_ROLES)
        patch = render_patch_section(local_override, deps)
        first = composer.compose(tests_identity, deps, patch)
        second = composer.compose(tests_identity, deps, patch)
        assert first.text == second.text
        assert first == second

    def test_duplicate_dependencies_rejected(self, composer, contract_identity, registry):
        dep = registry.get(TYPES)
        with pytest.raises(ValueError, match="duplicate"):
            composer.compose(contract_identity, [dep, dep])

    def test_identity_overrides_rendered(self, composer, registry):
        identity = PackageIdentity(
            name="contract",
            version="2.0.0",
            edition="2018",
            directory="contract",
            template="contract/Cargo.toml.j2",
        )
        parsed = tomllib.loads(composer.compose(identity, registry.subset(CONTRACT)).text)
        assert parsed["package"] == {"name": "contract", "version": "2.0.0", "edition": "2018"}

    def test_invalid_dependency_table_rejected(self):
        with pytest.raises(ValidationError):
            PackageIdentity(
                name="contract",
                directory="contract",
                template="contract/Cargo.toml.j2",
                dependency_table="build-dependencies",
            )
