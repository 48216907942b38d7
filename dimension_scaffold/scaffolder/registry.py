"""Central registry of the Dimension crates every generated package depends on.

Each crate is described once, here, so the contract and tests manifests can
never disagree about which version of a shared dependency they declare.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field

# MAJOR.MINOR.PATCH with optional pre-release and build metadata.
SEMVER_PATTERN = (
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)


# ---------------------------------------------------------------------------
# Logical roles
# ---------------------------------------------------------------------------

CONTRACT = "contract"
TYPES = "types"
EXECUTION_ENGINE = "execution_engine"
TEST_SUPPORT = "test_support"


class Dependency(BaseModel):
    """A single shared crate: its published name and pinned version."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(..., min_length=1, description="Logical role used for lookups")
    name: str = Field(..., pattern=r"^[A-Za-z0-9_-]+$", description="Published crate name")
    version: str = Field(..., pattern=SEMVER_PATTERN, description="Pinned crate version")
    workspace_subpath: str = Field(
        ...,
        min_length=1,
        description="Location of the crate relative to a dimension-node checkout",
    )


class DependencyRegistry:
    """Ordered, read-only collection of ``Dependency`` descriptors.

    Lookups are by logical role so callers never hard-code positions.  Order
    is preserved everywhere dependencies are listed, which keeps rendered
    manifests deterministic.
    """

    def __init__(self, dependencies: Iterable[Dependency]) -> None:
        entries = tuple(dependencies)
        by_role: dict[str, Dependency] = {}
        names: set[str] = set()
        for dep in entries:
            if dep.role in by_role:
                raise ValueError(f"duplicate dependency role: {dep.role!r}")
            if dep.name in names:
                raise ValueError(f"duplicate dependency name: {dep.name!r}")
            by_role[dep.role] = dep
            names.add(dep.name)
        self._entries = entries
        self._by_role = by_role

    def __iter__(self) -> Iterator[Dependency]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, role: object) -> bool:
        return role in self._by_role

    def all(self) -> tuple[Dependency, ...]:
        """Return every descriptor in registry order."""
        return self._entries

    def get(self, role: str) -> Dependency:
        """Return the descriptor registered for *role*.

        Raises:
            KeyError: If no dependency fills that role.  This is a defect in
                the caller, not a condition a user can trigger.
        """
        try:
            return self._by_role[role]
        except KeyError:
            raise KeyError(f"no dependency registered for role {role!r}") from None

    def subset(self, *roles: str) -> tuple[Dependency, ...]:
        """Return the descriptors for *roles*, in registry order."""
        wanted = {self.get(role).role for role in roles}
        return tuple(dep for dep in self._entries if dep.role in wanted)


def default_registry() -> DependencyRegistry:
    """Build the registry of Dimension crates pinned by this release."""
    return DependencyRegistry(
        [
            Dependency(
                role=CONTRACT,
                name="dimension-contract",
                version="1.4.3",
                workspace_subpath="smart_contracts/contract",
            ),
            Dependency(
                role=TYPES,
                name="dimension-types",
                version="1.4.6",
                workspace_subpath="types",
            ),
            Dependency(
                role=EXECUTION_ENGINE,
                name="dimension-execution-engine",
                version="1.4.4",
                workspace_subpath="execution_engine",
            ),
            Dependency(
                role=TEST_SUPPORT,
                name="dimension-engine-test-support",
                version="2.0.3",
                workspace_subpath="execution_engine_testing/test_support",
            ),
        ]
    )
