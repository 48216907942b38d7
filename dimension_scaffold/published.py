"""Checks pinned dependency versions against what is actually published.

The registry pins a version for every Dimension crate and the scaffolder pins
a toolchain.  Both drift as upstream releases happen; this module queries the
crates.io sparse index and the upstream ``rust-toolchain`` file so the pins
can be kept current.

Typical usage::

    client = PublishedIndexClient()
    for mismatch in client.check_registry(default_registry()):
        print(mismatch.name, mismatch.pinned, "->", mismatch.published)
"""

from __future__ import annotations

import json

import httpx
from pydantic import BaseModel

from .errors import PublishedIndexError
from .scaffolder.registry import DependencyRegistry

CRATES_IO_INDEX_URL = "https://index.crates.io"
UPSTREAM_TOOLCHAIN_URL = (
    "https://raw.githubusercontent.com/dimension-labs/dimension-node/main/"
    "smart_contracts/rust-toolchain"
)
VERSION_FIELD_NAME = "vers"


class VersionMismatch(BaseModel):
    """A registry entry whose pinned version is not the latest published one."""

    name: str
    pinned: str
    published: str


def index_path(crate_name: str) -> str:
    """Return the path of *crate_name* inside a crates.io-style index.

    Examples::

        index_path("a")                  -> "1/a"
        index_path("ab")                 -> "2/ab"
        index_path("abc")                -> "3/a/abc"
        index_path("dimension-types")    -> "di/me/dimension-types"
    """
    name = crate_name.lower()
    if not name:
        raise ValueError("crate name must not be empty")
    if len(name) <= 2:
        return f"{len(name)}/{name}"
    if len(name) == 3:
        return f"3/{name[0]}/{name}"
    return f"{name[:2]}/{name[2:4]}/{name}"


class PublishedIndexClient:
    """Synchronous client for the crates.io index and the upstream toolchain file."""

    def __init__(
        self,
        index_url: str = CRATES_IO_INDEX_URL,
        toolchain_url: str = UPSTREAM_TOOLCHAIN_URL,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.index_url = index_url.rstrip("/")
        self.toolchain_url = toolchain_url
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.Client:
        """Return a fresh ``Client`` configured with our timeout and transport."""
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            transport=self.transport,
            follow_redirects=True,
        )

    def _get_text(self, url: str) -> str:
        try:
            with self._client() as client:
                response = client.get(url)
                response.raise_for_status()
                return response.text
        except httpx.HTTPStatusError as exc:
            raise PublishedIndexError(
                f"{url} returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise PublishedIndexError(f"failed to fetch {url}: {exc}") from exc

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def latest_version(self, crate_name: str) -> str:
        """Return the version of the most recently published release of *crate_name*.

        The index file holds one JSON object per release, oldest first.

        Raises:
            PublishedIndexError: If the index cannot be fetched or parsed.
        """
        url = f"{self.index_url}/{index_path(crate_name)}"
        lines = [line for line in self._get_text(url).splitlines() if line.strip()]
        if not lines:
            raise PublishedIndexError(f"index file for {crate_name} has no entries")
        try:
            latest = json.loads(lines[-1])
            return str(latest[VERSION_FIELD_NAME])
        except (json.JSONDecodeError, KeyError, TypeError) as exc:
            raise PublishedIndexError(
                f"latest entry in index file for {crate_name} is malformed"
            ) from exc

    def check_registry(self, registry: DependencyRegistry) -> list[VersionMismatch]:
        """Compare every registry pin with the latest published version."""
        mismatches: list[VersionMismatch] = []
        for dep in registry:
            published = self.latest_version(dep.name)
            if published != dep.version:
                mismatches.append(
                    VersionMismatch(name=dep.name, pinned=dep.version, published=published)
                )
        return mismatches

    def upstream_toolchain(self) -> str:
        """Return the toolchain pinned by the upstream ``dimension-node`` repository."""
        return self._get_text(self.toolchain_url).strip()
