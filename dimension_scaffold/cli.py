"""Command line entry point for ``dimension-scaffold``.

Usage::

    dimension-scaffold <path>
    cd <path>
    make prepare
    make test

The hidden ``--workspace-path`` / ``--git-url`` + ``--git-branch`` flags add a
``[patch.crates-io]`` section redirecting the Dimension crates to a local
``dimension-node`` checkout or a git branch.  ``--check-versions`` compares the
pinned crate versions and toolchain with what is currently published.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .config import DEFAULT_TOOLCHAIN, ScaffoldConfig
from .errors import (
    FAILURE_EXIT_CODE,
    OverrideConflictError,
    PublishedIndexError,
    ScaffoldError,
    ScaffoldFileSystemError,
)
from .published import PublishedIndexClient
from .scaffolder import ScaffoldGenerator, default_registry, resolve_overrides
from .utils import console, print_error, print_success, print_summary_table, print_warning

USAGE_HINT = """    cd {path}
    make prepare
    make test"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dimension-scaffold",
        description="Create a Wasm contract and tests for use on the Dimension Platform",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  dimension-scaffold my-project\n"
            "  cd my-project && make prepare && make test\n"
        ),
    )
    parser.add_argument(
        "path",
        nargs="?",
        help="Path to new folder for contract and tests",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--check-versions",
        action="store_true",
        help="Compare pinned crate versions and toolchain with the published ones",
    )
    parser.add_argument("--workspace-path", default=None, help=argparse.SUPPRESS)
    parser.add_argument("--git-url", default=None, help=argparse.SUPPRESS)
    parser.add_argument("--git-branch", default=None, help=argparse.SUPPRESS)
    return parser


def _build_config(parser: argparse.ArgumentParser, args: argparse.Namespace) -> ScaffoldConfig:
    """Resolve the run configuration; the CLI flags win over the environment."""
    root_path = Path(args.path).expanduser().absolute()
    if args.workspace_path or args.git_url or args.git_branch:
        try:
            overrides = resolve_overrides(args.workspace_path, args.git_url, args.git_branch)
        except OverrideConflictError as exc:
            parser.error(str(exc))
        return ScaffoldConfig.from_env(root_path, overrides=overrides)

    try:
        return ScaffoldConfig.from_env(root_path)
    except OverrideConflictError as exc:
        print_error(str(exc))
        sys.exit(exc.exit_code)


def _scaffold(config: ScaffoldConfig) -> None:
    generator = ScaffoldGenerator(config)
    try:
        root = generator.generate()
    except ScaffoldFileSystemError as exc:
        print_error(str(exc))
        if config.root_path.exists():
            print_warning(
                f"'{config.root_path}' may be incomplete; remove it before running again"
            )
        sys.exit(exc.exit_code)
    except ScaffoldError as exc:
        print_error(str(exc))
        sys.exit(exc.exit_code)

    print_success(f"Created contract workspace at {root}")
    console.print(USAGE_HINT.format(path=root), highlight=False)


def _check_versions() -> None:
    client = PublishedIndexClient()
    registry = default_registry()
    try:
        mismatches = client.check_registry(registry)
        upstream_toolchain = client.upstream_toolchain()
    except PublishedIndexError as exc:
        print_error(str(exc))
        sys.exit(FAILURE_EXIT_CODE)

    rows = [(m.name, m.pinned, m.published) for m in mismatches]
    if upstream_toolchain != DEFAULT_TOOLCHAIN:
        rows.append(("rust-toolchain", DEFAULT_TOOLCHAIN, upstream_toolchain))

    if not rows:
        print_success(f"All {len(registry)} crates and the toolchain are up to date.")
        return

    print_summary_table(rows, ["Item", "Pinned", "Published"], title="Outdated pins")
    sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``dimension-scaffold``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.check_versions:
        _check_versions()
        return

    if not args.path:
        parser.error("the following arguments are required: path")

    _scaffold(_build_config(parser, args))


if __name__ == "__main__":
    main()
