"""Toolchain pin, Makefile and CI configuration for the generated workspace.

These files are single-template renders with no branching logic; they only
need the workspace root and the shared rendering context.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .templates import TemplateRenderer


class AuxiliaryGenerator:
    """Writes the workspace-level support files."""

    # Template name -> output file name
    _FILES: dict[str, str] = {
        "rust-toolchain.j2": "rust-toolchain",
        "Makefile.j2": "Makefile",
        "travis.yml.j2": ".travis.yml",
        "gitignore.j2": ".gitignore",
    }

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def generate_all(self, root: Path, context: dict[str, Any]) -> list[Path]:
        """Render every support file into *root*.

        Returns:
            The written paths, in a fixed order.
        """
        return [
            self.renderer.render_to_file(template_name, root / output_name, context)
            for template_name, output_name in self._FILES.items()
        ]
