"""FHEVM example tools configuration.

Typed configuration shared by the scaffolder and the documentation generator.
Settings use a Pydantic v2 model so they are validated at construction time;
the command-line entry points build one instance from the environment and
then apply their flags on top.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

# Bundled, read-only assets: base template plus example sources.
DEFAULT_ASSETS_ROOT = Path(__file__).parent / "assets"

DEFAULT_BASE_TEMPLATE_FILES: list[str] = [
    "package.json",
    "tsconfig.json",
    "hardhat.config.ts",
    "scripts/deploy.ts",
]

_FALSE_VALUES = {"0", "false", "no", "off"}


class Config(BaseModel):
    """Global configuration for both command-line tools.

    Attributes:
        assets_root: Installation root that registry source paths and the base
            template are resolved against.
        docs_dir: Output directory of the documentation generator.
        base_template_files: Files copied verbatim from the base template into
            every scaffolded project, relative to the base template directory.
        init_git: Whether the scaffolder attempts ``git init``.
        git_timeout: Seconds allowed for each ``git`` invocation.
        registry_path: Optional YAML registry replacing the bundled examples.
    """

    assets_root: Path = Field(default=DEFAULT_ASSETS_ROOT)
    docs_dir: Path = Field(default=Path("docs"))
    base_template_dir_name: str = Field(default="base-template")
    base_template_files: list[str] = Field(
        default_factory=lambda: list(DEFAULT_BASE_TEMPLATE_FILES)
    )
    init_git: bool = Field(default=True)
    git_timeout: float = Field(default=30.0, gt=0, description="Per-command timeout in seconds")
    registry_path: Path | None = Field(default=None)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def base_template_dir(self) -> Path:
        """Directory holding the base template project files."""
        return self.assets_root / self.base_template_dir_name

    @property
    def summary_path(self) -> Path:
        """Path to the generated documentation index."""
        return self.docs_dir / "SUMMARY.md"

    @property
    def getting_started_path(self) -> Path:
        """Path to the generated getting-started guide."""
        return self.docs_dir / "GETTING_STARTED.md"

    def example_doc_path(self, example_id: str) -> Path:
        """Path to the generated document of one example."""
        return self.docs_dir / example_id / "README.md"

    def source_path(self, relative: str) -> Path:
        """Resolve a registry-declared source path against the assets root."""
        return self.assets_root / relative

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> Config:
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            FHEVM_EXAMPLES_ASSETS_ROOT, FHEVM_EXAMPLES_DOCS_DIR,
            FHEVM_EXAMPLES_INIT_GIT, FHEVM_EXAMPLES_GIT_TIMEOUT,
            FHEVM_EXAMPLES_REGISTRY.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("FHEVM_EXAMPLES_ASSETS_ROOT"):
            kwargs["assets_root"] = Path(os.environ["FHEVM_EXAMPLES_ASSETS_ROOT"])
        if os.environ.get("FHEVM_EXAMPLES_DOCS_DIR"):
            kwargs["docs_dir"] = Path(os.environ["FHEVM_EXAMPLES_DOCS_DIR"])
        if os.environ.get("FHEVM_EXAMPLES_INIT_GIT"):
            kwargs["init_git"] = (
                os.environ["FHEVM_EXAMPLES_INIT_GIT"].strip().lower() not in _FALSE_VALUES
            )
        if os.environ.get("FHEVM_EXAMPLES_GIT_TIMEOUT"):
            raw_timeout = os.environ["FHEVM_EXAMPLES_GIT_TIMEOUT"]
            try:
                kwargs["git_timeout"] = float(raw_timeout)
            except ValueError as exc:
                raise ValueError(
                    f"FHEVM_EXAMPLES_GIT_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
                ) from exc
        if os.environ.get("FHEVM_EXAMPLES_REGISTRY"):
            kwargs["registry_path"] = Path(os.environ["FHEVM_EXAMPLES_REGISTRY"])
        return cls(**kwargs)
