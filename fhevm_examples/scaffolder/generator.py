"""Main scaffolding orchestrator.

Takes an example id and an output directory and materialises a standalone
Hardhat project: the base template files, the example's contract and test
(or generated placeholders when the example sources are not written yet),
a README, ``.gitignore``, ``.env.example``, and a fresh git repository.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from fhevm_examples.config import Config
from fhevm_examples.registry import ExampleDescriptor, ExampleRegistry, default_registry
from fhevm_examples.scaffolder.git import GitInitResult, init_repository
from fhevm_examples.sources import source_exists
from fhevm_examples.templates import TemplateRenderer
from fhevm_examples.utils import copy_file_async, ensure_dir, to_pascal_case


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------


class ScaffoldResult(BaseModel):
    """Everything a single scaffold run produced."""

    example_id: str
    output_dir: Path
    files: list[Path] = Field(default_factory=list, description="Written files, in write order")
    placeholders: list[Path] = Field(
        default_factory=list,
        description="Files synthesized because the example source is missing",
    )
    warnings: list[str] = Field(default_factory=list)
    preexisting: list[str] = Field(
        default_factory=list,
        description="Entries already present in the output directory before the run",
    )
    git: GitInitResult | None = Field(
        default=None, description="Repository initialisation outcome, None when disabled"
    )


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Scaffolds a standalone project for one registered example.

    Re-running into an existing directory layers the new files on top of it:
    same-named files are overwritten and unrelated files are kept.  There is
    no rollback; a fatal error leaves whatever was already written.
    """

    def __init__(
        self,
        config: Config | None = None,
        registry: ExampleRegistry | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config or Config()
        self.registry = registry if registry is not None else default_registry()
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    async def generate(self, example_id: str, output_dir: str | Path) -> ScaffoldResult:
        """Generate the project for *example_id* inside *output_dir*.

        Raises:
            UnknownExampleError: If *example_id* is not registered.
            FilesystemError: If any directory or file cannot be written.
        """
        descriptor = self.registry.resolve(example_id)
        root = Path(output_dir)
        result = ScaffoldResult(example_id=descriptor.id, output_dir=root)

        result.preexisting = await asyncio.to_thread(_list_entries, root)
        if result.preexisting:
            result.warnings.append(
                f"Output directory is not empty; {len(result.preexisting)} existing "
                "entries are kept and same-named files are overwritten"
            )

        context = self._build_context(descriptor)

        # 1. Output directory
        await asyncio.to_thread(ensure_dir, root)

        # 2. Base template build/config files
        await self._copy_base_template(root, result)

        # 3. Contract
        await self._materialise_source(
            descriptor.contract_source_path,
            root / "contracts",
            f"{context['contract_name']}.sol",
            "scaffold/placeholder_contract.sol.j2",
            context,
            result,
        )

        # 4. Test
        await self._materialise_source(
            descriptor.test_source_path,
            root / "test",
            f"{context['contract_name']}.test.ts",
            "scaffold/placeholder_test.ts.j2",
            context,
            result,
        )

        # 5. README
        result.files.append(
            await self.renderer.render_to_file(
                "scaffold/README.md.j2", root / "README.md", context
            )
        )

        # 6. .gitignore and .env.example
        for template_name, output_name in (
            ("scaffold/gitignore.j2", ".gitignore"),
            ("scaffold/env.example.j2", ".env.example"),
        ):
            result.files.append(
                await self.renderer.render_to_file(template_name, root / output_name, context)
            )

        # 7. Version control (best effort)
        if self.config.init_git:
            result.git = await init_repository(root, timeout=self.config.git_timeout)
            if not result.git.initialized:
                result.warnings.append(result.git.message)

        return result

    # -- Context building --------------------------------------------------

    def _build_context(self, descriptor: ExampleDescriptor) -> dict[str, Any]:
        """Build the Jinja2 template context for one example."""
        return {
            "example_id": descriptor.id,
            "title": descriptor.title,
            "description": descriptor.description,
            "category": descriptor.category,
            "contract_name": to_pascal_case(descriptor.id),
        }

    # -- Steps -------------------------------------------------------------

    async def _copy_base_template(self, root: Path, result: ScaffoldResult) -> None:
        """Copy the configured base template files, preserving relative paths."""
        base_dir = self.config.base_template_dir
        for relative in self.config.base_template_files:
            src = base_dir / relative
            if not src.is_file():
                result.warnings.append(f"Base template file not found: {src}")
                continue
            result.files.append(await copy_file_async(src, root / relative))

    async def _materialise_source(
        self,
        declared_path: str,
        target_dir: Path,
        placeholder_name: str,
        placeholder_template: str,
        context: dict[str, Any],
        result: ScaffoldResult,
    ) -> None:
        """Copy a declared example source, or render a placeholder for it.

        Sources are copied as bytes and never decoded, so any encoding passes
        through unchanged.
        """
        await asyncio.to_thread(ensure_dir, target_dir)
        src = self.config.source_path(declared_path)

        if await asyncio.to_thread(source_exists, src):
            result.files.append(await copy_file_async(src, target_dir / src.name))
            return

        written = await self.renderer.render_to_file(
            placeholder_template, target_dir / placeholder_name, context
        )
        result.files.append(written)
        result.placeholders.append(written)
        result.warnings.append(
            f"Source file not found: {src}; created placeholder {written}"
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _list_entries(path: Path) -> list[str]:
    """Names of the entries already inside *path* (empty if it is not a directory)."""
    if not path.is_dir():
        return []
    return sorted(entry.name for entry in path.iterdir())


async def scaffold(
    example_id: str,
    output_dir: str | Path,
    *,
    config: Config | None = None,
    registry: ExampleRegistry | None = None,
) -> ScaffoldResult:
    """Convenience wrapper: ``ProjectGenerator(config, registry).generate(...)``."""
    return await ProjectGenerator(config, registry).generate(example_id, output_dir)
