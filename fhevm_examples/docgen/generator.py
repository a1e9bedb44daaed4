"""Markdown documentation generator for the registered examples.

Produces ``docs/<example-id>/README.md`` for each example, with the contract
and test sources embedded verbatim, plus a ``SUMMARY.md`` index grouped by
category and a static ``GETTING_STARTED.md``.  Output is a pure function of
the registry and the source file contents, so unchanged inputs regenerate
byte-identical files.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from fhevm_examples.config import Config
from fhevm_examples.registry import ExampleDescriptor, ExampleRegistry, default_registry
from fhevm_examples.sources import (
    FoundSource,
    MissingSource,
    SourceFile,
    code_language,
    extract_doc_comments,
    read_source,
)
from fhevm_examples.templates import TemplateRenderer
from fhevm_examples.utils import write_text_async


# ---------------------------------------------------------------------------
# Data Models
# ---------------------------------------------------------------------------


class ExampleDoc(BaseModel):
    """One generated example document."""

    example_id: str
    path: Path
    missing_sources: list[Path] = Field(
        default_factory=list,
        description="Declared sources that were replaced by a warning marker",
    )


class DocsResult(BaseModel):
    """Everything produced by :meth:`DocGenerator.generate_all`."""

    examples: list[ExampleDoc] = Field(default_factory=list)
    summary_path: Path | None = None
    getting_started_path: Path | None = None

    @property
    def files(self) -> list[Path]:
        paths = [doc.path for doc in self.examples]
        if self.summary_path is not None:
            paths.append(self.summary_path)
        if self.getting_started_path is not None:
            paths.append(self.getting_started_path)
        return paths

    @property
    def warnings(self) -> list[str]:
        return [
            f"{doc.example_id}: source file not found: {missing}"
            for doc in self.examples
            for missing in doc.missing_sources
        ]


# ---------------------------------------------------------------------------
# DocGenerator
# ---------------------------------------------------------------------------


class DocGenerator:
    """Generates GitBook-style markdown for the examples of a registry.

    Usage::

        generator = DocGenerator(Config(docs_dir=Path("docs")))
        result = await generator.generate_all()
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

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def generate_example(self, example_id: str) -> ExampleDoc:
        """Write the document of one example.

        Raises:
            UnknownExampleError: If *example_id* is not registered.
            FilesystemError: If a source cannot be read or the output written.
        """
        descriptor = self.registry.resolve(example_id)
        return await self._write_example(descriptor)

    async def generate_all(self) -> DocsResult:
        """Write every example document, the index, and the getting-started guide.

        Example documents are rendered concurrently; the index is built from
        the registry afterwards so its order never depends on completion order.
        """
        docs = await asyncio.gather(
            *(self._write_example(descriptor) for descriptor in self.registry.list_all())
        )

        summary_path = await write_text_async(self.config.summary_path, self.render_summary())
        getting_started_path = await write_text_async(
            self.config.getting_started_path, self.render_getting_started()
        )

        return DocsResult(
            examples=list(docs),
            summary_path=summary_path,
            getting_started_path=getting_started_path,
        )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render_example(self, descriptor: ExampleDescriptor) -> str:
        """Render the markdown document of one example."""
        contract = read_source(self.config.source_path(descriptor.contract_source_path))
        test = read_source(self.config.source_path(descriptor.test_source_path))
        return self._render_example(descriptor, contract, test)

    def render_summary(self) -> str:
        """Render ``SUMMARY.md``: examples grouped by category in registry order."""
        groups = [
            {"label": category_label(category), "examples": examples}
            for category, examples in self.registry.categories().items()
        ]
        return self.renderer.render("docs/SUMMARY.md.j2", {"groups": groups})

    def render_getting_started(self) -> str:
        """Render the static getting-started guide."""
        return self.renderer.render("docs/GETTING_STARTED.md.j2", {})

    def _render_example(
        self,
        descriptor: ExampleDescriptor,
        contract: SourceFile,
        test: SourceFile,
    ) -> str:
        context: dict[str, Any] = {
            "example_id": descriptor.id,
            "title": descriptor.title,
            "description": descriptor.description,
            "category": descriptor.category,
            "category_label": category_label(descriptor.category),
            "contract": _listing_context(contract, descriptor.contract_source_path),
            "test": _listing_context(test, descriptor.test_source_path),
            "annotations": _annotations(
                (descriptor.contract_source_path, contract),
                (descriptor.test_source_path, test),
            ),
        }
        return self.renderer.render("docs/example.md.j2", context)

    async def _write_example(self, descriptor: ExampleDescriptor) -> ExampleDoc:
        contract = await asyncio.to_thread(
            read_source, self.config.source_path(descriptor.contract_source_path)
        )
        test = await asyncio.to_thread(
            read_source, self.config.source_path(descriptor.test_source_path)
        )
        content = self._render_example(descriptor, contract, test)
        path = await write_text_async(self.config.example_doc_path(descriptor.id), content)
        return ExampleDoc(
            example_id=descriptor.id,
            path=path,
            missing_sources=[s.path for s in (contract, test) if isinstance(s, MissingSource)],
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def category_label(category: str) -> str:
    """Index heading for a category: ``"basic"`` -> ``"Basic Examples"``."""
    if category.lower().endswith("examples"):
        return category
    words = re.split(r"[-_\s]+", category.strip())
    return " ".join(w[:1].upper() + w[1:] for w in words if w) + " Examples"


def _fence_for(text: str) -> str:
    """A backtick fence longer than any backtick run inside *text*."""
    longest = max((len(run) for run in re.findall(r"`+", text)), default=0)
    return "`" * max(3, longest + 1)


def _listing_context(source: SourceFile, declared_path: str) -> dict[str, Any]:
    if isinstance(source, FoundSource):
        listing = source.text if source.text.endswith("\n") else source.text + "\n"
        return {
            "found": True,
            "declared_path": declared_path,
            "language": code_language(source.path),
            "fence": _fence_for(source.text),
            "listing": listing,
        }
    return {"found": False, "declared_path": declared_path}


def _annotations(*sources: tuple[str, SourceFile]) -> list[dict[str, str]]:
    """Doc comments of every found source, rendered as blockquotes."""
    notes: list[dict[str, str]] = []
    for declared_path, source in sources:
        if not isinstance(source, FoundSource):
            continue
        for comment in extract_doc_comments(source.text):
            quoted = "\n".join(f"> {line}" if line else ">" for line in comment.splitlines())
            notes.append({"source": f"`{declared_path}`", "quoted": quoted})
    return notes
