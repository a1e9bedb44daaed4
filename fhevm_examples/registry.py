"""Example registry.

A read-only table mapping example identifiers to their descriptors.  Both
command-line tools resolve identifiers against a registry instance that is
constructed once per invocation and passed in, so tests can substitute their
own registry.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fhevm_examples.utils import ExampleToolError


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class UnknownExampleError(ExampleToolError):
    """Raised when an identifier is not present in the registry."""

    def __init__(self, example_id: str, valid_ids: list[str]) -> None:
        self.example_id = example_id
        self.valid_ids = valid_ids
        super().__init__(
            f"Unknown example: {example_id!r} "
            f"(valid examples: {', '.join(valid_ids) or 'none'})"
        )


class RegistryError(ExampleToolError):
    """Raised when a registry file cannot be loaded or is invalid."""


# ---------------------------------------------------------------------------
# Data Models
# ---------------------------------------------------------------------------


class ExampleDescriptor(BaseModel):
    """Metadata for one buildable example."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$",
        description="Kebab-case identifier, used as CLI argument and output directory name",
    )
    title: str = Field(..., min_length=1, description="Human-readable display name")
    description: str = Field(default="", description="One-sentence summary")
    category: str = Field(
        default="basic",
        description="Grouping tag for generated documentation (basic, intermediate, advanced)",
    )
    contract_source_path: str = Field(
        ..., description="Contract source, relative to the assets root"
    )
    test_source_path: str = Field(..., description="Test source, relative to the assets root")
    doc_output_path: str = Field(
        default="",
        description="Suggested documentation path (advisory only)",
    )


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class ExampleRegistry:
    """Ordered, immutable mapping of example id to :class:`ExampleDescriptor`."""

    def __init__(self, descriptors: Iterable[ExampleDescriptor]) -> None:
        by_id: dict[str, ExampleDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.id in by_id:
                raise ValueError(f"Duplicate example id in registry: {descriptor.id!r}")
            by_id[descriptor.id] = descriptor
        self._by_id = by_id
        self._ordered = tuple(by_id.values())

    # -- Lookups -----------------------------------------------------------

    def resolve(self, example_id: str) -> ExampleDescriptor:
        """Return the descriptor registered under *example_id* (exact match).

        Raises:
            UnknownExampleError: If no such example exists.  The error carries
                the full ordered list of valid ids.
        """
        try:
            return self._by_id[example_id]
        except KeyError:
            raise UnknownExampleError(example_id, self.ids()) from None

    def list_all(self) -> tuple[ExampleDescriptor, ...]:
        """Return every descriptor in declaration order."""
        return self._ordered

    def ids(self) -> list[str]:
        """Return every registered id in declaration order."""
        return [d.id for d in self._ordered]

    def categories(self) -> dict[str, list[ExampleDescriptor]]:
        """Group descriptors by category.

        Categories appear in the order they are first seen; descriptors keep
        registry order inside each category.
        """
        groups: dict[str, list[ExampleDescriptor]] = {}
        for descriptor in self._ordered:
            groups.setdefault(descriptor.category, []).append(descriptor)
        return groups

    def __contains__(self, example_id: object) -> bool:
        return example_id in self._by_id

    def __iter__(self) -> Iterator[ExampleDescriptor]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __repr__(self) -> str:
        return f"ExampleRegistry({self.ids()!r})"

    # -- Loading -----------------------------------------------------------

    @classmethod
    def load(cls, path: str | Path) -> ExampleRegistry:
        """Build a registry from a YAML (or JSON) file.

        The file must contain a top-level ``examples`` list whose entries use
        the :class:`ExampleDescriptor` field names.  File order becomes
        registry order.

        Raises:
            RegistryError: If the file is missing, unparsable, or invalid.
        """
        file_path = Path(path)
        try:
            raw = file_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise RegistryError(f"Cannot read registry file {file_path}: {exc.strerror}") from exc

        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise RegistryError(f"Registry file {file_path} is not valid YAML: {exc}") from exc

        if not isinstance(data, dict) or not isinstance(data.get("examples"), list):
            raise RegistryError(
                f"Registry file {file_path} must contain a top-level 'examples' list"
            )

        try:
            descriptors = [ExampleDescriptor.model_validate(item) for item in data["examples"]]
            return cls(descriptors)
        except (ValidationError, ValueError) as exc:
            raise RegistryError(f"Invalid registry file {file_path}: {exc}") from exc


# ---------------------------------------------------------------------------
# Shipped examples
# ---------------------------------------------------------------------------

DEFAULT_EXAMPLES: tuple[ExampleDescriptor, ...] = (
    ExampleDescriptor(
        id="transportation-dispatch",
        title="Privacy-Preserving Transportation Dispatch",
        description=(
            "A privacy-first logistics optimization system using FHE that allows "
            "secure route coordination while keeping sensitive data encrypted"
        ),
        category="advanced",
        contract_source_path="contracts/AnonymousTransport.sol",
        test_source_path="test/AnonymousTransport.test.ts",
        doc_output_path="docs/TRANSPORTATION_DISPATCH.md",
    ),
    ExampleDescriptor(
        id="fhe-counter",
        title="FHE Counter",
        description="A simple encrypted counter demonstrating basic FHE operations",
        category="basic",
        contract_source_path="contracts/FHECounter.sol",
        test_source_path="test/FHECounter.test.ts",
        doc_output_path="docs/FHE_COUNTER.md",
    ),
    ExampleDescriptor(
        id="access-control",
        title="Access Control Example",
        description="Demonstrates FHE.allow and FHE.allowThis permission management",
        category="intermediate",
        contract_source_path="contracts/AccessControl.sol",
        test_source_path="test/AccessControl.test.ts",
        doc_output_path="docs/ACCESS_CONTROL.md",
    ),
)


def default_registry() -> ExampleRegistry:
    """Return a registry of the examples bundled with the package."""
    return ExampleRegistry(DEFAULT_EXAMPLES)


def load_registry(path: str | Path | None = None) -> ExampleRegistry:
    """Return the registry stored at *path*, or the bundled one when ``None``."""
    if path is None:
        return default_registry()
    return ExampleRegistry.load(path)
