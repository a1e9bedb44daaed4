"""Shared pytest fixtures for the FHEVM example tools test suite.

Provides reusable fixtures for:
- A throwaway assets root (base template + example sources)
- A small injectable registry covering found and missing sources
- A ``Config`` pointing every path into ``tmp_path``
- A mock for ``git`` subprocess calls
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from fhevm_examples.config import Config
from fhevm_examples.registry import ExampleDescriptor, ExampleRegistry


# ---------------------------------------------------------------------------
# Sample sources
# ---------------------------------------------------------------------------

SAMPLE_CONTRACT = textwrap.dedent(
    """\
    // SPDX-License-Identifier: BSD-3-Clause-Clear
    pragma solidity ^0.8.24;

    /**
     * @title Sample Counter
     * @dev Keeps an encrypted count.
     */
    contract SampleCounter {
        uint32 public count;   // {{ not a template }}

        /** @notice Increment the counter. */
        function increment() external {
            count += 1;
        }
    }
    """
)

SAMPLE_TEST = textwrap.dedent(
    """\
    import { expect } from "chai";

    /**
     * Test suite for SampleCounter
     * @chapter basic
     */
    describe("SampleCounter", () => {
        it("starts at zero", async () => {
            expect(0).to.equal(0);
        });
    });
    """
)


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------


@pytest.fixture
def assets_root(tmp_path: Path) -> Path:
    """Assets root with a base template and one fully written example."""
    root = tmp_path / "assets"
    base = root / "base-template"
    (base / "scripts").mkdir(parents=True)
    (base / "package.json").write_text('{"name": "fhevm-example"}\n', encoding="utf-8")
    (base / "tsconfig.json").write_text('{"compilerOptions": {}}\n', encoding="utf-8")
    (base / "hardhat.config.ts").write_text("export default {};\n", encoding="utf-8")
    (base / "scripts" / "deploy.ts").write_text("// deploy\n", encoding="utf-8")

    (root / "contracts").mkdir()
    (root / "test").mkdir()
    (root / "contracts" / "SampleCounter.sol").write_text(SAMPLE_CONTRACT, encoding="utf-8")
    (root / "test" / "SampleCounter.test.ts").write_text(SAMPLE_TEST, encoding="utf-8")
    return root


@pytest.fixture
def sample_contract() -> str:
    return SAMPLE_CONTRACT


@pytest.fixture
def sample_test() -> str:
    return SAMPLE_TEST


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    return tmp_path / "docs"


@pytest.fixture
def config(assets_root: Path, docs_dir: Path) -> Config:
    """Config rooted in ``tmp_path`` with git initialisation disabled."""
    return Config(assets_root=assets_root, docs_dir=docs_dir, init_git=False)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_descriptors() -> list[ExampleDescriptor]:
    """Three examples, one per category, declared advanced -> basic -> intermediate."""
    return [
        ExampleDescriptor(
            id="sample-counter",
            title="Sample Counter",
            description="A counter whose sources exist",
            category="advanced",
            contract_source_path="contracts/SampleCounter.sol",
            test_source_path="test/SampleCounter.test.ts",
        ),
        ExampleDescriptor(
            id="fhe-counter",
            title="FHE Counter",
            description="A simple encrypted counter demonstrating basic FHE operations",
            category="basic",
            contract_source_path="contracts/FHECounter.sol",
            test_source_path="test/FHECounter.test.ts",
        ),
        ExampleDescriptor(
            id="access-control",
            title="Access Control Example",
            description="Demonstrates FHE.allow and FHE.allowThis permission management",
            category="intermediate",
            contract_source_path="contracts/AccessControl.sol",
            test_source_path="test/AccessControl.test.ts",
        ),
    ]


@pytest.fixture
def registry(sample_descriptors: list[ExampleDescriptor]) -> ExampleRegistry:
    return ExampleRegistry(sample_descriptors)


# ---------------------------------------------------------------------------
# Mock git
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_git():
    """Patch the git subprocess runner.

    Usage::

        def test_something(mock_git):
            mock_git.side_effect = [(1, "", "not a repo"), (0, "", "")]
    """
    with patch(
        "fhevm_examples.scaffolder.git.run_command",
        new_callable=AsyncMock,
    ) as runner:
        runner.return_value = (0, "", "")
        yield runner
