"""Tests for the project scaffolding generator.

Covers:
- Output structure for examples with and without written sources
- Verbatim copy of found sources and base template files
- Placeholder synthesis and naming
- README / .gitignore / .env.example content
- Re-running into an existing directory (overwrite, keep unrelated files)
- Unknown ids and file-system failures
- Best-effort git initialisation
"""

from __future__ import annotations

from pathlib import Path

import pytest

from fhevm_examples.config import Config
from fhevm_examples.registry import UnknownExampleError
from fhevm_examples.scaffolder import GitInitResult, ProjectGenerator, ScaffoldResult, scaffold
from fhevm_examples.utils import FilesystemError



# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def generator(config: Config, registry) -> ProjectGenerator:
    return ProjectGenerator(config, registry)


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    return tmp_path / "out"


def _assert_structure(root: Path) -> None:
    assert (root / "contracts").is_dir()
    assert (root / "test").is_dir()
    assert (root / "README.md").is_file()
    assert (root / ".gitignore").is_file()
    assert (root / ".env.example").is_file()


# ---------------------------------------------------------------------------
# Structure
# ---------------------------------------------------------------------------


class TestStructure:
    @pytest.mark.parametrize("example_id", ["sample-counter", "fhe-counter", "access-control"])
    async def test_structure_for_every_example(self, generator, out_dir, example_id):
        result = await generator.generate(example_id, out_dir)
        assert isinstance(result, ScaffoldResult)
        _assert_structure(out_dir)

    async def test_creates_nested_output_dir(self, generator, tmp_path):
        target = tmp_path / "a" / "b" / "c"
        await generator.generate("fhe-counter", target)
        _assert_structure(target)

    async def test_base_template_copied(self, generator, out_dir, assets_root):
        await generator.generate("sample-counter", out_dir)
        for relative in ("package.json", "tsconfig.json", "hardhat.config.ts", "scripts/deploy.ts"):
            copied = out_dir / relative
            assert copied.read_bytes() == (assets_root / "base-template" / relative).read_bytes()

    async def test_missing_base_template_file_warns(self, config, registry, out_dir):
        config.base_template_files = ["package.json", "does-not-exist.json"]
        result = await ProjectGenerator(config, registry).generate("sample-counter", out_dir)
        assert (out_dir / "package.json").is_file()
        assert not (out_dir / "does-not-exist.json").exists()
        assert any("does-not-exist.json" in w for w in result.warnings)

    async def test_result_lists_written_files(self, generator, out_dir):
        result = await generator.generate("sample-counter", out_dir)
        assert result.example_id == "sample-counter"
        assert result.output_dir == out_dir
        assert out_dir / "README.md" in result.files
        assert out_dir / "contracts" / "SampleCounter.sol" in result.files
        assert all(path.exists() for path in result.files)


# ---------------------------------------------------------------------------
# Example sources
# ---------------------------------------------------------------------------


class TestSources:
    async def test_found_sources_copied_verbatim(self, generator, out_dir, sample_contract, sample_test):
        result = await generator.generate("sample-counter", out_dir)
        assert (out_dir / "contracts" / "SampleCounter.sol").read_text(encoding="utf-8") == sample_contract
        assert (out_dir / "test" / "SampleCounter.test.ts").read_text(encoding="utf-8") == sample_test
        assert result.placeholders == []

    async def test_non_utf8_source_copied_byte_for_byte(self, config, assets_root, out_dir):
        from fhevm_examples.registry import ExampleDescriptor, ExampleRegistry

        latin1 = "// Autor: José\ncontract Legacy {}\n".encode("latin-1")
        (assets_root / "contracts" / "Legacy.sol").write_bytes(latin1)
        reg = ExampleRegistry(
            [
                ExampleDescriptor(
                    id="legacy",
                    title="Legacy",
                    contract_source_path="contracts/Legacy.sol",
                    test_source_path="test/SampleCounter.test.ts",
                )
            ]
        )
        result = await ProjectGenerator(config, reg).generate("legacy", out_dir)
        assert (out_dir / "contracts" / "Legacy.sol").read_bytes() == latin1
        assert result.placeholders == []

    async def test_source_path_is_a_directory(self, config, assets_root, out_dir):
        from fhevm_examples.registry import ExampleDescriptor, ExampleRegistry

        (assets_root / "contracts" / "Dir.sol").mkdir()
        reg = ExampleRegistry(
            [
                ExampleDescriptor(
                    id="dir",
                    title="Dir",
                    contract_source_path="contracts/Dir.sol",
                    test_source_path="test/Dir.test.ts",
                )
            ]
        )
        with pytest.raises(FilesystemError):
            await ProjectGenerator(config, reg).generate("dir", out_dir)

    async def test_missing_contract_gets_placeholder(self, generator, out_dir):
        result = await generator.generate("fhe-counter", out_dir)
        contract = out_dir / "contracts" / "FheCounter.sol"
        assert contract.is_file()
        text = contract.read_text(encoding="utf-8")
        assert "pragma solidity ^0.8.24;" in text
        assert "contract FheCounter is ZamaEthereumConfig {" in text
        assert "@title FHE Counter" in text
        assert text.count("{") == text.count("}")
        assert contract in result.placeholders

    async def test_missing_test_gets_placeholder(self, generator, out_dir):
        result = await generator.generate("access-control", out_dir)
        test_file = out_dir / "test" / "AccessControl.test.ts"
        text = test_file.read_text(encoding="utf-8")
        assert 'describe("Access Control Example"' in text
        assert 'getContractFactory("AccessControl")' in text
        assert "@chapter intermediate" in text
        assert test_file in result.placeholders

    async def test_missing_sources_reported_as_warnings(self, generator, out_dir):
        result = await generator.generate("fhe-counter", out_dir)
        missing = [w for w in result.warnings if "Source file not found" in w]
        assert len(missing) == 2


# ---------------------------------------------------------------------------
# Generated text files
# ---------------------------------------------------------------------------


class TestGeneratedFiles:
    async def test_readme_contains_title_and_description(self, generator, out_dir):
        await generator.generate("fhe-counter", out_dir)
        readme = (out_dir / "README.md").read_text(encoding="utf-8")
        assert readme.startswith("# FHE Counter\n")
        assert "A simple encrypted counter demonstrating basic FHE operations" in readme
        assert "## Project Structure" in readme
        assert "npm run compile" in readme

    async def test_gitignore_and_env_are_example_independent(self, generator, tmp_path):
        await generator.generate("fhe-counter", tmp_path / "one")
        await generator.generate("sample-counter", tmp_path / "two")
        for name in (".gitignore", ".env.example"):
            one = (tmp_path / "one" / name).read_text(encoding="utf-8")
            two = (tmp_path / "two" / name).read_text(encoding="utf-8")
            assert one == two
        assert "node_modules/" in (tmp_path / "one" / ".gitignore").read_text(encoding="utf-8")
        assert "SEPOLIA_RPC_URL=" in (tmp_path / "one" / ".env.example").read_text(encoding="utf-8")

    async def test_descriptor_text_inserted_literally(self, config, tmp_path, out_dir):
        from fhevm_examples.registry import ExampleDescriptor, ExampleRegistry

        reg = ExampleRegistry(
            [
                ExampleDescriptor(
                    id="odd-text",
                    title="Odd <Title> & {{ braces }}",
                    description="Uses `code` and <html>",
                    contract_source_path="contracts/Odd.sol",
                    test_source_path="test/Odd.test.ts",
                )
            ]
        )
        await ProjectGenerator(config, reg).generate("odd-text", out_dir)
        readme = (out_dir / "README.md").read_text(encoding="utf-8")
        assert "# Odd <Title> & {{ braces }}" in readme
        assert "Uses `code` and <html>" in readme


# ---------------------------------------------------------------------------
# Re-running
# ---------------------------------------------------------------------------


class TestRerun:
    async def test_rerun_overwrites_and_keeps_unrelated(self, generator, out_dir):
        await generator.generate("fhe-counter", out_dir)
        first_readme = (out_dir / "README.md").read_text(encoding="utf-8")
        (out_dir / "README.md").write_text("edited by hand", encoding="utf-8")
        (out_dir / "notes.txt").write_text("keep me", encoding="utf-8")

        result = await generator.generate("fhe-counter", out_dir)

        assert (out_dir / "README.md").read_text(encoding="utf-8") == first_readme
        assert (out_dir / "notes.txt").read_text(encoding="utf-8") == "keep me"
        assert "notes.txt" in result.preexisting
        assert any("not empty" in w for w in result.warnings)

    async def test_fresh_directory_has_no_preexisting(self, generator, out_dir):
        result = await generator.generate("fhe-counter", out_dir)
        assert result.preexisting == []
        assert not any("not empty" in w for w in result.warnings)


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:
    async def test_unknown_example(self, generator, out_dir):
        with pytest.raises(UnknownExampleError) as exc_info:
            await generator.generate("unknown-example", out_dir)
        assert "fhe-counter" in exc_info.value.valid_ids
        assert not out_dir.exists()

    async def test_output_path_is_a_file(self, generator, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(FilesystemError) as exc_info:
            await generator.generate("fhe-counter", blocker)
        assert exc_info.value.path == blocker

    async def test_contracts_path_is_a_file(self, generator, out_dir):
        out_dir.mkdir()
        (out_dir / "contracts").write_text("not a directory", encoding="utf-8")
        with pytest.raises(FilesystemError) as exc_info:
            await generator.generate("sample-counter", out_dir)
        assert exc_info.value.path == out_dir / "contracts"


# ---------------------------------------------------------------------------
# Git
# ---------------------------------------------------------------------------


class TestGitStep:
    async def test_disabled_by_config(self, generator, out_dir, mock_git):
        result = await generator.generate("fhe-counter", out_dir)
        assert result.git is None
        mock_git.assert_not_called()

    async def test_success(self, config, registry, out_dir, mock_git):
        config.init_git = True
        mock_git.side_effect = [(128, "", "not a git repository"), (0, "Initialized", "")]
        result = await ProjectGenerator(config, registry).generate("fhe-counter", out_dir)
        assert result.git == GitInitResult(initialized=True, message="Git repository initialized")
        assert not any("Could not initialize" in w for w in result.warnings)

    async def test_failure_is_a_warning(self, config, registry, out_dir, mock_git):
        config.init_git = True
        mock_git.side_effect = [(128, "", "not a git repository"), (1, "", "permission denied")]
        result = await ProjectGenerator(config, registry).generate("fhe-counter", out_dir)
        assert result.git is not None and not result.git.initialized
        assert any("permission denied" in w for w in result.warnings)
        _assert_structure(out_dir)

    async def test_git_missing_is_a_warning(self, config, registry, out_dir, mock_git):
        config.init_git = True
        mock_git.side_effect = FileNotFoundError("git")
        result = await ProjectGenerator(config, registry).generate("fhe-counter", out_dir)
        assert result.git is not None and not result.git.initialized
        assert any("git executable not found" in w for w in result.warnings)


# ---------------------------------------------------------------------------
# Convenience wrapper
# ---------------------------------------------------------------------------


class TestScaffoldFunction:
    async def test_scaffold_wrapper(self, config, registry, out_dir):
        result = await scaffold("sample-counter", out_dir, config=config, registry=registry)
        assert result.example_id == "sample-counter"
        _assert_structure(out_dir)
