"""Generate markdown documentation for the FHEVM examples.

Usage::

    generate-fhevm-docs <example-id>
    generate-fhevm-docs --all
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from jinja2 import TemplateError

from fhevm_examples.config import Config
from fhevm_examples.docgen import DocGenerator
from fhevm_examples.registry import ExampleRegistry, UnknownExampleError, load_registry
from fhevm_examples.utils import (
    ExampleToolError,
    console,
    print_error,
    print_examples_table,
    print_header,
    print_success,
    print_valid_ids,
    print_warning,
)

PROG = "generate-fhevm-docs"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="FHEVM Documentation Generator -- renders example docs as markdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog=(
            "Examples:\n"
            f"  {PROG} transportation-dispatch\n"
            f"  {PROG} --all\n"
            f"  {PROG} --all --docs-dir ./site/docs\n"
        ),
    )
    parser.add_argument("example_id", nargs="?", help="Identifier of the example to document")
    parser.add_argument(
        "--all",
        dest="all_examples",
        action="store_true",
        help="Document every example and write SUMMARY.md and GETTING_STARTED.md",
    )
    parser.add_argument(
        "--docs-dir",
        type=Path,
        default=None,
        help="Output directory (default: ./docs)",
    )
    parser.add_argument(
        "--registry",
        type=Path,
        default=None,
        help="YAML registry file replacing the bundled examples",
    )
    parser.add_argument(
        "--list",
        dest="list_examples",
        action="store_true",
        help="List the available examples and exit",
    )
    parser.add_argument("-h", "--help", action="store_true", help="Show this help and the example list")
    return parser


def _print_usage(parser: argparse.ArgumentParser, registry: ExampleRegistry) -> None:
    console.print(parser.format_help(), markup=False, highlight=False)
    print_examples_table(registry)


async def _generate(generator: DocGenerator, target: str | None) -> list[str]:
    """Run the requested generation and return warnings to display."""
    if target is None:
        print_header("Generating documentation for all examples")
        result = await generator.generate_all()
        for path in result.files:
            console.print(f"  [green]✓[/green] Generated: {path}", highlight=False)
        return result.warnings

    doc = await generator.generate_example(target)
    console.print(f"  [green]✓[/green] Generated: {doc.path}", highlight=False)
    return [f"{doc.example_id}: source file not found: {p}" for p in doc.missing_sources]


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``generate-fhevm-docs``.  Returns the exit code."""
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    try:
        config = Config.from_env()
        if args.registry is not None:
            config.registry_path = args.registry
        if args.docs_dir is not None:
            config.docs_dir = args.docs_dir
        registry = load_registry(config.registry_path)
    except (ExampleToolError, ValueError) as exc:
        print_error(str(exc))
        return 1

    if args.list_examples:
        print_examples_table(registry)
        return 0

    all_examples = args.all_examples or (args.example_id == "all" and "all" not in registry)
    if args.help or (args.example_id is None and not all_examples):
        _print_usage(parser, registry)
        return 0

    target: str | None = None
    if not all_examples:
        try:
            target = registry.resolve(args.example_id).id
        except UnknownExampleError as exc:
            print_error(f"Unknown example: {exc.example_id}")
            print_examples_table(registry, to_stderr=True)
            print_valid_ids(registry)
            return 1

    generator = DocGenerator(config, registry)
    try:
        warnings = asyncio.run(_generate(generator, target))
    except (ExampleToolError, OSError, TemplateError) as exc:
        print_error(f"Error generating documentation: {exc}")
        return 1

    for warning in warnings:
        print_warning(warning)

    console.print()
    print_success("Documentation generated successfully!")
    console.print(f"Location: {config.docs_dir}\n", highlight=False, markup=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
