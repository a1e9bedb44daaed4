"""Create a standalone FHEVM example project.

Usage::

    create-fhevm-example <example-id> [output-dir]
    python -m fhevm_examples.create_example fhe-counter ./output/counter
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from jinja2 import TemplateError

from fhevm_examples.config import Config
from fhevm_examples.registry import ExampleRegistry, UnknownExampleError, load_registry
from fhevm_examples.scaffolder import ProjectGenerator, ScaffoldResult
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

PROG = "create-fhevm-example"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="FHEVM Example Repository Generator -- scaffolds a standalone example project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog=(
            "Examples:\n"
            f"  {PROG} transportation-dispatch ./my-example\n"
            f"  {PROG} fhe-counter ./output/counter\n"
            f"  {PROG} access-control --no-git\n"
        ),
    )
    parser.add_argument("example_id", nargs="?", help="Identifier of the example to scaffold")
    parser.add_argument(
        "output_dir",
        nargs="?",
        default=None,
        help="Output directory (default: ./<example-id>)",
    )
    parser.add_argument(
        "--no-git",
        action="store_true",
        help="Do not initialize a git repository in the output directory",
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


def _report(result: ScaffoldResult) -> None:
    for path in result.files:
        marker = "placeholder" if path in result.placeholders else "created"
        console.print(f"  [green]✓[/green] {path} [dim]({marker})[/dim]", highlight=False)
    for warning in result.warnings:
        print_warning(warning)
    if result.git is not None and result.git.initialized:
        console.print(f"  [green]✓[/green] {result.git.message}")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``create-fhevm-example``.  Returns the exit code."""
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    try:
        config = Config.from_env()
        if args.registry is not None:
            config.registry_path = args.registry
        if args.no_git:
            config.init_git = False
        registry = load_registry(config.registry_path)
    except (ExampleToolError, ValueError) as exc:
        print_error(str(exc))
        return 1

    if args.list_examples:
        print_examples_table(registry)
        return 0

    if args.help or args.example_id is None:
        _print_usage(parser, registry)
        return 0

    try:
        descriptor = registry.resolve(args.example_id)
    except UnknownExampleError as exc:
        print_error(f"Unknown example: {exc.example_id}")
        print_examples_table(registry, to_stderr=True)
        print_valid_ids(registry)
        return 1

    output_dir = Path(args.output_dir) if args.output_dir else Path(".") / descriptor.id

    print_header(f"Generating example: {descriptor.title}")
    console.print(f"Output directory: {output_dir}\n", highlight=False, markup=False)

    generator = ProjectGenerator(config, registry)
    try:
        result = asyncio.run(generator.generate(descriptor.id, output_dir))
    except (ExampleToolError, OSError, TemplateError) as exc:
        print_error(f"Error creating example repository: {exc}")
        return 1

    _report(result)

    console.print()
    console.rule()
    print_success("✓ Example repository created successfully!")
    console.rule()
    console.print("\nNext steps:")
    console.print(f"  cd {output_dir}", highlight=False, markup=False)
    console.print("  npm install")
    console.print("  npm run compile")
    console.print("  npm run test\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
