"""SwiftSketch command-line interface.

Usage::

    swift-sketch create MyPackage --colors "#FF0000=Red,#00FF00=Green,#0000FF=Blue"
    swift-sketch create MyApp --modular --generate-project --project-tool tuist
    swift-sketch create MySDK --modular --module-prefix ABC --ios-version 16.2
    swift-sketch template basic MyPackage
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

from swiftsketch.config import DEFAULT_XCODE_VERSION, Config
from swiftsketch.scaffolder import (
    ManifestBackend,
    ProjectGenerator,
    ProjectSpec,
    ScaffoldError,
    ScaffoldResult,
    ValidationError,
    parse_backend,
    parse_colors,
)
from swiftsketch.utils import (
    console,
    print_error,
    print_step,
    print_success,
    print_summary_table,
    probe_xcode_version,
)

VERSION = "1.0.0"

TEMPLATE_TYPES = ["basic"]


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the ``swift-sketch`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="swift-sketch",
        description="A tool for quickly scaffolding Swift projects and packages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            '  swift-sketch create MyPackage --colors "#FF0000=Red,#00FF00=Green,#0000FF=Blue"\n'
            "  swift-sketch create MyApp --modular --generate-project --project-tool tuist\n"
            "  swift-sketch create MyFramework --ios-version 17.0\n"
            '  swift-sketch create MySDK --modular --module-prefix "ABC" --ios-version 16.2\n'
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument(
        "--config",
        default=None,
        help="JSON configuration file (see swiftsketch.config.Config)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create", help="Create a new Swift package or project")
    create.add_argument("name", help="The name of the Swift Package to generate")
    _add_common_options(create)
    create.add_argument("--colors", default=None, help="Comma-separated list of colors in format #HEX=Name")
    create.add_argument(
        "--generate-project",
        action="store_true",
        help="Generate a project manifest alongside the Swift Package",
    )
    create.add_argument(
        "--project-tool",
        default=None,
        help="Project generation tool (tuist, xcodegen, or none)",
    )
    create.add_argument(
        "--modular",
        action="store_true",
        help="Generate a modular architecture with App, Core, UI, and Util modules",
    )
    create.add_argument("--xcode-version", default=None, help="Xcode version to use (e.g., 16.2)")
    create.add_argument(
        "--module-prefix",
        default=None,
        help="Prefix for module names in modular architecture (e.g., 'ABC' makes Core become ABCCore)",
    )
    create.add_argument("--ios-version", default=None, help="Minimum iOS version (e.g., 16.0, 16.1, 17.0)")
    create.add_argument(
        "--package-init",
        choices=["swift", "builtin"],
        default=None,
        help="Create the single package with `swift package init` or the built-in templates",
    )
    create.add_argument("--force", action="store_true", help="Generate into a non-empty directory")

    template = subparsers.add_parser("template", help="List and apply predefined project templates")
    template.add_argument("template_type", choices=TEMPLATE_TYPES, help="The type of template to create")
    template.add_argument("name", help="Name for the generated package/project")
    _add_common_options(template)

    return parser


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--output", "-o", default=".", help="Output directory (default: current directory)")
    parser.add_argument("--org", default=None, help="Organization identifier (e.g., com.company)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show verbose output during generation")


# ---------------------------------------------------------------------------
# Spec resolution
# ---------------------------------------------------------------------------


def load_config(args: argparse.Namespace) -> Config:
    """Defaults, then ``--config``, then environment, then flags."""
    try:
        base = Config.load(Path(args.config)) if args.config else None
        config = Config.from_env(base)
    except (OSError, ValueError) as exc:
        raise ValidationError(f"Invalid configuration: {exc}") from exc

    overrides: dict[str, object] = {"verbose": config.verbose or args.verbose}
    if args.org:
        overrides["organization"] = args.org
    if getattr(args, "ios_version", None):
        overrides["ios_version"] = args.ios_version
    if getattr(args, "xcode_version", None):
        overrides["xcode_version"] = args.xcode_version
    if getattr(args, "project_tool", None):
        overrides["project_tool"] = args.project_tool
    if getattr(args, "package_init", None):
        overrides["package_init"] = args.package_init
    if getattr(args, "force", False):
        overrides["force"] = True
    return config.model_copy(update=overrides)


async def resolve_spec(args: argparse.Namespace, config: Config) -> ProjectSpec:
    """Turn parsed arguments into a validated ``ProjectSpec``.

    Every user-supplied value is validated here, before anything is written.
    The Xcode version is only probed when a manifest will pin it.
    """
    backend = parse_backend(config.project_tool)
    if not getattr(args, "generate_project", False):
        backend = ManifestBackend.NONE

    colors = parse_colors(getattr(args, "colors", None))

    tool_version = config.xcode_version
    if tool_version is None:
        if backend is ManifestBackend.NONE:
            tool_version = DEFAULT_XCODE_VERSION
        else:
            tool_version = await probe_xcode_version(
                config.toolchain.xcodebuild, config.toolchain.timeout
            )

    return ProjectSpec.build(
        name=args.name,
        output_root=Path(args.output),
        organization_id=config.organization,
        platform_version=config.ios_version,
        tool_version=tool_version,
        modular=getattr(args, "modular", False),
        module_prefix=getattr(args, "module_prefix", None),
        colors=colors,
        manifest_backend=backend,
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def run_create(args: argparse.Namespace, config: Config) -> ScaffoldResult:
    """Generate a project and print the report."""
    spec = await resolve_spec(args, config)
    if config.verbose:
        console.print(f"Generating Swift package '{spec.name}'...")
        print_step(f"Output directory: {spec.output_root}")
        if spec.modular:
            print_step("Using modular architecture")
            if spec.module_prefix:
                print_step(f"With module prefix: {spec.module_prefix}")
        print_step(f"iOS version: {spec.platform_version}")
        if spec.colors:
            print_step(f"Generating {len(spec.colors)} colors...")

    result = await ProjectGenerator(spec, config).generate()
    print_report(result)
    return result


def print_report(result: ScaffoldResult) -> None:
    """Print the human-readable run summary."""
    name = result.summary.get("Project", result.project_root.name)
    print_success(f"Swift Package '{name}' generated at {result.project_root}")
    console.print()
    print_summary_table(result.summary, title="Scaffold")

    if result.modules:
        console.print("[bold]Modular architecture with local Swift Packages:[/bold]")
        console.print("  - Main app with SwiftUI starter code")
        for path, purpose in result.modules.items():
            console.print(f"  - {path}: {purpose}")
        console.print()

    if result.next_steps:
        console.print("[bold]To generate the project:[/bold]")
        for step in result.next_steps:
            console.print(f"  {step}")


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point for ``swift-sketch``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
        if args.command == "template":
            console.print(f"Generating {args.template_type} template for '{args.name}'...")
        asyncio.run(run_create(args, config))
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        return 1
    except KeyboardInterrupt:
        print_error("Interrupted.")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
