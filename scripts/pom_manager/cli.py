"""CLI entry point for pom-manager.

Thin compositions of the core: create from a template, validate, add a
dependency, list templates, and print project info.
"""

import argparse
import dataclasses
import json
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .execution_organizer import ExecutionOrganizer
from .pom_constants import DEFAULT_SCOPE
from .pom_errors import ErrorKind, PomError
from .pom_generator import PomGenerator
from .pom_models import Coordinates, Dependency, ValidationResult
from .pom_parser import PomParser
from .pom_templates import TemplateManager
from .pom_validator import PomValidator

logger = logging.getLogger("pom_manager.cli")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CODES = {
    ErrorKind.FILE_NOT_FOUND: 3,
    ErrorKind.PERMISSION_DENIED: 4,
    ErrorKind.FILE_TOO_BIG: 5,
}

BUCKET_TITLES = (
    ("coordinates", "Coordinate Errors:"),
    ("dependencies", "Dependency Errors:"),
    ("build", "Build Errors:"),
    ("general", "General Errors:"),
)


def setup_logging(
    verbose: bool = False,
    debug: bool = False,
    no_color: bool = False,
    console: Optional[Console] = None,
) -> None:
    """Configure root logging with a Rich handler.

    Args:
        verbose: Log at INFO instead of WARNING.
        debug: Log at DEBUG; takes precedence over ``verbose``.
        no_color: Disable colour in log output.
        console: Rich Console the handler writes to (stderr by default).
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True, no_color=no_color),
        show_time=False,
        show_path=debug,
        markup=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level,
        format="[%(name)s] %(message)s",
        handlers=[handler],
        force=True,
    )


def _print_errors(console: Console, result: ValidationResult) -> None:
    for bucket, title in BUCKET_TITLES:
        errors = getattr(result.errors, bucket)
        if errors:
            console.print(title, style="yellow")
            for error in errors:
                console.print(f"  - {error}", style="red")


def cmd_create(args, console: Console) -> int:
    output = Path(args.output)
    if output.exists() and not args.force:
        console.print(f"✗ File {output} already exists (use --force to overwrite)", style="red")
        return EXIT_FAILURE

    coords = Coordinates(args.group, args.artifact, args.version)
    project = TemplateManager().create(args.template, coords)

    result = PomValidator().validate(project)
    if not result.valid:
        console.print("✗ Validation failed:", style="red")
        _print_errors(console, result)
        return EXIT_FAILURE

    PomGenerator().generate_to_file(project, output)
    logger.info("Created %s from template %s", output, args.template)

    console.print(f"✓ Created POM file: {output}", style="green")
    console.print(f"  Group ID:    {project.group_id}", style="cyan")
    console.print(f"  Artifact ID: {project.artifact_id}", style="cyan")
    console.print(f"  Version:     {project.version}", style="cyan")
    console.print(f"  Template:    {args.template}", style="cyan")
    return EXIT_OK


def cmd_validate(args, console: Console) -> int:
    project = PomParser().parse_file(args.file)
    console.print(f"Parsed: {project.coordinates}", style="cyan")

    result = PomValidator().validate(project)
    if result.valid:
        console.print("✓ POM is valid", style="green")
        return EXIT_OK

    console.print("✗ Validation failed:", style="red")
    _print_errors(console, result)
    return EXIT_FAILURE


def cmd_add_dep(args, console: Console) -> int:
    project = PomParser().parse_file(args.file)
    dep = Dependency(args.group, args.artifact, args.version, scope=args.scope)

    for i, existing in enumerate(project.dependencies):
        if existing.key == dep.key:
            project.dependencies[i] = dep
            console.print("Updated existing dependency", style="yellow")
            break
    else:
        project.dependencies.append(dep)
        console.print("Added new dependency", style="green")

    result = PomValidator().validate(project)
    if not result.valid:
        console.print("✗ Validation failed after adding dependency:", style="red")
        _print_errors(console, result)
        return EXIT_FAILURE

    PomGenerator().generate_to_file(project, args.file)
    console.print(f"✓ Dependency added to {args.file}", style="green")
    console.print(f"  {dep.group_id}:{dep.artifact_id}:{dep.version} [{dep.scope}]")
    return EXIT_OK


def cmd_templates(args, console: Console) -> int:
    console.print("Available POM Templates:", style="cyan")
    for info in TemplateManager().list():
        console.print(f"  {info.name}", style="green")
        console.print(f"    {info.description}")
    return EXIT_OK


def cmd_info(args, console: Console) -> int:
    project = PomParser().parse_file(args.file)

    if args.json:
        print(json.dumps(dataclasses.asdict(project), indent=2))
        return EXIT_OK

    console.print("=== POM Information ===", style="cyan")
    console.print("Project:", style="green")
    console.print(f"  Group ID:    {project.group_id}")
    console.print(f"  Artifact ID: {project.artifact_id}")
    console.print(f"  Version:     {project.version}")
    console.print(f"  Packaging:   {project.packaging}")
    if project.name:
        console.print(f"  Name:        {project.name}")
    if project.parent is not None:
        parent = project.parent
        console.print(f"  Parent:      {parent.group_id}:{parent.artifact_id}:{parent.version}")

    if project.modules:
        console.print(f"\nModules ({len(project.modules)}):", style="green")
        for module in project.modules:
            console.print(f"  - {module}")

    if project.dependencies:
        console.print(f"\nDependencies ({len(project.dependencies)}):", style="green")
        for dep in project.dependencies:
            console.print(f"  - {dep.group_id}:{dep.artifact_id}:{dep.version} [{dep.scope or DEFAULT_SCOPE}]")

    if project.build is not None and project.build.plugins:
        console.print(f"\nPlugins ({len(project.build.plugins)}):", style="green")
        for plugin in project.build.plugins:
            suffix = f":{plugin.version}" if plugin.version else ""
            console.print(f"  - {plugin.group_id}:{plugin.artifact_id}{suffix}")

    organizer = ExecutionOrganizer()
    by_phase = organizer.by_phase(project)
    if by_phase:
        console.print("\nLifecycle:", style="green")
        known = organizer.get_phase_order()
        # Lifecycle phases first in execution order, then custom phases by name.
        phases = [p for p in known if p in by_phase] + sorted(p for p in by_phase if p not in known)
        for phase in phases:
            labels = [e.execution_id or "(unnamed)" for e in by_phase[phase]]
            console.print(f"  {phase}: {', '.join(labels)}")

    if project.profiles:
        console.print(f"\nProfiles ({len(project.profiles)}):", style="green")
        for profile in project.profiles:
            console.print(f"  - {profile.profile_id}")

    return EXIT_OK


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list (defaults to ``sys.argv[1:]``).

    Returns:
        Parsed namespace with a ``func`` attribute naming the subcommand handler.
    """
    parser = argparse.ArgumentParser(
        prog="pom-manager",
        description="Create, validate and manage Maven POM files",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--no-color", action="store_true", help="Disable color output")

    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    create = subparsers.add_parser("create", help="Create a new POM file from a template")
    create.add_argument("--group", "-g", required=True, help="Maven groupId")
    create.add_argument("--artifact", "-a", required=True, help="Maven artifactId")
    create.add_argument("--version", "-V", required=True, help="Project version")
    create.add_argument("--template", "-t", default="basic-java", help="Template name (default: basic-java)")
    create.add_argument("--output", "-o", type=Path, default=Path("pom.xml"), help="Output file (default: pom.xml)")
    create.add_argument("--force", "-f", action="store_true", help="Overwrite an existing file")
    create.set_defaults(func=cmd_create)

    validate = subparsers.add_parser("validate", help="Validate a POM file")
    validate.add_argument("file", type=Path, help="POM file to validate")
    validate.set_defaults(func=cmd_validate)

    add_dep = subparsers.add_parser("add-dep", help="Add a dependency to a POM file")
    add_dep.add_argument("--group", "-g", required=True, help="Dependency groupId")
    add_dep.add_argument("--artifact", "-a", required=True, help="Dependency artifactId")
    add_dep.add_argument("--version", "-V", required=True, help="Dependency version")
    add_dep.add_argument("--scope", "-s", default=DEFAULT_SCOPE, help="Dependency scope (default: compile)")
    add_dep.add_argument("--file", "-f", type=Path, default=Path("pom.xml"), help="POM file to modify (default: pom.xml)")
    add_dep.set_defaults(func=cmd_add_dep)

    templates = subparsers.add_parser("templates", help="List available templates")
    templates.set_defaults(func=cmd_templates)

    info = subparsers.add_parser("info", help="Display POM file information")
    info.add_argument("file", type=Path, help="POM file to inspect")
    info.add_argument("--json", action="store_true", help="Output in JSON format")
    info.set_defaults(func=cmd_info)

    return parser.parse_args(argv)


def main(argv: Optional[list] = None) -> int:
    """CLI entry point. Returns the process exit code."""
    args = parse_args(argv)
    setup_logging(args.verbose, args.debug, no_color=args.no_color)
    console = Console(no_color=args.no_color, markup=False, highlight=False, soft_wrap=True)

    try:
        return args.func(args, console)
    except PomError as err:
        Console(stderr=True, no_color=args.no_color, markup=False, soft_wrap=True).print(
            f"✗ {err}", style="red"
        )
        return EXIT_CODES.get(err.kind, EXIT_FAILURE)
