"""Command-line entry point: prompt (or load answers), compose, write."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import NoReturn

import yaml
from pydantic import ValidationError
from rich.markup import escape

from tanstack_starter.config import ScaffoldSettings, Selection
from tanstack_starter.prompts import UserCancellation, collect_selection
from tanstack_starter.scaffolder import (
    Composer,
    Composition,
    ProjectWriter,
    TargetExists,
    UnknownFeature,
)
from tanstack_starter.utils import (
    console,
    init_git_repository,
    print_banner,
    print_error,
    print_file_tree,
    print_success,
    print_summary_table,
    print_warning,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-tanstack-start",
        description="Create a TanStack Start project from a set of optional features",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-tanstack-start\n"
            "  create-tanstack-start --directory ./apps\n"
            "  create-tanstack-start --answers answers.yaml --dry-run\n"
        ),
    )
    parser.add_argument(
        "--answers", "-a",
        default=None,
        help="YAML or JSON file with the answers; skips the interactive prompts",
    )
    parser.add_argument(
        "--directory", "-C",
        default=None,
        help="Parent directory for the new project (default: current directory)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the files that would be generated without writing anything",
    )
    parser.add_argument(
        "--no-git",
        action="store_true",
        help="Do not write .gitignore or run git init",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``create-tanstack-start`` / ``python -m tanstack_starter``."""
    args = build_parser().parse_args(argv)

    try:
        settings = ScaffoldSettings.from_env()
    except ValidationError as exc:
        print_error(f"Invalid environment configuration:\n{escape(str(exc))}")
        sys.exit(1)

    print_banner("Create TanStack Start Boilerplate")

    selection = _load_selection(args, settings)
    if args.no_git and selection.init_git:
        selection = selection.model_copy(update={"init_git": False})

    try:
        composition = Composer().compose(selection)
    except UnknownFeature as exc:
        print_error(escape(str(exc)))
        sys.exit(1)

    writer = ProjectWriter(Path(args.directory) if args.directory else settings.output_dir)

    _print_selection(selection, composition)

    try:
        writer.ensure_absent(composition)
    except TargetExists as exc:
        _exit_target_exists(selection, exc)

    if args.dry_run:
        print_file_tree(selection.project_name, ["package.json", *composition.paths])
        print_success("Dry run complete; nothing was written.")
        return

    console.print("[cyan]Creating project structure...[/cyan]")
    try:
        root = writer.write(composition)
    except TargetExists as exc:
        _exit_target_exists(selection, exc)
    except OSError as exc:
        print_error(f"Failed to write project: {escape(str(exc))}")
        print_warning(
            f"{writer.target_for(composition)} may be partially populated; remove it before retrying."
        )
        sys.exit(1)

    if selection.init_git:
        console.print("[yellow]Initializing git repository...[/yellow]")
        init_git_repository(root)

    _print_next_steps(selection)


def _load_selection(args: argparse.Namespace, settings: ScaffoldSettings) -> Selection:
    if args.answers:
        try:
            return Selection.load(args.answers)
        except FileNotFoundError:
            print_error(f"Answers file not found: {args.answers}")
        except ValidationError as exc:
            print_error(f"Invalid answers in {args.answers}:\n{escape(str(exc))}")
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            print_error(f"Could not parse {args.answers}: {escape(str(exc))}")
        sys.exit(1)

    try:
        return collect_selection(settings)
    except UserCancellation as exc:
        print_error(f"✖ {exc}")
        sys.exit(1)


def _exit_target_exists(selection: Selection, exc: TargetExists) -> NoReturn:
    print_error(f"Directory {selection.project_name} already exists!")
    console.print(f"[dim]{escape(str(exc.path))}[/dim]")
    sys.exit(1)


def _print_selection(selection: Selection, composition: Composition) -> None:
    manifest = composition.manifest
    print_summary_table(
        {
            "Project": selection.project_name,
            "Package manager": selection.package_manager.value,
            "Features": ", ".join(selection.features) or "(none)",
            "Dependencies": str(len(manifest.dependencies)),
            "Dev dependencies": str(len(manifest.dev_dependencies)),
            "Files": str(len(composition.files) + 1),
        },
        title="Project",
    )


def _print_next_steps(selection: Selection) -> None:
    package_manager = selection.package_manager
    print_success("✓ Project created successfully!")
    console.print()
    console.print("[cyan]Next steps:[/cyan]")
    console.print(f"  cd {selection.project_name}")
    console.print(f"  {package_manager.value} install")
    console.print(f"  {package_manager.run('dev')}")
    if selection.has("i18n"):
        console.print()
        console.print("[yellow]Note: Run i18n setup after installing dependencies:[/yellow]")
        console.print(f"  {package_manager.run('machine-translate')}")
    console.print()


if __name__ == "__main__":
    main()
