"""CLI entrypoint for proj.

    $ proj init --name web --path ~/code/web --command "make up" --teardown "make down"
    $ proj start web
    $ proj stop web
    $ cd ~/code/web && $EDITOR proj.yml && proj commit
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from proj import __version__
from proj.config import ProjSettings
from proj.errors import ProjError
from proj.logging import configure_logging
from proj.runner import CommandResult
from proj.service import ProjectService
from proj.store import ProjectStore

logger = logging.getLogger(__name__)

console = Console(highlight=False, emoji=False, soft_wrap=True)
error_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="proj",
        description="Codebase project management: register projects, start and stop them by name",
    )
    parser.add_argument("--version", action="version", version=f"proj {__version__}")
    parser.add_argument(
        "--db",
        default=None,
        help="Path to the project database (overrides PROJ_DB_PATH)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    init = subparsers.add_parser("init", help="Create a new project")
    init.add_argument("--name", required=True, help="Project name")
    init.add_argument("--path", required=True, help="Project path")
    # `dest` avoids clashing with the subcommand selector stored in `command`.
    init.add_argument("--command", dest="start_command", required=True, help="Boot command")
    init.add_argument("--teardown", default="", help="Tear down command")
    init.set_defaults(handler=_cmd_init)

    commit = subparsers.add_parser(
        "commit", help="Commit a proj.yml change back to the project database"
    )
    commit.add_argument(
        "--path",
        default=".",
        help="Directory containing proj.yml (defaults to the current directory)",
    )
    commit.set_defaults(handler=_cmd_commit)

    start = subparsers.add_parser("start", help="Start your project")
    start.add_argument("name", help="Project name")
    start.set_defaults(handler=_cmd_start)

    stop = subparsers.add_parser("stop", help="Stop your project")
    stop.add_argument("name", help="Project name")
    stop.set_defaults(handler=_cmd_stop)

    show = subparsers.add_parser("show", help="Print a stored project")
    show.add_argument("name", help="Project name")
    show.set_defaults(handler=_cmd_show)

    listing = subparsers.add_parser("list", help="List registered projects")
    listing.set_defaults(handler=_cmd_list)

    return parser


def _print_command(args: list[str]) -> None:
    console.print(f"[magenta]==> Executing: {escape(' '.join(args))}[/magenta]")


def _print_output(result: CommandResult) -> None:
    if result.stdout:
        console.print(f"[blue]==> Output: {escape(result.stdout)}[/blue]")


def _print_error(message: str) -> None:
    error_console.print(f"[red]==> Error: {escape(message)}[/red]")


def _cmd_init(args: argparse.Namespace, service: ProjectService) -> None:
    project = service.init_project(
        name=args.name,
        path=str(Path(args.path).expanduser().resolve()),
        command=args.start_command,
        teardown=args.teardown,
    )
    console.print(f"[green]Created project {escape(project.name)}[/green]")


def _cmd_commit(args: argparse.Namespace, service: ProjectService) -> None:
    console.print("[green]Updating...[/green]")
    project = service.commit_changes(Path(args.path))
    console.print(f"[green]Updated project {escape(project.name)}[/green]")


def _cmd_start(args: argparse.Namespace, service: ProjectService) -> None:
    console.print(f"[green]Starting {escape(args.name)}[/green]")
    _print_output(service.start_project(args.name))


def _cmd_stop(args: argparse.Namespace, service: ProjectService) -> None:
    console.print(f"[blue]Stopping: {escape(args.name)}[/blue]")
    _print_output(service.stop_project(args.name))


def _cmd_show(args: argparse.Namespace, service: ProjectService) -> None:
    project = service.show_project(args.name)
    console.print(
        escape(yaml.safe_dump(project.to_document(), sort_keys=False, allow_unicode=True)),
        end="",
    )


def _cmd_list(args: argparse.Namespace, service: ProjectService) -> None:
    projects = service.list_projects()
    if not projects:
        console.print("No projects registered")
        return
    for project in projects:
        line = f"[bold]{escape(project.name)}[/bold]  {escape(project.path)}"
        line += f"\n  start: {escape(project.command)}"
        if project.teardown:
            line += f"\n  stop:  {escape(project.teardown)}"
        console.print(line)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = ProjSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment or .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    db_path = Path(args.db) if args.db else settings.db_path

    try:
        with ProjectStore(db_path) as store:
            service = ProjectService(store, shell=settings.shell, on_execute=_print_command)
            args.handler(args, service)
            return 0

    except ProjError as e:
        logger.error(str(e), extra={"command": args.command})
        _print_error(str(e))
        return 1

    except Exception as e:
        logger.exception("Command failed")
        _print_error(str(e) or type(e).__name__)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
