"""CLI interface for tsk."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import click
from rich.console import Console
from rich.markup import escape

from tsk import __version__
from tsk.config import TskConfig
from tsk.display import task_table
from tsk.logging_setup import setup_logging
from tsk.store import NotFoundError, StoreWriteError, TaskStore, UserInputError

console = Console()

# Ids are unsigned 16-bit on disk
MAX_TASK_ID = 0xFFFF

USAGE = """\
Usage: tsk <command> [args...]

  -n <task>     add new task (alias: -a)
  -d <id...>    delete one or more tasks
  -l            show the tasks
  -la           show the tasks with deleted tasks
  -h            help
  --version     show the version
"""


def _add(store: TaskStore, args: Sequence[str], config: TskConfig) -> int:
    """Add a task named by the joined arguments."""
    try:
        task_id, task = store.add(" ".join(args))
    except UserInputError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        return 1

    message = f'Task [{task_id}] "{task.name}" added'
    console.print(f"[green]{escape(message)}[/green]")
    return 0


def _parse_id(raw: str) -> int | None:
    """Parse an unsigned 16-bit task id, or return None."""
    try:
        value = int(raw)
    except ValueError:
        return None

    if value < 0 or value > MAX_TASK_ID:
        return None
    return value


def _remove(store: TaskStore, args: Sequence[str], config: TskConfig) -> int:
    """Soft-delete each id in turn; missing ids are reported and skipped."""
    for raw in args:
        task_id = _parse_id(raw)
        if task_id is None:
            console.print(f"[yellow]Invalid task id:[/yellow] {escape(raw)}")
            continue

        try:
            task = store.remove(task_id)
        except NotFoundError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            continue

        console.print(escape(f'Task [{task_id}] "{task.name}" removed'))

    return 0


def _list(store: TaskStore, config: TskConfig, show_deleted: bool) -> int:
    rows = store.listing(show_deleted=show_deleted)

    if not rows:
        console.print("No tasks")
        return 0

    console.print(
        task_table(
            rows,
            show_deleted=show_deleted,
            name_width=config.display.name_width,
            time_format=config.display.time_format,
        )
    )
    return 0


def _list_active(store: TaskStore, args: Sequence[str], config: TskConfig) -> int:
    return _list(store, config, show_deleted=False)


def _list_all(store: TaskStore, args: Sequence[str], config: TskConfig) -> int:
    return _list(store, config, show_deleted=True)


COMMANDS: dict[str, Callable[[TaskStore, Sequence[str], TskConfig], int]] = {
    "-n": _add,
    "-a": _add,
    "-d": _remove,
    "-l": _list_active,
    "-la": _list_all,
}

# Listings report an empty store themselves
LIST_COMMANDS = {"-l", "-la"}


class RawArgsCommand(click.Command):
    """A command that hands its argument list to the callback untouched.

    Task names may contain anything, ``--`` and ``--version`` included,
    so click must not parse options here.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        ctx.params["args"] = tuple(args)
        return []


@click.command(cls=RawArgsCommand, add_help_option=False)
@click.pass_context
def main(ctx: click.Context, args: tuple[str, ...]) -> None:
    """tsk - track tasks in a local JSON file."""
    if args and args[0] == "--version":
        click.echo(f"tsk, version {__version__}")
        return

    handler = COMMANDS.get(args[0]) if args else None

    # -h, no arguments and unknown commands all land here
    if handler is None:
        click.echo(USAGE, nl=False)
        return

    config = TskConfig.load()
    setup_logging(config.logging.level)

    store = TaskStore.load(config.tasks_file, lock=config.lock)
    if not store.from_file and args[0] not in LIST_COMMANDS:
        console.print("No tasks")

    try:
        exit_code = handler(store, args[1:], config)
    except StoreWriteError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(1)

    if exit_code:
        ctx.exit(exit_code)
