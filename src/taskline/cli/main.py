"""Click command-line interface for taskline.

``taskline`` with no subcommand opens the interactive shell; every command
the shell understands is also available as a one-shot subcommand.
"""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..commands import CommandDispatcher, CommandResult
from ..config import Config
from ..errors import TasklineError
from ..storage import Storage
from ..theme import format_task_for_display, get_themed_console, show_startup_banner
from ..utils.log import setup_logging


logger = logging.getLogger(__name__)


def get_console(ctx: click.Context) -> Console:
    """Get the themed console stored on the click context."""
    return ctx.obj["console"]


def print_result(console: Console, result: CommandResult) -> None:
    """Render a command result with themed styling."""
    if result.message:
        style = "success" if result.changed else "accent"
        console.print(f"[{style}]{escape(result.message)}[/{style}]", soft_wrap=True)
    for number, task in result.rows:
        console.print(format_task_for_display(task, number), soft_wrap=True)
    if result.footer:
        console.print(f"[muted]{escape(result.footer)}[/muted]", soft_wrap=True)


def print_error(console: Console, error: TasklineError) -> None:
    """Render a taskline error and its suggestions."""
    console.print(f"[error]OOPS!!! {escape(error.message)}[/error]", soft_wrap=True)
    for suggestion in error.suggestions:
        console.print(f"  [muted]💡 {escape(suggestion)}[/muted]", soft_wrap=True)


def get_dispatcher(ctx: click.Context) -> CommandDispatcher:
    """Load the task list once per invocation and bind a dispatcher to it."""
    obj = ctx.obj
    if "dispatcher" not in obj:
        storage = Storage(obj["config"], obj.get("data_file"))
        result = storage.load()
        if result.diagnostics:
            # Per-line details are logged by the storage layer
            numbers = ", ".join(str(d.line_number) for d in result.diagnostics)
            get_console(ctx).print(
                f"[warning]⚠️  Skipped {len(result.diagnostics)} corrupt line(s) "
                f"in {escape(str(storage.path))} (line {numbers})[/warning]",
                soft_wrap=True,
            )
        obj["dispatcher"] = CommandDispatcher(result.tasks, storage)
    return obj["dispatcher"]


def run_line(ctx: click.Context, line: str) -> None:
    """Execute a single command line, exiting with status 1 on failure."""
    dispatcher = get_dispatcher(ctx)
    console = get_console(ctx)
    try:
        result = dispatcher.execute(line)
    except TasklineError as e:
        print_error(console, e)
        sys.exit(1)
    except OSError as e:
        console.print(f"[error]❌ Failed to save tasks: {escape(str(e))}[/error]")
        sys.exit(1)
    print_result(console, result)


@click.group(invoke_without_command=True)
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Path to config file")
@click.option("--data-file", type=click.Path(dir_okay=False, path_type=Path),
              help="Tasks file to use instead of the configured one")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.version_option(version=__version__, prog_name="taskline")
@click.pass_context
def cli(ctx, config_path, data_file, verbose, no_color):
    """taskline - track to-dos, deadlines and events from the command line."""
    ctx.ensure_object(dict)

    config = Config.reload(config_path)
    setup_logging(logging.DEBUG if verbose else config.log_level, config.log_file)

    ctx.obj["config"] = config
    ctx.obj["data_file"] = data_file
    ctx.obj["console"] = get_themed_console(no_color=no_color or config.no_color)

    if ctx.invoked_subcommand is None:
        ctx.invoke(shell)


@cli.command()
@click.pass_context
def shell(ctx):
    """Start the interactive read loop."""
    console = get_console(ctx)
    if ctx.obj["config"].show_banner:
        show_startup_banner(console)
    dispatcher = get_dispatcher(ctx)

    while True:
        try:
            line = console.input("[primary]> [/primary]").strip()
        except (EOFError, KeyboardInterrupt):
            console.print()
            break
        if not line:
            continue

        try:
            result = dispatcher.execute(line)
        except TasklineError as e:
            print_error(console, e)
            continue
        except OSError as e:
            logger.error("Failed to save tasks: %s", e)
            console.print(f"[error]❌ Failed to save tasks: {escape(str(e))}[/error]")
            continue

        print_result(console, result)
        if result.exit:
            break


@cli.command()
@click.argument("line", nargs=-1, required=True)
@click.pass_context
def run(ctx, line):
    """Run one raw command line, e.g. taskline run mark 2."""
    run_line(ctx, " ".join(line))


@cli.command()
@click.argument("description", nargs=-1, required=True)
@click.pass_context
def todo(ctx, description):
    """Add a plain to-do.

    Examples:
      taskline todo read book
    """
    run_line(ctx, f"todo {' '.join(description)}")


@cli.command()
@click.argument("description", nargs=-1, required=True)
@click.option("--by", "by", required=True, help="Due date, d/M/yyyy HHmm")
@click.pass_context
def deadline(ctx, description, by):
    """Add a task that must be done by a date.

    Examples:
      taskline deadline return book --by "2/12/2019 1800"
    """
    run_line(ctx, f"deadline {' '.join(description)} /by {by}")


@cli.command()
@click.argument("description", nargs=-1, required=True)
@click.option("--from", "start", required=True, help="Start date, d/M/yyyy HHmm")
@click.option("--to", "end", required=True, help="End date, d/M/yyyy HHmm")
@click.pass_context
def event(ctx, description, start, end):
    """Add an event spanning two dates.

    Examples:
      taskline event project meeting --from "1/1/2020 0900" --to "1/1/2020 1000"
    """
    run_line(ctx, f"event {' '.join(description)} /from {start} /to {end}")


@cli.command("list")
@click.pass_context
def list_tasks(ctx):
    """Show every task in order."""
    run_line(ctx, "list")


@cli.command()
@click.argument("number", type=int)
@click.pass_context
def mark(ctx, number):
    """Mark task NUMBER as done."""
    run_line(ctx, f"mark {number}")


@cli.command()
@click.argument("number", type=int)
@click.pass_context
def unmark(ctx, number):
    """Mark task NUMBER as not done."""
    run_line(ctx, f"unmark {number}")


@cli.command()
@click.argument("number", type=int)
@click.pass_context
def delete(ctx, number):
    """Delete task NUMBER."""
    run_line(ctx, f"delete {number}")


@cli.command()
@click.argument("word", nargs=-1, required=True)
@click.pass_context
def find(ctx, word):
    """Show tasks whose description contains WORD (case-sensitive)."""
    run_line(ctx, f"find {' '.join(word)}")


@cli.command()
@click.argument("date", nargs=-1, required=True)
@click.pass_context
def occurs(ctx, date):
    """Show deadlines and events occurring on DATE (d/M/yyyy HHmm)."""
    run_line(ctx, f"occurs {' '.join(date)}")


@cli.command()
@click.pass_context
def backup(ctx):
    """Copy the tasks file into the backup directory."""
    console = get_console(ctx)
    storage = Storage(ctx.obj["config"], ctx.obj.get("data_file"))
    try:
        backup_path = storage.backup()
    except OSError as e:
        console.print(f"[error]❌ Backup failed: {escape(str(e))}[/error]")
        sys.exit(1)
    if backup_path is None:
        console.print("[warning]Nothing to back up yet.[/warning]")
        return
    console.print(f"[success]✅ Backed up to {escape(str(backup_path))}[/success]", soft_wrap=True)


def main(*args, **kwargs):
    """Run the taskline command line."""
    return cli(*args, **kwargs)


if __name__ == "__main__":
    main()
