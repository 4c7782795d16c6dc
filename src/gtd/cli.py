"""gtd CLI - flat-file task tracker."""

import logging
import sys
from pathlib import Path

import click

from . import __version__, commands
from .config import load_config
from .errors import StorageUnavailableError, UserError
from .interpreter import interpret

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

QUIT_COMMANDS = {"q", "quit"}


def _run(operation, *args) -> str:
    """Run an operation, turning gtd errors into messages and exit codes."""
    try:
        return operation(*args)
    except UserError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except StorageUnavailableError as e:
        click.echo(f"Fatal: {e}", err=True)
        sys.exit(2)


def _show_tasks(rendered: str) -> None:
    if not rendered:
        click.echo("No tasks.")
        return
    click.echo(rendered.rstrip("\n"))


@click.group()
@click.version_option(__version__)
@click.option("--file", "-f", "tasks_file", type=click.Path(dir_okay=False, path_type=Path),
              default=None, help="Task file to use instead of the configured one")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, tasks_file: Path | None, debug: bool):
    """gtd - a small flat-file task tracker."""
    logging.basicConfig(format=LOG_FORMAT, level=logging.DEBUG if debug else logging.WARNING)

    config = load_config()
    if not debug:
        level = logging.getLevelNamesMapping().get(config.log_level, logging.WARNING)
        logging.getLogger().setLevel(level)

    ctx.obj = config.make_store(tasks_file)


@main.command()
@click.pass_obj
def todo(store):
    """List pending tasks."""
    _show_tasks(_run(commands.query_many, store, commands.select_pending))


@main.command()
@click.pass_obj
def today(store):
    """List tasks due today."""
    _show_tasks(_run(commands.query_many, store, commands.select_due_today))


@main.command("all")
@click.pass_obj
def all_tasks(store):
    """List every task."""
    _show_tasks(_run(commands.query_many, store, commands.select_all))


@main.command()
@click.argument("task_id")
@click.pass_obj
def show(store, task_id: str):
    """Show one task."""
    click.echo(_run(commands.query_one, store, task_id))


@main.command()
@click.argument("description")
@click.argument("due")
@click.pass_obj
def add(store, description: str, due: str):
    """Add a task due on DUE (YYYY-MM-DD)."""
    click.echo(_run(commands.add, store, description, due))


@main.command()
@click.argument("task_id")
@click.pass_obj
def tick(store, task_id: str):
    """Mark a task as done."""
    click.echo(_run(commands.update, store, task_id, commands.tick))


@main.command()
@click.argument("task_id")
@click.pass_obj
def untick(store, task_id: str):
    """Mark a task as not done."""
    click.echo(_run(commands.update, store, task_id, commands.untick))


@main.command()
@click.pass_obj
def repl(store):
    """Interactive prompt taking tab-separated commands (q to quit)."""
    stdin = click.get_text_stream("stdin")

    while True:
        click.echo("> ", nl=False)
        line = stdin.readline()
        if not line:
            click.echo()
            break
        if line.strip() in QUIT_COMMANDS:
            break

        try:
            reply = interpret(line, store)
        except StorageUnavailableError as e:
            click.echo(f"Fatal: {e}", err=True)
            sys.exit(2)
        click.echo(reply.rstrip("\n"))


if __name__ == "__main__":
    main()
