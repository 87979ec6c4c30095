"""Command-line interface for the expense tracker."""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Optional

import click
import typer
from rich.console import Console
from sqlalchemy.exc import SQLAlchemyError, StatementError
from typer.core import TyperGroup

from . import __version__, audit
from .config import Config, load_config
from .db.repository import ExpenseStore, parse_date
from .db.tables import expenses as expenses_table
from .display import format_expense, render_expenses
from .errors import ExpenseError
from .logging import bind_command, configure_logging, get_logger

HELP_TEXT = """An expense recording system

Commands:

add AMOUNT MEMO [DATE] - record a new expense
clear - delete all expenses
list - list all expenses
delete NUMBER - remove expense with id NUMBER
search QUERY - list expenses with a matching memo field"""

CLEAR_PROMPT = "This will remove all expenses. Are you sure? (enter y to confirm) "

# Unknown options such as "-5" reach positional arguments; surplus arguments are ignored
COMMAND_SETTINGS = {"ignore_unknown_options": True, "allow_extra_args": True}

logger = get_logger(__name__)


class ExpenseGroup(TyperGroup):
    """Command group that answers unknown commands with the help text."""

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        if args and self.get_command(ctx, args[0]) is None:
            return "help", self.get_command(ctx, "help"), []
        return super().resolve_command(ctx, args)


app = typer.Typer(
    name="expense",
    help="An expense recording system.",
    cls=ExpenseGroup,
    add_completion=False,
    # Unknown options and --help fall through to the help command
    context_settings={"ignore_unknown_options": True, "help_option_names": []},
)

# Rich consoles; expense memos are printed verbatim
console = Console(highlight=False, emoji=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option(
        "--config",
        "-c",
        envvar="EXPENSE_CONFIG",
        help="Path to config file",
    ),
]


def echo(line: str) -> None:
    """Print a line of plain output."""
    console.print(line, markup=False)


def error_message(exc: Exception) -> str:
    """The underlying driver message for database errors, else the exception text."""
    if isinstance(exc, StatementError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


@contextmanager
def open_store(config: Config) -> Iterator[ExpenseStore]:
    """Open a store for one command, ensuring the schema exists.

    Any store failure is reported once here and ends the process with
    status 1. The engine is disposed of on every exit path.
    """
    store = ExpenseStore(config.database.url)
    try:
        if store.ensure_schema():
            audit.log_schema_created(expenses_table.name)
        yield store
    except (SQLAlchemyError, ExpenseError) as exc:
        logger.debug("command.failed", error_type=type(exc).__name__)
        err_console.print(error_message(exc), markup=False)
        raise typer.Exit(1) from exc
    finally:
        store.close()


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context, config_path: ConfigOption = None):
    """An expense recording system."""
    config = load_config(config_path)
    configure_logging(config)
    bind_command(ctx.invoked_subcommand or "help")
    audit.configure(enabled=config.logging.enabled)
    ctx.obj = config

    if ctx.invoked_subcommand is None:
        echo(HELP_TEXT)


@app.command("help", context_settings=COMMAND_SETTINGS)
def show_help():
    """Show the list of commands."""
    echo(HELP_TEXT)


@app.command(context_settings=COMMAND_SETTINGS)
def version():
    """Show version information."""
    echo(f"expense version {__version__}")


@app.command(context_settings=COMMAND_SETTINGS)
def add(
    ctx: typer.Context,
    amount: Annotated[Optional[str], typer.Argument(help="Amount spent")] = None,
    memo: Annotated[Optional[str], typer.Argument(help="What the money was for")] = None,
    created_on: Annotated[
        Optional[str],
        typer.Argument(metavar="DATE", help="Date of the expense (YYYY-MM-DD)"),
    ] = None,
):
    """Record a new expense."""
    if not amount or not memo:
        echo("You must provide an amount and memo.")
        return

    config: Config = ctx.obj

    with open_store(config) as store:
        expense_date = None
        if created_on:
            if config.expenses.use_supplied_date:
                expense_date = parse_date(created_on)
            else:
                logger.debug("expense.date_ignored", date=created_on)

        expense = store.add(amount, memo, expense_date)
        audit.log_expense_added(
            expense.id, expense.amount, expense.memo, expense.created_on
        )


@app.command("list", context_settings=COMMAND_SETTINGS)
def list_expenses(ctx: typer.Context):
    """List all expenses."""
    with open_store(ctx.obj) as store:
        found = store.list_expenses()

    for line in render_expenses(found):
        echo(line)


@app.command(context_settings=COMMAND_SETTINGS)
def search(
    ctx: typer.Context,
    query: Annotated[Optional[str], typer.Argument(help="Text to look for in memos")] = None,
):
    """List expenses with a matching memo field."""
    if not query:
        echo("You must provide a search query.")
        return

    with open_store(ctx.obj) as store:
        found = store.search(query)

    for line in render_expenses(found):
        echo(line)


@app.command(context_settings=COMMAND_SETTINGS)
def delete(
    ctx: typer.Context,
    expense_id: Annotated[
        Optional[str], typer.Argument(metavar="NUMBER", help="ID of the expense")
    ] = None,
):
    """Remove the expense with the given ID."""
    if not expense_id:
        echo("You must provide an id.")
        return

    with open_store(ctx.obj) as store:
        expense = store.delete(expense_id)

    if expense is None:
        echo(f"There is no expense with the id '{expense_id}'.")
        return

    audit.log_expense_deleted(expense.id, expense.amount)
    echo("The following expense has been deleted:")
    echo(format_expense(expense))


@app.command(context_settings=COMMAND_SETTINGS)
def clear(ctx: typer.Context):
    """Delete all expenses after confirmation."""
    answer = typer.prompt(
        CLEAR_PROMPT,
        default="",
        show_default=False,
        prompt_suffix="",
    )
    if answer != "y":
        return

    with open_store(ctx.obj) as store:
        count = store.delete_all()

    audit.log_expenses_cleared(count)
    echo("All expenses have been deleted.")


if __name__ == "__main__":
    app()
