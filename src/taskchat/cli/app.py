"""Main CLI application using Typer."""
import asyncio
import json
import os

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..models import Task
from ..ui.config import LEVEL_STYLES
from .providers import get_model_name, make_session, require_llm

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="taskchat",
    help="Chat assistant that turns messages into tasks",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


def _console_debug(level: str, component: str, message: str) -> None:
    """Print a diagnostic line from the session."""
    style = LEVEL_STYLES.get(level, "dim")
    console.print(f"[{style}]{level.upper():<7}[/{style}] [dim]\\[{component}][/dim] {escape(message)}", highlight=False)


def _task_table(tasks: list[Task] | tuple[Task, ...]) -> Table:
    table = Table(title="Tasks", show_lines=False)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Task", style="bold")
    table.add_column("Due")
    table.add_column("Priority")
    table.add_column("Category")
    for i, task in enumerate(tasks, 1):
        table.add_row(
            str(i),
            task.task_name,
            task.due_date or "N/A",
            task.priority.value,
            task.category,
        )
    return table


@app.command()
def chat(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Print session diagnostics"
    )
):
    """Interactive console chat with the task assistant."""
    async def _chat():
        llm = require_llm(console)
        session = make_session(llm, debug_callback=_console_debug if verbose else None)

        try:
            console.print("[bold cyan]Taskchat[/bold cyan]")
            console.print("[dim]Type 'exit', 'quit', or 'q' to leave[/dim]\n")

            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")

                    if not user_input.strip():
                        continue

                    if user_input.strip().lower() in ('exit', 'quit', 'q'):
                        console.print("[dim]Goodbye![/dim]")
                        break

                    outcome = await session.submit(user_input)
                    if outcome is None:
                        continue

                    console.print(f"[bold green]AI:[/bold green] {escape(outcome.reply)}\n", highlight=False)
                    if outcome.task is not None:
                        console.print(_task_table(session.tasks))
                        console.print()

                except KeyboardInterrupt:
                    console.print("\n[dim]Goodbye![/dim]")
                    break
                except EOFError:
                    console.print("\n[dim]Goodbye![/dim]")
                    break

        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await llm.close()

    asyncio.run(_chat())


@app.command()
def ask(
    message: str = typer.Argument(..., help="Message to send"),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the interpreted reply as JSON"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Print session diagnostics"
    )
):
    """Send a single message and print the reply."""
    async def _ask():
        llm = require_llm(console)
        session = make_session(llm, debug_callback=_console_debug if verbose else None)

        try:
            outcome = await session.submit(message)
            if outcome is None:
                console.print("[yellow]Nothing to send.[/yellow]")
                raise typer.Exit(code=1)

            if as_json:
                console.print_json(json.dumps({
                    "reply": outcome.reply,
                    "task": outcome.task.to_wire() if outcome.task else None,
                    "parsed": outcome.parsed,
                }))
                return

            console.print(f"[bold green]AI:[/bold green] {escape(outcome.reply)}", highlight=False)
            if outcome.task is not None:
                console.print(_task_table([outcome.task]))

        except typer.Exit:
            raise
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await llm.close()

    asyncio.run(_ask())


@app.command(name="tui")
def tui_command(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show the log panel at this level (debug, info, warning, error)"
    )
):
    """Launch interactive TUI chat interface."""
    async def _tui():
        from ..ui import run_textual_tui

        llm = require_llm(console)
        await run_textual_tui(make_session(llm), log_level=log_level)

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


@app.command()
def health():
    """Check that the assistant is configured."""
    if os.getenv("GEMINI_API_KEY"):
        console.print("[green]+[/green] Gemini API key: SET")
    else:
        console.print("[red]x[/red] Gemini API key: NOT SET")

    console.print(f"[dim]Model: {get_model_name()}[/dim]")

    if not os.getenv("GEMINI_API_KEY"):
        raise typer.Exit(code=1)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
