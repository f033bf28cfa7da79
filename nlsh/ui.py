from typing import Dict, List

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table
from rich.text import Text

# Diagnostics and decorations go to stderr; stdout only carries results.
console = Console(stderr=True)
out_console = Console()


def display_error(message: str) -> None:
    """Print a diagnostic line."""
    console.print(Text(f"Error: {message}", style="bold red"))


def display_command(command: str) -> None:
    """Show a generated command before it is run."""
    console.print(Panel(Text(command), title="[bold cyan]Generated Command[/bold cyan]", border_style="cyan"))


def confirm_execution() -> bool:
    """Ask user to confirm command execution."""
    return Confirm.ask("Execute this command?", console=console)


def display_result(command: str, success: bool, stdout: str, stderr: str) -> None:
    """Display command execution results."""
    if stdout:
        out_console.print(Text(stdout.rstrip("\n")))
    if stderr:
        console.print(Text(stderr.rstrip("\n"), style="red"))

    status = "[green]Success" if success else "[red]Failed"
    console.print(f"{status}: [bold]{escape(command)}[/bold]", highlight=False)


def display_history(entries: List[Dict]) -> None:
    """Display recorded commands in a table, newest first."""
    if not entries:
        console.print("[yellow]No history yet.[/yellow]")
        return

    table = Table(title="Command History")
    table.add_column("When", style="dim")
    table.add_column("Provider", style="magenta")
    table.add_column("Request")
    table.add_column("Command", style="cyan")

    for entry in entries:
        table.add_row(*(Text(str(entry.get(key, ""))) for key in ("datetime", "provider", "instruction", "command")))

    out_console.print(table)
