"""Shared rich console and message helpers for the CLI."""

from rich.console import Console
from rich.markup import escape

console = Console()
err_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(
        f"[bold red]Error:[/bold red] {escape(message)}",
        highlight=False,
        soft_wrap=True,
    )


def print_warning(message: str) -> None:
    """Print a warning message to stderr."""
    err_console.print(
        f"[yellow]Warning:[/yellow] {escape(message)}",
        highlight=False,
        soft_wrap=True,
    )


def print_success(message: str) -> None:
    console.print(f"[green]✓[/green] {escape(message)}", highlight=False, soft_wrap=True)
