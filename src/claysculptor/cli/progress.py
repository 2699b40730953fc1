"""
Rich progress displays for CLI operations.

Spinners, status lines and the interactive banners. All output goes to
stderr to preserve stdout for machine-readable output (saved file paths).
"""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from claysculptor.cli.utils import EXAMPLES

# Console for stderr output (preserves stdout for machine output)
console = Console(stderr=True)


def _model_display(model: str | None) -> str:
    if not model:
        return ""
    return model if len(model) <= 40 else f"{model[:37]}..."


@contextmanager
def generation_progress(description: str, model: str | None = None) -> Iterator[None]:
    """
    Display a spinner while a single clay image is generated.

    Args:
        description: The user description being sculpted
        model: The image generation model being used

    Yields:
        None while generation is in progress
    """
    progress = Progress(
        SpinnerColumn(spinner_name="dots"),
        TextColumn("[cyan]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )

    desc_parts = [f'Generating clay image for "{escape(description)}"']
    if model:
        desc_parts.append(f"[dim]({_model_display(model)})[/dim]")

    with progress:
        task = progress.add_task(" ".join(desc_parts), total=None)
        yield
        progress.update(task, completed=True)


@contextmanager
def variations_progress(description: str, count: int, model: str | None = None) -> Iterator[None]:
    """Display a spinner while a batch of variations is generated."""
    progress = Progress(
        SpinnerColumn(spinner_name="dots"),
        TextColumn("[yellow]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )

    desc_parts = [f'Generating {count} variations of "{escape(description)}"']
    if model:
        desc_parts.append(f"[dim]({_model_display(model)})[/dim]")

    with progress:
        task = progress.add_task(" ".join(desc_parts), total=None)
        yield
        progress.update(task, completed=True)


def print_saved(paths: list[Path]) -> None:
    """Print where each generated image was saved."""
    for path in paths:
        console.print(
            f"[green]✓[/green] Clay image saved to: [bold green]{escape(str(path))}[/bold green]"
        )


def print_welcome(
    output_dir: Path,
    variation_count: int,
    model: str,
    shadows: bool,
) -> None:
    """Print the interactive mode banner with commands, examples and current settings."""
    commands = Table.grid(padding=(0, 2))
    commands.add_column(style="cyan", justify="right")
    commands.add_column(style="white")
    commands.add_row("<description>", "Generate a clay image")
    commands.add_row("variations <count> <description>", "Generate multiple versions (1-10)")
    commands.add_row("help", "Show available commands")
    commands.add_row("quit / exit", "End the session")

    settings = Table.grid(padding=(0, 2))
    settings.add_column(style="cyan", justify="right")
    settings.add_column(style="white")
    settings.add_row("Output directory", str(output_dir))
    settings.add_row("Default variations", str(variation_count))
    settings.add_row("Model", model)
    settings.add_row("Shadows", "on" if shadows else "off")

    examples = "\n".join(f'  • "{example}"' for example in EXAMPLES[:3])

    console.print()
    console.print(
        Panel(
            commands,
            title="[bold magenta]🎭 Clay Sculptor - Interactive Mode[/bold magenta]",
            subtitle="Type your descriptions and watch the magic happen",
            border_style="magenta",
            padding=(1, 2),
        )
    )
    console.print(f"[bold]Examples:[/bold]\n{examples}")
    console.print(Panel(settings, title="Current settings", border_style="dim"))
    console.print("Let's start creating! 🎨\n")


def print_session_help() -> None:
    """Print the interactive command reference."""
    table = Table.grid(padding=(0, 2))
    table.add_column(style="cyan", justify="right", vertical="top")
    table.add_column(style="white")
    table.add_row("<description>", "Generate a single clay image")
    table.add_row("variations <count> <description>", "Generate multiple variations")
    table.add_row("help", "Show this help message")
    table.add_row("clear", "Clear the terminal")
    table.add_row("quit/exit", "End the session")
    table.add_row("", "")
    table.add_row("Examples", "\n".join(f'"{example}"' for example in EXAMPLES))
    table.add_row(
        "Tips",
        "Be descriptive for better results\n"
        'Use "variations" for multiple options\n'
        "Images are saved to the output directory",
    )
    console.print(Panel(table, title="[bold]📚 Available Commands[/bold]", border_style="cyan"))


def clear_screen() -> None:
    """Clear the terminal."""
    console.clear()


def print_info(message: str) -> None:
    """Print an info message in cyan."""
    console.print(f"[cyan]ℹ[/cyan] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a warning message in yellow."""
    console.print(f"[yellow]⚠[/yellow] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message in red."""
    console.print(f"[red]✗[/red] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message in green."""
    console.print(f"[green]✓[/green] {escape(message)}")
