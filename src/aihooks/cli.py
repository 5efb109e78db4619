"""aihooks CLI - run LLM tasks against any configured provider."""

import asyncio
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from . import __version__
from .config import Settings
from .prompts.tasks import TASK_TEMPLATES, VALID_TASKS
from .providers.catalog import DISPLAY_NAMES
from .providers.errors import AIHookError
from .services import HookService
from .utils.console import console, err_console
from .utils.logging import setup_logging


def _load_service() -> HookService:
    """Build a HookService from AI_HOOK_* settings, exit on configuration errors."""
    try:
        settings = Settings()
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            err_console.print(
                f"[red]Invalid AI_HOOK_{escape(field.upper())}: {escape(error['msg'])}[/red]",
                highlight=False,
            )
        raise typer.Exit(code=1)

    setup_logging(level="DEBUG", console_level=settings.log_level)
    try:
        return HookService.from_settings(settings)
    except AIHookError as e:
        _print_error(e)
        raise typer.Exit(code=1)


def _print_error(error: AIHookError) -> None:
    """Print a classified error in red."""
    err_console.print(f"[red]{escape(error.pretty())}[/red]", highlight=False)


app = typer.Typer(
    name="aihooks",
    help="Run LLM tasks through a uniform interface over many providers",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]aihooks[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """aihooks - one call signature, many LLM providers."""


@app.command("providers")
def providers_command() -> None:
    """List providers configured through AI_HOOK_* environment variables."""
    service = _load_service()
    available = service.registry.available_providers()

    if not available:
        console.print("[yellow]No providers configured.[/yellow]")
        console.print("Set at least one AI_HOOK_<PROVIDER>_KEY, e.g. AI_HOOK_OPENROUTER_KEY.")
        raise typer.Exit(code=1)

    selected = service.selector.resolve()

    table = Table(title="Available providers")
    table.add_column("Provider")
    table.add_column("Name")
    table.add_column("Model")
    table.add_column("Selected")
    for provider in available:
        entry = service.registry.get(provider)
        if entry is None:
            continue
        table.add_row(
            provider.value,
            DISPLAY_NAMES[provider],
            service.selector.resolve_model(entry),
            "✓" if provider is selected.provider else "",
        )
    console.print(table)


@app.command("tasks")
def tasks_command() -> None:
    """List supported task types."""
    for task in VALID_TASKS:
        first_line = TASK_TEMPLATES[task].split("\n", 1)[0]
        console.print(f"[bold]{task}[/bold]  {first_line}", highlight=False)


@app.command("run")
def run_command(
    task: Annotated[str, typer.Argument(help=f"Task type: {', '.join(VALID_TASKS)}")],
    text: Annotated[str, typer.Argument(help="Input text")],
    provider: Annotated[
        str | None,
        typer.Option("--provider", "-p", help="Provider to use (default: auto-select)"),
    ] = None,
    model: Annotated[
        str | None,
        typer.Option("--model", "-m", help="Model to use (default: provider default)"),
    ] = None,
    language: Annotated[
        str | None,
        typer.Option("--language", "-l", help="Target language for translate"),
    ] = None,
) -> None:
    """Run one task and print the model output."""
    service = _load_service()

    try:
        result = asyncio.run(
            service.run(text, task=task, provider=provider, model=model, target_language=language)
        )
    except AIHookError as e:
        _print_error(e)
        raise typer.Exit(code=1)

    console.print(Panel(Text(result.output), title=task, style="blue"))
    meta = result.meta
    console.print(
        f"[dim]{meta.provider.value} / {meta.model} · {meta.latency_ms} ms[/dim]",
        highlight=False,
    )


if __name__ == "__main__":
    app()
