"""
Click command for the claysculptor CLI.

One command covers both modes: with a DESCRIPTION it generates and exits
(single-command mode); with --interactive it starts the read-eval loop.
"""

import asyncio
from contextlib import nullcontext
from pathlib import Path

import click

from claysculptor import (
    Config,
    GenerationClient,
    GenerationRequest,
    SculptorAgent,
    __version__,
    validate_description,
)
from claysculptor.cli import progress
from claysculptor.cli.handlers import run_with_error_handling
from claysculptor.cli.session import InteractiveSession
from claysculptor.core.config import DEFAULT_MODEL, DEFAULT_OUTPUT_DIR, KNOWN_BACKENDS
from claysculptor.logging_config import configure_logging, verbosity_from_env


def _build_agent(
    model: str | None,
    output_dir: Path | None,
    shadows: bool,
    backend: str | None,
) -> tuple[SculptorAgent, Config]:
    """Load config from env, apply CLI overrides, validate, and build the agent."""
    config = Config.from_env().with_overrides(
        default_model=model,
        output_dir=output_dir,
        shadows=True if shadows else None,
        backend=backend.lower() if backend else None,
    )
    # Fails with MissingCredentialError before any network call
    config.validate()
    client = GenerationClient(config.gemini_api_key, config=config)
    return SculptorAgent(client, config), config


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    help=f"""Turn a short description into a stylized 3D clay image (Google Imagen).

\b
Examples:
  claysculptor "friendly dragon"
  claysculptor "space rocket" --variations 5
  claysculptor "enchanted tree" --output ./my_creation.png
  claysculptor "cute robot" --shadows
  claysculptor --interactive
  claysculptor -i --output-dir ./my_creations --model {DEFAULT_MODEL}

\b
Images are playful clay-like props with a smooth finish, modern design,
white background, soft studio lighting, 1:1 aspect ratio.
Requires the GEMINI_API_KEY environment variable.
""",
)
@click.argument("description", nargs=-1)
@click.option("--interactive", "-i", is_flag=True, help="Start interactive mode.")
@click.option(
    "--variations",
    "-v",
    type=click.IntRange(min=0),
    default=None,
    help="Number of variations to generate (0 or 1 means a single image).",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Custom output path for a single image.",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help=f"Output directory for images (default: {DEFAULT_OUTPUT_DIR}).",
)
@click.option("--model", default=None, help=f"Imagen model to use (default: {DEFAULT_MODEL}).")
@click.option("--shadows", "-s", is_flag=True, help="Keep shadows in generated images.")
@click.option(
    "--backend",
    type=click.Choice(list(KNOWN_BACKENDS), case_sensitive=False),
    default=None,
    help="Generation backend: genai (SDK, default) or rest.",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Minimize progress messages; only print result paths or errors.",
)
@click.option(
    "--verbose",
    "verbose_count",
    count=True,
    help="Increase verbosity: --verbose also shows prompts, twice shows API detail.",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Show tracebacks for unexpected errors and log at DEBUG.",
)
@click.version_option(
    __version__,
    "-V",
    "--version",
    package_name="claysculptor",
    message="🎭 %(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    description: tuple[str, ...],
    interactive: bool,
    variations: int | None,
    output: Path | None,
    output_dir: Path | None,
    model: str | None,
    shadows: bool,
    backend: str | None,
    quiet: bool,
    verbose_count: int,
    debug: bool,
) -> None:
    text = " ".join(description).strip()
    if not interactive and not text:
        click.echo(ctx.get_help())
        return

    # CLI flags override CLAYSCULPTOR_VERBOSITY
    if debug:
        verbosity = 2
    elif verbose_count > 0:
        verbosity = verbose_count
    else:
        verbosity = verbosity_from_env()
    configure_logging(verbosity, quiet=quiet)

    if interactive:

        def do_interactive() -> None:
            agent, config = _build_agent(model, output_dir, shadows, backend)
            asyncio.run(InteractiveSession(agent, config).run())

        run_with_error_handling(do_interactive, quiet=quiet, debug=debug)
        return

    def do_generate() -> None:
        validate_description(text)
        agent, config = _build_agent(model, output_dir, shadows, backend)

        paths: list[Path]
        if variations is not None and variations > 1:
            if output is not None and not quiet:
                progress.print_warning("--output is ignored when generating variations.")
            spinner = (
                progress.variations_progress(text, variations, model=config.default_model)
                if not quiet
                else nullcontext()
            )
            with spinner:
                paths = asyncio.run(agent.generate_multiple_variations(text, variations))
        else:
            spinner = (
                progress.generation_progress(text, model=config.default_model)
                if not quiet
                else nullcontext()
            )
            with spinner:
                path = asyncio.run(
                    agent.generate_clay_image(
                        GenerationRequest(description=text, output_path=output)
                    )
                )
            paths = [path]

        if not quiet:
            progress.print_saved(paths)
            progress.print_success("Clay generation completed successfully!")
        # Paths on stdout for scriptability
        for p in paths:
            click.echo(str(p))

    run_with_error_handling(do_generate, quiet=quiet, debug=debug)


def main() -> None:
    """Entry point for the claysculptor console script."""
    cli()


__all__ = ["cli", "main"]
