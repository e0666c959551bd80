import json
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from parley.application.enhancers import build_enhancers
from parley.logger import get_logger, setup_logger
from parley.presentation.tui import ParleyApp
from parley.settings import ComposerConfig, load_enhancers_config

logger = get_logger("main")

cli = typer.Typer(
    name="parley",
    help="Event chat composer with slash commands and @-mentions",
    epilog="""
    Examples:
    $ parley --config my_enhancers.json --pseudonym Alice --conversation-type eventAssistantPlus
    """,
    add_completion=False,
)


@cli.command()
def main(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="JSON file with slash commands and contributors"
    ),
    pseudonym: Optional[str] = typer.Option(None, "--pseudonym", "-p", help="Name shown on sent messages"),
    conversation_type: Optional[str] = typer.Option(
        None, "--conversation-type", help="Only offer commands available for this conversation type"
    ),
    caret_detection: Optional[bool] = typer.Option(
        None,
        "--caret-detection/--no-caret-detection",
        help="Re-run trigger detection when only the caret moves",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Launch the composer TUI."""
    settings = ComposerConfig.from_env()
    if pseudonym:
        settings = replace(settings, pseudonym=pseudonym)
    if caret_detection is not None:
        settings = replace(settings, detect_on_caret_move=caret_detection)
    if debug:
        settings = replace(settings, log_level="DEBUG")

    setup_logger(log_level=settings.log_level, console_output=settings.console_log)

    try:
        enhancers_config = load_enhancers_config(config)
    except (FileNotFoundError, json.JSONDecodeError, ValidationError) as e:
        typer.secho(f"Error: {e}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)

    enhancers = build_enhancers(
        enhancers_config.commands(),
        enhancers_config.contributors,
        conversation_type=conversation_type,
    )
    logger.info(f"Starting Parley with enhancers {[enhancer.id for enhancer in enhancers]}")

    ParleyApp(enhancers, config=settings).run()


def run() -> None:
    cli()


if __name__ == "__main__":
    run()
