"""Typer CLI definition for memegen."""

import asyncio
import logging
from pathlib import Path

import typer

from .config import load_config
from .core import make_meme
from .meme import ControllerState, MemeError

app = typer.Typer(help="Generate memes from a prompt and play their sound")


def process_prompt_input(words: list[str] | None) -> str:
    """Join prompt words given on the command line.

    Args:
        words: Prompt words from CLI arguments

    Returns:
        The prompt text

    Raises:
        ValueError: If no prompt is provided
    """
    if not words:
        raise ValueError("No prompt provided")

    return " ".join(words)


def format_blink(state: ControllerState) -> str | None:
    """Render the blink indicator line for the playing meme.

    Returns:
        Indicator text, or None when nothing is playing
    """
    if state.active_index is None:
        return None
    lit = state.blinking[state.active_index]
    return f"[{'*' if lit else ' '}] playing meme {state.active_index}"


@app.command()
def generate(
    prompt: list[str] | None = typer.Argument(None, help="Meme prompt text"),
    style: str = typer.Option(
        "default", "-s", "--style", help="Sound style, e.g. 'hip hop' or 'classic'"
    ),
    play: bool = typer.Option(False, "--play", help="Play the meme's sound"),
    assets: Path | None = typer.Option(
        None, "-a", "--assets", help="Asset bundle root (from config if omitted)"
    ),
    debug: bool = typer.Option(
        False, "--debug", help="Show verbose error messages and selection details"
    ),
) -> None:
    """Generate a meme from a prompt."""
    # Configure logging for debug mode
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    try:
        prompt_text = process_prompt_input(prompt)
    except ValueError as e:
        if debug:
            typer.echo(f"Debug - Prompt error: {e!r}", err=True)
        else:
            typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    # Resolve config values for flags not provided
    config = load_config()
    assets_root = assets or config.assets.root

    def show_state(state: ControllerState) -> None:
        line = format_blink(state)
        if line:
            typer.echo(line)

    try:
        item = asyncio.run(
            make_meme(
                prompt_text,
                style,
                assets_root,
                temp_dir=config.storage.temp_dir,
                play=play,
                blink_interval=config.playback.blink_interval,
                on_state=show_state if play else None,
                debug=debug,
            )
        )
    except ValueError as e:
        if debug:
            typer.echo(f"Debug - Prompt error: {e!r}", err=True)
        else:
            typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    except MemeError as e:
        if debug:
            typer.echo(f"Debug - Generation error: {e!r}", err=True)
        else:
            typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    except RuntimeError as e:
        if debug:
            typer.echo(f"Debug - Audio playback error: {e!r}", err=True)
        else:
            typer.echo(f"Error: Failed to play audio: {e}", err=True)
        raise typer.Exit(1) from None
    except Exception as e:
        if debug:
            typer.echo(f"Debug - Unexpected error: {e!r}", err=True)
        else:
            typer.echo("Error: An unexpected error occurred", err=True)
        raise typer.Exit(1) from None

    typer.echo(f"Image: {item.image_path}")
    typer.echo(f"Sound: {item.sound_path}")
