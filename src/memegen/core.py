"""Core functionality for memegen - orchestrates generation and playback."""

import logging
from collections.abc import Callable
from pathlib import Path

from .assets import DirectoryAssetStore
from .audio import AudioPlayer, SilentAudioPlayer
from .meme import ControllerState, MemeController, MemeItem, PlaybackStatus
from .meme.controller import DEFAULT_BLINK_INTERVAL

logger = logging.getLogger(__name__)


def create_player(play: bool) -> AudioPlayer:
    """Create the audio backend for a run.

    Args:
        play: Whether sound will actually be played

    Returns:
        A pygame player when playing, otherwise a silent one

    Raises:
        RuntimeError: If the audio mixer cannot be initialized
    """
    if not play:
        return SilentAudioPlayer()

    # Imported lazily so generate-only runs never touch the audio device
    from .audio.player import PygameAudioPlayer

    return PygameAudioPlayer()


async def make_meme(
    prompt: str,
    style: str,
    assets_root: str | Path,
    temp_dir: Path | None = None,
    play: bool = False,
    blink_interval: float = DEFAULT_BLINK_INTERVAL,
    on_state: Callable[[ControllerState], None] | None = None,
    debug: bool = False,
) -> MemeItem:
    """Generate one meme and optionally play it to completion.

    Args:
        prompt: Meme text
        style: Sound style for prompts without a dedicated clip
        assets_root: Bundle root containing assets/
        temp_dir: Where generated files go (defaults to get_temp_dir())
        play: Play the meme's sound and wait for it to finish
        blink_interval: Seconds between blink toggles while playing
        on_state: Optional listener for controller state snapshots
        debug: Enable debug logging

    Returns:
        The generated meme

    Raises:
        ValueError: If prompt is empty
        MemeError: If the meme could not be generated
        RuntimeError: If the audio player fails to initialize or start
    """
    if not prompt or not prompt.strip():
        raise ValueError("No prompt provided")

    store = DirectoryAssetStore(assets_root)
    if debug:
        logger.debug(f"Using asset bundle at {store.root}")

    controller = MemeController(
        store,
        create_player(play),
        temp_dir=temp_dir,
        blink_interval=blink_interval,
    )
    if on_state is not None:
        controller.subscribe(on_state)

    try:
        outcome = await controller.generate_meme(prompt, style)
        if not outcome.ok:
            raise outcome.error

        item = outcome.item
        if debug:
            logger.debug(f"Generated meme: {item.image_path}, {item.sound_path}")

        if play:
            index = len(controller.memes) - 1
            status = await controller.play_sound(item.sound_path, index)
            if status is PlaybackStatus.FAILED:
                raise RuntimeError(f"Could not play {item.sound_path}")
            await controller.wait_until_stopped()
    finally:
        await controller.close()

    return item
