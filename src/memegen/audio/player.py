"""Audio player for cross-platform meme clip playback using pygame."""

# ruff: noqa: E402
import os

# Suppress pygame's annoying welcome message BEFORE any pygame import
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "1"

import warnings

# Suppress pygame's pkg_resources deprecation warning spam
warnings.filterwarnings("ignore", category=UserWarning, module="pygame.pkgdata")

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path

import pygame

from .base import AudioPlayer

logger = logging.getLogger(__name__)


class PygameAudioPlayer(AudioPlayer):
    """Single-stream audio player using pygame.mixer.music.

    Playback is non-blocking: start() returns once the clip is playing and
    a watcher task polls the mixer until the clip ends.
    """

    def __init__(self, poll_interval: float = 0.1) -> None:
        """Initialize the audio player with pygame mixer.

        Args:
            poll_interval: Seconds between checks for end of playback

        Raises:
            RuntimeError: If pygame mixer fails to initialize.
        """
        try:
            pygame.mixer.init()
        except pygame.error as e:
            raise RuntimeError(f"Failed to initialize pygame audio mixer: {e}") from e

        self.poll_interval = poll_interval
        self._watcher: asyncio.Task | None = None

    async def start(
        self, path: str | Path, on_finished: Callable[[], None]
    ) -> None:
        """Start playing an audio file (non-blocking).

        Any stream already playing is stopped first and its callback dropped.

        Args:
            path: Audio file in MP3, OGG or WAV format
            on_finished: Called once when the clip ends on its own

        Raises:
            RuntimeError: If audio playback fails to start.
        """
        await self.stop()

        def _load_and_play() -> None:
            """Synchronous mixer calls in thread."""
            try:
                pygame.mixer.music.load(str(path))
                pygame.mixer.music.play()
            except pygame.error as e:
                raise RuntimeError(f"Failed to play audio: {e}") from e

        # Run pygame file loading in thread to avoid blocking event loop
        await asyncio.to_thread(_load_and_play)
        logger.debug(f"Started playback of {path}")

        self._watcher = asyncio.create_task(self._watch(on_finished))

    async def _watch(self, on_finished: Callable[[], None]) -> None:
        """Wait for the mixer to go idle, then report completion."""
        while True:
            await asyncio.sleep(self.poll_interval)
            try:
                busy = pygame.mixer.music.get_busy()
            except pygame.error as e:
                logger.error(f"Lost audio mixer during playback: {e}")
                busy = False
            if not busy:
                break

        logger.debug("Playback finished")
        if self._watcher is asyncio.current_task():
            self._watcher = None
        try:
            on_finished()
        except Exception:
            logger.exception("Playback completion callback failed")

    async def stop(self) -> None:
        """Stop the current stream without firing its completion callback.

        Raises:
            RuntimeError: If the mixer rejects the stop request.
        """
        watcher, self._watcher = self._watcher, None
        if watcher is None:
            return

        if not watcher.done():
            watcher.cancel()
            try:
                await watcher
            except asyncio.CancelledError:
                pass

        try:
            pygame.mixer.music.stop()
        except pygame.error as e:
            raise RuntimeError(f"Failed to stop audio: {e}") from e
        logger.debug("Stopped playback")
