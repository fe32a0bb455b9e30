"""Player that produces no sound, for runs without an audio device."""

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path

from .base import AudioPlayer

logger = logging.getLogger(__name__)


class SilentAudioPlayer(AudioPlayer):
    """Finishes every clip on the next event loop iteration."""

    def __init__(self) -> None:
        self._pending: asyncio.Handle | None = None

    async def start(
        self, path: str | Path, on_finished: Callable[[], None]
    ) -> None:
        await self.stop()
        logger.debug(f"Silently skipping playback of {path}")
        self._pending = asyncio.get_running_loop().call_soon(on_finished)

    async def stop(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
