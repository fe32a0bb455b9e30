"""Abstract base class for audio players.

A player drives a single audio stream. The controller starts a clip with a
completion callback and may stop it early.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path


class AudioPlayer(ABC):
    """Abstract base class for single-stream audio players.

    Contract:
        on_finished fires at most once per start() call, and never after
        stop() has been called for that stream.
    """

    @abstractmethod
    async def start(
        self, path: str | Path, on_finished: Callable[[], None]
    ) -> None:
        """Start playing an audio file.

        Args:
            path: Audio file to play
            on_finished: Called when playback completes naturally

        Raises:
            RuntimeError: If playback cannot be started
        """
        pass

    @abstractmethod
    async def stop(self) -> None:
        """Stop the current stream. No-op when nothing is playing."""
        pass
