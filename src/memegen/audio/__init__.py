"""Audio playback package for memegen.

This package provides the player interface, a pygame-backed implementation
in .player, and a silent player for headless runs.
"""

from .base import AudioPlayer
from .silent import SilentAudioPlayer

__all__ = ["AudioPlayer", "SilentAudioPlayer"]
