"""Meme generation and playback control."""

from .controller import MemeController
from .errors import AssetNotFoundError, MemeError, MemeWriteError
from .models import ControllerState, GenerateOutcome, MemeItem, PlaybackStatus

__all__ = [
    "AssetNotFoundError",
    "ControllerState",
    "GenerateOutcome",
    "MemeController",
    "MemeError",
    "MemeItem",
    "MemeWriteError",
    "PlaybackStatus",
]
