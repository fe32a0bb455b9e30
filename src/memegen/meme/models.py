"""Meme data models and controller state snapshots."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import MemeError


@dataclass(frozen=True)
class MemeItem:
    """A generated meme.

    Attributes:
        image_path: Temp file holding the selected image
        text: Original prompt
        sound_path: Temp file holding the selected sound clip
    """

    image_path: Path
    text: str
    sound_path: Path


@dataclass(frozen=True)
class ControllerState:
    """Immutable snapshot of a MemeController, published to observers.

    Attributes:
        items: Generated memes in creation order
        is_playing: Whether a clip is currently playing
        active_index: Index of the playing item, None when stopped
        blinking: Blink flag per item, same length as items
    """

    items: tuple[MemeItem, ...] = ()
    is_playing: bool = False
    active_index: int | None = None
    blinking: tuple[bool, ...] = ()


@dataclass(frozen=True)
class GenerateOutcome:
    """Result of a generate call.

    Exactly one of item or error is set.
    """

    item: MemeItem | None = None
    error: MemeError | None = None

    def __post_init__(self) -> None:
        """Validate that the outcome is either a success or a failure."""
        if (self.item is None) == (self.error is None):
            raise ValueError("exactly one of item or error must be set")

    @property
    def ok(self) -> bool:
        return self.item is not None


class PlaybackStatus(Enum):
    """Result of a play_sound call."""

    STARTED = "started"
    STOPPED = "stopped"
    FAILED = "failed"
