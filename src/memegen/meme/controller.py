"""Meme controller - asset selection, temp files and playback state.

Owns the list of generated memes and a single playback slot. Collaborates
with an AssetStore for bundled images and sounds and an AudioPlayer for
playback. State changes are published to subscribers as ControllerState
snapshots so a presentation layer can re-render play/pause and blink state.

Failures never propagate to callers: generation reports them through
GenerateOutcome and playback through PlaybackStatus, and both are logged.
"""

import asyncio
import logging
import os
import tempfile
import time
from collections.abc import Callable, Container
from pathlib import Path

from ..assets.base import AssetStore
from ..audio.base import AudioPlayer
from ..paths import get_temp_dir
from .errors import AssetNotFoundError, MemeError, MemeWriteError
from .models import ControllerState, GenerateOutcome, MemeItem, PlaybackStatus

logger = logging.getLogger(__name__)

DEFAULT_KEY = "default"
DANCING_KEY = "dancing in the start dust"
CHRIS_KEY = "chris with you my love"

# Checked in order against the prompt; first match picks both image and sound
PROMPT_KEYS = (DANCING_KEY, CHRIS_KEY)

IMAGE_ASSETS = {
    DANCING_KEY: "assets/img3.jpeg",
    CHRIS_KEY: "assets/img1.jpeg",
    DEFAULT_KEY: "assets/img4.jpeg",
}

SOUND_ASSETS = {
    "hip hop": "assets/hip_hop.mp3",
    "classic": "assets/classic.mp3",
    DANCING_KEY: "assets/dancing_in_the_start_dust.mp3",
    CHRIS_KEY: "assets/chris_with_you_my_love.mp3",
    DEFAULT_KEY: "assets/hip_hop.mp3",
}

IMAGE_SUFFIX = ".jpeg"
DEFAULT_BLINK_INTERVAL = 0.5  # seconds

StateListener = Callable[[ControllerState], None]


def select_image_key(prompt: str) -> str:
    """Pick the image key for a prompt."""
    for key in PROMPT_KEYS:
        if key in prompt:
            return key
    return DEFAULT_KEY


def select_sound_key(prompt: str, style: str, sound_keys: Container[str]) -> str:
    """Pick the sound key for a prompt and style.

    Args:
        prompt: Meme prompt text
        style: Style tag, only consulted when no prompt key matches
        sound_keys: Keys that have a sound mapping

    Returns:
        Matching prompt key, else style when mapped, else "default"
    """
    for key in PROMPT_KEYS:
        if key in prompt:
            return key
    return style if style in sound_keys else DEFAULT_KEY


class MemeController:
    """Generates memes and controls their playback.

    Example:
        controller = MemeController(DirectoryAssetStore(root), PygameAudioPlayer())
        controller.subscribe(render)

        outcome = await controller.generate_meme("hello world", "classic")
        if outcome.ok:
            await controller.play_sound(outcome.item.sound_path, 0)
    """

    def __init__(
        self,
        store: AssetStore,
        player: AudioPlayer,
        temp_dir: Path | None = None,
        blink_interval: float = DEFAULT_BLINK_INTERVAL,
    ) -> None:
        """Initialize the controller and preload the asset caches.

        Args:
            store: Bundle to read images and sounds from
            player: Audio backend for playback
            temp_dir: Where generated files go (defaults to get_temp_dir())
            blink_interval: Seconds between blink toggles while playing

        Raises:
            ValueError: If blink_interval is not positive
        """
        if blink_interval <= 0:
            raise ValueError(f"blink_interval must be positive, got {blink_interval}")

        self.store = store
        self.player = player
        self.temp_dir = temp_dir or get_temp_dir()
        self.blink_interval = blink_interval

        self._image_cache: dict[str, bytes] = {}
        self._sound_cache: dict[str, str] = {}

        self._items: list[MemeItem] = []
        self._blinking: list[bool] = []
        self._active_index: int | None = None
        # Bumped on every playback state change; blink loops holding an
        # older value exit on their next tick
        self._generation = 0

        self._listeners: list[StateListener] = []
        self._tasks: set[asyncio.Task] = set()
        self._stopped = asyncio.Event()
        self._stopped.set()
        self._playback_lock = asyncio.Lock()

        self._preload_assets()

    def _preload_assets(self) -> None:
        """Populate the image and sound caches from the store."""
        for key, name in IMAGE_ASSETS.items():
            try:
                self._image_cache[key] = self.store.load(name)
            except Exception as e:
                logger.error(f"Error preloading image '{key}' from {name}: {e}")

        # Sounds are read from the store at generation time
        self._sound_cache.update(SOUND_ASSETS)
        logger.debug(
            f"Preloaded {len(self._image_cache)} images and "
            f"{len(self._sound_cache)} sound mappings"
        )

    @property
    def memes(self) -> tuple[MemeItem, ...]:
        return tuple(self._items)

    @property
    def is_playing(self) -> bool:
        return self._active_index is not None

    @property
    def currently_playing_index(self) -> int | None:
        return self._active_index

    @property
    def state(self) -> ControllerState:
        """Snapshot of the current controller state."""
        return ControllerState(
            items=tuple(self._items),
            is_playing=self.is_playing,
            active_index=self._active_index,
            blinking=tuple(self._blinking),
        )

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener for state snapshots.

        Args:
            listener: Called with a ControllerState after every change

        Returns:
            A callable that unsubscribes the listener
        """
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: StateListener) -> None:
        """Remove a listener. Unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        state = self.state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State listener failed")

    def _write_temp_file(self, data: bytes, suffix: str) -> Path:
        """Write bytes to a new temp file named by the current timestamp.

        Raises:
            MemeWriteError: If the file cannot be created or written
        """
        stamp = int(time.time() * 1000)
        try:
            self.temp_dir.mkdir(parents=True, exist_ok=True)
            fd, name = tempfile.mkstemp(
                prefix=f"{stamp}-", suffix=suffix, dir=self.temp_dir
            )
        except OSError as e:
            raise MemeWriteError(
                f"Failed to create temp file in {self.temp_dir}: {e}",
                self.temp_dir,
                e,
            ) from e

        path = Path(name)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
        except OSError as e:
            path.unlink(missing_ok=True)
            raise MemeWriteError(f"Failed to write {path}: {e}", path, e) from e
        return path

    async def generate_meme(self, prompt: str, style: str) -> GenerateOutcome:
        """Generate a meme for a prompt and style.

        On success the new item is appended with a cleared blink flag and
        subscribers are notified. On failure nothing is appended, files
        written for this attempt are removed and the error is returned.

        Args:
            prompt: Meme text, matched against the known prompt keys
            style: Sound style used when the prompt matches no key

        Returns:
            GenerateOutcome carrying the new item or the error
        """
        written: list[Path] = []
        try:
            image_key = select_image_key(prompt)
            image_data = self._image_cache.get(image_key)
            if image_data is None:
                raise AssetNotFoundError(
                    f"No cached image for key '{image_key}'", image_key
                )

            sound_key = select_sound_key(prompt, style, self._sound_cache)
            sound_name = self._sound_cache.get(sound_key)
            if sound_name is None:
                raise AssetNotFoundError(
                    f"No sound mapping for key '{sound_key}'", sound_key
                )
            logger.debug(
                f"Selected image '{image_key}' and sound '{sound_key}' for '{prompt[:50]}'"
            )

            image_path = await asyncio.to_thread(
                self._write_temp_file, image_data, IMAGE_SUFFIX
            )
            written.append(image_path)

            sound_data = await asyncio.to_thread(self.store.load, sound_name)
            sound_path = await asyncio.to_thread(
                self._write_temp_file, sound_data, Path(sound_name).suffix or ".mp3"
            )
            written.append(sound_path)

        except Exception as e:
            error = (
                e if isinstance(e, MemeError) else MemeError(f"Unexpected error: {e}", e)
            )
            logger.error(f"Error generating meme: {error}")
            for path in written:
                try:
                    path.unlink(missing_ok=True)
                except OSError as cleanup_error:
                    logger.warning(f"Failed to remove {path}: {cleanup_error}")
            return GenerateOutcome(error=error)

        item = MemeItem(image_path=image_path, text=prompt, sound_path=sound_path)
        self._items.append(item)
        self._blinking.append(False)
        self._notify()
        return GenerateOutcome(item=item)

    def _begin_playing(self, index: int) -> int:
        self._generation += 1
        self._active_index = index
        self._blinking[index] = True
        self._stopped.clear()
        return self._generation

    def _end_playing(self) -> None:
        index = self._active_index
        self._generation += 1
        self._active_index = None
        if index is not None:
            self._blinking[index] = False
        self._stopped.set()

    async def _stop_active(self) -> None:
        self._end_playing()
        try:
            await self.player.stop()
        except Exception as e:
            logger.error(f"Error stopping playback: {e}")

    def _handle_finished(self, token: int) -> None:
        if token != self._generation:
            return
        logger.debug(f"Playback of meme {self._active_index} finished")
        self._end_playing()
        self._notify()

    async def play_sound(self, path: str | Path, index: int) -> PlaybackStatus:
        """Toggle playback of a meme's sound.

        Calling with the playing index stops it. Calling with another index
        stops the current clip first, then starts the new one.

        Args:
            path: Sound file to play
            index: Position of the meme in the item list

        Returns:
            STARTED, STOPPED, or FAILED when the player could not start

        Raises:
            IndexError: If index does not refer to a generated meme
        """
        if not 0 <= index < len(self._items):
            raise IndexError(f"meme index out of range: {index}")

        # One transition at a time; state must match the stream the player runs
        async with self._playback_lock:
            return await self._toggle(path, index)

    async def _toggle(self, path: str | Path, index: int) -> PlaybackStatus:
        if self._active_index == index:
            await self._stop_active()
            self._notify()
            return PlaybackStatus.STOPPED

        if self._active_index is not None:
            logger.debug(f"Stopping meme {self._active_index} before playing {index}")
            await self._stop_active()

        token = self._begin_playing(index)
        try:
            await self.player.start(path, lambda: self._handle_finished(token))
        except Exception as e:
            logger.error(f"Error playing sound {path}: {e}")
            if token == self._generation:
                self._end_playing()
            self._notify()
            return PlaybackStatus.FAILED

        if token == self._generation:
            task = asyncio.create_task(self._blink(index, token))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
        self._notify()
        return PlaybackStatus.STARTED

    async def _blink(self, index: int, token: int) -> None:
        """Toggle the blink flag for index until its playback session ends."""
        while True:
            await asyncio.sleep(self.blink_interval)
            if token != self._generation:
                break
            self._blinking[index] = not self._blinking[index]
            self._notify()

        # A newer session may have taken the same index
        if self._active_index != index:
            self._blinking[index] = False
            self._notify()

    def is_meme_blinking(self, index: int) -> bool:
        """Return the blink flag for a meme.

        Raises:
            IndexError: If index is out of range
        """
        if not 0 <= index < len(self._blinking):
            raise IndexError(f"meme index out of range: {index}")
        return self._blinking[index]

    async def wait_until_stopped(self) -> None:
        """Wait until no meme is playing."""
        await self._stopped.wait()

    async def close(self) -> None:
        """Stop playback and cancel background blink tasks."""
        async with self._playback_lock:
            if self._active_index is not None:
                await self._stop_active()
                self._notify()

        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
