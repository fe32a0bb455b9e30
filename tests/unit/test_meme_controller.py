"""Unit tests for MemeController preloading and meme generation."""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Add src to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from memegen.meme.controller import IMAGE_ASSETS, MemeController
from memegen.meme.errors import AssetNotFoundError, MemeError, MemeWriteError
from memegen.meme.models import ControllerState

from test_helpers import BUNDLE, FakeAssetStore


class TestPreload:
    """Test asset cache population at construction."""

    def test_preload_reads_every_image(self, controller, store) -> None:
        assert sorted(store.loaded) == sorted(IMAGE_ASSETS.values())

    def test_missing_image_does_not_fail_construction(self, player, temp_dir) -> None:
        assets = dict(BUNDLE)
        del assets["assets/img3.jpeg"]

        controller = MemeController(FakeAssetStore(assets), player, temp_dir=temp_dir)

        assert controller.memes == ()

    def test_invalid_blink_interval_rejected(self, store, player, temp_dir) -> None:
        with pytest.raises(ValueError, match="blink_interval must be positive"):
            MemeController(store, player, temp_dir=temp_dir, blink_interval=0)


class TestGenerateMeme:
    """Test generation of meme items and temp files."""

    @pytest.mark.asyncio
    async def test_prompt_key_selects_its_image_and_sound(self, controller) -> None:
        """Test that a known prompt ignores style for both image and sound."""
        outcome = await controller.generate_meme("dancing in the start dust", "classic")

        assert outcome.ok
        assert outcome.item.image_path.read_bytes() == b"dancing-image"
        assert outcome.item.sound_path.read_bytes() == b"dancing-sound"
        assert outcome.item.text == "dancing in the start dust"

    @pytest.mark.asyncio
    async def test_chris_prompt_selects_chris_assets(self, controller) -> None:
        outcome = await controller.generate_meme("oh chris with you my love", "hip hop")

        assert outcome.item.image_path.read_bytes() == b"chris-image"
        assert outcome.item.sound_path.read_bytes() == b"chris-sound"

    @pytest.mark.asyncio
    async def test_plain_prompt_uses_style_sound(self, controller) -> None:
        outcome = await controller.generate_meme("hello world", "classic")

        assert outcome.item.image_path.read_bytes() == b"default-image"
        assert outcome.item.sound_path.read_bytes() == b"classic-sound"

    @pytest.mark.asyncio
    async def test_unknown_style_falls_back_to_default_sound(self, controller) -> None:
        outcome = await controller.generate_meme("hello world", "unknown-style")

        assert outcome.item.image_path.read_bytes() == b"default-image"
        assert outcome.item.sound_path.read_bytes() == b"hip-hop-sound"

    @pytest.mark.asyncio
    async def test_temp_files_named_by_timestamp(self, controller, temp_dir) -> None:
        outcome = await controller.generate_meme("hello world", "classic")

        image_path = outcome.item.image_path
        assert image_path.parent == temp_dir
        assert image_path.suffix == ".jpeg"
        assert image_path.name.split("-")[0].isdigit()
        assert outcome.item.sound_path.suffix == ".mp3"
        assert outcome.item.sound_path != image_path

    @pytest.mark.asyncio
    async def test_items_and_blink_flags_grow_together(self, controller) -> None:
        for i in range(3):
            await controller.generate_meme(f"meme {i}", "classic")

            state = controller.state
            assert len(state.items) == i + 1
            assert len(state.blinking) == i + 1

        assert controller.state.blinking == (False, False, False)
        assert [m.text for m in controller.memes] == ["meme 0", "meme 1", "meme 2"]

    @pytest.mark.asyncio
    async def test_missing_cached_image_returns_error(self, player, temp_dir) -> None:
        """Test that a missing default image aborts generation without an item."""
        assets = dict(BUNDLE)
        del assets["assets/img4.jpeg"]
        controller = MemeController(FakeAssetStore(assets), player, temp_dir=temp_dir)

        outcome = await controller.generate_meme("hello world", "classic")

        assert not outcome.ok
        assert isinstance(outcome.error, AssetNotFoundError)
        assert outcome.error.name == "default"
        assert controller.state.items == ()
        assert controller.state.blinking == ()

    @pytest.mark.asyncio
    async def test_missing_sound_asset_removes_written_image(
        self, player, temp_dir
    ) -> None:
        """Test that no partial files or items remain after a sound failure."""
        assets = dict(BUNDLE)
        del assets["assets/classic.mp3"]
        controller = MemeController(FakeAssetStore(assets), player, temp_dir=temp_dir)

        outcome = await controller.generate_meme("hello world", "classic")

        assert isinstance(outcome.error, AssetNotFoundError)
        assert outcome.error.name == "assets/classic.mp3"
        assert list(temp_dir.iterdir()) == []
        assert controller.memes == ()

    @pytest.mark.asyncio
    async def test_write_failure_returns_write_error(self, controller) -> None:
        with patch("memegen.meme.controller.tempfile.mkstemp") as mock_mkstemp:
            mock_mkstemp.side_effect = OSError("No space left on device")

            outcome = await controller.generate_meme("hello world", "classic")

        assert isinstance(outcome.error, MemeWriteError)
        assert isinstance(outcome.error.original_error, OSError)
        assert controller.memes == ()

    @pytest.mark.asyncio
    async def test_unexpected_store_error_is_wrapped(self, controller, store) -> None:
        """Test that non-memegen errors are converted, never raised."""
        with patch.object(store, "load", side_effect=KeyError("boom")):
            outcome = await controller.generate_meme("hello world", "classic")

        assert type(outcome.error) is MemeError
        assert isinstance(outcome.error.original_error, KeyError)
        assert controller.memes == ()


class TestObservers:
    """Test state snapshot publication."""

    @pytest.mark.asyncio
    async def test_generate_notifies_with_snapshot(self, controller) -> None:
        states: list[ControllerState] = []
        controller.subscribe(states.append)

        outcome = await controller.generate_meme("hello world", "classic")

        assert len(states) == 1
        assert states[0].items == (outcome.item,)
        assert states[0].blinking == (False,)
        assert not states[0].is_playing

    @pytest.mark.asyncio
    async def test_failed_generate_does_not_notify(self, controller) -> None:
        states: list[ControllerState] = []
        controller.subscribe(states.append)

        with patch("memegen.meme.controller.tempfile.mkstemp", side_effect=OSError):
            await controller.generate_meme("hello world", "classic")

        assert states == []

    @pytest.mark.asyncio
    async def test_unsubscribe_stops_notifications(self, controller) -> None:
        states: list[ControllerState] = []
        unsubscribe = controller.subscribe(states.append)

        await controller.generate_meme("first", "classic")
        unsubscribe()
        await controller.generate_meme("second", "classic")

        assert len(states) == 1

    def test_unsubscribe_unknown_listener_is_ignored(self, controller) -> None:
        controller.unsubscribe(lambda state: None)

    @pytest.mark.asyncio
    async def test_failing_listener_does_not_block_others(self, controller) -> None:
        def broken(state: ControllerState) -> None:
            raise RuntimeError("render failed")

        states: list[ControllerState] = []
        controller.subscribe(broken)
        controller.subscribe(states.append)

        outcome = await controller.generate_meme("hello world", "classic")

        assert outcome.ok
        assert len(states) == 1

    @pytest.mark.asyncio
    async def test_snapshots_are_not_mutated_later(self, controller) -> None:
        states: list[ControllerState] = []
        controller.subscribe(states.append)

        await controller.generate_meme("first", "classic")
        await controller.generate_meme("second", "classic")

        assert len(states[0].items) == 1
        assert len(states[1].items) == 2
