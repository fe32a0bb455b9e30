"""Pytest configuration and fixtures for memegen tests."""

import sys
from pathlib import Path

import pytest

# Add src and tests to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from test_helpers import BUNDLE, FakeAssetStore, FakeAudioPlayer


@pytest.fixture
def store() -> FakeAssetStore:
    """Asset store holding the complete bundle."""
    return FakeAssetStore(BUNDLE)


@pytest.fixture
def player() -> FakeAudioPlayer:
    return FakeAudioPlayer()


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Test-specific directory for generated meme files."""
    path = tmp_path / "memes"
    path.mkdir()
    return path


@pytest.fixture
def controller(store: FakeAssetStore, player: FakeAudioPlayer, temp_dir: Path):
    """MemeController over the fake bundle with a short blink interval."""
    from memegen.meme.controller import MemeController

    return MemeController(store, player, temp_dir=temp_dir, blink_interval=0.01)


@pytest.fixture
def bundle_dir(tmp_path: Path) -> Path:
    """On-disk copy of the bundle for DirectoryAssetStore tests."""
    root = tmp_path / "bundle"
    for name, data in BUNDLE.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    return root


@pytest.fixture(autouse=True)
def isolate_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config and temp-dir lookups at test-specific locations."""
    import memegen.config

    config_dir = tmp_path / "config"
    monkeypatch.setattr(memegen.config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(memegen.config, "CONFIG_PATH", config_dir / "config.toml")
    monkeypatch.setattr(memegen.config, "_cached_config", None)
    monkeypatch.setenv("MEMEGEN_TEMP_DIR", str(tmp_path / "tmp"))
    for name in ("MEMEGEN_ASSETS_ROOT", "MEMEGEN_BLINK_INTERVAL"):
        monkeypatch.delenv(name, raising=False)
    return config_dir
