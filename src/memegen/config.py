"""Configuration management for memegen.

Loads configuration from ~/.config/memegen/config.toml.
Priority chain: CLI flags > env vars > config file.
"""

import os
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path

CONFIG_DIR = Path.home() / ".config" / "memegen"
CONFIG_PATH = CONFIG_DIR / "config.toml"

DEFAULT_CONFIG = """\
# memegen configuration

[assets]
# Bundle root; images and sounds are read from <root>/assets/
root = "~/.local/share/memegen"

[playback]
# Seconds between blink toggles while a meme is playing
blink_interval = 0.5

[storage]
# Directory for generated image and sound files
# (defaults to <system temp dir>/memegen-<uid>)
# temp_dir = "/tmp/memegen"

# Environment overrides:
#   MEMEGEN_ASSETS_ROOT     - assets.root
#   MEMEGEN_BLINK_INTERVAL  - playback.blink_interval
#   MEMEGEN_TEMP_DIR        - storage.temp_dir
"""


@dataclass(frozen=True)
class AssetsConfig:
    """Asset bundle configuration."""

    root: Path


@dataclass(frozen=True)
class PlaybackConfig:
    """Playback configuration."""

    blink_interval: float


@dataclass(frozen=True)
class StorageConfig:
    """Temp file configuration."""

    temp_dir: Path | None


@dataclass(frozen=True)
class MemegenConfig:
    """Top-level memegen configuration."""

    assets: AssetsConfig
    playback: PlaybackConfig
    storage: StorageConfig


_cached_config: MemegenConfig | None = None


def generate_config() -> Path:
    """Generate default config file at ~/.config/memegen/config.toml."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    CONFIG_PATH.write_text(DEFAULT_CONFIG)
    return CONFIG_PATH


def load_config() -> MemegenConfig:
    """Load configuration from config file with env var overrides.

    On first run, generates the config file and exits so the user
    can review it before proceeding.

    Returns:
        Loaded and validated MemegenConfig.

    Raises:
        SystemExit: If config is missing (after generating) or invalid.
    """
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    if not CONFIG_PATH.exists():
        path = generate_config()
        print(
            f"No config found. Generated {path}, review it and run again.",
            file=sys.stderr,
        )
        raise SystemExit(1)

    with open(CONFIG_PATH, "rb") as f:
        data = tomllib.load(f)

    assets = data.get("assets", {})
    playback = data.get("playback", {})
    storage = data.get("storage", {})

    # Validate required fields
    missing = []
    if "root" not in assets:
        missing.append("assets.root")
    if "blink_interval" not in playback:
        missing.append("playback.blink_interval")

    if missing:
        print(
            f"Missing required config values: {', '.join(missing)}",
            file=sys.stderr,
        )
        print(f"Edit {CONFIG_PATH} or delete it to regenerate.", file=sys.stderr)
        raise SystemExit(1)

    # Env vars override config file values
    interval_str = os.getenv("MEMEGEN_BLINK_INTERVAL", str(playback["blink_interval"]))
    try:
        blink_interval = float(interval_str)
    except ValueError:
        print(f"Invalid blink interval: {interval_str!r}", file=sys.stderr)
        raise SystemExit(1) from None
    if blink_interval <= 0:
        print(f"Blink interval must be positive, got {blink_interval}", file=sys.stderr)
        raise SystemExit(1)

    temp_dir_str = os.getenv("MEMEGEN_TEMP_DIR", storage.get("temp_dir", ""))

    _cached_config = MemegenConfig(
        assets=AssetsConfig(
            root=Path(os.getenv("MEMEGEN_ASSETS_ROOT", assets["root"])).expanduser(),
        ),
        playback=PlaybackConfig(blink_interval=blink_interval),
        storage=StorageConfig(
            temp_dir=Path(temp_dir_str).expanduser() if temp_dir_str else None,
        ),
    )

    return _cached_config
