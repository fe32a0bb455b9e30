"""Filesystem-backed asset store."""

import logging
from pathlib import Path

from ..meme.errors import AssetNotFoundError
from .base import AssetStore

logger = logging.getLogger(__name__)


class DirectoryAssetStore(AssetStore):
    """Asset store that reads assets from a bundle root directory.

    Asset names are resolved relative to the root, so a root of
    ~/.local/share/memegen serves "assets/img4.jpeg" from
    ~/.local/share/memegen/assets/img4.jpeg.
    """

    def __init__(self, root: str | Path) -> None:
        """Initialize the store.

        Args:
            root: Bundle root directory
        """
        self.root = Path(root).expanduser().resolve()

    def _resolve(self, name: str) -> Path:
        path = (self.root / name).resolve()
        if not path.is_relative_to(self.root):
            raise AssetNotFoundError(f"Asset outside bundle root: {name}", name)
        return path

    def load(self, name: str) -> bytes:
        """Read an asset from disk.

        Args:
            name: Bundle-relative asset name

        Returns:
            Raw asset bytes

        Raises:
            AssetNotFoundError: If the file is missing, unreadable or outside the root
        """
        path = self._resolve(name)

        try:
            data = path.read_bytes()
        except FileNotFoundError as e:
            raise AssetNotFoundError(f"Asset not found: {name}", name, e) from e
        except OSError as e:
            raise AssetNotFoundError(
                f"Failed to read asset {name}: {e}", name, e
            ) from e

        logger.debug(f"Loaded asset {name} ({len(data)} bytes)")
        return data
