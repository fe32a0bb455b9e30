"""Bundled asset access for memegen."""

from .base import AssetStore
from .directory import DirectoryAssetStore

__all__ = ["AssetStore", "DirectoryAssetStore"]
