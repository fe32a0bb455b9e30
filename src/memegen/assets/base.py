"""Abstract base class for bundled asset stores.

An asset store is a read-only bundle of named byte blobs. Names are
bundle-relative paths such as "assets/img4.jpeg".
"""

from abc import ABC, abstractmethod


class AssetStore(ABC):
    """Abstract base class for read-only asset bundles."""

    @abstractmethod
    def load(self, name: str) -> bytes:
        """Load a named asset.

        Args:
            name: Bundle-relative asset name

        Returns:
            Raw asset bytes

        Raises:
            AssetNotFoundError: If the asset is absent or unreadable
        """
        pass
