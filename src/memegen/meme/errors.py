"""Custom meme generation exceptions."""

from pathlib import Path


class MemeError(Exception):
    """Base exception for meme generation errors."""

    def __init__(
        self, message: str, original_error: Exception | None = None
    ) -> None:
        super().__init__(message)
        self.original_error = original_error


class AssetNotFoundError(MemeError):
    """Exception raised when a bundled asset cannot be resolved.

    This typically occurs when:
    - A selection key has no entry in the preloaded cache
    - The asset file is missing from the bundle
    - The asset file exists but cannot be read
    """

    def __init__(
        self,
        message: str,
        name: str,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.name = name


class MemeWriteError(MemeError):
    """Exception raised when a temp file for a meme cannot be written."""

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.path = path
