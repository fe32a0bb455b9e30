"""Directory paths for transient meme files."""

import os
import tempfile
from pathlib import Path


def get_temp_dir() -> Path:
    """Get the directory that holds generated meme files.

    Priority:
    1. $MEMEGEN_TEMP_DIR (explicit override)
    2. <system temp dir>/memegen-{uid}/

    Files here are never cleaned up by memegen; the OS temp cleaner owns them.

    Returns:
        Path to the temp directory, created if missing
    """
    override = os.environ.get("MEMEGEN_TEMP_DIR")
    if override:
        path = Path(override).expanduser()
    else:
        path = Path(tempfile.gettempdir()) / f"memegen-{os.getuid()}"

    path.mkdir(parents=True, exist_ok=True, mode=0o700)
    return path
