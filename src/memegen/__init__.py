"""memegen - prompt-driven meme generator with sound playback."""

__version__ = "0.1.0"
__all__ = ["MemeController"]


def __getattr__(name: str):  # type: ignore[no-untyped-def]
    if name == "MemeController":
        from .meme import MemeController

        return MemeController
    raise AttributeError(f"module 'memegen' has no attribute {name!r}")
