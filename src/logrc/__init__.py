"""Top-level package for the LogRC log maintenance utility."""

from importlib import metadata as _metadata

APP_NAME = "LogRC"

__all__ = ["APP_NAME", "__version__"]


def __getattr__(name: str):
    if name == "__version__":
        return _metadata.version("logrc")
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__():
    return sorted(list(globals().keys()) + ["__version__"])
