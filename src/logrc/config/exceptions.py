"""Errors raised while loading LogRC configuration."""


class ConfigError(Exception):
    """Raised when the configuration file cannot be read, parsed, or validated."""
