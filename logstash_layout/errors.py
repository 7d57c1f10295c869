"""Exception types raised at configuration time."""


class LayoutError(Exception):
    """Base class for layout errors."""


class ConfigError(LayoutError, ValueError):
    """A configuration value could not be used."""
