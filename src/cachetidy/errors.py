"""Exceptions raised on user input and configuration problems."""


class CacheTidyError(Exception):
    """Base class for cachetidy errors shown to the user."""


class InvalidSizeError(CacheTidyError, ValueError):
    """A size string such as '500KB' could not be parsed."""


class ConfigError(CacheTidyError):
    """The configuration file exists but could not be used."""
