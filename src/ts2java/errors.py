"""Fatal errors raised by the generator.

Everything else (odd syntax, unmappable types, unknown base names) is
recovered where it happens and only logged.
"""


class Ts2JavaError(Exception):
    """Base class for errors that abort a generator run."""


class ConfigurationError(Ts2JavaError):
    """Configuration file exists but could not be parsed or validated."""


class SourceRootError(Ts2JavaError):
    """A configured source root is missing or unreadable."""


class OutputError(Ts2JavaError):
    """Generated sources could not be written."""
