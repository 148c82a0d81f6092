"""Exception types raised while configuring and parsing command-line arguments."""

from __future__ import annotations


class ClidaxError(Exception):
    """Base exception for clidax."""


class OptionError(ClidaxError):
    """Base exception for errors concerning one named option."""

    def __init__(self, option: str, message: str) -> None:
        super().__init__(message)
        self.option = option


class ParseError(OptionError):
    """Base exception for violations found in the input tokens."""


class ConfigurationError(ClidaxError):
    """Base exception for malformed option schemas."""


class InvalidOption(ParseError):
    """Raised when an option contains a character outside the allowed class."""

    def __init__(self, option: str) -> None:
        super().__init__(option, f"Invalid option '{option}'")


class UnconfiguredOption(ParseError):
    """Raised when an option matches no schema and no wildcard exists."""

    def __init__(self, option: str) -> None:
        super().__init__(option, f"Option '{option}' is not configured")


class OptionNeedsParam(ParseError):
    """Raised when an option requires a parameter but none was given."""

    def __init__(self, option: str) -> None:
        super().__init__(option, f"Option '{option}' needs a parameter")


class OptionTakesNoParam(ParseError):
    """Raised when a flag option was given a parameter."""

    def __init__(self, option: str) -> None:
        super().__init__(option, f"Option '{option}' takes no parameter")


class OptionIsNotArray(ParseError):
    """Raised when a single-valued option was given more than one parameter."""

    def __init__(self, option: str) -> None:
        super().__init__(option, f"Option '{option}' does not accept multiple parameters")


class ConfigIsArrayButHasNoParam(OptionError, ConfigurationError):
    """Raised when a schema is multi-valued but takes no parameter."""

    def __init__(self, option: str) -> None:
        super().__init__(option, f"Option '{option}' is configured as an array but takes no parameter")


class DuplicateOptionName(OptionError, ConfigurationError):
    """Raised when a name, alias or the wildcard is declared by more than one schema."""

    def __init__(self, option: str) -> None:
        super().__init__(option, f"Option '{option}' is configured more than once")


class OptionStoreError(OptionError, ConfigurationError):
    """Raised when an option model field cannot be mapped to a schema or filled from the result."""

    def __init__(self, option: str, reason: str) -> None:
        super().__init__(option, f"Option '{option}': {reason}")
        self.reason = reason


class SourceNotReadyError(ClidaxError):
    """Raised when a connection is requested from a source that was not set up."""


class InvalidOptionSchema(OptionError, ConfigurationError):
    """Raised when a single option schema is malformed."""

    def __init__(self, option: str, reason: str) -> None:
        super().__init__(option, f"Option schema '{option}' is invalid: {reason}")
        self.reason = reason
