"""clidax - parse command-line arguments into options and command parameters."""

from loguru import logger

from .args import Args
from .errors import (
    ClidaxError,
    ConfigIsArrayButHasNoParam,
    ConfigurationError,
    DuplicateOptionName,
    InvalidOptionSchema,
    InvalidOption,
    OptionError,
    OptionIsNotArray,
    OptionNeedsParam,
    OptionStoreError,
    OptionTakesNoParam,
    ParseError,
    SourceNotReadyError,
    UnconfiguredOption,
)
from .fields import OptionsBuilder, parse_for, schemas_for
from .parser import parse, parse_with
from .schema import WILDCARD, OptionSchema
from .source import ArgsConn, ArgsSource

__version__ = "0.1.0"

# Library records stay silent until an application enables them.
logger.disable("clidax")

__all__ = [
    "WILDCARD",
    "Args",
    "ArgsConn",
    "ArgsSource",
    "ClidaxError",
    "ConfigIsArrayButHasNoParam",
    "ConfigurationError",
    "DuplicateOptionName",
    "InvalidOptionSchema",
    "InvalidOption",
    "OptionError",
    "OptionIsNotArray",
    "OptionNeedsParam",
    "OptionSchema",
    "OptionStoreError",
    "OptionTakesNoParam",
    "OptionsBuilder",
    "ParseError",
    "SourceNotReadyError",
    "UnconfiguredOption",
    "parse",
    "parse_for",
    "parse_with",
    "schemas_for",
]
