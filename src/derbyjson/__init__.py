"""DerbyJSON schema mapper.

Typed, immutable models for the DerbyJSON v0.2 roller-derby interchange
format, with lossless decode and encode.
"""

import logging

from .version import __version__, __author__, __email__, SUPPORTED_SPEC_VERSIONS
from .config import DerbyJSONSettings, get_settings
from .derby_logging import configure_logging, get_logger
from .errors import (
    DecodeError,
    DerbyJSONError,
    DerbyJSONSyntaxError,
    EncodeError,
    InvalidValueError,
    InvariantViolation,
    MissingFieldError,
    SchemaViolation,
    UnexpectedDocumentError,
    UnknownFieldError,
    UnknownVariantError,
    UnsupportedVersionError,
    WrongTypeError,
)
from .mapper import decode, dump, encode, load, load_roster
from .models import *

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "__author__",
    "__email__",
    "SUPPORTED_SPEC_VERSIONS",
    "DerbyJSONSettings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Mapper
    "decode",
    "encode",
    "load",
    "dump",
    "load_roster",
    # Errors
    "DerbyJSONError",
    "DecodeError",
    "EncodeError",
    "DerbyJSONSyntaxError",
    "SchemaViolation",
    "MissingFieldError",
    "WrongTypeError",
    "InvalidValueError",
    "UnknownVariantError",
    "UnknownFieldError",
    "UnsupportedVersionError",
    "UnexpectedDocumentError",
    "InvariantViolation",
    # Key subpackages
    "models",
]
