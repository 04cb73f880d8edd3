"""Core types: layout configuration, exit codes and the Result type."""

from .config import ConfigError, Layout, load_layout, load_layout_or_default
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "ConfigError",
    "Layout",
    "load_layout",
    "load_layout_or_default",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
