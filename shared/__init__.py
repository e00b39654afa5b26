"""Shared utilities and configuration for block-inspector."""

from .config import InspectorConfig, load_config
from .exceptions import InspectorError, InvalidInputError, StorageConsistencyError
from .formatting import format_percentage, format_size
from .result import Err, ErrorKind, Ok, Result

__all__ = [
    "InspectorConfig",
    "load_config",
    "InspectorError",
    "InvalidInputError",
    "StorageConsistencyError",
    "format_size",
    "format_percentage",
    "Ok",
    "Err",
    "ErrorKind",
    "Result",
]
