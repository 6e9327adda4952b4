"""
sdf_common.py

Common constants, exceptions and logging helpers for the SDFormat schema package.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)

# CONSTANTS

SDF_ROOT_TAG = "sdf"
DEFAULT_SDF_VERSION = "1.8"
# Conceptual pose default. Never materialized into a model value.
DEFAULT_POSE = "0 0 0 0 0 0"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: int = logging.INFO) -> None:
    """Basic console logging for scripts. The library itself never installs handlers."""
    logging.basicConfig(level=level, format=LOG_FORMAT)


# Custom Exceptions
class SdfError(Exception):
    """Base exception for SDFormat schema errors."""
    pass


class SdfDecodeError(SdfError):
    """Error turning document text into a Document."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class MalformedInputError(SdfDecodeError):
    """The text could not be parsed into an element tree."""
    pass


class SchemaMismatchError(SdfDecodeError):
    """The element tree does not fit the schema (missing field, bad value, bad root)."""
    pass


class SdfEncodeError(SdfError):
    """Error turning a Document into text."""
    pass
