"""
Custom exceptions for the DotConfig package.

This module defines a hierarchical exception system that provides:
1. Specific, technical error information for debugging and logging
2. User-friendly error messages for end-users
3. Error codes for consistent error identification
4. Optional context information (the offending path, index, type, ...)
"""

from typing import Optional, Dict, Any


class DotConfigError(Exception):
    """Base exception for all DotConfig errors."""

    # Default values
    error_code = "DC-GENERIC-ERROR"
    user_message = "An unexpected configuration error occurred."

    def __init__(
        self,
        message: str = None,
        user_message: str = None,
        error_code: str = None,
        context: Dict[str, Any] = None,
        cause: Exception = None,
    ):
        # Technical message for logs
        self.message = message or self.__class__.__doc__ or "An error occurred."
        super().__init__(self.message)

        # User-friendly message
        self.user_message = user_message or self.__class__.user_message

        # Error codes
        self.error_code = error_code or self.__class__.error_code

        # Additional context
        self.context = context or {}
        self.cause = cause

    @property
    def path(self) -> Optional[str]:
        """The (sub-)path the error refers to, if any."""
        return self.context.get("path")

    def to_dict(self) -> Dict[str, Any]:
        """Convert the exception to a dictionary for reports and CLI output."""
        error_dict = {
            "error_code": self.error_code,
            "message": self.message,
            "user_message": self.user_message,
        }
        if self.context:
            error_dict["context"] = dict(self.context)
        if self.cause:
            error_dict["cause"] = str(self.cause)
        return error_dict


# Path Errors - 1000 range
class PathError(DotConfigError):
    """Base exception for errors raised while parsing or walking a dotted path."""
    error_code = "DC-PATH-1000"
    user_message = "The configuration path could not be resolved."


class InvalidPathError(PathError):
    """Exception raised when a path is malformed (e.g. contains an empty segment)."""
    error_code = "DC-PATH-1001"
    user_message = "The configuration path is malformed."


class NoSuchKeyError(PathError):
    """Exception raised when a mapping has no entry for a path segment."""
    error_code = "DC-PATH-1002"
    user_message = "The requested configuration key does not exist."


class IndexOutOfRangeError(PathError):
    """Exception raised when a sequence index is beyond the end of the sequence."""
    error_code = "DC-PATH-1003"
    user_message = "The requested list index does not exist."


class InvalidIndexError(PathError):
    """Exception raised when a segment addressing a sequence is not a valid index."""
    error_code = "DC-PATH-1004"
    user_message = "A list element was addressed with something other than an index."


class InvalidTypeError(PathError):
    """Exception raised when a path descends into a value that is not a container."""
    error_code = "DC-PATH-1005"
    user_message = "The configuration path runs through a value that has no children."


# Type Errors - 2000 range
class TypeMismatchError(DotConfigError):
    """Exception raised when a value cannot be read as the requested type."""
    error_code = "DC-TYPE-2001"
    user_message = "The configuration value has an unexpected type."


class ConversionError(TypeMismatchError):
    """Exception raised when a value of an accepted type cannot be converted."""
    error_code = "DC-TYPE-2002"
    user_message = "The configuration value could not be converted."


# Serialization Errors - 3000 range
class SerializationError(DotConfigError):
    """Exception raised when configuration text cannot be encoded or decoded."""
    error_code = "DC-SER-3000"
    user_message = "The configuration could not be read or written."


class UnsupportedValueError(SerializationError):
    """Exception raised when decoded data holds a key or value that is not supported."""
    error_code = "DC-SER-3001"
    user_message = "The configuration contains an unsupported value."
