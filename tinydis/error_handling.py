"""
Error types and the shared error handler for tinydis.

Errors raised here come from the boundary of the tool (files, offsets,
hex text, misuse of the decoder). The decode loop itself never raises
for any byte content.
"""

import sys
import traceback
import logging
from enum import Enum
from typing import Any, Dict, List, Optional
from dataclasses import dataclass

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ErrorCategory(Enum):
    """Where a failure came from."""
    INPUT_ERROR = "Input Error"
    CONFIGURATION_ERROR = "Configuration Error"
    INTERNAL_ERROR = "Internal Error"


@dataclass
class ErrorContext:
    """Where in the input a failure was detected."""
    function: Optional[str] = None
    binary_path: Optional[str] = None
    address: Optional[int] = None
    additional_info: Optional[Dict[str, Any]] = None

    def describe(self) -> List[str]:
        lines = []
        if self.function:
            lines.append(f"Function: {self.function}")
        if self.binary_path:
            lines.append(f"Binary: {self.binary_path}")
        if self.address is not None:
            lines.append(f"Address: {self.address:#x}")
        for key, value in (self.additional_info or {}).items():
            lines.append(f"  {key}: {value}")
        return lines


class TinyDisError(Exception):
    """Base exception class for tinydis errors."""

    category = ErrorCategory.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        context: Optional[ErrorContext] = None,
        suggestion: Optional[str] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()
        self.suggestion = suggestion
        self.original_exception = original_exception

    def __str__(self):
        lines = [f"{self.category.value}: {self.message}"]
        lines.extend(self.context.describe())

        if self.suggestion:
            lines.append(f"Suggestion: {self.suggestion}")
        if self.original_exception:
            lines.append(f"Caused by {type(self.original_exception).__name__}: {self.original_exception}")

        return "\n".join(lines)


class InputError(TinyDisError):
    """Bad input: files, offsets, hex text, output paths."""
    category = ErrorCategory.INPUT_ERROR


class DecodeRangeError(InputError):
    """The decoder was asked to start outside of its buffer."""


class ConfigurationError(TinyDisError):
    """A decode session was configured with impossible settings."""
    category = ErrorCategory.CONFIGURATION_ERROR


def configure_logger(debug_mode: bool = False) -> logging.Logger:
    """Attach the stderr handler to the ``tinydis`` logger once and set its level."""
    logger = logging.getLogger("tinydis")
    logger.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    console = next((h for h in logger.handlers if getattr(h, "_tinydis", False)), None)
    if console is None:
        console = logging.StreamHandler(sys.stderr)
        console._tinydis = True
        console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(console)
    console.setLevel(logging.DEBUG if debug_mode else logging.WARNING)

    return logger


class ErrorHandler:
    """Reports errors through the ``tinydis`` logger."""

    def __init__(self, debug_mode: bool = False):
        self.debug_mode = debug_mode
        self.logger = configure_logger(debug_mode)

    def handle_error(self, error: Exception, context: Optional[ErrorContext] = None):
        """
        Log an error, wrapping foreign exceptions in a TinyDisError.

        In debug mode the active traceback is printed as well.
        """
        if not isinstance(error, TinyDisError):
            error = TinyDisError(str(error), context=context, original_exception=error)
        self.logger.error(str(error))

        if self.debug_mode:
            traceback.print_exc()


_error_handler: Optional[ErrorHandler] = None


def get_error_handler(debug_mode: bool = False) -> ErrorHandler:
    """Shared handler; asking for debug mode upgrades an existing quiet one."""
    global _error_handler
    if _error_handler is None or (debug_mode and not _error_handler.debug_mode):
        _error_handler = ErrorHandler(debug_mode=debug_mode)
    return _error_handler


ERROR_MESSAGES = {
    "file_not_found": {
        "message": "Binary file not found: {path}",
        "suggestion": "Check that the file path is correct and the file exists."
    },
    "not_a_file": {
        "message": "Not a file: {path}",
        "suggestion": "Pass the path of a binary file, not a directory."
    },
    "unreadable_file": {
        "message": "Cannot read file: {path}",
        "suggestion": "Check the file permissions."
    },
    "empty_file": {
        "message": "Binary file is empty: {path}",
        "suggestion": "There is nothing to disassemble in an empty file."
    },
    "unwritable_output": {
        "message": "Cannot write report to {path}",
        "suggestion": "Check that the directory exists and is writable."
    },
    "invalid_offset": {
        "message": "Invalid start offset: {text!r}",
        "suggestion": "Give the offset in hex, e.g. 7C00 or 0x7C00."
    },
    "offset_out_of_range": {
        "message": "Start offset 0x{offset:X} is beyond the end of the buffer (0x{size:X} bytes)",
        "suggestion": "Pick an offset inside the file."
    },
    "invalid_hex": {
        "message": "Invalid hex byte string: {text!r}",
        "suggestion": "Give bytes as hex pairs, e.g. \"B8 34 12 C3\"."
    },
    "invalid_max_bytes": {
        "message": "Byte ceiling must be a positive number, got {value!r}",
        "suggestion": "Use --unlimited to decode to the end of the buffer."
    },
}


def create_error(
    error_key: str,
    context: Optional[ErrorContext] = None,
    error_class: type = InputError,
    original_exception: Optional[Exception] = None,
    **format_args
) -> TinyDisError:
    """
    Build an error from an ERROR_MESSAGES entry.

    Args:
        error_key: Key in ERROR_MESSAGES
        context: Where the failure was detected
        error_class: Exception class to instantiate
        original_exception: Lower-level exception being wrapped
        **format_args: Values for the message template

    Returns:
        Error instance, ready to raise
    """
    if error_key not in ERROR_MESSAGES:
        return TinyDisError(f"Unknown error: {error_key}", context=context)

    entry = ERROR_MESSAGES[error_key]
    return error_class(
        entry["message"].format(**format_args),
        context=context,
        suggestion=entry["suggestion"],
        original_exception=original_exception,
    )
