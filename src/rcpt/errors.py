"""Error types and exit codes for rcpt.

Every failure of the wrapper itself maps onto one of these. A wrapped
command that exits non-zero, or dies from a signal, is not an error: it is
recorded in the receipt.
"""

from pathlib import Path
from typing import Optional, Union

# Exit status used when the child was terminated by a signal. The receipt has
# no field for the signal number, so it is not recovered.
SIGNAL_EXIT_CODE = 1

# Exit status used when rcpt fails before or without a receipt.
WRAPPER_FAILURE_EXIT_CODE = 1


class RcptError(Exception):
    """Base class for wrapper failures."""


class UsageError(RcptError, ValueError):
    """Raised when the invocation does not name a command to run."""


class LaunchError(RcptError):
    """Raised when the target executable cannot be spawned."""

    def __init__(self, command: str, reason: Optional[str] = None):
        self.command = command
        self.reason = reason
        message = f"Failed to execute command: {command}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class SerializationError(RcptError, ValueError):
    """Raised when a receipt cannot be encoded as JSON."""


class ReceiptWriteError(RcptError):
    """Raised when the receipt file or its parent directories cannot be written."""

    def __init__(self, message: str, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(message)
