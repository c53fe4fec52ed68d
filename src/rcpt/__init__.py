"""rcpt: run a command and emit a JSON execution receipt."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("rcpt")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from rcpt.receipt import Receipt
from rcpt.executor import execute_command
from rcpt.writer import write_receipt, load_receipt
from rcpt.errors import (
    RcptError,
    UsageError,
    LaunchError,
    SerializationError,
    ReceiptWriteError,
)

__all__ = [
    "__version__",
    "Receipt",
    "execute_command",
    "write_receipt",
    "load_receipt",
    "RcptError",
    "UsageError",
    "LaunchError",
    "SerializationError",
    "ReceiptWriteError",
]
