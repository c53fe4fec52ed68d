"""Persist receipts to disk and read them back."""

import json
import logging
import os
from pathlib import Path
from typing import Union

from rcpt._internal.atomic_io import atomic_write_text
from rcpt._internal.canonical_json import pretty_dumps
from rcpt.errors import ReceiptWriteError, SerializationError
from rcpt.receipt import Receipt

logger = logging.getLogger(__name__)


def _normalize_path(path: Union[str, os.PathLike, Path]) -> Path:
    """Normalize path input to Path object."""
    return Path(path) if not isinstance(path, Path) else path


def receipt_to_json(receipt: Receipt) -> str:
    """Serialize a receipt to its canonical JSON text."""
    try:
        return pretty_dumps(receipt.model_dump(mode="json"))
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to serialize receipt to JSON: {e}") from e


def write_receipt(path: Union[str, os.PathLike, Path], receipt: Receipt) -> Path:
    """
    Write a receipt to path, creating missing parent directories.

    An existing file at path is replaced. The write is committed atomically,
    so a failure never leaves a partial receipt behind.

    Raises:
        SerializationError: If the receipt cannot be encoded
        ReceiptWriteError: If directory creation or the file write fails
    """
    path = _normalize_path(path)
    content = receipt_to_json(receipt)

    parent = path.parent
    if str(parent) not in ("", "."):
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ReceiptWriteError(
                f"Failed to create parent directories for {path}: {e}", path
            ) from e

    try:
        atomic_write_text(path, content)
    except OSError as e:
        raise ReceiptWriteError(f"Failed to write receipt to {path}: {e}", path) from e

    logger.debug("Wrote receipt for %s to %s", receipt.command, path)
    return path


def load_receipt(path: Union[str, os.PathLike, Path]) -> Receipt:
    """Load and validate a receipt JSON file."""
    path = _normalize_path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return Receipt.model_validate(data)
