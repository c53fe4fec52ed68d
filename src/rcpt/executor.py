"""Run one command and capture its outcome as a Receipt."""

import logging
import subprocess
import time
from datetime import datetime, timezone
from typing import Optional, Sequence

from rcpt.errors import LaunchError, UsageError
from rcpt.receipt import Receipt

logger = logging.getLogger(__name__)

_NS_PER_MS = 1_000_000


def decode_output(data: Optional[bytes]) -> str:
    """Decode captured output as UTF-8, replacing invalid sequences with U+FFFD."""
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")


def normalize_exit_code(returncode: int) -> Optional[int]:
    """Map a subprocess return code to the receipt's exit_code.

    On POSIX a negative return code means the child was killed by signal
    ``-returncode``; there is no conventional exit code in that case.
    """
    if returncode < 0:
        return None
    return returncode


def execute_command(command_parts: Sequence[str]) -> Receipt:
    """
    Spawn ``command_parts[0]`` with the remaining tokens as arguments and wait for it.

    The tokens go straight to the OS process-creation call (no shell), stdin
    is the null device, and stdout/stderr are fully buffered until exit.

    Args:
        command_parts: Executable followed by its arguments

    Returns:
        Receipt describing the invocation

    Raises:
        UsageError: If command_parts is empty
        LaunchError: If the executable cannot be found or spawned
    """
    if not command_parts:
        raise UsageError("No command specified")

    parts = [str(part) for part in command_parts]
    cmd, args = parts[0], parts[1:]

    start_time = datetime.now(timezone.utc)
    start_ns = time.monotonic_ns()

    logger.debug("Spawning %s with %d argument(s)", cmd, len(args))
    try:
        completed = subprocess.run(
            parts,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            shell=False,
            check=False,
        )
    except OSError as e:
        reason = e.strerror or str(e)
        raise LaunchError(cmd, reason) from e

    elapsed_ns = time.monotonic_ns() - start_ns
    end_time = datetime.now(timezone.utc)
    # Wall clock can step backwards mid-run; end_time is clamped, duration is not derived from it.
    if end_time < start_time:
        end_time = start_time

    exit_code = normalize_exit_code(completed.returncode)
    duration_ms = max(elapsed_ns, 0) // _NS_PER_MS
    if exit_code is None:
        logger.debug("%s terminated by signal %d after %d ms", cmd, -completed.returncode, duration_ms)
    else:
        logger.debug("%s exited with %d after %d ms", cmd, exit_code, duration_ms)

    return Receipt(
        command=cmd,
        args=args,
        exit_code=exit_code,
        stdout=decode_output(completed.stdout),
        stderr=decode_output(completed.stderr),
        start_time=start_time,
        end_time=end_time,
        duration_ms=duration_ms,
    )
