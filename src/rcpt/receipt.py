"""Receipt model: the record of one command invocation."""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from rcpt.errors import SIGNAL_EXIT_CODE

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


class Receipt(BaseModel):
    """Execution receipt for a single command.

    Field declaration order is the serialized key order.
    """
    command: str  # executable name/path as given
    args: List[str] = Field(default_factory=list)  # arguments after the executable, order preserved
    exit_code: Optional[int] = None  # None if terminated by signal
    stdout: str = ""
    stderr: str = ""
    start_time: datetime  # UTC, taken immediately before spawning
    end_time: datetime  # UTC, taken immediately after the child terminates
    duration_ms: int = Field(ge=0)  # monotonic clock, not end_time - start_time

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("start_time", "end_time")
    @classmethod
    def _require_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None or value.utcoffset() is None:
            raise ValueError("timestamp must be timezone-aware")
        return value.astimezone(timezone.utc)

    @field_serializer("start_time", "end_time")
    def _format_timestamp(self, value: datetime) -> str:
        # Fixed microsecond precision; pydantic's default drops a zero fraction.
        return value.strftime(TIMESTAMP_FORMAT)

    @model_validator(mode="after")
    def _check_time_order(self) -> "Receipt":
        if self.end_time < self.start_time:
            raise ValueError("end_time precedes start_time")
        return self

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    @property
    def process_exit_code(self) -> int:
        """Exit status rcpt should terminate with for this receipt."""
        if self.exit_code is None:
            return SIGNAL_EXIT_CODE
        return self.exit_code
