"""Failed shell command model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class FailedCommand:
    """A non-zero exit recorded by the shell hook."""

    command: str
    exit_code: int
    error: str = ""
    time: datetime | None = None
