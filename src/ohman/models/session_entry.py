"""Session history record model."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class EntryType(str, Enum):
    QUESTION = "question"
    DIAGNOSE = "diagnose"
    INTERACTIVE = "interactive"
    ERROR = "error"
    LOG = "log"
    CHAT = "chat"


class SessionEntry(BaseModel):
    """One answered exchange kept in the session history file."""

    id: str = ""
    command: str = ""
    question: str = ""
    answer: str = ""
    timestamp: datetime | None = None
    type: EntryType = EntryType.QUESTION
