# domain/models.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class State(Enum):
    """Fases del protocolo POP3 (RFC 1939)."""
    AUTHORIZATION = "authorization"
    TRANSACTION = "transaction"
    UPDATE = "update"


@dataclass(frozen=True)
class Response:
    positive: bool
    status_line: str
    body: list[str] | None = None  # solo en respuestas multilínea positivas

@dataclass(frozen=True)
class MailboxStat:
    message_count: int
    total_size: int

@dataclass(frozen=True)
class MessageInfo:
    message_id: int
    message_size: int

@dataclass(frozen=True)
class MessageUid:
    message_id: int
    unique_id: str

@dataclass
class StoredMessage:
    unique_id: str
    path: Path
