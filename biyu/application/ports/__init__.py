"""Application ports package."""

from .database import DatabaseEnginePort
from .ledger_repository import LedgerRepositoryPort, LedgerUnavailableError
from .ledger_writer import LedgerWriterPort

__all__ = [
    "DatabaseEnginePort",
    "LedgerRepositoryPort",
    "LedgerUnavailableError",
    "LedgerWriterPort",
]
