"""
Storage Services Package

Provides the audit storage interface and an in-memory implementation.
Ledger state itself is never persisted.
"""

from mocha.services.storage.interface import (
    AuditStorageInterface,
    StorageError,
)
from mocha.services.storage.memory import InMemoryAuditStorage

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    # Exceptions
    "StorageError",
    # In-memory implementation
    "InMemoryAuditStorage",
]
