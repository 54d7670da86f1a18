from .document_store import (
    COLLECTIONS,
    DocumentStore,
    Transaction,
    server_timestamp,
    SERVER_TIMESTAMP,
)

__all__ = [
    'COLLECTIONS',
    'DocumentStore',
    'Transaction',
    'server_timestamp',
    'SERVER_TIMESTAMP',
]
