"""
Shared pieces for document-style tables.

Every table behaves like a document collection: a string primary key and a
`version` counter registered as the mapper's version_id_col. SQLAlchemy adds
`AND version = :old` to each UPDATE/DELETE; when no row matches it raises
StaleDataError, which the document store treats as a concurrent-write
conflict and retries.
"""

from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB

JSONDocument = JSON().with_variant(JSONB(), "postgresql")


class DocumentMixin:
    """Dict conversion shared by all document models."""

    @classmethod
    def field_names(cls):
        return [attr.key for attr in cls.__mapper__.column_attrs]

    def to_document(self) -> dict:
        """Plain dict of the column values, version excluded."""
        return {
            key: getattr(self, key)
            for key in self.field_names()
            if key != "version"
        }
