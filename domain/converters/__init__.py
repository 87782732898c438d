"""
Domain converters between workout documents and storage rows.

- document_to_db_row: Workout document -> Supabase row (for persistence)
- db_row_to_document: Supabase row -> Workout document

All converters are pure functions with no side effects.
"""

from domain.converters.db_converters import db_row_to_document, document_to_db_row

__all__ = [
    "db_row_to_document",
    "document_to_db_row",
]
