"""Helpers for classifying database errors."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

TEMPLATE_NAME_CONSTRAINT = "uq_templates_owner_type_name"

# SQLSTATE for unique_violation (PostgreSQL and other standard drivers).
_UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: IntegrityError, constraint: str = TEMPLATE_NAME_CONSTRAINT) -> bool:
    """True when ``exc`` was raised by the named unique constraint/index."""
    orig = exc.orig
    message = str(orig)
    if constraint in message:
        return True
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate == _UNIQUE_VIOLATION:
        diag = getattr(orig, "diag", None)
        name = getattr(diag, "constraint_name", None) or getattr(orig, "constraint_name", None)
        return name is None or name == constraint
    # SQLite reports the columns instead of the index name.
    return message.startswith("UNIQUE constraint failed:") and "templates.name" in message


__all__ = ["TEMPLATE_NAME_CONSTRAINT", "is_unique_violation"]
