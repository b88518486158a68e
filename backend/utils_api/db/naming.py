"""
Snake-case naming strategy shared by tables, columns, constraints and the
repository filter keys.
"""

from __future__ import annotations

import re

_UPPER = re.compile(r"(?:^|\.?)([A-Z])")

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def snake_case(name: str) -> str:
    """``UserProfile`` -> ``user_profile``, ``deletedAt`` -> ``deleted_at``."""
    converted = _UPPER.sub(lambda match: "_" + match.group(1).lower(), name)
    return converted[1:] if converted.startswith("_") else converted


__all__ = ["NAMING_CONVENTION", "snake_case"]
