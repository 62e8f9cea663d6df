"""Classification enums for the type & rule catalog."""

from __future__ import annotations

from enum import StrEnum


class Severity(StrEnum):
    """How serious a rule violation is."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    WARNING = "warning"


class KeyType(StrEnum):
    """Role a field plays in its table's key structure."""

    NONE = "none"
    PRIMARY_KEY = "primary_key"
    UNIQUE = "unique"


class TypeKind(StrEnum):
    """Which registry table a type name lives in."""

    CORE = "core"
    ALIAS = "alias"


UNIVERSAL_TAG = "universal"

# Constraint rules injected by the deriver rather than by any type.
MISSING_VALUE_RULE = "R1"
DUPLICATE_KEY_RULE = "R2"

SOURCE_UNIVERSAL = "universal"
SOURCE_PRIMARY_KEY = "primary_key"
SOURCE_NOT_NULLABLE = "nullable:false"
