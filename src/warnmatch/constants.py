"""Shared constants: single source of truth for cross-module values.

StrEnum members are str-compatible, so the annotation ``kind``
discriminator round-trips through JSON unchanged.
"""

from __future__ import annotations

from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class AnnotationKind(StrEnum):
    """Discriminator values for the annotation union."""

    CLASS = "class"
    METHOD = "method"
    FIELD = "field"
    SOURCE_LINE = "source_line"
    INT = "int"
    OTHER = "other"


# ── Source line descriptions ─────────────────────────────

SOURCE_LINE_DEFAULT = "SOURCE_LINE_DEFAULT"
SOURCE_LINE_UNKNOWN = "SOURCE_LINE_UNKNOWN"

# Only synthetic default/unknown markers survive version-insensitive
# comparison; concrete source lines are filtered out.
STABLE_SOURCE_LINE_DESCRIPTIONS: frozenset[str] = frozenset({
    SOURCE_LINE_DEFAULT,
    SOURCE_LINE_UNKNOWN,
})

# ── Type codes ───────────────────────────────────────────

TYPE_CODE_SEPARATOR = "_"
