"""Pydantic models for analysis warnings and their annotations.

Warnings are produced upstream by an analysis engine and are read-only
here. Annotation order on a warning is semantic and never changed
after construction.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, model_validator

from warnmatch.constants import (
    SOURCE_LINE_DEFAULT,
    STABLE_SOURCE_LINE_DESCRIPTIONS,
)


class _Frozen(BaseModel):
    model_config = {"frozen": True}


class Pattern(_Frozen):
    """Catalog entry describing a category of warning."""

    abbrev: str  # short stable code, e.g. "NP"
    type: str  # full type identifier, e.g. "NP_ALWAYS_NULL"


# ── Annotations ──────────────────────────────────────────


class ClassAnnotation(_Frozen):
    kind: Literal["class"] = "class"
    class_name: str


class MethodAnnotation(_Frozen):
    kind: Literal["method"] = "method"
    class_name: str
    method_name: str
    signature: str
    is_static: bool = False

    @property
    def sort_key(self) -> tuple[str, str, str, bool]:
        return (
            self.class_name,
            self.method_name,
            self.signature,
            self.is_static,
        )


class FieldAnnotation(_Frozen):
    kind: Literal["field"] = "field"
    class_name: str
    field_name: str
    signature: str  # type descriptor
    is_static: bool = False

    @property
    def sort_key(self) -> tuple[str, str, str, bool]:
        return (
            self.class_name,
            self.field_name,
            self.signature,
            self.is_static,
        )


class SourceLineAnnotation(_Frozen):
    """A source range; line numbers are informational only.

    ``description`` tags synthetic default/unknown lines, which are the
    only source lines that take part in version-insensitive matching.
    """

    kind: Literal["source_line"] = "source_line"
    source_file: str
    class_name: str | None = None
    start_line: int = -1
    end_line: int = -1
    start_bytecode: int = -1
    end_bytecode: int = -1
    description: str = SOURCE_LINE_DEFAULT

    @property
    def is_synthetic(self) -> bool:
        return self.description in STABLE_SOURCE_LINE_DESCRIPTIONS


class IntAnnotation(_Frozen):
    kind: Literal["int"] = "int"
    value: int


class OtherAnnotation(_Frozen):
    """An annotation kind with no dedicated model (e.g. from a newer tool)."""

    kind: Literal["other"] = "other"
    name: str
    value: str = ""


Annotation = Annotated[
    ClassAnnotation
    | MethodAnnotation
    | FieldAnnotation
    | SourceLineAnnotation
    | IntAnnotation
    | OtherAnnotation,
    Field(discriminator="kind"),
]


# ── Warnings ─────────────────────────────────────────────


class AnalysisWarning(_Frozen):
    """A single static-analysis finding."""

    type: str  # type code, e.g. "NP_ALWAYS_NULL"
    pattern: Pattern | None = None
    priority: int = 0
    annotations: tuple[Annotation, ...] = ()


class WarningCollection(BaseModel):
    """All warnings reported by one analysis run.

    Accepts either ``{"warnings": [...]}`` or a bare list.
    """

    warnings: list[AnalysisWarning] = Field(
        default_factory=lambda: list[AnalysisWarning]()
    )

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_list(cls, data: Any) -> Any:
        if isinstance(data, list):
            return {"warnings": data}
        return data

    @classmethod
    def from_json(cls, text: str) -> WarningCollection:
        return cls.model_validate(json.loads(text))
