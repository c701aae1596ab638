"""Shared test builders for warnings and annotations."""

from __future__ import annotations

from warnmatch.constants import SOURCE_LINE_DEFAULT
from warnmatch.models import (
    AnalysisWarning,
    Annotation,
    ClassAnnotation,
    FieldAnnotation,
    IntAnnotation,
    MethodAnnotation,
    Pattern,
    SourceLineAnnotation,
)


def make_warning(
    *annotations: Annotation,
    type: str = "NP_ALWAYS_NULL",  # noqa: A002
    abbrev: str | None = "NP",
    priority: int = 2,
) -> AnalysisWarning:
    """Build a warning; ``abbrev=None`` leaves the pattern unresolved."""
    pattern = (
        Pattern(abbrev=abbrev, type=type) if abbrev is not None else None
    )
    return AnalysisWarning(
        type=type,
        pattern=pattern,
        priority=priority,
        annotations=annotations,
    )


def cls(name: str = "com.example.Foo") -> ClassAnnotation:
    return ClassAnnotation(class_name=name)


def method(
    name: str = "run",
    class_name: str = "com.example.Foo",
    signature: str = "()V",
    is_static: bool = False,
) -> MethodAnnotation:
    return MethodAnnotation(
        class_name=class_name,
        method_name=name,
        signature=signature,
        is_static=is_static,
    )


def fld(
    name: str = "count",
    class_name: str = "com.example.Foo",
    signature: str = "I",
    is_static: bool = False,
) -> FieldAnnotation:
    return FieldAnnotation(
        class_name=class_name,
        field_name=name,
        signature=signature,
        is_static=is_static,
    )


def src(
    source_file: str = "Foo.java",
    start_bytecode: int = 0,
    end_bytecode: int = 10,
    start_line: int = 1,
    end_line: int = 5,
    description: str = SOURCE_LINE_DEFAULT,
) -> SourceLineAnnotation:
    return SourceLineAnnotation(
        source_file=source_file,
        start_bytecode=start_bytecode,
        end_bytecode=end_bytecode,
        start_line=start_line,
        end_line=end_line,
        description=description,
    )


def num(value: int = 5) -> IntAnnotation:
    return IntAnnotation(value=value)
