"""Class-name rewriting for moved and renamed classes.

A rewriter is any pure ``str -> str`` callable mapping a dotted class
name to its canonical name. The comparator runs every class name it
compares through one.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import TypeAlias

from warnmatch.models import FieldAnnotation, MethodAnnotation

ClassNameRewriter: TypeAlias = Callable[[str], str]

# Object types inside a JVM descriptor, e.g. "Ljava/lang/String;"
_OBJECT_TYPE = re.compile(r"L([^;<>]+);")


def identity_rewriter(class_name: str) -> str:
    return class_name


class MappingRewriter:
    """Rewrite class names from a fixed ``{old: new}`` map."""

    def __init__(self, renames: Mapping[str, str]) -> None:
        self._renames = dict(renames)

    def __call__(self, class_name: str) -> str:
        return self._renames.get(class_name, class_name)

    def __len__(self) -> int:
        return len(self._renames)

    def __repr__(self) -> str:
        return f"MappingRewriter({len(self._renames)} renames)"


def rewrite_signature(
    rewriter: ClassNameRewriter, signature: str
) -> str:
    """Rewrite every class named in a field or method descriptor.

    Descriptors use slashed names; the rewriter sees dotted ones.
    """
    if rewriter is identity_rewriter:
        return signature

    def _replace(match: re.Match[str]) -> str:
        dotted = match.group(1).replace("/", ".")
        return "L" + rewriter(dotted).replace(".", "/") + ";"

    return _OBJECT_TYPE.sub(_replace, signature)


def rewrite_method(
    rewriter: ClassNameRewriter, method: MethodAnnotation
) -> MethodAnnotation:
    if rewriter is identity_rewriter:
        return method
    return method.model_copy(
        update={
            "class_name": rewriter(method.class_name),
            "signature": rewrite_signature(rewriter, method.signature),
        }
    )


def rewrite_field(
    rewriter: ClassNameRewriter, field: FieldAnnotation
) -> FieldAnnotation:
    if rewriter is identity_rewriter:
        return field
    return field.model_copy(
        update={
            "class_name": rewriter(field.class_name),
            "signature": rewrite_signature(rewriter, field.signature),
        }
    )
