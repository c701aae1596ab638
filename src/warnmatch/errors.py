"""Comparison failures.

Every error here is fatal to the ``compare`` call that raised it:
comparison is a pure function that either succeeds deterministically
or signals a defect.
"""

from __future__ import annotations


class ComparisonError(Exception):
    """Base class for warning comparison failures."""


class AnnotationsExhaustedError(ComparisonError, StopIteration):
    """A filtered annotation sequence was consumed past its end."""

    def __init__(self) -> None:
        super().__init__("no remaining annotations")


class UnsupportedAnnotationError(ComparisonError):
    """An annotation reached the pairwise walk with no comparison rule.

    Raised for boring annotations that escaped the filter and for
    annotation kinds the comparator does not know about.
    """

    def __init__(self, kind: str, reason: str) -> None:
        super().__init__(f"{reason}: {kind}")
        self.kind = kind
        self.reason = reason
