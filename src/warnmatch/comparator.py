"""Version-insensitive warning comparison.

Compares warnings only by the criteria expected to stay constant
between versions of the analysed code: the pattern abbreviation (and
optionally its full type), optionally the priority, and the class,
method, field and synthetic source-line annotations with class names
normalised through a rewriter. Concrete line numbers never take part.

``compare`` is a total order, so it works both as a sort/merge key and
as an equality test (``compare(a, b) == 0``).
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING, Any, Protocol

from warnmatch.constants import TYPE_CODE_SEPARATOR
from warnmatch.errors import (
    AnnotationsExhaustedError,
    UnsupportedAnnotationError,
)
from warnmatch.models import (
    AnalysisWarning,
    Annotation,
    ClassAnnotation,
    FieldAnnotation,
    IntAnnotation,
    MethodAnnotation,
    SourceLineAnnotation,
)
from warnmatch.rewriter import (
    ClassNameRewriter,
    identity_rewriter,
    rewrite_field,
    rewrite_method,
)

if TYPE_CHECKING:
    from warnmatch.config import Settings

logger = logging.getLogger(__name__)


class WarningComparator(Protocol):
    def compare(
        self, lhs: AnalysisWarning, rhs: AnalysisWarning
    ) -> int: ...


def is_boring(annotation: Annotation) -> bool:
    """Return True for annotations ignored by version-insensitive matching.

    Int annotations are always ignored. Source lines are ignored unless
    they are synthetic default/unknown markers.
    """
    if isinstance(annotation, IntAnnotation):
        return True
    if isinstance(annotation, SourceLineAnnotation):
        return not annotation.is_synthetic
    return False


def type_code(warning_type: str) -> str:
    """Part of a type code before the first ``_``, or ``""`` if none.

    Almost always equal to the pattern abbreviation.
    """
    head, sep, _ = warning_type.partition(TYPE_CODE_SEPARATOR)
    return head if sep else ""


def _cmp(lhs: Any, rhs: Any) -> int:
    return (lhs > rhs) - (lhs < rhs)


class FilteredAnnotations(Iterator[Annotation]):
    """Single-pass view of a warning's annotations without boring ones.

    ``has_next`` peeks without consuming. Consuming past the end raises
    AnnotationsExhaustedError, which ends a ``for`` loop like any other
    StopIteration.
    """

    def __init__(self, annotations: Iterable[Annotation]) -> None:
        self._source = (a for a in annotations if not is_boring(a))
        self._pending: Annotation | None = None

    def has_next(self) -> bool:
        if self._pending is None:
            self._pending = next(self._source, None)
        return self._pending is not None

    def __next__(self) -> Annotation:
        if not self.has_next():
            raise AnnotationsExhaustedError()
        result = self._pending
        self._pending = None
        return result  # type: ignore[return-value]

    def __iter__(self) -> FilteredAnnotations:
        return self


class VersionInsensitiveComparator:
    """Orders warnings so that equal means "same finding across versions".

    Configuration is fixed at construction, so one instance can be
    shared between threads.
    """

    def __init__(
        self,
        *,
        exact_pattern_match: bool = True,
        compare_priorities: bool = False,
        rewriter: ClassNameRewriter = identity_rewriter,
    ) -> None:
        self._exact_pattern_match = exact_pattern_match
        self._compare_priorities = compare_priorities
        self._rewriter = rewriter
        logger.debug(
            "Comparator configured: exact_pattern_match=%s "
            "compare_priorities=%s rewriter=%r",
            exact_pattern_match,
            compare_priorities,
            rewriter,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings
    ) -> VersionInsensitiveComparator:
        return cls(
            exact_pattern_match=settings.exact_pattern_match,
            compare_priorities=settings.compare_priorities,
            rewriter=settings.rewriter(),
        )

    @property
    def exact_pattern_match(self) -> bool:
        return self._exact_pattern_match

    @property
    def compare_priorities(self) -> bool:
        return self._compare_priorities

    @property
    def rewriter(self) -> ClassNameRewriter:
        return self._rewriter

    @property
    def sort_key(self) -> Callable[[AnalysisWarning], Any]:
        """Key function for ``sorted``/``list.sort``."""
        return functools.cmp_to_key(self.compare)

    def matches(
        self, lhs: AnalysisWarning, rhs: AnalysisWarning
    ) -> bool:
        return self.compare(lhs, rhs) == 0

    def __call__(
        self, lhs: AnalysisWarning, rhs: AnalysisWarning
    ) -> int:
        return self.compare(lhs, rhs)

    def compare(
        self, lhs: AnalysisWarning, rhs: AnalysisWarning
    ) -> int:
        cmp = self._compare_patterns(lhs, rhs)
        if cmp != 0:
            return cmp

        if self._compare_priorities:
            cmp = lhs.priority - rhs.priority
            if cmp != 0:
                return cmp

        return self._compare_annotations(lhs, rhs)

    def _compare_patterns(
        self, lhs: AnalysisWarning, rhs: AnalysisWarning
    ) -> int:
        if lhs.pattern is None or rhs.pattern is None:
            # Without pattern metadata the type code prefix stands in
            # for the abbreviation.
            return _cmp(type_code(lhs.type), type_code(rhs.type))

        # The abbreviation is stable; the specific type often gets
        # refined from one tool version to the next.
        cmp = _cmp(lhs.pattern.abbrev, rhs.pattern.abbrev)
        if cmp != 0 or not self._exact_pattern_match:
            return cmp
        return _cmp(lhs.pattern.type, rhs.pattern.type)

    def _compare_annotations(
        self, lhs: AnalysisWarning, rhs: AnalysisWarning
    ) -> int:
        lhs_iter = FilteredAnnotations(lhs.annotations)
        rhs_iter = FilteredAnnotations(rhs.annotations)

        while lhs_iter.has_next() and rhs_iter.has_next():
            left = next(lhs_iter)
            right = next(rhs_iter)

            if type(left) is not type(right):
                return _cmp(type(left).__name__, type(right).__name__)

            match left:
                case ClassAnnotation():
                    # Decisive: the walk stops here even when equal.
                    return _cmp(
                        self._rewriter(left.class_name),
                        self._rewriter(right.class_name),  # type: ignore[union-attr]
                    )
                case MethodAnnotation():
                    cmp = _cmp(
                        rewrite_method(self._rewriter, left).sort_key,
                        rewrite_method(self._rewriter, right).sort_key,  # type: ignore[arg-type]
                    )
                case FieldAnnotation():
                    cmp = _cmp(
                        rewrite_field(self._rewriter, left).sort_key,
                        rewrite_field(self._rewriter, right).sort_key,  # type: ignore[arg-type]
                    )
                case SourceLineAnnotation():
                    cmp = self._compare_source_lines(left, right)  # type: ignore[arg-type]
                case _ if is_boring(left):
                    raise UnsupportedAnnotationError(
                        left.kind, "Boring annotation reached comparison"
                    )
                case _:
                    raise UnsupportedAnnotationError(
                        left.kind, "Unknown annotation type"
                    )

            if cmp != 0:
                return cmp

        if rhs_iter.has_next():
            return -1
        if lhs_iter.has_next():
            return 1
        return 0

    @staticmethod
    def _compare_source_lines(
        lhs: SourceLineAnnotation, rhs: SourceLineAnnotation
    ) -> int:
        # Source lines shift between versions; files and bytecode
        # offsets do not.
        cmp = _cmp(lhs.source_file, rhs.source_file)
        if cmp != 0:
            return cmp
        cmp = lhs.start_bytecode - rhs.start_bytecode
        if cmp != 0:
            return cmp
        return lhs.end_bytecode - rhs.end_bytecode
