"""Pair the warnings of two analysis runs.

Both runs are sorted with the comparator as key and merged; warnings
that compare equal are the same finding in both versions. Equal
warnings within one run pair off one-to-one in sorted order.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from warnmatch.comparator import (
    VersionInsensitiveComparator,
    WarningComparator,
)
from warnmatch.models import AnalysisWarning

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WarningMatch:
    previous: AnalysisWarning
    current: AnalysisWarning


@dataclass
class MatchReport:
    """Outcome of matching a previous run against a current one."""

    matched: list[WarningMatch] = field(default_factory=list)
    added: list[AnalysisWarning] = field(default_factory=list)
    removed: list[AnalysisWarning] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "matched_count": len(self.matched),
            "added_count": len(self.added),
            "removed_count": len(self.removed),
            "matched": [
                {
                    "previous": m.previous.model_dump(mode="json"),
                    "current": m.current.model_dump(mode="json"),
                }
                for m in self.matched
            ],
            "added": [w.model_dump(mode="json") for w in self.added],
            "removed": [w.model_dump(mode="json") for w in self.removed],
        }


def match_warnings(
    previous: Sequence[AnalysisWarning],
    current: Sequence[AnalysisWarning],
    comparator: WarningComparator | None = None,
) -> MatchReport:
    """Merge two runs into matched, added and removed warnings."""
    comparator = comparator or VersionInsensitiveComparator()
    key = functools.cmp_to_key(comparator.compare)
    old = sorted(previous, key=key)
    new = sorted(current, key=key)

    report = MatchReport()
    i = j = 0
    while i < len(old) and j < len(new):
        cmp = comparator.compare(old[i], new[j])
        if cmp < 0:
            report.removed.append(old[i])
            i += 1
        elif cmp > 0:
            report.added.append(new[j])
            j += 1
        else:
            report.matched.append(WarningMatch(old[i], new[j]))
            i += 1
            j += 1
    report.removed.extend(old[i:])
    report.added.extend(new[j:])

    logger.info(
        "Matched %d warnings (%d added, %d removed)",
        len(report.matched),
        len(report.added),
        len(report.removed),
    )
    return report
