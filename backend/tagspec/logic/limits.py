"""
Tag Limit Checking.

Counts how many selected scenarios carry each limited tag and reports
tags that occur more often than their declared limit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from .evaluator import TagExpressionEvaluator, tag_name

logger = logging.getLogger(__name__)


@dataclass
class LimitViolation:
    """A tag that occurred more often than its limit."""

    tag: str
    limit: int
    count: int
    severity: str = "error"

    @property
    def message(self) -> str:
        return f"{self.tag} occurred {self.count} times, but the limit was set to {self.limit}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "tag": self.tag,
            "limit": self.limit,
            "count": self.count,
            "message": self.message,
            "severity": self.severity,
        }


@dataclass
class LimitCheckResult:
    """Result of checking tag limits over a set of scenarios."""

    valid: bool = True
    violations: List[LimitViolation] = field(default_factory=list)
    counts: Dict[str, int] = field(default_factory=dict)
    scenarios_checked: int = 0
    scenarios_matched: int = 0

    def add_violation(self, violation: LimitViolation) -> None:
        self.violations.append(violation)
        if violation.severity == "error":
            self.valid = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "valid": self.valid,
            "violations": [v.to_dict() for v in self.violations],
            "counts": dict(self.counts),
            "scenarios_checked": self.scenarios_checked,
            "scenarios_matched": self.scenarios_matched,
        }


class TagLimitChecker:
    """
    Checks declared tag limits against the scenarios an expression selects.

    Only scenarios matched by the expression are counted.
    """

    def __init__(self, evaluator: TagExpressionEvaluator, strict: bool = True):
        """
        Initialize the checker.

        Args:
            evaluator: The evaluator holding the expression and its limits.
            strict: If False, overruns are reported as warnings.
        """
        self.evaluator = evaluator
        self.strict = strict

    def check(self, scenarios: Iterable[Iterable[Any]]) -> LimitCheckResult:
        """
        Check limits over scenarios.

        Args:
            scenarios: One collection of tags (or tag names) per scenario.

        Returns:
            LimitCheckResult with per-tag counts and violations.
        """
        limits = self.evaluator.limits
        result = LimitCheckResult(counts={tag: 0 for tag in limits})

        for tags in scenarios:
            result.scenarios_checked += 1
            names = {tag_name(tag) for tag in tags}
            if not self.evaluator.evaluate_names(names):
                continue
            result.scenarios_matched += 1
            for tag in limits.keys() & names:
                result.counts[tag] += 1

        severity = "error" if self.strict else "warning"
        for tag, limit in limits.items():
            count = result.counts[tag]
            if count > limit:
                violation = LimitViolation(tag=tag, limit=limit, count=count, severity=severity)
                logger.warning(violation.message)
                result.add_violation(violation)

        return result


def check_limits(
    evaluator: TagExpressionEvaluator,
    scenarios: Iterable[Iterable[Any]],
    strict: bool = True,
) -> LimitCheckResult:
    """Convenience function to check tag limits."""
    return TagLimitChecker(evaluator, strict=strict).check(scenarios)
