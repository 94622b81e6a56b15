"""
Logic engine for Tag-Spec.

Provides tag expression parsing, evaluation, and limit checking.
"""

from .parser import OrClause, ParsedExpression, TagExpressionParser, TagLiteral
from .evaluator import TagExpressionEvaluator
from .limits import LimitCheckResult, LimitViolation, TagLimitChecker, check_limits

__all__ = [
    "TagLiteral",
    "OrClause",
    "ParsedExpression",
    "TagExpressionParser",
    "TagExpressionEvaluator",
    "TagLimitChecker",
    "LimitCheckResult",
    "LimitViolation",
    "check_limits",
]
