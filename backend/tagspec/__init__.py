"""
Tag-Spec: tag expressions for selecting test scenarios.

This package parses tag expressions such as ``["@smoke,@fast", "~@slow:2"]``
into an AND-of-ORs structure with per-tag limits, and evaluates it against
the tags attached to a scenario.
"""

from .errors import LimitConflictError, TagExpressionError
from .logic import (
    LimitCheckResult,
    LimitViolation,
    OrClause,
    TagExpressionEvaluator,
    TagExpressionParser,
    TagLimitChecker,
    TagLiteral,
    check_limits,
)
from .models import Tag, TagFilterConfig
from .config import config_from_yaml, evaluator_from_file, find_config, load_config

__version__ = "1.0.0"
__all__ = [
    "TagExpressionError",
    "LimitConflictError",
    "TagLiteral",
    "OrClause",
    "TagExpressionParser",
    "TagExpressionEvaluator",
    "TagLimitChecker",
    "LimitCheckResult",
    "LimitViolation",
    "check_limits",
    "Tag",
    "TagFilterConfig",
    "config_from_yaml",
    "load_config",
    "find_config",
    "evaluator_from_file",
]
