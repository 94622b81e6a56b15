"""
Pydantic models for Tag-Spec.

Defines the scenario tag and the tag filter configuration.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .logic import LimitCheckResult, TagExpressionEvaluator, check_limits


class Tag(BaseModel):
    """A tag attached to a scenario, e.g. ``@smoke`` on line 3."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Tag name, including any '@' prefix")
    line: Optional[int] = Field(default=None, ge=1, description="Source line of the tag")


class TagFilterConfig(BaseModel):
    """Tag filter configuration: the expressions and how limits are enforced."""

    tags: List[str] = Field(
        default_factory=list,
        description="Tag expressions, one AND-term each",
    )
    strict_limits: bool = Field(
        default=True,
        description="Treat limit overruns as errors instead of warnings",
    )

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_single_expression(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    def build_evaluator(self) -> TagExpressionEvaluator:
        """
        Build an evaluator from the configured expressions.

        Raises:
            LimitConflictError: If a tag is given two different limits.
        """
        return TagExpressionEvaluator(self.tags)

    def check_limits(self, scenarios: Iterable[Iterable[Any]]) -> LimitCheckResult:
        """Check tag limits over scenarios using the configured strictness."""
        return check_limits(self.build_evaluator(), scenarios, strict=self.strict_limits)
