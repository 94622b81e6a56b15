"""
Errors raised by the tag expression engine.
"""

from __future__ import annotations


class TagExpressionError(ValueError):
    """Base class for tag expression errors."""


class LimitConflictError(TagExpressionError):
    """
    Raised when one tag is given two different limits.

    Attributes:
        tag: The bare (non-negated) tag name.
        existing_limit: The limit recorded first.
        given_limit: The conflicting limit.
    """

    def __init__(self, tag: str, existing_limit: int, given_limit: int):
        self.tag = tag
        self.existing_limit = existing_limit
        self.given_limit = given_limit
        super().__init__(
            f"Inconsistent tag limits for {tag}: {existing_limit} and {given_limit}"
        )
