"""
Tag Expression Evaluator.

Matches the tags attached to a scenario against a parsed AND-of-ORs
tag expression.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Sequence, Tuple

from .parser import OrClause, TagExpressionParser


def tag_name(tag: Any) -> str:
    """Get the name of a tag object, or the tag itself if it is a string."""
    if isinstance(tag, str):
        return tag
    return tag.name


class TagExpressionEvaluator:
    """
    Evaluator for tag expressions.

    Built once from a list of expression strings:
        TagExpressionEvaluator(["@smoke,@fast", "~@slow:2"])

    matches scenarios tagged (@smoke OR @fast) AND (NOT @slow), and
    declares a limit of 2 for @slow. Immutable after construction.
    """

    def __init__(self, expressions: Sequence[str] = ()):
        """
        Parse the given expressions.

        Args:
            expressions: Raw expression strings, one AND-term each.

        Raises:
            LimitConflictError: If a tag is given two different limits.
        """
        if isinstance(expressions, str):
            expressions = [expressions]
        self._expressions: Tuple[str, ...] = tuple(expressions)

        parsed = TagExpressionParser().parse(self._expressions)
        self._clauses: Tuple[OrClause, ...] = tuple(parsed.clauses)
        self._limits: Mapping[str, int] = MappingProxyType(dict(parsed.limits))

    @property
    def expressions(self) -> Tuple[str, ...]:
        """The raw expression strings."""
        return self._expressions

    @property
    def clauses(self) -> Tuple[OrClause, ...]:
        """The AND-terms, one OR clause each."""
        return self._clauses

    @property
    def limits(self) -> Mapping[str, int]:
        """Read-only mapping of tag name to declared limit."""
        return self._limits

    def is_empty(self) -> bool:
        """True if no expression contributed a clause."""
        return not self._clauses

    def evaluate(self, tags: Iterable[Any]) -> bool:
        """
        Evaluate the expression against a scenario's tags.

        Args:
            tags: Tag objects exposing ``name`` (or plain tag name strings).
                A single tag or tag name is treated as a one-item list.

        Returns:
            True if every clause has at least one matching literal.
        """
        if isinstance(tags, str) or hasattr(tags, "name"):
            tags = [tags]
        return self.evaluate_names(tag_name(tag) for tag in tags)

    def evaluate_names(self, names: Iterable[str]) -> bool:
        """Evaluate the expression against bare tag names."""
        if not any(self._clauses):
            return True

        if isinstance(names, str):
            names = [names]
        present: FrozenSet[str] = frozenset(names)
        return all(clause.matches(present) for clause in self._clauses)

    __call__ = evaluate

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a JSON Logic style structure.

        Example:
            {"and": [{"or": [{"!": {"tag": "@slow"}}, {"tag": "@fast"}]}]}
        """
        ands: List[Dict[str, Any]] = []
        for clause in self._clauses:
            ors: List[Dict[str, Any]] = []
            for literal in clause:
                term: Dict[str, Any] = {"tag": literal.name}
                ors.append({"!": term} if literal.negated else term)
            ands.append({"or": ors})
        return {"and": ands}

    def __str__(self) -> str:
        return " AND ".join(f"({clause})" for clause in self._clauses)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._expressions)!r})"
