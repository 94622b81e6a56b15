"""
Tag Expression Parser.

Parses tag expression strings into an AND-of-ORs structure.

Each input string is one AND-term, holding a comma separated OR-group:
    "@smoke,@fast"      -> (@smoke OR @fast)
    "~@slow:2"          -> (NOT @slow), limit @slow = 2

Several strings are combined with AND.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from ..errors import LimitConflictError

logger = logging.getLogger(__name__)

NEGATION_PREFIX = "~"
LIMIT_SEPARATOR = ":"

_TOKEN_SPLIT = re.compile(r"\s*,\s*")
_LIMIT_PATTERN = re.compile(r"\d+")


@dataclass(frozen=True)
class TagLiteral:
    """A tag name with a negation flag."""

    name: str
    negated: bool = False

    def matches(self, present: Iterable[str]) -> bool:
        """Check the literal against a set of present tag names."""
        if self.negated:
            return self.name not in present
        return self.name in present

    def __str__(self) -> str:
        return f"{NEGATION_PREFIX}{self.name}" if self.negated else self.name


@dataclass(frozen=True)
class OrClause:
    """An OR-group of literals."""

    literals: Tuple[TagLiteral, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.literals)

    def __len__(self) -> int:
        return len(self.literals)

    def __iter__(self):
        return iter(self.literals)

    def matches(self, present: Iterable[str]) -> bool:
        return any(literal.matches(present) for literal in self.literals)

    def __str__(self) -> str:
        return ", ".join(str(literal) for literal in self.literals)


@dataclass
class ParsedExpression:
    """Result of parsing a list of tag expressions."""

    clauses: List[OrClause] = field(default_factory=list)
    limits: Dict[str, int] = field(default_factory=dict)


def split_limit(token: str) -> Tuple[str, Optional[str]]:
    """
    Split a token into (tag, limit text).

    The tag ends at the first ':' and the limit at the next one, so
    "@a:2:3" has limit "2". Whitespace around the limit is dropped.
    """
    parts = token.split(LIMIT_SEPARATOR)
    if len(parts) == 1:
        return token, None
    return parts[0], parts[1].strip()


def strip_negation(tag: str) -> Tuple[str, bool]:
    """Return (base name, negated) for a tag with optional '~' prefix."""
    if tag.startswith(NEGATION_PREFIX):
        return tag[len(NEGATION_PREFIX):], True
    return tag, False


class TagExpressionParser:
    """
    Parser for tag expressions with optional limits.

    Limits declared across all parsed strings share one table; a tag given
    two different limits raises LimitConflictError.
    """

    def parse(self, expressions: Iterable[str]) -> ParsedExpression:
        """
        Parse a list of expression strings.

        Args:
            expressions: Raw expression strings, one AND-term each.

        Returns:
            ParsedExpression with clauses and limits.

        Raises:
            LimitConflictError: If a tag is given two different limits.
        """
        result = ParsedExpression()
        for expression in expressions:
            clause = self.parse_clause(expression, result.limits)
            if clause is not None:
                result.clauses.append(clause)
        return result

    def parse_clause(
        self,
        expression: str,
        limits: Dict[str, int],
    ) -> Optional[OrClause]:
        """
        Parse one expression string into an OR clause.

        Limits found in the expression are recorded into ``limits``.
        Returns None for an empty or whitespace-only expression.
        """
        expression = expression.strip()
        if not expression:
            logger.debug("Ignoring empty tag expression")
            return None

        tokens = [t for t in _TOKEN_SPLIT.split(expression) if t]
        negatives = [t for t in tokens if t.startswith(NEGATION_PREFIX)]
        positives = [t for t in tokens if not t.startswith(NEGATION_PREFIX)]

        literals: List[TagLiteral] = []
        for token in negatives + positives:
            literal = self._parse_token(token, limits)
            if literal is not None and literal not in literals:
                literals.append(literal)

        if not literals:
            logger.debug("Tag expression %r contributed no literals", expression)
            return None

        clause = OrClause(tuple(literals))
        logger.debug("Parsed tag expression %r as (%s)", expression, clause)
        return clause

    def _parse_token(
        self,
        token: str,
        limits: Dict[str, int],
    ) -> Optional[TagLiteral]:
        """Parse a single token and record its limit."""
        tag, limit_text = split_limit(token)
        name, negated = strip_negation(tag)

        if not name:
            logger.debug("Skipping tag token without a name: %r", token)
            return None

        if limit_text is not None:
            if _LIMIT_PATTERN.fullmatch(limit_text):
                self._record_limit(name, int(limit_text), limits)
            else:
                logger.warning(
                    "Ignoring invalid limit %r for tag %s", limit_text, name
                )

        return TagLiteral(name=name, negated=negated)

    def _record_limit(self, name: str, limit: int, limits: Dict[str, int]) -> None:
        existing = limits.get(name)
        if existing is not None and existing != limit:
            raise LimitConflictError(name, existing, limit)
        limits[name] = limit
