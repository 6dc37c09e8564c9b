"""Tag expression matching.

Wraps ``cucumber-tag-expressions`` so the rest of the package only deals
with a matcher value that is created once per run and passed around.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from cucumber_tag_expressions import TagExpressionError, parse

from featuresplit.errors import TagExpressionSyntaxError

_AND_SEPARATOR = re.compile(r"\s+and\s+")


@dataclass(frozen=True)
class TagMatcher:
    """Evaluates one tag expression against sets of tag names.

    A blank expression matches everything.
    """

    expression: str
    _node: Any = None

    @classmethod
    def from_expression(cls, expression: str | None) -> TagMatcher:
        """Parse a tag expression.

        Args:
            expression: Expression such as ``"@smoke and not @slow"`` (blank matches all)

        Returns:
            A matcher for the expression

        Raises:
            TagExpressionSyntaxError: If the expression cannot be parsed
        """
        expression = (expression or "").strip()
        if not expression:
            return cls(expression="")
        try:
            node = parse(expression)
        except TagExpressionError as e:
            raise TagExpressionSyntaxError(expression, str(e)) from e
        return cls(expression=expression, _node=node)

    @property
    def is_match_all(self) -> bool:
        """True if this matcher accepts every tag set."""
        return self._node is None

    def matches(self, tag_names: Iterable[str]) -> bool:
        """Check whether the given tag names satisfy the expression."""
        if self._node is None:
            return True
        return bool(self._node.evaluate(list(tag_names)))


def all_literal_tags_present(expression: str, tag_names: Iterable[str]) -> bool:
    """Check that every ``and``-joined part of the expression is a present tag.

    This is a literal check, not an evaluation: ``or``, ``not`` and
    parentheses are not interpreted, so ``"@a or @b"`` only passes for a tag
    literally named ``"@a or @b"``. A blank expression never passes.

    Args:
        expression: The raw tag expression
        tag_names: Tag names to look the parts up in
    """
    available = set(tag_names)
    required = [part.strip() for part in _AND_SEPARATOR.split(expression.strip())]
    return all(part in available for part in required)
