"""
Single-comparison expression evaluation.

Expressions have the shape ``<path> <op> <literal>``, for example
``display.size >= 75`` or ``platform == "teams"``. Paths walk nested
mappings in the context. Literals are numbers, quoted strings, or the
bare words ``true`` and ``false``.

An expression that does not parse passes. A path that does not resolve
fails for every operator.
"""

import re
from typing import Any, Mapping

from .models import Context, MISSING, is_number, strict_equals


# Two-character operators come first so ">=" is never read as ">", and the
# literal may not start with an operator character.
EXPRESSION_PATTERN = re.compile(r"(\w+(?:\.\w+)*)\s*(>=|<=|==|!=|>|<)\s*(?![<>=!])(.+)")
NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def resolve_path(path: str, context: Context) -> Any:
    """Walk a dot-separated path through nested mappings, or return MISSING."""
    value: Any = context
    for segment in path.split("."):
        if not isinstance(value, Mapping) or segment not in value:
            return MISSING
        value = value[segment]
    return value


def parse_literal(raw: str) -> Any:
    """Parse the right-hand side of an expression."""
    text = raw.strip()

    if NUMBER_PATTERN.fullmatch(text):
        if re.fullmatch(r"[+-]?\d+", text):
            return int(text)
        return float(text)

    if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"'):
        return text[1:-1]

    if text == "true":
        return True
    if text == "false":
        return False

    return text


def evaluate_expression(expression: str, context: Context) -> bool:
    """Evaluate an expression string against the context."""
    if not expression or not isinstance(expression, str):
        return True

    match = EXPRESSION_PATTERN.fullmatch(expression.strip())
    if not match:
        return True

    path, operator, raw_value = match.groups()
    context_value = resolve_path(path, context)
    if context_value is MISSING:
        return False

    value = parse_literal(raw_value)

    if operator == "==":
        return strict_equals(context_value, value)
    if operator == "!=":
        return not strict_equals(context_value, value)

    if not (is_number(context_value) and is_number(value)):
        return False

    if operator == ">=":
        return context_value >= value
    if operator == "<=":
        return context_value <= value
    if operator == ">":
        return context_value > value
    if operator == "<":
        return context_value < value

    return True
