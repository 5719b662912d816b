"""
Condition matching for standards rules.

A condition tests one design dimension against a value. Each dimension is
looked up under one or more context keys; the first key present wins.
Unsupported operator/value combinations evaluate to False.
"""

from typing import Any, Dict, Tuple

from .models import (
    RuleCondition, RuleConditionOperator, Context,
    MISSING, is_number, strict_equals
)


DIMENSION_CONTEXT_KEYS: Dict[str, Tuple[str, ...]] = {
    "room_type": ("room_type", "roomType"),
    "platform": ("platform",),
    "ecosystem": ("ecosystem",),
    "tier": ("tier", "qualityTier"),
    "use_case": ("use_case", "useCase"),
    "client": ("client", "clientId"),
}


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def get_dimension_value(dimension: Any, context: Context) -> Any:
    """Resolve a dimension against the context, or MISSING.

    A key holding None is skipped so the next alias can supply the value.
    """
    keys = DIMENSION_CONTEXT_KEYS.get(getattr(dimension, "value", dimension), ())
    for key in keys:
        value = context.get(key)
        if value is not None:
            return value
    return MISSING


def evaluate_condition(condition: RuleCondition, context: Context) -> bool:
    """Evaluate a single condition against the context."""
    context_value = get_dimension_value(condition.dimension, context)
    operator = condition.operator
    value = condition.value

    if operator == RuleConditionOperator.EQUALS:
        return strict_equals(context_value, value)

    elif operator == RuleConditionOperator.NOT_EQUALS:
        return not strict_equals(context_value, value)

    elif operator == RuleConditionOperator.CONTAINS:
        if _is_array(context_value):
            return any(strict_equals(item, value) for item in context_value)
        if isinstance(context_value, str) and isinstance(value, str):
            return value in context_value
        return False

    elif operator == RuleConditionOperator.GREATER_THAN:
        return is_number(context_value) and is_number(value) and context_value > value

    elif operator == RuleConditionOperator.LESS_THAN:
        return is_number(context_value) and is_number(value) and context_value < value

    elif operator == RuleConditionOperator.IN:
        if _is_array(value):
            return any(strict_equals(context_value, item) for item in value)
        return False

    return False
