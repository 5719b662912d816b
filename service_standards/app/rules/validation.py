"""
Structural checks for authored rules.

The evaluator assumes well-formed rules. These checks run where rules
enter the system, before they reach the engine.
"""

from datetime import datetime
from typing import Any, Dict, List, Mapping

from shared.errors import ValidationError
from .models import (
    Rule, RuleCondition, RuleDimension, RuleConditionOperator,
    RuleAspect, RuleExpressionType, is_number
)


def _values(enum_cls) -> List[str]:
    return [member.value for member in enum_cls]


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def is_valid_rule_condition(condition: Any) -> bool:
    """Check the structure of a rule condition record."""
    if not isinstance(condition, Mapping):
        return False

    if condition.get("dimension") not in _values(RuleDimension):
        return False
    if condition.get("operator") not in _values(RuleConditionOperator):
        return False
    if condition.get("value") is None:
        return False

    return True


def get_rule_errors(rule: Any) -> List[str]:
    """List the structural problems of a rule record."""
    if not isinstance(rule, Mapping):
        return ["rule must be a mapping"]

    errors = []
    for key in ("rule_id", "name", "expression"):
        if not _non_empty_str(rule.get(key)):
            errors.append(f"{key} must be a non-empty string")

    if rule.get("aspect") not in _values(RuleAspect):
        errors.append("aspect is not recognised")
    if rule.get("expression_type") not in _values(RuleExpressionType):
        errors.append("expression_type is not recognised")

    conditions = rule.get("conditions")
    if not isinstance(conditions, list) or not conditions:
        errors.append("conditions must be a non-empty list")
    else:
        for index, condition in enumerate(conditions):
            if not is_valid_rule_condition(condition):
                errors.append(f"conditions[{index}] is invalid")

    priority = rule.get("priority")
    if not is_number(priority) or priority < 0 or priority > 100:
        errors.append("priority must be a number between 0 and 100")

    return errors


def is_valid_rule(rule: Any) -> bool:
    """Check the structure of a complete rule record."""
    return not get_rule_errors(rule)


def rule_from_dict(data: Mapping[str, Any]) -> Rule:
    """Build a Rule from a record, rejecting malformed input."""
    errors = get_rule_errors(data)
    if errors:
        raise ValidationError("Invalid rule", details={"errors": errors})

    now = datetime.now()
    return Rule(
        rule_id=data["rule_id"],
        name=data["name"],
        description=data.get("description") or "",
        aspect=RuleAspect(data["aspect"]),
        expression_type=RuleExpressionType(data["expression_type"]),
        conditions=[
            RuleCondition(
                dimension=RuleDimension(c["dimension"]),
                operator=RuleConditionOperator(c["operator"]),
                value=c["value"]
            )
            for c in data["conditions"]
        ],
        expression=data["expression"],
        priority=data["priority"],
        is_active=data.get("is_active", True),
        created_at=data.get("created_at") or now,
        updated_at=data.get("updated_at") or now
    )


def rule_to_dict(rule: Rule) -> Dict[str, Any]:
    """Serialise a Rule back into its record shape."""
    return {
        "rule_id": rule.rule_id,
        "name": rule.name,
        "description": rule.description,
        "aspect": rule.aspect.value,
        "expression_type": rule.expression_type.value,
        "conditions": [
            {
                "dimension": c.dimension.value,
                "operator": c.operator.value,
                "value": c.value
            }
            for c in rule.conditions
        ],
        "expression": rule.expression,
        "priority": rule.priority,
        "is_active": rule.is_active,
        "created_at": rule.created_at,
        "updated_at": rule.updated_at
    }
