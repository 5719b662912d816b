"""
Rule evaluation engine for the Standards Service.
"""

from typing import Iterable, List

from shared.logging import get_logger
from .conditions import evaluate_condition
from .expressions import evaluate_expression
from .models import (
    Rule, RuleCondition, Context, IssueSeverity,
    RuleEvaluationResult, ValidationIssue, ValidationResult
)


ERROR_PRIORITY = 80
WARNING_PRIORITY = 40


class RuleEngine:
    """Evaluates AV designs against standards rules.

    The engine holds no rule state; every call is a pure function of the
    rules and context passed in.
    """

    def __init__(self):
        self.logger = get_logger("standards.rule_engine")

    def evaluate_condition(self, condition: RuleCondition, context: Context) -> bool:
        """Evaluate a single condition against the context."""
        return evaluate_condition(condition, context)

    def evaluate_expression(self, expression: str, context: Context) -> bool:
        """Evaluate an expression string against the context."""
        return evaluate_expression(expression, context)

    def evaluate_rule(self, rule: Rule, context: Context) -> RuleEvaluationResult:
        """Evaluate a complete rule against the context."""
        if not rule.is_active:
            return RuleEvaluationResult(applies=False, passed=True)

        applies = all(
            self.evaluate_condition(condition, context)
            for condition in rule.conditions
        )
        if not applies:
            return RuleEvaluationResult(applies=False, passed=True)

        passed = self.evaluate_expression(rule.expression, context)
        if passed:
            return RuleEvaluationResult(applies=True, passed=True)

        message = f'Rule "{rule.name}" failed'
        if rule.description:
            message = f"{message}: {rule.description}"
        return RuleEvaluationResult(applies=True, passed=False, message=message)

    def get_severity(self, rule: Rule) -> IssueSeverity:
        """Map a rule's priority onto an issue severity."""
        if rule.priority >= ERROR_PRIORITY:
            return IssueSeverity.ERROR
        if rule.priority >= WARNING_PRIORITY:
            return IssueSeverity.WARNING
        return IssueSeverity.SUGGESTION

    def validate_design(self, rules: Iterable[Rule], context: Context) -> ValidationResult:
        """Validate a design against a set of rules."""
        errors: List[ValidationIssue] = []
        warnings: List[ValidationIssue] = []
        suggestions: List[ValidationIssue] = []

        # Higher priority first; ties keep their input order
        active_rules = sorted(
            (rule for rule in rules if rule.is_active),
            key=lambda r: r.priority,
            reverse=True
        )

        for rule in active_rules:
            result = self.evaluate_rule(rule, context)
            if not result.applies or result.passed:
                continue

            severity = self.get_severity(rule)
            issue = ValidationIssue(
                rule_id=rule.rule_id,
                rule_name=rule.name,
                message=result.message or rule.description,
                severity=severity
            )

            if severity == IssueSeverity.ERROR:
                errors.append(issue)
            elif severity == IssueSeverity.WARNING:
                warnings.append(issue)
            else:
                suggestions.append(issue)

            self.logger.debug(
                "Rule failed",
                rule_id=rule.rule_id,
                severity=severity.value,
                priority=rule.priority
            )

        return ValidationResult(
            is_valid=not errors,
            errors=errors,
            warnings=warnings,
            suggestions=suggestions
        )


rule_engine = RuleEngine()


def evaluate_rule(rule: Rule, context: Context) -> RuleEvaluationResult:
    """Evaluate a rule with the shared engine."""
    return rule_engine.evaluate_rule(rule, context)


def get_severity(rule: Rule) -> IssueSeverity:
    """Severity for a rule with the shared engine."""
    return rule_engine.get_severity(rule)


def validate_design(rules: Iterable[Rule], context: Context) -> ValidationResult:
    """Validate a design with the shared engine."""
    return rule_engine.validate_design(rules, context)
