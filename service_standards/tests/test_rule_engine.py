"""
Unit tests for the Standards rule engine.
"""

import pytest

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_standards.app.rules import (
    RuleEngine, evaluate_condition, evaluate_expression,
    evaluate_rule, get_severity, validate_design
)
from service_standards.app.rules.models import (
    Rule, RuleCondition, RuleDimension, RuleConditionOperator, RuleAspect,
    IssueSeverity, RuleEvaluationResult, ValidationResult
)


def make_rule(rule_id="rule-1", priority=80, conditions=None, expression="display.size >= 75",
              is_active=True, name=None, description="Display too small"):
    if conditions is None:
        conditions = [
            RuleCondition(
                dimension=RuleDimension.PLATFORM,
                operator=RuleConditionOperator.EQUALS,
                value="teams"
            )
        ]
    return Rule(
        rule_id=rule_id,
        name=name or f"Rule {rule_id}",
        description=description,
        aspect=RuleAspect.EQUIPMENT_SELECTION,
        conditions=conditions,
        expression=expression,
        priority=priority,
        is_active=is_active
    )


class TestRuleEngine:
    """Test cases for RuleEngine."""

    @pytest.fixture
    def rule_engine(self):
        """Create RuleEngine instance."""
        return RuleEngine()

    @pytest.fixture
    def sample_rule(self):
        """Create sample rule."""
        return make_rule(name="Teams display size")

    @pytest.fixture
    def failing_context(self):
        """Context the sample rule applies to and rejects."""
        return {"platform": "teams", "display": {"size": 55}}

    def test_evaluate_rule_passes(self, rule_engine, sample_rule):
        """Test an applicable rule whose expression holds."""
        result = rule_engine.evaluate_rule(sample_rule, {"platform": "teams", "display": {"size": 85}})

        assert result == RuleEvaluationResult(applies=True, passed=True)
        assert result.message is None

    def test_evaluate_rule_fails(self, rule_engine, sample_rule, failing_context):
        """Test an applicable rule whose expression does not hold."""
        result = rule_engine.evaluate_rule(sample_rule, failing_context)

        assert result.applies is True
        assert result.passed is False
        assert "Teams display size" in result.message
        assert result.message == 'Rule "Teams display size" failed: Display too small'

    def test_failure_message_without_description(self, rule_engine, failing_context):
        """Test the failure message still names the rule without a description."""
        rule = make_rule(name="Bare rule", description="")

        result = rule_engine.evaluate_rule(rule, failing_context)

        assert result.message == 'Rule "Bare rule" failed'

    @pytest.mark.parametrize("context", [
        {},
        {"platform": "teams", "display": {"size": 10}},
        {"platform": "zoom"},
    ])
    def test_inactive_rule_never_applies(self, rule_engine, context):
        """Test inactive rules are invisible regardless of context."""
        rule = make_rule(is_active=False)

        assert rule_engine.evaluate_rule(rule, context) == RuleEvaluationResult(applies=False, passed=True)

    def test_conditions_not_met(self, rule_engine, sample_rule):
        """Test a rule whose conditions do not hold never fails."""
        result = rule_engine.evaluate_rule(sample_rule, {"platform": "zoom", "display": {"size": 10}})

        assert result == RuleEvaluationResult(applies=False, passed=True)

    def test_conditions_are_anded(self, rule_engine):
        """Test every condition must hold for the rule to apply."""
        rule = make_rule(conditions=[
            RuleCondition(RuleDimension.PLATFORM, RuleConditionOperator.EQUALS, "teams"),
            RuleCondition(RuleDimension.TIER, RuleConditionOperator.IN, ["premium", "executive"]),
        ])

        context = {"platform": "teams", "tier": "standard", "display": {"size": 10}}
        assert rule_engine.evaluate_rule(rule, context).applies is False

        context["tier"] = "premium"
        result = rule_engine.evaluate_rule(rule, context)
        assert result.applies is True
        assert result.passed is False

    def test_malformed_expression_passes(self, rule_engine):
        """Test an applicable rule with an unparseable expression passes."""
        rule = make_rule(expression="display must be large")

        result = rule_engine.evaluate_rule(rule, {"platform": "teams"})

        assert result == RuleEvaluationResult(applies=True, passed=True)

    def test_missing_data_fails(self, rule_engine, sample_rule):
        """Test an applicable rule fails when the context lacks the data."""
        result = rule_engine.evaluate_rule(sample_rule, {"platform": "teams"})

        assert result.applies is True
        assert result.passed is False

    def test_engine_methods_delegate(self, rule_engine):
        """Test the engine exposes the condition and expression evaluators."""
        cond = RuleCondition(RuleDimension.PLATFORM, RuleConditionOperator.EQUALS, "teams")

        assert rule_engine.evaluate_condition(cond, {"platform": "teams"}) is True
        assert rule_engine.evaluate_expression("display.size >= 75", {"display": {"size": 85}}) is True


class TestSeverity:
    """Test cases for priority to severity mapping."""

    @pytest.mark.parametrize("priority,severity", [
        (0, IssueSeverity.SUGGESTION),
        (39, IssueSeverity.SUGGESTION),
        (40, IssueSeverity.WARNING),
        (79, IssueSeverity.WARNING),
        (80, IssueSeverity.ERROR),
        (100, IssueSeverity.ERROR),
    ])
    def test_bands(self, priority, severity):
        """Test each band boundary."""
        assert get_severity(make_rule(priority=priority)) == severity

    def test_severity_values(self):
        """Test severities serialise to their wire names."""
        assert get_severity(make_rule(priority=80)).value == "error"
        assert get_severity(make_rule(priority=40)).value == "warning"
        assert get_severity(make_rule(priority=0)).value == "suggestion"


class TestValidateDesign:
    """Test cases for design validation."""

    @pytest.fixture
    def passing_context(self):
        """Context satisfying the display rule."""
        return {"platform": "teams", "display": {"size": 85}}

    def test_empty_rules(self):
        """Test an empty rule set yields a clean report."""
        result = validate_design([], {"platform": "teams"})

        assert result == ValidationResult(is_valid=True, errors=[], warnings=[], suggestions=[])

    def test_all_rules_satisfied(self, passing_context):
        """Test a satisfying context yields a clean report."""
        rules = [make_rule("r1", 90), make_rule("r2", 50), make_rule("r3", 10)]

        result = validate_design(rules, passing_context)

        assert result.is_valid is True
        assert result.errors == []
        assert result.warnings == []
        assert result.suggestions == []

    def test_error_makes_design_invalid(self):
        """Test an error-severity failure invalidates the design."""
        rule = make_rule("display-rule", 80)

        result = validate_design([rule], {"platform": "teams", "display": {"size": 55}})

        assert result.is_valid is False
        assert len(result.errors) == 1
        issue = result.errors[0]
        assert issue.rule_id == "display-rule"
        assert issue.rule_name == rule.name
        assert issue.severity == IssueSeverity.ERROR
        assert rule.name in issue.message
        assert issue.equipment_id is None
        assert issue.field is None
        assert issue.suggested_fix is None

    def test_passing_after_fix(self):
        """Test the same rule passes once the design is fixed."""
        rule = make_rule("display-rule", 80)

        result = validate_design([rule], {"platform": "teams", "display": {"size": 85}})

        assert result.is_valid is True

    def test_warnings_and_suggestions_keep_design_valid(self):
        """Test only errors affect validity."""
        rules = [make_rule("warn", 60), make_rule("hint", 20)]

        result = validate_design(rules, {"platform": "teams", "display": {"size": 55}})

        assert result.is_valid is True
        assert [i.rule_id for i in result.warnings] == ["warn"]
        assert [i.rule_id for i in result.suggestions] == ["hint"]
        assert result.errors == []

    def test_issues_ordered_by_priority(self):
        """Test issues within a bucket follow descending priority."""
        rules = [make_rule("low", 81), make_rule("high", 99), make_rule("mid", 90)]

        result = validate_design(rules, {"platform": "teams"})

        assert [i.rule_id for i in result.errors] == ["high", "mid", "low"]

    def test_priority_ties_keep_input_order(self):
        """Test rules of equal priority keep the order they were supplied in."""
        rules = [make_rule("first", 50), make_rule("second", 50)]

        result = validate_design(rules, {"platform": "teams"})

        assert [i.rule_id for i in result.warnings] == ["first", "second"]

    def test_inactive_rules_ignored(self):
        """Test inactive rules never produce issues."""
        rules = [make_rule("off", 100, is_active=False)]

        result = validate_design(rules, {"platform": "teams"})

        assert result.is_valid is True
        assert result.errors == []

    def test_non_applicable_rules_ignored(self):
        """Test rules whose conditions fail never produce issues."""
        result = validate_design([make_rule("teams-only", 100)], {"platform": "zoom"})

        assert result.is_valid is True

    def test_input_rules_not_reordered(self):
        """Test the caller's rule list is left untouched."""
        rules = [make_rule("low", 10), make_rule("high", 90)]

        validate_design(rules, {"platform": "teams"})

        assert [r.rule_id for r in rules] == ["low", "high"]

    def test_idempotent(self):
        """Test repeated validation gives structurally identical results."""
        rules = [make_rule("a", 90), make_rule("b", 50), make_rule("c", 5)]
        context = {"platform": "teams", "display": {"size": 55}}

        assert validate_design(rules, context) == validate_design(rules, context)

    def test_module_functions(self):
        """Test the module-level helpers mirror the engine methods."""
        cond = RuleCondition(RuleDimension.ECOSYSTEM, RuleConditionOperator.CONTAINS, "poly")

        assert evaluate_condition(cond, {"ecosystem": ["poly", "logitech"]}) is True
        assert evaluate_expression("not a real expression", {}) is True
        assert evaluate_rule(make_rule(is_active=False), {}).applies is False
