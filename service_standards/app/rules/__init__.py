"""
Rules engine package.

Decides whether an AV room design complies with standards rules and
classifies the violations by severity.

Modules of interest:
- models: Data classes for rules, conditions, and validation results.
- conditions: Dimension lookup and condition operators.
- expressions: The single-comparison expression language.
- engine: Rule applicability, pass/fail, and the validation report.
- validation: Structural checks applied when rules are authored.

Malformed expressions pass and missing context data fails; the engine
never raises for either.
"""

from .conditions import evaluate_condition
from .expressions import evaluate_expression
from .engine import RuleEngine, rule_engine, evaluate_rule, get_severity, validate_design

__all__ = [
    "RuleEngine",
    "rule_engine",
    "evaluate_condition",
    "evaluate_expression",
    "evaluate_rule",
    "get_severity",
    "validate_design",
]
