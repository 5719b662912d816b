"""
In-memory rule registry for the Standards Service.
"""

from typing import Dict, Any, Optional, List

from shared.logging import get_logger
from shared.errors import RuleNotFoundError
from .rules.models import Rule, RuleAspect


class RuleRegistry:
    """Holds the rules the service validates designs against."""

    def __init__(self):
        self.logger = get_logger("standards.rule_registry")
        self.rules: Dict[str, Rule] = {}

    def add_rule(self, rule: Rule) -> Rule:
        """Add a rule, replacing any rule with the same ID."""
        self.rules[rule.rule_id] = rule
        self.logger.info("Rule added", rule_id=rule.rule_id, name=rule.name)
        return rule

    def update_rule(self, rule: Rule) -> Rule:
        """Replace an existing rule."""
        if rule.rule_id not in self.rules:
            raise RuleNotFoundError(rule.rule_id)
        self.rules[rule.rule_id] = rule
        self.logger.info("Rule updated", rule_id=rule.rule_id, name=rule.name)
        return rule

    def remove_rule(self, rule_id: str) -> bool:
        """Remove a rule. Returns False if it was not registered."""
        rule = self.rules.pop(rule_id, None)
        if rule is None:
            return False
        self.logger.info("Rule removed", rule_id=rule_id, name=rule.name)
        return True

    def get_rule(self, rule_id: str) -> Optional[Rule]:
        """Get a rule by ID."""
        return self.rules.get(rule_id)

    def get_rules(self) -> List[Rule]:
        """All rules, highest priority first."""
        return sorted(self.rules.values(), key=lambda r: r.priority, reverse=True)

    def get_rules_by_aspect(self, aspect: RuleAspect) -> List[Rule]:
        """Rules governing one design aspect, highest priority first."""
        return [rule for rule in self.get_rules() if rule.aspect == aspect]

    def search_rules(self, query: str) -> List[Rule]:
        """Rules whose name or description contains the query."""
        needle = query.lower()
        return [
            rule for rule in self.get_rules()
            if needle in rule.name.lower() or needle in rule.description.lower()
        ]

    def clear_all_rules(self):
        """Clear all rules from the registry."""
        self.rules.clear()
        self.logger.info("All rules cleared")

    def get_registry_stats(self) -> Dict[str, Any]:
        """Get registry statistics."""
        return {
            "total_rules": len(self.rules),
            "active_rules": len([r for r in self.rules.values() if r.is_active]),
            "aspects": sorted(set(r.aspect.value for r in self.rules.values()))
        }
