"""
Test helper functions and factory methods for the Standards services.
"""

from typing import Dict, Any, List


class StandardsDataFactory:
    """Factory for creating test data."""

    @staticmethod
    def create_rule_record(**overrides: Any) -> Dict[str, Any]:
        """A well-formed rule record; keyword arguments replace fields."""
        record = {
            "rule_id": "rule-display-size",
            "name": "Teams display size",
            "description": "Teams rooms need a display of at least 75 inches",
            "aspect": "equipment_selection",
            "expression_type": "constraint",
            "conditions": [
                {"dimension": "platform", "operator": "equals", "value": "teams"}
            ],
            "expression": "display.size >= 75",
            "priority": 80,
            "is_active": True,
        }
        record.update(overrides)
        return record

    @staticmethod
    def create_rule_records() -> List[Dict[str, Any]]:
        """A small standard covering each severity band."""
        return [
            StandardsDataFactory.create_rule_record(),
            StandardsDataFactory.create_rule_record(
                rule_id="rule-camera-count",
                name="Camera count",
                description="Large rooms should have two cameras",
                aspect="quantities",
                conditions=[
                    {"dimension": "room_type", "operator": "equals", "value": "large_conference"}
                ],
                expression="camera.count >= 2",
                priority=60,
            ),
            StandardsDataFactory.create_rule_record(
                rule_id="rule-premium-cabling",
                name="Premium cabling",
                description="Premium tier rooms should use plenum cable",
                aspect="cabling",
                conditions=[
                    {"dimension": "tier", "operator": "in", "value": ["premium", "executive"]}
                ],
                expression='cabling.jacket == "plenum"',
                priority=20,
            ),
        ]

    @staticmethod
    def create_design_context(**overrides: Any) -> Dict[str, Any]:
        """A design context that satisfies every rule in create_rule_records."""
        context = {
            "platform": "teams",
            "roomType": "large_conference",
            "qualityTier": "premium",
            "ecosystem": ["poly", "logitech"],
            "display": {"size": 85, "count": 2},
            "camera": {"count": 2},
            "cabling": {"jacket": "plenum"},
        }
        context.update(overrides)
        return context
