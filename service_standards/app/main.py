"""
Standards service: validates AV room designs against standards rules.
"""

import uuid
from datetime import datetime
from typing import Optional, List

from fastapi import Query

from shared.base_service import BaseService
from shared.errors import StandardsException, ValidationError, RuleNotFoundError, ServiceError

from .registry import RuleRegistry
from .rules.engine import RuleEngine
from .rules.models import (
    Rule, RuleAspect, ValidationResult, ValidationIssue,
    RuleCreateRequest, RuleUpdateRequest, RuleResponse, RuleListResponse,
    RuleConditionModel, ValidateDesignRequest, ValidationResponse, ValidationIssueModel
)
from .rules.validation import rule_from_dict, rule_to_dict


def _rule_response(rule: Rule) -> RuleResponse:
    return RuleResponse(
        rule_id=rule.rule_id,
        name=rule.name,
        description=rule.description,
        aspect=rule.aspect,
        expression_type=rule.expression_type,
        conditions=[
            RuleConditionModel(
                dimension=c.dimension.value,
                operator=c.operator.value,
                value=c.value
            )
            for c in rule.conditions
        ],
        expression=rule.expression,
        priority=rule.priority,
        is_active=rule.is_active,
        created_at=rule.created_at,
        updated_at=rule.updated_at
    )


def _issue_models(issues: List[ValidationIssue]) -> List[ValidationIssueModel]:
    return [
        ValidationIssueModel(
            rule_id=issue.rule_id,
            rule_name=issue.rule_name,
            message=issue.message,
            severity=issue.severity,
            equipment_id=issue.equipment_id,
            field=issue.field,
            suggested_fix=issue.suggested_fix
        )
        for issue in issues
    ]


def _validation_response(result: ValidationResult, rules_evaluated: int) -> ValidationResponse:
    return ValidationResponse(
        is_valid=result.is_valid,
        errors=_issue_models(result.errors),
        warnings=_issue_models(result.warnings),
        suggestions=_issue_models(result.suggestions),
        rules_evaluated=rules_evaluated
    )


class StandardsService(BaseService):
    """Standards service implementation."""

    def __init__(self):
        super().__init__("standards", 8013)

        self.rule_engine = RuleEngine()
        self.registry = RuleRegistry()

        self._setup_standards_routes()

    def _setup_standards_routes(self):
        """Set up standards-specific routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": "standards",
                "message": "AV Standards - Standards Service",
                "version": "1.0.0",
                "capabilities": ["rule_engine", "design_validation", "rule_registry"]
            }

        @self.app.post("/standards/validate", response_model=ValidationResponse)
        async def validate_design(request: ValidateDesignRequest):
            """Validate a design context against registered rules."""
            if request.rule_ids is None:
                rules = self.registry.get_rules()
            else:
                rules = []
                for rule_id in request.rule_ids:
                    rule = self.registry.get_rule(rule_id)
                    if rule is None:
                        raise RuleNotFoundError(rule_id)
                    rules.append(rule)

            try:
                with self.metrics.time_operation("design_validation_duration_seconds"):
                    result = self.rule_engine.validate_design(rules, request.context)
            except StandardsException:
                raise
            except Exception as e:
                self.logger.error("Error validating design", error=str(e))
                raise ServiceError("Design validation failed")

            self.metrics.record_validation(result.is_valid, {
                "error": len(result.errors),
                "warning": len(result.warnings),
                "suggestion": len(result.suggestions)
            })
            self.logger.info(
                "Design validated",
                is_valid=result.is_valid,
                rules=len(rules),
                errors=len(result.errors),
                warnings=len(result.warnings),
                suggestions=len(result.suggestions)
            )

            return _validation_response(result, len(rules))

        @self.app.get("/standards/rules", response_model=RuleListResponse)
        async def get_rules(
            aspect: Optional[str] = Query(None, description="Filter by design aspect"),
            q: Optional[str] = Query(None, description="Search name and description"),
            page: int = Query(1, ge=1, description="Page number"),
            limit: int = Query(self.config.default_page_size, ge=1, le=self.config.max_page_size,
                               description="Items per page")
        ):
            """Get rules with optional filtering."""
            if aspect:
                try:
                    rules = self.registry.get_rules_by_aspect(RuleAspect(aspect))
                except ValueError:
                    raise ValidationError(f"Unknown aspect: {aspect}")
            else:
                rules = self.registry.get_rules()

            if q:
                matched = {rule.rule_id for rule in self.registry.search_rules(q)}
                rules = [rule for rule in rules if rule.rule_id in matched]

            total = len(rules)
            start_idx = (page - 1) * limit
            paginated_rules = rules[start_idx:start_idx + limit]

            return RuleListResponse(
                rules=[_rule_response(rule) for rule in paginated_rules],
                total=total,
                page=page,
                limit=limit
            )

        @self.app.post("/standards/rules", response_model=RuleResponse)
        async def create_rule(request: RuleCreateRequest):
            """Create a new rule."""
            data = request.model_dump()
            data["rule_id"] = request.rule_id or str(uuid.uuid4())

            if self.registry.get_rule(data["rule_id"]) is not None:
                raise ValidationError(
                    "Rule already exists",
                    details={"rule_id": data["rule_id"]}
                )

            rule = self.registry.add_rule(rule_from_dict(data))
            return _rule_response(rule)

        @self.app.get("/standards/rules/{rule_id}", response_model=RuleResponse)
        async def get_rule(rule_id: str):
            """Get a rule by ID."""
            rule = self.registry.get_rule(rule_id)
            if rule is None:
                raise RuleNotFoundError(rule_id)
            return _rule_response(rule)

        @self.app.put("/standards/rules/{rule_id}", response_model=RuleResponse)
        async def update_rule(rule_id: str, request: RuleUpdateRequest):
            """Update an existing rule."""
            existing_rule = self.registry.get_rule(rule_id)
            if existing_rule is None:
                raise RuleNotFoundError(rule_id)

            data = rule_to_dict(existing_rule)
            data.update(request.model_dump(exclude_none=True))
            data["updated_at"] = datetime.now()

            rule = self.registry.update_rule(rule_from_dict(data))
            return _rule_response(rule)

        @self.app.delete("/standards/rules/{rule_id}")
        async def delete_rule(rule_id: str):
            """Delete a rule."""
            if not self.registry.remove_rule(rule_id):
                raise RuleNotFoundError(rule_id)
            return {"success": True, "message": "Rule deleted successfully"}

        @self.app.get("/standards/stats")
        async def get_stats():
            """Get standards service statistics."""
            return {
                "registry": self.registry.get_registry_stats(),
                "timestamp": datetime.now().isoformat()
            }

    async def _check_dependencies(self):
        """The registry is in-process; nothing external to check."""
        return {"registry": "ok"}


def create_app():
    """Create standards service application."""
    service = StandardsService()
    return service.app


if __name__ == "__main__":
    service = StandardsService()
    service.run()
