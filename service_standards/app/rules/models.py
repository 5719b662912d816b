"""
Rule data models for the Standards Service.
"""

from typing import Dict, Any, Optional, List, Union, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class RuleDimension(str, Enum):
    """Design dimensions a rule condition can test."""
    ROOM_TYPE = "room_type"
    PLATFORM = "platform"
    ECOSYSTEM = "ecosystem"
    TIER = "tier"
    USE_CASE = "use_case"
    CLIENT = "client"


class RuleConditionOperator(str, Enum):
    """Rule condition operators."""
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    IN = "in"


class RuleAspect(str, Enum):
    """Aspects of an AV design a rule governs."""
    EQUIPMENT_SELECTION = "equipment_selection"
    QUANTITIES = "quantities"
    PLACEMENT = "placement"
    CONFIGURATION = "configuration"
    CABLING = "cabling"
    COMMERCIAL = "commercial"


class RuleExpressionType(str, Enum):
    """Authoring category of a rule expression."""
    CONSTRAINT = "constraint"
    FORMULA = "formula"
    CONDITIONAL = "conditional"
    RANGE_MATCH = "range_match"
    PATTERN = "pattern"


class IssueSeverity(str, Enum):
    """Severity of a validation issue."""
    ERROR = "error"
    WARNING = "warning"
    SUGGESTION = "suggestion"


# Conflict-resolution weight per dimension; higher wins.
DIMENSION_PRIORITY: Dict[RuleDimension, int] = {
    RuleDimension.ROOM_TYPE: 1,
    RuleDimension.USE_CASE: 2,
    RuleDimension.TIER: 3,
    RuleDimension.ECOSYSTEM: 4,
    RuleDimension.PLATFORM: 5,
    RuleDimension.CLIENT: 6,
}

ConditionValue = Union[str, int, float, List[Union[str, int, float]]]

# Design snapshot under evaluation. Treated as read-only.
Context = Mapping[str, Any]


class _Missing:
    """Marker for a value absent from the context."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def is_number(value: Any) -> bool:
    """True for ints and floats; booleans do not count."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def strict_equals(left: Any, right: Any) -> bool:
    """Type-sensitive equality: 1 never equals "1" and True never equals 1."""
    if is_number(left) and is_number(right):
        return left == right
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    # Containers and mixed types compare by identity only
    return left is right


@dataclass(frozen=True)
class RuleCondition:
    """One dimension/operator/value predicate."""
    dimension: RuleDimension
    operator: RuleConditionOperator
    value: ConditionValue


@dataclass
class Rule:
    """Standards compliance rule."""
    rule_id: str
    name: str
    description: str = ""
    aspect: RuleAspect = RuleAspect.EQUIPMENT_SELECTION
    expression_type: RuleExpressionType = RuleExpressionType.CONSTRAINT
    conditions: List[RuleCondition] = field(default_factory=list)
    expression: str = ""
    priority: int = 0
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)


@dataclass
class RuleEvaluationResult:
    """Result of evaluating one rule against a context."""
    applies: bool
    passed: bool
    message: Optional[str] = None


@dataclass
class ValidationIssue:
    """A single failing rule found during validation."""
    rule_id: str
    rule_name: str
    message: str
    severity: IssueSeverity
    equipment_id: Optional[str] = None
    field: Optional[str] = None
    suggested_fix: Optional[str] = None


@dataclass
class ValidationResult:
    """Aggregate report of a design validation."""
    is_valid: bool
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)
    suggestions: List[ValidationIssue] = field(default_factory=list)


class RuleConditionModel(BaseModel):
    """Wire shape of a rule condition."""
    dimension: str = Field(..., description="Design dimension")
    operator: str = Field(..., description="Condition operator")
    value: Any = Field(None, description="Value compared against the context")


class RuleCreateRequest(BaseModel):
    """Request model for creating a rule."""
    rule_id: Optional[str] = Field(None, description="Rule ID, generated when omitted")
    name: str = Field(..., description="Rule name")
    description: str = Field("", description="Rule description")
    aspect: str = Field(..., description="Design aspect governed by the rule")
    expression_type: str = Field(RuleExpressionType.CONSTRAINT.value, description="Expression category")
    conditions: List[RuleConditionModel] = Field(default_factory=list, description="Rule conditions")
    expression: str = Field(..., description="Comparison evaluated when all conditions hold")
    priority: int = Field(0, description="Rule priority (0-100)")
    is_active: bool = Field(True, description="Whether the rule is active")


class RuleUpdateRequest(BaseModel):
    """Request model for updating a rule."""
    name: Optional[str] = Field(None, description="Rule name")
    description: Optional[str] = Field(None, description="Rule description")
    aspect: Optional[str] = Field(None, description="Design aspect governed by the rule")
    expression_type: Optional[str] = Field(None, description="Expression category")
    conditions: Optional[List[RuleConditionModel]] = Field(None, description="Rule conditions")
    expression: Optional[str] = Field(None, description="Comparison evaluated when all conditions hold")
    priority: Optional[int] = Field(None, description="Rule priority (0-100)")
    is_active: Optional[bool] = Field(None, description="Whether the rule is active")


class RuleResponse(BaseModel):
    """Response model for rule operations."""
    rule_id: str
    name: str
    description: str
    aspect: RuleAspect
    expression_type: RuleExpressionType
    conditions: List[RuleConditionModel]
    expression: str
    priority: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class RuleListResponse(BaseModel):
    """Response model for rule list."""
    rules: List[RuleResponse]
    total: int
    page: int
    limit: int


class ValidateDesignRequest(BaseModel):
    """Request model for validating a design."""
    context: Dict[str, Any] = Field(default_factory=dict, description="Design context")
    rule_ids: Optional[List[str]] = Field(None, description="Restrict validation to these rules")


class ValidationIssueModel(BaseModel):
    """Wire shape of a validation issue."""
    rule_id: str
    rule_name: str
    message: str
    severity: IssueSeverity
    equipment_id: Optional[str] = None
    field: Optional[str] = None
    suggested_fix: Optional[str] = None


class ValidationResponse(BaseModel):
    """Response model for a design validation."""
    is_valid: bool
    errors: List[ValidationIssueModel] = Field(default_factory=list)
    warnings: List[ValidationIssueModel] = Field(default_factory=list)
    suggestions: List[ValidationIssueModel] = Field(default_factory=list)
    rules_evaluated: int = 0
