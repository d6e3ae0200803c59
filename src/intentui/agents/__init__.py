"""Planning, validation and explanation agents."""

from .models import ComponentNode, ComponentType, Plan, ALLOWED_COMPONENTS
from .planner import IntentPlanner, Operation, classify, plan
from .validator import PlanValidator, PlanValidationError, validate_plan
from .explainer import Explainer, explain

__all__ = [
    "ComponentNode",
    "ComponentType",
    "Plan",
    "ALLOWED_COMPONENTS",
    "IntentPlanner",
    "Operation",
    "classify",
    "plan",
    "PlanValidator",
    "PlanValidationError",
    "validate_plan",
    "Explainer",
    "explain",
]
