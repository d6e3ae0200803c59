"""Plan validation against the component whitelist."""

from typing import Any

import pydantic
from returns.result import Failure, Result, Success

from intentui.core import ValidationError, ValidationResult, get_logger, validate_json_depth
from .models import ALLOWED_COMPONENTS, Plan


logger = get_logger(__name__)

FORBIDDEN_PROPS = ("style", "styles")


class PlanValidationError(ValidationError):
    """Plan failed the whitelist or structure check."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(f"{message} (at {path})" if path else message)


def _iter_violations(data: Any) -> list[ValidationResult]:
    """Check a plan-shaped mapping, returning every violation in document order."""
    violations: list[ValidationResult] = []

    if not isinstance(data, dict):
        return [ValidationResult("Invalid plan: expected an object")]

    layout = data.get("layout")
    if not isinstance(layout, str) or not layout.strip():
        violations.append(ValidationResult("Invalid plan: missing layout", field="layout", value=layout))

    components = data.get("components")
    if not isinstance(components, list):
        violations.append(
            ValidationResult("Invalid plan: components must be a list", field="components")
        )
        return violations

    def visit(comp: Any, path: str) -> None:
        if not isinstance(comp, dict):
            violations.append(ValidationResult("Component must be an object", field=path))
            return

        comp_type = comp.get("type")
        if comp_type not in ALLOWED_COMPONENTS:
            violations.append(
                ValidationResult(
                    f"Invalid component type: {comp_type}. Allowed: {', '.join(ALLOWED_COMPONENTS)}",
                    field=path,
                    value=comp_type,
                )
            )

        props = comp.get("props") or {}
        if not isinstance(props, dict):
            violations.append(ValidationResult("Component props must be an object", field=f"{path}.props"))
        else:
            for key in FORBIDDEN_PROPS:
                if key in props:
                    violations.append(
                        ValidationResult("Inline styles are not allowed", field=f"{path}.props.{key}")
                    )
            try:
                validate_json_depth(props)
            except ValidationError as e:
                violations.append(ValidationResult(str(e), field=f"{path}.props"))

        children = comp.get("children") or []
        if not isinstance(children, list):
            violations.append(ValidationResult("Component children must be a list", field=f"{path}.children"))
            return
        for index, child in enumerate(children):
            visit(child, f"{path}.children[{index}]")

    for index, comp in enumerate(components):
        visit(comp, f"components[{index}]")

    return violations


class PlanValidator:
    """Validates plans before any code is produced."""

    @staticmethod
    def validate(plan: Plan) -> Plan:
        """
        Validate a plan, fail-fast.

        Args:
            plan: Plan to check

        Returns:
            The same plan

        Raises:
            PlanValidationError: On the first violation found
        """
        PlanValidator.check(plan.model_dump(mode="json"))
        return plan

    @staticmethod
    def check(data: dict[str, Any]) -> None:
        """Fail-fast check of a plan-shaped mapping."""
        violations = _iter_violations(data)
        if violations:
            first = violations[0]
            logger.warning("plan_rejected", error=first.message, path=first.field)
            raise PlanValidationError(first.message, first.field)

    @staticmethod
    def parse(data: dict[str, Any]) -> Plan:
        """
        Build a plan from raw JSON-like data (e.g. a persisted record).

        Raises:
            PlanValidationError: If the data breaks a whitelist rule or the schema
        """
        PlanValidator.check(data)
        try:
            return Plan.model_validate(data)
        except pydantic.ValidationError as e:
            raise PlanValidationError(f"Invalid plan: {e.errors()[0]['msg']}") from e


def validate_plan(data: dict[str, Any]) -> Result[Plan, list[ValidationResult]]:
    """
    Validate plan data collecting every violation (Result pattern version).

    Args:
        data: Plan-shaped mapping

    Returns:
        Success with the parsed plan, or Failure with all violations
    """
    violations = _iter_violations(data)
    if violations:
        return Failure(violations)
    try:
        return Success(Plan.model_validate(data))
    except pydantic.ValidationError as e:
        return Failure([ValidationResult(err["msg"], field=".".join(map(str, err["loc"]))) for err in e.errors()])
