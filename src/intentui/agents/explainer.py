"""Explanation Synthesizer - bounded natural-language summary of a plan."""

from intentui.core import ExplanationError, get_logger, get_settings
from .models import ComponentNode, ComponentType, Plan, display_text, walk


logger = get_logger(__name__)


INCREMENTAL_BENEFITS = (
    "**Incremental Update Benefits**: Instead of regenerating the entire interface, "
    "I only modified the specific elements you requested. This preserves your existing "
    "layout and other components while making precise changes where needed."
)

RATIONALE: dict[ComponentType, str] = {
    ComponentType.NAVBAR: "The Navbar provides persistent navigation and branding.",
    ComponentType.SIDEBAR: "Sidebar offers additional navigation options and contextual filters.",
    ComponentType.CARD: "Cards organize related content into digestible containers.",
    ComponentType.BUTTON: "Buttons trigger actions and provide clear user affordances.",
    ComponentType.INPUT: "Input fields capture user data with proper validation and labeling.",
    ComponentType.TABLE: "Tables present structured data for efficient scanning and comparison.",
    ComponentType.MODAL: "Modals focus user attention on critical tasks or confirmations.",
    ComponentType.CHART: "Charts visualize data patterns for quick insights.",
}

LAYOUT_RATIONALE: dict[str, str] = {
    "dashboard": (
        "A dashboard layout provides at-a-glance views of key metrics and data. "
        "It's ideal for monitoring and analysis tasks."
    ),
    "form": (
        "A form layout guides users through data entry with clear field labels, "
        "input validation, and submission controls."
    ),
    "modal-view": (
        "Modal-based layouts focus user attention on specific tasks without losing "
        "context of the underlying page."
    ),
}
DEFAULT_LAYOUT_RATIONALE = "This standard application layout provides clear navigation and content organization."

ACCESSIBILITY = (
    "**Accessibility & Determinism**: All components are pre-built with WCAG-compliant "
    "contrast ratios, keyboard navigation, and screen reader support. The exact same input "
    "will always produce identical output."
)


def describe_hierarchy(components: list[ComponentNode], depth: int = 0) -> list[str]:
    """One bullet line per node, indented two spaces per depth."""
    lines = []
    for comp in components:
        line = f"{'  ' * depth}• {comp.type.value}"
        text = display_text(comp)
        if text:
            line += f': "{text}"'
        lines.append(line)
        lines.extend(describe_hierarchy(comp.children, depth + 1))
    return lines


def describe_rationale(components: list[ComponentNode]) -> str:
    """Rationale sentences for each distinct type, in order of first appearance."""
    seen: list[ComponentType] = []
    for comp in walk(components):
        if comp.type not in seen:
            seen.append(comp.type)
    return " ".join(RATIONALE[t] for t in seen)


def validate_explanation(explanation: str, max_words: int) -> None:
    """
    Enforce the length and content rules.

    Raises:
        ExplanationError: On any violation; the text is never truncated
    """
    word_count = len(explanation.split())
    if word_count > max_words:
        raise ExplanationError(f"Explanation exceeds {max_words} words ({word_count})")

    if "```" in explanation:
        raise ExplanationError("Explanation contains a code fence")

    if "<" in explanation and ">" in explanation:
        raise ExplanationError("Explanation contains markup")


class Explainer:
    """Builds the summary shown next to generated code."""

    def __init__(self, max_words: int | None = None) -> None:
        self.max_words = max_words or get_settings().max_explanation_words

    def explain(self, intent: str, plan: Plan, modifications: list[str] | None = None) -> str:
        """
        Explain a plan.

        Args:
            intent: Instruction that produced the plan
            plan: Current plan
            modifications: Operations performed; empty for fresh generation

        Returns:
            Explanation text

        Raises:
            ExplanationError: If the result breaks the length or content rules
        """
        modifications = modifications or []
        is_modification = bool(modifications)

        parts = [f'Based on your request to "{intent}", ']

        if is_modification:
            steps = "\n".join(f"{i}. {mod}" for i, mod in enumerate(modifications, start=1))
            parts[0] += "I've made the following targeted changes to your existing UI:"
            parts.append(steps)
            parts.append(INCREMENTAL_BENEFITS)
        else:
            parts[0] += f"I've created a {plan.layout} layout that best suits your needs."

        hierarchy = describe_hierarchy(plan.components)
        parts.append("**Current Layout Structure**:" + ("\n" + "\n".join(hierarchy) if hierarchy else " empty"))

        rationale = describe_rationale(plan.components)
        if rationale:
            parts.append(f"**Component Rationale**: {rationale}")

        if not is_modification:
            parts.append(f"**Why This Layout**: {LAYOUT_RATIONALE.get(plan.layout, DEFAULT_LAYOUT_RATIONALE)}")

        parts.append(ACCESSIBILITY)

        explanation = "\n\n".join(parts)
        validate_explanation(explanation, self.max_words)

        logger.debug("explanation_ready", words=len(explanation.split()))
        return explanation


def explain(intent: str, plan: Plan, modifications: list[str] | None = None) -> str:
    """Functional entry point."""
    return Explainer().explain(intent, plan, modifications)
