"""Intent Planner - rule-based instruction to Plan translation.

Creation picks one hard-coded skeleton by keyword. Mutation classifies the
instruction into exactly one operation bucket and edits a deep copy of the
previous plan. Both paths are pure: same input, byte-identical Plan.
"""

from collections.abc import Callable
from enum import Enum

from intentui.core import get_logger
from . import extract, skeletons
from .models import (
    ComponentNode,
    ComponentType,
    Plan,
    find_all,
    find_first,
    find_top_level_index,
    remove_all,
    remove_node,
)
from .skeletons import Templates


logger = get_logger(__name__)


class Operation(str, Enum):
    """Mutation buckets, in classification priority order."""

    ADD = "add"
    REMOVE = "remove"
    MODIFY = "modify"
    MOVE = "move"
    REPLACE = "replace"
    RENAME = "rename"


def classify(intent: str) -> Operation | None:
    """Pick the single mutation bucket for a lower-cased instruction."""
    match intent:
        case s if "add" in s:
            return Operation.ADD
        case s if "remove" in s or "delete" in s:
            return Operation.REMOVE
        case s if "change" in s or "modify" in s or "update" in s:
            return Operation.MODIFY
        case s if "move" in s:
            return Operation.MOVE
        case s if "replace" in s:
            return Operation.REPLACE
        case s if "rename" in s or "label" in s:
            return Operation.RENAME
        case _:
            return None


def _has(lowered: str, *words: str) -> bool:
    return any(word in lowered for word in words)


def _append_child(parent: ComponentNode, child: ComponentNode) -> None:
    parent.children.append(child)


# ============================================================================
# Operation handlers: (plan copy, original text, lower-cased text) -> log
# ============================================================================

def _handle_add(plan: Plan, text: str, lowered: str) -> list[str]:
    log: list[str] = []

    if _has(lowered, "button"):
        target = find_first(plan.components, ComponentType.CARD) or find_first(
            plan.components, ComponentType.NAVBAR
        )
        if target:
            button = Templates.button(extract.button_label(text) or "New Button")
            _append_child(target, button)
            log.append(f'Added button "{button.props["children"]}"')

    if _has(lowered, "input", "field"):
        card = find_first(plan.components, ComponentType.CARD)
        if card:
            field = Templates.input(
                extract.placeholder(text) or "Enter value",
                extract.label(text) or "New Field",
            )
            _append_child(card, field)
            log.append(f'Added input field "{field.props["label"]}"')

    if _has(lowered, "table"):
        table = Templates.table(["Column 1", "Column 2", "Column 3"])
        card = None if plan.layout == "dashboard" else find_first(plan.components, ComponentType.CARD)
        if card:
            _append_child(card, table)
        else:
            plan.components.append(table)
        log.append("Added table component")

    if _has(lowered, "chart", "graph"):
        chart = Templates.chart(extract.chart_type(text), extract.chart_title(text), data=[])
        plan.components.append(chart)
        log.append(f"Added {chart.props['type']} chart")

    if _has(lowered, "modal", "dialog"):
        plan.components.extend(skeletons.modal_dialog(extract.modal_title(text) or "Modal Dialog"))
        log.append("Added modal dialog with open button")

    return log


_REMOVE_FIRST = (
    (("button",), ComponentType.BUTTON, "Removed button"),
    (("table",), ComponentType.TABLE, "Removed table"),
    (("chart",), ComponentType.CHART, "Removed chart"),
)


def _handle_remove(plan: Plan, text: str, lowered: str) -> list[str]:
    log: list[str] = []

    for words, comp_type, message in _REMOVE_FIRST:
        if _has(lowered, *words):
            node = find_first(plan.components, comp_type)
            if node and remove_node(plan.components, node):
                log.append(message)

    if _has(lowered, "input", "field"):
        if remove_all(plan.components, ComponentType.INPUT):
            log.append("Removed input fields")

    if _has(lowered, "modal"):
        node = find_first(plan.components, ComponentType.MODAL)
        if node and remove_node(plan.components, node):
            log.append("Removed modal")

    if _has(lowered, "all", "everything"):
        plan.components = skeletons.empty_state()
        log.append("Reset to empty state")

    return log


def _handle_modify(plan: Plan, text: str, lowered: str) -> list[str]:
    log: list[str] = []

    if _has(lowered, "button"):
        buttons = find_all(plan.components, ComponentType.BUTTON)
        if buttons:
            label = extract.new_label(text)
            if label:
                for button in buttons:
                    button.props["children"] = label
                log.append(f'Changed button label to "{label}"')

            for variant in ("primary", "secondary", "outline"):
                if variant in lowered:
                    for button in buttons:
                        button.props["variant"] = variant
                    log.append(f"Changed button to {variant} variant")
                    break

    if _has(lowered, "title", "heading"):
        title = extract.new_title(text)
        if title:
            for comp_type, name in ((ComponentType.CARD, "card"), (ComponentType.NAVBAR, "navbar")):
                for node in find_all(plan.components, comp_type):
                    node.props["title"] = title
                    log.append(f'Changed {name} title to "{title}"')

    if _has(lowered, "table") and _has(lowered, "column"):
        columns = extract.table_columns(text)
        for table in find_all(plan.components, ComponentType.TABLE):
            table.props["columns"] = list(columns)
            log.append(f"Updated table columns: {', '.join(columns)}")

    if _has(lowered, "chart") and _has(lowered, "type"):
        chart_type = extract.chart_type(text)
        for chart in find_all(plan.components, ComponentType.CHART):
            chart.props["type"] = chart_type
            log.append(f"Changed chart type to {chart_type}")

    if _has(lowered, "placeholder"):
        placeholder = extract.new_placeholder(text)
        if placeholder:
            for field in find_all(plan.components, ComponentType.INPUT):
                field.props["placeholder"] = placeholder
                log.append(f'Updated input placeholder to "{placeholder}"')

    return log


_MOVE_TARGETS = (
    (("navbar", "header"), ComponentType.NAVBAR, "navbar"),
    (("sidebar",), ComponentType.SIDEBAR, "sidebar"),
    (("card",), ComponentType.CARD, "card"),
)


def _handle_move(plan: Plan, text: str, lowered: str) -> list[str]:
    if not _has(lowered, "button"):
        return []

    button = find_first(plan.components, ComponentType.BUTTON)
    if button is None:
        return []

    for words, comp_type, name in _MOVE_TARGETS:
        if _has(lowered, *words):
            target = find_first(plan.components, comp_type)
            if target is None:
                return []
            remove_node(plan.components, button)
            _append_child(target, button)
            return [f"Moved button to {name}"]

    return []


def _handle_replace(plan: Plan, text: str, lowered: str) -> list[str]:
    if not (_has(lowered, "table") and _has(lowered, "chart")):
        return []

    # The word mentioned first is the one being replaced
    if lowered.index("table") < lowered.index("chart"):
        old_type, new_node, message = ComponentType.TABLE, skeletons.replacement_chart(), "Replaced table with chart"
    else:
        old_type, new_node, message = ComponentType.CHART, skeletons.replacement_table(), "Replaced chart with table"

    index = find_top_level_index(plan.components, old_type)
    if index == -1:
        return []
    plan.components[index] = new_node
    return [message]


def _handle_rename(plan: Plan, text: str, lowered: str) -> list[str]:
    name = extract.new_name(text)
    if not name:
        return []

    log: list[str] = []

    if _has(lowered, "button"):
        buttons = find_all(plan.components, ComponentType.BUTTON)
        for button in buttons:
            button.props["children"] = name
        if buttons:
            log.append(f'Renamed button to "{name}"')

    if _has(lowered, "title"):
        titled = find_all(plan.components, ComponentType.CARD) + find_all(plan.components, ComponentType.NAVBAR)
        for node in titled:
            node.props["title"] = name
        if titled:
            log.append(f'Renamed title to "{name}"')

    if _has(lowered, "label", "field"):
        fields = find_all(plan.components, ComponentType.INPUT)
        for field in fields:
            field.props["label"] = name
        if fields:
            log.append(f'Renamed field label to "{name}"')

    return log


HANDLERS: dict[Operation, Callable[[Plan, str, str], list[str]]] = {
    Operation.ADD: _handle_add,
    Operation.REMOVE: _handle_remove,
    Operation.MODIFY: _handle_modify,
    Operation.MOVE: _handle_move,
    Operation.REPLACE: _handle_replace,
    Operation.RENAME: _handle_rename,
}


class IntentPlanner:
    """Turns free text into a Plan, optionally mutating a previous one."""

    def plan(self, intent: str, previous_plan: Plan | None = None) -> Plan:
        """
        Plan a UI from an instruction.

        Args:
            intent: Free-text instruction
            previous_plan: Plan to mutate; None creates a fresh plan

        Returns:
            New Plan (the previous plan is never modified)
        """
        if previous_plan is None:
            return self.create(intent)
        return self.modify(intent, previous_plan)

    def create(self, intent: str) -> Plan:
        """Select one skeleton by keyword priority."""
        lowered = intent.lower()

        layout, factory = skeletons.DEFAULT_RULE
        for keywords, rule_layout, rule_factory in skeletons.CREATION_RULES:
            if _has(lowered, *keywords):
                layout, factory = rule_layout, rule_factory
                break

        plan = Plan(layout=layout, components=factory(), modifications=[])
        logger.info("plan_created", layout=layout, components=len(plan.components))
        return plan

    def modify(self, intent: str, previous_plan: Plan) -> Plan:
        """Apply the single matching operation bucket to a copy of the plan."""
        plan = previous_plan.model_copy(deep=True)
        plan.modifications = []

        operation = classify(intent.lower())
        if operation is None:
            logger.info("plan_unchanged", reason="no_operation")
            return plan

        plan.modifications = HANDLERS[operation](plan, intent, intent.lower())
        logger.info("plan_modified", operation=operation.value, modifications=len(plan.modifications))
        return plan


def plan(intent: str, previous_plan: Plan | None = None) -> Plan:
    """Functional entry point; a planner is cheap and stateless."""
    return IntentPlanner().plan(intent, previous_plan)
