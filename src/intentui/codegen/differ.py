"""Tree Differ - patch operations between a parsed forest and a new Plan.

Nodes carry no stable id, so "the same" element is recognized by content: equal
type plus one equal, non-empty identity prop. Identity-free nodes fall back to
ordinal matching within their type. Two siblings sharing an identity value
are indistinguishable; the first unused candidate wins.
"""

import re
from typing import Any

from intentui.core import PatchStrategy, get_logger, get_settings
from intentui.agents import skeletons
from intentui.agents.models import ComponentNode, ComponentType, Plan
from intentui.agents.skeletons import Templates
from .operations import (
    AddComponent,
    ChangeKind,
    PatchOperation,
    PropChange,
    RemoveComponent,
    ReplaceComponent,
    UpdateChildren,
    UpdateProps,
    insert_position_for,
)


logger = get_logger(__name__)

IDENTITY_KEYS = ("title", "label", "placeholder", "children")

ADDED_BUTTON = re.compile(r'Added button "([^"]+)"')
ADDED_INPUT = re.compile(r'Added input field "([^"]+)"')
CHANGED_LABEL = re.compile(r'Changed button label to "([^"]+)"')


def identity(node: ComponentNode) -> dict[str, str]:
    """Identity-carrying props that are non-empty strings."""
    return {key: value for key in IDENTITY_KEYS if isinstance(value := node.props.get(key), str) and value}


def normalize_props(props: dict[str, Any]) -> dict[str, Any]:
    """Drop ``False`` values, which never reach compiled text."""
    return {key: value for key, value in props.items() if value is not False}


def shape(node: ComponentNode) -> dict[str, Any]:
    """Structural form used to compare children."""
    return {
        "type": node.type,
        "props": normalize_props(node.props),
        "children": [shape(child) for child in node.children],
    }


def _same_identity(new: dict[str, str], old: dict[str, str]) -> bool:
    return any(old.get(key) == value for key, value in new.items())


def find_match(node: ComponentNode, candidates: list[ComponentNode], used: set[int]) -> int:
    """
    Index of the parsed node matching ``node``, or -1.

    Args:
        node: Root of the new plan
        candidates: Parsed roots
        used: Indices already matched; each parsed node matches at most once
    """
    wanted = identity(node)
    for i, candidate in enumerate(candidates):
        if i in used or candidate.type != node.type:
            continue
        have = identity(candidate)
        if wanted and _same_identity(wanted, have):
            return i
        if not wanted and not have:
            return i
    return -1


def prop_changes(old: dict[str, Any], new: dict[str, Any]) -> list[PropChange]:
    """Set changes for added or changed keys, then remove changes for dropped keys."""
    old, new = normalize_props(old), normalize_props(new)
    changes = [
        PropChange(kind=ChangeKind.SET, key=key, value=value)
        for key, value in new.items()
        if key not in old or old[key] != value
    ]
    changes.extend(PropChange(kind=ChangeKind.REMOVE, key=key) for key in old if key not in new)
    return changes


def heuristic_operations(forest: list[ComponentNode], plan: Plan) -> list[PatchOperation]:
    """Top-level structural comparison of the parsed forest against the plan."""
    ops: list[PatchOperation] = []
    used: set[int] = set()

    for node in plan.components:
        index = find_match(node, forest, used)
        if index == -1:
            ops.append(AddComponent(component=node, position=insert_position_for(node)))
            continue

        used.add(index)
        old = forest[index]

        # Children first: the props rewrite changes the opening tag used to locate the node
        if [shape(c) for c in old.children] != [shape(c) for c in node.children]:
            ops.append(UpdateChildren(component=old, children=node.children))

        changes = prop_changes(old.props, node.props)
        if changes:
            ops.append(UpdateProps(component=old, changes=changes))

    ops.extend(RemoveComponent(component=old) for i, old in enumerate(forest) if i not in used)
    return ops


def map_modification(entry: str) -> PatchOperation | None:
    """Explicit operation for one modification log entry, if it has one."""
    if match := ADDED_BUTTON.search(entry):
        button = Templates.button(match.group(1))
        return AddComponent(component=button, position=insert_position_for(button))

    if match := ADDED_INPUT.search(entry):
        name = match.group(1)
        field = Templates.input(f"Enter {name}", name)
        return AddComponent(component=field, position=insert_position_for(field))

    if match := CHANGED_LABEL.search(entry):
        return UpdateProps(
            component=ComponentNode(type=ComponentType.BUTTON),
            changes=[PropChange(kind=ChangeKind.SET, key="children", value=match.group(1))],
        )

    if "Removed button" in entry:
        return RemoveComponent(component=ComponentNode(type=ComponentType.BUTTON))

    if "Replaced table with chart" in entry:
        return ReplaceComponent(
            old_component=ComponentNode(type=ComponentType.TABLE),
            new_component=skeletons.replacement_chart(),
        )

    if "Replaced chart with table" in entry:
        return ReplaceComponent(
            old_component=ComponentNode(type=ComponentType.CHART),
            new_component=skeletons.replacement_table(),
        )

    return None


def explicit_operations(modifications: list[str]) -> list[PatchOperation]:
    return [op for entry in modifications if (op := map_modification(entry)) is not None]


class TreeDiffer:
    """Produces the patch operations that move old text towards a new plan."""

    def __init__(self, strategy: PatchStrategy | None = None) -> None:
        self.strategy = strategy or get_settings().patch_strategy

    def diff(self, forest: list[ComponentNode], plan: Plan) -> list[PatchOperation]:
        """
        Diff a parsed forest against a plan.

        Args:
            forest: Components recovered from the previous text
            plan: New plan

        Returns:
            Ordered operations. ``combined`` returns heuristic then explicit
            operations without deduplication; ``explicit_preferred`` returns
            the explicit ones alone whenever the log maps to any.
        """
        heuristic = heuristic_operations(forest, plan)
        explicit = explicit_operations(plan.modifications)

        if self.strategy == PatchStrategy.EXPLICIT_PREFERRED:
            ops = explicit or heuristic
        else:
            ops = heuristic + explicit

        logger.debug(
            "diff_computed",
            strategy=self.strategy.value,
            heuristic=len(heuristic),
            explicit=len(explicit),
            total=len(ops),
        )
        return ops


def diff(forest: list[ComponentNode], plan: Plan, strategy: PatchStrategy | None = None) -> list[PatchOperation]:
    """Functional entry point."""
    return TreeDiffer(strategy).diff(forest, plan)
