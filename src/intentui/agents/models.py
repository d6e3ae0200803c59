"""UI Data Models."""

from collections.abc import Iterator
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ComponentType(str, Enum):
    """Closed component vocabulary. Values double as tag names in compiled code."""

    BUTTON = "Button"
    CARD = "Card"
    INPUT = "Input"
    TABLE = "Table"
    MODAL = "Modal"
    SIDEBAR = "Sidebar"
    NAVBAR = "Navbar"
    CHART = "Chart"


ALLOWED_COMPONENTS: tuple[str, ...] = tuple(t.value for t in ComponentType)


class ComponentNode(BaseModel):
    """One UI element."""

    type: ComponentType = Field(..., description="Component type")
    props: dict[str, Any] = Field(default_factory=dict)
    children: list["ComponentNode"] = Field(default_factory=list)


class Plan(BaseModel):
    """Layout tag, component forest and the modification log."""

    layout: str = Field(default="default")
    components: list[ComponentNode] = Field(default_factory=list)
    modifications: list[str] = Field(default_factory=list)


ComponentNode.model_rebuild()


def walk(components: list[ComponentNode]) -> Iterator[ComponentNode]:
    """Pre-order traversal of a forest."""
    for comp in components:
        yield comp
        yield from walk(comp.children)


def find_first(components: list[ComponentNode], type: ComponentType) -> ComponentNode | None:
    """First node of ``type`` in pre-order, or None."""
    return next((comp for comp in walk(components) if comp.type == type), None)


def find_all(components: list[ComponentNode], type: ComponentType) -> list[ComponentNode]:
    """All nodes of ``type`` in pre-order."""
    return [comp for comp in walk(components) if comp.type == type]


def find_top_level_index(components: list[ComponentNode], type: ComponentType) -> int:
    """Index of the first root of ``type``, or -1."""
    for i, comp in enumerate(components):
        if comp.type == type:
            return i
    return -1


def remove_node(components: list[ComponentNode], target: ComponentNode) -> bool:
    """Remove ``target`` (by identity) from anywhere in the forest."""
    for i, comp in enumerate(components):
        if comp is target:
            del components[i]
            return True
        if remove_node(comp.children, target):
            return True
    return False


def remove_all(components: list[ComponentNode], type: ComponentType) -> int:
    """Remove every node of ``type`` recursively. Returns the number removed."""
    removed = 0
    for i in range(len(components) - 1, -1, -1):
        if components[i].type == type:
            del components[i]
            removed += 1
        else:
            removed += remove_all(components[i].children, type)
    return removed


def display_text(node: ComponentNode) -> str | None:
    """First available of title, label or textual children."""
    for key in ("title", "label", "children"):
        value = node.props.get(key)
        if isinstance(value, str) and value:
            return value
    return None
