"""Patch operations exchanged between the differ and the patcher."""

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

from intentui.agents.models import ComponentNode, ComponentType


class OperationKind(str, Enum):
    """Patch operation tags."""

    ADD = "add_component"
    REMOVE = "remove_component"
    UPDATE_PROPS = "update_props"
    UPDATE_CHILDREN = "update_children"
    MOVE = "move_component"
    REPLACE = "replace_component"


class InsertPosition(str, Enum):
    """Where a new root component is spliced into the render block."""

    START = "start"
    AFTER_NAVBAR = "after_navbar"
    END = "end"


class ChangeKind(str, Enum):
    SET = "set"
    REMOVE = "remove"


class PropChange(BaseModel):
    """A single prop edit."""

    kind: ChangeKind
    key: str
    value: Any = None


class AddComponent(BaseModel):
    kind: Literal[OperationKind.ADD] = OperationKind.ADD
    component: ComponentNode
    position: InsertPosition = InsertPosition.END


class RemoveComponent(BaseModel):
    kind: Literal[OperationKind.REMOVE] = OperationKind.REMOVE
    component: ComponentNode


class UpdateProps(BaseModel):
    kind: Literal[OperationKind.UPDATE_PROPS] = OperationKind.UPDATE_PROPS
    component: ComponentNode
    changes: list[PropChange] = Field(default_factory=list)


class UpdateChildren(BaseModel):
    kind: Literal[OperationKind.UPDATE_CHILDREN] = OperationKind.UPDATE_CHILDREN
    component: ComponentNode
    children: list[ComponentNode] = Field(default_factory=list)


class MoveComponent(BaseModel):
    kind: Literal[OperationKind.MOVE] = OperationKind.MOVE
    component: ComponentNode
    position: InsertPosition = InsertPosition.END


class ReplaceComponent(BaseModel):
    kind: Literal[OperationKind.REPLACE] = OperationKind.REPLACE
    old_component: ComponentNode
    new_component: ComponentNode


PatchOperation = Annotated[
    Union[AddComponent, RemoveComponent, UpdateProps, UpdateChildren, MoveComponent, ReplaceComponent],
    Field(discriminator="kind"),
]


# Fixed insertion rules keyed on the new component's type
INSERT_RULES: dict[ComponentType, InsertPosition] = {
    ComponentType.NAVBAR: InsertPosition.START,
    ComponentType.SIDEBAR: InsertPosition.AFTER_NAVBAR,
}


def insert_position_for(component: ComponentNode) -> InsertPosition:
    """Insertion position for a new root component."""
    return INSERT_RULES.get(component.type, InsertPosition.END)
