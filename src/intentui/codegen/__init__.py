"""Compilation, parsing, diffing and patching of component source."""

from .operations import (
    AddComponent,
    ChangeKind,
    InsertPosition,
    MoveComponent,
    OperationKind,
    PatchOperation,
    PropChange,
    RemoveComponent,
    ReplaceComponent,
    UpdateChildren,
    UpdateProps,
)
from .compiler import CodeCompiler, compile_nodes, compile_plan
from .parser import CodeParser, ParsedComponent, parse_code
from .differ import TreeDiffer, diff
from .patcher import CodePatcher, apply_patches
from .safety import OutputValidator, check_output

__all__ = [
    "AddComponent",
    "ChangeKind",
    "InsertPosition",
    "MoveComponent",
    "OperationKind",
    "PatchOperation",
    "PropChange",
    "RemoveComponent",
    "ReplaceComponent",
    "UpdateChildren",
    "UpdateProps",
    "CodeCompiler",
    "compile_nodes",
    "compile_plan",
    "CodeParser",
    "ParsedComponent",
    "parse_code",
    "TreeDiffer",
    "diff",
    "CodePatcher",
    "apply_patches",
    "OutputValidator",
    "check_output",
]
