"""Code Patcher - localized edits of previously compiled source.

Each operation rewrites only the text span of the component it targets and
leaves every other byte alone. A target that cannot be found is a no-op.
"""

import re
from collections.abc import Callable

from intentui.core import GenerationError, get_logger
from intentui.agents.models import ComponentNode
from .compiler import INDENT_STEP, ROOT_INDENT, CodeCompiler, compile_nodes, format_attribute
from .operations import (
    AddComponent,
    ChangeKind,
    InsertPosition,
    MoveComponent,
    OperationKind,
    PatchOperation,
    RemoveComponent,
    ReplaceComponent,
    UpdateChildren,
    UpdateProps,
)
from .parser import ATTRIBUTES, OPENING_TAG, ParsedComponent, scan_attributes


logger = get_logger(__name__)

FRAGMENT_OPEN = re.compile(r"return \(\s*<>\n")
FRAGMENT_CLOSE = re.compile(r"^[ \t]*</>[ \t]*\n[ \t]*\);", re.MULTILINE)

Span = tuple[int, int]


def pair_pattern(tag: str) -> re.Pattern[str]:
    """Non-greedy opening/closing pair for one tag name."""
    return re.compile(rf"<{tag}(?=[\s>]){ATTRIBUTES}>.*?</{tag}>", re.DOTALL)


def opening_tag(source: str) -> str:
    """Opening tag text of a recorded source span."""
    match = OPENING_TAG.match(source)
    return match.group(0) if match else ""


def locate(code: str, component: ComponentNode) -> Span | None:
    """
    Find a component's span in the text.

    Tries, in order: the recorded source text, the recorded opening tag (the
    inner content may have been rewritten since), the first pair of its type.
    """
    tag = component.type.value
    pattern = pair_pattern(tag)

    if isinstance(component, ParsedComponent) and component.source:
        start = code.find(component.source)
        if start != -1:
            return start, start + len(component.source)

        opener = opening_tag(component.source)
        start = code.find(opener) if opener else -1
        if start != -1:
            match = pattern.match(code, start)
            if match:
                return match.span()

    match = pattern.search(code)
    return match.span() if match else None


def line_span(code: str, span: Span) -> Span:
    """Widen a span to whole lines when nothing else shares them."""
    start, end = span
    line_start = code.rfind("\n", 0, start) + 1
    if not code[line_start:start].strip():
        start = line_start

    line_end = code.find("\n", end)
    line_end = len(code) if line_end == -1 else line_end + 1
    if not code[end:line_end].strip():
        end = line_end

    return start, end


def column(code: str, position: int) -> int:
    """Column of ``position`` within its line."""
    return position - (code.rfind("\n", 0, position) + 1)


class CodePatcher:
    """Applies patch operations to compiled source."""

    def __init__(self, compiler: CodeCompiler | None = None) -> None:
        self.compiler = compiler or CodeCompiler()
        self._handlers: dict[OperationKind, Callable[[str, PatchOperation], str]] = {
            OperationKind.ADD: self._add,
            OperationKind.REMOVE: self._remove,
            OperationKind.UPDATE_PROPS: self._update_props,
            OperationKind.UPDATE_CHILDREN: self._update_children,
            OperationKind.MOVE: self._move,
            OperationKind.REPLACE: self._replace,
        }

    def apply_all(self, code: str, operations: list[PatchOperation]) -> str:
        """
        Apply operations in order.

        Args:
            code: Previously compiled source
            operations: Ordered patch operations

        Returns:
            Patched source; unchanged when ``operations`` is empty

        Raises:
            GenerationError: If the source lacks the render scaffold
        """
        if not FRAGMENT_OPEN.search(code) or not FRAGMENT_CLOSE.search(code):
            raise GenerationError("Render block not found in previous code")

        for op in operations:
            code = self.apply(code, op)

        logger.debug("patches_applied", count=len(operations))
        return code

    def apply(self, code: str, op: PatchOperation) -> str:
        """Apply one operation."""
        handler = self._handlers.get(op.kind)
        if handler is None:
            raise GenerationError(f"Unsupported patch operation: {op.kind}")
        return handler(code, op)

    # ========================================================================
    # Handlers
    # ========================================================================

    def _insert(self, code: str, component: ComponentNode, position: InsertPosition) -> str:
        fragment = compile_nodes([component], ROOT_INDENT)

        match position:
            case InsertPosition.START:
                at = self._after_opener(code)
            case InsertPosition.AFTER_NAVBAR:
                navbar = pair_pattern("Navbar").search(code)
                at = line_span(code, navbar.span())[1] if navbar else self._after_opener(code)
            case _:
                closer = FRAGMENT_CLOSE.search(code)
                if closer is None:
                    raise GenerationError("Fragment closer not found")
                at = closer.start()

        return code[:at] + fragment + code[at:]

    def _after_opener(self, code: str) -> int:
        opener = FRAGMENT_OPEN.search(code)
        if opener is None:
            raise GenerationError("Fragment opener not found")
        return opener.end()

    def _delete(self, code: str, component: ComponentNode) -> str:
        span = locate(code, component)
        if span is None:
            logger.debug("patch_target_missing", component=component.type.value)
            return code
        start, end = line_span(code, span)
        return code[:start] + code[end:]

    def _add(self, code: str, op: AddComponent) -> str:
        return self._insert(code, op.component, op.position)

    def _remove(self, code: str, op: RemoveComponent) -> str:
        return self._delete(code, op.component)

    def _update_props(self, code: str, op: UpdateProps) -> str:
        span = locate(code, op.component)
        if span is None:
            logger.debug("patch_target_missing", component=op.component.type.value)
            return code

        start = span[0]
        tag = OPENING_TAG.match(code, start)
        if tag is None:
            return code

        attr_text = tag.group(2)
        attributes: dict[str, str] = {}
        for attr in scan_attributes(attr_text):
            attributes.setdefault(attr.key, attr_text[attr.start:attr.end])

        for change in op.changes:
            rendered = format_attribute(change.key, change.value) if change.kind == ChangeKind.SET else None
            if rendered is None:
                attributes.pop(change.key, None)
            else:
                attributes[change.key] = rendered

        rebuilt = f"<{tag.group(1)}" + "".join(f" {text}" for text in attributes.values()) + ">"
        return code[:start] + rebuilt + code[tag.end():]

    def _update_children(self, code: str, op: UpdateChildren) -> str:
        span = locate(code, op.component)
        if span is None:
            logger.debug("patch_target_missing", component=op.component.type.value)
            return code

        start, end = span
        tag = OPENING_TAG.match(code, start)
        closer = f"</{op.component.type.value}>"
        if tag is None or not code[start:end].endswith(closer):
            return code

        indent = column(code, start)
        inner = "\n" + compile_nodes(op.children, indent + INDENT_STEP) + " " * indent
        return code[:tag.end()] + inner + code[end - len(closer):]

    def _move(self, code: str, op: MoveComponent) -> str:
        if locate(code, op.component) is None:
            return code
        return self._insert(self._delete(code, op.component), op.component, op.position)

    def _replace(self, code: str, op: ReplaceComponent) -> str:
        span = locate(code, op.old_component)
        if span is None:
            logger.debug("patch_target_missing", component=op.old_component.type.value)
            return code

        indent = column(code, span[0])
        start, end = line_span(code, span)
        return code[:start] + compile_nodes([op.new_component], indent) + code[end:]


def apply_patches(code: str, operations: list[PatchOperation]) -> str:
    """Functional entry point."""
    return CodePatcher().apply_all(code, operations)
