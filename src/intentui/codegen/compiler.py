"""Code Compiler - deterministic Plan to React component source.

Every component is emitted as an explicit opening/closing pair, attributes in
prop insertion order, two spaces of indentation per depth. The same Plan
always produces byte-identical text.
"""

from typing import Any

from intentui.core import get_logger, get_settings, safe_json_dumps
from intentui.agents.models import ALLOWED_COMPONENTS, ComponentNode, Plan


logger = get_logger(__name__)

INDENT_STEP = 2
ROOT_INDENT = 6  # export -> return ( -> fragment -> roots


def format_attribute(key: str, value: Any) -> str | None:
    """
    Render one prop as a JSX attribute.

    Returns:
        Attribute text, or None when the prop is not emitted (``False``)
    """
    if isinstance(value, bool):
        return key if value else None
    if isinstance(value, str) and '"' not in value:
        return f'{key}="{value}"'
    # JSX string literals have no escapes; quoted text goes through an expression
    return f"{key}={{{safe_json_dumps(value)}}}"


def format_props(props: dict[str, Any]) -> str:
    """Attribute list with a leading space, or an empty string."""
    attributes = [attr for key, value in props.items() if (attr := format_attribute(key, value)) is not None]
    return " " + " ".join(attributes) if attributes else ""


def compile_nodes(components: list[ComponentNode], indent: int = ROOT_INDENT) -> str:
    """Compile a forest fragment; every line ends with a newline."""
    pad = " " * indent
    out = []
    for comp in components:
        tag = comp.type.value
        out.append(f"{pad}<{tag}{format_props(comp.props)}>\n")
        out.append(compile_nodes(comp.children, indent + INDENT_STEP))
        out.append(f"{pad}</{tag}>\n")
    return "".join(out)


class CodeCompiler:
    """Compiles plans into a single exported functional component."""

    def __init__(self, component_name: str | None = None, import_path: str | None = None) -> None:
        settings = get_settings()
        self.component_name = component_name or settings.component_name
        self.import_path = import_path or settings.component_import_path

    def header(self) -> str:
        return (
            "import React from 'react';\n"
            f"import {{ {', '.join(ALLOWED_COMPONENTS)} }} from '{self.import_path}';\n"
        )

    def compile(self, plan: Plan) -> str:
        """
        Compile a plan to component source.

        Args:
            plan: Validated plan

        Returns:
            Source text
        """
        body = compile_nodes(plan.components, ROOT_INDENT)
        code = (
            f"{self.header()}\n"
            f"export const {self.component_name} = () => {{\n"
            "  return (\n"
            "    <>\n"
            f"{body}"
            "    </>\n"
            "  );\n"
            "};\n"
            "\n"
            f"export default {self.component_name};\n"
        )
        logger.debug("compiled", components=len(plan.components), length=len(code))
        return code


def compile_plan(plan: Plan) -> str:
    """Functional entry point."""
    return CodeCompiler().compile(plan)
