"""Output safety gate for compiled and patched source."""

import re

from intentui.core import OutputSafetyError, get_logger, get_settings
from intentui.agents.models import ALLOWED_COMPONENTS


logger = get_logger(__name__)

TAG_NAME = re.compile(r"</?([A-Za-z][\w.:-]*)")
STYLE_ATTR = re.compile(r"\bstyles?\s*=")

DANGEROUS_PATTERNS = (
    "dangerouslySetInnerHTML",
    "innerHTML",
    "outerHTML",
    "eval(",
    "Function(",
    "document.write",
    "javascript:",
)


class OutputValidator:
    """Rejects source that steps outside the component library."""

    def __init__(self, import_path: str | None = None) -> None:
        self.import_path = import_path or get_settings().component_import_path
        self._import_line = re.compile(
            rf"^import \{{[^}}]*\}} from '{re.escape(self.import_path)}';$", re.MULTILINE
        )

    def violations(self, code: str) -> list[str]:
        """All rule violations in ``code``; empty when it is safe."""
        found: list[str] = []

        for name in sorted({m.group(1) for m in TAG_NAME.finditer(code)}):
            if name not in ALLOWED_COMPONENTS:
                found.append(f"Disallowed tag: {name}")

        if STYLE_ATTR.search(code):
            found.append("Inline style attribute")

        found.extend(f"Dangerous pattern: {pattern}" for pattern in DANGEROUS_PATTERNS if pattern in code)

        imports = len(self._import_line.findall(code))
        if imports != 1:
            found.append(f"Expected one import from '{self.import_path}', found {imports}")

        return found

    def check(self, code: str) -> str:
        """
        Validate generated source.

        Args:
            code: Compiled or patched source

        Returns:
            The same source, when it passes

        Raises:
            OutputSafetyError: If any rule is violated
        """
        found = self.violations(code)
        if found:
            logger.warning("output_rejected", violations=found)
            raise OutputSafetyError(f"Unsafe output: {'; '.join(found)}", found)
        return code


def check_output(code: str) -> str:
    """Functional entry point."""
    return OutputValidator().check(code)
