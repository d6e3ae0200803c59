"""Code Parser - approximate component forest from previously compiled source.

A flat, non-greedy tag-pair scan, recursing into each pair's inner content.
Reliable for a single level; same-type nesting below the first level can pair
the wrong closing tag. Output only feeds the differ.
"""

import re
from dataclasses import dataclass
from typing import Any

from pydantic import Field

from intentui.core import JSONParseError, decode_json_value, get_logger
from intentui.agents.models import ALLOWED_COMPONENTS, ComponentNode


logger = get_logger(__name__)

BRACE_NESTING = 4


def _braced_value(depth: int) -> str:
    """``{...}`` with JSON strings and up to ``depth`` levels of nested braces."""
    inner = r'[^{}"]|"(?:[^"\\]|\\.)*"'
    if depth > 1:
        inner += "|" + _braced_value(depth - 1)
    return rf"\{{(?:{inner})*\}}"


# Attribute text of an opening tag; ">" inside quoted or braced values does not end it
ATTRIBUTES = rf"""(?:[^>"'{{]|"[^"]*"|'[^']*'|{_braced_value(BRACE_NESTING)})*"""

OPENING_TAG = re.compile(rf"<(\w+)({ATTRIBUTES})>")
TAG_PAIR = re.compile(rf"<(\w+)({ATTRIBUTES})>(.*?)</\1>", re.DOTALL)
ATTR_NAME = re.compile(r"\s*([A-Za-z_][\w-]*)")


class ParsedComponent(ComponentNode):
    """A component recovered from source, remembering the text it came from."""

    source: str = Field(default="", exclude=True, repr=False)


@dataclass(frozen=True)
class Attribute:
    """One attribute token inside an opening tag."""

    key: str
    value: Any
    start: int
    end: int


def _scan_braced(text: str, start: int) -> int:
    """Index just past the brace matching ``text[start]``; -1 if unbalanced."""
    depth = 0
    quote: str | None = None
    i = start
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return -1


def _decode_braced(raw: str) -> Any:
    """Structured value when it decodes, raw text otherwise."""
    try:
        return decode_json_value(raw)
    except JSONParseError:
        return raw


def scan_attributes(text: str) -> list[Attribute]:
    """
    Tokenize an attribute string.

    Handles quoted literals (``key="v"``), brace values (``key={...}``,
    decoded as JSON with a raw-text fallback) and bare names (``key`` -> True).
    Unrecognized characters are skipped.
    """
    attributes: list[Attribute] = []
    pos = 0
    while pos < len(text):
        match = ATTR_NAME.match(text, pos)
        if not match:
            pos += 1
            continue

        key, start, pos = match.group(1), match.start(1), match.end()
        if pos >= len(text) or text[pos] != "=":
            attributes.append(Attribute(key, True, start, pos))
            continue

        pos += 1
        if pos < len(text) and text[pos] in "\"'":
            close = text.find(text[pos], pos + 1)
            if close == -1:
                break
            attributes.append(Attribute(key, text[pos + 1:close], start, close + 1))
            pos = close + 1
        elif pos < len(text) and text[pos] == "{":
            close = _scan_braced(text, pos)
            if close == -1:
                break
            attributes.append(Attribute(key, _decode_braced(text[pos + 1:close - 1]), start, close))
            pos = close
        else:
            # Unquoted value, kept as raw text up to the next whitespace
            end = pos
            while end < len(text) and not text[end].isspace():
                end += 1
            attributes.append(Attribute(key, text[pos:end], start, end))
            pos = end
    return attributes


def parse_props(text: str) -> dict[str, Any]:
    """Props mapping in source order; later duplicates win."""
    return {attr.key: attr.value for attr in scan_attributes(text)}


class CodeParser:
    """Recovers an approximate component forest from compiled source."""

    def parse(self, code: str) -> list[ParsedComponent]:
        """
        Parse component structure from source.

        Args:
            code: Previously compiled source

        Returns:
            Approximate forest; tags outside the vocabulary are dropped and
            their content is scanned in their place
        """
        components: list[ParsedComponent] = []

        for match in TAG_PAIR.finditer(code):
            tag, props_text, inner = match.groups()
            children = self.parse(inner)

            if tag not in ALLOWED_COMPONENTS:
                logger.debug("unknown_tag_skipped", tag=tag)
                components.extend(children)
                continue

            components.append(
                ParsedComponent(
                    type=tag,
                    props=parse_props(props_text),
                    children=children,
                    source=match.group(0),
                )
            )

        return components


def parse_code(code: str) -> list[ParsedComponent]:
    """Functional entry point."""
    return CodeParser().parse(code)
