"""Value extraction from instruction text.

Patterns run case-insensitively over the original (not lower-cased) text so
quoted values keep the user's casing. The first matching pattern wins.
"""

import re

QUOTED = r"""["']([^"']+)["']"""


def _compile(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p.replace("{Q}", QUOTED), re.IGNORECASE | re.DOTALL) for p in patterns)


BUTTON_LABEL = _compile(
    r"button (?:called|labeled|labelled|named|text)? ?{Q}",
    r"button {Q}",
    r"{Q}.*?button",
    r"add.*?button.*?(?:called|named|with text)? {Q}",
    r"button.*?that says {Q}",
)

PLACEHOLDER = _compile(
    r"placeholder (?:text )?{Q}",
    r"with placeholder {Q}",
)

LABEL = _compile(
    r"label(?:led)? {Q}",
    r"called {Q}",
    r"named {Q}",
    r"field {Q}",
)

CHART_TITLE = _compile(
    r"chart (?:called|titled|named) {Q}",
    r"title {Q}",
    r"called {Q}.*?chart",
)

MODAL_TITLE = _compile(
    r"modal (?:called|titled|named) {Q}",
    r"dialog (?:called|titled|named) {Q}",
    r"title {Q}",
)

NEW_LABEL = _compile(
    r"(?:change|update|modify).*?(?:label|text|name) (?:to )?{Q}",
    r"(?:change|update|modify).*?(?:button|element).*?(?:to )?{Q}",
    r"to {Q}",
)

NEW_TITLE = _compile(
    r"(?:change|update|modify).*?title (?:to )?{Q}",
    r"title (?:to )?{Q}",
    r"rename .*?to {Q}",
)

NEW_PLACEHOLDER = _compile(
    r"placeholder (?:to )?{Q}",
    r"to {Q}(?=.*?placeholder)",
)

NEW_NAME = _compile(
    r"rename.*?to {Q}",
    r"to {Q}(?=.*?rename)",
    r"called {Q}",
    r"named {Q}",
)

ALL_QUOTED = re.compile(QUOTED)

# Checked in order; first keyword present wins
CHART_TYPES = ("bar", "line", "pie", "area", "scatter")
DEFAULT_CHART_TYPE = "bar"

COLUMN_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("name",), "Name"),
    (("email",), "Email"),
    (("status",), "Status"),
    (("date",), "Date"),
    (("amount", "price"), "Amount"),
)
DEFAULT_COLUMNS = ["Name", "Value", "Status"]


def first_match(patterns: tuple[re.Pattern[str], ...], text: str) -> str | None:
    """Group 1 of the first pattern that matches, or None."""
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


def button_label(text: str) -> str | None:
    return first_match(BUTTON_LABEL, text)


def placeholder(text: str) -> str | None:
    return first_match(PLACEHOLDER, text)


def label(text: str) -> str | None:
    return first_match(LABEL, text)


def chart_title(text: str) -> str | None:
    return first_match(CHART_TITLE, text)


def modal_title(text: str) -> str | None:
    return first_match(MODAL_TITLE, text)


def new_label(text: str) -> str | None:
    return first_match(NEW_LABEL, text)


def new_title(text: str) -> str | None:
    return first_match(NEW_TITLE, text)


def new_placeholder(text: str) -> str | None:
    return first_match(NEW_PLACEHOLDER, text)


def new_name(text: str) -> str | None:
    return first_match(NEW_NAME, text)


def chart_type(text: str) -> str:
    """Chart type keyword, defaulting to bar."""
    lowered = text.lower()
    for name in CHART_TYPES:
        if name in lowered:
            return name
    return DEFAULT_CHART_TYPE


def table_columns(text: str) -> list[str]:
    """Quoted column names, else keyword columns, else a default set."""
    columns = ALL_QUOTED.findall(text)
    if columns:
        return columns

    lowered = text.lower()
    columns = [column for keywords, column in COLUMN_KEYWORDS if any(k in lowered for k in keywords)]
    return columns or list(DEFAULT_COLUMNS)
