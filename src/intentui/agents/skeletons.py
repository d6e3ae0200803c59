"""Component templates and the fixed creation skeletons."""

from typing import Any

from .models import ComponentNode, ComponentType


class Templates:
    """Component templates."""

    @staticmethod
    def button(text: str, variant: str = "primary") -> ComponentNode:
        return ComponentNode(type=ComponentType.BUTTON, props={"variant": variant, "children": text})

    @staticmethod
    def input(placeholder: str, label: str | None = None, **extra: Any) -> ComponentNode:
        props: dict[str, Any] = {"placeholder": placeholder, **extra}
        if label is not None:
            props["label"] = label
        return ComponentNode(type=ComponentType.INPUT, props=props)

    @staticmethod
    def card(title: str | None = None, children: list[ComponentNode] | None = None) -> ComponentNode:
        props = {"title": title} if title is not None else {}
        return ComponentNode(type=ComponentType.CARD, props=props, children=children or [])

    @staticmethod
    def navbar(title: str) -> ComponentNode:
        return ComponentNode(type=ComponentType.NAVBAR, props={"title": title})

    @staticmethod
    def sidebar(collapsed: bool = False) -> ComponentNode:
        return ComponentNode(type=ComponentType.SIDEBAR, props={"collapsed": collapsed})

    @staticmethod
    def table(columns: list[str], with_data: bool = True) -> ComponentNode:
        props: dict[str, Any] = {"columns": list(columns)}
        if with_data:
            props["data"] = []
        return ComponentNode(type=ComponentType.TABLE, props=props)

    @staticmethod
    def chart(chart_type: str, title: str | None = None, **extra: Any) -> ComponentNode:
        props: dict[str, Any] = {"type": chart_type}
        if title is not None:
            props["title"] = title
        props.update(extra)
        return ComponentNode(type=ComponentType.CHART, props=props)

    @staticmethod
    def modal(title: str, children: list[ComponentNode]) -> ComponentNode:
        return ComponentNode(type=ComponentType.MODAL, props={"isOpen": False, "title": title}, children=children)


def dashboard() -> list[ComponentNode]:
    return [
        Templates.navbar("Analytics Dashboard"),
        Templates.sidebar(collapsed=False),
        Templates.card("Revenue Overview"),
        Templates.chart("line", dataKey="revenue"),
        Templates.table(["Metric", "Value", "Change"], with_data=False),
    ]


def form() -> list[ComponentNode]:
    return [
        Templates.card(
            "Input Form",
            [
                Templates.input("Enter name", "Name"),
                Templates.input("Enter email", "Email", type="email"),
                Templates.button("Submit"),
            ],
        )
    ]


def modal_view() -> list[ComponentNode]:
    return [
        Templates.button("Open Modal"),
        Templates.modal("Dialog", [Templates.card(children=[Templates.input("Enter details")])]),
    ]


def default() -> list[ComponentNode]:
    return [
        Templates.navbar("Application"),
        Templates.card("Welcome", [Templates.button("Get Started")]),
    ]


def empty_state() -> list[ComponentNode]:
    return [Templates.card("Empty State", [Templates.button("Start Adding")])]


def modal_dialog(title: str) -> list[ComponentNode]:
    """Open button plus a modal holding a small details form."""
    return [
        Templates.button("Open Modal"),
        Templates.modal(
            title,
            [
                Templates.card(
                    children=[
                        Templates.input("Enter details", "Details"),
                        Templates.button("Submit"),
                    ]
                )
            ],
        ),
    ]


def replacement_chart() -> ComponentNode:
    """Chart swapped in for a table."""
    return Templates.chart("bar", "Data Visualization", data=[])


def replacement_table() -> ComponentNode:
    """Table swapped in for a chart."""
    return Templates.table(["Data 1", "Data 2"])


# (trigger keywords, layout tag, skeleton factory), checked in order
CREATION_RULES = (
    (("dashboard", "analytics"), "dashboard", dashboard),
    (("form", "input"), "form", form),
    (("modal", "dialog"), "modal-view", modal_view),
)
DEFAULT_RULE = ("default", default)
