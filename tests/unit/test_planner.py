"""Intent planner tests."""

import pytest
from hypothesis import given, settings as hyp_settings, strategies as st

from intentui.agents import IntentPlanner, Operation, Plan, classify, plan
from intentui.agents.models import ComponentType, find_all, find_first
from intentui.agents.skeletons import Templates


# ============================================================================
# Creation
# ============================================================================

@pytest.mark.unit
def test_create_dashboard(dashboard_plan):
    """Dashboard keyword selects the analytics skeleton."""
    assert dashboard_plan.layout == "dashboard"
    assert [c.type.value for c in dashboard_plan.components] == ["Navbar", "Sidebar", "Card", "Chart", "Table"]

    chart = find_first(dashboard_plan.components, ComponentType.CHART)
    table = find_first(dashboard_plan.components, ComponentType.TABLE)
    assert chart.props["type"] == "line"
    assert table.props["columns"] == ["Metric", "Value", "Change"]
    assert dashboard_plan.modifications == []


@pytest.mark.unit
def test_create_form(form_plan):
    assert form_plan.layout == "form"
    card = form_plan.components[0]
    assert card.props["title"] == "Input Form"
    assert [c.type.value for c in card.children] == ["Input", "Input", "Button"]
    assert card.children[1].props["type"] == "email"


@pytest.mark.unit
def test_create_modal_view():
    result = plan("Show a modal popup")
    assert result.layout == "modal-view"
    assert [c.type.value for c in result.components] == ["Button", "Modal"]
    assert result.components[1].props["isOpen"] is False


@pytest.mark.unit
def test_create_default(default_plan):
    assert default_plan.layout == "default"
    assert [c.type.value for c in default_plan.components] == ["Navbar", "Card"]


@pytest.mark.unit
def test_create_keyword_priority():
    """Dashboard wins over form when both appear."""
    assert plan("A form inside an analytics dashboard").layout == "dashboard"


# ============================================================================
# Classification
# ============================================================================

@pytest.mark.unit
@pytest.mark.parametrize(
    "text,expected",
    [
        ("add a chart", Operation.ADD),
        ("remove the table", Operation.REMOVE),
        ("delete the chart", Operation.REMOVE),
        ("change the title", Operation.MODIFY),
        ("update the columns", Operation.MODIFY),
        ("move the button", Operation.MOVE),
        ("replace the table with a chart", Operation.REPLACE),
        ("rename the button", Operation.RENAME),
        ("label it", Operation.RENAME),
        ("make it blue", None),
        # Single bucket, highest priority first
        ("add then remove", Operation.ADD),
        ("remove and rename", Operation.REMOVE),
    ],
)
def test_classify(text, expected):
    assert classify(text) == expected


# ============================================================================
# Mutation
# ============================================================================

@pytest.mark.unit
def test_add_button_to_first_card(dashboard_plan):
    """Quoted label is extracted and the button lands in the first card."""
    result = plan('Add a button called "Export"', dashboard_plan)

    card = find_first(result.components, ComponentType.CARD)
    assert card.children[-1].type == ComponentType.BUTTON
    assert card.children[-1].props["children"] == "Export"
    assert result.modifications == ['Added button "Export"']


@pytest.mark.unit
def test_mutation_leaves_previous_plan_untouched(dashboard_plan):
    before = dashboard_plan.model_dump_json()
    plan('Add a button called "Export"', dashboard_plan)
    assert dashboard_plan.model_dump_json() == before


@pytest.mark.unit
def test_add_button_without_container_is_noop():
    previous = Plan(components=[Templates.sidebar()])
    result = plan("Add a button", previous)
    assert result.modifications == []
    assert result.components == previous.components


@pytest.mark.unit
def test_add_input_field(form_plan):
    result = plan('Add an input field called "Phone" with placeholder "555-0100"', form_plan)

    field = form_plan.components[0].children[-1]
    added = result.components[0].children[-1]
    assert field.type == ComponentType.BUTTON
    assert added.type == ComponentType.INPUT
    assert added.props == {"placeholder": "555-0100", "label": "Phone"}
    assert result.modifications == ['Added input field "Phone"']


@pytest.mark.unit
def test_add_table_to_dashboard_root(dashboard_plan):
    result = plan("Add a table", dashboard_plan)
    assert result.components[-1].type == ComponentType.TABLE
    assert result.components[-1].props["columns"] == ["Column 1", "Column 2", "Column 3"]
    assert result.modifications == ["Added table component"]


@pytest.mark.unit
def test_add_table_into_card_outside_dashboard(default_plan):
    result = plan("Add a table", default_plan)
    assert result.components[1].children[-1].type == ComponentType.TABLE


@pytest.mark.unit
def test_add_chart(dashboard_plan):
    result = plan('Add a pie chart titled "Sales"', dashboard_plan)
    chart = result.components[-1]
    assert chart.props == {"type": "pie", "title": "Sales", "data": []}
    assert result.modifications == ["Added pie chart"]


@pytest.mark.unit
def test_add_modal(default_plan):
    result = plan('Add a modal called "Confirm"', default_plan)
    assert [c.type.value for c in result.components[-2:]] == ["Button", "Modal"]
    assert result.components[-1].props["title"] == "Confirm"
    assert result.modifications == ["Added modal dialog with open button"]


@pytest.mark.unit
def test_remove_table(dashboard_plan):
    result = plan("Remove the table", dashboard_plan)
    assert find_first(result.components, ComponentType.TABLE) is None
    assert result.modifications == ["Removed table"]


@pytest.mark.unit
def test_remove_nested_button(default_plan):
    """Removal searches depth-first, not just the top level."""
    result = plan("Remove the button", default_plan)

    card = find_first(result.components, ComponentType.CARD)
    assert card.props["title"] == "Welcome"
    assert card.children == []
    assert result.modifications == ["Removed button"]


@pytest.mark.unit
def test_remove_modal_not_first():
    current = plan("Show a modal popup")
    assert [c.type.value for c in current.components] == ["Button", "Modal"]

    result = plan("Remove the modal", current)

    assert [c.type.value for c in result.components] == ["Button"]
    assert result.modifications == ["Removed modal"]


@pytest.mark.unit
def test_remove_modal_inside_card():
    current = Plan(components=[Templates.navbar("App"), Templates.card("Host", [Templates.modal("Inner", [])])])

    result = plan("Delete the modal", current)

    assert find_first(result.components, ComponentType.MODAL) is None
    assert result.components[1].children == []
    assert result.modifications == ["Removed modal"]


@pytest.mark.unit
def test_remove_input_fields(form_plan):
    result = plan("Delete the input fields", form_plan)
    assert find_all(result.components, ComponentType.INPUT) == []
    assert result.modifications == ["Removed input fields"]


@pytest.mark.unit
def test_remove_everything(dashboard_plan):
    result = plan("Remove everything", dashboard_plan)
    assert [c.type.value for c in result.components] == ["Card"]
    assert result.components[0].props["title"] == "Empty State"
    assert result.modifications == ["Reset to empty state"]


@pytest.mark.unit
def test_remove_missing_component(default_plan):
    result = plan("Remove the chart", default_plan)
    assert result.modifications == []


@pytest.mark.unit
def test_change_button_label(form_plan):
    result = plan('Change the button label to "Send"', form_plan)
    button = find_first(result.components, ComponentType.BUTTON)
    assert button.props["children"] == "Send"
    assert result.modifications == ['Changed button label to "Send"']


@pytest.mark.unit
def test_change_button_variant(form_plan):
    result = plan("Update the button to outline", form_plan)
    assert find_first(result.components, ComponentType.BUTTON).props["variant"] == "outline"
    assert result.modifications == ["Changed button to outline variant"]


@pytest.mark.unit
def test_change_title(default_plan):
    result = plan('Change the title to "Home"', default_plan)
    assert result.components[0].props["title"] == "Home"
    assert result.components[1].props["title"] == "Home"
    assert result.modifications == ['Changed card title to "Home"', 'Changed navbar title to "Home"']


@pytest.mark.unit
def test_change_table_columns(dashboard_plan):
    result = plan("Change the table columns to name and email", dashboard_plan)
    assert find_first(result.components, ComponentType.TABLE).props["columns"] == ["Name", "Email"]
    assert result.modifications == ["Updated table columns: Name, Email"]


@pytest.mark.unit
def test_change_chart_type(dashboard_plan):
    result = plan("Change the chart type to bar", dashboard_plan)
    assert find_first(result.components, ComponentType.CHART).props["type"] == "bar"
    assert result.modifications == ["Changed chart type to bar"]


@pytest.mark.unit
def test_move_button_to_navbar(default_plan):
    result = plan("Move the button to the navbar", default_plan)
    navbar, card = result.components
    assert card.children == []
    assert navbar.children[0].props["children"] == "Get Started"
    assert result.modifications == ["Moved button to navbar"]


@pytest.mark.unit
def test_move_without_target_is_noop(default_plan):
    result = plan("Move the button to the sidebar", default_plan)
    assert result.modifications == []
    assert result.components == default_plan.components


@pytest.mark.unit
def test_replace_table_with_chart(dashboard_plan):
    result = plan("Replace the table with a chart", dashboard_plan)
    assert result.components[4].type == ComponentType.CHART
    assert result.components[4].props == {"type": "bar", "title": "Data Visualization", "data": []}
    assert result.modifications == ["Replaced table with chart"]


@pytest.mark.unit
def test_replace_chart_with_table(dashboard_plan):
    result = plan("Replace the chart with a table", dashboard_plan)
    assert result.components[3].type == ComponentType.TABLE
    assert result.components[3].props == {"columns": ["Data 1", "Data 2"], "data": []}
    assert result.modifications == ["Replaced chart with table"]


@pytest.mark.unit
def test_rename_button(default_plan):
    result = plan('Rename the button to "Begin"', default_plan)
    assert find_first(result.components, ComponentType.BUTTON).props["children"] == "Begin"
    assert result.modifications == ['Renamed button to "Begin"']


@pytest.mark.unit
def test_unrecognized_instruction(dashboard_plan):
    result = plan("Make it look nicer", dashboard_plan)
    assert result.modifications == []
    assert result.components == dashboard_plan.components


@pytest.mark.unit
def test_stale_modifications_cleared(dashboard_plan):
    first = plan("Remove the table", dashboard_plan)
    second = plan("Make it look nicer", first)
    assert second.modifications == []


# ============================================================================
# Determinism
# ============================================================================

@pytest.mark.unit
@hyp_settings(max_examples=50, deadline=None)
@given(st.text(min_size=3, max_size=120))
def test_creation_is_deterministic(intent):
    assert plan(intent).model_dump_json() == plan(intent).model_dump_json()


@pytest.mark.unit
@hyp_settings(max_examples=50, deadline=None)
@given(
    st.sampled_from(["add", "remove", "change", "move", "replace", "rename", "update"]),
    st.sampled_from(["button", "table", "chart", "input field", "title", "modal", "placeholder"]),
    st.sampled_from(['"Alpha"', "'Beta'", "to navbar", "with a table", "to bar", ""]),
)
def test_mutation_is_deterministic(verb, noun, tail):
    previous = IntentPlanner().plan("Create a dashboard with analytics")
    intent = f"{verb} the {noun} {tail}"
    first = plan(intent, previous)
    second = plan(intent, previous)
    assert first.model_dump_json() == second.model_dump_json()
