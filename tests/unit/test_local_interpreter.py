"""Tests for the local rule-based interpreter."""

import asyncio

import pytest

from screenforge.editor.kinds import ComponentKind
from screenforge.editor.mutations import build_node
from screenforge.editor.normalize import normalize_props
from screenforge.editor.operations import AddOp, UpdateSelectedOp
from screenforge.interpreter.local import SELECT_FIRST, find_color, find_quoted


@pytest.fixture
def button():
    return build_node(ComponentKind.BUTTON)


@pytest.fixture
def hero():
    return build_node(ComponentKind.HERO)


@pytest.mark.unit
class TestAddFamily:
    """Test add commands."""

    def test_add_hero_section(self, local_interpreter, make_context):
        result = local_interpreter.interpret_sync("add a hero section", make_context())
        assert result.operations == [AddOp(kind=ComponentKind.HERO, props={})]
        assert result.source == "local"

    @pytest.mark.parametrize(
        "prompt,kind",
        [
            ("insert a button", ComponentKind.BUTTON),
            ("create a banner", ComponentKind.HERO),
            ("add a title", ComponentKind.HEADING),
            ("add a separator", ComponentKind.DIVIDER),
            ("Add some space", ComponentKind.SPACER),
            ("add a paragraph", ComponentKind.TEXT),
        ],
    )
    def test_kind_keywords(self, local_interpreter, make_context, prompt, kind):
        result = local_interpreter.interpret_sync(prompt, make_context())
        assert [op.kind for op in result.operations] == [kind]

    @pytest.mark.parametrize(
        "prompt,kind",
        [
            ('add a button "Shop" below the hero', ComponentKind.BUTTON),
            ("add a heading above the button", ComponentKind.HEADING),
            ("add a hero with a button", ComponentKind.HERO),
            ("insert a divider under the title", ComponentKind.DIVIDER),
            ("add some text next to the banner", ComponentKind.TEXT),
        ],
    )
    def test_earliest_kind_wins(self, local_interpreter, make_context, prompt, kind):
        result = local_interpreter.interpret_sync(prompt, make_context())
        assert [op.kind for op in result.operations] == [kind]

    def test_earliest_kind_keeps_quoted_text(self, local_interpreter, make_context):
        result = local_interpreter.interpret_sync('add a button "Shop" below the hero', make_context())
        assert result.operations == [AddOp(kind=ComponentKind.BUTTON, props={"text": "Shop"})]

    def test_quoted_text_becomes_primary_text(self, local_interpreter, make_context):
        result = local_interpreter.interpret_sync('add a button that says "Order now"', make_context())
        assert result.operations == [AddOp(kind=ComponentKind.BUTTON, props={"text": "Order now"})]

    def test_quoted_hero_title(self, local_interpreter, make_context):
        result = local_interpreter.interpret_sync("add a hero with 'Summer sale'", make_context())
        assert result.operations[0].props == {"title": "Summer sale"}

    def test_keywords_inside_quotes_ignored(self, local_interpreter, make_context):
        result = local_interpreter.interpret_sync('add text "press the button"', make_context())
        assert result.operations[0].kind is ComponentKind.TEXT

    def test_unknown_kind_asks(self, local_interpreter, make_context):
        result = local_interpreter.interpret_sync("add a spaceship", make_context())
        assert result.operations == []
        assert "hero" in result.message


@pytest.mark.unit
class TestChangeFamily:
    """Test change commands."""

    def test_change_button_text(self, local_interpreter, make_context, button):
        result = local_interpreter.interpret_sync('change this button text to "Book now"', make_context(button))
        assert result.operations == [UpdateSelectedOp(props={"text": "Book now"})]

    def test_change_without_selection(self, local_interpreter, make_context):
        result = local_interpreter.interpret_sync('change this button text to "Book now"', make_context())
        assert result.operations == []
        assert result.message == SELECT_FIRST

    def test_hero_title_and_subtitle(self, local_interpreter, make_context, hero):
        title = local_interpreter.interpret_sync('set the title to "Hello"', make_context(hero))
        subtitle = local_interpreter.interpret_sync('set the subtitle to "World"', make_context(hero))
        assert title.operations[0].props == {"title": "Hello"}
        assert subtitle.operations[0].props == {"subtitle": "World"}

    def test_subtitle_only_on_hero(self, local_interpreter, make_context, button):
        result = local_interpreter.interpret_sync('set the subtitle to "World"', make_context(button))
        assert result.operations == []

    def test_missing_quoted_text(self, local_interpreter, make_context, button):
        result = local_interpreter.interpret_sync("change the text", make_context(button))
        assert result.operations == []
        assert "quotes" in result.message

    @pytest.mark.parametrize(
        "prompt,props",
        [
            ("make the background blue", {"backgroundColor": "#3B82F6"}),
            ("set the color to #ff0000", {"backgroundColor": "#ff0000"}),
            ("change the text color to white", {"textColor": "#FFFFFF"}),
            ('set color to "#abc"', {"backgroundColor": "#abc"}),
        ],
    )
    def test_button_colors(self, local_interpreter, make_context, button, prompt, props):
        result = local_interpreter.interpret_sync(prompt, make_context(button))
        assert result.operations == [UpdateSelectedOp(props=props)]

    def test_text_color_on_text(self, local_interpreter, make_context):
        text = build_node(ComponentKind.TEXT)
        result = local_interpreter.interpret_sync("change the text color to red", make_context(text))
        assert result.operations[0].props == {"color": "#EF4444"}

    def test_unrecognized_color(self, local_interpreter, make_context, button):
        result = local_interpreter.interpret_sync("set the color to sparkly", make_context(button))
        assert result.operations == []
        assert "color" in result.message

    def test_unknown_target(self, local_interpreter, make_context, button):
        result = local_interpreter.interpret_sync("make it bigger", make_context(button))
        assert result.operations == []


@pytest.mark.unit
@pytest.mark.parametrize(
    "kind,prompt,spelled",
    [
        (ComponentKind.BUTTON, "set the color to #ff0000", "color"),
        (ComponentKind.BUTTON, "change the text color to #ff0000", "textColor"),
        (ComponentKind.HERO, "set the color to #ff0000", "color"),
        (ComponentKind.HERO, "make the background #ff0000", "background"),
        (ComponentKind.TEXT, "set the color to #ff0000", "color"),
        (ComponentKind.HEADING, "change the font color to #ff0000", "font_color"),
    ],
)
def test_color_keys_match_assistant_props(local_interpreter, make_context, kind, prompt, spelled):
    """A color change lands on the same key whether typed or proposed by the assistant."""
    node = build_node(kind)
    result = local_interpreter.interpret_sync(prompt, make_context(node))
    assert result.operations == [UpdateSelectedOp(props=normalize_props(kind, {spelled: "#ff0000"}))]


@pytest.mark.unit
def test_unrecognized_prompt(local_interpreter, make_context):
    result = local_interpreter.interpret_sync("hello there", make_context())
    assert result.operations == []
    assert result.message


@pytest.mark.unit
def test_async_interface(local_interpreter, make_context):
    result = asyncio.run(local_interpreter.interpret("add a button", make_context()))
    assert len(result.operations) == 1


@pytest.mark.unit
def test_helpers():
    assert find_quoted("say “Hi there”") == "Hi there"
    assert find_quoted("don't quote me") is None
    assert find_color("GREEN please") == "#10B981"
    assert find_color("nothing") is None
