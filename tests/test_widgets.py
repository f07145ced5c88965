"""
Tests for the widget builders and adjacent-button coalescing.
"""

import pytest
from pydantic import ValidationError

from gchat_cards import InvalidSegmentTypeError
from gchat_cards.models import Button, Image, ImageButton, KeyValue, TextButton, TextParagraph
from gchat_cards.widgets import (
    add_button,
    add_image,
    add_key_value,
    add_on_click,
    add_text_paragraph,
    coalesce_button_widgets,
)


def _button(label, on_click):
    return add_button(on_click, text=label)[-1]


class TestOnClickBuilder:
    def test_link(self):
        on_click = add_on_click(url="https://example.com")
        assert on_click.url == "https://example.com"
        assert on_click.parameters == {}

    def test_action(self):
        on_click = add_on_click(action_method_name="refresh", parameters={"page": "2"})
        assert on_click.action_method_name == "refresh"
        assert on_click.parameters == {"page": "2"}

    def test_nothing_given(self):
        with pytest.raises(ValidationError):
            add_on_click()


class TestPipelineAppend:
    def test_appends_to_previous_output(self):
        first = add_text_paragraph("one")
        second = add_text_paragraph("two", input_objects=first)

        assert [w.text for w in second] == ["one", "two"]
        assert len(first) == 1

    def test_rejects_untagged_input(self):
        with pytest.raises(InvalidSegmentTypeError) as excinfo:
            add_text_paragraph("two", input_objects=["one"])
        assert excinfo.value.parameter == "input_objects"


class TestButton:
    def test_text_button(self, link):
        (widget,) = add_button(link, text="Open")
        assert isinstance(widget, Button)
        assert widget.buttons == [TextButton(text="Open", on_click=link)]

    def test_known_icon_button(self, link):
        (widget,) = add_button(link, icon="STAR")
        assert isinstance(widget.buttons[0], ImageButton)
        assert widget.buttons[0].icon == "STAR"

    def test_icon_url_button(self, link):
        (widget,) = add_button(link, icon_url="https://example.com/i.png")
        assert widget.buttons[0].icon_url == "https://example.com/i.png"

    def test_on_click_from_dict(self):
        (widget,) = add_button({"url": "https://example.com"}, text="Open")
        assert widget.buttons[0].on_click.url == "https://example.com"

    @pytest.mark.parametrize(
        "kwargs",
        [{}, {"text": "Open", "icon": "STAR"}, {"icon": "STAR", "icon_url": "https://example.com/i.png"}],
    )
    def test_needs_exactly_one_face(self, link, kwargs):
        with pytest.raises(ValueError, match="exactly one"):
            add_button(link, **kwargs)


class TestImage:
    def test_plain_image(self):
        (widget,) = add_image("https://example.com/chart.png", aspect_ratio=1.5)
        assert isinstance(widget, Image)
        assert widget.on_click is None
        assert widget.aspect_ratio == 1.5

    def test_link_image_opens_itself(self):
        (widget,) = add_image("https://example.com/chart.png", link_image=True)
        assert widget.on_click.url == "https://example.com/chart.png"

    def test_link_image_conflicts_with_on_click(self, link):
        with pytest.raises(ValueError, match="not both"):
            add_image("https://example.com/chart.png", on_click=link, link_image=True)


class TestKeyValue:
    def test_all_fields(self, link, action):
        (widget,) = add_key_value(
            "On track",
            top_label="Status",
            bottom_label="Updated today",
            content_multiline=True,
            on_click=link,
            icon="CLOCK",
            button=_button("Approve", action),
        )

        assert isinstance(widget, KeyValue)
        assert widget.content == "On track"
        assert widget.content_multiline is True
        assert widget.icon == "CLOCK"
        assert widget.button == TextButton(text="Approve", on_click=action)

    def test_event_performer_icon(self):
        (widget,) = add_key_value("Headliner", icon="EVENT_PERFORMER")
        assert widget.webhook["keyValue"]["icon"] == "EVENT_PERFORMER"

    def test_button_group_is_rejected(self, link):
        group = Button(buttons=[TextButton(text="a", on_click=link), TextButton(text="b", on_click=link)])
        with pytest.raises(ValueError, match="single button"):
            add_key_value("x", button=group)

    def test_non_button_is_rejected(self):
        with pytest.raises(InvalidSegmentTypeError) as excinfo:
            add_key_value("x", button=TextParagraph(text="nope"))
        assert excinfo.value.parameter == "button"
        assert excinfo.value.actual == ["TextParagraph"]


class TestCoalesceButtons:
    def test_adjacent_buttons_merge(self, link):
        a, b, c = (_button(label, link) for label in "abc")
        text = TextParagraph(text="between")

        result = coalesce_button_widgets([a, b, text, c])

        assert len(result) == 3
        assert [entry.text for entry in result[0].buttons] == ["a", "b"]
        assert result[1] is text
        assert [entry.text for entry in result[2].buttons] == ["c"]

    def test_run_of_three_is_one_group(self, link):
        widgets = [_button(label, link) for label in "xyz"]
        result = coalesce_button_widgets(widgets)
        assert len(result) == 1
        assert [entry.text for entry in result[0].buttons] == ["x", "y", "z"]

    def test_inputs_are_not_modified(self, link):
        a, b = _button("a", link), _button("b", link)
        coalesce_button_widgets([a, b])
        assert len(a.buttons) == 1
        assert len(b.buttons) == 1

    def test_no_buttons(self):
        widgets = [TextParagraph(text="a"), TextParagraph(text="b")]
        assert coalesce_button_widgets(widgets) == widgets

    def test_empty(self):
        assert coalesce_button_widgets([]) == []
