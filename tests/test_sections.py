"""
Tests for the section and card action builders.
"""

import pytest

from gchat_cards import InvalidSegmentTypeError
from gchat_cards.card import add_card
from gchat_cards.models import Button, CardAction, Section, TextParagraph
from gchat_cards.sections import add_card_action, add_section, build_section
from gchat_cards.widgets import add_button, add_image, add_text_paragraph


class TestAddSection:
    def test_wraps_piped_widgets(self):
        segments = add_text_paragraph("a")
        segments = add_image("https://example.com/a.png", input_objects=segments)

        (section,) = add_section(segments, header="Details")

        assert isinstance(section, Section)
        assert section.header == "Details"
        assert [type(w).__name__ for w in section.widgets] == ["TextParagraph", "Image"]

    def test_piped_widgets_come_before_explicit_widgets(self):
        piped = add_text_paragraph("piped")
        explicit = add_text_paragraph("explicit")

        (section,) = add_section(piped, widgets=explicit)

        assert [w.text for w in section.widgets] == ["piped", "explicit"]

    def test_passes_other_segments_through(self, action):
        segments = add_text_paragraph("first")
        segments = add_section(segments, header="One")
        segments = add_card_action("Approve", action, input_objects=segments)
        segments = add_text_paragraph("second", input_objects=segments)

        result = add_section(segments, header="Two")

        assert [type(item).__name__ for item in result] == ["Section", "CardAction", "Section"]
        assert [result[0].header, result[2].header] == ["One", "Two"]
        assert result[2].widgets[0].text == "second"

    def test_merges_adjacent_buttons(self, link):
        segments = add_button(link, text="a")
        segments = add_button(link, text="b", input_objects=segments)

        (section,) = add_section(segments)

        assert len(section.widgets) == 1
        assert isinstance(section.widgets[0], Button)
        assert len(section.widgets[0].buttons) == 2

    def test_no_merge_when_switched_off(self, link, no_coalescing):
        segments = add_button(link, text="a")
        segments = add_button(link, text="b", input_objects=segments)

        (section,) = add_section(segments)

        assert len(section.widgets) == 2

    def test_needs_a_widget(self):
        with pytest.raises(ValueError, match="at least one widget"):
            add_section(add_card())

    def test_widgets_parameter_only_takes_widgets(self):
        with pytest.raises(InvalidSegmentTypeError) as excinfo:
            add_section(widgets=add_card())
        assert excinfo.value.parameter == "widgets"
        assert excinfo.value.actual == ["Card"]


class TestBuildSection:
    def test_header_less(self):
        section = build_section([TextParagraph(text="x")])
        assert section.header is None
        assert section.webhook == {"widgets": [{"textParagraph": {"text": "x"}}]}


class TestAddCardAction:
    def test_appends(self, link, action):
        segments = add_card_action("Open", link)
        segments = add_card_action("Approve", action, input_objects=segments)

        assert all(isinstance(item, CardAction) for item in segments)
        assert [item.action_label for item in segments] == ["Open", "Approve"]
        assert segments[1].on_click.parameters == {"id": "42", "level": "2"}
