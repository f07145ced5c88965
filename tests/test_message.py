"""
Tests for composing message bodies from pipeline output.
"""

import pytest
from google.apps import chat_v1

from config.settings import settings
from gchat_cards import InvalidSegmentTypeError
from gchat_cards.card import add_card
from gchat_cards.message import ChatMessage, build_message
from gchat_cards.sections import add_card_action
from gchat_cards.widgets import add_text_paragraph


class TestBuildMessage:
    def test_cards_are_used_as_is(self):
        cards = add_card(add_text_paragraph("one"), header_title="One")
        cards = add_card(add_text_paragraph("two", input_objects=cards), header_title="Two")

        message = build_message(cards, text="Fallback")

        assert isinstance(message, ChatMessage)
        assert message.cards == cards
        assert message.webhook["text"] == "Fallback"
        assert [c["header"]["title"] for c in message.webhook["cards"]] == ["One", "Two"]

    def test_loose_segments_become_a_card(self, action):
        segments = add_text_paragraph("loose")
        segments = add_card_action("Approve", action, input_objects=segments)

        message = build_message(segments)

        (card,) = message.cards
        assert card.header is None
        assert card.sections[0].widgets[0].text == "loose"
        assert card.card_actions[0].action_label == "Approve"
        assert "text" not in message.webhook

    def test_existing_cards_stay_in_front(self):
        segments = add_text_paragraph("after", input_objects=add_card(header_title="First"))

        message = build_message(segments)

        assert len(message.cards) == 2
        assert message.cards[0].header.title == "First"
        assert message.cards[1].sections[0].widgets[0].text == "after"

    def test_text_only(self):
        message = build_message(text="Hello")
        assert message.webhook == {"text": "Hello"}
        assert message.sdk.text == "Hello"
        assert len(message.sdk.cards_v2) == 0

    def test_empty_message_is_rejected(self):
        with pytest.raises(ValueError, match="text or at least one card"):
            build_message()

    def test_invalid_segment(self):
        with pytest.raises(InvalidSegmentTypeError):
            build_message(["not a segment"], text="Hello")


class TestMessageForms:
    def test_sdk_message(self, monkeypatch):
        monkeypatch.setattr(settings, "card_id_prefix", "status")
        cards = add_card(add_text_paragraph("a"), header_title="A")
        cards = add_card(cards, header_title="B")

        message = build_message(cards, text="Status", thread_name="spaces/AAA/threads/BBB")
        sdk = message.sdk

        assert isinstance(sdk, chat_v1.Message)
        assert sdk.text == "Status"
        assert [c.card_id for c in sdk.cards_v2] == ["status-0", "status-1"]
        assert [c.card.header.title for c in sdk.cards_v2] == ["A", "B"]
        assert sdk.cards_v2[0].card.sections[0].widgets[0].text_paragraph.text == "a"
        assert sdk.thread.name == "spaces/AAA/threads/BBB"

    def test_webhook_thread(self):
        message = build_message(add_card(header_title="A"), thread_name="spaces/AAA/threads/BBB")
        assert message.webhook["thread"] == {"name": "spaces/AAA/threads/BBB"}
        assert message.webhook["cards"] == [
            {"header": {"title": "A"}, "cardActions": [], "sections": []}
        ]
