"""
Chained-method front end for the card builders.

    message = (
        CardPipeline()
        .text_paragraph("Deploy finished")
        .key_value("v2.4.1", top_label="Version")
        .button(add_on_click(url="https://deploy.example.com"), text="Details")
        .card(header_title="Deploy")
        .message(text="Deploy finished")
    )
"""

from typing_extensions import Any, Iterator, List, Optional

from gchat_cards.card import add_card
from gchat_cards.message import ChatMessage, build_message
from gchat_cards.models import CARD_SEGMENT_TYPES, Card, Segment, SegmentType
from gchat_cards.sections import add_card_action, add_section
from gchat_cards.segments import ensure_segment_types, segment_type_of
from gchat_cards.widgets import add_button, add_image, add_key_value, add_text_paragraph


class CardPipeline:
    """Accumulates segments; every builder method returns the pipeline itself."""

    def __init__(self, segments: Any = None):
        self._segments: List[Segment] = ensure_segment_types(segments, CARD_SEGMENT_TYPES)

    @property
    def segments(self) -> List[Segment]:
        return list(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(list(self._segments))

    def text_paragraph(self, text: str) -> "CardPipeline":
        self._segments = add_text_paragraph(text, input_objects=self._segments)
        return self

    def button(self, on_click: Any, **kwargs) -> "CardPipeline":
        self._segments = add_button(on_click, input_objects=self._segments, **kwargs)
        return self

    def image(self, image_url: str, **kwargs) -> "CardPipeline":
        self._segments = add_image(image_url, input_objects=self._segments, **kwargs)
        return self

    def key_value(self, content: str, **kwargs) -> "CardPipeline":
        self._segments = add_key_value(content, input_objects=self._segments, **kwargs)
        return self

    def section(self, header: Optional[str] = None) -> "CardPipeline":
        self._segments = add_section(self._segments, header=header)
        return self

    def card_action(self, action_label: str, on_click: Any) -> "CardPipeline":
        self._segments = add_card_action(action_label, on_click, input_objects=self._segments)
        return self

    def card(self, **kwargs) -> "CardPipeline":
        """Aggregate everything so far into a card (see ``add_card``)."""
        self._segments = list(add_card(self._segments, **kwargs))
        return self

    def cards(self) -> List[Card]:
        return [item for item in self._segments if segment_type_of(item) is SegmentType.CARD]

    def message(self, text: Optional[str] = None, thread_name: Optional[str] = None) -> ChatMessage:
        return build_message(self._segments, text=text, thread_name=thread_name)
