"""
Google Chat card payload builders.

Builders are pipeline stages that append tagged segments; ``add_card``
aggregates them into cards and ``build_message`` turns cards into a message
body. Every segment exposes ``.webhook`` (webhook JSON dict) and ``.sdk``
(``google.apps.card_v1`` object).
"""

from config.enhanced_logging import setup_logger

from gchat_cards.card import add_card, merge_header
from gchat_cards.errors import InvalidSegmentTypeError
from gchat_cards.message import ChatMessage, build_message
from gchat_cards.models import (
    CARD_SEGMENT_TYPES,
    KNOWN_ICONS,
    WIDGET_TYPES,
    Button,
    Card,
    CardAction,
    CardHeader,
    Image,
    ImageButton,
    ImageStyle,
    KeyValue,
    OnClick,
    Section,
    Segment,
    SegmentType,
    TextButton,
    TextParagraph,
)
from gchat_cards.pipeline import CardPipeline
from gchat_cards.sections import add_card_action, add_section, build_section
from gchat_cards.segments import ensure_segment_types, segment_type_of, validate_segments
from gchat_cards.widgets import (
    add_button,
    add_image,
    add_key_value,
    add_on_click,
    add_text_paragraph,
    coalesce_button_widgets,
)

logger = setup_logger()

__all__ = [
    "CARD_SEGMENT_TYPES",
    "KNOWN_ICONS",
    "WIDGET_TYPES",
    "Button",
    "Card",
    "CardAction",
    "CardHeader",
    "CardPipeline",
    "ChatMessage",
    "Image",
    "ImageButton",
    "ImageStyle",
    "InvalidSegmentTypeError",
    "KeyValue",
    "OnClick",
    "Section",
    "Segment",
    "SegmentType",
    "TextButton",
    "TextParagraph",
    "add_button",
    "add_card",
    "add_card_action",
    "add_image",
    "add_key_value",
    "add_on_click",
    "add_section",
    "add_text_paragraph",
    "build_message",
    "build_section",
    "coalesce_button_widgets",
    "ensure_segment_types",
    "merge_header",
    "segment_type_of",
    "validate_segments",
]
