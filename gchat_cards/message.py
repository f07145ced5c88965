"""
Message composition.

Assembles finished cards (and optional fallback text) into the body of a Chat
message, in both the webhook form and the ``google.apps.chat_v1.Message``
form. Nothing is sent from here.
"""

import logging

from google.apps import chat_v1
from pydantic import BaseModel, Field
from typing_extensions import Any, Dict, List, Optional

from config.enhanced_logging import log_execution_time
from config.settings import settings
from gchat_cards.card import add_card
from gchat_cards.models import CARD_SEGMENT_TYPES, Card, SegmentType
from gchat_cards.segments import ensure_segment_types, segment_type_of
from gchat_cards.webhook import cards_to_webhook

logger = logging.getLogger(__name__)


class ChatMessage(BaseModel):
    """A message body ready to hand to a webhook POST or ``ChatServiceClient.create_message``."""

    text: Optional[str] = None
    cards: List[Card] = Field(default_factory=list)
    thread_name: Optional[str] = None

    @property
    def webhook(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        if self.text:
            body["text"] = self.text
        if self.cards:
            body["cards"] = cards_to_webhook(self.cards)
        if self.thread_name:
            body["thread"] = {"name": self.thread_name}
        return body

    @property
    def sdk(self) -> chat_v1.Message:
        fields: Dict[str, Any] = {}
        if self.text:
            fields["text"] = self.text
        if self.cards:
            fields["cards_v2"] = [
                chat_v1.CardWithId(card_id=settings.card_id(index), card=card.sdk)
                for index, card in enumerate(self.cards)
            ]
        if self.thread_name:
            fields["thread"] = chat_v1.Thread(name=self.thread_name)
        return chat_v1.Message(**fields)


@log_execution_time
def build_message(
    segments: Any = None,
    text: Optional[str] = None,
    thread_name: Optional[str] = None,
) -> ChatMessage:
    """
    Compose a message from pipeline output.

    Cards are used as they are. If any section, card action or widget is
    present, the whole segment list is first run through ``add_card`` so those
    end up in a card of their own.

    Raises:
        InvalidSegmentTypeError: a segment has an unaccepted type
        ValueError: the message would have neither text nor cards
    """
    items = ensure_segment_types(segments, CARD_SEGMENT_TYPES, parameter="segments")
    if any(segment_type_of(item) is not SegmentType.CARD for item in items):
        cards = add_card(items)
    else:
        cards = items

    if not text and not cards:
        raise ValueError("A message needs text or at least one card")

    logger.debug(f"Composed message with {len(cards)} cards")
    return ChatMessage(text=text, cards=cards, thread_name=thread_name)
