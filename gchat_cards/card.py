"""
Card builder: the aggregation stage of a card pipeline.

``add_card`` consumes everything the earlier stages produced and emits a
tagged ``Card``:

1. header options are merged into a lazily created header
2. explicit card actions are appended
3. each segment is routed by its type tag (cards pass through, sections and
   card actions are appended, widgets are held back)
4. held-back widgets, with adjacent buttons merged, are wrapped into one
   section without a header
"""

import logging

from typing_extensions import Any, List, Optional, Union

from config.enhanced_logging import log_execution_time
from gchat_cards.models import (
    CARD_SEGMENT_TYPES,
    Card,
    CardHeader,
    ImageStyle,
    SegmentType,
)
from gchat_cards.sections import build_section
from gchat_cards.segments import ensure_segment_types, segment_type_of

logger = logging.getLogger(__name__)

CARD_ACTION_TYPES = frozenset({SegmentType.CARD_ACTION})


def _image_style(value: Union[ImageStyle, str, None]) -> Optional[ImageStyle]:
    if value is None or isinstance(value, ImageStyle):
        return value
    return ImageStyle(value.upper())


def merge_header(
    card: Card,
    title: Optional[str] = None,
    subtitle: Optional[str] = None,
    image_style: Union[ImageStyle, str, None] = None,
    image_url: Optional[str] = None,
) -> Card:
    """Set each given header field on ``card``, creating the header on first use."""
    fields = {
        "title": title,
        "subtitle": subtitle,
        "image_style": _image_style(image_style),
        "image_url": image_url,
    }
    for name, value in fields.items():
        if value is None:
            continue
        if card.header is None:
            card.header = CardHeader()
        setattr(card.header, name, value)
    return card


@log_execution_time
def add_card(
    segments: Any = None,
    header_title: Optional[str] = None,
    header_subtitle: Optional[str] = None,
    header_image_style: Union[ImageStyle, str, None] = None,
    header_image_url: Optional[str] = None,
    card_actions: Any = None,
) -> List[Card]:
    """
    Aggregate pipeline segments into a card.

    Args:
        segments: Output of earlier builders. Cards pass through unchanged;
            sections and card actions are appended in order; widgets are
            wrapped into one header-less section at the end.
        header_title: Card title
        header_subtitle: Card subtitle
        header_image_style: ``ImageStyle`` or its name (IMAGE or AVATAR)
        header_image_url: Header image
        card_actions: CardAction segments added before any piped ones

    Returns:
        List[Card]: the passed-through cards in input order, then the new card

    Raises:
        InvalidSegmentTypeError: a card action or segment has an unaccepted type
    """
    actions = ensure_segment_types(card_actions, CARD_ACTION_TYPES, parameter="card_actions")
    items = ensure_segment_types(segments, CARD_SEGMENT_TYPES, parameter="segments")
    style = _image_style(header_image_style)

    card = merge_header(
        Card(),
        title=header_title,
        subtitle=header_subtitle,
        image_style=style,
        image_url=header_image_url,
    )
    card.card_actions.extend(actions)

    emitted: List[Card] = []
    loose_widgets = []
    for item in items:
        tag = segment_type_of(item)
        if tag is SegmentType.CARD:
            emitted.append(item)
        elif tag is SegmentType.SECTION:
            card.sections.append(item)
        elif tag is SegmentType.CARD_ACTION:
            card.card_actions.append(item)
        else:
            loose_widgets.append(item)

    if loose_widgets:
        card.sections.append(build_section(loose_widgets))

    logger.debug(
        f"Built card {header_title!r}: {len(card.sections)} sections, "
        f"{len(card.card_actions)} card actions, {len(emitted)} passed-through cards"
    )
    emitted.append(card)
    return emitted
