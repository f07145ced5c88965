"""
Section and card action builders.
"""

import logging

from typing_extensions import Any, List, Optional

from gchat_cards.models import (
    CARD_SEGMENT_TYPES,
    WIDGET_TYPES,
    AnyWidget,
    CardAction,
    Section,
    Segment,
)
from gchat_cards.segments import ensure_segment_types, segment_type_of
from gchat_cards.widgets import prepare_section_widgets

logger = logging.getLogger(__name__)


def build_section(widgets: List[AnyWidget], header: Optional[str] = None) -> Section:
    """Wrap ``widgets`` (adjacent buttons merged) in a single section."""
    prepared = prepare_section_widgets(widgets)
    if not prepared:
        raise ValueError("A section needs at least one widget")
    section = Section(header=header, widgets=prepared)
    logger.debug(f"Built section {header!r} with {len(prepared)} widgets")
    return section


def add_section(
    input_objects: Any = None,
    widgets: Any = None,
    header: Optional[str] = None,
) -> List[Segment]:
    """
    Wrap loose widgets into a section.

    Widgets from ``input_objects`` come first, followed by ``widgets``. Other
    segments in ``input_objects`` (cards, sections, card actions) are passed
    through in place and the new section is appended after them.

    Raises:
        InvalidSegmentTypeError: a value is not a segment, or ``widgets``
            holds a non-widget
        ValueError: there is no widget to wrap
    """
    items = ensure_segment_types(input_objects, CARD_SEGMENT_TYPES, parameter="input_objects")
    extra_widgets = ensure_segment_types(widgets, WIDGET_TYPES, parameter="widgets")

    passthrough = [item for item in items if segment_type_of(item) not in WIDGET_TYPES]
    loose = [item for item in items if segment_type_of(item) in WIDGET_TYPES]

    passthrough.append(build_section(loose + extra_widgets, header=header))
    return passthrough


def add_card_action(action_label: str, on_click: Any, input_objects: Any = None) -> List[Segment]:
    """Append a card-level action (an entry of the card's overflow menu)."""
    items = ensure_segment_types(input_objects, CARD_SEGMENT_TYPES, parameter="input_objects")
    items.append(CardAction(action_label=action_label, on_click=on_click))
    logger.debug(f"Built card action {action_label!r}")
    return items
