"""
Widget builders.

Each builder is one pipeline stage: it takes the segments produced so far
(``input_objects``) and returns them with the new widget appended, so calls
can be chained::

    segments = add_text_paragraph("Nightly build finished")
    segments = add_key_value("passed", top_label="Status", input_objects=segments)
    segments = add_button(add_on_click(url="https://ci.example.com"), text="Open", input_objects=segments)
"""

import logging

from typing_extensions import Any, Dict, List, Optional

from config.settings import settings
from gchat_cards.models import (
    CARD_SEGMENT_TYPES,
    AnyWidget,
    Button,
    ButtonEntry,
    Image,
    ImageButton,
    KeyValue,
    OnClick,
    Segment,
    SegmentType,
    TextButton,
    TextParagraph,
)
from gchat_cards.segments import ensure_segment_types

logger = logging.getLogger(__name__)


def _append(input_objects: Any, segment: Segment) -> List[Segment]:
    items = ensure_segment_types(input_objects, CARD_SEGMENT_TYPES, parameter="input_objects")
    items.append(segment)
    return items


def add_on_click(
    url: Optional[str] = None,
    action_method_name: Optional[str] = None,
    parameters: Optional[Dict[str, str]] = None,
) -> OnClick:
    """
    Build the click handler for buttons, images, key-value widgets and card actions.

    Args:
        url: URL to open
        action_method_name: Bot action to invoke instead of opening a URL
        parameters: Key/value pairs sent with the action

    Returns:
        OnClick: validated click handler (exactly one of url/action_method_name)
    """
    return OnClick(url=url, action_method_name=action_method_name, parameters=parameters or {})


def add_text_paragraph(text: str, input_objects: Any = None) -> List[Segment]:
    """Append a TextParagraph widget. ``text`` may contain Chat's basic HTML tags."""
    widget = TextParagraph(text=text)
    logger.debug(f"Built TextParagraph widget ({len(text)} chars)")
    return _append(input_objects, widget)


def add_button(
    on_click: Any,
    text: Optional[str] = None,
    icon: Optional[str] = None,
    icon_url: Optional[str] = None,
    input_objects: Any = None,
) -> List[Segment]:
    """
    Append a Button widget holding a single text or image button.

    Exactly one of ``text``, ``icon`` (a known icon name) or ``icon_url`` must
    be given. Adjacent Button widgets are merged into one button group when
    they are wrapped into a section.
    """
    given = [name for name, value in (("text", text), ("icon", icon), ("icon_url", icon_url)) if value is not None]
    if len(given) != 1:
        raise ValueError(
            f"A button needs exactly one of 'text', 'icon' or 'icon_url' (got {given or 'none'})"
        )

    entry: ButtonEntry
    if text is not None:
        entry = TextButton(text=text, on_click=on_click)
    else:
        entry = ImageButton(icon=icon, icon_url=icon_url, on_click=on_click)

    logger.debug(f"Built {type(entry).__name__} widget")
    return _append(input_objects, Button(buttons=[entry]))


def add_image(
    image_url: str,
    on_click: Any = None,
    link_image: bool = False,
    aspect_ratio: Optional[float] = None,
    input_objects: Any = None,
) -> List[Segment]:
    """
    Append an Image widget.

    Args:
        image_url: Image to display
        on_click: Click handler for the image
        link_image: Clicking the image opens ``image_url`` itself
        aspect_ratio: Aspect ratio hint (webhook form only)
        input_objects: Previous pipeline output
    """
    if link_image and on_click is not None:
        raise ValueError("Use either 'link_image' or 'on_click', not both")
    if link_image:
        on_click = OnClick(url=image_url)

    widget = Image(image_url=image_url, on_click=on_click, aspect_ratio=aspect_ratio)
    logger.debug(f"Built Image widget for {image_url}")
    return _append(input_objects, widget)


def add_key_value(
    content: str,
    top_label: Optional[str] = None,
    bottom_label: Optional[str] = None,
    content_multiline: bool = False,
    on_click: Any = None,
    icon: Optional[str] = None,
    icon_url: Optional[str] = None,
    button: Optional[Button] = None,
    input_objects: Any = None,
) -> List[Segment]:
    """
    Append a KeyValue widget.

    ``button`` is a Button widget as returned by ``add_button`` (the last item
    of its result); it must hold exactly one button.
    """
    entry = None
    if button is not None:
        (button,) = ensure_segment_types([button], {SegmentType.BUTTON}, parameter="button")
        if len(button.buttons) != 1:
            raise ValueError(
                f"A KeyValue widget takes a single button, got a group of {len(button.buttons)}"
            )
        entry = button.buttons[0]

    widget = KeyValue(
        content=content,
        top_label=top_label,
        bottom_label=bottom_label,
        content_multiline=content_multiline,
        on_click=on_click,
        icon=icon,
        icon_url=icon_url,
        button=entry,
    )
    logger.debug(f"Built KeyValue widget (top_label={top_label!r})")
    return _append(input_objects, widget)


def coalesce_button_widgets(widgets: List[AnyWidget]) -> List[AnyWidget]:
    """
    Merge each run of adjacent Button widgets into a single button group.

    Walks the widgets keeping an output stack: a Button whose stack top is also
    a Button has its entries appended to the top; anything else is pushed.
    Button widgets pushed onto the stack are copied, so the caller's widgets
    are never modified.
    """
    stack: List[AnyWidget] = []
    for widget in widgets:
        if isinstance(widget, Button):
            if stack and isinstance(stack[-1], Button):
                stack[-1].buttons.extend(widget.buttons)
                continue
            widget = widget.model_copy(update={"buttons": list(widget.buttons)})
        stack.append(widget)

    if len(stack) != len(widgets):
        logger.debug(f"Coalesced {len(widgets)} widgets into {len(stack)}")
    return stack


def prepare_section_widgets(widgets: List[AnyWidget]) -> List[AnyWidget]:
    """Apply button coalescing unless it is switched off in settings."""
    if settings.coalesce_buttons:
        return coalesce_button_widgets(widgets)
    return list(widgets)
