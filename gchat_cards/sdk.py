"""
Chat client library serializer.

Turns the canonical card structure into ``google.apps.card_v1`` messages, the
object model used by the Google Chat client library
(``google.apps.chat_v1.ChatServiceClient``). Field mapping from the webhook
schema:

- header ``imageStyle`` IMAGE/AVATAR -> ``image_type`` SQUARE/CIRCLE
- ``buttons`` widget -> ``button_list``
- ``keyValue`` widget -> ``decorated_text`` (``content`` -> ``text``,
  ``contentMultiline`` -> ``wrap_text``, icon -> ``start_icon``)
- ``action.actionMethodName`` -> ``action.function``

Unset optional fields are never passed to the constructors.
"""

from google.apps import card_v1
from typing_extensions import Any, Dict

from gchat_cards.models import (
    Button,
    ButtonEntry,
    Card,
    CardAction,
    CardHeader,
    Image,
    ImageStyle,
    KeyValue,
    OnClick,
    Section,
    Segment,
    TextButton,
    TextParagraph,
)

IMAGE_STYLE_TO_IMAGE_TYPE = {
    ImageStyle.IMAGE: card_v1.Widget.ImageType.SQUARE,
    ImageStyle.AVATAR: card_v1.Widget.ImageType.CIRCLE,
}


def on_click_to_sdk(on_click: OnClick) -> card_v1.OnClick:
    if on_click.url is not None:
        return card_v1.OnClick(open_link=card_v1.OpenLink(url=on_click.url))
    return card_v1.OnClick(
        action=card_v1.Action(
            function=on_click.action_method_name,
            parameters=[
                card_v1.Action.ActionParameter(key=key, value=value)
                for key, value in on_click.parameters.items()
            ],
        )
    )


def _icon_to_sdk(icon, icon_url) -> card_v1.Icon:
    if icon is not None:
        return card_v1.Icon(known_icon=icon)
    return card_v1.Icon(icon_url=icon_url)


def button_entry_to_sdk(entry: ButtonEntry) -> card_v1.Button:
    if isinstance(entry, TextButton):
        return card_v1.Button(text=entry.text, on_click=on_click_to_sdk(entry.on_click))
    return card_v1.Button(
        icon=_icon_to_sdk(entry.icon, entry.icon_url),
        on_click=on_click_to_sdk(entry.on_click),
    )


def text_paragraph_to_sdk(widget: TextParagraph) -> card_v1.Widget:
    return card_v1.Widget(text_paragraph=card_v1.TextParagraph(text=widget.text))


def button_to_sdk(widget: Button) -> card_v1.Widget:
    return card_v1.Widget(
        button_list=card_v1.ButtonList(
            buttons=[button_entry_to_sdk(entry) for entry in widget.buttons]
        )
    )


def image_to_sdk(widget: Image) -> card_v1.Widget:
    # card_v1.Image has no aspect ratio; it only exists in the webhook form
    fields: Dict[str, Any] = {"image_url": widget.image_url}
    if widget.on_click is not None:
        fields["on_click"] = on_click_to_sdk(widget.on_click)
    return card_v1.Widget(image=card_v1.Image(**fields))


def key_value_to_sdk(widget: KeyValue) -> card_v1.Widget:
    fields: Dict[str, Any] = {"text": widget.content}
    if widget.top_label is not None:
        fields["top_label"] = widget.top_label
    if widget.content_multiline:
        fields["wrap_text"] = True
    if widget.bottom_label is not None:
        fields["bottom_label"] = widget.bottom_label
    if widget.on_click is not None:
        fields["on_click"] = on_click_to_sdk(widget.on_click)
    if widget.icon is not None or widget.icon_url is not None:
        fields["start_icon"] = _icon_to_sdk(widget.icon, widget.icon_url)
    if widget.button is not None:
        fields["button"] = button_entry_to_sdk(widget.button)
    return card_v1.Widget(decorated_text=card_v1.DecoratedText(**fields))


def section_to_sdk(section: Section) -> card_v1.Card.Section:
    fields: Dict[str, Any] = {"widgets": [to_sdk(widget) for widget in section.widgets]}
    if section.header is not None:
        fields["header"] = section.header
    return card_v1.Card.Section(**fields)


def card_action_to_sdk(action: CardAction) -> card_v1.Card.CardAction:
    return card_v1.Card.CardAction(
        action_label=action.action_label,
        on_click=on_click_to_sdk(action.on_click),
    )


def header_to_sdk(header: CardHeader) -> card_v1.Card.CardHeader:
    fields: Dict[str, Any] = {}
    if header.title is not None:
        fields["title"] = header.title
    if header.subtitle is not None:
        fields["subtitle"] = header.subtitle
    if header.image_style is not None:
        fields["image_type"] = IMAGE_STYLE_TO_IMAGE_TYPE[header.image_style]
    if header.image_url is not None:
        fields["image_url"] = header.image_url
    return card_v1.Card.CardHeader(**fields)


def card_to_sdk(card: Card) -> card_v1.Card:
    fields: Dict[str, Any] = {
        "card_actions": [card_action_to_sdk(action) for action in card.card_actions],
        "sections": [section_to_sdk(section) for section in card.sections],
    }
    if card.header is not None:
        fields["header"] = header_to_sdk(card.header)
    return card_v1.Card(**fields)


_SERIALIZERS = {
    TextParagraph: text_paragraph_to_sdk,
    Button: button_to_sdk,
    Image: image_to_sdk,
    KeyValue: key_value_to_sdk,
    Section: section_to_sdk,
    CardAction: card_action_to_sdk,
    Card: card_to_sdk,
}


def to_sdk(segment: Segment) -> Any:
    """Serialize any segment to its ``google.apps.card_v1`` object."""
    serializer = _SERIALIZERS.get(type(segment))
    if serializer is None:
        raise TypeError(f"No client library serializer for {type(segment).__name__}")
    return serializer(segment)
