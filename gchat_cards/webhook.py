"""
Webhook JSON serializer.

Turns the canonical card structure into the camelCase body accepted by the
Google Chat incoming-webhook and REST ``cards`` field. Optional fields are
left out when unset.
"""

from typing_extensions import Any, Dict, List

from gchat_cards.models import (
    Button,
    ButtonEntry,
    Card,
    CardAction,
    CardHeader,
    Image,
    KeyValue,
    OnClick,
    Section,
    Segment,
    TextButton,
    TextParagraph,
)


def on_click_to_webhook(on_click: OnClick) -> Dict[str, Any]:
    if on_click.url is not None:
        return {"openLink": {"url": on_click.url}}
    return {
        "action": {
            "actionMethodName": on_click.action_method_name,
            "parameters": [
                {"key": key, "value": value} for key, value in on_click.parameters.items()
            ],
        }
    }


def button_entry_to_webhook(entry: ButtonEntry) -> Dict[str, Any]:
    if isinstance(entry, TextButton):
        return {
            "textButton": {
                "text": entry.text,
                "onClick": on_click_to_webhook(entry.on_click),
            }
        }
    image_button: Dict[str, Any] = {}
    if entry.icon is not None:
        image_button["icon"] = entry.icon
    else:
        image_button["iconUrl"] = entry.icon_url
    image_button["onClick"] = on_click_to_webhook(entry.on_click)
    return {"imageButton": image_button}


def text_paragraph_to_webhook(widget: TextParagraph) -> Dict[str, Any]:
    return {"textParagraph": {"text": widget.text}}


def button_to_webhook(widget: Button) -> Dict[str, Any]:
    return {"buttons": [button_entry_to_webhook(entry) for entry in widget.buttons]}


def image_to_webhook(widget: Image) -> Dict[str, Any]:
    image: Dict[str, Any] = {"imageUrl": widget.image_url}
    if widget.on_click is not None:
        image["onClick"] = on_click_to_webhook(widget.on_click)
    if widget.aspect_ratio is not None:
        image["aspectRatio"] = widget.aspect_ratio
    return {"image": image}


def key_value_to_webhook(widget: KeyValue) -> Dict[str, Any]:
    key_value: Dict[str, Any] = {}
    if widget.top_label is not None:
        key_value["topLabel"] = widget.top_label
    key_value["content"] = widget.content
    if widget.content_multiline:
        key_value["contentMultiline"] = True
    if widget.bottom_label is not None:
        key_value["bottomLabel"] = widget.bottom_label
    if widget.on_click is not None:
        key_value["onClick"] = on_click_to_webhook(widget.on_click)
    if widget.icon is not None:
        key_value["icon"] = widget.icon
    elif widget.icon_url is not None:
        key_value["iconUrl"] = widget.icon_url
    if widget.button is not None:
        key_value["button"] = button_entry_to_webhook(widget.button)
    return {"keyValue": key_value}


def section_to_webhook(section: Section) -> Dict[str, Any]:
    body: Dict[str, Any] = {}
    if section.header is not None:
        body["header"] = section.header
    body["widgets"] = [to_webhook(widget) for widget in section.widgets]
    return body


def card_action_to_webhook(action: CardAction) -> Dict[str, Any]:
    return {
        "actionLabel": action.action_label,
        "onClick": on_click_to_webhook(action.on_click),
    }


def header_to_webhook(header: CardHeader) -> Dict[str, Any]:
    body: Dict[str, Any] = {}
    if header.title is not None:
        body["title"] = header.title
    if header.subtitle is not None:
        body["subtitle"] = header.subtitle
    if header.image_style is not None:
        body["imageStyle"] = header.image_style.value
    if header.image_url is not None:
        body["imageUrl"] = header.image_url
    return body


def card_to_webhook(card: Card) -> Dict[str, Any]:
    body: Dict[str, Any] = {}
    if card.header is not None:
        body["header"] = header_to_webhook(card.header)
    body["cardActions"] = [card_action_to_webhook(action) for action in card.card_actions]
    body["sections"] = [section_to_webhook(section) for section in card.sections]
    return body


_SERIALIZERS = {
    TextParagraph: text_paragraph_to_webhook,
    Button: button_to_webhook,
    Image: image_to_webhook,
    KeyValue: key_value_to_webhook,
    Section: section_to_webhook,
    CardAction: card_action_to_webhook,
    Card: card_to_webhook,
}


def to_webhook(segment: Segment) -> Dict[str, Any]:
    """Serialize any segment to its webhook JSON mapping."""
    serializer = _SERIALIZERS.get(type(segment))
    if serializer is None:
        raise TypeError(f"No webhook serializer for {type(segment).__name__}")
    return serializer(segment)


def cards_to_webhook(cards: List[Card]) -> List[Dict[str, Any]]:
    return [card_to_webhook(card) for card in cards]
