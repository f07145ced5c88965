"""
Canonical card structure for Google Chat messages.

These Pydantic models are the single in-memory source of truth for every
value the builders produce. Each segment model carries a ``segment_type`` tag
so pipeline stages can classify it, and exposes two derived views:

- ``.webhook``: the Chat webhook JSON body as a nested ``dict``
- ``.sdk``: the ``google.apps.card_v1`` object graph for the Chat client library

Both views are rebuilt from the model on access, so they always describe the
same header fields, actions, sections and widgets.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator
from typing_extensions import Any, ClassVar, Dict, List, Optional, Union

# =============================================================================
# Type tags
# =============================================================================


class SegmentType(str, Enum):
    """Type tag carried by every value a builder emits."""

    CARD = "Card"
    SECTION = "Section"
    CARD_ACTION = "CardAction"
    TEXT_PARAGRAPH = "TextParagraph"
    BUTTON = "Button"
    IMAGE = "Image"
    KEY_VALUE = "KeyValue"


WIDGET_TYPES = frozenset(
    {
        SegmentType.TEXT_PARAGRAPH,
        SegmentType.BUTTON,
        SegmentType.IMAGE,
        SegmentType.KEY_VALUE,
    }
)

CARD_SEGMENT_TYPES = frozenset(SegmentType)


class ImageStyle(str, Enum):
    """Crop style of the card header image."""

    IMAGE = "IMAGE"  # square
    AVATAR = "AVATAR"  # circle


# Icons accepted by the Chat API for keyValue and imageButton widgets
KNOWN_ICONS = frozenset(
    {
        "AIRPLANE",
        "BOOKMARK",
        "BUS",
        "CAR",
        "CLOCK",
        "CONFIRMATION_NUMBER_ICON",
        "DESCRIPTION",
        "DOLLAR",
        "EMAIL",
        "EVENT_PERFORMER",
        "EVENT_SEAT",
        "FLIGHT_ARRIVAL",
        "FLIGHT_DEPARTURE",
        "HOTEL",
        "HOTEL_ROOM_TYPE",
        "INVITE",
        "MAP_PIN",
        "MEMBERSHIP",
        "MULTIPLE_PEOPLE",
        "OFFER",
        "PERSON",
        "PHONE",
        "RESTAURANT_ICON",
        "SHOPPING_CART",
        "STAR",
        "STORE",
        "TICKET",
        "TRAIN",
        "VIDEO_CAMERA",
        "VIDEO_PLAY",
    }
)


def _check_icon(icon: Optional[str]) -> Optional[str]:
    if icon is not None and icon not in KNOWN_ICONS:
        raise ValueError(f"Unknown icon '{icon}'. Known icons: {', '.join(sorted(KNOWN_ICONS))}")
    return icon


# =============================================================================
# Click handling
# =============================================================================


class OnClick(BaseModel):
    """What happens when a button, image, key-value widget or card action is clicked.

    Either opens ``url`` or invokes the bot action ``action_method_name`` with
    ``parameters``. Exactly one of the two must be set.
    """

    url: Optional[str] = Field(None, description="URL opened by an openLink click")
    action_method_name: Optional[str] = Field(
        None, description="Method name sent back to the bot by an action click"
    )
    parameters: Dict[str, str] = Field(
        default_factory=dict,
        description="Ordered key/value parameters sent with the action",
    )

    @model_validator(mode="after")
    def _exactly_one_target(self) -> "OnClick":
        if (self.url is None) == (self.action_method_name is None):
            raise ValueError("OnClick needs exactly one of 'url' or 'action_method_name'")
        if self.url is not None and self.parameters:
            raise ValueError("OnClick parameters only apply to 'action_method_name'")
        return self


# =============================================================================
# Segments
# =============================================================================


class Segment(BaseModel):
    """Base class for every tagged value a pipeline stage can receive."""

    segment_type: ClassVar[SegmentType]

    @property
    def webhook(self) -> Dict[str, Any]:
        """Webhook JSON representation."""
        from gchat_cards.webhook import to_webhook

        return to_webhook(self)

    @property
    def sdk(self) -> Any:
        """Chat client library (``google.apps.card_v1``) representation."""
        from gchat_cards.sdk import to_sdk

        return to_sdk(self)


class TextButton(BaseModel):
    """Button entry labelled with text."""

    text: str
    on_click: OnClick


class ImageButton(BaseModel):
    """Button entry showing a known icon or an icon image."""

    icon: Optional[str] = None
    icon_url: Optional[str] = None
    on_click: OnClick

    @field_validator("icon")
    @classmethod
    def _known_icon(cls, value: Optional[str]) -> Optional[str]:
        return _check_icon(value)

    @model_validator(mode="after")
    def _exactly_one_icon(self) -> "ImageButton":
        if (self.icon is None) == (self.icon_url is None):
            raise ValueError("Image buttons need exactly one of 'icon' or 'icon_url'")
        return self


ButtonEntry = Union[TextButton, ImageButton]


class Widget(Segment):
    """A single visual unit that lives inside a section."""


class TextParagraph(Widget):
    segment_type: ClassVar[SegmentType] = SegmentType.TEXT_PARAGRAPH

    text: str


class Button(Widget):
    """A button group. Freshly built widgets hold one entry; merging adds more."""

    segment_type: ClassVar[SegmentType] = SegmentType.BUTTON

    buttons: List[ButtonEntry] = Field(..., min_length=1)


class Image(Widget):
    segment_type: ClassVar[SegmentType] = SegmentType.IMAGE

    image_url: str
    on_click: Optional[OnClick] = None
    aspect_ratio: Optional[float] = Field(None, gt=0)


class KeyValue(Widget):
    """Labelled content with an optional icon and trailing button."""

    segment_type: ClassVar[SegmentType] = SegmentType.KEY_VALUE

    content: str
    top_label: Optional[str] = None
    bottom_label: Optional[str] = None
    content_multiline: bool = False
    on_click: Optional[OnClick] = None
    icon: Optional[str] = None
    icon_url: Optional[str] = None
    button: Optional[ButtonEntry] = None

    @field_validator("icon")
    @classmethod
    def _known_icon(cls, value: Optional[str]) -> Optional[str]:
        return _check_icon(value)

    @model_validator(mode="after")
    def _single_icon_source(self) -> "KeyValue":
        if self.icon is not None and self.icon_url is not None:
            raise ValueError("KeyValue accepts 'icon' or 'icon_url', not both")
        return self


AnyWidget = Union[TextParagraph, Button, Image, KeyValue]


class Section(Segment):
    """A named or unnamed group of widgets within a card."""

    segment_type: ClassVar[SegmentType] = SegmentType.SECTION

    header: Optional[str] = None
    widgets: List[AnyWidget] = Field(..., min_length=1)


class CardAction(Segment):
    """A card-level clickable action, shown in the card's overflow menu."""

    segment_type: ClassVar[SegmentType] = SegmentType.CARD_ACTION

    action_label: str
    on_click: OnClick


class CardHeader(BaseModel):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    image_style: Optional[ImageStyle] = None
    image_url: Optional[str] = None


class Card(Segment):
    """Top-level message container with header, card actions and sections."""

    segment_type: ClassVar[SegmentType] = SegmentType.CARD

    header: Optional[CardHeader] = None
    card_actions: List[CardAction] = Field(default_factory=list)
    sections: List[Section] = Field(default_factory=list)
