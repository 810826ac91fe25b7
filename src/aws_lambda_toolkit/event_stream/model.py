"""Event stream data models."""

__all__ = [
    "EventStatus",
    "ParsedEvent",
    "PublishResult",
    "TransitionConfig",
]

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from aibs_informatics_core.models.base import (
    BooleanField,
    DictField,
    RawField,
    SchemaModel,
    StringField,
    custom_field,
)
from aibs_informatics_core.utils.json import JSON


class EventStatus(str, Enum):
    """Value of the `status` message attribute of an event stream message."""

    TRIGGER = "trigger"
    PASS = "pass"
    FAIL = "fail"


@dataclass
class ParsedEvent(SchemaModel):
    """Message and message attributes of the first record of an SNS event.

    Attributes:
        message: The JSON-decoded message (the raw text if it is not JSON).
        attributes: Attribute name -> decoded value (str, number or list).
    """

    message: JSON = custom_field(mm_field=RawField(allow_none=True))
    attributes: Dict[str, Any] = custom_field(mm_field=DictField(), default_factory=dict)


@dataclass
class PublishResult(SchemaModel):
    success: bool = custom_field(mm_field=BooleanField())
    response: JSON = custom_field(mm_field=RawField(allow_none=True), default=None)
    message_id: Optional[str] = custom_field(mm_field=StringField(allow_none=True), default=None)


@dataclass
class TransitionConfig(SchemaModel):
    """Describes a product state transition to announce on the event bus.

    Attributes:
        aws_region: Region of the event bus topic.
        aws_account_id: Account owning the event bus topic.
        tile_id: Tile the product belongs to.
        product_id: Product that transitioned, sent as the `entityId` attribute.
        state_current: State the product is now in.
        event_type: Type of the transition event.
        service: Emitting service, sent as the `emitter` attribute.
        event_id: Event id to use. A uuid4 is generated when omitted.
    """

    aws_region: str = custom_field(mm_field=StringField())
    aws_account_id: str = custom_field(mm_field=StringField())
    tile_id: str = custom_field(mm_field=StringField())
    product_id: str = custom_field(mm_field=StringField())
    state_current: str = custom_field(mm_field=StringField())
    event_type: str = custom_field(mm_field=StringField())
    service: str = custom_field(mm_field=StringField())
    event_id: Optional[str] = custom_field(mm_field=StringField(allow_none=True), default=None)
