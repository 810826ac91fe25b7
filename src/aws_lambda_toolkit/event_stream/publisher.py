"""Publishing to and parsing of the SNS event stream."""

__all__ = [
    "parse",
    "publish",
    "publish_transition",
]

import uuid
from typing import Any, Dict, Mapping, Optional

from aibs_informatics_aws_utils.sns import get_sns_client
from aibs_informatics_core.utils.json import JSON
from aibs_informatics_core.utils.logging import get_logger
from aws_lambda_powertools.utilities.data_classes import SNSEvent
from botocore.exceptions import BotoCoreError, ClientError

from aws_lambda_toolkit.common.config import get_event_bus_topic_arn
from aws_lambda_toolkit.common.exceptions import MissingArgumentError
from aws_lambda_toolkit.common.utils import parse_json, to_json
from aws_lambda_toolkit.event_stream.attributes import parse_attributes, parse_sns_type
from aws_lambda_toolkit.event_stream.model import (
    EventStatus,
    ParsedEvent,
    PublishResult,
    TransitionConfig,
)

logger = get_logger(__name__)


def publish(
    topic_arn: str,
    message: JSON,
    attributes: Optional[Mapping[str, Any]] = None,
    options: Optional[Mapping[str, Any]] = None,
) -> PublishResult:
    """Publish a message to an SNS topic of the event stream.

    Args:
        topic_arn (str): Destination topic.
        message (JSON): Payload, sent as JSON text.
        attributes (Optional[Mapping[str, Any]]): Message attributes. Values must be
            strings, numbers or lists. None values are skipped.
        options (Optional[Mapping[str, Any]]): Extra parameters merged into the
            SNS Publish request (e.g. Subject, MessageGroupId).

    Raises:
        MissingArgumentError: If topic_arn is empty.
        InvalidMessageAttributeTypeError: If an attribute has an unsupported type.
            Raised before anything is sent.

    Returns:
        PublishResult: success flag with the SNS response, or the error text if
            SNS rejected the request.
    """
    if not topic_arn:
        raise MissingArgumentError("topic_arn is required to publish a message")

    params: Dict[str, Any] = {
        "Message": to_json(message),
        "TopicArn": topic_arn,
        "MessageAttributes": parse_attributes(attributes),
        **(options or {}),
    }
    try:
        response = get_sns_client().publish(**params)
    except (ClientError, BotoCoreError) as e:
        logger.error(f"SNS Publish - Failure: {e}")
        return PublishResult(success=False, response=str(e))

    logger.info(f"SNS Publish - Success: {to_json(params)}")
    return PublishResult(
        success=(200 <= response["ResponseMetadata"]["HTTPStatusCode"] < 300),
        response=to_json(response),
        message_id=response.get("MessageId"),
    )


def publish_transition(config: TransitionConfig, payload: JSON, context: JSON) -> PublishResult:
    """Announce a product state transition on the account's event bus topic."""
    return publish(
        get_event_bus_topic_arn(config.aws_region, config.aws_account_id),
        {
            "payload": payload,
            "context": context,
            "metadata": {
                "eventType": config.event_type,
                "stateCurrent": config.state_current,
                "tileId": config.tile_id,
            },
        },
        {
            "emitter": config.service,
            "eventId": config.event_id or str(uuid.uuid4()),
            "entity": "product",
            "entityId": config.product_id,
            "eventType": "transition",
            "status": EventStatus.TRIGGER,
        },
    )


def parse(event: Dict[str, Any]) -> ParsedEvent:
    """Parse the message and message attributes of the first record of an SNS event.

    The message is JSON-decoded when possible. `String` attributes are kept as
    they are; `Number` and `String.Array` attributes are JSON-decoded.
    """
    sns_message = SNSEvent(event).record.sns
    attributes = {
        key: parse_sns_type(attribute.value, attribute.get_type)
        for key, attribute in sns_message.message_attributes.items()
    }
    return ParsedEvent(message=parse_json(sns_message.message), attributes=attributes)
