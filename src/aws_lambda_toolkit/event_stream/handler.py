"""Event stream handler wrapper.

Runs a handler on the message of an inbound SNS event and reports the outcome
back on the event stream: a `pass` message carrying the handler result, or a
`fail` message carrying the error. Every invocation publishes exactly once.
"""

__all__ = [
    "EventHandlerType",
    "EventStreamHandler",
    "LambdaHandlerType",
    "with_event_stream",
]

import traceback
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Union

from aibs_informatics_core.utils.json import JSON
from aibs_informatics_core.utils.logging import get_logger
from aws_lambda_powertools.metrics import EphemeralMetrics, Metrics
from aws_lambda_powertools.utilities.typing import LambdaContext

from aws_lambda_toolkit.common.base import HandlerMixins
from aws_lambda_toolkit.common.config import get_event_stream_emitter, get_event_stream_topic_arn
from aws_lambda_toolkit.common.exceptions import MissingArgumentError
from aws_lambda_toolkit.common.logging import LoggingMixins
from aws_lambda_toolkit.common.metrics import (
    MetricsMixins,
    add_duration_metric,
    add_failure_metric,
    add_success_metric,
)
from aws_lambda_toolkit.common.utils import to_json
from aws_lambda_toolkit.event_stream import publisher
from aws_lambda_toolkit.event_stream.model import EventStatus, ParsedEvent, PublishResult

LambdaEvent = Union[JSON]  # type: ignore # https://github.com/python/mypy/issues/7866
LambdaHandlerType = Callable[[LambdaEvent, LambdaContext], Optional[JSON]]
EventHandlerType = Callable[[ParsedEvent], JSON]

logger = get_logger(__name__)


def _serialize_error(error: BaseException) -> str:
    return to_json(
        {
            "name": error.__class__.__name__,
            "message": str(error),
            "stack": "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            ),
        }
    )


def _build_attributes(
    parsed_event: Optional[ParsedEvent], emitter: str, status: EventStatus
) -> Dict[str, Any]:
    inbound = parsed_event.attributes if parsed_event else {}
    message = parsed_event.message if parsed_event else None
    metadata = message.get("metadata") if isinstance(message, dict) else None
    return {
        "emitter": emitter,
        "eventId": str(uuid.uuid4()),
        "triggerEventId": inbound.get("eventId"),
        "entity": inbound.get("entity"),
        "entityId": inbound.get("entityId"),
        "operation": inbound.get("operation"),
        "metadata": metadata.get("eventType") if isinstance(metadata, dict) else None,
        "status": status,
    }


def _build_message(parsed_event: Optional[ParsedEvent], payload: JSON) -> Dict[str, Any]:
    message = parsed_event.message if parsed_event else None
    if not isinstance(message, dict):
        message = {}
    return {
        "context": message.get("context"),
        "metadata": message.get("metadata"),
        "payload": payload,
    }


def with_event_stream(
    topic_arn: str,
    event_handler: EventHandlerType,
    event: Dict[str, Any],
    emitter: Optional[str] = None,
    metrics: Optional[Union[EphemeralMetrics, Metrics]] = None,
) -> PublishResult:
    """Handle an SNS event and publish the outcome to the event stream.

    The event is parsed and passed to `event_handler`. Its return value is
    published with status `pass`. If parsing or the handler raises, the error is
    published with status `fail` instead. The inbound `context` and `metadata`
    of the message are carried over, and the inbound `eventId` becomes the
    `triggerEventId` of the outbound message.

    Args:
        topic_arn (str): Topic to publish the outcome to.
        event_handler (EventHandlerType): Called with the parsed event.
        event (Dict[str, Any]): The inbound SNS event.
        emitter (Optional[str]): Value of the `emitter` attribute. Defaults to the
            EVENT_STREAM_EMITTER env var, else "tile-event-service".
        metrics (Optional[Union[EphemeralMetrics, Metrics]]): Receives success,
            failure and duration metrics when given.

    Returns:
        PublishResult of the single outbound publish.
    """
    emitter = emitter or get_event_stream_emitter()
    start = datetime.now()
    logger.info(f"event: {to_json(event)}")

    parsed_event: Optional[ParsedEvent] = None
    try:
        parsed_event = publisher.parse(event)
        logger.info(f"message: {to_json(parsed_event.message)}")
        logger.info(f"attributes: {to_json(parsed_event.attributes)}")

        payload = event_handler(parsed_event)
        logger.info(f"result: {to_json(payload)}")
    except Exception as e:
        logger.exception(f"ERROR: {e}")
        if metrics is not None:
            add_failure_metric(metrics=metrics)
            add_duration_metric(start=start, metrics=metrics)
        return publisher.publish(
            topic_arn,
            _build_message(parsed_event, {"error": _serialize_error(e)}),
            _build_attributes(parsed_event, emitter, EventStatus.FAIL),
        )

    if metrics is not None:
        add_success_metric(metrics=metrics)
        add_duration_metric(start=start, metrics=metrics)
    return publisher.publish(
        topic_arn,
        _build_message(parsed_event, payload),
        _build_attributes(parsed_event, emitter, EventStatus.PASS),
    )


@dataclass  # type: ignore[misc] # mypy #5374
class EventStreamHandler(LoggingMixins, MetricsMixins, HandlerMixins):
    """Base class for Lambda functions triggered by the SNS event stream.

    Subclasses implement `handle`, which receives the parsed event and returns
    the payload of the `pass` message. Raising publishes a `fail` message.

    Attributes:
        topic_arn: Topic the outcome is published to. Defaults to the
            EVENT_STREAM_TOPIC_ARN env var.
        emitter: Value of the `emitter` attribute of outbound messages.

    Example:
        ```python
        class ProductHandler(EventStreamHandler):
            def handle(self, event: ParsedEvent) -> JSON:
                return {"productId": event.attributes["entityId"]}

        handler = ProductHandler.get_handler()
        ```
    """

    topic_arn: Optional[str] = field(default_factory=get_event_stream_topic_arn)
    emitter: str = field(default_factory=get_event_stream_emitter)

    def __post_init__(self):
        if not self.topic_arn:
            raise MissingArgumentError(
                f"{self.handler_name()} needs a topic_arn or the EVENT_STREAM_TOPIC_ARN env var"
            )
        self.context = LambdaContext()

    def handle(self, event: ParsedEvent) -> JSON:
        raise NotImplementedError(  # pragma: no cover
            "You must implement the handle method of an EventStreamHandler"
        )

    def process(self, event: Dict[str, Any]) -> PublishResult:
        assert self.topic_arn
        return with_event_stream(
            self.topic_arn, self.handle, event, emitter=self.emitter, metrics=self.metrics
        )

    @classmethod
    def get_handler(cls, *args, **kwargs) -> LambdaHandlerType:
        """Create a Lambda handler function for this handler class.

        The returned function injects the Lambda context into the logger,
        instantiates the handler class with the given arguments, processes the
        event and flushes the collected metrics.
        """
        logger = cls.get_logger(service=cls.service_name())
        metrics = cls.get_metrics(service=cls.service_name())

        @logger.inject_lambda_context(log_event=True)
        @metrics.log_metrics
        def handler(event: LambdaEvent, context: LambdaContext) -> Optional[JSON]:
            lambda_handler = cls(*args, **kwargs)
            logger.info(f"Instantiated {lambda_handler}.")
            lambda_handler.log = logger
            lambda_handler.metrics = metrics
            lambda_handler.context = context
            lambda_handler.add_logger_to_root()

            result = lambda_handler.process(event)
            lambda_handler.log.info(f"Published outcome: {result}")
            return result.to_dict()

        return handler

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(topic_arn={self.topic_arn}, emitter={self.emitter})"
