"""Constants and environment configuration.

Provider limits and retry defaults are module constants. Deployment specific
values are read from environment variables.
"""

from typing import Optional

from aibs_informatics_core.utils.os_operations import get_env_var

SERVICE_NAME = "aws-lambda-toolkit"

# DynamoDB BatchWriteItem accepts at most 25 put/delete requests
BATCH_WRITE_RECORDS_LIMIT = 25

# Upper bound on concurrent BatchWriteItem requests
BATCH_WRITE_MAX_WORKERS = 10

# Applied to query/scan requests that do not set their own Limit
QUERY_SAFE_BATCH_LIMIT = 1000

DEFAULT_BACKOFF_MS = 1000
BACKOFF_STEP_MS = 1000

# SSM GetParameters accepts at most 10 names
SSM_GET_PARAMETERS_LIMIT = 10

EVENT_BUS_NAME = "event-bus"

EVENT_STREAM_EMITTER_KEY = "EVENT_STREAM_EMITTER"
EVENT_STREAM_TOPIC_ARN_KEY = "EVENT_STREAM_TOPIC_ARN"
METRICS_NAMESPACE_KEY = "POWERTOOLS_METRICS_NAMESPACE"

DEFAULT_EVENT_STREAM_EMITTER = "tile-event-service"


def get_event_stream_emitter() -> str:
    return get_env_var(EVENT_STREAM_EMITTER_KEY) or DEFAULT_EVENT_STREAM_EMITTER


def get_event_stream_topic_arn() -> Optional[str]:
    return get_env_var(EVENT_STREAM_TOPIC_ARN_KEY)


def get_metrics_namespace() -> str:
    return get_env_var(METRICS_NAMESPACE_KEY) or SERVICE_NAME


def get_event_bus_topic_arn(region: str, account_id: str) -> str:
    """Build the ARN of the shared event bus topic for an account and region."""
    return f"arn:aws:sns:{region}:{account_id}:{EVENT_BUS_NAME}"
