"""DynamoDB read and write operations.

All records passed in and returned are plain dictionaries. Conversion to and
from DynamoDB's typed attribute encoding happens here.
"""

__all__ = [
    "batch_put_items",
    "chunk_records",
    "fetch_records_by_query",
    "increment_column",
    "perform_table_scan",
]

from concurrent.futures import ThreadPoolExecutor
from time import sleep
from typing import Any, Dict, List, Mapping, Optional, Sequence, TypeVar, Union

from aibs_informatics_aws_utils.dynamodb import (
    convert_floats_to_decimals,
    get_dynamodb_client,
    get_dynamodb_resource,
)
from aibs_informatics_core.utils.logging import get_logger

from aws_lambda_toolkit.common.config import (
    BACKOFF_STEP_MS,
    BATCH_WRITE_MAX_WORKERS,
    BATCH_WRITE_RECORDS_LIMIT,
    DEFAULT_BACKOFF_MS,
    QUERY_SAFE_BATCH_LIMIT,
)
from aws_lambda_toolkit.common.exceptions import BatchWriteError, MissingArgumentError
from aws_lambda_toolkit.dynamodb.converter import marshall, unmarshall
from aws_lambda_toolkit.dynamodb.model import RecordPage

logger = get_logger(__name__)

Record = Dict[str, Any]
Item = Dict[str, Dict[str, Any]]
T = TypeVar("T")


# ----------------------------------------------------------
# Reads
# ----------------------------------------------------------


def _with_safe_limit(request: Mapping[str, Any]) -> Dict[str, Any]:
    request = dict(request)
    if "Limit" not in request:
        request["Limit"] = QUERY_SAFE_BATCH_LIMIT
    return request


def _to_records(response: Mapping[str, Any], paginate: bool) -> Union[List[Record], RecordPage]:
    items = [unmarshall(item) for item in response.get("Items") or []]
    if paginate:
        if not items:
            return RecordPage(items=[], exclusive_start_key=None)
        return RecordPage(items=items, exclusive_start_key=response.get("LastEvaluatedKey"))
    return items


def fetch_records_by_query(
    query: Mapping[str, Any], paginate: bool = False
) -> Union[List[Record], RecordPage]:
    """Get records for the given query request.

    If the query sets no `Limit`, the safety limit of 1000 is applied. The
    caller's mapping is left untouched.

    Args:
        query (Mapping[str, Any]): DynamoDB Query request (TableName,
            KeyConditionExpression, ExpressionAttributeValues, ...).
        paginate (bool): Return a RecordPage carrying the continuation key
            instead of a plain list.

    Returns:
        List of plain records, or a RecordPage if paginate is set. No matches
        gives an empty list (or a page with no items and no key).
    """
    response = get_dynamodb_client().query(**_with_safe_limit(query))
    return _to_records(response, paginate)


def perform_table_scan(
    scan: Mapping[str, Any], paginate: bool = False
) -> Union[List[Record], RecordPage]:
    """Get records for the given scan request.

    Same limit and return conventions as `fetch_records_by_query`.
    """
    response = get_dynamodb_client().scan(**_with_safe_limit(scan))
    return _to_records(response, paginate)


# ----------------------------------------------------------
# Writes
# ----------------------------------------------------------


def increment_column(
    table_name: str,
    key: Mapping[str, Any],
    column_name: str,
    increment_by: Union[int, float],
) -> Dict[str, Any]:
    """Atomically add `increment_by` to a numeric column of one item.

    Args:
        table_name (str): The table name.
        key (Mapping[str, Any]): Plain (untyped) primary key of the item.
        column_name (str): Column to increment. Created if missing.
        increment_by (Union[int, float]): Value to add, may be negative.

    Returns:
        The raw UpdateItem response.
    """
    if not table_name:
        raise MissingArgumentError("table_name is required to increment a column")
    if not key:
        raise MissingArgumentError(f"key is required to update {table_name}")
    if not column_name:
        raise MissingArgumentError(f"column_name is required to update {table_name}")

    table = get_dynamodb_resource().Table(table_name)
    return table.update_item(
        Key=convert_floats_to_decimals(dict(key)),
        UpdateExpression=f"ADD {column_name} :val",
        ExpressionAttributeValues=convert_floats_to_decimals({":val": increment_by}),
    )


def chunk_records(records: Sequence[T], limit: int = BATCH_WRITE_RECORDS_LIMIT) -> List[List[T]]:
    return [list(records[i : i + limit]) for i in range(0, len(records), limit)]


def _put_chunk(client, table_name: str, chunk: List[Item]) -> List[Item]:
    response = client.batch_write_item(
        RequestItems={table_name: [{"PutRequest": {"Item": item}} for item in chunk]}
    )
    unprocessed = (response.get("UnprocessedItems") or {}).get(table_name) or []
    return [request["PutRequest"]["Item"] for request in unprocessed]


def batch_put_items(
    records: Sequence[Record],
    table_name: str,
    backoff: int = DEFAULT_BACKOFF_MS,
    max_attempts: Optional[int] = None,
    max_workers: int = BATCH_WRITE_MAX_WORKERS,
) -> bool:
    """Insert/upsert records into a table with BatchWriteItem.

    Records are split into chunks of 25 (the BatchWriteItem limit) and every
    chunk is submitted before any response is awaited, with at most
    `max_workers` requests in flight. Whatever DynamoDB returns as
    UnprocessedItems is retried as returned after `backoff` milliseconds,
    with the delay growing by one second every round, until nothing is left.

    Any other error from DynamoDB is raised as is and stops the write.

    Args:
        records (Sequence[Record]): Plain records to write.
        table_name (str): Destination table.
        backoff (int): Delay in milliseconds before the first retry round.
        max_attempts (Optional[int]): Give up after this many rounds. Retries
            forever when None.
        max_workers (int): Upper bound on concurrent requests.

    Raises:
        MissingArgumentError: If table_name is empty.
        BatchWriteError: If max_attempts rounds left records unprocessed.

    Returns:
        True once every record was written.
    """
    if not table_name:
        raise MissingArgumentError("table_name is required for a batch write")

    client = get_dynamodb_client()
    pending: List[Item] = [marshall(record) for record in records]
    attempt = 0

    while pending:
        attempt += 1
        chunks = chunk_records(pending)
        logger.info(
            f"batch_put_items: total bulk requests sent to {table_name}: {len(chunks)} with each "
            f"request having {BATCH_WRITE_RECORDS_LIMIT} records except the last one having "
            f"{len(chunks[-1])} records"
        )

        with ThreadPoolExecutor(max_workers=min(len(chunks), max_workers)) as executor:
            futures = [executor.submit(_put_chunk, client, table_name, chunk) for chunk in chunks]
            pending = [item for future in futures for item in future.result()]

        if not pending:
            break
        if max_attempts is not None and attempt >= max_attempts:
            raise BatchWriteError(
                f"{len(pending)} records still unprocessed in {table_name} "
                f"after {attempt} attempts",
                unprocessed_records=[unmarshall(item) for item in pending],
            )

        logger.warning(
            f"batch_put_items: {len(pending)} unprocessed records in {table_name}, "
            f"retrying in {backoff}ms"
        )
        sleep(backoff / 1000)
        backoff += BACKOFF_STEP_MS

    return True
