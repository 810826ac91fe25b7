__all__ = [
    "BatchWriteError",
    "InvalidMessageAttributeTypeError",
    "MissingArgumentError",
]

from typing import Any, Dict, List

from aibs_informatics_core.exceptions import ApplicationException


class InvalidMessageAttributeTypeError(ApplicationException, TypeError):
    """Raised when an SNS message attribute is not a string, number or array"""


class MissingArgumentError(ApplicationException, ValueError):
    """Raised when a required identifier is missing, before any AWS call is made"""


class BatchWriteError(ApplicationException):
    """Raised when a batch write gives up with records still unprocessed.

    Attributes:
        unprocessed_records: The records DynamoDB never confirmed as written.
    """

    def __init__(self, message: str, unprocessed_records: List[Dict[str, Any]]):
        super().__init__(message)
        self.unprocessed_records = unprocessed_records
