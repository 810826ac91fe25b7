from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from aibs_informatics_core.models.base import (
    DictField,
    ListField,
    RawField,
    SchemaModel,
    custom_field,
)


@dataclass
class RecordPage(SchemaModel):
    """A single page of query or scan results.

    Attributes:
        items: Unmarshalled records of this page.
        exclusive_start_key: DynamoDB's LastEvaluatedKey in its typed form. Pass it
            back as `ExclusiveStartKey` to read the next page. None on the last page.
    """

    items: List[Dict[str, Any]] = custom_field(
        mm_field=ListField(RawField()), default_factory=list
    )
    exclusive_start_key: Optional[Dict[str, Any]] = custom_field(
        mm_field=DictField(allow_none=True), default=None
    )

    @property
    def has_more(self) -> bool:
        return self.exclusive_start_key is not None
