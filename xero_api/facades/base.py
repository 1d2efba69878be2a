"""
Shared create/update/find plumbing for the resource façades.

Every operation follows the same order: validate the inputs, take a rate
limiter slot, call the transport, unwrap the response collection.
"""
from __future__ import annotations
import math
import uuid
from decimal import Decimal
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Optional, Sequence, TypeVar, Union
from pydantic import ValidationError

from ..errors import ShapeMismatchError, XeroValidationError
from ..models import XeroModel
from ..precision import Number
from ..query import Query, QueryMap

if TYPE_CHECKING:
    from ..client import XeroClient

ModelT = TypeVar("ModelT", bound=XeroModel)
RecordId = Union[str, uuid.UUID]


def require_text(value: Optional[str], message: str) -> str:
    if value is None or not str(value).strip():
        raise XeroValidationError(message)
    return value


def require_positive(value: Optional[Number], message: str) -> Number:
    """Reject missing, zero, negative, NaN and infinite amounts."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise XeroValidationError(message)
    try:
        number = float(value)
    except (TypeError, ValueError, ArithmeticError) as e:
        raise XeroValidationError(message) from e
    if not math.isfinite(number) or number <= 0:
        raise XeroValidationError(message)
    return value


def build_model(model: type[ModelT], message: str, **fields: Any) -> ModelT:
    try:
        return model(**fields)
    except ValidationError as e:
        raise XeroValidationError(f"{message}: {e}") from e


def require_id(value: Optional[RecordId], message: str) -> uuid.UUID:
    """Parse a record id; blank, malformed and nil UUIDs are all rejected."""
    if value is None or value == "":
        raise XeroValidationError(message)
    if isinstance(value, uuid.UUID):
        parsed = value
    else:
        try:
            parsed = uuid.UUID(str(value))
        except ValueError as e:
            raise XeroValidationError(message) from e
    if parsed.int == 0:
        raise XeroValidationError(message)
    return parsed


def extract_records(payload: dict[str, Any], key: str) -> list[dict[str, Any]]:
    records = payload.get(key) if isinstance(payload, dict) else None
    if isinstance(records, list):
        return [r for r in records if isinstance(r, dict)]
    if isinstance(records, dict):
        return [records]
    return []


class Facade(Generic[ModelT]):
    """
    Base class for one Xero resource.

    Subclasses set ``resource`` (the collection path and response key),
    ``model`` and ``label`` (used in error messages).
    """

    resource: ClassVar[str]
    model: ClassVar[type[XeroModel]]
    label: ClassVar[str]

    def __init__(self, client: "XeroClient"):
        self._client = client

    def _create(self, records: Sequence[ModelT], params: Optional[dict[str, str]] = None) -> list[ModelT]:
        payload = {self.resource: [r.to_payload() for r in records]}
        response = self._client.provider.create(self._client.session, self.resource, payload, params or None)
        return self._records(response)

    def _update(self, records: Sequence[ModelT], params: Optional[dict[str, str]] = None) -> list[ModelT]:
        payload = {self.resource: [r.to_payload() for r in records]}
        response = self._client.provider.update(self._client.session, self.resource, payload, params or None)
        return self._records(response)

    def _find(self, query: Query) -> list[ModelT]:
        response = self._client.provider.find(
            self._client.session,
            self.resource,
            query.to_params(),
            query.headers() or None,
        )
        return self._records(response)

    def _records(self, response: dict[str, Any]) -> list[ModelT]:
        return [self.model.model_validate(r) for r in extract_records(response, self.resource)]

    def _single(self, records: list[ModelT]) -> ModelT:
        if len(records) != 1:
            raise ShapeMismatchError(self.resource, len(records))
        return records[0]

    def _get(self, record_id: RecordId, **defaults: Any) -> ModelT:
        parsed = require_id(record_id, f"invalid {self.label} id")
        query = Query(ids=(str(parsed),)).with_overrides(**defaults)
        self._client.take()
        return self._single(self._find(query))

    def _query(self, query: Union[Query, QueryMap, None]) -> Query:
        return Query.coerce(query)
