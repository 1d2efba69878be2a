"""
Customer invoices.

Reference: https://developer.xero.com/documentation/api/accounting/invoices
"""
from __future__ import annotations
from datetime import date, datetime
from typing import Any, Sequence, Union

from ..errors import XeroValidationError
from ..models import INVOICE_TYPE_ACCREC, STATUS_AUTHORISED, Contact, Invoice, LineItem, parse_xero_date
from ..query import Query, QueryMap
from .base import Facade, RecordId, build_model, require_id

DEFAULT_ORDER = "DueDate DESC"

LineItemLike = Union[LineItem, dict[str, Any]]


def _as_date(value: Union[date, datetime, str, None], message: str) -> date:
    try:
        parsed = parse_xero_date(value)
    except ValueError as e:
        raise XeroValidationError(message) from e
    if not isinstance(parsed, date):
        raise XeroValidationError(message)
    return parsed


class InvoiceFacade(Facade[Invoice]):
    resource = "Invoices"
    model = Invoice
    label = "invoice"

    def create(
        self,
        invoice_number: str,
        reference: str,
        contact_id: RecordId,
        date: Union[date, datetime],
        due_date: Union[date, datetime],
        line_items: Sequence[LineItemLike] = (),
    ) -> Invoice:
        """
        Create an authorised customer invoice.

        Args:
            invoice_number: Unique code; Xero generates one from the organisation settings when blank
            reference: Additional reference number
        """
        invoice = self._build(invoice_number, reference, contact_id, date, due_date, line_items)
        self._client.take()
        return self._single(self._create([invoice]))

    def update(
        self,
        invoice_id: RecordId,
        invoice_number: str,
        reference: str,
        contact_id: RecordId,
        date: Union[date, datetime],
        due_date: Union[date, datetime],
        line_items: Sequence[LineItemLike] = (),
    ) -> Invoice:
        """
        Update an invoice.

        The existing line items are replaced by ``line_items``. To keep an
        existing line, pass it again with its original LineItemID.
        """
        parsed = require_id(invoice_id, "invalid invoice id")
        invoice = self._build(invoice_number, reference, contact_id, date, due_date, line_items)
        invoice.invoice_id = str(parsed)
        self._client.take()
        return self._single(self._update([invoice]))

    def get(self, invoice_id: RecordId) -> Invoice:
        return self._get(invoice_id, unit_dp=4)

    def list(self, page: int = 1, query: Union[Query, QueryMap, None] = None) -> list[Invoice]:
        """
        List invoices, up to 100 per page, newest due date first.

        Ordering and 4dp unit prices are defaults the query can override.
        """
        q = self._query(query)
        if page > 0:
            q = q.with_overrides(page=page)
        q = q.with_defaults(unit_dp=4, order=DEFAULT_ORDER)
        self._client.take()
        return self._find(q)

    def _build(
        self,
        invoice_number: str,
        reference: str,
        contact_id: RecordId,
        date: Union[date, datetime, None],
        due_date: Union[date, datetime, None],
        line_items: Sequence[LineItemLike],
    ) -> Invoice:
        contact = require_id(contact_id, "contact id cannot be blank")
        issued = _as_date(date, "date cannot be blank")
        due = _as_date(due_date, "due date cannot be blank")
        if issued > due:
            raise XeroValidationError(f"date after due date ({issued} > {due})")

        return build_model(
            Invoice,
            "invalid invoice",
            type=INVOICE_TYPE_ACCREC,
            status=STATUS_AUTHORISED,
            invoice_number=invoice_number or None,
            reference=reference or None,
            contact=Contact(contact_id=str(contact)),
            date=issued,
            due_date=due,
            line_items=list(line_items),
        )
