"""
Payments against customer invoices.

Reference: https://developer.xero.com/documentation/api/accounting/payments
"""
from __future__ import annotations
from datetime import date, datetime
from typing import Union

from ..errors import XeroValidationError
from ..models import PAYMENT_TYPE_ACCRECPAYMENT, STATUS_AUTHORISED, Account, Invoice, Payment
from ..precision import Number
from ..query import Query, QueryMap
from .base import Facade, RecordId, build_model, require_id, require_positive, require_text


class PaymentFacade(Facade[Payment]):
    resource = "Payments"
    model = Payment
    label = "payment"

    def create(
        self,
        invoice_id: RecordId,
        date: Union[date, datetime],
        amount: Number,
        reference: str,
        account_code: str,
        query: Union[Query, QueryMap, None] = None,
    ) -> Payment:
        """
        Record a payment on an invoice.

        Args:
            date: Date the payment is made
            amount: Must not exceed the amount still owing on the invoice
            reference: Description shown on the payment, e.g. "Direct Debit"
            account_code: Code of the bank account the payment goes into
            query: Extra request parameters forwarded with the create call
        """
        parsed = require_id(invoice_id, "invoice id cannot be blank")
        require_positive(amount, "amount must be above 0")
        require_text(reference, "reference cannot be blank")
        if not date:
            raise XeroValidationError("invalid date zero")
        require_text(account_code, "account code cannot be blank")
        params = self._query(query).to_params()

        payment = build_model(
            Payment,
            "invalid payment",
            date=date,
            amount=float(amount),
            reference=reference,
            status=STATUS_AUTHORISED,
            payment_type=PAYMENT_TYPE_ACCRECPAYMENT,
            invoice=Invoice(invoice_id=str(parsed)),
            account=Account(code=account_code),
        )
        self._client.take()
        return self._single(self._create([payment], params))

    def get(self, payment_id: RecordId) -> Payment:
        return self._get(payment_id)

    def list(self, page: int = 1, query: Union[Query, QueryMap, None] = None) -> list[Payment]:
        q = self._query(query).with_overrides(page=page)
        self._client.take()
        return self._find(q)
