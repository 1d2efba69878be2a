"""
Request/response records for the Xero accounting API.

Field names follow Python conventions and serialise to Xero's PascalCase.
Only the fields this package reads or writes are declared; anything else
Xero returns is kept as an extra and passed back through untouched.
"""
from __future__ import annotations
import re
from datetime import date, datetime, timezone
from typing import Annotated, Any, Optional
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_pascal

# Fixed tags written by the façades
INVOICE_TYPE_ACCREC = "ACCREC"              # accounts receivable aka customer invoice
PAYMENT_TYPE_ACCRECPAYMENT = "ACCRECPAYMENT"
STATUS_AUTHORISED = "AUTHORISED"
CONTACT_STATUS_ACTIVE = "ACTIVE"
CONTACT_STATUS_ARCHIVED = "ARCHIVED"

# Xero's JSON dates look like /Date(1518685950940+0000)/
_MS_DATE = re.compile(r"^/Date\((-?\d+)([+-]\d{4})?\)/$")


def parse_xero_date(value: Any) -> Any:
    """Accept Xero's /Date(ms)/ form, ISO dates and datetimes; return a date."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        match = _MS_DATE.match(value.strip())
        if match:
            millis = int(match.group(1))
            return datetime.fromtimestamp(millis / 1000, tz=timezone.utc).date()
        return date.fromisoformat(value.strip()[:10])
    return value


XeroDate = Annotated[Optional[date], BeforeValidator(parse_xero_date)]


class XeroModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        extra="allow",
    )

    def to_payload(self) -> dict[str, Any]:
        """Serialise for a request body: Xero field names, no unset fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Address(XeroModel):
    address_type: Optional[str] = None      # POBOX or STREET
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    address_line3: Optional[str] = None
    address_line4: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    attention_to: Optional[str] = None


class Contact(XeroModel):
    contact_id: Optional[str] = Field(default=None, alias="ContactID")
    contact_status: Optional[str] = None
    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email_address: Optional[str] = None
    account_number: Optional[str] = None
    is_customer: Optional[bool] = None
    addresses: Optional[list[Address]] = None


class PurchaseAndSaleDetails(XeroModel):
    unit_price: Optional[float] = None
    account_code: Optional[str] = None
    tax_type: Optional[str] = None


class Item(XeroModel):
    item_id: Optional[str] = Field(default=None, alias="ItemID")
    code: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None       # sales description, 4000 chars max
    sales_details: Optional[PurchaseAndSaleDetails] = None


class LineItem(XeroModel):
    # Keep the LineItemID on update to preserve an existing line
    line_item_id: Optional[str] = Field(default=None, alias="LineItemID")
    description: Optional[str] = None
    quantity: Optional[float] = None
    unit_amount: Optional[float] = None
    item_code: Optional[str] = None
    account_code: Optional[str] = None
    tax_type: Optional[str] = None
    line_amount: Optional[float] = None
    discount_rate: Optional[float] = None


class Invoice(XeroModel):
    invoice_id: Optional[str] = Field(default=None, alias="InvoiceID")
    type: Optional[str] = None
    invoice_number: Optional[str] = None
    reference: Optional[str] = None
    contact: Optional[Contact] = None
    date: XeroDate = None
    due_date: XeroDate = None
    status: Optional[str] = None
    line_items: Optional[list[LineItem]] = None
    sub_total: Optional[float] = None
    total_tax: Optional[float] = None
    total: Optional[float] = None
    amount_due: Optional[float] = None
    amount_paid: Optional[float] = None
    currency_code: Optional[str] = None


class Account(XeroModel):
    account_id: Optional[str] = Field(default=None, alias="AccountID")
    code: Optional[str] = None
    name: Optional[str] = None


class Payment(XeroModel):
    payment_id: Optional[str] = Field(default=None, alias="PaymentID")
    date: XeroDate = None
    amount: Optional[float] = None
    reference: Optional[str] = None
    status: Optional[str] = None
    payment_type: Optional[str] = None
    invoice: Optional[Invoice] = None
    account: Optional[Account] = None


class User(XeroModel):
    user_id: Optional[str] = Field(default=None, alias="UserID")
    email_address: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_subscriber: Optional[bool] = None
    organisation_role: Optional[str] = None


class HistoryRecord(XeroModel):
    details: str


class NoteRequest(XeroModel):
    history_records: list[HistoryRecord]
