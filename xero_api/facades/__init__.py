"""One façade per Xero resource; each is reached through a XeroClient."""

from .contacts import ARCHIVE_BATCH_LIMIT, ArchiveFailure, ArchivePolicy, ArchiveResult, ContactFacade
from .invoices import InvoiceFacade
from .items import ItemFacade
from .notes import NoteFacade
from .payments import PaymentFacade
from .users import UserFacade

__all__ = [
    "ARCHIVE_BATCH_LIMIT",
    "ArchiveFailure",
    "ArchivePolicy",
    "ArchiveResult",
    "ContactFacade",
    "InvoiceFacade",
    "ItemFacade",
    "NoteFacade",
    "PaymentFacade",
    "UserFacade",
]
