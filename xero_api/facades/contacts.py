"""
Contacts (customers).

Reference: https://developer.xero.com/documentation/api/accounting/contacts
"""
from __future__ import annotations
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union
from loguru import logger

from ..errors import XeroError, XeroValidationError
from ..models import CONTACT_STATUS_ARCHIVED, Address, Contact
from ..query import Query, QueryMap
from .base import Facade, RecordId, require_id, require_text

# Archive a few at a time so a single run cannot exhaust the API allowance
ARCHIVE_BATCH_LIMIT = 31


class ArchivePolicy(str, Enum):
    FAIL_FAST = "fail_fast"
    BEST_EFFORT = "best_effort"


@dataclass
class ArchiveFailure:
    contact_id: Optional[str]
    error: XeroError


@dataclass
class ArchiveResult:
    contacts: list[Contact] = field(default_factory=list)   # re-queried after archiving
    archived: list[str] = field(default_factory=list)
    failures: list[ArchiveFailure] = field(default_factory=list)


def seed_filter(prefix: str) -> str:
    escaped = prefix.replace("\\", "\\\\").replace('"', '\\"')
    return f'Name!=null&&Name.StartsWith("{escaped}")'


class ContactFacade(Facade[Contact]):
    resource = "Contacts"
    model = Contact
    label = "contact"

    def create(
        self,
        name: str,
        first_name: str,
        last_name: str,
        email: str,
        *,
        status: Optional[str] = None,
        address: Optional[Address] = None,
        account_number: Optional[str] = None,
    ) -> Contact:
        """
        Create a customer contact.

        Args:
            account_number: Tag for the account number; a short unique suffix is
                appended because Xero requires account numbers to be unique
        """
        contact = self._build(name, first_name, last_name, email, status)
        if address is not None:
            contact.addresses = [address]
        if account_number:
            contact.account_number = f"{account_number} {uuid.uuid4().hex[:9]}"

        self._client.take()
        return self._single(self._create([contact]))

    def update(
        self,
        contact_id: RecordId,
        name: str,
        first_name: str,
        last_name: str,
        email: str,
        *,
        status: Optional[str] = None,
    ) -> Contact:
        parsed = require_id(contact_id, "invalid contact id")
        contact = self._build(name, first_name, last_name, email, status)
        contact.contact_id = str(parsed)

        self._client.take()
        return self._single(self._update([contact]))

    def get(self, contact_id: RecordId) -> Contact:
        return self._get(contact_id)

    def list(self, page: int = 1, query: Union[Query, QueryMap, None] = None) -> list[Contact]:
        """List contacts, up to 100 per page starting from page 1. A page in the query wins."""
        q = self._query(query).with_defaults(page=page)
        self._client.take()
        return self._find(q)

    def archive_seeded(
        self,
        prefix: Optional[str] = None,
        *,
        limit: int = ARCHIVE_BATCH_LIMIT,
        policy: Union[ArchivePolicy, str, None] = None,
    ) -> ArchiveResult:
        """
        Archive seeded contacts (names starting with ``prefix``).

        Lists the first page of matches, archives at most ``limit`` of them one
        request at a time, then lists again and returns the fresh page. Records
        already archived stay archived if a later update fails.

        Raises:
            XeroError: The first failed update, under ArchivePolicy.FAIL_FAST
        """
        prefix = self._client.config.seed_prefix if prefix is None else prefix
        if not prefix or not prefix.strip():
            raise XeroValidationError("seed prefix cannot be blank")
        policy = ArchivePolicy(policy or self._client.config.archive_policy)

        query = Query(where=seed_filter(prefix))
        matches = self.list(1, query)
        logger.info(f"Archiving up to {limit} of {len(matches)} seeded contacts matching {prefix!r}")

        result = ArchiveResult()
        for contact in matches[:limit]:
            try:
                self.update(
                    contact.contact_id,
                    contact.name,
                    contact.first_name,
                    contact.last_name,
                    contact.email_address,
                    status=CONTACT_STATUS_ARCHIVED,
                )
            except XeroError as e:
                if policy is ArchivePolicy.FAIL_FAST:
                    logger.error(f"Archiving contact {contact.contact_id} failed, stopping: {e}")
                    raise
                logger.warning(f"Archiving contact {contact.contact_id} failed, continuing: {e}")
                result.failures.append(ArchiveFailure(contact.contact_id, e))
                continue
            result.archived.append(contact.contact_id)

        result.contacts = self.list(1, query)
        logger.info(f"Archived {len(result.archived)} contacts, {len(result.failures)} failed")
        return result

    def _build(
        self,
        name: str,
        first_name: str,
        last_name: str,
        email: str,
        status: Optional[str],
    ) -> Contact:
        require_text(name, "name cannot be blank")
        require_text(first_name, "first name cannot be blank")
        require_text(last_name, "last name cannot be blank")
        require_text(email, "email cannot be blank")
        return Contact(
            name=name,
            first_name=first_name,
            last_name=last_name,
            email_address=email,
            is_customer=True,
            contact_status=status or None,
        )
