"""
History notes attached to contacts.

Reference: https://developer.xero.com/documentation/api/accounting/historyandnotes
"""
from __future__ import annotations
from loguru import logger

from ..models import HistoryRecord, NoteRequest
from .base import RecordId, require_id, require_text

JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


class NoteFacade:
    def __init__(self, client):
        self._client = client

    def create_for_contact(self, contact_id: RecordId, details: str) -> None:
        """Add a free-text history note to a contact."""
        parsed = require_id(contact_id, "invalid contact id")
        require_text(details, "note details cannot be blank")

        request = NoteRequest(history_records=[HistoryRecord(details=details)])
        payload = request.model_dump_json(by_alias=True).encode("utf-8")
        logger.debug(f"Contact {parsed} note payload: {payload.decode('utf-8')}")

        self._client.take()
        body = self._client.provider.create_raw(
            self._client.session,
            f"Contacts/{parsed}/History",
            dict(JSON_HEADERS),
            payload,
        )
        logger.debug(body.decode("utf-8", errors="replace"))
