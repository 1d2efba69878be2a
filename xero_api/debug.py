"""
Debugging and diagnostic utilities for the Xero client.

Provides tools for:
- Testing credentials and connectivity
- Listing and fetching records as Xero returns them
- Archiving seeded contacts
- Adding a history note to a contact
"""
from __future__ import annotations
import sys
import json
from typing import Any, Optional
from loguru import logger

from .client import XeroClient
from .config import XeroConfig
from .errors import XeroError
from .facades import ArchivePolicy
from .models import XeroModel
from .query import Query

RESOURCES = ("contacts", "items", "invoices", "payments")


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level)
    if log_file:
        logger.add(log_file, level=level, rotation="10 MB")


def _dump(records: Any) -> str:
    if isinstance(records, XeroModel):
        records = records.to_payload()
    elif isinstance(records, list):
        records = [r.to_payload() if isinstance(r, XeroModel) else r for r in records]
    return json.dumps(records, indent=2, default=str)


class XeroDebugger:
    """
    Debugging utilities for the Xero client.

    Usage:
        debugger = XeroDebugger()
        debugger.test_connection()
        debugger.list_records("invoices", page=2)
        debugger.archive_seeded(best_effort=True)
    """

    def __init__(self, config: Optional[XeroConfig] = None, client: Optional[XeroClient] = None):
        self.config = config or XeroConfig.from_env()
        self.client = client or XeroClient(self.config)

    def test_connection(self, verbose: bool = True) -> dict:
        """
        Check credentials by listing organisation users.

        Returns connection status and a user count.
        """
        try:
            users = self.client.verify()
            result = {"status": "connected", "url": self.config.api_url, "users": len(users)}
        except XeroError as e:
            result = {"status": "failed", "url": self.config.api_url, "error": str(e)}

        if verbose:
            print("\n=== Xero Connection Test ===")
            print(f"Status: {result['status']}")
            print(f"URL: {result['url']}")
            if result["status"] == "connected":
                print(f"Users visible: {result['users']}")
            else:
                print(f"Error: {result['error']}")
        return result

    def list_records(self, resource: str, page: int = 1, where: Optional[str] = None) -> list:
        if resource not in RESOURCES:
            raise ValueError(f"Unknown resource: {resource}. Valid: {list(RESOURCES)}")
        query = Query(where=where) if where else None
        records = getattr(self.client, resource).list(page, query)
        print(_dump(records))
        return records

    def get_record(self, resource: str, record_id: str):
        if resource not in RESOURCES:
            raise ValueError(f"Unknown resource: {resource}. Valid: {list(RESOURCES)}")
        record = getattr(self.client, resource).get(record_id)
        print(_dump(record))
        return record

    def archive_seeded(self, prefix: Optional[str] = None, best_effort: bool = False):
        policy = ArchivePolicy.BEST_EFFORT if best_effort else ArchivePolicy.FAIL_FAST
        result = self.client.contacts.archive_seeded(prefix, policy=policy)
        print(f"Archived: {len(result.archived)}")
        for failure in result.failures:
            print(f"  Failed {failure.contact_id}: {failure.error}")
        print(f"Seeded contacts remaining on page 1: {len(result.contacts)}")
        return result

    def add_note(self, contact_id: str, details: str) -> None:
        self.client.notes.create_for_contact(contact_id, details)
        print(f"Note added to contact {contact_id}")

    def close(self):
        self.client.close()


# CLI entry point
def main(argv: Optional[list[str]] = None) -> int:
    import argparse

    parser = argparse.ArgumentParser(
        description="Xero API client - Debug Utilities"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Debug command")

    subparsers.add_parser("test-connection", help="Test Xero credentials")

    list_parser = subparsers.add_parser("list", help="List records")
    list_parser.add_argument("resource", choices=RESOURCES)
    list_parser.add_argument("--page", "-p", type=int, default=1)
    list_parser.add_argument("--where", "-w", help="Xero where filter")

    get_parser = subparsers.add_parser("get", help="Fetch one record by id")
    get_parser.add_argument("resource", choices=RESOURCES)
    get_parser.add_argument("id", help="Record id")

    archive_parser = subparsers.add_parser("archive-seeded", help="Archive seeded contacts")
    archive_parser.add_argument("--prefix", help="Name prefix (default: XERO_SEED_PREFIX)")
    archive_parser.add_argument(
        "--best-effort",
        action="store_true",
        help="Keep going when an update fails",
    )

    note_parser = subparsers.add_parser("note", help="Add a history note to a contact")
    note_parser.add_argument("contact_id")
    note_parser.add_argument("details")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    config = XeroConfig.from_env()
    configure_logging("DEBUG" if args.verbose else config.log_level, config.log_file)

    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(error)
        return 1

    debugger = XeroDebugger(config)
    try:
        if args.command == "test-connection":
            result = debugger.test_connection()
            return 0 if result["status"] == "connected" else 1

        elif args.command == "list":
            debugger.list_records(args.resource, page=args.page, where=args.where)

        elif args.command == "get":
            debugger.get_record(args.resource, args.id)

        elif args.command == "archive-seeded":
            debugger.archive_seeded(args.prefix, best_effort=args.best_effort)

        elif args.command == "note":
            debugger.add_note(args.contact_id, args.details)

    except XeroError as e:
        logger.error(f"Xero error: {e}")
        return 1
    finally:
        debugger.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
