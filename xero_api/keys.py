from __future__ import annotations
import sys
from pathlib import Path
from loguru import logger


def read_credential_file(path: str) -> str:
    """
    Read a credential (client secret) from a file.

    Runs at startup only. A missing path or unreadable file ends the process,
    there is nothing useful the client can do without its credentials.
    """
    if not path:
        logger.error("empty credential file path")
        sys.exit(1)

    try:
        return Path(path).read_text(encoding="utf-8").strip()
    except OSError as e:
        logger.error(f"could not read credential file contents: {e}")
        sys.exit(1)
