"""Identity helpers: parsing, formatting and lookup in a fetched collection."""

import logging
from typing import Any, Dict, Iterable, Optional

from exceptions import ConversionError

logger = logging.getLogger(__name__)


def parse_identity(identity: str) -> int:
    """Convert a persisted identity to the numeric id used by the API."""
    try:
        return int(identity)
    except (TypeError, ValueError):
        raise ConversionError(f"Unable to convert ID '{identity}' into an integer")


def format_identity(record_id: int) -> str:
    return str(record_id)


def resolve_identity(
    identity: str, records: Iterable[Dict[str, Any]]
) -> Optional[Dict[str, Any]]:
    """
    Find the record whose id matches the identity exactly.

    The listing filter on the server side is not trusted to be precise, so
    every candidate is compared as a string. The first match wins.

    Args:
        identity: The persisted identity to look for.
        records: Candidate records from a listing.

    Returns:
        The matching record, or None if the resource no longer exists.
    """
    found = None
    for record in records:
        if str(record.get("id")) != identity:
            continue
        if found is None:
            found = record
        else:
            logger.warning(f"Multiple records match identity {identity}, using first")
            break
    return found
