"""
Paginated collection - aggregates every page of a listing endpoint.

Pages are fetched strictly one after another: the offset of each page is
only known from the "next" link of the page before it.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs, urlparse

from client import Transport
from exceptions import FetchError, NetBoxError, ParseError

logger = logging.getLogger(__name__)


def next_offset(next_url: Optional[str]) -> Optional[int]:
    """
    Extract the offset of the following page from a "next" link.

    Args:
        next_url: The "next" link of a page, or None on the last page.

    Returns:
        The offset to request next, or None when collection should stop
        (no link, or a link without an offset parameter).

    Raises:
        ParseError: If the offset is present but not a non-negative integer.
    """
    if not next_url:
        return None

    query = parse_qs(urlparse(next_url).query, keep_blank_values=True)
    values = query.get("offset")
    if not values:
        return None

    raw = values[0]
    if not (raw.isascii() and raw.isdigit()):
        raise ParseError(f"Invalid pagination offset '{raw}' in {next_url}")
    return int(raw)


async def collect_all(
    transport: Transport,
    endpoint: str,
    params: Optional[Dict[str, Any]] = None,
) -> List[Dict[str, Any]]:
    """
    Fetch every page of a listing and return the records in page order.

    Args:
        transport: Transport used for the listing requests.
        endpoint: Collection path, e.g. 'dcim/interfaces'.
        params: Filter parameters sent with every page request.

    Returns:
        All records across all pages.

    Raises:
        FetchError: If any page request fails. No pages are returned.
        ParseError: If a "next" link carries a malformed offset
            or an offset that does not advance.
    """
    records: List[Dict[str, Any]] = []
    offset = 0
    pages = 0

    while True:
        try:
            page = await transport.list(endpoint, params=params, offset=offset)
        except NetBoxError:
            raise
        except Exception as e:
            raise FetchError(
                f"Listing {endpoint} at offset {offset} failed: {e}"
            ) from e

        pages += 1
        records.extend(page.results)
        logger.debug(
            f"Fetched page {pages} of {endpoint} at offset {offset}: "
            f"{len(page.results)} records"
        )

        following = next_offset(page.next)
        if following is None:
            break
        if following <= offset:
            raise ParseError(
                f"Pagination of {endpoint} does not advance: "
                f"offset {following} follows offset {offset}"
            )
        offset = following

    return records
