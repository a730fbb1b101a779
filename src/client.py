"""
Inventory API transport.

Transport is the interface the reconciliation engine talks to. NetBoxClient
implements it against the NetBox REST API over aiohttp.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import aiohttp

from config import NetBoxConfig
from exceptions import FetchError, UpdateError, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class Page:
    """One page of a listing response."""

    results: List[Dict[str, Any]] = field(default_factory=list)
    next: Optional[str] = None
    count: Optional[int] = None


class Transport(ABC):
    """
    Abstract transport for a paginated inventory API.

    Implementations raise FetchError for failed listings and deletions,
    ValidationError for rejected creates and UpdateError for rejected
    partial updates.
    """

    @abstractmethod
    async def list(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        offset: int = 0,
    ) -> Page:
        """
        Fetch one page of a listing endpoint.

        Args:
            endpoint: Collection path, e.g. 'dcim/devices'.
            params: Filter query parameters.
            offset: Offset of the first record of the page.

        Returns:
            The decoded Page.
        """
        pass

    @abstractmethod
    async def create(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create a record and return it as stored remotely."""
        pass

    @abstractmethod
    async def partial_update(
        self, endpoint: str, record_id: int, payload: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Patch the given fields of a record and return it."""
        pass

    @abstractmethod
    async def delete(self, endpoint: str, record_id: int) -> None:
        """Delete a record."""
        pass


class NetBoxClient(Transport):
    """aiohttp transport for the NetBox REST API."""

    def __init__(self, config: NetBoxConfig):
        self.base_url = config.url.rstrip("/")
        self.token = config.token
        self.verify_ssl = config.verify_ssl
        self.page_limit = config.page_limit
        self.timeout = aiohttp.ClientTimeout(total=config.timeout)

        if not self.token:
            logger.warning(
                "NetBox token not configured. Set NETBOX_TOKEN environment variable."
            )

    def _get_headers(self) -> Dict[str, str]:
        """Get HTTP headers for NetBox API requests."""
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self.token:
            headers["Authorization"] = f"Token {self.token}"
        return headers

    def _collection_url(self, endpoint: str) -> str:
        return f"{self.base_url}/api/{endpoint.strip('/')}/"

    def _record_url(self, endpoint: str, record_id: int) -> str:
        return f"{self._collection_url(endpoint)}{record_id}/"

    def _session(self) -> aiohttp.ClientSession:
        return aiohttp.ClientSession(
            headers=self._get_headers(),
            timeout=self.timeout,
        )

    async def list(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        offset: int = 0,
    ) -> Page:
        query = {k: str(v) for k, v in (params or {}).items()}
        query["offset"] = str(offset)
        query.setdefault("limit", str(self.page_limit))
        url = self._collection_url(endpoint)

        logger.debug(f"GET {url} params={query}")
        try:
            async with self._session() as session:
                async with session.get(
                    url, params=query, ssl=self.verify_ssl
                ) as response:
                    if response.status != 200:
                        raise FetchError(
                            f"Listing {endpoint} failed: {response.status} - "
                            f"{await response.text()}",
                            status=response.status,
                        )
                    data = await response.json()
        except aiohttp.ClientError as e:
            raise FetchError(f"Listing {endpoint} failed: {e}") from e

        return Page(
            results=data.get("results") or [],
            next=data.get("next"),
            count=data.get("count"),
        )

    async def create(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = self._collection_url(endpoint)

        logger.debug(f"POST {url} payload={payload}")
        try:
            async with self._session() as session:
                async with session.post(
                    url, json=payload, ssl=self.verify_ssl
                ) as response:
                    if response.status not in (200, 201):
                        raise ValidationError(
                            f"Create on {endpoint} rejected: {response.status} - "
                            f"{await response.text()}"
                        )
                    return await response.json()
        except aiohttp.ClientError as e:
            raise ValidationError(f"Create on {endpoint} failed: {e}") from e

    async def partial_update(
        self, endpoint: str, record_id: int, payload: Dict[str, Any]
    ) -> Dict[str, Any]:
        url = self._record_url(endpoint, record_id)

        logger.debug(f"PATCH {url} payload={payload}")
        try:
            async with self._session() as session:
                async with session.patch(
                    url, json=payload, ssl=self.verify_ssl
                ) as response:
                    if response.status != 200:
                        raise UpdateError(
                            f"Update of {endpoint}/{record_id} rejected: "
                            f"{response.status} - {await response.text()}"
                        )
                    return await response.json()
        except aiohttp.ClientError as e:
            raise UpdateError(f"Update of {endpoint}/{record_id} failed: {e}") from e

    async def delete(self, endpoint: str, record_id: int) -> None:
        url = self._record_url(endpoint, record_id)

        logger.debug(f"DELETE {url}")
        try:
            async with self._session() as session:
                async with session.delete(url, ssl=self.verify_ssl) as response:
                    if response.status not in (200, 204):
                        raise FetchError(
                            f"Delete of {endpoint}/{record_id} failed: "
                            f"{response.status} - {await response.text()}",
                            status=response.status,
                        )
        except aiohttp.ClientError as e:
            raise FetchError(f"Delete of {endpoint}/{record_id} failed: {e}") from e
