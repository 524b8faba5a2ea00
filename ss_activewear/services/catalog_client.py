"""
HTTP client for the S&S Activewear V2 REST API.

Wraps a single authenticated GET and maps every failure onto the catalog
error taxonomy, so callers never see a raw httpx exception.

Example:
    >>> async with SSActivewearClient(settings) as client:
    ...     data = await client.fetch("products/B00760004")
"""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote

import httpx

from ss_activewear.config.settings import Settings
from ss_activewear.services.normalizer import extract_error_messages
from ss_activewear.utils.errors import (
    ForbiddenError,
    InvalidResponseShapeError,
    MissingCredentialsError,
    NetworkUnreachableError,
    NotFoundError,
    UnauthorizedError,
    UpstreamError,
)
from ss_activewear.utils.logger import get_logger

logger = get_logger(__name__)


def identifier_path(endpoint: str, identifiers: str | list[str] | tuple[str, ...] = ()) -> str:
    """Build ``endpoint/id1,id2`` with each identifier URL-quoted."""
    if isinstance(identifiers, str):
        identifiers = [identifiers]
    joined = ",".join(quote(str(i).strip(), safe="") for i in identifiers if str(i).strip())
    return f"{endpoint.strip('/')}/{joined}"


class SSActivewearClient:
    """
    Authenticated GET access to the S&S API.

    Settings are passed in explicitly; the client never reads the
    environment. One instance serves one tool invocation.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def base_url(self) -> str:
        return self.settings.base_url

    def _auth(self) -> httpx.BasicAuth:
        missing = self.settings.missing_credentials()
        if missing:
            raise MissingCredentialsError(missing)
        return httpx.BasicAuth(
            self.settings.account_number.get_secret_value(),
            self.settings.api_key.get_secret_value(),
        )

    async def connect(self) -> None:
        """Initialize HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.settings.request_timeout_seconds),
                headers={
                    "Accept": "application/json",
                    "User-Agent": self.settings.user_agent,
                },
                transport=self._transport,
            )

    async def disconnect(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "SSActivewearClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()

    async def fetch(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        """
        GET ``path`` relative to the regional API root.

        Args:
            path: Endpoint path, e.g. ``products/`` or ``inventory/B00760004``.
            params: Query parameters. ``mediatype`` defaults to ``json``.

        Returns:
            Decoded JSON body, or the raw text when another media type is requested.

        Raises:
            MissingCredentialsError, UnauthorizedError, ForbiddenError,
            NotFoundError, UpstreamError, NetworkUnreachableError,
            InvalidResponseShapeError
        """
        auth = self._auth()

        if not self._client:
            await self.connect()

        query = {"mediatype": "json"}
        query.update({k: v for k, v in (params or {}).items() if v is not None})
        wants_json = str(query["mediatype"]).lower() == "json"

        if self.settings.debug:
            logger.debug(
                "Making API call",
                url=f"{self.base_url}{path}",
                params=query,
            )

        try:
            response = await self._client.get(path, params=query, auth=auth)
        except httpx.TimeoutException as e:
            logger.error("S&S API request timed out", path=path, error=str(e))
            raise NetworkUnreachableError(
                f"S&S API did not respond within {self.settings.request_timeout_seconds:g} seconds"
            ) from e
        except httpx.TransportError as e:
            logger.error("S&S API unreachable", path=path, error=str(e))
            raise NetworkUnreachableError("No response from S&S API") from e

        if self.settings.debug:
            logger.debug("Response received", path=path, status=response.status_code)

        if response.is_error:
            self._raise_for_status(response, path)

        if not wants_json:
            return response.text
        if not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as e:
            raise InvalidResponseShapeError(
                f"S&S API returned a non-JSON body for {path}"
            ) from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Best available message from an error response."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            if body.get("message"):
                return str(body["message"])
            messages = extract_error_messages(body)
            if messages:
                return ", ".join(messages)
        return response.reason_phrase or "Unknown error"

    def _raise_for_status(self, response: httpx.Response, path: str) -> None:
        status = response.status_code
        message = self._error_message(response)
        logger.warning("S&S API error response", path=path, status=status, error=message)

        if status == 401:
            raise UnauthorizedError(f"S&S API Error: 401 - {message}")
        if status == 403:
            raise ForbiddenError(f"S&S API Error: 403 - {message}")
        if status == 404:
            raise NotFoundError(f"S&S API Error: 404 - {message}")
        raise UpstreamError(status, message)
