"""EspoCRM HTTP client."""

import logging
from contextlib import nullcontext
from dataclasses import dataclass
from typing import Any, ContextManager, Iterable

import httpx

from .exceptions import (
    ConnectionError,
    HttpError,
    PayloadRequiredError,
    ResponseTooLargeError,
)
from .query import Parameters, Where, encode_filters

logger = logging.getLogger(__name__)

API_PATH = "/api/v1"
API_KEY_HEADER = "x-api-key"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_RESPONSE_SIZE = 4 * 1024 * 1024

_BODY_REQUIRED = frozenset({"POST", "PUT"})


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings of an :class:`EspoCRMClient`.

    Args:
        api_key: API key sent in the ``x-api-key`` header.
        timeout: Request timeout in seconds.
        max_response_size: Largest response body accepted, in bytes.
    """

    api_key: str
    timeout: float = DEFAULT_TIMEOUT
    max_response_size: int = DEFAULT_MAX_RESPONSE_SIZE


class EspoCRMClient:
    """HTTP client for the EspoCRM REST API.

    Every method performs a single request and returns the raw response
    body. No connection is kept between calls, so one client can be shared
    between threads.

    A ``transport`` passed in is shared by all calls and only closed by
    :meth:`close`.

    Identifiers and entity types are inserted into the URL as given. Use
    :func:`espocrm.query.quote_value` for text that is not URL-safe.

    Args:
        base_url: Base URL of the EspoCRM instance (e.g., "https://crm.example.com").
        api_key: API key of an EspoCRM API user.
        timeout: Request timeout in seconds.
        max_response_size: Largest response body accepted, in bytes.
        transport: Optional httpx transport, mostly useful for testing.

    Example:
        >>> client = EspoCRMClient("https://crm.example.com", "secret")
        >>> body = client.read_entity("Contact", "78abc123def456")
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        max_response_size: int = DEFAULT_MAX_RESPONSE_SIZE,
        transport: httpx.BaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._config = ClientConfig(
            api_key=api_key,
            timeout=timeout,
            max_response_size=max_response_size,
        )
        self._shared_client = (
            httpx.Client(timeout=timeout, transport=transport)
            if transport is not None
            else None
        )

    def close(self) -> None:
        """Close the injected transport, if any."""
        if self._shared_client is not None:
            self._shared_client.close()

    def __enter__(self) -> "EspoCRMClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    @classmethod
    def from_config(
        cls,
        base_url: str,
        config: ClientConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> "EspoCRMClient":
        return cls(
            base_url,
            config.api_key,
            timeout=config.timeout,
            max_response_size=config.max_response_size,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def config(self) -> ClientConfig:
        return self._config

    def read_entity(self, entity_type: str, entity_id: str) -> bytes:
        """Fetch a single record.

        See https://docs.espocrm.com/development/api/crud/#read
        """
        return self._send_request("GET", self._endpoint(entity_type, entity_id))

    def list_entities(
        self,
        entity_type: str,
        parameters: Parameters | None = None,
        filters: Iterable[Where] = (),
    ) -> bytes:
        """List records of ``entity_type``.

        Args:
            entity_type: Entity type to list (e.g., "Contact").
            parameters: Pagination and sorting; defaults to ``Parameters()``.
            filters: Filter clauses, encoded after the parameters.

        Returns:
            Raw JSON body, a ``{"total": ..., "list": [...]}`` envelope.

        See https://docs.espocrm.com/development/api/crud/#list
        """
        if parameters is None:
            parameters = Parameters()
        query = parameters.encode() + encode_filters(filters)
        return self._send_request("GET", self._endpoint(entity_type) + query)

    def create_entity(self, entity_type: str, payload: bytes | str) -> bytes:
        """Create a record from a JSON ``payload`` such as ``{"name": "Alice"}``.

        See https://docs.espocrm.com/development/api/crud/#create
        """
        return self._send_request("POST", self._endpoint(entity_type), payload)

    def update_entity(
        self, entity_type: str, entity_id: str, payload: bytes | str
    ) -> bytes:
        """Update a record with the fields in a JSON ``payload``.

        See https://docs.espocrm.com/development/api/crud/#update
        """
        return self._send_request(
            "PUT", self._endpoint(entity_type, entity_id), payload
        )

    def delete_entity(self, entity_type: str, entity_id: str) -> bytes:
        """Delete a record.

        See https://docs.espocrm.com/development/api/crud/#delete
        """
        return self._send_request("DELETE", self._endpoint(entity_type, entity_id))

    def list_related_entities(
        self, entity_type: str, entity_id: str, related_type: str
    ) -> bytes:
        """List the records linked to a record through ``related_type``.

        See https://docs.espocrm.com/development/api/relationships/#list-related-records
        """
        return self._send_request(
            "GET", self._endpoint(entity_type, entity_id, related_type)
        )

    def link_entity(
        self,
        entity_type: str,
        entity_id: str,
        related_type: str,
        payload: bytes | str,
    ) -> bytes:
        """Link records to a record.

        ``payload`` holds the id(s) of the related records, i.e.
        ``{"id": "6a183bcf77198a"}`` or ``{"ids": ["836bc38165a3", "2735b38a3a723"]}``.

        See https://docs.espocrm.com/development/api/relationships/#link
        """
        return self._send_request(
            "POST", self._endpoint(entity_type, entity_id, related_type), payload
        )

    def unlink_entity(
        self,
        entity_type: str,
        entity_id: str,
        related_type: str,
        payload: bytes | str,
    ) -> bytes:
        """Unlink records from a record.

        ``payload`` has the same form as for :meth:`link_entity`.

        Warning:
            EspoCRM expects the payload in the body of a DELETE request.
            Some proxies and HTTP stacks strip or reject bodies on DELETE,
            in which case the server will not see which records to unlink.

        See https://docs.espocrm.com/development/api/relationships/#unlink
        """
        return self._send_request(
            "DELETE", self._endpoint(entity_type, entity_id, related_type), payload
        )

    def _endpoint(self, *segments: str) -> str:
        """Join path segments onto the API root without escaping them."""
        return "/".join((self._base_url + API_PATH, *segments))

    def _send_request(
        self,
        method: str,
        endpoint: str,
        payload: bytes | str | None = None,
    ) -> bytes:
        """Perform one request and return the response body.

        Raises:
            PayloadRequiredError: POST or PUT without a payload.
            ConnectionError: The request could not be completed.
            HttpError: The status was anything but 200.
            ResponseTooLargeError: The body exceeded ``max_response_size``.
        """
        if method in _BODY_REQUIRED and payload is None:
            raise PayloadRequiredError(method)

        content = payload.encode("utf-8") if isinstance(payload, str) else payload
        headers = {
            "content-type": "application/json",
            API_KEY_HEADER: self._config.api_key,
        }
        logger.debug(
            "%s %s (%d byte payload)",
            method,
            endpoint,
            len(content) if content is not None else 0,
        )

        try:
            with self._open_client() as client:
                with client.stream(
                    method, endpoint, content=content, headers=headers
                ) as response:
                    if response.status_code != httpx.codes.OK:
                        logger.warning(
                            "%s %s returned %d", method, endpoint, response.status_code
                        )
                        raise HttpError(response.status_code, response.reason_phrase)
                    return self._read_body(response)
        except httpx.HTTPError as e:
            raise ConnectionError(f"{method} {endpoint} failed: {e}") from e

    def _open_client(self) -> ContextManager[httpx.Client]:
        # An injected transport outlives the call; only per-call clients are closed.
        if self._shared_client is not None:
            return nullcontext(self._shared_client)
        return httpx.Client(timeout=self._config.timeout)

    def _read_body(self, response: httpx.Response) -> bytes:
        limit = self._config.max_response_size
        chunks: list[bytes] = []
        total = 0
        for chunk in response.iter_bytes():
            total += len(chunk)
            if total > limit:
                logger.warning("Response from %s exceeds %d bytes", response.url, limit)
                raise ResponseTooLargeError(limit)
            chunks.append(chunk)
        return b"".join(chunks)
