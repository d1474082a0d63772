"""
Generic endpoint for one Open5e resource collection.

An Endpoint pairs a resource path with the model that validates its records
and the query builder that encodes its list filters, and exposes two
operations: `get` (one record by slug) and `find_many` (one page of records).
"""

import logging
from collections.abc import Mapping
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Generic, TypeVar
from urllib.parse import quote

import httpx

from .config import DEFAULT_TIMEOUT
from .exceptions import InvalidInputError, SchemaValidationError, TransportError
from .models import GameObject
from .query import GameObjectOptions, QueryBuilder, coerce_options
from .validation import parse_envelope, parse_record

logger = logging.getLogger("open5e-client")

EntityT = TypeVar("EntityT", bound=GameObject)
OptionsT = TypeVar("OptionsT", bound=GameObjectOptions)

REQUEST_HEADERS = {"Accept": "application/json"}


class Endpoint(Generic[EntityT, OptionsT]):
    """
    Read-only access to one resource collection.

    Every call performs exactly one GET request. Nothing is cached, retried
    or paginated automatically.

    Attributes:
        base_url: API root used when a call does not override it
        path: Resource path segment, e.g. "monsters"
        schema: Model class every returned record is validated against
        options_model: Options model accepted by `find_many`
    """

    def __init__(
        self,
        base_url: str,
        path: str,
        schema: type[EntityT],
        build_query: QueryBuilder,
        options_model: type[OptionsT],
        http_client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the endpoint.

        Args:
            base_url: API root, e.g. "https://api.open5e.com"
            path: Resource path segment; surrounding slashes are ignored
            schema: Model used to validate records
            build_query: Turns validated options into a query string
            options_model: Options model `find_many` validates against; must
                be the one `build_query` reads
            http_client: Shared client to send requests with. If None, each
                call opens and closes its own client
            timeout: Transport timeout for clients opened by this endpoint
        """
        self.base_url = base_url.rstrip("/")
        self.path = path.strip("/")
        self.schema = schema
        self.build_query = build_query
        self.options_model = options_model
        self.timeout = timeout
        self._http_client = http_client

    def __repr__(self) -> str:
        return f"Endpoint({self.base_url!r}, {self.path!r}, {self.schema.__name__})"

    # =========================================================================
    # HTTP Helpers
    # =========================================================================

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
        ) as client:
            yield client

    async def _request(self, url: str, slug: str | None = None) -> httpx.Response:
        logger.debug(f"GET {url}")
        try:
            async with self._client() as client:
                response = await client.get(
                    url, headers=REQUEST_HEADERS, follow_redirects=True
                )
        except httpx.RequestError as e:
            raise TransportError(
                f"Request to {url} failed: {e}", url=url, slug=slug
            ) from e
        logger.debug(f"GET {url} -> {response.status_code}")
        return response

    def _root(self, api_url: str | None) -> str:
        return api_url.rstrip("/") if api_url else self.base_url

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise SchemaValidationError(
                f"Response from {response.request.url} is not valid JSON: {e}"
            ) from e

    # =========================================================================
    # Operations
    # =========================================================================

    async def get(self, slug: str, api_url: str | None = None) -> EntityT | None:
        """
        Fetch one record by slug.

        Args:
            slug: Identifier of the record, e.g. "aboleth"
            api_url: Override the base URL for this call

        Returns:
            The validated record, or None if the service answers 404

        Raises:
            InvalidInputError: If slug is empty (no request is made)
            TransportError: On any other non-success status
            SchemaValidationError: If the record does not match `schema`
        """
        if not isinstance(slug, str) or not slug:
            raise InvalidInputError("Slug is required.")

        url = f"{self._root(api_url)}/{self.path}/{quote(slug, safe='')}"
        response = await self._request(url, slug=slug)

        if response.status_code == 404:
            return None
        if not response.is_success:
            raise TransportError(
                f"Failed to fetch '{slug}' Code: {response.status_code}",
                url=url,
                status_code=response.status_code,
                slug=slug,
            )

        return parse_record(self.schema, self._json(response))

    async def find_many(
        self,
        options: OptionsT | Mapping[str, Any] | None = None,
        **filters: Any,
    ) -> list[EntityT]:
        """
        Fetch one page of records matching the given filters.

        Filters can be passed as an options model, a mapping, or keyword
        arguments (e.g. ``find_many(document_slug="tob", limit=10)``).

        Returns:
            Validated records, at most `limit` of them

        Raises:
            InvalidInputError: If the options fail validation (no request is made)
            TransportError: On a non-success status
            SchemaValidationError: If the envelope or any record is malformed;
                for a record, `index` is its position in `results`
        """
        if options is not None and filters:
            raise InvalidInputError("Pass either an options object or keyword filters, not both")
        opts = coerce_options(self.options_model, options if options is not None else filters)

        url = f"{self._root(opts.api_url)}/{self.path}/?{self.build_query(opts)}"
        response = await self._request(url)

        if not response.is_success:
            raise TransportError(
                f"Failed to list '{self.path}' Code: {response.status_code}",
                url=url,
                status_code=response.status_code,
            )

        results = parse_envelope(self._json(response))
        if len(results) > opts.limit:
            logger.warning(f"{url} returned {len(results)} results for limit {opts.limit}")
            raise SchemaValidationError(
                f"Response contained {len(results)} results, more than limit {opts.limit}",
                details={"url": url},
            )

        parsed: list[EntityT] = []
        for i, record in enumerate(results):
            try:
                parsed.append(parse_record(self.schema, record))
            except SchemaValidationError as e:
                raise e.at_index(i) from e
        return parsed


__all__ = [
    "Endpoint",
    "REQUEST_HEADERS",
]
