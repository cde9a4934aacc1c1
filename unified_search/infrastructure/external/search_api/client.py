"""Search API client over httpx.

HttpSearchGateway implements ISearchGateway; HttpSavedSearchStore
implements ISavedSearchStore. Both map HTTP and transport failures into
the domain exception hierarchy so the application layer never sees httpx
types.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx
from pydantic import ValidationError

from unified_search.application.dtos.saved_search import SavedSearchCreate
from unified_search.application.dtos.search import (
    SearchHistoryEntry,
    SearchRequest,
    SearchResultItem,
    SearchResultPage,
    SearchSuggestion,
    SuggestionRequest,
)
from unified_search.core.config import get_settings
from unified_search.core.constants import (
    HISTORY_PATH,
    SAVED_SEARCHES_PATH,
    SEARCH_PATH,
    SUGGESTIONS_PATH,
)
from unified_search.domain.entities.saved_search import SavedSearch
from unified_search.domain.exceptions import (
    AuthenticationException,
    SavedSearchNotFoundException,
    SavedSearchStoreError,
    SearchRequestError,
    ValidationException,
)
from unified_search.schemas.search import (
    SavedSearchBody,
    SavedSearchResponse,
    SearchHistoryEntryResponse,
    SearchRequestBody,
    SearchResponseBody,
    SuggestionsResponseBody,
)
from unified_search.shared.telemetry.logging import get_logger
from unified_search.shared.telemetry.tracing import add_span_attributes, traced

logger = get_logger(__name__)


class _SearchApiClient:
    """Shared HTTP plumbing: base URL, timeout, optional shared AsyncClient."""

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        access_token: str | None = None,
    ) -> None:
        settings = get_settings()
        self._base_url = (base_url or settings.api_base_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.request_timeout_seconds
        self._shared_http = http_client
        self._access_token = access_token

    def set_access_token(self, access_token: str | None) -> None:
        self._access_token = access_token

    @asynccontextmanager
    async def _http_cm(self) -> AsyncIterator[httpx.AsyncClient]:
        """Yield shared HTTP client or a short-lived one (connection reuse when shared)."""
        if self._shared_http is not None:
            yield self._shared_http
            return
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            yield client

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"
        return headers

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: Any = None,
        json: Any = None,
    ) -> httpx.Response:
        """Send a request; raises httpx.HTTPError (transport or non-2xx status)."""
        async with self._http_cm() as client:
            response = await client.request(
                method,
                self._url(path),
                params=params,
                json=json,
                headers=self._headers(),
                timeout=self._timeout,
            )
        if response.status_code == 401:
            raise AuthenticationException()
        response.raise_for_status()
        return response


def _reason(error: Exception) -> str:
    if isinstance(error, httpx.HTTPStatusError):
        return f"HTTP {error.response.status_code}"
    if isinstance(error, httpx.TimeoutException):
        return "request timed out"
    return str(error) or error.__class__.__name__


class HttpSearchGateway(_SearchApiClient):
    """ISearchGateway over the REST search API."""

    @traced("search_api.search")
    async def search(self, request: SearchRequest) -> SearchResultPage:
        body = SearchRequestBody.from_request(request)
        add_span_attributes(
            generation=request.generation,
            offset=request.offset,
            page_size=request.page_size,
        )
        try:
            response = await self._send(
                "POST", SEARCH_PATH, json=body.model_dump(by_alias=True)
            )
            payload = SearchResponseBody.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            raise SearchRequestError("search", _reason(e), e.response.status_code) from e
        except httpx.HTTPError as e:
            raise SearchRequestError("search", _reason(e)) from e
        except (ValidationError, ValueError) as e:
            raise SearchRequestError("search", f"invalid response: {e}") from e

        items: list[SearchResultItem] = []
        for raw in payload.items:
            try:
                items.append(raw.to_item())
            except ValueError:
                logger.warning("Skipping result %s with unknown entity type %r", raw.id, raw.entity_type)
        end = request.offset + len(payload.items)
        next_offset = end if payload.items and end < payload.total_count else None
        return SearchResultPage(
            items=items,
            total_count=payload.total_count,
            execution_time_ms=payload.execution_time_ms,
            next_offset=next_offset,
            facet_counts=payload.resolved_facet_counts(),
        )

    @traced("search_api.suggest")
    async def suggest(self, request: SuggestionRequest) -> list[SearchSuggestion]:
        params: list[tuple[str, str | int]] = [("query", request.text), ("limit", request.limit)]
        params.extend(
            ("entityTypes", entity_type.value)
            for entity_type in sorted(request.entity_types, key=lambda t: t.value)
        )
        add_span_attributes(sequence=request.sequence, limit=request.limit)
        try:
            response = await self._send("GET", SUGGESTIONS_PATH, params=params)
            data = response.json()
            if isinstance(data, list):
                data = {"suggestions": data}
            payload = SuggestionsResponseBody.model_validate(data)
        except httpx.HTTPStatusError as e:
            raise SearchRequestError("suggestions", _reason(e), e.response.status_code) from e
        except httpx.HTTPError as e:
            raise SearchRequestError("suggestions", _reason(e)) from e
        except (ValidationError, ValueError) as e:
            raise SearchRequestError("suggestions", f"invalid response: {e}") from e
        return [item.to_suggestion() for item in payload.suggestions[: request.limit]]

    @traced("search_api.history")
    async def history(self, limit: int) -> list[SearchHistoryEntry]:
        add_span_attributes(limit=limit)
        try:
            response = await self._send("GET", HISTORY_PATH, params={"limit": limit})
            data = response.json()
            if isinstance(data, dict):
                data = data.get("items", data.get("history", []))
            entries = [SearchHistoryEntryResponse.model_validate(item) for item in data]
        except httpx.HTTPStatusError as e:
            raise SearchRequestError("history", _reason(e), e.response.status_code) from e
        except httpx.HTTPError as e:
            raise SearchRequestError("history", _reason(e)) from e
        except (ValidationError, ValueError, TypeError) as e:
            raise SearchRequestError("history", f"invalid response: {e}") from e
        return [entry.to_entry() for entry in entries[:limit]]

    @traced("search_api.clear_history")
    async def clear_history(self) -> None:
        try:
            await self._send("DELETE", HISTORY_PATH)
        except httpx.HTTPStatusError as e:
            raise SearchRequestError("clear history", _reason(e), e.response.status_code) from e
        except httpx.HTTPError as e:
            raise SearchRequestError("clear history", _reason(e)) from e
        logger.info("Search history cleared")


class HttpSavedSearchStore(_SearchApiClient):
    """ISavedSearchStore over the REST saved-search endpoints."""

    @traced("search_api.saved_searches.list", attributes={"action": "list"})
    async def list_all(self) -> list[SavedSearch]:
        response = await self._call("list", "GET", SAVED_SEARCHES_PATH)
        data = response.json()
        if isinstance(data, dict):
            data = data.get("items", data.get("savedSearches", []))
        return [self._parse("list", item) for item in data]

    @traced("search_api.saved_searches.create", attributes={"action": "create"})
    async def create(self, data: SavedSearchCreate) -> SavedSearch:
        body = SavedSearchBody.from_create(data).model_dump(by_alias=True)
        response = await self._call("create", "POST", SAVED_SEARCHES_PATH, json=body)
        return self._parse("create", response.json())

    @traced("search_api.saved_searches.update", attributes={"action": "update"})
    async def update(self, saved_search_id: str, data: SavedSearchCreate) -> SavedSearch:
        body = SavedSearchBody.from_create(data).model_dump(by_alias=True)
        response = await self._call(
            "update",
            "PUT",
            f"{SAVED_SEARCHES_PATH}/{saved_search_id}",
            json=body,
            saved_search_id=saved_search_id,
        )
        return self._parse("update", response.json())

    @traced("search_api.saved_searches.delete", attributes={"action": "delete"})
    async def delete(self, saved_search_id: str) -> None:
        await self._call(
            "delete",
            "DELETE",
            f"{SAVED_SEARCHES_PATH}/{saved_search_id}",
            saved_search_id=saved_search_id,
        )

    async def _call(
        self,
        action: str,
        method: str,
        path: str,
        *,
        json: Any = None,
        saved_search_id: str | None = None,
    ) -> httpx.Response:
        try:
            return await self._send(method, path, json=json)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404 and saved_search_id is not None:
                raise SavedSearchNotFoundException(saved_search_id) from e
            logger.error("Saved search %s failed: status=%d", action, e.response.status_code)
            raise SavedSearchStoreError(action, _reason(e)) from e
        except httpx.HTTPError as e:
            logger.error("Saved search %s failed: %s", action, _reason(e))
            raise SavedSearchStoreError(action, _reason(e)) from e

    @staticmethod
    def _parse(action: str, item: Any) -> SavedSearch:
        try:
            return SavedSearchResponse.model_validate(item).to_entity()
        except (ValidationError, ValidationException) as e:
            raise SavedSearchStoreError(action, f"invalid response: {e}") from e
