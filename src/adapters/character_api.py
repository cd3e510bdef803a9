"""Fetcher for the Rick and Morty character collection.

Contract (`core.interfaces.fetcher.CharacterFetcher`):
- `GET <api_base_url>?page=<n>&name=<term>`; `name` is always sent, an absent
  search becomes the empty string.
- 200 + valid body -> `FetchSuccess`.
- 404 -> `FetchFailure(NOT_FOUND)`: the API's way of saying "no match".
- Anything else (other status, transport error, malformed body) ->
  `FetchFailure(OTHER)`. Nothing is raised and nothing is retried.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import (
    ApiResponse,
    CharacterPage,
    FetchFailure,
    FetchOutcome,
    FetchRequest,
    FetchSuccess,
)
from core.interfaces.fetcher import CharacterFetcher


def build_query_params(request: FetchRequest) -> dict[str, str]:
    return {
        "page": str(request.page),
        "name": request.name or "",
    }


class CharacterApiFetcher(CharacterFetcher):
    """Fetches one page of characters over HTTP."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        # When a client is injected the caller owns its lifecycle.
        self._client = client

    @property
    def url(self) -> str:
        return self._settings.api_base_url

    async def fetch(self, request: FetchRequest) -> FetchOutcome:
        params = build_query_params(request)
        try:
            if self._client is not None:
                resp = await self._client.get(self.url, params=params)
            else:
                async with build_async_client(self._settings) as client:
                    resp = await client.get(self.url, params=params)
        except httpx.HTTPError as exc:
            return FetchFailure.other(f"transport error: {exc.__class__.__name__}: {exc}")

        if resp.status_code == 404:
            return FetchFailure.not_found()
        if not resp.is_success:
            return FetchFailure.other(f"http {resp.status_code}")

        try:
            data: Any = resp.json()
        except ValueError:
            return FetchFailure.other("response is not valid JSON")
        try:
            api = ApiResponse.model_validate(data)
        except ValidationError as exc:
            return FetchFailure.other(f"unexpected response shape: {exc.error_count()} error(s)")

        return FetchSuccess(payload=CharacterPage.from_api(api))
