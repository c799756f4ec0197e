"""Lightweight wrapper around PokeAPI used by the catalog ingestion commands."""

from __future__ import annotations

import time
from typing import Any, Dict, List, Optional

import requests


class PokeAPIClientError(RuntimeError):
    """Raised when the PokeAPI request fails."""


class PokeAPIClient:
    """Small helper client with naive in-memory caching."""

    BASE_URL = "https://pokeapi.co/api/v2"

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        cache_ttl: int = 600,
        timeout: int = 10,
        user_agent: str = "poke-teams/0.1 (+https://github.com/)",
    ) -> None:
        self.session = session or requests.Session()
        self.cache_ttl = cache_ttl
        self.timeout = timeout
        self.user_agent = user_agent
        self._cache: Dict[str, tuple[float, Any]] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def list_pokemon(self, *, limit: int = 10000, offset: int = 0) -> List[Dict[str, str]]:
        payload = self._get_json(f"pokemon?limit={limit}&offset={offset}")
        return list(payload.get("results", []))

    def list_moves(self, *, limit: int = 10000, offset: int = 0) -> List[Dict[str, str]]:
        payload = self._get_json(f"move?limit={limit}&offset={offset}")
        return list(payload.get("results", []))

    def get_resource(self, url: str) -> Dict[str, Any]:
        """Fetch an absolute PokeAPI URL such as a species or evolution-chain link."""

        return self._get_json(url)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _get_json(self, endpoint: str) -> Dict[str, Any]:
        url = self._build_url(endpoint)
        now = time.time()
        cached = self._cache.get(url)
        if cached and now - cached[0] < self.cache_ttl:
            return cached[1]

        try:
            response = self.session.get(
                url,
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
            )
            response.raise_for_status()
        except requests.RequestException as exc:  # pragma: no cover - network
            raise PokeAPIClientError(str(exc)) from exc

        payload = response.json()
        self._cache[url] = (now, payload)
        return payload

    def _build_url(self, endpoint: str) -> str:
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        endpoint = endpoint.lstrip("/")
        return f"{self.BASE_URL}/{endpoint}"
