from typing import Any, Dict, Iterable, List, Optional, Protocol
import os

import httpx
from dotenv import load_dotenv
from pydantic import ValidationError

from app.schemas import Place

import logging

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("VIBE_PLANNER_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

load_dotenv()


DEFAULT_TIMEOUT_S = 10.0


def supabase_timeout() -> float:
    try:
        return float(os.getenv("SUPABASE_TIMEOUT_S", DEFAULT_TIMEOUT_S))
    except ValueError:
        logger.warning("SUPABASE_TIMEOUT_S is not a number; using %.0fs", DEFAULT_TIMEOUT_S)
        return DEFAULT_TIMEOUT_S


class PlaceStoreError(RuntimeError):
    """The store could not be reached or answered with something unusable."""


class PlaceStore(Protocol):
    async def fetch(self, city: str) -> List[Place]:
        ...


def _ilike_pattern(city: str) -> str:
    # PostgREST wildcards; strip characters that would change the filter grammar
    cleaned = "".join(ch for ch in city.strip() if ch not in "*,()%")
    return f"ilike.*{cleaned}*"


class SupabasePlaceStore:
    """
    Reads the ``locations`` table through Supabase's REST (PostgREST) API.
    City matching is a case-insensitive substring match so "ho chi minh" finds
    "Ho Chi Minh City".
    """

    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        *,
        table: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.url = (url or os.getenv("SUPABASE_URL") or "").rstrip("/")
        self.api_key = api_key or os.getenv("SUPABASE_ANON_KEY")
        self.table = table or os.getenv("SUPABASE_TABLE", "locations")
        self.timeout = timeout if timeout is not None else supabase_timeout()

    @property
    def endpoint(self) -> str:
        return f"{self.url}/rest/v1/{self.table}"

    async def fetch(self, city: str) -> List[Place]:
        """Return every place whose city contains ``city``.

        Raises ``PlaceStoreError`` when credentials are missing, the request
        fails, or the payload is not a list of rows. Individual rows that do not
        validate are skipped.
        """
        if not self.url or not self.api_key:
            raise PlaceStoreError("SUPABASE_URL and SUPABASE_ANON_KEY must be configured")
        if not city or not city.strip():
            return []

        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }
        params = {"select": "*", "city": _ilike_pattern(city)}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.endpoint, params=params, headers=headers)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise PlaceStoreError(f"Supabase query failed for city '{city}': {exc}") from exc

        if not isinstance(data, list):
            raise PlaceStoreError(f"Unexpected Supabase payload of type {type(data).__name__}")

        places = self._parse_rows(data)
        logger.info("Supabase returned %d place(s) for city '%s'", len(places), city)
        return places

    @staticmethod
    def _parse_rows(rows: Iterable[Any]) -> List[Place]:
        places: List[Place] = []
        for row in rows:
            if not isinstance(row, dict):
                logger.warning("Skipping non-object row from Supabase: %r", row)
                continue
            try:
                places.append(Place.model_validate(row))
            except ValidationError:
                logger.warning("Skipping malformed place row id=%s", row.get("id"), exc_info=True)
        return places


class InMemoryPlaceStore:
    """Store backed by a list of rows; used by the debug runner and tests."""

    def __init__(self, rows: Iterable[Dict[str, Any] | Place]):
        self._places = [row if isinstance(row, Place) else Place.model_validate(row) for row in rows]

    async def fetch(self, city: str) -> List[Place]:
        needle = (city or "").strip().lower()
        if not needle:
            return []
        return [place for place in self._places if needle in place.city.lower()]
