"""HTTP client for the Art Institute of Chicago artworks endpoint."""

from __future__ import annotations

from typing import Final

import requests

from .config_manager import get_config_manager
from .logger import get_logger, summarize_for_debug
from .models import Artwork, ArtworkPage

logger = get_logger(__name__)

DEFAULT_BASE_URL: Final = "https://api.artic.edu/api/v1"
DEFAULT_TIMEOUT_SECONDS: Final = 20


class ArtworkFetchError(RuntimeError):
    """The data source was unreachable, answered non-2xx, or sent an unusable body."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ArticClient:
    """Fetch pages of artworks from `GET {base_url}/artworks`."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        fields: list[str] | None = None,
        user_agent: str | None = None,
    ):
        cm = get_config_manager()
        self.base_url = str(base_url or cm.get_setting("api.base_url", DEFAULT_BASE_URL)).rstrip("/")
        self.timeout = float(timeout or cm.get_setting("api.request_timeout", DEFAULT_TIMEOUT_SECONDS))
        self.fields = list(fields if fields is not None else cm.get_setting("api.fields", []) or [])
        self.user_agent = str(user_agent or cm.get_setting("api.user_agent", "artic-table-studio"))

    @property
    def artworks_url(self) -> str:
        return f"{self.base_url}/artworks"

    def build_params(self, page: int, limit: int | None = None) -> dict[str, str]:
        params = {"page": str(int(page))}
        if limit:
            params["limit"] = str(int(limit))
        if self.fields:
            params["fields"] = ",".join(self.fields)
        return params

    def fetch_page(self, page: int, limit: int | None = None) -> ArtworkPage:
        """Fetch one 1-based page of artworks.

        Raises:
            ArtworkFetchError: on transport failure, non-2xx status or a malformed body.
        """
        params = self.build_params(page, limit)
        headers = {"Accept": "application/json", "User-Agent": self.user_agent}
        logger.debug("GET %s params=%s", self.artworks_url, params)

        try:
            resp = requests.get(self.artworks_url, params=params, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ArtworkFetchError(f"Failed to fetch artworks: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            raise ArtworkFetchError(f"HTTP error! status: {resp.status_code}", status_code=resp.status_code)

        try:
            payload = resp.json()
        except ValueError as exc:
            logger.debug("Non-JSON artworks body: %s", summarize_for_debug(getattr(resp, "text", "") or ""))
            raise ArtworkFetchError("Malformed response: body is not JSON") from exc

        return parse_artworks_payload(payload, page)


def parse_artworks_payload(payload: object, page: int) -> ArtworkPage:
    """Turn the `{data: [...], pagination: {total}}` body into an ArtworkPage."""
    if not isinstance(payload, dict):
        raise ArtworkFetchError("Malformed response: expected a JSON object")

    data = payload.get("data")
    if not isinstance(data, list):
        raise ArtworkFetchError("Malformed response: missing 'data' list")

    pagination = payload.get("pagination")
    total = pagination.get("total") if isinstance(pagination, dict) else None
    if isinstance(total, bool) or not isinstance(total, int) or total < 0:
        raise ArtworkFetchError("Malformed response: missing 'pagination.total'")

    try:
        artworks = tuple(Artwork.from_api(record) for record in data)
    except ValueError as exc:
        raise ArtworkFetchError(f"Malformed response: {exc}") from exc

    return ArtworkPage(page=int(page), artworks=artworks, total=total)
