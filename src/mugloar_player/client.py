from __future__ import annotations

import logging
import time
from typing import Any, Callable, TypeVar
from urllib import error as urllib_error
from urllib import parse as urllib_parse
from urllib import request as urllib_request

from .core.errors import ApiClientError
from .core.normalize import (
    buy_result_from_wire,
    catalog_entry_from_wire,
    offer_from_wire,
    parse_json,
    reputation_from_wire,
    require_list,
    snapshot_from_wire,
    solve_result_from_wire,
)
from .core.types import BuyResult, Offer, Reputation, SessionSnapshot, ShopCatalogEntry, SolveResult

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.dragonsofmugloar.com/api/v2"

_BODY_LOG_LIMIT = 512

T = TypeVar("T")


def encode_path_segment(value: str) -> str:
    return urllib_parse.quote(value, safe="")


def _safe_body(body: str | None) -> str:
    if body is None:
        return "null"
    if len(body) > _BODY_LOG_LIMIT:
        return body[:_BODY_LOG_LIMIT] + "...(truncated)"
    return body


class GameClient:
    """HTTP client for the Dragons of Mugloar game API.

    Implements ``GameAPIPort``. Every failure (non-2xx status, network error,
    unparsable body) surfaces as ``ApiClientError``.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, *, timeout: float = 10.0):
        if base_url is None or not base_url.strip():
            raise ValueError("Invalid URL")
        self.base_url = base_url[:-1] if base_url.endswith("/") else base_url
        self.timeout = timeout

    def start_session(self) -> SessionSnapshot:
        logger.info("Starting a new game...")
        return self._parse(self._send("POST", "/game/start"), snapshot_from_wire)

    def list_offers(self, session_id: str) -> list[Offer]:
        path = f"/{encode_path_segment(session_id)}/messages"
        return self._parse_list(self._send("GET", path), offer_from_wire, "messages")

    def solve(self, session_id: str, offer_id: str) -> SolveResult:
        path = f"/{encode_path_segment(session_id)}/solve/{encode_path_segment(offer_id)}"
        return self._parse(self._send("POST", path), solve_result_from_wire)

    def list_catalog(self, session_id: str) -> list[ShopCatalogEntry]:
        path = f"/{encode_path_segment(session_id)}/shop"
        return self._parse_list(self._send("GET", path), catalog_entry_from_wire, "shop items")

    def buy(self, session_id: str, item_id: str) -> BuyResult:
        path = f"/{encode_path_segment(session_id)}/shop/buy/{encode_path_segment(item_id)}"
        return self._parse(self._send("POST", path), buy_result_from_wire)

    def investigate(self, session_id: str) -> Reputation:
        path = f"/{encode_path_segment(session_id)}/investigate/reputation"
        return self._parse(self._send("POST", path), reputation_from_wire)

    def build_url(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return self.base_url + path

    def _send(self, method: str, path: str) -> str:
        url = self.build_url(path)
        headers = {"Accept": "application/json"}
        data = None
        if method == "POST":
            headers["Content-Type"] = "application/json"
            data = b""
        request = urllib_request.Request(url, data=data, headers=headers, method=method)

        started = time.monotonic()
        logger.debug("HTTP -> %s %s", method, url)
        try:
            with urllib_request.urlopen(request, timeout=self.timeout) as response:  # noqa: S310
                status = response.status
                body = response.read().decode("utf-8", errors="replace")
        except urllib_error.HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="replace") if exc.fp else None
            logger.debug("HTTP <- %s (%d ms)", exc.code, self._elapsed_ms(started))
            raise ApiClientError(
                f"HTTP {exc.code} for {method} body={_safe_body(detail)}",
                status=exc.code,
            ) from exc
        except (urllib_error.URLError, OSError) as exc:
            reason = getattr(exc, "reason", exc)
            raise ApiClientError(f"Failed to send HTTP request: {reason}") from exc

        logger.debug("HTTP <- %s (%d ms)", status, self._elapsed_ms(started))
        if status < 200 or status >= 300:
            raise ApiClientError(f"HTTP {status} for {method} body={_safe_body(body)}", status=status)
        return body

    @staticmethod
    def _elapsed_ms(started: float) -> int:
        return int((time.monotonic() - started) * 1000)

    @staticmethod
    def _parse(body: str, convert: Callable[[Any], T]) -> T:
        try:
            return convert(parse_json(body))
        except (ValueError, TypeError, KeyError) as exc:
            raise ApiClientError(f"Failed to parse response body: {exc}") from exc

    @staticmethod
    def _parse_list(body: str, convert: Callable[[Any], T], kind: str) -> list[T]:
        try:
            return [convert(item) for item in require_list(parse_json(body), kind)]
        except (ValueError, TypeError, KeyError) as exc:
            raise ApiClientError(f"Failed to parse response body: {exc}") from exc
