from __future__ import annotations

import json
from typing import Any

from .types import (
    BuyResult,
    Offer,
    Reputation,
    SessionSnapshot,
    ShopCatalogEntry,
    SolveResult,
)


def parse_json(text: str | bytes | None) -> Any:
    if text is None:
        raise ValueError("empty response body")
    if isinstance(text, bytes):
        text = text.decode("utf-8")
    if not text.strip():
        raise ValueError("empty response body")
    return json.loads(text)


def _require_dict(raw: Any, kind: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise ValueError(f"expected JSON object for {kind}, got {type(raw).__name__}")
    return raw


def require_list(raw: Any, kind: str) -> list[Any]:
    if not isinstance(raw, list):
        raise ValueError(f"expected JSON array of {kind}, got {type(raw).__name__}")
    return raw


def _coerce_int(value: object, default: int = 0) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return int(value)
    return int(str(value).strip())


def _coerce_float(value: object, default: float = 0.0) -> float:
    if value is None:
        return default
    return float(value)


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    return str(value)


def _required_str(raw: dict[str, Any], key: str) -> str:
    value = raw.get(key)
    if value is None or str(value) == "":
        raise ValueError(f"missing required field '{key}'")
    return str(value)


def normalize_cipher(value: object) -> str | None:
    """Return the cipher tag as a string.

    The API sends ``encrypted`` as a number on some payloads and as a string
    on others; ``1`` and ``"1"`` must compare equal downstream.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def offer_from_wire(raw: Any) -> Offer:
    data = _require_dict(raw, "message")
    return Offer(
        id=_required_str(data, "adId"),
        text=_optional_str(data.get("message")),
        reward=_coerce_int(data.get("reward")),
        expires_in=_coerce_int(data.get("expiresIn")),
        likelihood_label=_optional_str(data.get("probability")),
        cipher=normalize_cipher(data.get("encrypted")),
    )


def snapshot_from_wire(raw: Any) -> SessionSnapshot:
    data = _require_dict(raw, "game start")
    return SessionSnapshot(
        session_id=_required_str(data, "gameId"),
        lives=_coerce_int(data.get("lives")),
        gold=_coerce_int(data.get("gold")),
        level=_coerce_int(data.get("level")),
        score=_coerce_int(data.get("score")),
        high_score=_coerce_int(data.get("highScore")),
        turn=_coerce_int(data.get("turn")),
    )


def solve_result_from_wire(raw: Any) -> SolveResult:
    data = _require_dict(raw, "solve")
    return SolveResult(
        success=bool(data.get("success", False)),
        lives=_coerce_int(data.get("lives")),
        gold=_coerce_int(data.get("gold")),
        score=_coerce_int(data.get("score")),
        high_score=_coerce_int(data.get("highScore")),
        turn=_coerce_int(data.get("turn")),
        message=_optional_str(data.get("message")),
    )


def catalog_entry_from_wire(raw: Any) -> ShopCatalogEntry:
    data = _require_dict(raw, "shop item")
    return ShopCatalogEntry(
        id=_required_str(data, "id"),
        name=str(data.get("name") or ""),
        cost=_coerce_int(data.get("cost")),
    )


def buy_result_from_wire(raw: Any) -> BuyResult:
    data = _require_dict(raw, "buy")
    return BuyResult(
        shopping_success=str(data.get("shoppingSuccess", "")).strip().lower() in {"true", "ok", "1"},
        gold=_coerce_int(data.get("gold")),
        lives=_coerce_int(data.get("lives")),
        level=_coerce_int(data.get("level")),
        turn=_coerce_int(data.get("turn")),
    )


def reputation_from_wire(raw: Any) -> Reputation:
    data = _require_dict(raw, "reputation")
    return Reputation(
        people=_coerce_float(data.get("people")),
        state=_coerce_float(data.get("state")),
        underworld=_coerce_float(data.get("underworld")),
    )
