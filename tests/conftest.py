from __future__ import annotations

from collections import deque
from typing import Any, Iterable

import pytest

from mugloar_player.core.types import (
    BuyResult,
    Offer,
    SessionSnapshot,
    ShopCatalogEntry,
    SolveResult,
)


class FakeGameAPI:
    """Scripted in-memory ``GameAPIPort`` that records every call."""

    def __init__(
        self,
        start: SessionSnapshot,
        offer_batches: Iterable[list[Offer]] = (),
        solve_results: dict[str, SolveResult] | None = None,
        catalog: list[ShopCatalogEntry] | None = None,
        buy_errors: dict[str, Exception] | None = None,
    ):
        self.start = start
        self.offer_batches = deque(offer_batches)
        self.solve_results = dict(solve_results or {})
        self.catalog = list(catalog or [])
        self.buy_errors = dict(buy_errors or {})
        self.calls: list[tuple[Any, ...]] = []

    def start_session(self) -> SessionSnapshot:
        self.calls.append(("start_session",))
        return self.start

    def list_offers(self, session_id: str) -> list[Offer]:
        self.calls.append(("list_offers", session_id))
        if not self.offer_batches:
            return []
        return self.offer_batches.popleft()

    def solve(self, session_id: str, offer_id: str) -> SolveResult:
        self.calls.append(("solve", session_id, offer_id))
        return self.solve_results[offer_id]

    def list_catalog(self, session_id: str) -> list[ShopCatalogEntry]:
        self.calls.append(("list_catalog", session_id))
        return list(self.catalog)

    def buy(self, session_id: str, item_id: str) -> BuyResult:
        self.calls.append(("buy", session_id, item_id))
        if item_id in self.buy_errors:
            raise self.buy_errors[item_id]
        return BuyResult(shopping_success=True, gold=0, lives=0, level=1, turn=0)

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]

    def bought(self) -> list[str]:
        return [call[2] for call in self.calls if call[0] == "buy"]


def _make_offer(
    offer_id: str,
    label: str | None = "Piece of cake",
    *,
    reward: int = 10,
    expires_in: int = 5,
    text: str | None = "help the villagers",
    cipher: str | None = None,
) -> Offer:
    return Offer(
        id=offer_id,
        text=text,
        reward=reward,
        expires_in=expires_in,
        likelihood_label=label,
        cipher=cipher,
    )


@pytest.fixture()
def make_offer():
    return _make_offer


@pytest.fixture()
def game_api_cls():
    return FakeGameAPI


@pytest.fixture()
def start_snapshot() -> SessionSnapshot:
    return SessionSnapshot(
        session_id="game-1",
        lives=2,
        gold=100,
        level=1,
        score=0,
        high_score=0,
        turn=1,
    )


@pytest.fixture()
def catalog() -> list[ShopCatalogEntry]:
    return [
        ShopCatalogEntry(id="hpot", name="Healing potion", cost=50),
        ShopCatalogEntry(id="cs", name="Claw Sharpening", cost=100),
    ]
