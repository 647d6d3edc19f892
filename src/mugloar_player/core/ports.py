from __future__ import annotations

from typing import Protocol, Sequence

from .types import BuyResult, Offer, SessionSnapshot, ShopCatalogEntry, SolveResult


class GameAPIPort(Protocol):
    def start_session(self) -> SessionSnapshot:
        ...

    def list_offers(self, session_id: str) -> Sequence[Offer]:
        ...

    def solve(self, session_id: str, offer_id: str) -> SolveResult:
        ...

    def list_catalog(self, session_id: str) -> Sequence[ShopCatalogEntry]:
        ...

    def buy(self, session_id: str, item_id: str) -> BuyResult:
        ...
