from __future__ import annotations

import logging
from typing import Optional

from .ports import GameAPIPort
from .types import ShopCatalogEntry

logger = logging.getLogger(__name__)

HEALING_ITEM_ID = "hpot"
HEALING_MIN_GOLD = 50
DEFAULT_GOLD_RESERVE = 300


class PurchaseAdvisor:
    """Per-session shop policy.

    The catalog is fetched once on construction. Non-healing items are bought
    at most once each, in catalog order, and only while ``gold_reserve`` stays
    untouched. The healing item is bought whenever lives are low or nothing
    else is left to buy.
    """

    def __init__(
        self,
        api: GameAPIPort,
        session_id: str,
        gold_reserve: int = DEFAULT_GOLD_RESERVE,
        healing_item_id: str = HEALING_ITEM_ID,
    ):
        self._api = api
        self._session_id = session_id
        self._gold_reserve = gold_reserve
        self._healing_item_id = healing_item_id
        self._catalog: tuple[ShopCatalogEntry, ...] = tuple(api.list_catalog(session_id))
        self._purchased: set[str] = set()

    @property
    def catalog(self) -> tuple[ShopCatalogEntry, ...]:
        return self._catalog

    @property
    def purchased(self) -> frozenset[str]:
        return frozenset(self._purchased)

    def maybe_buy(self, current_gold: int, current_lives: int) -> bool:
        """Buy at most one item for the current turn.

        Returns ``True`` only when a buy call was made and accepted.
        """
        non_healing = [item for item in self._catalog if not self._is_healing(item.id)]
        all_non_healing_bought = all(item.id in self._purchased for item in non_healing)

        if (current_lives <= 1 or all_non_healing_bought) and current_gold >= HEALING_MIN_GOLD:
            bought = self._buy(self._healing_item_id)
            if bought:
                logger.debug("Purchased healing item at gold=%s lives=%s", current_gold, current_lives)
            return bought

        next_item = self._next_unpurchased(non_healing)
        if next_item is None:
            return False
        if current_gold - self._gold_reserve < next_item.cost:
            return False

        bought = self._buy(next_item.id)
        if bought:
            logger.debug("Purchased %s", next_item.name or next_item.id)
            self._purchased.add(next_item.id)
        return bought

    def _is_healing(self, item_id: str) -> bool:
        return item_id.lower() == self._healing_item_id.lower()

    def _next_unpurchased(self, candidates: list[ShopCatalogEntry]) -> Optional[ShopCatalogEntry]:
        for item in candidates:
            if item.id not in self._purchased:
                return item
        return None

    def _buy(self, item_id: str) -> bool:
        entry = next((item for item in self._catalog if item.id.lower() == item_id.lower()), None)
        if entry is None:
            return False
        try:
            result = self._api.buy(self._session_id, entry.id)
        except Exception as exc:
            logger.warning("Buying item '%s' failed: %s", entry.id, exc)
            return False
        if result is not None and not result.shopping_success:
            logger.warning("Shop rejected item '%s'", entry.id)
            return False
        return True
