from __future__ import annotations

import base64
import logging
import random

from mugloar_player import GameDirector
from mugloar_player.core.ciphers import rot13
from mugloar_player.core.engine import DirectorConfig
from mugloar_player.core.likelihood import LikelihoodLevel
from mugloar_player.core.types import (
    BuyResult,
    Offer,
    SessionSnapshot,
    ShopCatalogEntry,
    SolveResult,
)


class DemoGameAPI:
    """Small in-memory stand-in for the game server.

    Offers succeed with the odds of their label. A failed offer costs a life,
    a healing potion restores one.
    """

    def __init__(self, seed: int = 7):
        self._rng = random.Random(seed)
        self._lives = 3
        self._gold = 0
        self._score = 0
        self._turn = 0
        self._offers: dict[str, tuple[LikelihoodLevel, int]] = {}
        self._catalog = [
            ShopCatalogEntry(id="hpot", name="Healing potion", cost=50),
            ShopCatalogEntry(id="cs", name="Claw Sharpening", cost=100),
            ShopCatalogEntry(id="gas", name="Gasoline", cost=100),
        ]

    def start_session(self) -> SessionSnapshot:
        return SessionSnapshot("demo", self._lives, self._gold, 0, self._score, self._score, self._turn)

    def list_offers(self, session_id: str) -> list[Offer]:
        offers = []
        for n in range(4):
            level = self._rng.choice(list(LikelihoodLevel))
            reward = self._rng.randint(5, 120)
            ad_id = f"ad-{self._turn}-{n}"
            self._offers[ad_id] = (level, reward)
            offers.append(self._obfuscate(Offer(ad_id, "Escort a merchant", reward, self._rng.randint(1, 7), level.label)))
        return offers

    def solve(self, session_id: str, offer_id: str) -> SolveResult:
        level, reward = self._offers.pop(offer_id)
        self._turn += 1
        success = self._rng.random() < level.odds
        if success:
            self._gold += reward
            self._score += reward
        else:
            self._lives -= 1
        return SolveResult(success, self._lives, self._gold, self._score, self._score, self._turn, None)

    def list_catalog(self, session_id: str) -> list[ShopCatalogEntry]:
        return list(self._catalog)

    def buy(self, session_id: str, item_id: str) -> BuyResult:
        item = next(i for i in self._catalog if i.id == item_id)
        if item.cost > self._gold:
            return BuyResult(False, self._gold, self._lives, 0, self._turn)
        self._gold -= item.cost
        if item_id == "hpot":
            self._lives += 1
        self._turn += 1
        return BuyResult(True, self._gold, self._lives, 0, self._turn)

    def _obfuscate(self, offer: Offer) -> Offer:
        mode = self._rng.choice([None, "1", "2"])
        if mode == "1":
            enc = lambda s: base64.b64encode(s.encode("utf-8")).decode("ascii")  # noqa: E731
        elif mode == "2":
            enc = rot13
        else:
            return offer
        return Offer(enc(offer.id), enc(offer.text), offer.reward, offer.expires_in, enc(offer.likelihood_label), mode)


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    api = DemoGameAPI()
    result = GameDirector(api, config=DirectorConfig(gold_reserve=150, max_idle_turns=5)).play()
    print("final score:", result.score)
    print("turns played:", result.turns)


if __name__ == "__main__":
    main()
