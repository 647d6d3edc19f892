from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .decoder import MessageDecoder
from .errors import SessionStalledError
from .likelihood import from_label
from .ports import GameAPIPort
from .shop import DEFAULT_GOLD_RESERVE, PurchaseAdvisor
from .types import GameResult, Offer, SessionSnapshot, SolveResult

logger = logging.getLogger(__name__)

AdvisorFactory = Callable[[GameAPIPort, str], PurchaseAdvisor]


@dataclass(frozen=True)
class DirectorConfig:
    gold_reserve: int = DEFAULT_GOLD_RESERVE
    # None keeps polling for offers indefinitely.
    max_idle_turns: Optional[int] = None


def offer_rank_key(offer: Offer) -> tuple[float, bool, int, int]:
    # unknown labels score 0.0 like "Impossible" but always rank below it
    level = from_label(offer.likelihood_label)
    odds = level.odds if level is not None else 0.0
    return (odds, level is not None, offer.expires_in, offer.reward)


def select_best(offers: Iterable[Offer]) -> Optional[Offer]:
    """Pick the offer with the best (odds, expires_in, reward) tuple.

    Offers are never filtered out for being close to expiry; ``expires_in``
    only breaks ties on odds. An unrecognized label loses to every recognized
    one, "Impossible" included. Full ties go to the earliest offer.
    """
    return max(offers, key=offer_rank_key, default=None)


def apply_solve(snapshot: SessionSnapshot, result: SolveResult) -> SessionSnapshot:
    # solve responses never report the level
    return SessionSnapshot(
        session_id=snapshot.session_id,
        lives=result.lives,
        gold=result.gold,
        level=snapshot.level,
        score=result.score,
        high_score=result.high_score,
        turn=result.turn,
    )


class GameDirector:
    """Plays one game session to completion against a ``GameAPIPort``."""

    def __init__(
        self,
        api: GameAPIPort,
        decoder: MessageDecoder | None = None,
        config: DirectorConfig | None = None,
        advisor_factory: AdvisorFactory | None = None,
    ):
        self._api = api
        self._decoder = decoder or MessageDecoder()
        self._config = config or DirectorConfig()
        self._advisor_factory = advisor_factory or self._default_advisor

    def play(self) -> GameResult:
        snapshot = self._api.start_session()
        session_id = snapshot.session_id
        logger.info(
            "Started game %s: lives=%s gold=%s level=%s",
            session_id,
            snapshot.lives,
            snapshot.gold,
            snapshot.level,
        )
        advisor = self._advisor_factory(self._api, session_id)

        idle_turns = 0
        while snapshot.lives > 0:
            candidates = self._fetch_candidates(session_id)
            best = select_best(candidates)

            if best is None:
                idle_turns += 1
                limit = self._config.max_idle_turns
                if limit is not None and idle_turns > limit:
                    raise SessionStalledError(
                        f"no offers for {idle_turns} consecutive turns in game {session_id}"
                    )
                advisor.maybe_buy(snapshot.gold, snapshot.lives)
                logger.debug("No usable offers in game %s, visited shop", session_id)
                continue

            idle_turns = 0
            result = self._api.solve(session_id, best.id)
            snapshot = apply_solve(snapshot, result)
            logger.debug(
                "Solved %s (success=%s) -> lives=%s gold=%s score=%s turn=%s",
                best.id,
                result.success,
                snapshot.lives,
                snapshot.gold,
                snapshot.score,
                snapshot.turn,
            )
            if snapshot.lives <= 0:
                break
            advisor.maybe_buy(snapshot.gold, snapshot.lives)

        logger.info("Game %s finished: score=%s turns=%s", session_id, snapshot.score, snapshot.turn)
        return GameResult(session_id=session_id, score=snapshot.score, turns=snapshot.turn)

    def _fetch_candidates(self, session_id: str) -> list[Offer]:
        decoded: list[Offer] = []
        for raw in self._api.list_offers(session_id):
            offer = self._decoder.decode(raw)
            if offer is not None:
                decoded.append(offer)
        return decoded

    def _default_advisor(self, api: GameAPIPort, session_id: str) -> PurchaseAdvisor:
        return PurchaseAdvisor(api, session_id, gold_reserve=self._config.gold_reserve)
