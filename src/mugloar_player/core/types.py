from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True)
class Offer:
    id: str
    text: Optional[str]
    reward: int
    expires_in: int
    likelihood_label: Optional[str]
    cipher: Optional[str] = None


@dataclass(frozen=True)
class SessionSnapshot:
    session_id: str
    lives: int
    gold: int
    level: int
    score: int
    high_score: int
    turn: int


@dataclass(frozen=True)
class SolveResult:
    success: bool
    lives: int
    gold: int
    score: int
    high_score: int
    turn: int
    message: Optional[str] = None


@dataclass(frozen=True)
class ShopCatalogEntry:
    id: str
    name: str
    cost: int


@dataclass(frozen=True)
class BuyResult:
    shopping_success: bool
    gold: int
    lives: int
    level: int
    turn: int


@dataclass(frozen=True)
class Reputation:
    people: float
    state: float
    underworld: float


@dataclass(frozen=True)
class GameResult:
    session_id: str
    score: int
    turns: int


@dataclass(frozen=True)
class DecodeResult:
    offer: Offer
    status: Literal["replaced", "unchanged"]

    @property
    def replaced(self) -> bool:
        return self.status == "replaced"
