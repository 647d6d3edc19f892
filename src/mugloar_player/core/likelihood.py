from __future__ import annotations

from enum import Enum
from typing import Optional


class LikelihoodLevel(Enum):
    """Textual success odds as sent in an offer's ``probability`` field.

    Members are declared in descending order of odds.
    """

    PIECE_OF_CAKE = ("Piece of cake", 0.95)
    WALK_IN_THE_PARK = ("Walk in the park", 0.85)
    SURE_THING = ("Sure thing", 0.80)
    HMMM = ("Hmmm....", 0.75)
    QUITE_LIKELY = ("Quite likely", 0.65)
    GAMBLE = ("Gamble", 0.60)
    RISKY = ("Risky", 0.30)
    RATHER_DETRIMENTAL = ("Rather detrimental", 0.28)
    PLAYING_WITH_FIRE = ("Playing with fire", 0.25)
    SUICIDE_MISSION = ("Suicide mission", 0.10)
    IMPOSSIBLE = ("Impossible", 0.0)

    def __init__(self, label: str, odds: float):
        self.label = label
        self.odds = odds


_BY_LABEL: dict[str, LikelihoodLevel] = {level.label.lower(): level for level in LikelihoodLevel}
_VALID_LABELS = frozenset(level.label for level in LikelihoodLevel)


def _key(label: str) -> str:
    return label.strip().lower()


def from_label(label: Optional[str]) -> Optional[LikelihoodLevel]:
    if label is None:
        return None
    return _BY_LABEL.get(_key(label))


def numeric_odds(label: Optional[str]) -> float:
    level = from_label(label)
    return level.odds if level is not None else 0.0


def valid_labels() -> frozenset[str]:
    return _VALID_LABELS
