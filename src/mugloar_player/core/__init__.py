from .decoder import MessageDecoder
from .engine import DirectorConfig, GameDirector, apply_solve, offer_rank_key, select_best
from .errors import ApiClientError, MugloarError, SessionStalledError, UnknownCipherError
from .likelihood import LikelihoodLevel, from_label, numeric_odds, valid_labels
from .ports import GameAPIPort
from .shop import PurchaseAdvisor
from .types import (
    BuyResult,
    DecodeResult,
    GameResult,
    Offer,
    Reputation,
    SessionSnapshot,
    ShopCatalogEntry,
    SolveResult,
)

__all__ = [
    "GameDirector",
    "DirectorConfig",
    "MessageDecoder",
    "PurchaseAdvisor",
    "GameAPIPort",
    "LikelihoodLevel",
    "from_label",
    "numeric_odds",
    "valid_labels",
    "apply_solve",
    "offer_rank_key",
    "select_best",
    "ApiClientError",
    "MugloarError",
    "SessionStalledError",
    "UnknownCipherError",
    "BuyResult",
    "DecodeResult",
    "GameResult",
    "Offer",
    "Reputation",
    "SessionSnapshot",
    "ShopCatalogEntry",
    "SolveResult",
]
