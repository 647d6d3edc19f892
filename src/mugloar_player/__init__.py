from __future__ import annotations

from .client import DEFAULT_BASE_URL, GameClient
from .core.decoder import MessageDecoder
from .core.engine import DirectorConfig, GameDirector
from .core.errors import ApiClientError, SessionStalledError
from .core.ports import GameAPIPort
from .core.shop import PurchaseAdvisor
from .core.types import GameResult


def play_session(api: GameAPIPort, config: DirectorConfig | None = None) -> GameResult:
    """Play one session to completion and return its final score and turn count."""
    return GameDirector(api, config=config).play()


__all__ = [
    "DEFAULT_BASE_URL",
    "GameClient",
    "GameDirector",
    "DirectorConfig",
    "MessageDecoder",
    "PurchaseAdvisor",
    "GameAPIPort",
    "GameResult",
    "ApiClientError",
    "SessionStalledError",
    "play_session",
]
