from __future__ import annotations

import argparse
import logging
import sys

from .client import DEFAULT_BASE_URL, GameClient
from .core.engine import DirectorConfig, GameDirector
from .core.errors import ApiClientError, SessionStalledError
from .core.shop import DEFAULT_GOLD_RESERVE

logger = logging.getLogger("mugloar_player")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mugloar_player",
        description="Play one Dragons of Mugloar session until the dragon runs out of lives.",
    )
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="Game API root URL.")
    parser.add_argument(
        "--reserve",
        type=int,
        default=DEFAULT_GOLD_RESERVE,
        help="Gold kept back for healing potions (default: %(default)s).",
    )
    parser.add_argument(
        "--max-idle-turns",
        type=int,
        default=None,
        help="Give up after this many consecutive turns without offers.",
    )
    parser.add_argument("--timeout", type=float, default=10.0, help="HTTP timeout in seconds.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    client = GameClient(args.base_url, timeout=args.timeout)
    director = GameDirector(
        client,
        config=DirectorConfig(gold_reserve=args.reserve, max_idle_turns=args.max_idle_turns),
    )
    try:
        result = director.play()
    except (ApiClientError, SessionStalledError) as exc:
        logger.error("Game aborted: %s", exc)
        return 1

    print(f"Game finished: id={result.session_id} score={result.score} turns={result.turns}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
