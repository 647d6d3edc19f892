from __future__ import annotations

import base64

import pytest

from mugloar_player import play_session
from mugloar_player.core.ciphers import rot13
from mugloar_player.core.engine import DirectorConfig, GameDirector, apply_solve, offer_rank_key, select_best
from mugloar_player.core.errors import ApiClientError, SessionStalledError
from mugloar_player.core.shop import PurchaseAdvisor
from mugloar_player.core.types import SolveResult


def solved(lives: int, gold: int = 100, score: int = 0, turn: int = 2) -> SolveResult:
    return SolveResult(success=True, lives=lives, gold=gold, score=score, high_score=0, turn=turn, message="ok")


def test_select_prefers_longer_expiry_when_odds_tie(make_offer):
    a = make_offer("A", "Piece of cake", expires_in=3, reward=100)
    b = make_offer("B", "Piece of cake", expires_in=6, reward=90)
    assert select_best([a, b]) is b


def test_select_lets_odds_dominate_reward_and_expiry(make_offer):
    a = make_offer("A", "Piece of cake", expires_in=6, reward=150)
    b = make_offer("B", "Gamble", expires_in=10, reward=999)
    assert select_best([b, a]) is a


def test_select_uses_reward_as_last_key_and_never_drops_expiring_offers(make_offer):
    a = make_offer("A", "Sure thing", expires_in=1, reward=10)
    b = make_offer("B", "Sure thing", expires_in=1, reward=20)
    assert select_best([a, b]) is b
    assert select_best([a]) is a


def test_select_ranks_unknown_labels_last(make_offer):
    unknown = make_offer("U", "No idea", expires_in=9, reward=500)
    impossible = make_offer("I", "Impossible", expires_in=9, reward=501)
    risky = make_offer("R", "Risky", expires_in=1, reward=1)
    assert select_best([unknown, impossible, risky]) is risky
    assert select_best([]) is None


def test_recognized_impossible_beats_unknown_label_with_more_time(make_offer):
    unknown = make_offer("U", "No idea", expires_in=9, reward=999)
    impossible = make_offer("I", "Impossible", expires_in=1, reward=1)
    still_encoded = make_offer("E", rot13("Gamble"), expires_in=9, reward=999, cipher="3")

    assert select_best([unknown, impossible]) is impossible
    assert select_best([still_encoded, unknown, impossible]) is impossible
    assert offer_rank_key(unknown)[0] == offer_rank_key(impossible)[0] == 0.0


def test_unknown_labels_still_compete_among_themselves(make_offer):
    short = make_offer("S", "No idea", expires_in=2, reward=50)
    long = make_offer("L", "Whatever", expires_in=8, reward=10)
    assert select_best([short, long]) is long


def test_apply_solve_carries_session_and_level(start_snapshot):
    nxt = apply_solve(start_snapshot, SolveResult(True, 1, 80, 50, 60, 3, "ok"))
    assert nxt.session_id == "game-1"
    assert nxt.level == start_snapshot.level
    assert (nxt.lives, nxt.gold, nxt.score, nxt.high_score, nxt.turn) == (1, 80, 50, 60, 3)


def test_single_solve_ending_the_game_makes_no_further_calls(game_api_cls, make_offer, start_snapshot, catalog):
    offer = make_offer("A1", "Piece of cake")
    api = game_api_cls(
        start=start_snapshot,
        offer_batches=[[offer]],
        solve_results={"A1": solved(lives=0, gold=120, score=1234, turn=2)},
        catalog=catalog,
    )

    result = GameDirector(api).play()

    assert (result.session_id, result.score, result.turns) == ("game-1", 1234, 2)
    assert api.calls == [
        ("start_session",),
        ("list_catalog", "game-1"),
        ("list_offers", "game-1"),
        ("solve", "game-1", "A1"),
    ]


def test_best_offer_is_solved_and_shop_is_visited_after_each_solve(game_api_cls, make_offer, start_snapshot, catalog):
    batch_one = [
        make_offer("L", "Piece of cake", expires_in=1, reward=150),
        make_offer("H", "Piece of cake", expires_in=6, reward=120),
    ]
    batch_two = [make_offer("Z", "Gamble")]
    api = game_api_cls(
        start=start_snapshot,
        offer_batches=[batch_one, batch_two],
        solve_results={
            "H": solved(lives=1, gold=90, score=120, turn=2),
            "Z": solved(lives=0, gold=90, score=120, turn=3),
        },
        catalog=catalog,
    )

    result = GameDirector(api).play()

    assert result.turns == 3
    assert [c for c in api.calls if c[0] in {"solve", "buy"}] == [
        ("solve", "game-1", "H"),
        ("buy", "game-1", "hpot"),
        ("solve", "game-1", "Z"),
    ]


def test_empty_turn_visits_shop_then_polls_again(game_api_cls, make_offer, start_snapshot, catalog):
    api = game_api_cls(
        start=start_snapshot,
        offer_batches=[[], [make_offer("C3", "Quite likely", reward=70, expires_in=4)]],
        solve_results={"C3": solved(lives=0, score=1010, turn=2)},
        catalog=catalog,
    )

    result = GameDirector(api).play()

    assert result.score == 1010
    assert api.call_names().count("list_offers") == 2
    assert api.call_names().count("solve") == 1


def test_encoded_offers_are_decoded_before_solving(game_api_cls, make_offer, start_snapshot, catalog):
    encoded = make_offer(
        base64.b64encode(b"secret-ad").decode("ascii"),
        base64.b64encode(b"Walk in the park").decode("ascii"),
        text=base64.b64encode(b"Escort the caravan").decode("ascii"),
        cipher="1",
    )
    rotated = make_offer(rot13("rot-ad"), rot13("Gamble"), cipher="2")
    undecodable = make_offer("zzz", rot13("Nope"), cipher="2")
    api = game_api_cls(
        start=start_snapshot,
        offer_batches=[[undecodable, rotated, encoded, None]],
        solve_results={"secret-ad": solved(lives=0, score=5, turn=2)},
        catalog=catalog,
    )

    GameDirector(api).play()

    assert ("solve", "game-1", "secret-ad") in api.calls


def test_idle_cap_raises_when_configured(game_api_cls, start_snapshot, catalog):
    api = game_api_cls(start=start_snapshot, offer_batches=[], catalog=catalog)
    director = GameDirector(api, config=DirectorConfig(max_idle_turns=2))

    with pytest.raises(SessionStalledError):
        director.play()
    assert api.call_names().count("list_offers") == 3


def test_transport_errors_abort_the_session(game_api_cls, start_snapshot, catalog):
    class FailingAPI(game_api_cls):
        def list_offers(self, session_id):
            raise ApiClientError("HTTP 500 for GET body=boom", status=500)

    with pytest.raises(ApiClientError):
        GameDirector(FailingAPI(start=start_snapshot, catalog=catalog)).play()


def test_each_play_gets_a_fresh_advisor(game_api_cls, make_offer, start_snapshot, catalog):
    api = game_api_cls(start=start_snapshot, catalog=catalog)
    built = []

    def factory(api_, session_id):
        advisor = PurchaseAdvisor(api_, session_id)
        built.append(advisor)
        return advisor

    director = GameDirector(api, advisor_factory=factory)
    for _ in range(2):
        api.offer_batches.append([make_offer("A1")])
        api.solve_results["A1"] = solved(lives=0)
        director.play()

    assert len(built) == 2
    assert built[0] is not built[1]


def test_play_session_entry_point(game_api_cls, make_offer, start_snapshot, catalog):
    api = game_api_cls(
        start=start_snapshot,
        offer_batches=[[make_offer("A1")]],
        solve_results={"A1": solved(lives=0, score=77, turn=5)},
        catalog=catalog,
    )
    result = play_session(api)
    assert (result.session_id, result.score, result.turns) == ("game-1", 77, 5)
