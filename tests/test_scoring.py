from types import SimpleNamespace

import pytest

from scoring import (
    has_any_score,
    normalize_name,
    parse_score_input,
    pick_winner,
    player_rank,
    player_total,
    rank_players,
)


def _p(pid, total, scores=None):
    return SimpleNamespace(id=pid, total=total, scores=scores if scores is not None else [total])


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("7", 7),
        ("-3", -3),
        ("+4", 4),
        ("  12 ", 12),
        ("12abc", 12),
        ("3.9", 3),
        ("", 0),
        ("abc", 0),
        ("-", 0),
        (None, 0),
        (15, 15),
        ("\u0663", 0),
        ("7\u0663", 7),
        ("9" * 5000, 0),
    ],
)
def test_parse_score_input(raw, expected):
    assert parse_score_input(raw) == expected


def test_normalize_name_trims_and_caps():
    assert normalize_name("  Alice  ") == "Alice"
    assert normalize_name("   ") == ""
    assert normalize_name(None) == ""
    assert normalize_name("x" * 30) == "x" * 20
    # Truncation never leaves trailing whitespace behind.
    assert normalize_name("a" * 19 + " b") == "a" * 19


def test_player_total_treats_absent_as_zero():
    assert player_total([10, None, 0, 5]) == 15
    assert player_total([]) == 0


def test_rank_players_is_stable_on_ties():
    p1, p2, p3 = _p("p1", 20), _p("p2", 20), _p("p3", 15)
    assert [p.id for p in rank_players([p1, p2, p3])] == ["p3", "p1", "p2"]
    assert player_rank([p1, p2, p3], "p3") == 1
    assert player_rank([p1, p2, p3], "p1") == 2
    assert player_rank([p1, p2, p3], "p2") == 3
    assert player_rank([p1, p2, p3], "missing") == 0


def test_pick_winner_keeps_earliest_on_tie():
    a, b = _p("a", 10), _p("b", 10)
    assert pick_winner([a, b]) is a
    assert pick_winner([b, a]) is b
    assert pick_winner([]) is None


def test_has_any_score():
    assert not has_any_score([])
    assert not has_any_score([_p("x", 0, scores=[])])
    assert has_any_score([_p("x", 0, scores=[]), _p("y", 0, scores=[None])])


def test_oversized_score_input_is_coerced_not_raised(engine):
    p = engine.add_player("A").player
    result = engine.update_score(p.id, 0, "9" * 5000)
    assert result.success
    assert p.scores == [0]
    assert p.total == 0
