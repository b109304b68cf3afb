import pytest
import pandas as pd

from utils_stats import (
    LIFETIME_COLUMNS,
    format_score_cell,
    history_summary_df,
    lifetime_wins_df,
    running_totals_df,
    score_table_df,
    totals_df,
)


def test_score_table_grows_with_rounds(engine, session):
    a = engine.add_player("A").player
    b = engine.add_player("B").player
    engine.add_round()
    engine.add_round()
    engine.update_score(a.id, 2, "7")
    engine.update_score(b.id, 0, "0")

    df = score_table_df(session)
    assert list(df.index) == ["R1", "R2", "R3"]
    assert list(df.columns) == [a.id, b.id]
    assert pd.isna(df.loc["R1", a.id])
    assert df.loc["R3", a.id] == 7
    assert df.loc["R1", b.id] == 0


def test_score_table_empty_roster(session):
    df = score_table_df(session)
    assert df.empty
    assert list(df.index) == ["R1"]


def test_totals_df_in_roster_order(session, make_roster):
    make_roster(("P1", 20), ("P2", 20), ("P3", 15))
    df = totals_df(session)
    assert df["player"].tolist() == ["P1", "P2", "P3"]
    assert df["rank"].tolist() == [2, 3, 1]


def test_running_totals(engine, session):
    p = engine.add_player("A").player
    engine.add_round()
    engine.add_round()
    engine.update_score(p.id, 0, "4")
    engine.update_score(p.id, 2, "6")
    df = running_totals_df(session)
    assert df["running_total"].tolist() == [4, 4, 10]
    assert df["round"].tolist() == [1, 2, 3]


def _play(engine, make_roster, *entries):
    make_roster(*entries)
    record = engine.finish_game(now=0.0).record
    engine.reset_game()
    return record


def test_history_summary_marks_winner(engine, make_roster):
    record = _play(engine, make_roster, ("A", 12), ("B", 3))
    df = history_summary_df([record])
    assert df.set_index("player")["is_winner"].to_dict() == {"A": False, "B": True}
    assert (df["date"] == record.date).all()


def test_lifetime_wins(engine, make_roster):
    _play(engine, make_roster, ("Ann", 10), ("Bob", 20))
    _play(engine, make_roster, ("Ann", 30), ("Bob", 5))
    _play(engine, make_roster, ("Ann", 1), ("Cy", 2))

    df = lifetime_wins_df(engine.history)
    assert list(df.columns) == LIFETIME_COLUMNS
    assert df.iloc[0]["player"] == "Ann"
    ann = df.set_index("player").loc["Ann"]
    assert ann["games"] == 3
    assert ann["wins"] == 2
    assert ann["best_total"] == 1
    assert ann["win_rate"] == pytest.approx(0.667)


def test_lifetime_wins_without_history():
    df = lifetime_wins_df([])
    assert df.empty
    assert list(df.columns) == LIFETIME_COLUMNS


def test_format_score_cell():
    assert format_score_cell(None) == ""
    assert format_score_cell(0) == ""
    assert format_score_cell(-4) == "-4"
    assert format_score_cell(12) == "12"
