# /utils_stats.py
from typing import List, Optional, Sequence
import pandas as pd

from models import GameRecord, GameSession
from scoring import player_rank

LIFETIME_COLUMNS = ["player", "games", "wins", "win_rate", "avg_total", "best_total"]


def round_labels(n: int) -> List[str]:
    return [f"R{i}" for i in range(1, n + 1)]


def score_table_df(session: GameSession) -> pd.DataFrame:
    """
    Round-by-player grid: index R1..Rn (n = current round), one column per
    player id. Rounds with no entry are <NA>.
    """
    n = session.current_round
    data = {}
    for p in session.roster:
        col = [p.scores[i] if i < len(p.scores) else None for i in range(n)]
        data[p.id] = pd.array(col, dtype="Int64")
    return pd.DataFrame(data, index=round_labels(n), columns=[p.id for p in session.roster])


def totals_df(session: GameSession) -> pd.DataFrame:
    rows = [
        {"player_id": p.id, "player": p.name, "total": p.total, "rank": player_rank(session.roster, p.id)}
        for p in session.roster
    ]
    return pd.DataFrame(rows, columns=["player_id", "player", "total", "rank"])


def running_totals_df(session: GameSession) -> pd.DataFrame:
    """Long form (round, player, running_total) for a cumulative chart."""
    rows = []
    for p in session.roster:
        running = 0
        for i in range(session.current_round):
            if i < len(p.scores) and p.scores[i] is not None:
                running += p.scores[i]
            rows.append({"round": i + 1, "player": p.name, "running_total": running})
    return pd.DataFrame(rows, columns=["round", "player", "running_total"])


def history_summary_df(records: Sequence[GameRecord]) -> pd.DataFrame:
    rows = [
        {
            "game_id": r.id,
            "date": r.date,
            "player": p.name,
            "total": p.total,
            "is_winner": p.id == r.winner_id if r.winner_id else p.name == r.winner,
        }
        for r in records
        for p in r.players
    ]
    return pd.DataFrame(rows, columns=["game_id", "date", "player", "total", "is_winner"])


def lifetime_wins_df(records: Sequence[GameRecord]) -> pd.DataFrame:
    """
    Per-name record across archived games. Players are matched by name since
    ids only live as long as one game. Lower totals are better.
    """
    df = history_summary_df(records)
    if df.empty:
        return pd.DataFrame(columns=LIFETIME_COLUMNS)

    agg = df.groupby("player").agg(
        games=("game_id", "nunique"),
        wins=("is_winner", "sum"),
        avg_total=("total", "mean"),
        best_total=("total", "min"),
    ).reset_index()

    agg["wins"] = agg["wins"].astype(int)
    agg["win_rate"] = (agg["wins"] / agg["games"]).round(3)
    agg["avg_total"] = agg["avg_total"].round(2)
    agg = agg[LIFETIME_COLUMNS].sort_values(
        by=["wins", "avg_total"], ascending=[False, True]
    ).reset_index(drop=True)
    return agg


def format_score_cell(value: Optional[int]) -> str:
    # Blank for both "no entry" and an explicit 0, like the input placeholder.
    if not value:
        return ""
    return str(value)
