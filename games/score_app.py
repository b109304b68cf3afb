# /games/score_app.py
import time

import streamlit as st
import altair as alt

from engine import OperationResult, ScoreEngine
from models import GameSession
from settings import HISTORY_DISPLAY_LIMIT, MAX_NAME_LENGTH, MAX_PLAYERS, RESET_DELAY_SEC
from utils_stats import format_score_cell, lifetime_wins_df, running_totals_df


def _engine() -> ScoreEngine:
    if "score_session" not in st.session_state:
        st.session_state.score_session = GameSession()
    return ScoreEngine(st.session_state.score_session)


def _notify(result: OperationResult):
    for n in result.notifications:
        st.toast(f"**{n.title}** {n.description}")


def _on_score_change(player_id: str, round_index: int, key: str):
    result = _engine().update_score(player_id, round_index, st.session_state.get(key, ""))
    if result.success:
        # Show the stored value, not the raw text ("12abc" becomes "12").
        st.session_state[key] = format_score_cell(result.player.scores[round_index])


def _on_remove(player_id: str):
    _engine().remove_player(player_id)


def _running_totals_chart(engine: ScoreEngine):
    df = running_totals_df(engine.session)
    return (
        alt.Chart(df)
        .mark_line(point=True)
        .encode(
            x=alt.X("round:O", title="Round"),
            y=alt.Y("running_total:Q", title="Running total"),
            color=alt.Color("player:N", title="Player"),
            tooltip=["player", "round", "running_total"],
        )
        .properties(height=260)
        .configure(background="transparent")
        .configure_axis(labelColor="#e6f4ea", titleColor="#e6f4ea")
        .configure_legend(labelColor="#e6f4ea", titleColor="#e6f4ea")
    )


def _render_add_player(engine: ScoreEngine):
    st.subheader("Add Player")
    full = len(engine.roster) >= MAX_PLAYERS
    with st.form("add_player_form", clear_on_submit=True):
        name = st.text_input("Player name", placeholder="Player name...", max_chars=MAX_NAME_LENGTH)
        submitted = st.form_submit_button("Add", disabled=full)
        if submitted and engine.can_add_player(name):
            _notify(engine.add_player(name))
    if full:
        st.caption(f"Maximum {MAX_PLAYERS} players per game")


def _render_score_grid(engine: ScoreEngine):
    roster = engine.roster
    header = st.columns([1] + [2] * len(roster))
    header[0].markdown("**Round**")
    for col, p in zip(header[1:], roster):
        col.markdown(f"**{p.name}**")

    for r in range(engine.round_count):
        cols = st.columns([1] + [2] * len(roster))
        cols[0].write(f"R{r + 1}")
        for col, p in zip(cols[1:], roster):
            key = f"score_{p.id}_{r}"
            if key not in st.session_state:
                current = p.scores[r] if r < len(p.scores) else None
                st.session_state[key] = format_score_cell(current)
            col.text_input(
                f"{p.name} round {r + 1}",
                placeholder="0",
                key=key,
                label_visibility="collapsed",
                on_change=_on_score_change,
                args=(p.id, r, key),
            )

    leader = engine.leader()
    cols = st.columns([1] + [2] * len(roster))
    cols[0].markdown("**Total**")
    for col, p in zip(cols[1:], roster):
        col.markdown(f"**:green[{p.total}]**" if leader and p.id == leader.id else f"{p.total}")

    cols = st.columns([1] + [2] * len(roster))
    cols[0].markdown("**Rank**")
    for col, p in zip(cols[1:], roster):
        col.write(f"#{engine.player_rank(p)}")

    cols = st.columns([1] + [2] * len(roster))
    cols[0].markdown("**Action**")
    for col, p in zip(cols[1:], roster):
        col.button("🗑", key=f"remove_{p.id}", on_click=_on_remove, args=(p.id,))


def render_scores():
    engine = _engine()
    engine.tick()

    st.title("🎯 Score")
    st.caption("Track your scores and become the master of the game!")
    _render_add_player(engine)

    if not engine.roster:
        st.info("Ready for a card game? Add players to start recording scores.")
        return

    st.subheader(f"Scores - Round {engine.current_round}")
    c1, c2, c3 = st.columns(3)
    new_round = c1.button("New round", width="stretch")
    finish = c2.button("🏆 Finish", type="primary", width="stretch")
    reset = c3.button("Reset", width="stretch")

    if new_round:
        _notify(engine.add_round())
        st.rerun()
    if reset:
        engine.reset_game()
        st.rerun()
    if finish:
        result = engine.finish_game()
        _notify(result)
        if result.celebrate:
            st.balloons()
            st.success("Congratulations! Game finished.")
            time.sleep(RESET_DELAY_SEC)
            engine.tick()
            st.rerun()

    _render_score_grid(engine)

    st.subheader("Running Totals")
    st.altair_chart(_running_totals_chart(engine), width="stretch")


def render_history():
    engine = _engine()
    engine.tick()

    st.title("Game History")
    records = engine.recent_history(HISTORY_DISPLAY_LIMIT)
    if not records:
        st.caption("No finished games yet.")
        return

    for record in records:
        with st.container(border=True):
            st.markdown(f"**Game of {record.date}** · 🏆 {record.winner} ({record.winner_total} pts)")
            cols = st.columns(min(4, len(record.players)))
            for i, p in enumerate(record.players):
                cols[i % len(cols)].write(f"{p.name}: {p.total} pts")

    st.subheader("Lifetime Wins")
    st.dataframe(lifetime_wins_df(engine.history), width="stretch")
