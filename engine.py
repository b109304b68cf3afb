# /engine.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
import time

import structlog

from models import GameRecord, GameSession, Player
from scoring import (
    has_any_score,
    normalize_name,
    parse_score_input,
    pick_winner,
    player_rank,
    rank_players,
)
from settings import DATE_FORMAT, HISTORY_DISPLAY_LIMIT, MAX_PLAYERS, RESET_DELAY_SEC

logger = structlog.get_logger(__name__)


@dataclass
class Notification:
    """A short message the presentation layer shows to the user (e.g. as a toast)."""

    kind: str
    title: str
    description: str


@dataclass
class OperationResult:
    """
    Outcome of an engine mutation.

    Rejected operations are plain no-ops: `success` is False, `reason`
    says why and the session is left untouched.
    """

    success: bool
    reason: Optional[str] = None
    notifications: List[Notification] = field(default_factory=list)
    player: Optional[Player] = None
    record: Optional[GameRecord] = None
    celebrate: bool = False


def _rejected(reason: str, **context) -> OperationResult:
    logger.debug("operation rejected", reason=reason, **context)
    return OperationResult(success=False, reason=reason)


class ScoreEngine:
    """
    Score-state engine for a lowest-total-wins card game.

    The engine mutates the `GameSession` it is given; the caller keeps the
    session (for instance in `st.session_state`) so state survives reruns.
    """

    def __init__(self, session: Optional[GameSession] = None):
        self.session = session if session is not None else GameSession()

    # ---- Queries ----
    @property
    def roster(self) -> List[Player]:
        return self.session.roster

    @property
    def current_round(self) -> int:
        return self.session.current_round

    @property
    def history(self) -> List[GameRecord]:
        return self.session.history

    @property
    def round_count(self) -> int:
        return self.session.current_round

    def get_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.session.roster if p.id == player_id), None)

    def player_rank(self, player: Player) -> int:
        return player_rank(self.session.roster, player.id)

    def leader(self) -> Optional[Player]:
        ranked = rank_players(self.session.roster)
        return ranked[0] if ranked else None

    def can_add_player(self, name: Optional[str]) -> bool:
        return bool(normalize_name(name)) and len(self.session.roster) < MAX_PLAYERS

    def can_finish_game(self) -> bool:
        return bool(self.session.roster) and has_any_score(self.session.roster)

    def recent_history(self, limit: int = HISTORY_DISPLAY_LIMIT) -> List[GameRecord]:
        return self.session.history[:limit]

    # ---- Mutations ----
    def add_player(self, name: Optional[str]) -> OperationResult:
        clean = normalize_name(name)
        if not clean:
            return _rejected("empty name")
        if len(self.session.roster) >= MAX_PLAYERS:
            return _rejected("roster full", max_players=MAX_PLAYERS)

        player = Player(name=clean)
        self.session.roster.append(player)
        logger.info("player added", player_id=player.id, name=clean, roster_size=len(self.session.roster))
        return OperationResult(
            success=True,
            player=player,
            notifications=[Notification("player_added", "Player added", f"{clean} joined the game")],
        )

    def remove_player(self, player_id: str) -> OperationResult:
        player = self.get_player(player_id)
        if player is None:
            return _rejected("unknown player", player_id=player_id)
        # current_round is left alone even if the roster empties.
        self.session.roster = [p for p in self.session.roster if p.id != player_id]
        logger.info("player removed", player_id=player_id, roster_size=len(self.session.roster))
        return OperationResult(success=True, player=player)

    def update_score(self, player_id: str, round_index: int, raw_value) -> OperationResult:
        player = self.get_player(player_id)
        if player is None:
            return _rejected("unknown player", player_id=player_id)
        if round_index < 0:
            return _rejected("negative round index", round_index=round_index)

        value = parse_score_input(raw_value)
        scores = list(player.scores)
        if round_index >= len(scores):
            scores.extend([None] * (round_index + 1 - len(scores)))
        scores[round_index] = value
        player.scores = scores
        logger.debug("score updated", player_id=player_id, round_index=round_index, value=value, total=player.total)
        return OperationResult(success=True, player=player)

    def add_round(self) -> OperationResult:
        if not self.session.roster:
            return _rejected("no players")
        self.session.current_round += 1
        n = self.session.current_round
        logger.info("round started", round=n)
        return OperationResult(
            success=True,
            notifications=[Notification("round_started", "New round", f"Round {n} started")],
        )

    def finish_game(self, now: Optional[float] = None) -> OperationResult:
        """
        Archive the current game and schedule the automatic reset.

        The winner is the lowest total; on a tie the player added first
        wins. The record holds a deep copy of the roster, so later edits to
        live players never reach history.
        """
        roster = self.session.roster
        if not roster:
            return _rejected("no players")
        if not has_any_score(roster):
            return _rejected("no scores recorded")

        winner = pick_winner(roster)
        finished_at = datetime.now()
        record = GameRecord(
            date=finished_at.strftime(DATE_FORMAT),
            finished_at=finished_at,
            players=[p.model_copy(deep=True) for p in roster],
            winner=winner.name,
            winner_id=winner.id,
            winner_total=winner.total,
        )
        self.session.history.insert(0, record)

        now = time.monotonic() if now is None else now
        self.session.pending_resets.append(now + RESET_DELAY_SEC)
        logger.info(
            "game archived",
            game_id=record.id,
            winner=winner.name,
            winner_id=winner.id,
            winner_total=winner.total,
            players=len(record.players),
            history_size=len(self.session.history),
        )
        return OperationResult(
            success=True,
            record=record,
            celebrate=True,
            notifications=[
                Notification(
                    "game_finished",
                    "Game over!",
                    f"{winner.name} wins the game with {winner.total} points!",
                )
            ],
        )

    def reset_game(self) -> OperationResult:
        self.session.roster = []
        self.session.current_round = 1
        logger.info("game reset", history_size=len(self.session.history))
        return OperationResult(success=True)

    def tick(self, now: Optional[float] = None) -> bool:
        """Run every scheduled auto-reset whose deadline has passed."""
        now = time.monotonic() if now is None else now
        due = [d for d in self.session.pending_resets if d <= now]
        if not due:
            return False
        self.session.pending_resets = [d for d in self.session.pending_resets if d > now]
        for _ in due:
            logger.info("auto reset fired")
            self.reset_game()
        return True
