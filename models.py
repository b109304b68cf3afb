# /models.py
from __future__ import annotations
from typing import List, Optional
from datetime import datetime
import uuid

from sqlmodel import SQLModel, Field

from scoring import player_total


class Player(SQLModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    # None marks a round with no entry yet; it counts as 0 but is not an explicit 0.
    scores: List[Optional[int]] = Field(default_factory=list)
    joined_at: datetime = Field(default_factory=datetime.now)

    @property
    def total(self) -> int:
        return player_total(self.scores)


class GameRecord(SQLModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    date: str
    finished_at: datetime = Field(default_factory=datetime.now)
    players: List[Player] = Field(default_factory=list)
    winner: str
    winner_id: Optional[str] = None
    winner_total: int = 0


class GameSession(SQLModel):
    """State of one interactive session, owned by the presentation layer."""

    roster: List[Player] = Field(default_factory=list)
    current_round: int = 1
    history: List[GameRecord] = Field(default_factory=list)  # newest first
    pending_resets: List[float] = Field(default_factory=list)  # monotonic deadlines
