# /scoring.py
from __future__ import annotations
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Union
import re

from settings import MAX_NAME_LENGTH

if TYPE_CHECKING:
    from models import Player

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def parse_score_input(raw: Union[str, int, None]) -> int:
    """
    Lenient integer parse for a score cell.

    Reads an optional sign and the leading digits, ignoring whatever follows
    ("12abc" -> 12, "3.9" -> 3). Empty, missing or non-numeric input falls
    back to 0 instead of being rejected, as do non-ASCII digits and digit
    strings too long to convert.
    """
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return raw
    m = _LEADING_INT.match(str(raw))
    if not m:
        return 0
    try:
        return int(m.group(1))
    except ValueError:
        # int() refuses very long digit strings.
        return 0


def normalize_name(raw: Optional[str]) -> str:
    """Trimmed display name capped at MAX_NAME_LENGTH; may be empty."""
    if not raw:
        return ""
    return raw.strip()[:MAX_NAME_LENGTH].strip()


def player_total(scores: Iterable[Optional[int]]) -> int:
    return sum(s or 0 for s in scores)


def rank_players(players: Sequence["Player"]) -> List["Player"]:
    # sorted() is stable, so equal totals keep roster order.
    return sorted(players, key=lambda p: p.total)


def player_rank(players: Sequence["Player"], player_id: str) -> int:
    """1-based rank of `player_id` (lowest total first); 0 when not in the roster."""
    for idx, p in enumerate(rank_players(players), start=1):
        if p.id == player_id:
            return idx
    return 0


def pick_winner(players: Sequence["Player"]) -> Optional["Player"]:
    if not players:
        return None
    # min() returns the first minimal element, so ties go to the earliest player.
    return min(players, key=lambda p: p.total)


def has_any_score(players: Sequence["Player"]) -> bool:
    return any(len(p.scores) > 0 for p in players)
