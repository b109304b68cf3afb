"""Shared fixtures; structlog routes through stdlib logging so caplog works."""
import pytest
import structlog

from engine import ScoreEngine
from models import GameSession

structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=False,
)


@pytest.fixture()
def session():
    return GameSession()


@pytest.fixture()
def engine(session):
    return ScoreEngine(session)


@pytest.fixture()
def make_roster(engine):
    """Add players and record one round of scores per player: make_roster(("A", 10), ("B", 10))."""

    def _make(*entries):
        players = []
        for name, *scores in entries:
            player = engine.add_player(name).player
            for idx, value in enumerate(scores):
                engine.update_score(player.id, idx, str(value))
            players.append(player)
        return players

    return _make
