"""Leaderboard read model.

Boards are projections of the player table recomputed on every read:
order by score descending, break ties by earlier registration, then
number the final ordering 1..N. Nothing here is cached, so a board can
never outlive the score write that changed it.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from arcade.errors import LeaderboardUnavailable
from arcade.models import GameKey
from arcade.services.players import store

DEFAULT_LIMIT = 10
PODIUM_SIZE = 3


@dataclass(frozen=True)
class LeaderboardEntry:
    player_id: str
    name: str
    score: int
    rank: int
    created_at: Optional[datetime]

    def to_dict(self):
        return {
            'playerId': self.player_id,
            'name': self.name,
            'score': self.score,
            'rank': self.rank,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class Leaderboard:
    game: GameKey
    entries: List[LeaderboardEntry]

    @property
    def podium(self) -> List[LeaderboardEntry]:
        return self.entries[:PODIUM_SIZE]

    @property
    def rest(self) -> List[LeaderboardEntry]:
        return self.entries[PODIUM_SIZE:]

    def to_dict(self):
        return {
            'game': self.game.value,
            'entries': [e.to_dict() for e in self.entries],
            'podium': [e.to_dict() for e in self.podium],
            'rest': [e.to_dict() for e in self.rest],
        }


_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _as_utc(ts: Optional[datetime]) -> datetime:
    # SQLite hands timestamps back naive; they were written as UTC
    if ts is None:
        return _EPOCH
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def rank_players(players: Iterable, game: GameKey, limit: int = DEFAULT_LIMIT) -> List[LeaderboardEntry]:
    """Order players for one game and assign ranks.

    Ranks are assigned only after the complete ordering (score desc,
    created_at asc, id asc) so equal scores never share or skip a rank.
    """
    ordered = sorted(
        players,
        key=lambda p: (-p.score_for(game), _as_utc(p.created_at), str(p.id)),
    )
    return [
        LeaderboardEntry(
            player_id=p.id,
            name=p.name,
            score=p.score_for(game),
            rank=position,
            created_at=p.created_at,
        )
        for position, p in enumerate(ordered[:limit], start=1)
    ]


def _limit() -> int:
    return int(current_app.config.get('LEADERBOARD_LIMIT', DEFAULT_LIMIT))


def fetch_leaderboard(game, limit: Optional[int] = None) -> Leaderboard:
    game = GameKey.parse(game)
    limit = limit or _limit()
    try:
        players = store.players_by_score(game, limit)
    except SQLAlchemyError as exc:
        current_app.logger.error(f"[leaderboard-fail] game={game.value}: {exc}")
        raise LeaderboardUnavailable('Failed to load leaderboard data. Please try again later.') from exc
    return Leaderboard(game=game, entries=rank_players(players, game, limit))


def fetch_all_leaderboards(limit: Optional[int] = None) -> Dict[str, Leaderboard]:
    """Boards for every game, or a single LeaderboardUnavailable if any read fails."""
    boards = {}
    for game in GameKey:
        boards[game.value] = fetch_leaderboard(game, limit)
    return boards
