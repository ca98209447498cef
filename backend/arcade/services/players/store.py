"""Player record persistence.

Thin layer over the ``player`` table: creation with zeroed scores,
lookup by id, single score-field updates and the score-sorted read the
leaderboard is built from. Commits happen here; callers decide how to
handle SQLAlchemy errors.
"""

from typing import List, Optional

from arcade import db
from arcade.models import GameKey, Player


def create_player(name: str, email: str, mobile_number: str, age: int, created_at=None) -> Player:
    player = Player(
        name=name,
        email=email,
        mobile_number=mobile_number,
        age=age,
        technical_quiz_score=0,
        tower_of_hanoi_score=0,
        word_scramble_score=0,
    )
    if created_at is not None:
        player.created_at = created_at
    db.session.add(player)
    db.session.commit()
    return player


def get_player(player_id) -> Optional[Player]:
    if not player_id:
        return None
    return db.session.get(Player, str(player_id))


def write_score(player: Player, game: GameKey, score: int) -> None:
    setattr(player, game.column, int(score))
    db.session.add(player)
    db.session.commit()


def players_by_score(game: GameKey, limit: int) -> List[Player]:
    column = getattr(Player, game.column)
    return (
        Player.query
        .order_by(column.desc(), Player.created_at.asc(), Player.id.asc())
        .limit(limit)
        .all()
    )
