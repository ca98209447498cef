from arcade import db
from flask_login import UserMixin
from datetime import datetime, timezone
from enum import Enum
import uuid


class GameKey(str, Enum):
    """The closed set of games a player can hold a score for."""
    TECHNICAL_QUIZ = 'technicalQuiz'
    TOWER_OF_HANOI = 'towerOfHanoi'
    WORD_SCRAMBLE = 'wordScramble'

    @property
    def column(self) -> str:
        return _SCORE_COLUMNS[self]

    @classmethod
    def parse(cls, value) -> 'GameKey':
        """Resolve a wire identifier; anything outside the three games is a ValueError."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f'Unknown game: {value!r}') from None


_SCORE_COLUMNS = {
    GameKey.TECHNICAL_QUIZ: 'technical_quiz_score',
    GameKey.TOWER_OF_HANOI: 'tower_of_hanoi_score',
    GameKey.WORD_SCRAMBLE: 'word_scramble_score',
}


def _new_player_id() -> str:
    return uuid.uuid4().hex


def _utcnow():
    return datetime.now(timezone.utc)


class Player(UserMixin, db.Model):
    __tablename__ = 'player'
    id = db.Column(db.String(32), primary_key=True, default=_new_player_id)
    name = db.Column(db.String(64), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    mobile_number = db.Column(db.String(10), nullable=False)
    age = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    technical_quiz_score = db.Column(db.Integer, nullable=False, default=0)
    tower_of_hanoi_score = db.Column(db.Integer, nullable=False, default=0)
    word_scramble_score = db.Column(db.Integer, nullable=False, default=0)

    def score_for(self, game: GameKey) -> int:
        return int(getattr(self, game.column) or 0)

    @property
    def scores(self):
        return {game.value: self.score_for(game) for game in GameKey}

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'mobileNumber': self.mobile_number,
            'age': self.age,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'scores': self.scores,
        }
