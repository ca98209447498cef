import threading
import time
import uuid
from enum import Enum
from typing import Callable, Optional

from arcade.errors import ConfigurationError, InvalidTransition
from arcade.models import GameKey

DIFFICULTIES = ('easy', 'medium', 'hard')


class SessionState(str, Enum):
    CONFIGURING = 'configuring'
    IN_PROGRESS = 'in_progress'
    COMPLETED = 'completed'


def _no_timer(duration, on_expire):
    return lambda: None


class GameSession:
    """One play-through: Configuring -> InProgress -> Completed.

    Owns at most one countdown at a time. Every transition that moves past
    the current question or word cancels it; an expiry that arrives for a
    step the player already left is ignored as stale.
    """

    game: GameKey

    def __init__(
        self,
        player_id: Optional[str] = None,
        timer: Callable = None,
        on_complete: Callable = None,
        on_update: Callable = None,
    ):
        self.id = uuid.uuid4().hex
        self.player_id = player_id
        self.state = SessionState.CONFIGURING
        self.score: Optional[int] = None
        self.notice: Optional[str] = None
        self.last_result: Optional[dict] = None
        self.abandoned = False
        self._timer = timer or _no_timer
        self._cancel_timer = None
        self._on_complete = on_complete
        self._on_update = on_update
        self._lock = threading.RLock()
        self.touched_at = time.monotonic()
        self.completed_at: Optional[float] = None

    # -- state helpers -------------------------------------------------
    def _require(self, state: SessionState, action: str) -> None:
        if self.abandoned:
            raise InvalidTransition(f'Cannot {action} an abandoned session')
        if self.state != state:
            raise InvalidTransition(f'Cannot {action} while session is {self.state.value}')

    def _arm(self, duration: float, token: int) -> None:
        self._disarm()
        self._cancel_timer = self._timer(duration, lambda: self._expire(token))

    def _disarm(self) -> None:
        cancel, self._cancel_timer = self._cancel_timer, None
        if cancel:
            cancel()

    def _expire(self, token: int) -> None:
        with self._lock:
            if self.abandoned or self.state != SessionState.IN_PROGRESS or token != self.step:
                return
            self._cancel_timer = None
            self.on_timeout()
        if self._on_update:
            self._on_update(self)

    def _complete(self, score: int) -> None:
        self._disarm()
        self.state = SessionState.COMPLETED
        self.score = score
        self.completed_at = time.monotonic()
        if self._on_complete:
            self._on_complete(self)

    def touch(self) -> None:
        self.touched_at = time.monotonic()

    def is_stale(self, now: float, retention: float, idle_timeout: float) -> bool:
        """Completed longer than retention ago, or untouched for idle_timeout."""
        if self.completed_at is not None and now - self.completed_at >= retention:
            return True
        return now - self.touched_at >= idle_timeout

    def abandon(self) -> None:
        """Leave without a score; nothing is computed or persisted."""
        with self._lock:
            self._disarm()
            self.abandoned = True

    # -- per game ------------------------------------------------------
    @property
    def step(self) -> int:
        return 0

    def on_timeout(self) -> None:
        pass

    def to_dict(self):
        return {
            'id': self.id,
            'game': self.game.value,
            'state': self.state.value,
            'playerId': self.player_id,
            'score': self.score,
            'notice': self.notice,
            'lastResult': self.last_result,
        }


def require_difficulty(value) -> str:
    if value is None or value == '':
        return 'medium'
    difficulty = str(value).strip().lower()
    if difficulty not in DIFFICULTIES:
        raise ConfigurationError(f"difficulty must be one of {', '.join(DIFFICULTIES)}")
    return difficulty
