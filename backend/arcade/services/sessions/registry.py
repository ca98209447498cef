import threading
import time
from functools import partial
from typing import Dict, Optional

from arcade import socketio
from arcade.errors import SessionNotFound
from arcade.models import GameKey
from arcade.services.scoring.codec import HanoiPolicy
from arcade.services.scoring.reconcile import submit_score
from .base import GameSession
from .hanoi import HanoiSession
from .quiz import QuizSession
from .scramble import ScrambleSession
from .timers import start_timer


_sessions: Dict[str, GameSession] = {}
_sessions_lock = threading.Lock()

PENALTY_DISKS = 3


def _emit_update(session: GameSession) -> None:
    socketio.emit('session_update', session.to_dict(), to=f"session:{session.id}", namespace='/ws')


def build_session(app, game, player_id=None) -> GameSession:
    """Construct a controller for game wired to this app's timers and score hand-off."""
    game = GameKey.parse(game)
    cfg = app.config
    common = dict(
        player_id=player_id,
        timer=partial(start_timer, app),
        on_complete=lambda s: submit_score(app, s.player_id, s.game, s.score),
        on_update=_emit_update,
    )
    if game is GameKey.TECHNICAL_QUIZ:
        return QuizSession(
            question_count=int(cfg.get('QUIZ_QUESTION_COUNT', 10)),
            question_timeout=cfg.get('QUIZ_QUESTION_TIMEOUT_SEC', 10),
            **common,
        )
    if game is GameKey.TOWER_OF_HANOI:
        policy = HanoiPolicy(cfg.get('HANOI_SCORING_POLICY', 'ratio'))
        disk_choices = tuple(cfg.get('HANOI_DISK_CHOICES', (3, 4, 5, 6)))
        # penalty scoring is only defined for the fixed 3-disk puzzle
        if policy is HanoiPolicy.PENALTY:
            disk_choices = (PENALTY_DISKS,)
        return HanoiSession(disk_choices=disk_choices, policy=policy, **common)
    return ScrambleSession(
        word_count=int(cfg.get('SCRAMBLE_WORD_COUNT', 5)),
        word_timeout=cfg.get('SCRAMBLE_WORD_TIMEOUT_SEC', 30),
        **common,
    )


def open_session(app, game, player_id=None, options=None) -> GameSession:
    """Configure and start a session, then register it.

    Configuration errors propagate before anything is registered.
    """
    options = options or {}
    session = build_session(app, game, player_id)
    if isinstance(session, QuizSession):
        session.configure(options.get('topic'), options.get('difficulty'))
    elif isinstance(session, HanoiSession):
        session.configure(options.get('disks'))
    else:
        session.configure(options.get('difficulty'))
    session.start()
    purge_stale_sessions(app)
    with _sessions_lock:
        _sessions[session.id] = session
    app.logger.info(
        f"[session-start] session={session.id} game={session.game.value} player={player_id} fallback={bool(session.notice)}"
    )
    return session


def get_session(session_id: str) -> GameSession:
    with _sessions_lock:
        session = _sessions.get(session_id)
    if not session:
        raise SessionNotFound('Session not found')
    session.touch()
    return session


def purge_stale_sessions(app, now: Optional[float] = None) -> int:
    """Drop finished sessions past retention and abandon idle ones. Returns how many went."""
    now = time.monotonic() if now is None else now
    retention = float(app.config.get('SESSION_RETENTION_SEC', 600))
    idle_timeout = float(app.config.get('SESSION_IDLE_TIMEOUT_SEC', 1800))
    with _sessions_lock:
        stale = [s for s in _sessions.values() if s.is_stale(now, retention, idle_timeout)]
        for session in stale:
            del _sessions[session.id]
    for session in stale:
        session.abandon()
        app.logger.info(f"[session-purge] session={session.id} state={session.state.value}")
    return len(stale)


def discard_session(session_id: str) -> GameSession:
    """Drop a session; an unfinished one is abandoned without a score."""
    with _sessions_lock:
        session = _sessions.pop(session_id, None)
    if not session:
        raise SessionNotFound('Session not found')
    session.abandon()
    return session


def clear_sessions() -> None:
    with _sessions_lock:
        sessions = list(_sessions.values())
        _sessions.clear()
    for session in sessions:
        session.abandon()
