from flask import current_app, has_app_context
from sqlalchemy.exc import SQLAlchemyError

from arcade import db
from arcade.models import GameKey
from arcade.services.players import store


OVERWRITE = 'overwrite'
BEST_SCORE_WINS = 'best_score_wins'

# Quiz/scramble replays replace the stored value even when lower; Hanoi keeps the best.
POLICIES = {
    GameKey.TECHNICAL_QUIZ: OVERWRITE,
    GameKey.TOWER_OF_HANOI: BEST_SCORE_WINS,
    GameKey.WORD_SCRAMBLE: OVERWRITE,
}


def should_write(game: GameKey, current: int, new_score: int) -> bool:
    if POLICIES[game] == BEST_SCORE_WINS:
        return new_score > current
    return True


def reconcile(player_id, game, new_score: int) -> None:
    """Apply a completed session's score to the player's record.

    Best effort: a missing player or a failed write is logged and
    swallowed so the session flow never depends on the outcome.
    """
    logger = current_app.logger
    try:
        game = GameKey.parse(game)
    except ValueError:
        logger.error(f"[reconcile-skip] player={player_id} unknown game={game!r}")
        return
    try:
        player = store.get_player(player_id)
        if not player:
            logger.warning(f"[reconcile-skip] player={player_id} game={game.value} not found")
            return
        current = player.score_for(game)
        if not should_write(game, current, new_score):
            logger.info(
                f"[reconcile-keep] player={player_id} game={game.value} stored={current} new={new_score}"
            )
            return
        store.write_score(player, game, new_score)
        logger.info(f"[reconcile-write] player={player_id} game={game.value} {current} -> {new_score}")
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error(f"[reconcile-fail] player={player_id} game={game.value} score={new_score}: {exc}")


def submit_score(app, player_id, game, new_score: int) -> None:
    """Hand a final score to reconcile without blocking the caller.

    Runs inline under TESTING, sharing the caller's database session when an
    app context is already active; otherwise as a Socket.IO background task
    with its own app context.
    """
    if not player_id:
        app.logger.info(f"[reconcile-skip] anonymous session game={GameKey.parse(game).value} score={new_score}")
        return

    def _worker(pid, g, score):
        with app.app_context():
            reconcile(pid, g, score)

    if app.config.get('TESTING'):
        if has_app_context():
            reconcile(player_id, game, new_score)
        else:
            _worker(player_id, game, new_score)
    else:
        from arcade import socketio
        socketio.start_background_task(_worker, player_id, game, new_score)
