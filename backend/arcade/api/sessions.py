from flask import Blueprint, jsonify, current_app
from flask_login import current_user

from arcade.api import json_object
from arcade.errors import ArcadeError, InvalidTransition
from arcade.models import GameKey
from arcade.services.sessions import HanoiSession, QuizSession, ScrambleSession
from arcade.services.sessions import registry


sessions = Blueprint('sessions', __name__)


def _error(exc: ArcadeError):
    return jsonify(exc.to_dict()), exc.status_code


def _session_of(session_id, kind):
    session = registry.get_session(session_id)
    if not isinstance(session, kind):
        raise InvalidTransition(f'Session {session_id} is not a {kind.game.value} session')
    return session


@sessions.route('', methods=['POST'])
def create_session():
    try:
        data = json_object()
        game = GameKey.parse(data.get('game'))
    except ArcadeError as exc:
        return _error(exc)
    except ValueError as exc:
        return jsonify({'error': str(exc)}), 400
    player_id = current_user.id if current_user.is_authenticated else None
    try:
        session = registry.open_session(
            current_app._get_current_object(), game, player_id=player_id, options=data
        )
    except ArcadeError as exc:
        return _error(exc)
    return jsonify(session.to_dict()), 201


@sessions.route('/<string:session_id>', methods=['GET'])
def get_session_state(session_id):
    try:
        session = registry.get_session(session_id)
    except ArcadeError as exc:
        return _error(exc)
    return jsonify(session.to_dict())


@sessions.route('/<string:session_id>', methods=['DELETE'])
def abandon_session(session_id):
    try:
        session = registry.discard_session(session_id)
    except ArcadeError as exc:
        return _error(exc)
    current_app.logger.info(f"[session-end] session={session_id} state={session.state.value}")
    return jsonify({'ok': True})


@sessions.route('/<string:session_id>/answer', methods=['POST'])
def answer_question(session_id):
    try:
        data = json_object()
        session = _session_of(session_id, QuizSession)
        session.answer(data.get('option'))
    except ArcadeError as exc:
        return _error(exc)
    return jsonify(session.to_dict())


@sessions.route('/<string:session_id>/move', methods=['POST'])
def move_disk(session_id):
    try:
        data = json_object()
        session = _session_of(session_id, HanoiSession)
        accepted = session.move(data.get('from'), data.get('to'))
    except ArcadeError as exc:
        return _error(exc)
    payload = session.to_dict()
    payload['accepted'] = accepted
    return jsonify(payload)


@sessions.route('/<string:session_id>/guess', methods=['POST'])
def guess_word(session_id):
    try:
        data = json_object()
        session = _session_of(session_id, ScrambleSession)
        session.guess(data.get('guess'))
    except ArcadeError as exc:
        return _error(exc)
    return jsonify(session.to_dict())
