import re

from flask import Blueprint, jsonify, current_app
from flask_login import current_user, login_user, logout_user
from sqlalchemy.exc import SQLAlchemyError

from arcade import db
from arcade.api import json_object
from arcade.errors import ArcadeError, PlayerNotFound
from arcade.services.players.store import create_player, get_player


players = Blueprint('players', __name__)

MOBILE_PATTERN = re.compile(r'^[0-9]{10}$')


def _error(exc: ArcadeError):
    return jsonify(exc.to_dict()), exc.status_code


def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ''


def _validate_registration(data):
    name = _text(data.get('name'))
    email = _text(data.get('email'))
    mobile = data.get('mobileNumber')
    if isinstance(mobile, int) and not isinstance(mobile, bool):
        mobile = str(mobile)
    mobile = _text(mobile)
    if not all([name, email]):
        return None, 'Name and email are required'
    if not MOBILE_PATTERN.match(mobile):
        return None, 'Please enter a valid 10-digit mobile number'
    age = data.get('age')
    if isinstance(age, bool):
        return None, 'Age must be a number'
    try:
        age = int(age)
    except (TypeError, ValueError):
        return None, 'Age must be a number'
    if not 1 <= age <= 120:
        return None, 'Age must be between 1 and 120'
    return {'name': name, 'email': email, 'mobile_number': mobile, 'age': age}, None


def _require_player(player_id):
    player = get_player(player_id) if isinstance(player_id, str) else None
    if not player:
        raise PlayerNotFound('Player not found')
    return player


@players.route('', methods=['POST'])
def register():
    try:
        data = json_object()
    except ArcadeError as exc:
        return _error(exc)
    fields, error = _validate_registration(data)
    if error:
        return jsonify({'error': error}), 400
    try:
        player = create_player(**fields)
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(f"[register-fail] {exc}")
        return jsonify({'error': 'Registration failed. Please try again.'}), 503
    login_user(player, remember=True)
    current_app.logger.info(f"[register] player={player.id}")
    return jsonify(player.to_dict()), 201


@players.route('/current', methods=['GET'])
def get_current():
    # No active player is a normal state, not an error
    if not current_user.is_authenticated:
        return jsonify({'player': None})
    return jsonify({'player': current_user.to_dict()})


@players.route('/current', methods=['PUT'])
def set_current():
    try:
        player = _require_player(json_object().get('playerId'))
    except ArcadeError as exc:
        return _error(exc)
    login_user(player, remember=True)
    return jsonify({'player': player.to_dict()})


@players.route('/current', methods=['DELETE'])
def clear_current():
    logout_user()
    return jsonify({'player': None})


@players.route('/<string:player_id>', methods=['GET'])
def get_player_record(player_id):
    try:
        player = _require_player(player_id)
    except PlayerNotFound as exc:
        return _error(exc)
    return jsonify(player.to_dict())
