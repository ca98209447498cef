from flask import Blueprint, jsonify

from arcade.errors import LeaderboardUnavailable
from arcade.services.leaderboard.ranking import fetch_all_leaderboards, fetch_leaderboard


leaderboard = Blueprint('leaderboard', __name__)


@leaderboard.route('', methods=['GET'])
def get_leaderboards():
    try:
        boards = fetch_all_leaderboards()
    except LeaderboardUnavailable as exc:
        return jsonify(exc.to_dict()), exc.status_code
    return jsonify({game: board.to_dict() for game, board in boards.items()})


@leaderboard.route('/<string:game>', methods=['GET'])
def get_game_leaderboard(game):
    try:
        board = fetch_leaderboard(game)
    except ValueError as exc:
        return jsonify({'error': str(exc)}), 404
    except LeaderboardUnavailable as exc:
        return jsonify(exc.to_dict()), exc.status_code
    return jsonify(board.to_dict())
