from flask import Blueprint, jsonify

from arcade.models import GameKey

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({
        'message': 'Welcome to the arcade portal!',
        'games': [game.value for game in GameKey],
    })
