from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import SQLAlchemyError

from arcade.errors import LeaderboardUnavailable
from arcade.models import GameKey, Player
from arcade.services.leaderboard import ranking
from arcade.services.leaderboard.ranking import fetch_all_leaderboards, fetch_leaderboard, rank_players
from arcade.services.players import store
from arcade.services.scoring.reconcile import reconcile

T0 = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def _add(name, quiz=0, created=T0):
    player = store.create_player(
        name=name, email=f'{name.lower()}@example.com', mobile_number='5550000000', age=30, created_at=created
    )
    if quiz:
        store.write_score(player, GameKey.TECHNICAL_QUIZ, quiz)
    return player


def test_ties_broken_by_earlier_registration(flask_app):
    _add('A', quiz=50, created=T0 + timedelta(minutes=1))
    _add('B', quiz=50, created=T0)
    _add('C', quiz=70, created=T0 + timedelta(minutes=2))

    board = fetch_leaderboard(GameKey.TECHNICAL_QUIZ)
    assert [(e.name, e.rank, e.score) for e in board.entries] == [
        ('C', 1, 70),
        ('B', 2, 50),
        ('A', 3, 50),
    ]


def test_rank_players_orders_before_numbering():
    def make(pid, score, minutes):
        return Player(
            id=pid, name=pid, email='x@example.com', mobile_number='5550000000', age=20,
            created_at=T0 + timedelta(minutes=minutes), technical_quiz_score=score,
            tower_of_hanoi_score=0, word_scramble_score=0,
        )

    # supplied in an order where a single pass would number the tie wrongly
    players = [make('late', 50, 5), make('top', 90, 9), make('early', 50, 1), make('low', 10, 0)]
    entries = rank_players(players, GameKey.TECHNICAL_QUIZ, limit=10)
    assert [e.player_id for e in entries] == ['top', 'early', 'late', 'low']
    assert [e.rank for e in entries] == [1, 2, 3, 4]


def test_board_is_limited_with_dense_ranks(flask_app):
    for i in range(12):
        _add(f'P{i:02d}', quiz=10 + i, created=T0 + timedelta(minutes=i))
    board = fetch_leaderboard('technicalQuiz')
    assert len(board.entries) == 10
    assert [e.rank for e in board.entries] == list(range(1, 11))
    assert board.entries[0].name == 'P11'
    scores = [e.score for e in board.entries]
    assert scores == sorted(scores, reverse=True)


def test_cutoff_keeps_earliest_players_on_a_tie(flask_app):
    for i in range(11):
        _add(f'T{i:02d}', quiz=40, created=T0 + timedelta(minutes=i))
    board = fetch_leaderboard(GameKey.TECHNICAL_QUIZ)
    assert [e.name for e in board.entries] == [f'T{i:02d}' for i in range(10)]


def test_podium_and_rest_split_same_sequence(flask_app):
    for i in range(5):
        _add(f'S{i}', quiz=100 - i * 10, created=T0 + timedelta(minutes=i))
    board = fetch_leaderboard(GameKey.TECHNICAL_QUIZ)
    assert [e.rank for e in board.podium] == [1, 2, 3]
    assert [e.rank for e in board.rest] == [4, 5]
    assert board.podium + board.rest == board.entries


def test_short_board_has_partial_podium(flask_app):
    _add('Solo', quiz=30)
    board = fetch_leaderboard(GameKey.TECHNICAL_QUIZ)
    assert [e.name for e in board.podium] == ['Solo']
    assert board.rest == []


def test_zero_scores_are_projected(flask_app):
    _add('Zero')
    board = fetch_leaderboard(GameKey.WORD_SCRAMBLE)
    assert [(e.name, e.score, e.rank) for e in board.entries] == [('Zero', 0, 1)]


def test_board_reflects_latest_write(flask_app):
    a = _add('A', quiz=90, created=T0)
    b = _add('B', quiz=50, created=T0 + timedelta(minutes=1))
    assert fetch_leaderboard(GameKey.TECHNICAL_QUIZ).entries[0].player_id == a.id
    reconcile(b.id, GameKey.TECHNICAL_QUIZ, 95)
    reconcile(a.id, GameKey.TECHNICAL_QUIZ, 20)
    entries = fetch_leaderboard(GameKey.TECHNICAL_QUIZ).entries
    assert [(e.player_id, e.score, e.rank) for e in entries] == [(b.id, 95, 1), (a.id, 20, 2)]


def test_unknown_game_rejected(flask_app):
    with pytest.raises(ValueError):
        fetch_leaderboard('ticTacToe')


def test_any_failing_board_fails_the_whole_fetch(flask_app, monkeypatch):
    _add('A', quiz=10)
    real = store.players_by_score

    def flaky(game, limit):
        if game is GameKey.TOWER_OF_HANOI:
            raise SQLAlchemyError('connection refused')
        return real(game, limit)

    monkeypatch.setattr(ranking.store, 'players_by_score', flaky)
    with pytest.raises(LeaderboardUnavailable):
        fetch_all_leaderboards()


def test_all_boards_api(client):
    _add('A', quiz=60)
    res = client.get('/api/leaderboard')
    assert res.status_code == 200
    data = res.get_json()
    assert set(data) == {'technicalQuiz', 'towerOfHanoi', 'wordScramble'}
    quiz = data['technicalQuiz']
    assert quiz['entries'][0]['name'] == 'A'
    assert quiz['entries'][0]['rank'] == 1
    assert quiz['podium'] == quiz['entries'][:3]


def test_single_board_api(client):
    _add('A', quiz=60)
    res = client.get('/api/leaderboard/technicalQuiz')
    assert res.status_code == 200
    assert res.get_json()['game'] == 'technicalQuiz'
    assert client.get('/api/leaderboard/ticTacToe').status_code == 404


def test_leaderboard_api_reports_retryable_error(client, monkeypatch):
    def down(game, limit):
        raise SQLAlchemyError('connection refused')

    monkeypatch.setattr(ranking.store, 'players_by_score', down)
    res = client.get('/api/leaderboard')
    assert res.status_code == 503
    body = res.get_json()
    assert body['retry'] is True
    assert 'error' in body
