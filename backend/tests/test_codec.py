import pytest

from arcade.services.scoring.codec import (
    HanoiPolicy,
    hanoi_min_moves,
    hanoi_penalty_score,
    hanoi_ratio_score,
    hanoi_score,
    quiz_score,
    scramble_score,
)


def test_quiz_score_is_percentage_of_ten():
    for correct in range(0, 11):
        score = quiz_score(correct, 10)
        assert score == correct * 10
        assert 0 <= score <= 100
    assert quiz_score(0) == 0
    assert quiz_score(10) == 100


def test_quiz_score_rounds_half_up():
    # 1/8 = 12.5%, 2/3 = 66.67%
    assert quiz_score(1, 8) == 13
    assert quiz_score(2, 3) == 67
    assert quiz_score(1, 3) == 33


def test_quiz_score_rejects_impossible_tallies():
    with pytest.raises(ValueError):
        quiz_score(11, 10)
    with pytest.raises(ValueError):
        quiz_score(-1, 10)
    with pytest.raises(ValueError):
        quiz_score(0, 0)


def test_hanoi_min_moves():
    assert [hanoi_min_moves(n) for n in (3, 4, 5, 6)] == [7, 15, 31, 63]


def test_hanoi_penalty_policy_bounds():
    min_moves = hanoi_min_moves(3)
    assert hanoi_penalty_score(min_moves, min_moves) == 100
    assert hanoi_penalty_score(min_moves + 1, min_moves) == 90
    assert hanoi_penalty_score(min_moves + 9, min_moves) == 10
    assert hanoi_penalty_score(min_moves + 40, min_moves) == 10
    for moves in range(min_moves, min_moves + 30):
        score = hanoi_penalty_score(moves, min_moves)
        assert score == max(100 - 10 * max(0, moves - min_moves), 10)
        assert 10 <= score <= 100


def test_hanoi_ratio_policy():
    assert hanoi_ratio_score(7, 7) == 100
    assert hanoi_ratio_score(14, 7) == 50
    assert hanoi_ratio_score(9, 7) == 78
    # unreachable in play, but capped all the same
    assert hanoi_ratio_score(5, 7) == 100


def test_hanoi_score_dispatches_on_policy():
    assert hanoi_score(9, 3, HanoiPolicy.PENALTY) == 80
    assert hanoi_score(9, 3, HanoiPolicy.RATIO) == 78
    assert hanoi_score(15, 4, 'ratio') == 100
    with pytest.raises(ValueError):
        hanoi_score(9, 3, 'fastest')


def test_scramble_score_is_twenty_per_word():
    assert [scramble_score(c) for c in range(6)] == [0, 20, 40, 60, 80, 100]
    with pytest.raises(ValueError):
        scramble_score(6)
    with pytest.raises(ValueError):
        scramble_score(-1)
