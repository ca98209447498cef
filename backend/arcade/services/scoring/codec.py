"""Convert raw play-through outcomes into leaderboard scores.

Quiz and Tower of Hanoi normalize to an integer in [0, 100]; Word Scramble
is additive at a fixed number of points per solved word. Rounding is
half-up throughout, done in integer arithmetic.
"""

from enum import Enum

QUIZ_TOTAL_QUESTIONS = 10
SCRAMBLE_POINTS_PER_WORD = 20
SCRAMBLE_WORDS_PER_SESSION = 5
HANOI_PENALTY_PER_MOVE = 10
HANOI_SCORE_FLOOR = 10
MAX_SCORE = 100


class HanoiPolicy(str, Enum):
    RATIO = 'ratio'
    PENALTY = 'penalty'


def _round_half_up(numerator: int, denominator: int) -> int:
    return (2 * numerator + denominator) // (2 * denominator)


def quiz_score(correct: int, total: int = QUIZ_TOTAL_QUESTIONS) -> int:
    if total <= 0:
        raise ValueError('total must be positive')
    if not 0 <= correct <= total:
        raise ValueError(f'correct must be within [0, {total}], got {correct}')
    return _round_half_up(correct * MAX_SCORE, total)


def hanoi_min_moves(disks: int) -> int:
    if disks < 1:
        raise ValueError('disks must be at least 1')
    return 2 ** disks - 1


def hanoi_ratio_score(moves: int, min_moves: int) -> int:
    """min_moves / moves as a percentage, capped at 100."""
    if moves <= 0 or min_moves <= 0:
        raise ValueError('moves and min_moves must be positive')
    return min(MAX_SCORE, _round_half_up(min_moves * MAX_SCORE, moves))


def hanoi_penalty_score(moves: int, min_moves: int) -> int:
    """100 minus 10 per move over the optimum, never below 10."""
    if moves < 0 or min_moves <= 0:
        raise ValueError('moves must be non-negative and min_moves positive')
    extra = max(0, moves - min_moves)
    return max(MAX_SCORE - HANOI_PENALTY_PER_MOVE * extra, HANOI_SCORE_FLOOR)


def hanoi_score(moves: int, disks: int, policy=HanoiPolicy.RATIO) -> int:
    policy = HanoiPolicy(policy)
    min_moves = hanoi_min_moves(disks)
    if policy is HanoiPolicy.PENALTY:
        return hanoi_penalty_score(moves, min_moves)
    return hanoi_ratio_score(moves, min_moves)


def scramble_score(correct: int, words: int = SCRAMBLE_WORDS_PER_SESSION) -> int:
    if not 0 <= correct <= words:
        raise ValueError(f'correct must be within [0, {words}], got {correct}')
    return SCRAMBLE_POINTS_PER_WORD * correct
