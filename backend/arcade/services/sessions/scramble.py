import random
from typing import Callable, List, Optional

from arcade.errors import ConfigurationError
from arcade.models import GameKey
from arcade.services.generation import generate_words
from arcade.services.scoring.codec import SCRAMBLE_POINTS_PER_WORD, SCRAMBLE_WORDS_PER_SESSION, scramble_score
from .base import GameSession, SessionState, require_difficulty


def scramble(word: str, rng=random) -> str:
    """Shuffle the letters of word into an ordering different from the original."""
    if len(word) < 2 or len(set(word)) < 2:
        raise ValueError(f'{word!r} cannot be scrambled')
    letters = list(word)
    rng.shuffle(letters)
    shuffled = ''.join(letters)
    if shuffled == word:
        # rotating by one only reproduces the word when every letter is the same
        shuffled = word[1:] + word[0]
    return shuffled


class ScrambleSession(GameSession):
    """Word scramble: one scrambled word at a time, +20 for each solved word."""

    game = GameKey.WORD_SCRAMBLE

    def __init__(
        self,
        word_count: int = SCRAMBLE_WORDS_PER_SESSION,
        word_timeout: float = 30,
        word_source: Optional[Callable] = None,
        rng=random,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.word_count = word_count
        self.word_timeout = word_timeout
        self._word_source = word_source or generate_words
        self._rng = rng
        self.difficulty = 'medium'
        self.words: List[str] = []
        self.scrambled: List[str] = []
        self.index = 0
        self.correct = 0

    @property
    def step(self) -> int:
        return self.index

    def configure(self, difficulty=None) -> None:
        with self._lock:
            self._require(SessionState.CONFIGURING, 'configure')
            self.difficulty = require_difficulty(difficulty)

    def start(self) -> None:
        with self._lock:
            self._require(SessionState.CONFIGURING, 'start')
            result = self._word_source(self.difficulty, self.word_count)
            self.words = [w.upper() for w in result.items][: self.word_count]
            if not self.words:
                raise ConfigurationError('No words available for this difficulty')
            self.scrambled = [scramble(w, self._rng) for w in self.words]
            self.notice = result.notice
            self.index = 0
            self.correct = 0
            self.state = SessionState.IN_PROGRESS
            self._arm(self.word_timeout, self.index)

    def guess(self, text) -> dict:
        with self._lock:
            self._require(SessionState.IN_PROGRESS, 'guess')
            if not isinstance(text, str):
                raise ConfigurationError('guess must be text')
            self._disarm()
            word = self.words[self.index]
            is_correct = text.strip().upper() == word
            if is_correct:
                self.correct += 1
            self.last_result = {'correct': is_correct, 'word': word, 'timedOut': False}
            self._advance()
            return self.last_result

    def on_timeout(self) -> None:
        self.last_result = {'correct': False, 'word': self.words[self.index], 'timedOut': True}
        self._advance()

    def _advance(self) -> None:
        self.index += 1
        if self.index >= len(self.words):
            self._complete(scramble_score(self.correct, len(self.words)))
        else:
            self._arm(self.word_timeout, self.index)

    def to_dict(self):
        payload = super().to_dict()
        in_progress = self.state == SessionState.IN_PROGRESS
        payload.update({
            'difficulty': self.difficulty,
            'wordIndex': self.index,
            'totalWords': len(self.words) or self.word_count,
            'correctCount': self.correct,
            'points': SCRAMBLE_POINTS_PER_WORD * self.correct,
            'scrambled': self.scrambled[self.index] if in_progress else None,
            'timeoutSec': self.word_timeout,
        })
        return payload
