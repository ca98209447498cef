from typing import Callable, List, Optional

from arcade.errors import ConfigurationError
from arcade.models import GameKey
from arcade.services.generation import Question, generate_questions
from arcade.services.scoring.codec import QUIZ_TOTAL_QUESTIONS, quiz_score
from .base import GameSession, SessionState, require_difficulty

OPTION_COUNT = 4


class QuizSession(GameSession):
    """Technical quiz: fixed number of four-option questions, one countdown per question."""

    game = GameKey.TECHNICAL_QUIZ

    def __init__(
        self,
        question_count: int = QUIZ_TOTAL_QUESTIONS,
        question_timeout: float = 10,
        question_source: Optional[Callable] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.question_count = question_count
        self.question_timeout = question_timeout
        self._question_source = question_source or generate_questions
        self.topic: Optional[str] = None
        self.difficulty = 'medium'
        self.questions: List[Question] = []
        self.index = 0
        self.correct = 0

    @property
    def step(self) -> int:
        return self.index

    def configure(self, topic, difficulty=None) -> None:
        with self._lock:
            self._require(SessionState.CONFIGURING, 'configure')
            if not isinstance(topic, str) or not topic.strip():
                raise ConfigurationError('Please select a topic')
            self.difficulty = require_difficulty(difficulty)
            self.topic = topic.strip()

    def start(self) -> None:
        with self._lock:
            self._require(SessionState.CONFIGURING, 'start')
            if not self.topic:
                raise ConfigurationError('Please select a topic')
            result = self._question_source(self.topic, self.difficulty, self.question_count)
            self.questions = list(result.items)[: self.question_count]
            self.notice = result.notice
            self.index = 0
            self.correct = 0
            self.state = SessionState.IN_PROGRESS
            self._arm(self.question_timeout, self.index)

    @property
    def current_question(self) -> Optional[Question]:
        if self.state != SessionState.IN_PROGRESS:
            return None
        return self.questions[self.index]

    def answer(self, option) -> dict:
        with self._lock:
            self._require(SessionState.IN_PROGRESS, 'answer')
            if isinstance(option, bool) or not isinstance(option, int) or not 0 <= option < OPTION_COUNT:
                raise ConfigurationError(f'option must be an integer between 0 and {OPTION_COUNT - 1}')
            self._disarm()
            question = self.questions[self.index]
            is_correct = option == question.correct_index
            if is_correct:
                self.correct += 1
            self._record(question, option, is_correct, timed_out=False)
            self._advance()
            return self.last_result

    def on_timeout(self) -> None:
        question = self.questions[self.index]
        self._record(question, None, False, timed_out=True)
        self._advance()

    def _record(self, question: Question, option, is_correct: bool, timed_out: bool) -> None:
        self.last_result = {
            'questionId': question.id,
            'selected': option,
            'correct': is_correct,
            'correctIndex': question.correct_index,
            'timedOut': timed_out,
        }

    def _advance(self) -> None:
        self.index += 1
        if self.index >= len(self.questions):
            self._complete(quiz_score(self.correct, len(self.questions)))
        else:
            self._arm(self.question_timeout, self.index)

    def to_dict(self):
        payload = super().to_dict()
        question = self.current_question
        payload.update({
            'topic': self.topic,
            'difficulty': self.difficulty,
            'questionIndex': self.index,
            'totalQuestions': len(self.questions) or self.question_count,
            'correctCount': self.correct,
            'question': question.to_public_dict() if question else None,
            'timeoutSec': self.question_timeout,
        })
        return payload
