import json
import re
from dataclasses import dataclass, field
from typing import List, Optional

import requests
from flask import current_app

from arcade.errors import GenerationError
from .fallback import fallback_questions, fallback_words

OPTIONS_PER_QUESTION = 4

WORD_LENGTHS = {
    'easy': (4, 5),
    'medium': (5, 6),
    'hard': (7, 8),
}

QUESTION_PROMPT = """Generate {count} multiple choice questions about {topic} at {difficulty} difficulty level.
Format the response as a JSON array of objects with the following structure:
[
  {{
    "id": 1,
    "question": "Question text here",
    "options": ["Option 1", "Option 2", "Option 3", "Option 4"],
    "correctAnswer": 0
  }}
]
The correctAnswer should be the index (0-3) of the correct option.
Return ONLY the JSON array, no additional text."""

WORD_PROMPT = """Generate {count} {difficulty} difficulty level words for a word scramble game.
Every word must be between {low} and {high} letters long and contain only letters.
Return in format: {{"words": ["word1", "word2", ...]}}"""

_JSON_ARRAY = re.compile(r'\[\s*\{[\s\S]*\}\s*\]')
_JSON_OBJECT = re.compile(r'\{[\s\S]*\}')


@dataclass
class Question:
    id: int
    prompt: str
    options: List[str]
    correct_index: int

    def to_public_dict(self):
        return {'id': self.id, 'prompt': self.prompt, 'options': list(self.options)}


@dataclass
class GenerationResult:
    items: list = field(default_factory=list)
    used_fallback: bool = False
    notice: Optional[str] = None


def _request_completion(prompt: str) -> str:
    cfg = current_app.config
    api_key = cfg.get('GENERATION_API_KEY')
    if not api_key:
        raise GenerationError('generation API key is not configured')
    try:
        response = requests.post(
            cfg.get('GENERATION_API_URL'),
            params={'key': api_key},
            json={
                'contents': [{'parts': [{'text': prompt}]}],
                'generationConfig': {'temperature': 0.7, 'maxOutputTokens': 2048},
            },
            headers={'Content-Type': 'application/json'},
            timeout=cfg.get('GENERATION_TIMEOUT_SEC', 10),
        )
    except requests.RequestException as exc:
        raise GenerationError(f'generation API unreachable: {exc}') from exc
    if not response.ok:
        raise GenerationError(f'generation API error: {response.status_code}')
    try:
        data = response.json()
        return data['candidates'][0]['content']['parts'][0]['text']
    except (ValueError, KeyError, IndexError, TypeError) as exc:
        raise GenerationError('malformed generation API response') from exc


def _extract_json(text: str, pattern):
    match = pattern.search(text or '')
    if not match:
        raise GenerationError('no JSON found in generated text')
    try:
        return json.loads(match.group(0))
    except ValueError as exc:
        raise GenerationError('generated JSON could not be parsed') from exc


def _validate_question(raw, number: int) -> Question:
    if not isinstance(raw, dict):
        raise GenerationError(f'question {number} is not an object')
    prompt = raw.get('question')
    options = raw.get('options')
    correct = raw.get('correctAnswer')
    if not isinstance(prompt, str) or not prompt.strip():
        raise GenerationError(f'question {number} has no prompt')
    if (
        not isinstance(options, list)
        or len(options) != OPTIONS_PER_QUESTION
        or not all(isinstance(o, str) and o.strip() for o in options)
    ):
        raise GenerationError(f'question {number} must have exactly {OPTIONS_PER_QUESTION} options')
    if isinstance(correct, bool) or not isinstance(correct, int) or not 0 <= correct < OPTIONS_PER_QUESTION:
        raise GenerationError(f'question {number} has an invalid correctAnswer')
    return Question(id=number, prompt=prompt.strip(), options=[o.strip() for o in options], correct_index=correct)


def parse_questions(text: str, count: int) -> List[Question]:
    raw = _extract_json(text, _JSON_ARRAY)
    if not isinstance(raw, list) or len(raw) < count:
        raise GenerationError(f'expected {count} questions')
    return [_validate_question(q, i) for i, q in enumerate(raw[:count], start=1)]


def is_scramblable_word(word, difficulty: str) -> bool:
    low, high = WORD_LENGTHS[difficulty]
    return (
        isinstance(word, str)
        and word.isalpha()
        and low <= len(word) <= high
        and len(set(word.upper())) >= 2
    )


def parse_words(text: str, difficulty: str, count: int) -> List[str]:
    raw = _extract_json(text, _JSON_OBJECT)
    words = raw.get('words') if isinstance(raw, dict) else None
    if not isinstance(words, list) or len(words) != count:
        raise GenerationError(f'expected exactly {count} words')
    words = [w.strip() if isinstance(w, str) else w for w in words]
    if not all(is_scramblable_word(w, difficulty) for w in words):
        raise GenerationError(f'words outside the {difficulty} length band')
    return [w.upper() for w in words]


def generate_questions(topic: str, difficulty: str, count: int) -> GenerationResult:
    prompt = QUESTION_PROMPT.format(count=count, topic=topic, difficulty=difficulty)
    try:
        questions = parse_questions(_request_completion(prompt), count)
        return GenerationResult(items=questions)
    except GenerationError as exc:
        current_app.logger.warning(f"[generation-fallback] kind=questions topic={topic!r}: {exc.message}")
        questions = [_validate_question(q, i) for i, q in enumerate(fallback_questions(count, topic), start=1)]
        return GenerationResult(
            items=questions,
            used_fallback=True,
            notice=f'Using fallback questions because {exc.message}',
        )


def generate_words(difficulty: str, count: int) -> GenerationResult:
    low, high = WORD_LENGTHS[difficulty]
    prompt = WORD_PROMPT.format(count=count, difficulty=difficulty, low=low, high=high)
    try:
        return GenerationResult(items=parse_words(_request_completion(prompt), difficulty, count))
    except GenerationError as exc:
        current_app.logger.warning(f"[generation-fallback] kind=words difficulty={difficulty}: {exc.message}")
        return GenerationResult(
            items=fallback_words(difficulty, count),
            used_fallback=True,
            notice=f'Using fallback words because {exc.message}',
        )
