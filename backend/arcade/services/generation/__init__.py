"""Question and word generation for quiz and scramble sessions.

Content comes from an external text-generation API; any failure there is
absorbed by falling back to the built-in sets, so a session can always
start.
"""

from .client import GenerationResult, Question, generate_questions, generate_words  # noqa: F401
