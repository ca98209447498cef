"""Per-game session controllers.

Sessions are ephemeral and live only in this process; they are never
persisted. A completed session hands its score to the reconciliation
service exactly once.
"""

from .base import GameSession, SessionState  # noqa: F401
from .hanoi import HanoiSession  # noqa: F401
from .quiz import QuizSession  # noqa: F401
from .scramble import ScrambleSession, scramble  # noqa: F401
