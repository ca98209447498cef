import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///arcade.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ORIGINS = [o for o in os.environ.get('CORS_ORIGINS', 'http://localhost:5173,http://127.0.0.1:5173').split(',') if o]
    # Session sizes and countdowns (seconds)
    QUIZ_QUESTION_COUNT = int(os.environ.get('QUIZ_QUESTION_COUNT', '10'))
    QUIZ_QUESTION_TIMEOUT_SEC = int(os.environ.get('QUIZ_QUESTION_TIMEOUT_SEC', '10'))
    SCRAMBLE_WORD_COUNT = int(os.environ.get('SCRAMBLE_WORD_COUNT', '5'))
    SCRAMBLE_WORD_TIMEOUT_SEC = int(os.environ.get('SCRAMBLE_WORD_TIMEOUT_SEC', '30'))
    HANOI_DISK_CHOICES = (3, 4, 5, 6)
    # 'ratio' while disk count is selectable; 'penalty' for the fixed 3-disk variant
    HANOI_SCORING_POLICY = os.environ.get('HANOI_SCORING_POLICY', 'ratio')
    LEADERBOARD_LIMIT = int(os.environ.get('LEADERBOARD_LIMIT', '10'))
    # Finished sessions are dropped after SESSION_RETENTION_SEC; any session untouched
    # for SESSION_IDLE_TIMEOUT_SEC is abandoned. Both are checked when a session opens.
    SESSION_RETENTION_SEC = int(os.environ.get('SESSION_RETENTION_SEC', '600'))
    SESSION_IDLE_TIMEOUT_SEC = int(os.environ.get('SESSION_IDLE_TIMEOUT_SEC', '1800'))
    # Question/word generation. Without a key every session uses the built-in sets.
    GENERATION_API_URL = os.environ.get(
        'GENERATION_API_URL',
        'https://generativelanguage.googleapis.com/v1beta/models/gemini-1.5-flash:generateContent',
    )
    GENERATION_API_KEY = os.environ.get('GENERATION_API_KEY')
    GENERATION_TIMEOUT_SEC = int(os.environ.get('GENERATION_TIMEOUT_SEC', '10'))
    # Optional: heartbeat interval for countdown worker logs (sec). 0 disables.
    TIMER_HEARTBEAT_SEC = int(os.environ.get('TIMER_HEARTBEAT_SEC', '0'))
